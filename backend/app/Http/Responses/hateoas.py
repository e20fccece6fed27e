from pydantic import BaseModel, ConfigDict


class Link(BaseModel):
    href: str
    method: str
    rel: str


class HateoasModel(BaseModel):
    # Subclasses declare `links: List[Link] = Field(default_factory=list, alias="_links")`
    # as their last field so the links serialize after the payload.

    model_config = ConfigDict(populate_by_name=True)

    def add_link(self, rel: str, href: str, method: str = "GET"):
        self.links.append(Link(rel=rel, href=href, method=method))
