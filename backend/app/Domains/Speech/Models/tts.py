from pydantic import BaseModel, ConfigDict, Field

DEFAULT_VOICE = "aisxue"


class TTSRequest(BaseModel):
    """A single synthesis request. `vcn` is the vendor's name for the voice."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    text: str
    voice: str = Field(default=DEFAULT_VOICE, alias="vcn")
    speed: int = Field(default=50, ge=0, le=100)
    volume: int = Field(default=80, ge=0, le=100)
    pitch: int = Field(default=50, ge=0, le=100)


class TTSResponse(BaseModel):
    audio: str  # base64 encoded WAV
