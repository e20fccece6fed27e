from pydantic import BaseModel


class ErrorDetail(BaseModel):
    code: str
    message: str


class APIErrorResponse(BaseModel):
    error: ErrorDetail


class RelayErrorResponse(BaseModel):
    error: str


class EmailRelayErrorResponse(BaseModel):
    success: bool = False
    error: str


class FormErrorResponse(BaseModel):
    errors: dict
