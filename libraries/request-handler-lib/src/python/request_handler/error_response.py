from pydantic import BaseModel, Field

class ErrorResponse(BaseModel):
    diagnostic_code: str
    diagnostic_details: dict[str, str] = Field(default_factory=dict)
    message: str
