from http import HTTPStatus
from pydantic import BaseModel, Field

# Two-digit family followed by a three-digit reason, e.g. "20002"
DIAGNOSTIC_CODE_PATTERN = r"^\d{5}$"

class ErrorDetails(BaseModel):
    status_code: HTTPStatus
    diagnostic_code: str = Field(pattern=DIAGNOSTIC_CODE_PATTERN)
    diagnostic_details: dict[str, str] = Field(default_factory=dict)
    message: str

    def summary(self) -> str:
        return f"{self.status_code.value} | {self.diagnostic_code} | {self.message}"
