from http import HTTPStatus
from typing import Any, Iterable, Mapping, Optional
from managed_exceptions.error_details import ErrorDetails
from managed_exceptions.managed_exception import ManagedException

class InvalidArgumentException(ManagedException):
    def __init__(self, message: str, diagnostic_details: Optional[dict[str, str]] = None):
        super().__init__(ErrorDetails(
            status_code=HTTPStatus.BAD_REQUEST,
            diagnostic_code="00400",
            diagnostic_details=diagnostic_details or {},
            message=message
        ))

    @classmethod
    def from_validation_errors(cls, errors: Iterable[Mapping[str, Any]], message: str = "Invalid request parameters") -> "InvalidArgumentException":
        # One detail per offending field, keyed by its dotted location
        return cls(
            message=message,
            diagnostic_details={".".join(str(loc) for loc in error["loc"]): str(error["msg"]) for error in errors}
        )
