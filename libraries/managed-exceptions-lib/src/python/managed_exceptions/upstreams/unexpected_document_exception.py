from http import HTTPStatus
from managed_exceptions.upstreams.upstream_exception import UpstreamException

class UnexpectedDocumentException(UpstreamException):
    def __init__(self, url: str, invalid_key: str):
        super().__init__(
            http_status=HTTPStatus.BAD_GATEWAY,
            message=f"Upstream {url} answered with a document lacking a valid {invalid_key!r}",
            diagnostic_code="20005",
            diagnostic_details={"url": url, "invalid_key": invalid_key}
        )
