from http import HTTPStatus
from managed_exceptions.upstreams.upstream_exception import UpstreamException

class UnexpectedStatusException(UpstreamException):
    def __init__(self, url: str, status_code: int):
        super().__init__(
            http_status=HTTPStatus.BAD_GATEWAY,
            message=f"Upstream {url} answered with unexpected status code {status_code}",
            diagnostic_code="20002",
            diagnostic_details={"url": url, "status_code": str(status_code)}
        )
