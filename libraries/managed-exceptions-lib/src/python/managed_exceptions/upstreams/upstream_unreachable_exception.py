from http import HTTPStatus
from managed_exceptions.upstreams.upstream_exception import UpstreamException

class UpstreamUnreachableException(UpstreamException):
    def __init__(self, url: str, reason: str):
        super().__init__(
            http_status=HTTPStatus.BAD_GATEWAY,
            message=f"Upstream {url} is unreachable: {reason}",
            diagnostic_code="20001",
            diagnostic_details={"url": url}
        )
