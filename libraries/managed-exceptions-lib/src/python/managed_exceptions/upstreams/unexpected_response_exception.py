from http import HTTPStatus
from managed_exceptions.upstreams.upstream_exception import UpstreamException

class UnexpectedResponseException(UpstreamException):
    def __init__(self, url: str):
        super().__init__(
            http_status=HTTPStatus.BAD_GATEWAY,
            message=f"Upstream {url} answered with an undecodable body",
            diagnostic_code="20004",
            diagnostic_details={"url": url}
        )
