from http import HTTPStatus
from managed_exceptions.upstreams.upstream_exception import UpstreamException

class UnexpectedContentTypeException(UpstreamException):
    def __init__(self, url: str, content_type: str):
        super().__init__(
            http_status=HTTPStatus.BAD_GATEWAY,
            message=f"Upstream {url} answered with unexpected content type {content_type!r}",
            diagnostic_code="20003",
            diagnostic_details={"url": url, "content_type": content_type}
        )
