from managed_exceptions.error_details import ErrorDetails
from managed_exceptions.managed_exception import ManagedException
from managed_exceptions.argumemts.invalid_argument_exception import InvalidArgumentException
from managed_exceptions.internal.internal_error_exception import InternalErrorException
from managed_exceptions.upstreams.upstream_exception import UpstreamException
from managed_exceptions.upstreams.upstream_unreachable_exception import UpstreamUnreachableException
from managed_exceptions.upstreams.unexpected_status_exception import UnexpectedStatusException
from managed_exceptions.upstreams.unexpected_content_type_exception import UnexpectedContentTypeException
from managed_exceptions.upstreams.unexpected_response_exception import UnexpectedResponseException
from managed_exceptions.upstreams.unexpected_document_exception import UnexpectedDocumentException

__all__ = [
    "ErrorDetails",
    "ManagedException",
    "InvalidArgumentException",
    "InternalErrorException",
    "UpstreamException",
    "UpstreamUnreachableException",
    "UnexpectedStatusException",
    "UnexpectedContentTypeException",
    "UnexpectedResponseException",
    "UnexpectedDocumentException"
]
