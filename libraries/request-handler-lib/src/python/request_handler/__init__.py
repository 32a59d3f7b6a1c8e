from .cors_guard_middleware import CorsGuardMiddleware
from .error_response import ErrorResponse
from .request_handler import RequestHandler
from .request_thread_pool import RequestThreadPool

__all__ = [
    "CorsGuardMiddleware",
    "ErrorResponse",
    "RequestHandler",
    "RequestThreadPool"
]
