from http import HTTPStatus
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

class CorsGuardMiddleware(BaseHTTPMiddleware):
    """
    Filters request methods and decorates every response with permissive
    cross-origin headers.

    ``OPTIONS`` is always answered with 200 (preflight); methods outside
    ``allow_methods`` are answered with 405 and an ``Allow`` header.

    See http://en.wikipedia.org/wiki/Cross-origin_resource_sharing for details.
    """

    def __init__(self, app: ASGIApp, allow_methods: list[str]):
        super().__init__(app)
        self.__allow_methods = [method.upper() for method in allow_methods]
        self.__allow_header = ", ".join([*self.__allow_methods, "OPTIONS"])

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "OPTIONS":
            response: Response = Response(status_code=HTTPStatus.OK)
        elif request.method in self.__allow_methods:
            response = await call_next(request)
        else:
            response = PlainTextResponse(
                HTTPStatus.METHOD_NOT_ALLOWED.phrase,
                status_code=HTTPStatus.METHOD_NOT_ALLOWED,
                headers={"Allow": self.__allow_header}
            )
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = self.__allow_header
        return response
