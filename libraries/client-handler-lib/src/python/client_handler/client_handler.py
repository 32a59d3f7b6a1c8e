import httpx
import logging
from abc import ABC
from time import time
from typing import Any, Optional
from managed_exceptions import (
    ManagedException,
    UpstreamUnreachableException,
    UnexpectedStatusException,
    UnexpectedContentTypeException,
    UnexpectedResponseException
)
from prometheus_client import Counter, Histogram

API_EXE_COUNTER = Counter("pag_client_exe_total", "Total number of upstream requests executed", ["handler"])
API_EXE_DURATION_HISTOGRAM = Histogram("pag_client_exe_duration_seconds", "Duration of upstream requests in seconds", ["handler"])
API_EXE_ERROR_COUNTER = Counter("pag_client_exe_error_total", "Total number of upstream requests that resulted in error", ["handler", "diagnostic_code"])

JSON_CONTENT_TYPE = "application/json"

class ClientHandler(ABC):
    """
    Base class for clients that fetch a JSON document from an upstream
    server addressed as ``host:port``.

    Every call performs exactly one HTTP round trip. Anything other than a
    200 answer carrying a JSON object raises a subclass of
    ``UpstreamException``.
    """

    def __init__(self, scheme: str = "http", default_timeout: float = 10.0, transport: Optional[httpx.BaseTransport] = None):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__http_client = httpx.Client(timeout=default_timeout, transport=transport, trust_env=False)
        self.__scheme = scheme

    def url_for(self, address: str, api: str) -> str:
        return f"{self.__scheme}://{address}/{api.lstrip('/')}"

    def invoke(self, address: str, api: str, timeout: Optional[float] = None, headers: Optional[dict] = None) -> dict[str, Any]:
        start_time: float = time()
        API_EXE_COUNTER.labels(handler=self.__class__.__name__).inc()
        url: str = self.url_for(address, api)
        try:
            self.__logger.debug(f"[EXTERNAL] Request: <GET {url}>")

            # Execute HTTP request
            try:
                response = self.__http_client.get(
                    url,
                    timeout=timeout or httpx.USE_CLIENT_DEFAULT,
                    headers=headers
                )
            except httpx.HTTPError as e:
                raise UpstreamUnreachableException(url=url, reason=str(e)) from e

            # Validate response envelope
            if response.status_code != 200:
                raise UnexpectedStatusException(url=url, status_code=response.status_code)
            content_type: str = response.headers.get("content-type", "")
            if content_type.split(";")[0].strip().lower() != JSON_CONTENT_TYPE:
                raise UnexpectedContentTypeException(url=url, content_type=content_type)

            # Parse response
            try:
                response_data = response.json()
            except ValueError as e:
                raise UnexpectedResponseException(url=url) from e
            if not isinstance(response_data, dict):
                raise UnexpectedResponseException(url=url)

            self.__logger.debug(f"[EXTERNAL] Response: <{response.status_code} | {url}>")
            return response_data
        except ManagedException as e:
            self.__logger.info(f"[EXTERNAL] Failed Response: <{e.summary()}>")
            API_EXE_ERROR_COUNTER.labels(handler=self.__class__.__name__, diagnostic_code=e.diagnostic_code).inc()
            raise
        finally:
            duration: float = time() - start_time
            API_EXE_DURATION_HISTOGRAM.labels(handler=self.__class__.__name__).observe(duration)

    def close(self) -> None:
        self.__http_client.close()

