from .client_handler import ClientHandler, JSON_CONTENT_TYPE

__all__ = [
    "ClientHandler",
    "JSON_CONTENT_TYPE"
]
