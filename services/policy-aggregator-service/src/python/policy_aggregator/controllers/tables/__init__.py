from .tables_controller import router

__all__ = [
    "router"
]
