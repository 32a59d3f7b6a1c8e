from .table_document import TableDocument

__all__ = [
    "TableDocument"
]
