from .get_table_rows_handler import GetTableRowsHandler
from .list_tables_handler import ListTablesHandler

__all__ = [
    "GetTableRowsHandler",
    "ListTablesHandler"
]
