from .get_table_rows_service import GetTableRowsService
from .list_tables_service import ListTablesService

__all__ = [
    "GetTableRowsService",
    "ListTablesService",
]
