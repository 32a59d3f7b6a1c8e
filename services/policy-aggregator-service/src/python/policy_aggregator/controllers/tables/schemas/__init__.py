from .aggregated_table import AggregatedTable
from .get_table_rows_request import GetTableRowsRequest
from .list_tables_request import ListTablesRequest

__all__ = [
    "AggregatedTable",
    "GetTableRowsRequest",
    "ListTablesRequest"
]
