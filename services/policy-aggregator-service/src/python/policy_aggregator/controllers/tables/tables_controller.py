from fastapi import APIRouter, Request, Response
from fastapi_injector import Injected
from policy_aggregator.controllers.tables.handlers import GetTableRowsHandler, ListTablesHandler

router = APIRouter(prefix="/tables")

@router.get("")
async def list_tables(request: Request, list_tables_handler: ListTablesHandler = Injected(ListTablesHandler)) -> Response:
    return await list_tables_handler.invoke(request)

# No table name in the path; the handler answers 400
@router.get("/")
async def get_table_rows_without_name(request: Request, get_table_rows_handler: GetTableRowsHandler = Injected(GetTableRowsHandler)) -> Response:
    return await get_table_rows_handler.invoke(request)

@router.get("/{table_name}")
async def get_table_rows(request: Request, get_table_rows_handler: GetTableRowsHandler = Injected(GetTableRowsHandler)) -> Response:
    return await get_table_rows_handler.invoke(request)
