from injector import inject, singleton
from managed_exceptions import InvalidArgumentException
from policy_aggregator.controllers.tables.schemas import AggregatedTable, GetTableRowsRequest
from policy_aggregator.services.tables import GetTableRowsService
from request_handler import RequestHandler

@singleton
class GetTableRowsHandler(RequestHandler[GetTableRowsRequest, list[AggregatedTable]]):

    @inject
    def __init__(self,
                 get_table_rows_service: GetTableRowsService):
        super().__init__()
        self.__get_table_rows_service = get_table_rows_service

    def _on_validate(self, request: GetTableRowsRequest):
        if not request.table_name.strip():
            raise InvalidArgumentException(
                message="Table name must not be empty",
                diagnostic_details={"table_name": request.table_name}
            )

    def _on_invoke(self, request: GetTableRowsRequest) -> list[AggregatedTable]:
        # Query every upstream
        results = self.__get_table_rows_service.get_table_rows(request.table_name)

        # Return response
        return [
            AggregatedTable(
                url=result.url,
                data=result.data
            ) for result in results
        ]
