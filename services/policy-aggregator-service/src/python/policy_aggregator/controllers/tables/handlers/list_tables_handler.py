from injector import inject, singleton
from policy_aggregator.controllers.tables.schemas import AggregatedTable, ListTablesRequest
from policy_aggregator.services.tables import ListTablesService
from request_handler import RequestHandler

@singleton
class ListTablesHandler(RequestHandler[ListTablesRequest, list[AggregatedTable]]):

    @inject
    def __init__(self,
                 list_tables_service: ListTablesService):
        super().__init__()
        self.__list_tables_service = list_tables_service

    def _on_validate(self, request: ListTablesRequest):
        # Validate request
        pass

    def _on_invoke(self, request: ListTablesRequest) -> list[AggregatedTable]:
        # Query every upstream
        results = self.__list_tables_service.list_tables()

        # Return response
        return [
            AggregatedTable(
                url=result.url,
                data=result.data
            ) for result in results
        ]
