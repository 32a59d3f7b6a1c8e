from injector import inject, singleton
from upstream_discovery import UpstreamAggregator
from policy_aggregator.clients.policy_engine import PolicyEngineTablesClient
from policy_aggregator.models import TableDocument

@singleton
class GetTableRowsService:

    @inject
    def __init__(self,
                 upstream_aggregator: UpstreamAggregator,
                 policy_engine_tables_client: PolicyEngineTablesClient):
        self.__upstream_aggregator = upstream_aggregator
        self.__policy_engine_tables_client = policy_engine_tables_client

    def get_table_rows(self, table_name: str) -> list[TableDocument]:
        api = PolicyEngineTablesClient.table_rows_api(table_name)
        results = self.__upstream_aggregator.aggregate(
            lambda address: self.__policy_engine_tables_client.get_table_rows(address, table_name)
        )
        return [
            TableDocument(
                url=self.__policy_engine_tables_client.url_for(result.address, api),
                data=result.document
            ) for result in results
        ]
