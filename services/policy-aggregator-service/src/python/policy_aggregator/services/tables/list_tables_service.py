from injector import inject, singleton
from upstream_discovery import UpstreamAggregator
from policy_aggregator.clients.policy_engine import PolicyEngineTablesClient, TABLES_API
from policy_aggregator.models import TableDocument

@singleton
class ListTablesService:

    @inject
    def __init__(self,
                 upstream_aggregator: UpstreamAggregator,
                 policy_engine_tables_client: PolicyEngineTablesClient):
        self.__upstream_aggregator = upstream_aggregator
        self.__policy_engine_tables_client = policy_engine_tables_client

    def list_tables(self) -> list[TableDocument]:
        results = self.__upstream_aggregator.aggregate(self.__policy_engine_tables_client.get_tables)
        return [
            TableDocument(
                url=self.__policy_engine_tables_client.url_for(result.address, TABLES_API),
                data=result.document
            ) for result in results
        ]
