from typing import Any
from urllib.parse import quote
from client_handler import ClientHandler
from injector import inject, singleton
from managed_exceptions import UnexpectedDocumentException
from policy_aggregator.configs import AggregatorConfig

TABLES_API = "tables"

@singleton
class PolicyEngineTablesClient(ClientHandler):

    @inject
    def __init__(self, config: AggregatorConfig) -> None:
        super().__init__(default_timeout=config.upstreams_timeout)

    def get_tables(self, address: str) -> dict[str, Any]:
        result = self.invoke(address=address, api=TABLES_API)
        table_names = result.get("table_names")
        if not isinstance(table_names, list) or not all(isinstance(name, str) for name in table_names):
            raise UnexpectedDocumentException(url=self.url_for(address, TABLES_API), invalid_key="table_names")
        return result

    def get_table_rows(self, address: str, table_name: str) -> dict[str, Any]:
        return self.invoke(address=address, api=self.table_rows_api(table_name))

    @staticmethod
    def table_rows_api(table_name: str) -> str:
        return f"{TABLES_API}/{quote(table_name, safe='')}"
