from .policy_engine_tables_client import PolicyEngineTablesClient, TABLES_API

__all__ = [
    "PolicyEngineTablesClient",
    "TABLES_API"
]
