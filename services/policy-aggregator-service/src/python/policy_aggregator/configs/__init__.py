from .aggregator_config import AggregatorConfig, DEFAULT_CONFIG_PATH

__all__ = [
    "AggregatorConfig",
    "DEFAULT_CONFIG_PATH"
]
