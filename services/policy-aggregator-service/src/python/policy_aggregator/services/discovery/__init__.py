from .upstream_discovery_service import UpstreamDiscoveryService

__all__ = [
    "UpstreamDiscoveryService",
]
