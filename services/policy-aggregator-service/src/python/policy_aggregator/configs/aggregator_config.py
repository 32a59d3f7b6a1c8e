import logging
import yaml
from pathlib import Path
from typing import Optional
from injector import singleton
from upstream_discovery import InvalidAddressError, split_host_port

# From: services/policy-aggregator-service/src/python/policy_aggregator/configs/aggregator_config.py
# To:   services/policy-aggregator-service/src/resources/configs/default.yaml
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "resources" / "configs" / "default.yaml"


@singleton
class AggregatorConfig:

    def __init__(self, config_path: Optional[Path] = None):
        self.__logger = logging.getLogger(self.__class__.__name__)

        raw_config = {}
        path = config_path or DEFAULT_CONFIG_PATH
        if path.exists():
            with open(path, "r") as f:
                raw_config = yaml.safe_load(f) or {}
            self.__logger.info(f"AggregatorConfig loaded from {path}")
        elif config_path is not None:
            raise FileNotFoundError(f"Config file not found at: {path}")
        else:
            self.__logger.warning(f"Config file not found at {path}, using built-in defaults")

        aggregator_config = raw_config.get("policy_aggregator", {}) or {}

        # HTTP settings
        http_config = aggregator_config.get("http", {}) or {}
        self.http_address: str = http_config.get("address", ":8080")
        self.http_max_threads: int = http_config.get("max_threads", 100)

        # Discovery settings
        discovery_config = aggregator_config.get("discovery", {}) or {}
        self.discovery_multicast_address: str = discovery_config.get("multicast_address", "224.0.0.1:8888")
        self.discovery_announce_address: str = discovery_config.get("announce_address", "") or ""
        self.discovery_announce_interval: float = float(discovery_config.get("announce_interval", 30.0))

        # Upstream settings
        upstreams_config = aggregator_config.get("upstreams", {}) or {}
        self.upstreams_timeout: float = float(upstreams_config.get("timeout", 10.0))

    @property
    def http_host(self) -> str:
        host, _ = split_host_port(self.http_address)
        return host or "0.0.0.0"

    @property
    def http_port(self) -> int:
        _, port = split_host_port(self.http_address)
        return port

    def validate(self) -> None:
        """Raise ``ValueError`` describing the first invalid setting."""
        addresses = {
            "http address": self.http_address,
            "multicast address": self.discovery_multicast_address,
        }
        if self.discovery_announce_address:
            addresses["announce address"] = self.discovery_announce_address
        for name, address in addresses.items():
            try:
                split_host_port(address)
            except InvalidAddressError as e:
                raise ValueError(f"Invalid {name}: {e.message}") from e

        if self.discovery_announce_address:
            if self.discovery_announce_address == self.discovery_multicast_address:
                raise ValueError("Refusing to announce on the same address we listen on for announcements")
            if self.http_port == 0:
                raise ValueError("Cannot announce an ephemeral HTTP port, set an explicit port in the http address")
        if self.discovery_announce_interval <= 0:
            raise ValueError("Announce interval must be positive")
        if self.http_max_threads < 1:
            raise ValueError("Max threads must be at least 1")
        if self.upstreams_timeout <= 0:
            raise ValueError("Upstream timeout must be positive")
