"""Keeps the upstream registry fed for the lifetime of the gateway.

Runs the :class:`DiscoveryListener` on its own thread and, when an
announce address is configured, an :class:`Announcer` advertising the
gateway's HTTP port.  A fatal listener error is reported once through
the ``on_fatal`` callback given to :meth:`start`.
"""

import logging
import threading
from typing import Callable, Optional
from injector import inject, singleton
from upstream_discovery import Announcer, DiscoveryError, DiscoveryListener, UpstreamRegistry
from policy_aggregator.configs import AggregatorConfig


@singleton
class UpstreamDiscoveryService:

    @inject
    def __init__(self,
                 config: AggregatorConfig,
                 registry: UpstreamRegistry):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__config = config
        self.__listener = DiscoveryListener(config.discovery_multicast_address, registry)
        self.__listener_thread: Optional[threading.Thread] = None
        self.__announcer: Optional[Announcer] = None

    @property
    def bound_address(self) -> Optional[tuple[str, int]]:
        return self.__listener.bound_address

    def start(self, on_fatal: Callable[[DiscoveryError], None]) -> bool:
        """Start listening (and announcing, if configured).

        Blocks until the listener socket is bound. Returns ``False`` when
        the listener failed before becoming ready, in which case
        ``on_fatal`` has already been called.
        """
        ready = threading.Event()
        self.__listener_thread = threading.Thread(
            target=self.__listen,
            args=(ready, on_fatal),
            name="discovery-listener",
            daemon=True
        )
        self.__listener_thread.start()

        # Wait until bound, or until the listener died trying
        while not ready.wait(timeout=0.1):
            if not self.__listener_thread.is_alive():
                return False

        if self.__config.discovery_announce_address:
            self.__announcer = Announcer(
                address=self.__config.discovery_announce_address,
                port=self.__config.http_port,
                interval=self.__config.discovery_announce_interval
            )
            self.__announcer.start()
        return True

    def stop(self) -> None:
        if self.__announcer is not None:
            self.__announcer.stop()
            self.__announcer = None
        self.__listener.stop()
        if self.__listener_thread is not None:
            self.__listener_thread.join(timeout=5.0)
            self.__listener_thread = None

    def __listen(self, ready: threading.Event, on_fatal: Callable[[DiscoveryError], None]) -> None:
        try:
            self.__listener.listen(ready)
        except DiscoveryError as e:
            self.__logger.critical(f"Upstream discovery failed: {e}", exc_info=True)
            on_fatal(e)
