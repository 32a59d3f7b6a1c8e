"""Typer-based CLI entrypoint for the policy aggregator gateway."""

import logging
import threading
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console

from policy_aggregator import __version__
from policy_aggregator.configs import AggregatorConfig
from policy_aggregator.server import create_app, create_injector
from policy_aggregator.services.discovery import UpstreamDiscoveryService
from request_handler import RequestThreadPool
from upstream_discovery import DiscoveryError, UpstreamRegistry

console = Console()
app = typer.Typer(help="Policy Aggregator gateway", no_args_is_help=True, pretty_exceptions_enable=False)


def load_config(
    config_path: Optional[Path],
    http_addr: Optional[str] = None,
    multicast_addr: Optional[str] = None,
    multicast_ping: Optional[str] = None,
    multicast_interval: Optional[float] = None,
) -> AggregatorConfig:
    """Load the YAML config, apply command-line overrides and validate."""
    config = AggregatorConfig(config_path)
    if http_addr is not None:
        config.http_address = http_addr
    if multicast_addr is not None:
        config.discovery_multicast_address = multicast_addr
    if multicast_ping is not None:
        config.discovery_announce_address = multicast_ping
    if multicast_interval is not None:
        config.discovery_announce_interval = multicast_interval
    try:
        config.validate()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return config


@app.command("serve")
def serve(
    config_path: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, help="Path to a YAML config file."),
    http_addr: Optional[str] = typer.Option(None, "--http-addr", help="host:port to serve HTTP on."),
    multicast_addr: Optional[str] = typer.Option(None, "--multicast-addr", help="UDP address to receive upstream announcements on."),
    multicast_ping: Optional[str] = typer.Option(None, "--multicast-ping", help="UDP address to announce this gateway to (empty disables)."),
    multicast_interval: Optional[float] = typer.Option(None, "--multicast-interval", help="Seconds between announcements."),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level."),
    access_log: bool = typer.Option(False, "--access-log/--no-access-log", help="Enable the uvicorn access log."),
) -> None:
    """Run the gateway until interrupted."""

    #####################
    # Configure Logging #
    #####################

    logging.basicConfig(
        level=log_level.upper(),
        format='%(asctime)s %(levelname)s: [%(name)s] %(message)s',
        datefmt='%Y-%m-%dT%H:%M:%SZ',
        handlers=[logging.StreamHandler()]
    )
    logger = logging.getLogger("policy_aggregator")

    ###########################
    # Load Config & Registry  #
    ###########################

    config = load_config(config_path, http_addr, multicast_addr, multicast_ping, multicast_interval)
    registry = UpstreamRegistry()
    injector = create_injector(config, registry)

    ##############################
    # Initialise API Thread Pool #
    ##############################

    RequestThreadPool.init(max_workers=config.http_max_threads)

    #############################
    # Start Upstream Discovery  #
    #############################

    server: Optional[uvicorn.Server] = None
    fatal = threading.Event()

    def on_fatal(error: DiscoveryError):
        fatal.set()
        if server is not None:
            server.should_exit = True

    discovery_service = injector.get(UpstreamDiscoveryService)
    if not discovery_service.start(on_fatal):
        RequestThreadPool.shutdown()
        raise typer.Exit(code=1)

    ################
    # Start Server #
    ################

    server = uvicorn.Server(uvicorn.Config(
        create_app(injector),
        host=config.http_host,
        port=config.http_port,
        access_log=access_log,
        log_level=log_level.lower()
    ))
    logger.info(f"Serving HTTP on {config.http_address}")
    try:
        if not fatal.is_set():
            server.run()
    finally:
        discovery_service.stop()
        RequestThreadPool.shutdown()

    if fatal.is_set():
        raise typer.Exit(code=1)


@app.command("version")
def version() -> None:
    """Print the gateway version."""

    console.print(f"Policy Aggregator {__version__}")


if __name__ == "__main__":  # pragma: no cover
    app()
