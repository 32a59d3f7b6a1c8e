from fastapi import FastAPI
from fastapi_injector import attach_injector
from injector import Binder, Injector
from prometheus_client import make_asgi_app
from request_handler import CorsGuardMiddleware
from upstream_discovery import UpstreamAggregator, UpstreamRegistry
from policy_aggregator import __version__
from policy_aggregator.configs import AggregatorConfig
from policy_aggregator.controllers.tables import router as tables_controller_router


def create_injector(config: AggregatorConfig, registry: UpstreamRegistry) -> Injector:
    """Bind the process-wide config and registry for injection."""
    aggregator = UpstreamAggregator(registry)

    def configure_bindings(binder: Binder):
        binder.bind(AggregatorConfig, to=config)
        binder.bind(UpstreamRegistry, to=registry)
        binder.bind(UpstreamAggregator, to=aggregator)

    return Injector([configure_bindings])


def create_app(injector: Injector) -> FastAPI:
    ######################
    # Initialize FastAPI #
    ######################

    fast_api: FastAPI = FastAPI(
        title="Policy Aggregator API",
        description="Aggregates the tables of every discovered policy engine",
        version=__version__
    )

    # Only GET (and CORS preflight) are served
    fast_api.add_middleware(CorsGuardMiddleware, allow_methods=["GET"])

    # Include routers
    fast_api.include_router(tables_controller_router)

    ################################
    # Initialize Prometheus Client #
    ################################

    prometheus_app = make_asgi_app()
    fast_api.mount("/metrics", prometheus_app)

    ##################################
    # Initialize Dependency Injector #
    ##################################

    attach_injector(fast_api, injector)
    return fast_api
