"""
FastAPI application entry point for TMS.

Transportation Management System GraphQL API.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from strawberry.fastapi import GraphQLRouter

from tms.api.graphql import get_context, schema
from tms.core.config import Settings, get_settings
from tms.db import ShipmentStore, UserStore, generate_shipments, generate_users
from tms.services import AuthService, ShipmentService

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings.

    Handlers are installed only once; the level is applied on every call.
    """
    level = settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger().setLevel(level)


def check_secret_key(settings: Settings) -> None:
    """Warn about (or refuse) the built-in signing key."""
    if not settings.uses_insecure_secret_key:
        return
    if settings.require_secret_key:
        raise RuntimeError(
            "SECRET_KEY is not set; refusing to start with the built-in signing key"
        )
    logger.warning(
        "SECRET_KEY is not set; using the insecure built-in signing key. "
        "Set SECRET_KEY (openssl rand -hex 32) before deploying."
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    settings: Settings = app.state.settings
    logger.info(f"{settings.app_name} ready at {settings.graphql_path}")
    logger.info("Demo accounts: admin@tms.com / admin123, employee@tms.com / employee123")
    yield


def create_application(
    settings: Optional[Settings] = None,
    shipment_store: Optional[ShipmentStore] = None,
    user_store: Optional[UserStore] = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    This is the composition root: stores and services are built here once
    and shared through ``app.state`` for the life of the process.
    """
    settings = settings or get_settings()
    configure_logging(settings)
    check_secret_key(settings)

    if shipment_store is None:
        shipment_store = ShipmentStore(
            generate_shipments(settings.seed_shipment_count, seed=settings.seed_random_seed)
        )
    if user_store is None:
        user_store = UserStore(generate_users())

    app = FastAPI(
        title=settings.app_name,
        description="""
        ## Transportation Management System (TMS)

        Shipment tracking over a GraphQL API:

        - **Shipments**: list with filter, sort and pagination; status statistics
        - **Mutations**: create, update and delete (admin); flag/unflag (any user)
        - **Auth**: `login` mutation issues a 7-day bearer token
        """,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.shipment_store = shipment_store
    app.state.user_store = user_store
    app.state.auth_service = AuthService(user_store)
    app.state.shipment_service = ShipmentService(
        shipment_store, default_page_size=settings.default_page_size
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    graphql_app = GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.graphiql else None,
    )
    app.include_router(graphql_app, prefix=settings.graphql_path)

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint."""
        current = request.app.state.settings
        return {
            "status": "healthy",
            "app": current.app_name,
            "version": current.app_version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/")
    async def root(request: Request):
        """Root endpoint with API info."""
        current = request.app.state.settings
        return {
            "app": current.app_name,
            "version": current.app_version,
            "graphql": current.graphql_path,
        }

    return app
