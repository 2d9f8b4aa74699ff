"""FastAPI application serving the podcast catalog GraphQL endpoint."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI, Request
from strawberry.fastapi import GraphQLRouter

from podcast_catalog import __version__
from podcast_catalog.config import Settings, get_settings
from podcast_catalog.schema import schema
from podcast_catalog.service import CatalogService
from podcast_catalog.storage import CatalogStore

logger = structlog.get_logger(__name__)

GRAPHQL_PATH = "/graphql"


def get_service(request: Request) -> CatalogService:
    return request.app.state.service


async def get_context(service: CatalogService = Depends(get_service)) -> dict:
    """Build the GraphQL context for one request."""
    return {"service": service}


def create_app(settings: Settings | None = None, store: CatalogStore | None = None) -> FastAPI:
    """Build the application.

    The store is opened (tables created) when the app starts and closed when
    it shuts down.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.
        store: Pre-built store, mainly for tests. Built from settings if omitted.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        catalog_store = store or CatalogStore(
            settings.database.url, echo=settings.database.echo
        )
        catalog_store.create_all()
        app.state.store = catalog_store
        app.state.service = CatalogService(catalog_store)
        logger.info("Podcast catalog started", environment=settings.environment)
        try:
            yield
        finally:
            catalog_store.close()
            logger.info("Podcast catalog stopped")

    app = FastAPI(
        title="Podcast Catalog",
        description="GraphQL API for podcasts and their episodes",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    graphql_router = GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.debug else None,
    )
    app.include_router(graphql_router, prefix=GRAPHQL_PATH)

    @app.get("/health")
    def health(request: Request):
        """Liveness check with the number of stored podcasts."""
        return {
            "status": "ok",
            "version": __version__,
            "podcasts": request.app.state.store.count_podcasts(),
        }

    return app


app = create_app()
