"""
Main FastAPI application for the Stockroom gateway
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import settings
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..store import create_product_store

configure_logging(debug=settings.debug, log_level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the product store once and share it across requests."""
    # Startup
    logger.info("Starting Stockroom API...", store_backend=settings.store_backend)
    try:
        app.state.store = await create_product_store(settings)
    except Exception as e:
        logger.error("Failed to initialize product store", error=str(e))
        raise
    logger.info("Product store initialized")

    yield

    # Shutdown
    logger.info("Shutting down Stockroom API...")
    await app.state.store.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Stockroom API",
        description="GraphQL gateway for a Couchbase-backed product catalogue",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    # Add logging context middleware
    app.add_middleware(LoggingContextMiddleware)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check endpoint
    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    from ..graphql.schema import create_graphql_router, validate_schema

    try:
        logger.info("Validating GraphQL schema...")
        validate_schema()
        app.include_router(create_graphql_router(graphiql=settings.debug), prefix="")
        logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        raise

    return app


# Create the main application instance
app = create_app()
