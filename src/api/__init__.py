"""FastAPI application setup."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.controller import product_router, user_router
from src.clients import CosmosDBClient
from src.config import get_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Open the Cosmos DB client before serving traffic and close it on shutdown.

    A failed connection is re-raised so the server aborts startup.
    """
    config = get_config()
    cosmos_client = CosmosDBClient(
        connection_string=config.cosmosdb.connection_string,
        database_name=config.cosmosdb.database_name,
        container_names=[
            config.cosmosdb.products_container,
            config.cosmosdb.users_container,
        ],
    )

    try:
        await cosmos_client.connect()
    except Exception as e:
        logger.error(f"Error connecting to Cosmos DB: {e}")
        await cosmos_client.close()
        raise

    logger.info(f"Connected to Cosmos DB database '{config.cosmosdb.database_name}'")
    app.state.config = config
    app.state.cosmos_client = cosmos_client

    try:
        yield
    finally:
        await cosmos_client.close()
        logger.info("Cosmos DB connection closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Tienda API",
        description="CRUD API for products and users backed by Azure Cosmos DB",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(product_router)
    app.include_router(user_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
