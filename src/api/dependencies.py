"""
API Dependencies

Provides the shared Cosmos DB client and per-collection record services to
the controllers. The client and configuration are attached to app.state at
startup.
"""

from fastapi import Depends, Request

from src.clients import CosmosDBClient
from src.config import AppConfig
from src.services.record_service import RecordService


def get_cosmos_client(request: Request) -> CosmosDBClient:
    """Get the process-wide Cosmos DB client opened at startup."""
    return request.app.state.cosmos_client


def get_app_config(request: Request) -> AppConfig:
    """Get the configuration the application was started with."""
    return request.app.state.config


def get_product_service(
    client: CosmosDBClient = Depends(get_cosmos_client),
    config: AppConfig = Depends(get_app_config),
) -> RecordService:
    """Record service bound to the products container."""
    return RecordService(client, config.cosmosdb.products_container)


def get_user_service(
    client: CosmosDBClient = Depends(get_cosmos_client),
    config: AppConfig = Depends(get_app_config),
) -> RecordService:
    """Record service bound to the users container."""
    return RecordService(client, config.cosmosdb.users_container)
