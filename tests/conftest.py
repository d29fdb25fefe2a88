"""Shared fixtures for the API and service tests.

The HTTP tests run against an in-memory stand-in for CosmosDBClient that
keeps items in dictionaries and raises the same azure.cosmos exceptions as
the real SDK.
"""

import copy
import uuid
from typing import Any, Iterable

import pytest
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError
from fastapi.testclient import TestClient

from src.api import create_app
from src.config import AppConfig, CosmosDBConfig, LoggingConfig, ServerConfig

TEST_CONNECTION_STRING = "AccountEndpoint=https://localhost:8081/;AccountKey=dGVzdC1rZXk=;"


class InMemoryCosmosDBClient:
    """Dictionary-backed double with the CosmosDBClient interface."""

    def __init__(self, container_names: Iterable[str]):
        self.containers: dict[str, dict[str, dict[str, Any]]] = {
            name: {} for name in container_names
        }
        self.calls: list[tuple[str, str]] = []

    def _not_found(self, item_id: str) -> CosmosResourceNotFoundError:
        return CosmosResourceNotFoundError(
            status_code=404,
            message=f"Entity with the specified id does not exist in the system. id={item_id}",
        )

    async def create_item(self, container_name: str, item: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("create_item", container_name))
        if "id" not in item:
            item["id"] = str(uuid.uuid4())

        stored = {**item, "_rid": "rid", "_etag": '"00000000"', "_ts": 1700000000}
        self.containers[container_name][item["id"]] = stored
        return copy.deepcopy(stored)

    async def read_all_items(self, container_name: str) -> list[dict[str, Any]]:
        self.calls.append(("read_all_items", container_name))
        return [copy.deepcopy(item) for item in self.containers[container_name].values()]

    async def read_item(self, container_name: str, item_id: str) -> dict[str, Any]:
        self.calls.append(("read_item", container_name))
        try:
            return copy.deepcopy(self.containers[container_name][item_id])
        except KeyError:
            raise self._not_found(item_id)

    async def patch_item(
        self, container_name: str, item_id: str, fields: dict[str, Any]
    ) -> dict[str, Any]:
        self.calls.append(("patch_item", container_name))
        try:
            stored = self.containers[container_name][item_id]
        except KeyError:
            raise self._not_found(item_id)

        stored.update(fields)
        return copy.deepcopy(stored)

    async def delete_item(self, container_name: str, item_id: str) -> None:
        self.calls.append(("delete_item", container_name))
        try:
            del self.containers[container_name][item_id]
        except KeyError:
            raise self._not_found(item_id)


class FailingCosmosDBClient:
    """Double whose every operation fails like an unavailable service."""

    def __init__(self):
        self.calls: list[str] = []

    def _fail(self, operation: str):
        self.calls.append(operation)
        raise CosmosHttpResponseError(status_code=503, message="Service unavailable")

    async def create_item(self, container_name, item):
        self._fail("create_item")

    async def read_all_items(self, container_name):
        self._fail("read_all_items")

    async def read_item(self, container_name, item_id):
        self._fail("read_item")

    async def patch_item(self, container_name, item_id, fields):
        self._fail("patch_item")

    async def delete_item(self, container_name, item_id):
        self._fail("delete_item")


@pytest.fixture
def app_config() -> AppConfig:
    """Configuration matching config_test.yaml."""
    return AppConfig(
        server=ServerConfig(host="0.0.0.0", port=3000),
        cosmosdb=CosmosDBConfig(
            connection_string=TEST_CONNECTION_STRING,
            database_name="tienda-test",
            products_container="productos",
            users_container="usuarios",
        ),
        logging=LoggingConfig(level="INFO"),
    )


@pytest.fixture
def cosmos_client(app_config) -> InMemoryCosmosDBClient:
    return InMemoryCosmosDBClient(
        [app_config.cosmosdb.products_container, app_config.cosmosdb.users_container]
    )


@pytest.fixture
def failing_cosmos_client() -> FailingCosmosDBClient:
    return FailingCosmosDBClient()


def _build_test_client(app_config, cosmos_client) -> TestClient:
    # Lifespan is not run: the state it would set up is injected directly
    app = create_app()
    app.state.config = app_config
    app.state.cosmos_client = cosmos_client
    return TestClient(app)


@pytest.fixture
def api_client(app_config, cosmos_client) -> TestClient:
    """HTTP client backed by the in-memory database."""
    return _build_test_client(app_config, cosmos_client)


@pytest.fixture
def failing_api_client(app_config, failing_cosmos_client) -> TestClient:
    """HTTP client whose database fails on every call."""
    return _build_test_client(app_config, failing_cosmos_client)
