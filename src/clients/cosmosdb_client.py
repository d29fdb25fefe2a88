"""Azure Cosmos DB client for record storage."""

import uuid
from typing import Any, Iterable, Optional

from azure.cosmos.aio import CosmosClient
from azure.cosmos.aio._container import ContainerProxy
from azure.cosmos.aio._database import DatabaseProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError


class CosmosDBClient:
    """Async Cosmos DB client with connection management.

    Uses the NoSQL API with one container per resource kind. Every container
    is partitioned on ``/id``, so items are addressed by their id alone.
    Supports async context manager pattern for proper resource cleanup.
    """

    def __init__(
        self,
        connection_string: str,
        database_name: str,
        container_names: Iterable[str],
        partition_key_path: str = "/id",
    ):
        """Initialize the Cosmos DB client.

        Args:
            connection_string: Cosmos DB account connection string
            database_name: Name of the database to use
            container_names: Containers to open (created if missing)
            partition_key_path: Path to the partition key field (default: /id)
        """
        self._connection_string = connection_string
        self._database_name = database_name
        self._container_names = list(container_names)
        self._partition_key_path = partition_key_path

        self._client: Optional[CosmosClient] = None
        self._database: Optional[DatabaseProxy] = None
        self._containers: dict[str, ContainerProxy] = {}

    async def connect(self) -> None:
        """Establish connection and ensure database/containers exist."""
        self._client = CosmosClient.from_connection_string(self._connection_string)
        await self._client.__aenter__()

        # Get or create database
        try:
            self._database = self._client.get_database_client(self._database_name)
            # Verify database exists by reading it
            await self._database.read()
        except CosmosResourceNotFoundError:
            self._database = await self._client.create_database(self._database_name)

        for container_name in self._container_names:
            self._containers[container_name] = await self._open_container(container_name)

    async def _open_container(self, container_name: str) -> ContainerProxy:
        """Get or create a container partitioned on the configured key path."""
        try:
            container = self._database.get_container_client(container_name)
            await container.read()
        except CosmosResourceNotFoundError:
            container = await self._database.create_container(
                id=container_name,
                partition_key={"paths": [self._partition_key_path], "kind": "Hash"},
            )
        return container

    async def close(self) -> None:
        """Close the Cosmos DB connection."""
        if self._client:
            await self._client.close()
            self._client = None
            self._database = None
            self._containers = {}

    async def __aenter__(self) -> "CosmosDBClient":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Async context manager exit with cleanup."""
        await self.close()
        return False

    def _get_container(self, container_name: str) -> ContainerProxy:
        if self._database is None:
            raise RuntimeError("CosmosDB client not connected. Call connect() first.")

        try:
            return self._containers[container_name]
        except KeyError:
            raise ValueError(f"Unknown container: {container_name}")

    async def create_item(self, container_name: str, item: dict[str, Any]) -> dict[str, Any]:
        """Insert a new item into a container.

        Args:
            container_name: Target container
            item: Dictionary containing the item data. An 'id' is generated
                  when the item has none.

        Returns:
            The created item with any system-generated fields.

        Raises:
            RuntimeError: If client is not connected.
        """
        container = self._get_container(container_name)

        # Ensure item has an id
        if "id" not in item:
            item["id"] = str(uuid.uuid4())

        result = await container.create_item(body=item)
        return dict(result)

    async def read_all_items(self, container_name: str) -> list[dict[str, Any]]:
        """Read every item of a container.

        Raises:
            RuntimeError: If client is not connected.
        """
        container = self._get_container(container_name)

        items = []
        async for item in container.read_all_items():
            items.append(dict(item))

        return items

    async def read_item(self, container_name: str, item_id: str) -> dict[str, Any]:
        """Read a single item by id.

        Raises:
            RuntimeError: If client is not connected.
            CosmosResourceNotFoundError: If item not found.
        """
        container = self._get_container(container_name)

        result = await container.read_item(item=item_id, partition_key=item_id)
        return dict(result)

    async def patch_item(
        self, container_name: str, item_id: str, fields: dict[str, Any]
    ) -> dict[str, Any]:
        """Set the given top-level fields on an item, leaving the rest untouched.

        Args:
            container_name: Container holding the item
            item_id: The item's id
            fields: Field values to set; must not be empty

        Returns:
            The item as stored after the update.

        Raises:
            RuntimeError: If client is not connected.
            CosmosResourceNotFoundError: If item not found.
        """
        container = self._get_container(container_name)

        patch_operations = [
            {"op": "set", "path": f"/{name}", "value": value}
            for name, value in fields.items()
        ]
        result = await container.patch_item(
            item=item_id,
            partition_key=item_id,
            patch_operations=patch_operations,
        )
        return dict(result)

    async def delete_item(self, container_name: str, item_id: str) -> None:
        """Delete an item by id.

        Raises:
            RuntimeError: If client is not connected.
            CosmosResourceNotFoundError: If item not found.
        """
        container = self._get_container(container_name)

        await container.delete_item(item=item_id, partition_key=item_id)
