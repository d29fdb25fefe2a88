"""Record service for the product and user collections.

Wraps one Cosmos DB container and exposes the list/create/update/delete
operations used by the API controllers:
- Identifier validation before any database call
- Translation of driver "not found" errors into RecordNotFoundError
- Partial updates (omitted fields keep their stored values)

Any other driver error propagates to the caller unchanged.
"""

import logging
import uuid
from typing import Any

from azure.cosmos.exceptions import CosmosResourceNotFoundError

from ..clients import CosmosDBClient

logger = logging.getLogger(__name__)


class RecordServiceError(Exception):
    """Base class for record service errors."""
    pass


class InvalidRecordIdError(RecordServiceError):
    """Raised when an identifier is not a well-formed record id."""

    def __init__(self, record_id: str):
        super().__init__(f"Invalid record id: {record_id!r}")
        self.record_id = record_id


class RecordNotFoundError(RecordServiceError):
    """Raised when no record matches an identifier."""

    def __init__(self, record_id: str):
        super().__init__(f"Record not found: {record_id}")
        self.record_id = record_id


def is_valid_record_id(record_id: str) -> bool:
    """Check that an id has the UUID form the service assigns on create."""
    try:
        uuid.UUID(record_id)
    except (ValueError, AttributeError, TypeError):
        return False
    return True


class RecordService:
    """CRUD operations over a single container."""

    def __init__(self, client: CosmosDBClient, container_name: str):
        self._client = client
        self._container_name = container_name

    def validate_id(self, record_id: str) -> None:
        """Raise InvalidRecordIdError unless record_id is well formed."""
        if not is_valid_record_id(record_id):
            raise InvalidRecordIdError(record_id)

    async def list_records(self) -> list[dict[str, Any]]:
        """Return every record in the container."""
        return await self._client.read_all_items(self._container_name)

    async def create_record(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Persist a new record under a freshly generated id.

        Args:
            fields: Record fields. Any caller-supplied 'id' is dropped so
                the client assigns a new one.

        Returns:
            The created record.
        """
        item = {name: value for name, value in fields.items() if name != "id"}

        record = await self._client.create_item(self._container_name, item)
        logger.debug(f"Created record {record['id']} in {self._container_name}")
        return record

    async def update_record(self, record_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Set the given fields on an existing record.

        Args:
            record_id: Id of the record to update.
            fields: Fields to overwrite. Fields not listed are left unchanged.

        Returns:
            The record as stored after the update.

        Raises:
            InvalidRecordIdError: If record_id is malformed.
            RecordNotFoundError: If no record has this id.
        """
        self.validate_id(record_id)

        # The id is the partition key and cannot be patched
        changes = {name: value for name, value in fields.items() if name != "id"}

        try:
            if not changes:
                return await self._client.read_item(self._container_name, record_id)
            return await self._client.patch_item(self._container_name, record_id, changes)
        except CosmosResourceNotFoundError:
            raise RecordNotFoundError(record_id)

    async def delete_record(self, record_id: str) -> None:
        """Remove a record.

        Raises:
            InvalidRecordIdError: If record_id is malformed.
            RecordNotFoundError: If no record has this id.
        """
        self.validate_id(record_id)

        try:
            await self._client.delete_item(self._container_name, record_id)
        except CosmosResourceNotFoundError:
            raise RecordNotFoundError(record_id)

        logger.debug(f"Deleted record {record_id} from {self._container_name}")
