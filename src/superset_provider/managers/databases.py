import logging
from typing import List, Dict, Any, Tuple

from ..models import DatabaseSummary, DatabaseConnection, DatabaseRecord
from ..exceptions import ShapeError
from .base import BaseManager, PAGE_QUERY

logger = logging.getLogger(__name__)


class DatabaseManager(BaseManager):
    """Database and meta database connections.

    Mutating calls carry a CSRF token and expire the shared listing
    snapshot so later name lookups see the change.
    """

    async def list(self) -> List[DatabaseSummary]:
        """
        Fetch the full database listing, bypassing the cache.
        """
        response = await self._get(f"/database/?{PAGE_QUERY}")
        return self._decode_list(DatabaseSummary, response)

    async def get(self, database_id: int) -> DatabaseRecord:
        """
        Get a database by ID.

        Raises:
            NotFoundError: If the database does not exist.
        """
        response = await self._get(f"/database/{database_id}")
        return self._decode_result(DatabaseRecord, response)

    async def get_connection(self, database_id: int) -> DatabaseConnection:
        """
        Get the connection details of a database, including its parameters.
        """
        response = await self._get(f"/database/{database_id}/connection")
        return self._decode_result(DatabaseConnection, response)

    async def get_schemas(self, database_id: int) -> List[str]:
        response = await self._get(f"/database/{database_id}/schemas/")
        if not isinstance(response, dict) or not isinstance(response.get("result"), list):
            raise ShapeError("The response from the API does not contain the expected 'result' list")
        schemas = response["result"]
        if not all(isinstance(schema, str) for schema in schemas):
            raise ShapeError(f"expected a list of schema names for database {database_id}")
        return schemas

    async def create(self, payload: Dict[str, Any]) -> Tuple[int, DatabaseConnection]:
        """
        Create a database connection.

        Returns:
            The assigned ID and the connection fields echoed by the API.
        """
        response = await self._post("/database/", json=payload, csrf=True)
        database_id = self._created_id(response)
        self.client.database_cache.invalidate()
        logger.info(f"Created database '{payload.get('database_name')}' with ID {database_id}")
        return database_id, self._decode_result(DatabaseConnection, response)

    async def update(self, database_id: int, payload: Dict[str, Any]) -> DatabaseConnection:
        """
        Replace a database connection with `payload`.

        Returns:
            The connection fields echoed by the API.
        """
        response = await self._put(f"/database/{database_id}", json=payload, csrf=True)
        self.client.database_cache.invalidate()
        logger.info(f"Updated database {database_id}")
        return self._decode_result(DatabaseConnection, response)

    async def delete(self, database_id: int) -> Dict[str, Any]:
        response = await self._delete(f"/database/{database_id}", csrf=True)
        self.client.database_cache.invalidate()
        logger.info(f"Deleted database {database_id}")
        return response
