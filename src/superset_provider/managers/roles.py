import logging
from typing import List, Dict, Any

from ..models import RoleRecord
from .base import BaseManager, PAGE_QUERY

logger = logging.getLogger(__name__)


class RoleManager(BaseManager):
    async def list(self) -> List[RoleRecord]:
        """
        List all roles.

        Returns:
            List of RoleRecord objects.
        """
        response = await self._get(f"/security/roles?{PAGE_QUERY}")
        return self._decode_list(RoleRecord, response)

    async def get(self, role_id: int) -> RoleRecord:
        """
        Get a role by ID.

        Raises:
            NotFoundError: If the role does not exist.
        """
        response = await self._get(f"/security/roles/{role_id}")
        return self._decode_result(RoleRecord, response)

    async def create(self, name: str) -> int:
        """
        Create a role.

        Args:
            name: Name of the role.

        Returns:
            The ID assigned to the role.
        """
        response = await self._post("/security/roles/", json={"name": name})
        role_id = self._created_id(response)
        logger.info(f"Created role '{name}' with ID {role_id}")
        return role_id

    async def update(self, role_id: int, name: str) -> Dict[str, Any]:
        """
        Rename a role.
        """
        response = await self._put(f"/security/roles/{role_id}", json={"name": name})
        logger.info(f"Role {role_id} renamed to '{name}'")
        return response

    async def delete(self, role_id: int) -> Dict[str, Any]:
        """
        Delete a role.
        """
        return await self._delete(f"/security/roles/{role_id}")
