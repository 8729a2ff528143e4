import logging
from typing import List, Dict, Any

from ..models import PermissionResource, RolePermission
from .base import BaseManager, PAGE_QUERY

logger = logging.getLogger(__name__)


class PermissionManager(BaseManager):
    async def list_resources(self) -> List[PermissionResource]:
        """
        List the permission/view-menu catalogue.

        Returns:
            List of PermissionResource objects.
        """
        response = await self._get(f"/security/permissions-resources?{PAGE_QUERY}")
        return self._decode_list(PermissionResource, response)

    async def list_for_role(self, role_id: int) -> List[RolePermission]:
        """
        List permissions granted to a role.
        """
        response = await self._get(f"/security/roles/{role_id}/permissions/")
        return self._decode_list(RolePermission, response)

    async def replace_for_role(self, role_id: int, permission_ids: List[int]) -> Dict[str, Any]:
        """
        Replace the whole permission set of a role.

        Args:
            role_id: Role whose permissions are replaced.
            permission_ids: Permission/view-menu IDs; an empty list clears the role.
        """
        payload = {"permission_view_menu_ids": list(permission_ids)}
        logger.debug(f"Replacing permissions of role {role_id} with {payload['permission_view_menu_ids']}")
        return await self._post(f"/security/roles/{role_id}/permissions", json=payload)

    async def clear_for_role(self, role_id: int) -> Dict[str, Any]:
        return await self.replace_for_role(role_id, [])
