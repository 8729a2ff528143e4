import logging
from typing import List, Optional

from ..exceptions import NotFoundError
from ..models import ResourcePermission, RolePermissionsState
from ..schema import ROLE_PERMISSIONS_SCHEMA
from .base import BaseResource, timestamp

logger = logging.getLogger(__name__)


class RolePermissionsResource(BaseResource[RolePermissionsState]):
    """The full permission set of one role.

    There is no incremental add/remove: create and update both send the
    whole set in one bulk call, and delete sends an empty set. The role
    itself is never deleted here.
    """

    type_name = "superset_role_permissions"
    display_name = "Superset Role Permissions"
    schema = ROLE_PERMISSIONS_SCHEMA
    state_model = RolePermissionsState

    async def _create(self, plan: RolePermissionsState) -> RolePermissionsState:
        return await self._replace(plan)

    async def _update(self, plan: RolePermissionsState, state: RolePermissionsState) -> RolePermissionsState:
        return await self._replace(plan)

    async def _replace(self, plan: RolePermissionsState) -> RolePermissionsState:
        role_id = await self.client.lookup.get_role_id(plan.role_name)
        logger.debug(f"Resolved role '{plan.role_name}' to ID {role_id}")

        pairs = [(perm.permission, perm.view_menu) for perm in plan.resource_permissions]
        resolved = await self.client.lookup.get_permission_ids(pairs)

        permission_ids: List[int] = []
        resource_permissions = []
        for perm, permission_id in zip(plan.resource_permissions, resolved):
            if permission_id not in permission_ids:
                permission_ids.append(permission_id)
            resource_permissions.append(perm.model_copy(update={"id": permission_id}))

        await self.client.permissions.replace_for_role(role_id, permission_ids)

        return RolePermissionsState(
            id=str(role_id),
            role_name=plan.role_name,
            resource_permissions=resource_permissions,
            last_updated=timestamp(),
        )

    async def _read(self, state: RolePermissionsState) -> Optional[RolePermissionsState]:
        try:
            role_id = await self.client.lookup.get_role_id(state.role_name)
        except NotFoundError:
            return None
        return await self._observe(role_id, state.role_name, state)

    async def _observe(
        self, role_id: int, role_name: str, state: Optional[RolePermissionsState] = None
    ) -> RolePermissionsState:
        permissions = await self.client.permissions.list_for_role(role_id)
        resource_permissions = [
            ResourcePermission(id=perm.id, permission=perm.permission_name, view_menu=perm.view_menu_name)
            for perm in permissions
        ]
        logger.debug(f"Role {role_id} has {len(resource_permissions)} permissions")
        return RolePermissionsState(
            id=str(role_id),
            role_name=role_name,
            resource_permissions=resource_permissions,
            last_updated=state.last_updated if state and state.last_updated else timestamp(),
        )

    async def _delete(self, state: RolePermissionsState) -> None:
        role_id = await self.client.lookup.get_role_id(state.role_name)
        await self.client.permissions.clear_for_role(role_id)

    async def _import(self, resource_id: int) -> Optional[RolePermissionsState]:
        try:
            role = await self.client.roles.get(resource_id)
        except NotFoundError:
            return None
        return await self._observe(role.id, role.name)
