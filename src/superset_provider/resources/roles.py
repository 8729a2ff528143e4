import logging
from typing import Optional

from ..exceptions import NotFoundError
from ..models import RoleState
from ..schema import ROLE_SCHEMA
from .base import BaseResource, timestamp

logger = logging.getLogger(__name__)


class RoleResource(BaseResource[RoleState]):
    type_name = "superset_role"
    display_name = "Superset Role"
    schema = ROLE_SCHEMA
    state_model = RoleState

    async def _create(self, plan: RoleState) -> RoleState:
        # Adopt a role that already exists under this name
        try:
            role_id = await self.client.lookup.get_role_id(plan.name)
            logger.info(f"Role '{plan.name}' already exists with ID {role_id}, adopting it")
        except NotFoundError:
            role_id = await self.client.roles.create(plan.name)
        return plan.model_copy(update={"id": role_id, "last_updated": timestamp()})

    async def _read(self, state: RoleState) -> Optional[RoleState]:
        try:
            role = await self.client.roles.get(state.id)
        except NotFoundError:
            return None
        if not role.name:
            logger.warning(f"Received empty name for role {role.id}")
        return state.model_copy(update={"id": role.id, "name": role.name})

    async def _update(self, plan: RoleState, state: RoleState) -> RoleState:
        existing = await self.client.roles.get(state.id)
        if existing.name == plan.name:
            logger.info(f"Role with ID {state.id} already has the name '{plan.name}'. No update necessary.")
            return state.model_copy(update={"name": plan.name})
        await self.client.roles.update(state.id, plan.name)
        return state.model_copy(update={"name": plan.name, "last_updated": timestamp()})

    async def _delete(self, state: RoleState) -> None:
        await self.client.roles.delete(state.id)
