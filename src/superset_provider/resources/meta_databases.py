import logging
from typing import Any, Dict, Optional

from ..exceptions import NotFoundError
from ..models import (
    DatabaseRecord, MetaDatabaseState, META_DATABASE_URI, build_meta_extra,
)
from ..schema import META_DATABASE_SCHEMA
from .base import BaseResource, prefer

logger = logging.getLogger(__name__)

# Values used when the plan leaves an optional flag unset
DEFAULTS = {
    "expose_in_sqllab": True,
    "allow_ctas": False,
    "allow_cvas": False,
    "allow_dml": False,
    "allow_run_async": True,
    "is_managed_externally": False,
}


def apply_defaults(plan: MetaDatabaseState) -> MetaDatabaseState:
    update: Dict[str, Any] = {
        name: default for name, default in DEFAULTS.items() if getattr(plan, name) is None
    }
    if not plan.sqlalchemy_uri:
        update["sqlalchemy_uri"] = META_DATABASE_URI
    if plan.allowed_databases is None:
        update["allowed_databases"] = []
    return plan.model_copy(update=update)


def build_payload(plan: MetaDatabaseState) -> Dict[str, Any]:
    """Whole-object payload for a meta database; `plan` must have defaults applied."""
    return {
        "database_name": plan.database_name,
        "engine": "superset",
        "configuration_method": "sqlalchemy_form",
        "sqlalchemy_uri": plan.sqlalchemy_uri,
        "expose_in_sqllab": plan.expose_in_sqllab,
        "allow_ctas": plan.allow_ctas,
        "allow_cvas": plan.allow_cvas,
        "allow_dml": plan.allow_dml,
        "allow_run_async": plan.allow_run_async,
        "extra": build_meta_extra(plan.allowed_databases or []),
        "server_cert": None,
        "is_managed_externally": plan.is_managed_externally,
        "external_url": None,
    }


def merge_record(state: MetaDatabaseState, record: DatabaseRecord) -> MetaDatabaseState:
    """Fold a fetched meta database into `state`.

    The URI and allowed list keep their prior values when the API
    returns them empty; flags are taken only when the API reports them.
    """
    update: Dict[str, Any] = {
        "id": record.id,
        "database_name": record.database_name,
        "sqlalchemy_uri": prefer(record.sqlalchemy_uri, state.sqlalchemy_uri) or META_DATABASE_URI,
        "allowed_databases": prefer(record.allowed_dbs, state.allowed_databases),
    }
    for flag in DEFAULTS:
        value = getattr(record, flag)
        if value is not None:
            update[flag] = value
    return state.model_copy(update=update)


class MetaDatabaseResource(BaseResource[MetaDatabaseState]):
    """A database connection federating queries across other databases.

    Create adopts an existing connection with the same name and the
    superset:// marker instead of creating a duplicate.
    """

    type_name = "superset_meta_database"
    display_name = "Superset Meta Database"
    schema = META_DATABASE_SCHEMA
    state_model = MetaDatabaseState

    async def _create(self, plan: MetaDatabaseState) -> MetaDatabaseState:
        plan = apply_defaults(plan)
        payload = build_payload(plan)

        existing = await self.client.lookup.find_meta_database(plan.database_name)
        if existing is not None:
            logger.info(f"Found existing meta database '{existing.database_name}' with ID {existing.id}, adopting it")
            await self.client.databases.update(existing.id, payload)
            database_id = existing.id
        else:
            database_id, _ = await self.client.databases.create(payload)

        return plan.model_copy(update={"id": database_id})

    async def _read(self, state: MetaDatabaseState) -> Optional[MetaDatabaseState]:
        record: Optional[DatabaseRecord]
        try:
            record = await self.client.lookup.get_meta_database(state.id)
        except NotFoundError as e:
            logger.warning(f"Failed to get meta database {state.id} by ID, trying by name: {e}")
            record = await self.client.lookup.find_meta_database(state.database_name)

        if record is None:
            return None
        logger.info(f"Found meta database '{record.database_name}' with ID {record.id}")
        return merge_record(state, record)

    async def _update(self, plan: MetaDatabaseState, state: MetaDatabaseState) -> MetaDatabaseState:
        plan = apply_defaults(plan)
        await self.client.databases.update(state.id, build_payload(plan))
        return plan.model_copy(update={"id": state.id})

    async def _delete(self, state: MetaDatabaseState) -> None:
        await self.client.databases.delete(state.id)

    async def _import(self, resource_id: int) -> Optional[MetaDatabaseState]:
        try:
            record = await self.client.lookup.get_meta_database(resource_id)
        except NotFoundError:
            return None
        logger.info(
            f"Imported meta database '{record.database_name}' with {len(record.allowed_dbs)} allowed databases"
        )
        return merge_record(MetaDatabaseState(), record)
