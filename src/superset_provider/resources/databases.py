import logging
from typing import Any, Dict, Optional

from ..exceptions import NotFoundError
from ..models import DatabaseConnection, DatabaseState
from ..schema import DATABASE_SCHEMA
from .base import BaseResource, prefer

logger = logging.getLogger(__name__)

DEFAULT_EXTRA = '{"client_encoding": "utf8"}'

FLAGS = ("allow_ctas", "allow_cvas", "allow_dml", "allow_run_async", "expose_in_sqllab")


def build_sqlalchemy_uri(plan: DatabaseState) -> str:
    return f"{plan.db_engine}://{plan.db_user}:{plan.db_pass}@{plan.db_host}:{plan.db_port}/{plan.db_name}"


def build_payload(plan: DatabaseState) -> Dict[str, Any]:
    """Whole-object payload for create and update."""
    return {
        "allow_csv_upload": False,
        "allow_ctas": plan.allow_ctas,
        "allow_cvas": plan.allow_cvas,
        "allow_dml": plan.allow_dml,
        "allow_multi_schema_metadata_fetch": True,
        "allow_run_async": plan.allow_run_async,
        "cache_timeout": 0,
        "expose_in_sqllab": plan.expose_in_sqllab,
        "database_name": plan.connection_name,
        "sqlalchemy_uri": build_sqlalchemy_uri(plan),
        "extra": DEFAULT_EXTRA,
    }


def merge_connection(state: DatabaseState, connection: DatabaseConnection) -> DatabaseState:
    """Fold an observed connection into `state`.

    The password is never returned by the API and always comes from
    `state`. Flags are overwritten whenever the API reports them; engine
    and connection parameters only when non-empty.
    """
    update: Dict[str, Any] = {"connection_name": connection.database_name}
    for flag in FLAGS:
        value = getattr(connection, flag)
        if value is not None:
            update[flag] = value

    update["db_engine"] = prefer(connection.backend, state.db_engine)
    params = connection.parameters
    if params is not None:
        update["db_host"] = prefer(params.host, state.db_host)
        update["db_user"] = prefer(params.username, state.db_user)
        update["db_port"] = prefer(params.port, state.db_port)
        update["db_name"] = prefer(params.database, state.db_name)
    return state.model_copy(update=update)


class DatabaseResource(BaseResource[DatabaseState]):
    type_name = "superset_database"
    display_name = "Superset Database Connection"
    schema = DATABASE_SCHEMA
    state_model = DatabaseState

    @staticmethod
    def _apply_echo(plan: DatabaseState, database_id: int, connection: DatabaseConnection) -> DatabaseState:
        # Connection parameters stay as planned; name and flags come from the echo
        update: Dict[str, Any] = {"id": database_id, "connection_name": connection.database_name}
        for flag in FLAGS:
            value = getattr(connection, flag)
            if value is not None:
                update[flag] = value
        return plan.model_copy(update=update)

    async def _create(self, plan: DatabaseState) -> DatabaseState:
        database_id, connection = await self.client.databases.create(build_payload(plan))
        return self._apply_echo(plan, database_id, connection)

    async def _read(self, state: DatabaseState) -> Optional[DatabaseState]:
        try:
            connection = await self.client.databases.get_connection(state.id)
        except NotFoundError:
            return None
        return merge_connection(state, connection)

    async def _update(self, plan: DatabaseState, state: DatabaseState) -> DatabaseState:
        connection = await self.client.databases.update(state.id, build_payload(plan))
        return self._apply_echo(plan, state.id, connection)

    async def _delete(self, state: DatabaseState) -> None:
        await self.client.databases.delete(state.id)
