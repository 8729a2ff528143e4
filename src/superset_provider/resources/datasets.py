import logging
from typing import Any, Dict, Optional

from ..exceptions import NotFoundError
from ..models import DatasetState
from ..schema import DATASET_SCHEMA
from .base import BaseResource, Diagnostic, ResourceResponse, prefer

logger = logging.getLogger(__name__)


def _optional_fields(plan: DatasetState) -> Dict[str, Any]:
    fields = {}
    if plan.schema_name:
        fields["schema"] = plan.schema_name
    if plan.sql:
        fields["sql"] = plan.sql
    return fields


class DatasetResource(BaseResource[DatasetState]):
    """A dataset bound to a database by name.

    The database is fixed at creation; update payloads never carry it.
    """

    type_name = "superset_dataset"
    display_name = "Superset Dataset"
    schema = DATASET_SCHEMA
    state_model = DatasetState

    async def update(self, plan: DatasetState, state: DatasetState) -> ResourceResponse:
        if state.database_name and plan.database_name != state.database_name:
            return ResourceResponse(state=state, diagnostics=[Diagnostic(
                summary="Unable to Update Superset Dataset",
                detail=(
                    f"database_name cannot be changed from '{state.database_name}' to "
                    f"'{plan.database_name}' in place; the dataset must be replaced"
                ),
                attribute="database_name",
            )])
        return await super().update(plan, state)

    async def _create(self, plan: DatasetState) -> DatasetState:
        database_id = await self.client.lookup.get_database_id(plan.database_name)
        payload = {"table_name": plan.table_name, "database": database_id, **_optional_fields(plan)}
        dataset_id = await self.client.datasets.create(payload)
        return plan.model_copy(update={"id": dataset_id})

    async def _read(self, state: DatasetState) -> Optional[DatasetState]:
        try:
            dataset = await self.client.datasets.get(state.id)
        except NotFoundError:
            return None

        update: Dict[str, Any] = {
            "id": dataset.id,
            "table_name": dataset.table_name,
            "schema_name": prefer(dataset.schema_name, state.schema_name),
            "sql": prefer(dataset.sql, state.sql),
        }
        if dataset.database is not None:
            update["database_name"] = (
                dataset.database.database_name
                or await self.client.lookup.get_database_name(dataset.database.id)
            )
        return state.model_copy(update=update)

    async def _update(self, plan: DatasetState, state: DatasetState) -> DatasetState:
        payload = {"table_name": plan.table_name, **_optional_fields(plan)}
        await self.client.datasets.update(state.id, payload)
        return plan.model_copy(update={"id": state.id, "database_name": state.database_name or plan.database_name})

    async def _delete(self, state: DatasetState) -> None:
        await self.client.datasets.delete(state.id)
