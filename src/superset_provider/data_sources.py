"""
Read-only data sources exposing Superset listings to the configuration engine.
"""
import logging
from typing import Any, List, Optional, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ShapeError, SupersetProviderError
from .models import (
    DatabaseInfo, DatabasesDataSourceState, DatasetItem, DatasetsDataSourceState,
    PermissionItem, RoleItem, RolePermissionsDataSourceState, RolesDataSourceState,
)
from .resources.base import Diagnostic, Severity
from .schema import (
    DATABASES_DATA_SOURCE_SCHEMA, DATASETS_DATA_SOURCE_SCHEMA,
    ROLE_PERMISSIONS_DATA_SOURCE_SCHEMA, ROLES_DATA_SOURCE_SCHEMA, Schema,
)

if TYPE_CHECKING:
    from .clients.http import SupersetClient

logger = logging.getLogger(__name__)

# Enrichment issues two requests per database
DATABASE_INFO_LIMIT = 100


class DataSourceResponse(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    state: Optional[Any] = None
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    @property
    def has_error(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)


class BaseDataSource:
    type_name: str
    display_name: str
    schema: Schema

    def __init__(self, client: "SupersetClient"):
        self.client = client

    async def read(self, config: Optional[dict] = None) -> DataSourceResponse:
        try:
            state = await self._read(config or {})
        except SupersetProviderError as e:
            summary = f"Unable to Read {self.display_name}"
            logger.error(f"{summary}: {e}")
            return DataSourceResponse(diagnostics=[Diagnostic(summary=summary, detail=str(e))])
        return DataSourceResponse(state=state)

    async def _read(self, config: dict):
        raise NotImplementedError


class RolesDataSource(BaseDataSource):
    type_name = "superset_roles"
    display_name = "Superset Roles"
    schema = ROLES_DATA_SOURCE_SCHEMA

    async def _read(self, config: dict) -> RolesDataSourceState:
        roles = await self.client.roles.list()
        return RolesDataSourceState(roles=[RoleItem(id=r.id, name=r.name) for r in roles])


class RolePermissionsDataSource(BaseDataSource):
    type_name = "superset_role_permissions"
    display_name = "Superset Role Permissions"
    schema = ROLE_PERMISSIONS_DATA_SOURCE_SCHEMA

    async def read(self, config: Optional[dict] = None) -> DataSourceResponse:
        if not (config or {}).get("role_name"):
            return DataSourceResponse(diagnostics=[Diagnostic(
                summary="Missing role_name",
                detail="The attribute 'role_name' is required for superset_role_permissions",
                attribute="role_name",
            )])
        return await super().read(config)

    async def _read(self, config: dict) -> RolePermissionsDataSourceState:
        role_name = config["role_name"]
        role_id = await self.client.lookup.get_role_id(role_name)
        permissions = await self.client.permissions.list_for_role(role_id)
        return RolePermissionsDataSourceState(
            role_name=role_name,
            permissions=[
                PermissionItem(id=p.id, permission_name=p.permission_name, view_menu_name=p.view_menu_name)
                for p in permissions
            ],
        )


class DatabasesDataSource(BaseDataSource):
    type_name = "superset_databases"
    display_name = "Superset Databases"
    schema = DATABASES_DATA_SOURCE_SCHEMA

    async def _read(self, config: dict) -> DatabasesDataSourceState:
        databases = await self.client.lookup.get_databases()
        infos = []
        for database in databases[:DATABASE_INFO_LIMIT]:
            connection = await self.client.databases.get_connection(database.id)
            schemas = await self.client.databases.get_schemas(database.id)
            infos.append(DatabaseInfo(
                id=database.id,
                database_name=connection.database_name or "Name not provided",
                schemas=schemas,
                sqlalchemy_uri=connection.sqlalchemy_uri or "URI not provided",
            ))
        logger.debug(f"Collected infos for {len(infos)} of {len(databases)} databases")
        return DatabasesDataSourceState(databases=infos)


class DatasetsDataSource(BaseDataSource):
    type_name = "superset_datasets"
    display_name = "Superset Datasets"
    schema = DATASETS_DATA_SOURCE_SCHEMA

    async def _read(self, config: dict) -> DatasetsDataSourceState:
        datasets = await self.client.datasets.list()
        items = []
        for ds in datasets:
            if ds.database is None or ds.database.database_name is None:
                raise ShapeError(
                    f"Missing or invalid 'database' field for dataset {ds.id} in the API response"
                )
            items.append(DatasetItem(
                id=ds.id,
                table_name=ds.table_name,
                database_id=ds.database.id,
                database_name=ds.database.database_name,
                schema_name=ds.schema_name or "",
                sql=ds.sql or "",
                kind=ds.kind or "",
                owners=ds.owners,
            ))
        logger.debug(f"Fetched {len(items)} datasets")
        return DatasetsDataSourceState(datasets=items)


DATA_SOURCE_TYPES = {
    cls.type_name: cls
    for cls in (RolesDataSource, RolePermissionsDataSource, DatabasesDataSource, DatasetsDataSource)
}
