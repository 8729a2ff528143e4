import json
from typing import List, Dict, Any, Optional
from pydantic import BaseModel, ConfigDict, Field

META_DATABASE_URI = "superset://"


class BaseEntity(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True)


# ============================================================================
# Response records - decoded once at the client boundary
# ============================================================================
class RoleRecord(BaseEntity):
    id: int
    name: str


class NamedRef(BaseEntity):
    name: str


class PermissionResource(BaseEntity):
    """Entry of the permission/view-menu catalogue."""
    id: int
    permission: NamedRef
    view_menu: NamedRef


class RolePermission(BaseEntity):
    """Permission currently granted to a role."""
    id: int
    permission_name: str
    view_menu_name: str


class DatabaseSummary(BaseEntity):
    """Entry of the database listing endpoint."""
    id: int
    database_name: str
    sqlalchemy_uri: Optional[str] = None
    backend: Optional[str] = None
    extra: Optional[str] = None

    @property
    def is_meta(self) -> bool:
        return self.sqlalchemy_uri == META_DATABASE_URI


class ConnectionParameters(BaseEntity):
    host: Optional[str] = None
    username: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None


class DatabaseConnection(BaseEntity):
    """Result of /database/{id}/connection, also echoed by create and update."""
    id: Optional[int] = None
    database_name: str
    backend: Optional[str] = None
    sqlalchemy_uri: Optional[str] = None
    parameters: Optional[ConnectionParameters] = None
    allow_ctas: Optional[bool] = None
    allow_cvas: Optional[bool] = None
    allow_dml: Optional[bool] = None
    allow_run_async: Optional[bool] = None
    expose_in_sqllab: Optional[bool] = None


class DatabaseRecord(BaseEntity):
    """Result of GET /database/{id}."""
    id: int
    database_name: str
    engine: Optional[str] = None
    configuration_method: Optional[str] = None
    sqlalchemy_uri: Optional[str] = None
    expose_in_sqllab: Optional[bool] = None
    allow_ctas: Optional[bool] = None
    allow_cvas: Optional[bool] = None
    allow_dml: Optional[bool] = None
    allow_run_async: Optional[bool] = None
    extra: Optional[str] = None
    server_cert: Optional[str] = None
    is_managed_externally: Optional[bool] = None
    external_url: Optional[str] = None

    @property
    def allowed_dbs(self) -> List[str]:
        return parse_allowed_dbs(self.extra)


class DatasetDatabaseRef(BaseEntity):
    id: int
    database_name: Optional[str] = None


class Owner(BaseEntity):
    id: int = 0
    first_name: str = ""
    last_name: str = ""


class DatasetRecord(BaseEntity):
    id: int
    table_name: str
    schema_name: Optional[str] = Field(default=None, alias="schema")
    sql: Optional[str] = None
    kind: Optional[str] = None
    database: Optional[DatasetDatabaseRef] = None
    owners: List[Owner] = []


def build_meta_extra(allowed_dbs: List[str]) -> str:
    """Serialize the `extra` document that carries a meta database's allowed list."""
    return json.dumps({
        "metadata_params": {},
        "engine_params": {"allowed_dbs": list(allowed_dbs)},
        "metadata_cache_timeout": {},
        "schemas_allowed_for_csv_upload": [],
    })


def parse_allowed_dbs(extra: Optional[str]) -> List[str]:
    """Read engine_params.allowed_dbs out of an `extra` JSON string.

    A missing or unparsable document yields an empty list; entries that
    are not strings are dropped.
    """
    if not extra:
        return []
    try:
        data = json.loads(extra)
    except ValueError:
        return []
    if not isinstance(data, dict):
        return []
    engine_params = data.get("engine_params")
    if not isinstance(engine_params, dict):
        return []
    allowed = engine_params.get("allowed_dbs")
    if not isinstance(allowed, list):
        return []
    return [db for db in allowed if isinstance(db, str)]


# ============================================================================
# Resource state - what the configuration engine persists
# ============================================================================
class RoleState(BaseEntity):
    id: Optional[int] = None
    name: Optional[str] = None
    last_updated: Optional[str] = None


class ResourcePermission(BaseEntity):
    id: Optional[int] = None
    permission: str
    view_menu: str


class RolePermissionsState(BaseEntity):
    id: Optional[str] = None
    role_name: Optional[str] = None
    resource_permissions: List[ResourcePermission] = []
    last_updated: Optional[str] = None


class DatabaseState(BaseEntity):
    id: Optional[int] = None
    connection_name: Optional[str] = None
    db_engine: Optional[str] = None
    db_user: Optional[str] = None
    db_pass: Optional[str] = None
    db_host: Optional[str] = None
    db_port: Optional[int] = None
    db_name: Optional[str] = None
    allow_ctas: Optional[bool] = None
    allow_cvas: Optional[bool] = None
    allow_dml: Optional[bool] = None
    allow_run_async: Optional[bool] = None
    expose_in_sqllab: Optional[bool] = None


class MetaDatabaseState(BaseEntity):
    id: Optional[int] = None
    database_name: Optional[str] = None
    sqlalchemy_uri: Optional[str] = None
    allowed_databases: Optional[List[str]] = None
    expose_in_sqllab: Optional[bool] = None
    allow_ctas: Optional[bool] = None
    allow_cvas: Optional[bool] = None
    allow_dml: Optional[bool] = None
    allow_run_async: Optional[bool] = None
    is_managed_externally: Optional[bool] = None


class DatasetState(BaseEntity):
    id: Optional[int] = None
    table_name: Optional[str] = None
    database_name: Optional[str] = None
    schema_name: Optional[str] = Field(default=None, alias="schema")
    sql: Optional[str] = None


# ============================================================================
# Data source state
# ============================================================================
class RoleItem(BaseEntity):
    id: int
    name: str


class RolesDataSourceState(BaseEntity):
    roles: List[RoleItem] = []


class PermissionItem(BaseEntity):
    id: int
    permission_name: str
    view_menu_name: str


class RolePermissionsDataSourceState(BaseEntity):
    role_name: str
    permissions: List[PermissionItem] = []


class DatabaseInfo(BaseEntity):
    id: int
    database_name: str
    schemas: List[str] = []
    sqlalchemy_uri: str


class DatabasesDataSourceState(BaseEntity):
    databases: List[DatabaseInfo] = []


class DatasetItem(BaseEntity):
    id: int
    table_name: str
    database_id: int
    database_name: str
    schema_name: str = Field(default="", alias="schema")
    sql: str = ""
    kind: str = ""
    owners: List[Owner] = []


class DatasetsDataSourceState(BaseEntity):
    datasets: List[DatasetItem] = []


def dump_state(state: BaseModel) -> Dict[str, Any]:
    """Serialize a state model with its wire attribute names."""
    return state.model_dump(by_alias=True)
