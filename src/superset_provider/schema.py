"""
Attribute declarations consumed by the configuration engine.
"""
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field

AttributeType = Literal["string", "int", "bool", "list", "object_list"]


class Attribute(BaseModel):
    type: AttributeType
    description: str = ""
    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False
    force_new: bool = False
    default: Optional[Any] = None
    nested: Optional[Dict[str, "Attribute"]] = None


class Schema(BaseModel):
    description: str
    attributes: Dict[str, Attribute] = Field(default_factory=dict)

    def required_attributes(self) -> List[str]:
        return [name for name, attr in self.attributes.items() if attr.required]

    def sensitive_attributes(self) -> List[str]:
        return [name for name, attr in self.attributes.items() if attr.sensitive]


def _id(description: str, kind: AttributeType = "int") -> Attribute:
    return Attribute(type=kind, description=description, computed=True)


PROVIDER_SCHEMA = Schema(
    description="Superset provider for managing Superset resources.",
    attributes={
        "host": Attribute(
            type="string",
            optional=True,
            description="The URL of the Superset instance, including the protocol. Example: 'https://superset.example.com'.",
        ),
        "username": Attribute(
            type="string",
            optional=True,
            description="The username to authenticate with Superset.",
        ),
        "password": Attribute(
            type="string",
            optional=True,
            sensitive=True,
            description="The password to authenticate with Superset.",
        ),
    },
)

ROLE_SCHEMA = Schema(
    description="Manages a role in Superset.",
    attributes={
        "id": _id("Numeric identifier of the role."),
        "name": Attribute(type="string", required=True, description="Name of the role."),
        "last_updated": Attribute(type="string", computed=True, description="Timestamp of the last update."),
    },
)

ROLE_PERMISSIONS_SCHEMA = Schema(
    description="Manages the permissions associated with a role in Superset.",
    attributes={
        "id": _id("The role ID the permission set belongs to.", kind="string"),
        "last_updated": Attribute(type="string", computed=True, description="Timestamp of the last update."),
        "role_name": Attribute(type="string", required=True, description="Name of the role the permissions are assigned to."),
        "resource_permissions": Attribute(
            type="object_list",
            required=True,
            description="Permissions granted to the role.",
            nested={
                "id": _id("Identifier of the permission/view-menu pair."),
                "permission": Attribute(type="string", required=True, description="Name of the permission."),
                "view_menu": Attribute(type="string", required=True, description="Name of the view menu."),
            },
        ),
    },
)

DATABASE_SCHEMA = Schema(
    description="Manages a database connection in Superset.",
    attributes={
        "id": _id("Numeric identifier of the database connection."),
        "connection_name": Attribute(type="string", required=True, description="Name of the database connection."),
        "db_engine": Attribute(type="string", required=True, description="Database engine (e.g., postgresql, mysql)."),
        "db_user": Attribute(type="string", required=True, description="Database username."),
        "db_pass": Attribute(type="string", required=True, sensitive=True, description="Database password."),
        "db_host": Attribute(type="string", required=True, description="Database host."),
        "db_port": Attribute(type="int", required=True, description="Database port."),
        "db_name": Attribute(type="string", required=True, description="Database name."),
        "allow_ctas": Attribute(type="bool", required=True, description="Allow CTAS."),
        "allow_cvas": Attribute(type="bool", required=True, description="Allow CVAS."),
        "allow_dml": Attribute(type="bool", required=True, description="Allow DML."),
        "allow_run_async": Attribute(type="bool", required=True, description="Allow run async."),
        "expose_in_sqllab": Attribute(type="bool", required=True, description="Expose in SQL Lab."),
    },
)

META_DATABASE_SCHEMA = Schema(
    description="Manages a meta database connection in Superset for cross-database queries.",
    attributes={
        "id": _id("Numeric identifier of the meta database connection."),
        "database_name": Attribute(type="string", required=True, description="Name of the meta database connection."),
        "sqlalchemy_uri": Attribute(
            type="string", optional=True, computed=True, default="superset://",
            description="SQLAlchemy URI for the meta database connection.",
        ),
        "allowed_databases": Attribute(
            type="list", required=True,
            description="Database names that can be accessed through this meta connection.",
        ),
        "expose_in_sqllab": Attribute(type="bool", optional=True, computed=True, default=True,
                                      description="Whether to expose this connection in SQL Lab."),
        "allow_ctas": Attribute(type="bool", optional=True, computed=True, default=False,
                                description="Allow CREATE TABLE AS queries."),
        "allow_cvas": Attribute(type="bool", optional=True, computed=True, default=False,
                                description="Allow CREATE VIEW AS queries."),
        "allow_dml": Attribute(type="bool", optional=True, computed=True, default=False,
                               description="Allow DML queries (INSERT, UPDATE, DELETE)."),
        "allow_run_async": Attribute(type="bool", optional=True, computed=True, default=True,
                                     description="Allow asynchronous query execution."),
        "is_managed_externally": Attribute(type="bool", optional=True, computed=True, default=False,
                                           description="Whether this connection is managed externally."),
    },
)

DATASET_SCHEMA = Schema(
    description="Manages a dataset in Superset.",
    attributes={
        "id": _id("Numeric identifier of the dataset."),
        "table_name": Attribute(type="string", required=True, description="Name of the table or dataset."),
        "database_name": Attribute(
            type="string", required=True, force_new=True,
            description="Name of the database where the dataset resides. Cannot be changed after creation.",
        ),
        "schema": Attribute(type="string", optional=True, description="Database schema name."),
        "sql": Attribute(type="string", optional=True, description="SQL query for SQL-based datasets."),
    },
)

ROLES_DATA_SOURCE_SCHEMA = Schema(
    description="Fetches the list of roles from Superset.",
    attributes={
        "roles": Attribute(type="object_list", computed=True, description="List of roles.", nested={
            "id": _id("Numeric identifier of the role."),
            "name": Attribute(type="string", computed=True, description="Name of the role."),
        }),
    },
)

ROLE_PERMISSIONS_DATA_SOURCE_SCHEMA = Schema(
    description="Fetches the permissions for a role from Superset.",
    attributes={
        "role_name": Attribute(type="string", required=True, description="Name of the role."),
        "permissions": Attribute(type="object_list", computed=True, description="Permissions of the role.", nested={
            "id": _id("Identifier of the permission/view-menu pair."),
            "permission_name": Attribute(type="string", computed=True, description="Name of the permission."),
            "view_menu_name": Attribute(type="string", computed=True, description="Name of the view menu."),
        }),
    },
)

DATABASES_DATA_SOURCE_SCHEMA = Schema(
    description="Fetches the list of databases from Superset.",
    attributes={
        "databases": Attribute(type="object_list", computed=True, description="List of databases.", nested={
            "id": _id("Numeric identifier of the database."),
            "database_name": Attribute(type="string", computed=True, description="Name of the database."),
            "schemas": Attribute(type="list", computed=True, description="Schemas of the database."),
            "sqlalchemy_uri": Attribute(type="string", computed=True, description="SQLAlchemy URI of the database."),
        }),
    },
)

DATASETS_DATA_SOURCE_SCHEMA = Schema(
    description="Fetches all datasets from Superset.",
    attributes={
        "datasets": Attribute(type="object_list", computed=True, description="List of Superset datasets.", nested={
            "id": _id("Dataset ID."),
            "table_name": Attribute(type="string", computed=True, description="Name of the table."),
            "database_id": Attribute(type="int", computed=True, description="Database ID to which the dataset belongs."),
            "database_name": Attribute(type="string", computed=True, description="Database name to which the dataset belongs."),
            "schema": Attribute(type="string", computed=True, description="Schema of the dataset."),
            "sql": Attribute(type="string", computed=True, description="SQL query of the dataset."),
            "kind": Attribute(type="string", computed=True, description="Kind of the dataset."),
            "owners": Attribute(type="object_list", computed=True, description="Owners of the dataset.", nested={
                "id": _id("Owner ID."),
                "first_name": Attribute(type="string", computed=True, description="First name of the owner."),
                "last_name": Attribute(type="string", computed=True, description="Last name of the owner."),
            }),
        }),
    },
)
