from .base import BaseResource, Diagnostic, ResourceResponse, Severity
from .roles import RoleResource
from .role_permissions import RolePermissionsResource
from .databases import DatabaseResource
from .meta_databases import MetaDatabaseResource
from .datasets import DatasetResource

RESOURCE_TYPES = {
    cls.type_name: cls
    for cls in (
        RoleResource,
        RolePermissionsResource,
        DatabaseResource,
        MetaDatabaseResource,
        DatasetResource,
    )
}

__all__ = [
    "BaseResource",
    "Diagnostic",
    "ResourceResponse",
    "Severity",
    "RoleResource",
    "RolePermissionsResource",
    "DatabaseResource",
    "MetaDatabaseResource",
    "DatasetResource",
    "RESOURCE_TYPES",
]
