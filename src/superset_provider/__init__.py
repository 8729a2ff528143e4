from .clients import SupersetClient
from .cache import DatabaseListingCache
from .exceptions import (
    SupersetProviderError,
    ConfigurationError,
    AuthenticationError,
    TransportError,
    NotFoundError,
    AmbiguousNameError,
    ShapeError,
)
from .lookup import LookupService
from .provider import SupersetProvider
from .resources import (
    RoleResource,
    RolePermissionsResource,
    DatabaseResource,
    MetaDatabaseResource,
    DatasetResource,
    RESOURCE_TYPES,
)
from .data_sources import (
    RolesDataSource,
    RolePermissionsDataSource,
    DatabasesDataSource,
    DatasetsDataSource,
    DATA_SOURCE_TYPES,
)

__all__ = [
    "SupersetClient",
    "DatabaseListingCache",
    "SupersetProviderError",
    "ConfigurationError",
    "AuthenticationError",
    "TransportError",
    "NotFoundError",
    "AmbiguousNameError",
    "ShapeError",
    "LookupService",
    "SupersetProvider",
    "RoleResource",
    "RolePermissionsResource",
    "DatabaseResource",
    "MetaDatabaseResource",
    "DatasetResource",
    "RESOURCE_TYPES",
    "RolesDataSource",
    "RolePermissionsDataSource",
    "DatabasesDataSource",
    "DatasetsDataSource",
    "DATA_SOURCE_TYPES",
]
