"""
Provider entry point: configuration, client construction and type registries.
"""
import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .cache import DatabaseListingCache
from .clients.http import SupersetClient
from .config import ProviderConfig, settings
from .data_sources import DATA_SOURCE_TYPES, BaseDataSource
from .exceptions import ConfigurationError, SupersetProviderError
from .resources import RESOURCE_TYPES, BaseResource, Diagnostic
from .schema import PROVIDER_SCHEMA

logger = logging.getLogger(__name__)

PROVIDER_TYPE_NAME = "superset"

_REQUIRED = (
    ("host", "Superset API Host", "SUPERSET_HOST"),
    ("username", "Superset API Username", "SUPERSET_USERNAME"),
    ("password", "Superset API Password", "SUPERSET_PASSWORD"),
)


class ConfigureResponse(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    client: Optional[SupersetClient] = None
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    @property
    def has_error(self) -> bool:
        return bool(self.diagnostics)


class SupersetProvider:
    """Builds authenticated clients and hands out resources and data sources.

    Every client built by one provider shares the provider's database
    listing cache.
    """

    type_name = PROVIDER_TYPE_NAME
    schema = PROVIDER_SCHEMA

    def __init__(self, database_cache: Optional[DatabaseListingCache] = None, **client_kwargs):
        self.database_cache = database_cache or DatabaseListingCache(ttl=settings.DATABASE_CACHE_TTL)
        self.client_kwargs = client_kwargs
        self.client: Optional[SupersetClient] = None

    @staticmethod
    def resolve(config: ProviderConfig) -> Dict[str, Optional[str]]:
        """Explicit values win over SUPERSET_* environment variables."""
        return {
            "host": config.host or settings.HOST,
            "username": config.username or settings.USERNAME,
            "password": config.password or settings.PASSWORD,
        }

    async def configure(self, config: Optional[ProviderConfig] = None) -> ConfigureResponse:
        config = config or ProviderConfig()
        values = self.resolve(config)

        diagnostics = []
        for name, label, env_var in _REQUIRED:
            if not values[name]:
                diagnostics.append(Diagnostic(
                    summary=f"Missing {label}",
                    detail=(
                        f"The provider cannot create the Superset API client as there is a missing or empty "
                        f"value for the Superset API {name}. Set the {name} value in the configuration or use "
                        f"the {env_var} environment variable."
                    ),
                    attribute=name,
                ))
        if diagnostics:
            return ConfigureResponse(diagnostics=diagnostics)

        client_kwargs = dict(self.client_kwargs)
        client_kwargs.setdefault("verify", settings.VERIFY_SSL if config.verify_ssl is None else config.verify_ssl)
        if config.database_cache_ttl is not None:
            self.database_cache.ttl = config.database_cache_ttl

        client = SupersetClient(
            host=values["host"],
            username=values["username"],
            password=values["password"],
            database_cache=self.database_cache,
            timeout=config.timeout if config.timeout is not None else settings.TIMEOUT,
            **client_kwargs
        )
        try:
            await client.authenticate()
        except SupersetProviderError as e:
            await client.close()
            logger.error(f"Unable to create Superset API client: {e}")
            return ConfigureResponse(diagnostics=[Diagnostic(
                summary="Unable to Create Superset API Client",
                detail=f"An unexpected error occurred when creating the Superset API client: {e}",
            )])

        self.client = client
        logger.info(f"Provider configured for {client.host}")
        return ConfigureResponse(client=client)

    async def close(self):
        if self.client is not None:
            await self.client.close()
            self.client = None

    def _require_client(self) -> SupersetClient:
        if self.client is None:
            raise ConfigurationError("provider is not configured")
        return self.client

    def resources(self) -> Dict[str, BaseResource]:
        client = self._require_client()
        return {name: cls(client) for name, cls in RESOURCE_TYPES.items()}

    def data_sources(self) -> Dict[str, BaseDataSource]:
        client = self._require_client()
        return {name: cls(client) for name, cls in DATA_SOURCE_TYPES.items()}

    def resource(self, type_name: str) -> BaseResource:
        try:
            cls = RESOURCE_TYPES[type_name]
        except KeyError:
            raise ConfigurationError(f"unknown resource type '{type_name}'")
        return cls(self._require_client())

    def data_source(self, type_name: str) -> BaseDataSource:
        try:
            cls = DATA_SOURCE_TYPES[type_name]
        except KeyError:
            raise ConfigurationError(f"unknown data source type '{type_name}'")
        return cls(self._require_client())

