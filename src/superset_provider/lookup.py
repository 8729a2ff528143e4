import logging
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar, Callable, TYPE_CHECKING

from .cache import DatabaseListingCache
from .exceptions import AmbiguousNameError, ConfigurationError, NotFoundError
from .models import DatabaseRecord, DatabaseSummary, META_DATABASE_URI

if TYPE_CHECKING:
    from .clients.http import SupersetClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _single_match(kind: str, name: str, items: Iterable[T], predicate: Callable[[T], bool]) -> T:
    """Return the one item matching `predicate`; zero or several matches raise."""
    matches = [item for item in items if predicate(item)]
    if not matches:
        raise NotFoundError(f"{kind} {name} not found")
    if len(matches) > 1:
        raise AmbiguousNameError(kind, name, [getattr(m, "id", None) for m in matches])
    return matches[0]


class LookupService:
    """Resolves human-readable names to remote IDs by scanning listings.

    Database lookups go through the shared listing cache; roles and the
    permission catalogue are fetched on every call.
    """

    def __init__(self, client: "SupersetClient", database_cache: DatabaseListingCache):
        self.client = client
        self.database_cache = database_cache

    async def get_role_id(self, name: str) -> int:
        """Resolve Role Name to ID."""
        if not name:
            raise ConfigurationError("role name is required")
        roles = await self.client.roles.list()
        role = _single_match("role", name, roles, lambda r: r.name == name)
        return role.id

    async def get_permission_id(self, permission: str, view_menu: str) -> int:
        """Resolve a (permission, view menu) pair to its permission-view ID."""
        catalogue = await self.client.permissions.list_resources()
        return self._match_permission(catalogue, permission, view_menu)

    async def get_permission_ids(self, pairs: Sequence[Tuple[str, str]]) -> List[int]:
        """
        Resolve every (permission, view menu) pair against one catalogue fetch.

        Returns:
            One ID per pair, in input order. Duplicates are kept so callers
            can line IDs up with their pairs.
        """
        if not pairs:
            return []
        catalogue = await self.client.permissions.list_resources()
        return [self._match_permission(catalogue, permission, view_menu) for permission, view_menu in pairs]

    @staticmethod
    def _match_permission(catalogue, permission: str, view_menu: str) -> int:
        resource = _single_match(
            "permission",
            f"{permission} with view menu {view_menu}",
            catalogue,
            lambda r: r.permission.name == permission and r.view_menu.name == view_menu,
        )
        return resource.id

    async def get_databases(self) -> List[DatabaseSummary]:
        """Full database listing, served from the shared cache when fresh."""
        return await self.database_cache.get_databases(self.client.databases.list)

    async def get_database_id(self, name: str) -> int:
        """Resolve Database Name to ID using the cached listing."""
        if not name:
            raise ConfigurationError("database name is required")
        databases = await self.get_databases()
        database = _single_match("database", f"'{name}'", databases, lambda d: d.database_name == name)
        return database.id

    async def get_database_name(self, database_id: int) -> str:
        """Resolve Database ID to its name using the cached listing."""
        databases = await self.get_databases()
        for database in databases:
            if database.id == database_id:
                return database.database_name
        raise NotFoundError(f"database with ID {database_id} not found")

    async def get_meta_database(self, database_id: int) -> DatabaseRecord:
        """
        Fetch a meta database by ID.

        The single-item endpoint of some Superset versions omits `extra`;
        in that case it is taken from the listing entry with the same ID.
        """
        record = await self.client.databases.get(database_id)
        if not record.extra:
            for database in await self.get_databases():
                if database.id == database_id:
                    if database.extra:
                        logger.debug(f"Using 'extra' of database {database_id} from the listing endpoint")
                        record = record.model_copy(update={"extra": database.extra})
                    break
        return record

    async def find_meta_database(self, name: str) -> Optional[DatabaseRecord]:
        """
        Find a meta database by name and the superset:// connection marker.

        Returns:
            The meta database, or None when no such connection exists.
        """
        databases = await self.get_databases()
        try:
            match = _single_match(
                "meta database",
                f"'{name}'",
                databases,
                lambda d: d.database_name == name and d.sqlalchemy_uri == META_DATABASE_URI,
            )
        except NotFoundError:
            return None
        return await self.get_meta_database(match.id)
