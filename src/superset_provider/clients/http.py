import httpx
import logging
from typing import Optional, Dict, Any, Tuple
from contextlib import asynccontextmanager

from ..cache import DatabaseListingCache
from ..exceptions import AuthenticationError, NotFoundError, ShapeError, TransportError

from ..managers.roles import RoleManager
from ..managers.permissions import PermissionManager
from ..managers.databases import DatabaseManager
from ..managers.datasets import DatasetManager
from ..lookup import LookupService

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class SupersetClient:
    """HTTP client for the Superset REST API.

    Holds the bearer token and the session cookie jar for its lifetime.
    The database listing cache is injected so every client built by one
    provider shares the same snapshot.
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        database_cache: Optional[DatabaseListingCache] = None,
        timeout: float = 30.0,
        **client_kwargs
    ):
        if not host:
            raise ValueError("host is required")
        self.host = host.rstrip('/')
        self.base_url = f"{self.host}{API_PREFIX}"
        self.username = username
        self.password = password
        self.timeout = timeout
        self.client_kwargs = client_kwargs
        self._client: Optional[httpx.AsyncClient] = None
        self.token: Optional[str] = None

        self.database_cache = database_cache if database_cache is not None else DatabaseListingCache()

        # Initialize Managers
        self.roles = RoleManager(self)
        self.permissions = PermissionManager(self)
        self.databases = DatabaseManager(self)
        self.datasets = DatasetManager(self)

        self.lookup = LookupService(self, self.database_cache)

        logger.info(f"SupersetClient initialized for {self.host}")

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                **self.client_kwargs
            )
        return self._client

    @asynccontextmanager
    async def connect(self):
        self._ensure_client()
        try:
            await self.authenticate()
            yield self
        finally:
            await self.close()

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def authenticate(self) -> Tuple[str, Dict[str, str]]:
        """Log in with username/password and keep the bearer token and session cookies."""
        client = self._ensure_client()
        payload = {
            "username": self.username,
            "password": self.password,
            "provider": "db",
        }
        response = await client.post("/security/login", json=payload)
        if response.status_code != 200:
            raise AuthenticationError(
                f"failed to authenticate with Superset, status code: {response.status_code}"
            )
        data = self._decode_json(response)
        token = data.get("access_token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise ShapeError("failed to retrieve access token from response")

        self.set_token(token)
        logger.info(f"Authenticated against {self.host} as {self.username}")
        return token, dict(response.cookies)

    def set_token(self, token: str):
        self.token = token
        if self._client:
            self._client.headers["Authorization"] = f"Bearer {token}"

    async def get_csrf_token(self) -> Tuple[str, Dict[str, str]]:
        """Fetch a CSRF token; the session cookie it belongs to lands in the client's jar."""
        client = self._ensure_client()
        response = await client.get("/security/csrf_token/", headers={"Referer": self.host})
        data = self._handle_response(response)
        token = data.get("result") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise ShapeError("failed to retrieve CSRF token from response")
        return token, dict(response.cookies)

    async def request(self, method: str, path: str, json: Any = None, csrf: bool = False) -> Any:
        """Internal request helper."""
        if self.token is None:
            await self.authenticate()
        client = self._ensure_client()

        headers = {}
        if csrf:
            csrf_token, _ = await self.get_csrf_token()
            headers["X-CSRFToken"] = csrf_token
            headers["Referer"] = self.host

        logger.debug(f"{method} {path}")
        response = await client.request(method, path, json=json, headers=headers)
        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        if response.status_code == 401:
            raise AuthenticationError("Invalid or expired token")

        if response.is_error:
            detail = response.text
            try:
                data = response.json()
                if isinstance(data, dict):
                    detail = data.get("message", response.text)
            except ValueError:
                pass
            if response.status_code == 404:
                raise NotFoundError(str(detail), body=response.text)
            raise TransportError(response.status_code, str(detail), body=response.text)

        return self._decode_json(response)

    @staticmethod
    def _decode_json(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ShapeError(f"response from {response.request.url} is not valid JSON: {e}")
