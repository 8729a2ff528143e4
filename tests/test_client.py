"""Tests for the HTTP transport: login, CSRF and error mapping."""

import httpx
import pytest

from superset_provider.cache import DatabaseListingCache
from superset_provider.clients.http import SupersetClient
from superset_provider.exceptions import (
    AuthenticationError, NotFoundError, ShapeError, TransportError,
)

from conftest import HOST


class TestAuthentication:
    """Tests for the login flow."""

    @pytest.mark.asyncio
    async def test_authenticate_sets_bearer_token(self, client, fake):
        token, _ = await client.authenticate()

        assert token == "token-123"
        assert client.token == "token-123"
        login = fake.requests_to("POST", "/security/login")[0]
        assert login["json"] == {"username": "admin", "password": "secret", "provider": "db"}

        await client.roles.list()
        listing = fake.requests_to("GET", "/security/roles")[0]
        assert listing["headers"]["Authorization"] == "Bearer token-123"

    @pytest.mark.asyncio
    async def test_bad_credentials_raise(self, transport):
        client = SupersetClient(HOST, "admin", "wrong", transport=transport)
        try:
            with pytest.raises(AuthenticationError):
                await client.authenticate()
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_missing_access_token_is_shape_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"refresh_token": "x"}))
        client = SupersetClient(HOST, "admin", "secret", transport=transport)
        try:
            with pytest.raises(ShapeError):
                await client.authenticate()
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_request_logs_in_lazily(self, client, fake):
        await client.roles.list()
        assert fake.count("POST", "/security/login") == 1

    @pytest.mark.asyncio
    async def test_connect_context_authenticates_and_closes(self, transport, fake):
        client = SupersetClient(HOST, "admin", "secret", transport=transport)
        async with client.connect() as connected:
            assert connected.token == "token-123"
        assert client._client is None

    def test_host_required(self):
        with pytest.raises(ValueError):
            SupersetClient("", "admin", "secret")

    def test_base_url_appends_api_prefix(self):
        client = SupersetClient("https://superset.example.com/", "admin", "secret")
        assert client.base_url == "https://superset.example.com/api/v1"


class TestCsrf:
    """Tests for CSRF-protected mutations."""

    @pytest.mark.asyncio
    async def test_csrf_token_is_fetched(self, client):
        token, cookies = await client.get_csrf_token()
        assert token == "csrf-abc"
        assert cookies.get("session") == "s1"

    @pytest.mark.asyncio
    async def test_database_mutation_carries_csrf_headers(self, client, fake):
        await client.databases.delete(1)

        delete = fake.requests_to("DELETE", "/database/1")[0]
        assert delete["headers"]["X-CSRFToken"] == "csrf-abc"
        assert delete["headers"]["Referer"] == HOST
        assert fake.count("GET", "/security/csrf_token") == 1

    @pytest.mark.asyncio
    async def test_dataset_mutation_skips_csrf(self, client, fake):
        fake.add_dataset(7, "t1", 1)
        await client.datasets.delete(7)

        assert fake.count("GET", "/security/csrf_token") == 0
        assert "X-CSRFToken" not in fake.requests_to("DELETE", "/dataset/7")[0]["headers"]


class TestErrorMapping:
    """Tests for status code and body handling."""

    @pytest.mark.asyncio
    async def test_404_raises_not_found(self, client):
        with pytest.raises(NotFoundError) as exc:
            await client.roles.get(999)
        assert exc.value.status_code == 404

    @pytest.mark.asyncio
    async def test_error_status_carries_message(self, client):
        with pytest.raises(TransportError) as exc:
            await client.datasets.create({"table_name": "t1", "database": 999})
        assert exc.value.status_code == 422
        assert "Database does not exist" in str(exc.value)

    @pytest.mark.asyncio
    async def test_invalid_json_raises_shape_error(self):
        def handler(request):
            if request.url.path.endswith("/security/login"):
                return httpx.Response(200, json={"access_token": "t"})
            return httpx.Response(200, content=b"<html>oops</html>")

        client = SupersetClient(HOST, "admin", "secret", transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(ShapeError):
                await client.roles.list()
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_unexpected_listing_shape_raises(self):
        def handler(request):
            if request.url.path.endswith("/security/login"):
                return httpx.Response(200, json={"access_token": "t"})
            return httpx.Response(200, json={"result": [{"id": "not-a-number", "name": "Admin"}]})

        client = SupersetClient(HOST, "admin", "secret", transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(ShapeError):
                await client.roles.list()
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_mutation_invalidates_listing_cache(self, fake, transport):
        cache = DatabaseListingCache()
        client = SupersetClient(HOST, "admin", "secret", database_cache=cache, transport=transport)
        try:
            await client.lookup.get_databases()
            await client.databases.delete(2)
            databases = await client.lookup.get_databases()
        finally:
            await client.close()

        assert [d.id for d in databases] == [1]
        assert fake.count("GET", "/database") == 2
