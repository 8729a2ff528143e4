from typing import TYPE_CHECKING, List, Dict, Any, Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError

from ..exceptions import ShapeError

if TYPE_CHECKING:
    from ..clients.http import SupersetClient

# Listing endpoints are read in one page
PAGE_QUERY = "q=(page_size:5000)"

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseManager:
    def __init__(self, client: "SupersetClient"):
        self.client = client

    @staticmethod
    def _decode(model: Type[ModelT], data: Any) -> ModelT:
        """Validate a JSON object into `model`, raising ShapeError on mismatch."""
        if not isinstance(data, dict):
            raise ShapeError(f"expected a JSON object for {model.__name__}, got {type(data).__name__}")
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise ShapeError(f"unexpected {model.__name__} shape: {e}") from e

    @classmethod
    def _decode_result(cls, model: Type[ModelT], response: Any) -> ModelT:
        """Decode the `result` object of an envelope, filling `id` from the envelope."""
        if not isinstance(response, dict) or not isinstance(response.get("result"), dict):
            raise ShapeError("The response from the API does not contain the expected 'result' field")
        data = dict(response["result"])
        if "id" not in data and "id" in response:
            data["id"] = response["id"]
        return cls._decode(model, data)

    @classmethod
    def _decode_list(cls, model: Type[ModelT], response: Any) -> List[ModelT]:
        """Decode the `result` array of a listing envelope."""
        if not isinstance(response, dict) or not isinstance(response.get("result"), list):
            raise ShapeError("The response from the API does not contain the expected 'result' list")
        return [cls._decode(model, item) for item in response["result"]]

    @staticmethod
    def _created_id(response: Any) -> int:
        """Extract the ID a create endpoint assigned."""
        if isinstance(response, dict):
            created = response.get("id")
            if isinstance(created, (int, float)) and not isinstance(created, bool):
                return int(created)
        raise ShapeError("failed to retrieve ID from create response")

    async def _get(self, path: str) -> Any:
        """
        Execute a GET request.

        Args:
            path: The API path.

        Returns:
            The JSON response.
        """
        return await self.client.request("GET", path)

    async def _post(self, path: str, json: Optional[Dict[str, Any]] = None, csrf: bool = False) -> Any:
        """
        Execute a POST request.

        Args:
            path: The API path.
            json: Optional JSON body.
            csrf: Send a CSRF token with the request.

        Returns:
            The JSON response.
        """
        return await self.client.request("POST", path, json=json, csrf=csrf)

    async def _put(self, path: str, json: Optional[Dict[str, Any]] = None, csrf: bool = False) -> Any:
        """
        Execute a PUT request.

        Args:
            path: The API path.
            json: Optional JSON body.
            csrf: Send a CSRF token with the request.

        Returns:
            The JSON response.
        """
        return await self.client.request("PUT", path, json=json, csrf=csrf)

    async def _delete(self, path: str, csrf: bool = False) -> Any:
        """
        Execute a DELETE request.

        Args:
            path: The API path.
            csrf: Send a CSRF token with the request.

        Returns:
            The JSON response.
        """
        return await self.client.request("DELETE", path, csrf=csrf)
