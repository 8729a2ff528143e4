from typing import Optional


class SupersetProviderError(Exception):
    """Base exception for the Superset provider"""
    pass

class ConfigurationError(SupersetProviderError):
    """Raised when the provider configuration is incomplete or invalid"""
    pass

class AuthenticationError(SupersetProviderError):
    """Raised when authentication fails"""
    pass

class ShapeError(SupersetProviderError):
    """Raised when a response body does not have the expected structure"""
    pass

class TransportError(SupersetProviderError):
    """Raised when the API returns an error status"""
    def __init__(self, status_code: int, message: str, body: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.body = body
        super().__init__(f"API Error {status_code}: {message}")

class NotFoundError(TransportError):
    """Raised on a 404 or when a name cannot be resolved to an ID"""
    def __init__(self, message: str, body: Optional[str] = None):
        super().__init__(404, message, body=body)

class AmbiguousNameError(SupersetProviderError):
    """Raised when a name matches more than one remote entity"""
    def __init__(self, kind: str, name: str, ids: list):
        self.kind = kind
        self.name = name
        self.ids = ids
        super().__init__(f"{kind} name '{name}' is ambiguous, matches IDs {ids}")
