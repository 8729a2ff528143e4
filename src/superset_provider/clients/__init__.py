from .http import SupersetClient

__all__ = [
    "SupersetClient",
]
