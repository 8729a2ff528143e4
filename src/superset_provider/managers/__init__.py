from .roles import RoleManager
from .permissions import PermissionManager
from .databases import DatabaseManager
from .datasets import DatasetManager

__all__ = [
    "RoleManager",
    "PermissionManager",
    "DatabaseManager",
    "DatasetManager",
]
