"""
Configuration schema definitions using Pydantic.

Defines the YAML configuration structure read by the CLI.
"""

from typing import Dict, Any, List, Optional
from pydantic import BaseModel, Field
import os
import re


def expand_env_vars(value: str) -> str:
    """Expand ${VAR} patterns in string with environment variable values."""
    pattern = r'\$\{([^}]+)\}'

    def replacer(match):
        var_name = match.group(1)
        return os.environ.get(var_name, match.group(0))

    return re.sub(pattern, replacer, value)


class ProviderConfig(BaseModel):
    """Provider block. Missing values fall back to SUPERSET_* variables."""
    host: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: Optional[float] = None
    verify_ssl: Optional[bool] = None
    database_cache_ttl: Optional[float] = None

    def model_post_init(self, __context):
        """Expand environment variables in credentials."""
        if self.username:
            object.__setattr__(self, 'username', expand_env_vars(self.username))
        if self.password:
            object.__setattr__(self, 'password', expand_env_vars(self.password))


class ResourceDeclaration(BaseModel):
    """A declared resource: its type name and attribute values."""
    type: str
    name: str
    values: Dict[str, Any] = Field(default_factory=dict)


class ProviderFile(BaseModel):
    """Root configuration document."""
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    resources: List[ResourceDeclaration] = Field(default_factory=list)
