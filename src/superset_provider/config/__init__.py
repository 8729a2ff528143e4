from .settings import Config, settings
from .schema import ProviderConfig, ProviderFile, ResourceDeclaration, expand_env_vars
from .loader import load_config

__all__ = [
    "Config",
    "settings",
    "ProviderConfig",
    "ProviderFile",
    "ResourceDeclaration",
    "expand_env_vars",
    "load_config",
]
