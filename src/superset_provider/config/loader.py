"""
Reads the provider's YAML file into a ProviderFile.
"""

from pathlib import Path
from typing import Union

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigurationError
from .schema import ProviderFile


def load_config(config_path: Union[str, Path]) -> ProviderFile:
    """
    Load the provider block and resource declarations from a YAML file.

    An empty file yields a ProviderFile with no resources; credentials
    may then come from SUPERSET_* variables.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the YAML is malformed, is not a mapping,
            or does not match the ProviderFile schema.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        raw = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"{config_path} is not valid YAML: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping, got {type(raw).__name__}")

    try:
        return ProviderFile.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"{config_path} does not match the provider file schema: {e}") from e
