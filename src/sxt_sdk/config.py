"""Client settings, read from arguments, ``SXT_*`` environment variables or YAML."""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.spaceandtime.app"
DEFAULT_API_VERSION = "v1"

_ENV_REFERENCE = re.compile(r"\$\{([^}]+)\}")


class ClientConfig(BaseSettings):
    """Connection settings for the SxT SDK clients.

    Values passed explicitly win; anything omitted falls back to the
    environment (``SXT_*`` variables, plus ``accessToken`` for the token).
    """

    model_config = SettingsConfigDict(
        env_prefix="SXT_",
        extra="ignore",
    )

    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    # SXT_ACCESS_TOKEN wins over the legacy accessToken variable
    access_token: str = Field(
        default_factory=lambda: os.environ.get("accessToken", ""),
        repr=False,
    )
    origin_app: str = ""
    timeout: float = 30.0
    retries: int = Field(default=0, ge=0)
    # YAML file used by load_config() when no path is given
    config_path: Path = Path("sxt.yaml")


def expand_env_vars(value: Any) -> Any:
    """Replace ``${NAME}`` references in YAML strings, lists and mappings.

    Raises:
        ValueError: If a referenced variable is not set.
    """
    if isinstance(value, dict):
        return {key: expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    if not isinstance(value, str):
        return value

    def lookup(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in os.environ:
            raise ValueError(f"Environment variable '{name}' is not set")
        return os.environ[name]

    return _ENV_REFERENCE.sub(lookup, value)


def load_config(config_path: str | Path | None = None) -> ClientConfig:
    """Build a ClientConfig from a YAML file.

    Args:
        config_path: YAML file to read. Defaults to ``ClientConfig.config_path``
                     (``SXT_CONFIG_PATH``, else ``sxt.yaml``).

    Returns:
        The config. Keys absent from the file come from the environment.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file is not a mapping or references an unset
                    environment variable.
        pydantic.ValidationError: If a value has the wrong type.
    """
    path = Path(config_path) if config_path is not None else ClientConfig().config_path
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    values = yaml.safe_load(path.read_text()) or {}
    if not isinstance(values, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    return ClientConfig(**{**expand_env_vars(values), "config_path": path})
