"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Nested environment variables (CODEVECTOR__SECTION__KEY)
3. Flat environment variables injected by MCP client configs
   (OLLAMA_URL, EMBEDDING_MODEL, QDRANT_HOST, QDRANT_PORT)
4. Global YAML (~/.config/codevector/config.yaml)
5. Built-in defaults (lowest priority)
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from codevector.config.models import (
    CodeVectorConfig,
    EmbeddingConfig,
    IndexConfig,
    LoggingConfig,
    TimeoutsConfig,
    VectorStoreConfig,
)
from codevector.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/codevector/config.yaml").expanduser()

# Flat variable name -> (section, key)
FLAT_ENV_VARS: dict[str, tuple[str, str]] = {
    "OLLAMA_URL": ("embedding", "url"),
    "EMBEDDING_MODEL": ("embedding", "model"),
    "QDRANT_HOST": ("vector_store", "host"),
    "QDRANT_PORT": ("vector_store", "port"),
}


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _flat_env_values(environ: Mapping[str, str]) -> dict[str, Any]:
    """Map flat env vars into the nested config structure."""
    values: dict[str, Any] = {}
    for name, (section, key) in FLAT_ENV_VARS.items():
        if name in environ:
            values.setdefault(section, {})[key] = environ[name]
    return values


class _DictSource(PydanticBaseSettingsSource):
    """Settings source backed by a pre-built nested dict."""

    def __init__(self, settings_cls: type[BaseSettings], values: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._values = values

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._values.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._values


def _make_settings_class(
    yaml_config: dict[str, Any], flat_env: dict[str, Any]
) -> type[BaseSettings]:
    """Create a Settings class bound to the given YAML and flat-env values."""

    class CodeVectorSettings(BaseSettings):
        """Root config. Env vars: CODEVECTOR__LOGGING__LEVEL, CODEVECTOR__VECTOR_STORE__PORT, etc."""

        model_config = SettingsConfigDict(
            env_prefix="CODEVECTOR__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        embedding: EmbeddingConfig = EmbeddingConfig()
        vector_store: VectorStoreConfig = VectorStoreConfig()
        index: IndexConfig = IndexConfig()
        timeouts: TimeoutsConfig = TimeoutsConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > nested env > flat env > yaml
            return (
                init_settings,
                env_settings,
                _DictSource(settings_cls, flat_env),
                _DictSource(settings_cls, yaml_config),
            )

    return CodeVectorSettings


def load_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
    **kwargs: Any,
) -> CodeVectorConfig:
    """Load config: defaults < YAML < flat env < nested env < kwargs.

    Args:
        config_path: YAML file to read. Defaults to GLOBAL_CONFIG_PATH.
        environ: Source of flat env vars. Defaults to os.environ.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors
            (e.g. a QDRANT_PORT that is not an integer).
    """
    yaml_config = _load_yaml(config_path or GLOBAL_CONFIG_PATH)
    flat_env = _flat_env_values(os.environ if environ is None else environ)

    settings_cls = _make_settings_class(yaml_config, flat_env)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    return CodeVectorConfig.model_validate(settings.model_dump())
