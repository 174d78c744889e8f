from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from gitquery.constants import LOG_FIELD_DELIMITER
from gitquery.exceptions import ConfigError
from gitquery.logging import configure_logging, get_logger

__all__ = [
    "GitQueryConfig",
    "LoggingConfig",
    "ParsingConfig",
    "load_config",
    "get_user_config_path",
    "PROJECT_CONFIG_FILENAME",
]

logger = get_logger(__name__)

PROJECT_CONFIG_FILENAME = "gitquery.yaml"

# Project config file used by the next GitQueryConfig build; set by load_config
_project_config_path: ContextVar[Path | None] = ContextVar(
    "gitquery_project_config_path", default=None
)


class LoggingConfig(BaseModel):
    """Settings for decoder log output.

    Attributes:
        level: Minimum level emitted (default: WARNING)
        json_output: Render JSON instead of console lines (default: False)
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    json_output: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    def apply(self) -> None:
        """Configure structlog with these settings."""
        configure_logging(force_json=self.json_output, level=self.level)


class ParsingConfig(BaseModel):
    """Settings for report decoding.

    Attributes:
        log_delimiter: Field separator of the requested log format. Must match
            the format passed to ``git log`` (default: ``|``)
    """

    log_delimiter: str = LOG_FIELD_DELIMITER

    @field_validator("log_delimiter")
    @classmethod
    def check_single_character(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("log_delimiter must be a single character")
        # Anything str.splitlines() breaks on: \n \r \v \f \x1c-\x1e \x85 \u2028 \u2029
        if v.splitlines() != [v]:
            raise ValueError("log_delimiter cannot be a line break character")
        return v


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source that loads from a YAML file."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                    field=None,
                    value=None,
                ) from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Config file {yaml_file} must contain a mapping",
                    field=None,
                    value=type(loaded).__name__,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._config_data


class GitQueryConfig(BaseSettings):
    """Root configuration for gitquery."""

    model_config = SettingsConfigDict(
        env_prefix="GITQUERY_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    parsing: ParsingConfig = Field(default_factory=ParsingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Init arguments
        2. Environment variables (GITQUERY_*)
        3. Project YAML config (./gitquery.yaml, or the path given to
           load_config)
        4. User YAML config (~/.config/gitquery/config.yaml)
        5. Model defaults
        """
        project_config_path = (
            _project_config_path.get() or Path.cwd() / PROJECT_CONFIG_FILENAME
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/gitquery/config.yaml
    """
    return Path.home() / ".config" / "gitquery" / "config.yaml"


def load_config(config_path: Path | None = None) -> GitQueryConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Project config file. Defaults to ./gitquery.yaml

    Returns:
        GitQueryConfig instance with merged configuration

    Raises:
        ConfigError: If a config file is not valid YAML or a value fails
            validation
    """
    if config_path is None:
        config_path = Path.cwd() / PROJECT_CONFIG_FILENAME
    if not config_path.exists():
        logger.debug("project_config_missing", path=str(config_path))

    token = _project_config_path.set(config_path)
    try:
        return GitQueryConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        _project_config_path.reset(token)
