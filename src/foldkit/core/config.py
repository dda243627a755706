# src/foldkit/core/config.py
"""
Configuration schema and loading for foldkit.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any, Literal, Self

from pydantic import BaseModel, Field, ValidationError, field_validator

from foldkit.contracts.enums import OpenOption


class SettingsError(Exception):
    """Raised when a settings block is invalid."""

    pass


class EngineSettings(BaseModel):
    """Defaults for the reference partition driver.

    max_workers=1 runs partitions on the calling thread.
    partitions=None means one partition per worker.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    max_workers: int = Field(default=1, gt=0, description="Worker threads used to accumulate partitions")
    partitions: int | None = Field(default=None, gt=0, description="Number of partitions to split input into")


class FileSinkSettings(BaseModel):
    """Configuration for a file sink collector.

    Example YAML:
        sinks:
          report:
            path: out/report.txt
            encoding: utf-8
            options: [create_new]
    """

    model_config = {"frozen": True, "extra": "forbid"}

    path: str
    encoding: str = "utf-8"
    options: tuple[OpenOption, ...] = ()
    newline: str | None = Field(default=None, description="Line terminator; None means the platform default")

    @field_validator("path")
    @classmethod
    def validate_path_not_empty(cls, v: str) -> str:
        """Validate that path is not empty or whitespace-only."""
        if not v or not v.strip():
            raise ValueError("path cannot be empty")
        return v

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> Self:
        """Create settings from a dict with a clear error on validation failure.

        Raises:
            SettingsError: If the configuration is invalid.
        """
        if not isinstance(config, dict):
            raise SettingsError(f"Invalid configuration for {cls.__name__}: config must be a dict, got {type(config).__name__}.")
        try:
            return cls.model_validate(config)
        except ValidationError as e:
            raise SettingsError(f"Invalid configuration for {cls.__name__}: {e}") from e

    def resolved_path(self, base_dir: Path | None = None) -> Path:
        """Resolve path relative to base directory if provided."""
        p = Path(self.path)
        if base_dir and not p.is_absolute():
            return base_dir / p
        return p


class LoggingSettings(BaseModel):
    """Logging output configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    json_output: bool = False
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    library_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = Field(
        default=None, description="Level for foldkit's own loggers; None inherits level"
    )

    @field_validator("level", "library_level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


class FoldkitSettings(BaseModel):
    """Top-level foldkit configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    engine: EngineSettings = Field(default_factory=EngineSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    sinks: dict[str, FileSinkSettings] = Field(default_factory=dict)


def load_settings(config_path: Path) -> FoldkitSettings:
    """Load settings from a YAML file with environment variable overrides.

    Precedence:
    1. Environment variables (FOLDKIT_*) - highest priority
    2. Config file
    3. Defaults from the Pydantic schema - lowest priority

    Environment variable format: FOLDKIT_ENGINE__MAX_WORKERS for nested keys.

    Raises:
        FileNotFoundError: If config file doesn't exist
        SettingsError: If configuration fails validation
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="FOLDKIT",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; Pydantic fields are lowercase
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    raw_config = _lowercase_keys(raw_config)

    try:
        return FoldkitSettings.model_validate(raw_config)
    except ValidationError as e:
        raise SettingsError(f"Invalid configuration in {config_path}: {e}") from e


def _lowercase_keys(config: dict[str, Any]) -> dict[str, Any]:
    """Lowercase nested section keys, leaving sink names untouched."""
    result: dict[str, Any] = {}
    for key, value in config.items():
        if key in ("engine", "logging") and isinstance(value, dict):
            result[key] = {k.lower(): v for k, v in value.items()}
        elif key == "sinks" and isinstance(value, dict):
            result[key] = {name: {k.lower(): v for k, v in sink.items()} if isinstance(sink, dict) else sink for name, sink in value.items()}
        else:
            result[key] = value
    return result
