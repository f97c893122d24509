"""Configuration management for softassert using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILE_NAME = ".softassert.json"


class CollectionMode(str, Enum):
    """Failure reporting modes.

    - IMMEDIATE: failures are raised as soon as they are collected
    - DEFERRED: failures are stored and raised together at context end
    """
    IMMEDIATE = "immediate"
    DEFERRED = "deferred"


class CollectorKind(str, Enum):
    """Collector implementations selectable at construction time."""
    BASIC = "basic"
    NOOP = "noop"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"


class CollectionConfig(BaseModel):
    """Collection configuration section."""
    default_mode: CollectionMode = Field(alias="defaultMode", default=CollectionMode.IMMEDIATE)
    collector: CollectorKind = CollectorKind.BASIC

    model_config = ConfigDict(populate_by_name=True)


class StacktraceConfig(BaseModel):
    """Stack trace cleaning configuration section."""
    clean: bool = True
    hidden_modules: list[str] = Field(alias="hiddenModules", default_factory=list)

    @field_validator("hidden_modules")
    @classmethod
    def validate_hidden_modules(cls, v):
        for prefix in v:
            if not prefix or prefix.startswith(".") or prefix.endswith("."):
                raise ValueError(f"hidden module prefix must be a dotted module name, got: {prefix!r}")
        return v

    model_config = ConfigDict(populate_by_name=True)


class ReportConfig(BaseModel):
    """Failure report configuration section."""
    dir: str = ".softassert"
    max_reports: int = Field(alias="maxReports", default=100)

    @field_validator("max_reports")
    @classmethod
    def validate_max_reports(cls, v):
        if v < 1:
            raise ValueError("max_reports must be >= 1")
        return v

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(use_enum_values=True)


class SoftAssertConfig(BaseModel):
    """Complete softassert configuration model."""
    collection: CollectionConfig = Field(default_factory=CollectionConfig)
    stacktraces: StacktraceConfig = Field(default_factory=StacktraceConfig)
    reports: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")

    @property
    def hidden_modules(self) -> tuple[str, ...]:
        """Module prefixes stripped from aggregate error tracebacks."""
        return ("softassert", *self.stacktraces.hidden_modules)


def load_config(config_path: str | Path | None = None) -> SoftAssertConfig:
    """Load configuration from a file, or return defaults when there is none.

    Args:
        config_path: Configuration file. If None, the nearest .softassert.json
                    from the current directory upward is used

    Returns:
        SoftAssertConfig: Loaded and validated configuration

    Raises:
        ValueError: If the file is not JSON or does not match the model
    """
    path = Path(config_path) if config_path is not None else find_config_file()
    if path is None or not path.exists():
        return create_default_config()

    try:
        config_data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Failed to load config from {path}: {e}") from e

    try:
        return SoftAssertConfig.model_validate(config_data)
    except ValidationError as e:
        raise ValueError(f"Failed to load config from {path}: {e}") from e


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the nearest .softassert.json in ``start_dir`` or its parents.

    Args:
        start_dir: Directory to start from (default: current directory)
    """
    start = Path(start_dir if start_dir is not None else Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.exists():
            return candidate
    return None


def create_default_config() -> SoftAssertConfig:
    """Create default configuration: immediate mode, basic collector."""
    return SoftAssertConfig()
