# src/thermometer_chart/core/config.py
"""
Configuration management using Pydantic Settings.

Supports loading from environment variables, YAML files, and defaults.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import logging
import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from thermometer_chart.core.constants import (
    AREA_LABEL_FONT_SIZE,
    BULB_HEIGHT_FACTOR,
    DEFAULT_PALETTE,
    GOAL_MARKER_SIZE,
    STEM_WIDTH,
)
from thermometer_chart.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ChartConfig(BaseSettings):
    """Chart drawing configuration."""
    model_config = SettingsConfigDict(env_prefix="THERMO_CHART_")

    stem_width: float = Field(default=STEM_WIDTH, gt=0, description="Stem width in data units")
    bulb_height_factor: float = Field(
        default=BULB_HEIGHT_FACTOR,
        gt=0,
        le=0.5,
        description="Bulb radius as a proportion of the stem length"
    )
    area_label_font_size: int = Field(default=AREA_LABEL_FONT_SIZE, ge=4, le=72)
    goal_marker_size: float = Field(default=GOAL_MARKER_SIZE, gt=0)
    palette: List[str] = Field(
        default_factory=lambda: list(DEFAULT_PALETTE),
        description="Colors cycled through by the areas"
    )
    figsize: Tuple[float, float] = Field(default=(3.0, 8.0), description="Figure size in inches")
    dpi: int = Field(default=100, ge=50, le=600, description="Screen figure resolution")

    @field_validator('palette')
    @classmethod
    def validate_palette(cls, v: List[str]) -> List[str]:
        """Palette needs at least one color."""
        if not v:
            raise ValueError("Palette must contain at least one color")
        return v


class LoggingConfig(BaseSettings):
    """Logging configuration."""
    model_config = SettingsConfigDict(env_prefix="THERMO_LOG_")

    level: str = Field(default="INFO", description="Log level name")
    log_directory: Optional[Path] = Field(default=None, description="Directory for log files")
    rich_console: bool = Field(default=True, description="Use rich console output")
    file_output: bool = Field(default=False, description="Also write a dated log file")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('log_directory', mode='before')
    @classmethod
    def expand_log_directory(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(os.path.expandvars(v)).expanduser()
        return v


class Config(BaseSettings):
    """Main application configuration."""
    model_config = SettingsConfigDict(
        env_prefix="THERMO_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_name: str = Field(default="Thermometer Chart", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")

    chart: ChartConfig = Field(default_factory=ChartConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: Path) -> "Config":
        """Load configuration from YAML file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        with open(config_path, 'r') as f:
            try:
                config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {config_path}")

        def expand_env_vars(obj):
            if isinstance(obj, dict):
                return {k: expand_env_vars(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [expand_env_vars(item) for item in obj]
            elif isinstance(obj, str):
                return os.path.expandvars(obj)
            else:
                return obj

        config_data = expand_env_vars(config_data)

        # Environment variables take precedence over file values
        config_data = _merge(config_data, cls.environment_overrides())

        return cls(**config_data)

    @classmethod
    def environment_overrides(cls) -> Dict[str, Any]:
        """Values set through THERMO_* environment variables, by section."""
        overrides = cls().model_dump(exclude_unset=True)
        for name, section in (('chart', ChartConfig), ('logging', LoggingConfig)):
            section_values = section().model_dump(exclude_unset=True)
            if section_values:
                overrides[name] = _merge(overrides.get(name, {}), section_values)
        return overrides

    def to_yaml(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        config_data = self.model_dump(exclude_none=True)

        # Convert Path objects and tuples for YAML
        def convert(obj):
            if isinstance(obj, dict):
                return {k: convert(v) for k, v in obj.items()}
            elif isinstance(obj, (list, tuple)):
                return [convert(item) for item in obj]
            elif isinstance(obj, Path):
                return str(obj)
            return obj

        config_data = convert(config_data)

        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            yaml.dump(config_data, f, default_flow_style=False, sort_keys=False)


@lru_cache()
def get_config() -> Config:
    """Get application configuration (cached singleton)."""
    explicit = os.environ.get('THERMO_CONFIG')
    if explicit:
        return Config.from_yaml(Path(explicit))

    env = os.environ.get('THERMO_ENV', 'default').lower()
    config_paths = [Path(f"config/{env}.yaml")]
    if env != 'default':
        config_paths.append(Path("config/default.yaml"))

    for config_path in config_paths:
        if config_path.exists():
            logger.debug(f"Loading configuration from {config_path}")
            return Config.from_yaml(config_path)

    logger.debug("No configuration file found, using defaults")
    return Config()
