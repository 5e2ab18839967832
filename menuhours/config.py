"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator

from .adapters.locale_labels import labels_for_locale
from .domain.formatter import DisplayLabels
from .domain.validator import DEFAULT_SUMMARY_ERROR, ScheduleValidator


class LabelsConfig(BaseModel):
    """Overrides for display literals (normally supplied by translations)."""
    closed: Optional[str] = None
    unavailable_template: Optional[str] = None
    never_available: Optional[str] = None
    day_abbreviations: Optional[List[str]] = None
    day_range_separator: Optional[str] = None
    time_range_separator: Optional[str] = None
    slot_separator: Optional[str] = None
    group_separator: Optional[str] = None

    @field_validator("unavailable_template")
    @classmethod
    def validate_template(cls, v: Optional[str]) -> Optional[str]:
        """Ensure the template has a slot for the schedule text."""
        if v is not None and "{schedule}" not in v:
            raise ValueError("unavailable_template must contain '{schedule}'")
        return v

    @field_validator("day_abbreviations")
    @classmethod
    def validate_day_abbreviations(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """Require exactly seven names, Monday first."""
        if v is not None and len(v) != 7:
            raise ValueError(f"day_abbreviations must list 7 days, got {len(v)}")
        return v


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Berlin"
    locale: str = "en"
    labels: LabelsConfig = Field(default_factory=LabelsConfig)
    summary_error: str = DEFAULT_SUMMARY_ERROR

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(v)
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Unknown timezone: {v}") from exc
        return v

    @field_validator("summary_error")
    @classmethod
    def validate_summary_error(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("summary_error must not be empty")
        return v

    def display_labels(self, locale: Optional[str] = None) -> DisplayLabels:
        """Labels for ``locale`` (defaults to the configured one)."""
        overrides = self.labels.model_dump()
        return labels_for_locale(locale or self.locale, overrides)

    def schedule_validator(self) -> ScheduleValidator:
        return ScheduleValidator(summary_error=self.summary_error)

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of menuhours/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load the configuration, falling back to defaults when no explicit path
    was given and no default config file exists.
    """
    if config_path is not None:
        return AppConfig.load_from_yaml(config_path)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)
    return AppConfig()
