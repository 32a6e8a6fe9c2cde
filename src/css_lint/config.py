"""Configuration management for the CSS linter."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List
from pydantic import BaseModel, Field, field_validator

from .lint.rules import LintSettings, Settings
from .utils.errors import ConfigurationError


class LintConfig(BaseModel):
    """Configuration for lint rules."""

    rules: Dict[str, str] = Field(default_factory=dict)
    valid_properties: List[str] = Field(default_factory=list)
    vendor_prefixes: List[str] = Field(default_factory=lambda: ["-s2-"])
    messages: Dict[str, str] = Field(default_factory=dict)
    custom_data: Optional[str] = None

    @field_validator("rules")
    @classmethod
    def normalize_levels(cls, value: Dict[str, str]) -> Dict[str, str]:
        return {rule_id: level.strip().lower() for rule_id, level in value.items()}

    @field_validator("vendor_prefixes")
    @classmethod
    def check_prefixes(cls, value: List[str]) -> List[str]:
        for prefix in value:
            if not (prefix.startswith("-") and prefix.endswith("-") and len(prefix) > 2):
                raise ValueError(f"Vendor prefix must look like '-name-': {prefix!r}")
        return value

    def to_settings(self) -> LintSettings:
        """Build the severity/settings view the linter consumes."""
        conf: Dict[str, Any] = dict(self.rules)
        conf[Settings.ValidProperties.id] = list(self.valid_properties)
        return LintSettings(conf)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "text"
    file: Optional[str] = None


class CSSLintConfig(BaseModel):
    """Main configuration class for the CSS linter."""

    lint: LintConfig = Field(default_factory=LintConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    current_dir = Path.cwd()
    config_files = [
        current_dir / "css-lint.yaml",
        current_dir / "css-lint.yml",
        current_dir / "config" / "css-lint.yaml",
    ]

    for config_file in config_files:
        if config_file.exists():
            return config_file

    return current_dir / "config" / "css-lint.yaml"


def load_config(config_path: Optional[str] = None) -> CSSLintConfig:
    """Load configuration from file or environment variables."""
    path: Path
    if config_path is None:
        path = get_default_config_path()
    else:
        path = Path(config_path)

    config_dict: Dict[str, Any] = {}

    if path.exists():
        try:
            with open(path, "r") as f:
                file_config = yaml.safe_load(f)
                if file_config:
                    config_dict.update(file_config)
        except Exception as e:
            raise ConfigurationError(f"Failed to load config from {path}: {e}")

    env_overrides = _get_env_overrides()
    _deep_update(config_dict, env_overrides)

    try:
        return CSSLintConfig(**config_dict)
    except Exception as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _get_env_overrides() -> Dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: Dict[str, Any] = {}

    # Logging configuration
    level = os.getenv("CSS_LINT_LOG_LEVEL") or os.getenv("LOG_LEVEL")
    if level:
        overrides.setdefault("logging", {})["level"] = level

    if os.getenv("LOG_FILE"):
        overrides.setdefault("logging", {})["file"] = os.getenv("LOG_FILE")

    # Lint configuration
    if os.getenv("CSS_LINT_VALID_PROPERTIES"):
        names = os.getenv("CSS_LINT_VALID_PROPERTIES", "").split(",")
        overrides.setdefault("lint", {})["valid_properties"] = [
            name.strip() for name in names if name.strip()
        ]

    if os.getenv("CSS_LINT_CUSTOM_DATA"):
        overrides.setdefault("lint", {})["custom_data"] = os.getenv("CSS_LINT_CUSTOM_DATA")

    return overrides


def _deep_update(base_dict: Dict[str, Any], update_dict: Dict[str, Any]) -> None:
    """Deep update a dictionary with another dictionary."""
    for key, value in update_dict.items():
        if key in base_dict and isinstance(base_dict[key], dict) and isinstance(value, dict):
            _deep_update(base_dict[key], value)
        else:
            base_dict[key] = value


def save_config(config: CSSLintConfig, config_path: Optional[str] = None) -> None:
    """Save configuration to file."""
    path: Path
    if config_path is None:
        path = get_default_config_path()
    else:
        path = Path(config_path)

    path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = config.model_dump()

    with open(path, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, indent=2)


DEFAULT_CONFIG = CSSLintConfig()
