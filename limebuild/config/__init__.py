"""
Configuration management for limebuild
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import ConfigurationError

CONFIG_FILE_NAME = "limebuild.yaml"
CONFIG_PATH_ENV = "LIMEBUILD_CONFIG"
ENV_PREFIX = "LIMEBUILD_"


class BuildOptions(BaseModel):
    """Options that change how build scripts log and execute"""
    model_config = ConfigDict(extra="forbid")

    verbose: bool = False
    """Emit debug output from the library"""
    color: bool = True
    """Colour level names when stdout is a terminal"""
    log_file: Optional[str] = None
    """Additional file that receives every log record"""
    dry_run: bool = False
    """Log commands instead of spawning them"""
    max_symlink_depth: int = Field(default=40, ge=1)
    """Number of symbolic links followed before canonicalization gives up"""


class ConfigLoader:
    """Loads build options from a YAML file and the environment"""

    def __init__(self, config_file: Optional[Path] = None, environ: Optional[Dict[str, str]] = None):
        """
        Initialize configuration loader

        Args:
            config_file: YAML file to read; defaults to $LIMEBUILD_CONFIG or
                ./limebuild.yaml when present
            environ: Environment mapping, os.environ when omitted
        """
        self.environ = os.environ if environ is None else environ

        if config_file is None:
            explicit = self.environ.get(CONFIG_PATH_ENV)
            if explicit:
                config_file = Path(explicit)
                if not config_file.exists():
                    raise ConfigurationError(f"Config file not found: {config_file}")
            else:
                config_file = Path.cwd() / CONFIG_FILE_NAME
        self.config_file = Path(config_file)

        self.file_config = self._load_file()
        self.options = self._validate()

    def _load_file(self) -> Dict[str, Any]:
        """Load raw options from the YAML file, empty when it does not exist"""
        if not self.config_file.exists():
            return {}

        try:
            with open(self.config_file, 'r', encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Unable to read {self.config_file}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{self.config_file} must contain a mapping")
        return data

    def _environment_overrides(self) -> Dict[str, str]:
        """Collect LIMEBUILD_<OPTION> variables for known options"""
        overrides = {}
        for key in BuildOptions.model_fields:
            value = self.environ.get(ENV_PREFIX + key.upper())
            if value is not None and value != "":
                overrides[key] = value
        return overrides

    def _validate(self) -> BuildOptions:
        merged = dict(self.file_config)
        merged.update(self._environment_overrides())
        try:
            return BuildOptions.model_validate(merged)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid build options: {e}") from e

    def get_option(self, key: str, default: Any = None) -> Any:
        """
        Get a build option

        Args:
            key: Option key
            default: Default value if the option is unknown

        Returns:
            Option value
        """
        return getattr(self.options, key, default)


_config: Optional[ConfigLoader] = None


def get_config() -> ConfigLoader:
    """Return the process-wide configuration, loading it on first use"""
    global _config
    if _config is None:
        _config = ConfigLoader()
    return _config


def set_config(config: Optional[ConfigLoader]) -> None:
    """Install an explicit configuration, or clear it with None"""
    global _config
    _config = config


def reset_config() -> None:
    """Forget the cached configuration so the next access reloads it"""
    set_config(None)


__all__ = ["BuildOptions", "ConfigLoader", "get_config", "set_config", "reset_config"]
