"""User configuration for sasm_launcher."""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from loguru import logger

from sasm_launcher.core.constants import APP_NAME, DEFAULT_DATA_DIR, DEFAULT_LAUNCHER_COMMAND
from sasm_launcher.utils.platform_utils import PlatformUtils

YAML_SUFFIXES = (".yaml", ".yml")


class Config:
    """Manages the launcher's own settings."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration.

        Args:
            config_path: Path to configuration file. If None, uses default path.
        """
        self.config_path = config_path or self._get_default_config_path()
        self.config_data: Dict[str, Any] = {}
        self._load_config()

    @staticmethod
    def _get_default_config_path() -> Path:
        """Get default configuration path based on platform."""
        return Path(PlatformUtils.get_config_dir(APP_NAME)) / "config.json"

    def _is_yaml(self) -> bool:
        return self.config_path.suffix.lower() in YAML_SUFFIXES

    def _load_config(self) -> None:
        """Load configuration from file, falling back to defaults."""
        self.config_data = self._get_default_config()
        if not self.config_path.exists():
            return

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                if self._is_yaml():
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError, OSError) as e:
            logger.error(f"Error loading config {self.config_path}: {e}. Using default configuration.")
            return

        if isinstance(data, dict):
            self.config_data.update(data)
        else:
            logger.error(f"Config {self.config_path} is not a mapping. Using default configuration.")

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "log_level": "info",
            "launcher_command": [DEFAULT_LAUNCHER_COMMAND],
            "data_dir": DEFAULT_DATA_DIR,
        }

    def save(self) -> None:
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            if self._is_yaml():
                yaml.safe_dump(self.config_data, f, default_flow_style=False)
            else:
                json.dump(self.config_data, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value.

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        value = self.config_data
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value (dot notation creates nested sections)."""
        keys = key.split(".")
        data = self.config_data
        for k in keys[:-1]:
            if not isinstance(data.get(k), dict):
                data[k] = {}
            data = data[k]
        data[keys[-1]] = value

    def get_launcher_command(self) -> List[str]:
        """Downstream launcher command as an argv list."""
        command = self.get("launcher_command", [DEFAULT_LAUNCHER_COMMAND])
        if isinstance(command, str):
            return command.split()
        return [str(part) for part in command]

    def get_data_dir(self) -> Path:
        return Path(os.path.expanduser(str(self.get("data_dir", DEFAULT_DATA_DIR))))
