"""
Configuration management for the Bodhi feedback notifier.
"""

import json
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..models.config import DEFAULT_BODHI_URL, Configuration, IdentityContext
from ..utils.error_handling import ConfigError

CONFIG_FILE_NAMES = [
    "fedora.toml",
    "bodhi-feedback-notifier.toml",
    "bodhi-feedback-notifier.yaml",
    "bodhi-feedback-notifier.yml",
    "bodhi-feedback-notifier.json",
]


def default_config_dir() -> Path:
    """User configuration directory, honouring ``XDG_CONFIG_HOME``."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(
        os.path.expanduser("~"), ".config"
    )
    return Path(config_home)


class ConfigurationManager:
    """Loads and validates the notifier configuration."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file. If None, uses default paths.
        """
        self.config_path = Path(config_path) if config_path else self._find_config_file()

    def _find_config_file(self) -> Path:
        """Find the configuration file in standard locations."""
        config_dir = default_config_dir()
        possible_paths = [config_dir / name for name in CONFIG_FILE_NAMES]

        for path in possible_paths:
            if path.exists():
                return path

        raise ConfigError(
            "No configuration file found. Please create one at "
            f"{possible_paths[0]} containing at least: username = \"<FAS username>\""
        )

    def _read_raw_config(self, config_path: Path) -> Any:
        """Read a configuration document, choosing the parser by extension."""
        suffix = config_path.suffix.lower()
        if suffix == ".toml":
            with open(config_path, "rb") as f:
                return tomllib.load(f)

        with open(config_path, "r", encoding="utf-8") as f:
            if suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f)

    def load_config(self) -> Configuration:
        """
        Load configuration from file.

        Returns:
            Configuration object with validated settings.

        Raises:
            ConfigError: If the file is missing, unreadable or invalid.
        """
        if not self.config_path.exists():
            raise ConfigError(f"Configuration file not found: {self.config_path}")

        try:
            raw_config = self._read_raw_config(self.config_path)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in configuration file: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in configuration file: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file: {e}") from e
        except OSError as e:
            raise ConfigError(f"Unable to read configuration file: {e}") from e

        raw_config = self._expand_env_vars(raw_config)
        config = self._parse_config(raw_config)

        try:
            config.validate()
        except ValueError as e:
            raise ConfigError(f"Invalid configuration in {self.config_path}: {e}") from e
        return config

    def _expand_env_vars(self, obj: Any) -> Any:
        """Recursively expand environment variables in configuration."""
        if isinstance(obj, dict):
            return {key: self._expand_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [self._expand_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            # Expand ${VAR_NAME} patterns
            if obj.startswith("${") and obj.endswith("}"):
                var_name = obj[2:-1]
                env_value = os.getenv(var_name)
                if env_value is None:
                    raise ConfigError(f"Environment variable '{var_name}' not found")
                return env_value
            return obj
        else:
            return obj

    def _parse_interests(self, raw_interests: Any) -> List[str]:
        if raw_interests is None:
            return []

        if not isinstance(raw_interests, list):
            raise ConfigError("'interests' must be a list of package names")

        for name in raw_interests:
            if not isinstance(name, str) or not name.strip():
                raise ConfigError("All 'interests' entries must be non-empty strings")

        return [name.strip() for name in raw_interests]

    def _parse_config(self, raw_config: Any) -> Configuration:
        """Parse raw configuration dictionary into Configuration object."""
        if not isinstance(raw_config, dict):
            raise ConfigError(
                f"Configuration file {self.config_path} must contain a key-value document"
            )

        username = raw_config.get("username")
        if not isinstance(username, str) or not username.strip():
            raise ConfigError(
                f"Missing required configuration key 'username' in {self.config_path}"
            )

        identity = IdentityContext(
            username=username.strip(),
            interests=frozenset(self._parse_interests(raw_config.get("interests"))),
        )

        return Configuration(
            identity=identity,
            release=raw_config.get("release"),
            bodhi_url=str(raw_config.get("bodhi_url", DEFAULT_BODHI_URL)).rstrip("/"),
            timeout=raw_config.get("timeout", 30),
            rows_per_page=raw_config.get("rows_per_page", 100),
            log_level=str(raw_config.get("log_level", "INFO")),
        )

    @staticmethod
    def get_config_template() -> Dict[str, Any]:
        """
        Get a template configuration dictionary.

        Returns:
            Dictionary with example configuration structure.
        """
        return {
            "username": "${FAS_USERNAME}",
            "interests": ["kernel", "firefox", "python3"],
            "release": "F40",
            "bodhi_url": DEFAULT_BODHI_URL,
            "timeout": 30,
            "rows_per_page": 100,
            "log_level": "INFO",
        }
