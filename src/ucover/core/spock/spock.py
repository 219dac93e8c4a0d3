"""Spock - Configuration Manager for ucover.

Spock manages configuration from JSON files and environment variables,
providing a unified interface for accessing settings.

Configuration hierarchy:
- ucover: Core settings
  - local_snapshots: Enable the local-snapshot override phase
  - repository_root: Local Maven repository (default ~/.m2/repository)
  - package_extension: Extension of built plugin packages (default "hpi")
  - metadata_filename: Per-artifact manifest name (default "maven-metadata-local.xml")

Environment variables follow the naming convention:
UCOVER__<section>__<key>
Example: UCOVER__UCOVER__LOCAL_SNAPSHOTS=true
         UCOVER__UCOVER__REPOSITORY_ROOT="/srv/m2"

The conventional ``LOCAL_SNAPSHOTS=true`` variable also enables local snapshots.
"""

import json
import logging
import os
from collections.abc import Mapping
from copy import deepcopy
from pathlib import Path
from typing import Any

from ucover.core import utils

logger = logging.getLogger(__name__)


class Spock:
    """Configuration manager for ucover instances.

    Each UCOverride instance has its own Spock instance to maintain
    isolated configuration state.

    Famous quote from Spock in Star Trek:
    "Logic is the beginning of wisdom, not the end."
    """

    ENV_PREFIX = "UCOVER"
    ENV_SEPARATOR = "__"
    SECTIONS = ("ucover",)
    LOCAL_SNAPSHOTS_VARIABLE = "LOCAL_SNAPSHOTS"

    def __init__(self, config_path: str | None = None, environ: Mapping[str, str] | None = None):
        """Initialize Spock configuration manager.

        Args:
            config_path: Path to JSON configuration file. If None, only
                        environment variables will be used.
            environ: Environment variables to read. Defaults to os.environ.
        """
        self._config_path = config_path
        self._environ = environ
        self._config = self.default_config()
        self._loaded = False
        logger.debug("Spock instance created with config_path=%s", config_path)

    @staticmethod
    def default_config() -> dict[str, Any]:
        """Return a new default config dict each time."""
        return {
            "ucover": {
                "local_snapshots": False,
                "repository_root": utils.get_default_repository_path(),
                "package_extension": "hpi",
                "metadata_filename": "maven-metadata-local.xml",
            }
        }

    def load(self, config: dict[str, Any] | None = None) -> None:
        """Load configuration from JSON file, environment variables, or provided config.

        Args:
            config: Optional config dict merged over the JSON file.

        Priority (highest to lowest):
        1. Environment variables
        2. Provided config (if any)
        3. JSON file
        4. Default values
        """
        if self._loaded:
            logger.debug("Configuration already loaded, skipping reload")
            return

        self._config = self.default_config()

        # Load from JSON file if provided
        if self._config_path:
            self._load_from_json()

        if config is not None:
            self._merge_sections(config, kind="dict")

        # Override/merge with environment variables
        self._load_from_env()

        self._loaded = True
        logger.info("Configuration loaded successfully")
        logger.debug("Final config: %s", self._config)

    def _load_from_json(self) -> None:
        """Load configuration from JSON file."""
        try:
            config_file = Path(self._config_path)
            if not config_file.exists():
                logger.warning("Config file not found: %s", self._config_path)
                return

            with open(config_file, encoding="utf-8") as f:
                json_config = json.load(f)

            self._merge_sections(json_config, kind="JSON object")
            logger.info("Loaded configuration from JSON: %s", self._config_path)

        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in config file %s: %s", self._config_path, e)
            raise ValueError(f"Invalid JSON configuration file: {e}") from e
        except Exception as e:
            logger.error("Error loading config file %s: %s", self._config_path, e)
            raise

    def _merge_sections(self, config: Any, *, kind: str) -> None:
        """Validate and merge known sections of ``config`` into self._config."""
        if not isinstance(config, dict):
            raise ValueError(f"Configuration must be a {kind}")

        for section in self.SECTIONS:
            if section not in config:
                continue
            if not isinstance(config[section], dict):
                raise ValueError(f"'{section}' section must be an object")
            self._config[section].update(deepcopy(config[section]))

    def _load_from_env(self) -> None:
        """Load configuration from environment variables.

        Examples:
        - UCOVER__UCOVER__LOCAL_SNAPSHOTS=true
        - UCOVER__UCOVER__REPOSITORY_ROOT=/srv/m2
        """
        environ = self._environ if self._environ is not None else os.environ
        prefix = f"{self.ENV_PREFIX}{self.ENV_SEPARATOR}"

        for env_key, env_value in environ.items():
            if not env_key.startswith(prefix):
                continue

            key_path = env_key[len(prefix) :].split(self.ENV_SEPARATOR)
            if len(key_path) != 2:
                logger.warning("Invalid env var format: %s", env_key)
                continue

            section = key_path[0].lower()
            if section not in self.SECTIONS:
                logger.warning("Invalid section in env var %s: %s", env_key, section)
                continue

            parsed_value = self._parse_env_value(env_value)
            self._config[section][key_path[1].lower()] = parsed_value
            logger.debug("Set from env: %s = %s", env_key, parsed_value)

        if environ.get(self.LOCAL_SNAPSHOTS_VARIABLE) == "true":
            self._config["ucover"]["local_snapshots"] = True
            logger.debug("Local snapshots enabled by %s", self.LOCAL_SNAPSHOTS_VARIABLE)

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value with type inference.

        Attempts to parse as JSON first, falls back to string.
        """
        try:
            return json.loads(value)
        except (json.JSONDecodeError, ValueError):
            return value

    def get(self, key: str | None = None, default: Any = None) -> Any:
        """Get ucover configuration.

        Args:
            key: Specific configuration key. If None, returns the whole section.
            default: Default value if key not found.

        Returns:
            Configuration value or default.
        """
        if not self._loaded:
            self.load()

        if key is None:
            return deepcopy(self._config["ucover"])

        return self._config["ucover"].get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set ucover configuration (runtime only, not persisted)."""
        if not self._loaded:
            self.load()

        self._config["ucover"][key] = value
        logger.debug("Set ucover config: %s = %s", key, value)

    @property
    def local_snapshots(self) -> bool:
        """Whether the local-snapshot override phase is enabled."""
        value = self.get("local_snapshots", False)
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return bool(value)

    @property
    def repository_root(self) -> Path:
        return Path(str(self.get("repository_root"))).expanduser()

    def get_all_config(self) -> dict[str, Any]:
        """Get complete configuration snapshot.

        Returns:
            Deep copy of entire configuration.
        """
        if not self._loaded:
            self.load()

        return deepcopy(self._config)

    def reload(self) -> None:
        """Reload configuration from sources."""
        self._loaded = False
        self.load()
        logger.info("Configuration reloaded")

    @property
    def config_path(self) -> str | None:
        """Get the configuration file path."""
        return self._config_path

    @property
    def is_loaded(self) -> bool:
        """Check if configuration has been loaded."""
        return self._loaded


ConfigManager = Spock
