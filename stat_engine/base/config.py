"""
Configuration management for the stat engine.

This module provides an EngineConfig class for loading, managing, and accessing
configuration data from JSON files. Each configuration domain lives in its own
file inside the configuration directory; missing files fall back to defaults
and are only written when a value is changed through set().
"""

import copy
import os
import json
from typing import Any, Dict, List, Optional, Tuple

from stat_engine.utils.json_utils import load_json, save_json
from stat_engine.utils.logging_config import get_logger

logger = get_logger("SYSTEM")

CONFIG_DIR_ENV = "STAT_ENGINE_CONFIG_DIR"

OBSERVER_ERROR_POLICIES = ("raise", "log")

DEFAULT_CONFIGS: Dict[str, Dict[str, Any]] = {
    "system": {
        "log_level": "INFO",
        "log_to_file": False,
        "log_dir": "logs",  # Relative to project root
    },
    "stats": {
        "observer_error_policy": "raise",
    },
    "attributes": {
        "default_combination_rule": "add",
    },
}


class EngineConfig:
    """
    Engine configuration manager.

    Supports dot notation for accessing nested configuration values
    (e.g., config.get("stats.observer_error_policy")).
    """

    # Singleton instance
    _instance = None

    # Default configuration directory relative to project root
    _CONFIG_DIR = "config"

    # Configuration files, mapping domain to path within the config directory
    _DEFAULT_CONFIG_FILES = {
        "system": "system_config.json",
        "stats": "stats_config.json",
        "attributes": "attributes_config.json",
    }

    def __new__(cls, *args, **kwargs):
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super(EngineConfig, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize the configuration."""
        if self._initialized:
            return

        if config_dir is None:
            config_dir = os.environ.get(CONFIG_DIR_ENV)
        if config_dir is None:
            project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
            config_dir = os.path.join(project_root, self._CONFIG_DIR)

        self._config_dir_abs = os.path.abspath(config_dir)
        self._config_data: Dict[str, Dict[str, Any]] = {}

        self._load_all_configs()
        self._initialized = True

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton so the next access re-reads the configuration."""
        cls._instance = None

    @property
    def config_dir(self) -> str:
        return self._config_dir_abs

    def _load_all_configs(self):
        for domain, filename_rel in self._DEFAULT_CONFIG_FILES.items():
            self._load_config(domain, filename_rel)

    def _load_config(self, domain: str, filename_rel: str):
        """
        Load a configuration file for the specified domain.

        Values present in the file override the defaults; keys missing from
        the file keep their default value.
        """
        file_path = os.path.join(self._config_dir_abs, filename_rel)
        defaults = copy.deepcopy(DEFAULT_CONFIGS.get(domain, {}))

        if not os.path.exists(file_path):
            # Defaults stay in memory; files are only written by set()
            logger.debug(f"Config file for '{domain}' not found, using defaults: {file_path}")
            self._config_data[domain] = defaults
            return

        try:
            loaded_data = load_json(file_path)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading configuration for domain '{domain}' from {file_path}: {e}")
            self._config_data[domain] = defaults
            return

        if not isinstance(loaded_data, dict):
            logger.warning(f"Configuration for domain '{domain}' is not a JSON object. Using defaults.")
            self._config_data[domain] = defaults
            return

        defaults.update(loaded_data)
        self._config_data[domain] = defaults
        logger.debug(f"Loaded configuration for domain '{domain}' from {file_path}")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: The path to the configuration value (e.g., "system.log_level").
            default: The default value to return if the key is not found.

        Returns:
            The configuration value, or the default if not found.
        """
        parts = key_path.split(".")
        domain = parts[0]

        if domain not in self._config_data:
            return default

        current: Any = self._config_data[domain]
        for part in parts[1:]:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default

        return current

    def set(self, key_path: str, value: Any) -> bool:
        """
        Set a configuration value using dot notation and save the corresponding file.

        Returns:
            True if the value was set and saved successfully, False otherwise.
        """
        parts = key_path.split(".")
        domain = parts[0]

        if domain not in self._DEFAULT_CONFIG_FILES:
            logger.error(f"Cannot set configuration for unknown domain '{domain}'.")
            return False
        if len(parts) < 2:
            logger.error(f"Cannot replace a whole domain with set('{key_path}').")
            return False

        current = self._config_data.setdefault(domain, {})
        for part in parts[1:-1]:
            if part not in current or not isinstance(current[part], dict):
                current[part] = {}
            current = current[part]

        current[parts[-1]] = value
        logger.info(f"Set configuration '{key_path}' to: {value}")

        file_path = os.path.join(self._config_dir_abs, self._DEFAULT_CONFIG_FILES[domain])
        try:
            save_json(self._config_data[domain], file_path)
        except (OSError, TypeError) as e:
            logger.error(f"Error saving configuration for domain '{domain}' to {file_path}: {e}")
            return False
        return True

    def get_all(self, domain: Optional[str] = None) -> Dict[str, Any]:
        """
        Get all configuration values for a domain, or all domains.

        Returns a copy; an unknown domain yields an empty dict.
        """
        if domain is None:
            return copy.deepcopy(self._config_data)

        if domain not in self._config_data:
            logger.warning(f"Domain '{domain}' not found in configuration")
            return {}

        return copy.deepcopy(self._config_data[domain])

    def reload(self, domain: Optional[str] = None) -> bool:
        """
        Reload configuration from files.

        Returns:
            True if the configuration was reloaded, False for an unknown domain.
        """
        if domain is None:
            self._load_all_configs()
            logger.info("Reloaded all configurations.")
            return True

        if domain not in self._DEFAULT_CONFIG_FILES:
            logger.warning(f"Cannot reload unknown domain '{domain}'.")
            return False

        self._load_config(domain, self._DEFAULT_CONFIG_FILES[domain])
        logger.info(f"Reloaded configuration for domain '{domain}'.")
        return True

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Validate the configuration.

        Returns:
            A tuple of (is_valid, error_messages).
        """
        errors = []

        policy = self.get("stats.observer_error_policy")
        if policy not in OBSERVER_ERROR_POLICIES:
            errors.append(
                f"stats.observer_error_policy must be one of {OBSERVER_ERROR_POLICIES}, got {policy!r}"
            )

        # Imported here to keep the config module free of domain imports at load time
        from stat_engine.attributes.combination_rules import available_rules

        rule_name = self.get("attributes.default_combination_rule")
        if not isinstance(rule_name, str) or rule_name.lower() not in available_rules():
            errors.append(
                f"attributes.default_combination_rule must be one of {available_rules()}, got {rule_name!r}"
            )

        if errors:
            logger.warning(f"Configuration validation failed: {errors}")
        else:
            logger.info("Configuration validation passed.")

        return not errors, errors


def get_config() -> EngineConfig:
    """Get the engine configuration singleton instance."""
    return EngineConfig()
