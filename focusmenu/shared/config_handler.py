import copy
import toml
import time
from pathlib import Path
from typing import Any, List, Optional, Dict, Union
from focusmenu.shared import config_template
from focusmenu.shared.path_handler import PathHandler


class ConfigHandler:
    """
    Reads the resolver's configuration file (config.toml) and provides
    layered access to it.
    The file is never written; missing keys are filled from config_template
    in memory.
    """

    def __init__(self, owner: Any, config_file: Optional[Union[str, Path]] = None):
        """
        Sets up paths and loads the initial configuration.
        Args:
            owner: The object owning this handler, used for logger access.
            config_file: Explicit path to config.toml. Defaults to the XDG location.
        """
        self.logger = owner.logger
        self.default_config = config_template.default_config
        if config_file is None:
            config_file = PathHandler(owner).get_config_file()
        self.config_file = Path(config_file)
        self.config_data = self.load_config()

    def _strip_hints(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Recursively removes keys ending with '_hint' from the configuration
        dictionary.
        Args:
            data: The configuration dictionary, typically self.default_config.
        Returns:
            A dictionary containing only configuration values.
        """
        stripped_data = {}
        for key, value in data.items():
            if key.endswith(("_hint",)):
                continue
            if isinstance(value, dict):
                stripped_data[key] = self._strip_hints(value)
            else:
                stripped_data[key] = copy.deepcopy(value)
        return stripped_data

    @property
    def default_config_stripped(self) -> Dict[str, Any]:
        """Returns the default config without any setting metadata hints."""
        return self._strip_hints(self.default_config)

    def _recursive_merge(
        self,
        user_config: Dict[str, Any],
        default_config: Dict[str, Any],
    ) -> None:
        """
        Recursively merges missing keys from `default_config` into `user_config`.
        Args:
            user_config: The dictionary loaded from the user's config file.
            default_config: The stripped default configuration.
        """
        for key, default_value in default_config.items():
            if key not in user_config:
                user_config[key] = default_value
            elif isinstance(default_value, dict) and isinstance(
                user_config.get(key), dict
            ):
                self._recursive_merge(user_config[key], default_value)

    def load_config(self) -> Dict[str, Any]:
        """
        Loads the configuration from file, or uses defaults if missing/corrupt.
        Returns:
            The loaded and merged configuration dictionary.
        """
        config_from_file: Dict[str, Any] = {}
        if not self.config_file.exists():
            self.logger.info(
                f"No config file at {self.config_file}, using default configuration."
            )
        else:
            max_retries = 3
            retry_delay_seconds = 0.1
            for attempt in range(max_retries):
                try:
                    with open(self.config_file, "r") as f:
                        config_from_file = toml.load(f)
                    self.logger.debug("Existing config.toml loaded successfully.")
                    break
                except (OSError, toml.TomlDecodeError) as e:
                    self.logger.error(
                        f"Error loading config file on attempt {attempt + 1}: {e}. Retrying..."
                    )
                    time.sleep(retry_delay_seconds)
            else:
                self.logger.error(
                    "Failed to load config file after all retries. Using default configuration."
                )
                config_from_file = {}
        self._recursive_merge(config_from_file, self.default_config_stripped)
        self.logger.debug("Configuration loaded and merged with defaults.")
        return config_from_file

    def get_root_setting(self, key_path: List[str], default_value: Any = None) -> Any:
        """
        Traverses the configuration dict (self.config_data) to retrieve a value.
        Args:
            key_path: List of strings representing the path (e.g., ['sorting', 'locale']).
            default_value: Value to return if the path is not found or holds None.
        Returns:
            The configuration value or the default value.
        """
        current_data = self.config_data
        for i, key in enumerate(key_path):
            if key.endswith("_hint"):
                self.logger.debug(f"Ignoring hint key during lookup: {key}.")
                continue
            if isinstance(current_data, dict) and key in current_data:
                current_data = current_data[key]
            else:
                self.logger.debug(
                    f"Missing configuration key at path: {' -> '.join(key_path[: i + 1])}. Using default value: {default_value}"
                )
                return default_value
        if current_data is None:
            return default_value
        return current_data
