"""Process-wide settings shared by all validators.

Validators copy the default error messages they need at construction time,
so changing the settings only affects validators created afterwards. The
settings can be built from TOML files and environment variables, with the
same precedence rules used throughout validkit:

1.  Built-in defaults (lowest precedence).
2.  Project-specific `validkit.toml` file.
3.  User-level `~/.config/validkit/config.toml` file.
4.  A custom configuration file specified at runtime (replaces 2 and 3).
5.  Environment variables (highest precedence).

Mutation is guarded by a lock, but is meant to happen while an application
configures itself, not while it is validating requests.
"""

import copy
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomllib  # Available in Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python versions < 3.11

logger = logging.getLogger(__name__)

# The default path for the user-specific global configuration file.
USER_CONFIG_PATH = Path.home() / ".config" / "validkit" / "config.toml"

PROJECT_CONFIG_NAME = "validkit.toml"

ENV_PREFIX = "VALIDKIT_"
ENV_MESSAGE_PREFIX = ENV_PREFIX + "MESSAGE_"


class ValidatorSettings:
    """Default error messages and charset for validators.

    Attributes:
        DEFAULT_SETTINGS (Dict[str, Any]): The built-in values every new
            settings object starts from.
    """

    DEFAULT_SETTINGS = {
        "charset": "UTF-8",
        "messages": {
            "invalid": "The field is invalid.",
        },
    }

    def __init__(self, values: Optional[Dict[str, Any]] = None) -> None:
        """Initializes the settings from the built-in defaults.

        Args:
            values (Optional[Dict[str, Any]]): Values merged over the
                built-in defaults, in the same layout as the TOML file.
        """
        self._lock = threading.RLock()
        self.settings: Dict[str, Any] = copy.deepcopy(self.DEFAULT_SETTINGS)
        if values:
            self._merge_settings(self.settings, self._checked_values(values, "settings values"))

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "ValidatorSettings":
        """Builds settings from configuration files and the environment.

        Args:
            config_path (Optional[Path]): A specific TOML file to load. If
                given, the project and user files are not read.

        Returns:
            ValidatorSettings: The loaded settings.
        """
        settings = cls()
        if config_path:
            settings._load_file_config(Path(config_path))
        else:
            settings._load_default_configs()
        settings._load_env_config()
        return settings

    def _load_default_configs(self) -> None:
        """Loads configs from standard locations if they exist."""
        project_config = Path.cwd() / PROJECT_CONFIG_NAME
        if project_config.exists():
            self._load_file_config(project_config)

        if USER_CONFIG_PATH.exists():
            self._load_file_config(USER_CONFIG_PATH)

    def _merge_settings(self, base: Dict[str, Any], new: Dict[str, Any]) -> None:
        for key, value in new.items():
            if isinstance(value, dict) and key in base and isinstance(base[key], dict):
                self._merge_settings(base[key], value)
            else:
                base[key] = value

    def _checked_values(self, values: Dict[str, Any], source: str) -> Dict[str, Any]:
        """Returns a copy of `values` without entries of the wrong type.

        `charset` and every message must be strings, and `messages` must be
        a table. Anything else is dropped with a warning.

        Args:
            values (Dict[str, Any]): Settings in the TOML file layout.
            source (str): Where the values came from, for the log message.

        Returns:
            Dict[str, Any]: The usable values.
        """
        checked = dict(values)

        if "charset" in checked and not isinstance(checked["charset"], str):
            logger.warning(f"Ignoring 'charset' in {source}: expected a string, got {type(checked['charset']).__name__}")
            checked.pop("charset")

        if "messages" in checked:
            messages = checked["messages"]
            if not isinstance(messages, dict):
                logger.warning(f"Ignoring 'messages' in {source}: expected a table, got {type(messages).__name__}")
                checked.pop("messages")
            else:
                checked["messages"] = {}
                for code, message in messages.items():
                    if isinstance(message, str):
                        checked["messages"][code] = message
                    else:
                        logger.warning(f"Ignoring message '{code}' in {source}: expected a string, got {type(message).__name__}")

        return checked

    def _load_file_config(self, config_path: Path) -> None:
        """Loads and merges settings from a TOML file.

        Args:
            config_path (Path): The path to the TOML configuration file.
        """
        try:
            with open(config_path, "rb") as f:
                file_config = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Could not load settings from {config_path}: {e}")
            return

        file_config = self._checked_values(file_config, str(config_path))
        with self._lock:
            self._merge_settings(self.settings, file_config)
        logger.debug(f"Loaded validator settings from {config_path}")

    def _load_env_config(self) -> None:
        """Loads and merges settings from environment variables."""
        charset = os.getenv(ENV_PREFIX + "CHARSET")
        if charset is not None:
            self.set_charset(charset)

        for env_var, value in os.environ.items():
            if env_var.startswith(ENV_MESSAGE_PREFIX) and len(env_var) > len(ENV_MESSAGE_PREFIX):
                self.set_default_message(env_var[len(ENV_MESSAGE_PREFIX):].lower(), value)

    def set_default_message(self, name: str, message: str) -> None:
        """Sets the default message for a given error code.

        Args:
            name (str): The error code.
            message (str): The default message template.
        """
        with self._lock:
            self.settings["messages"][name] = message

    def get_default_message(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Returns the default message for an error code, if one is set."""
        with self._lock:
            return self.settings["messages"].get(name, default)

    def has_default_message(self, name: str) -> bool:
        with self._lock:
            return name in self.settings["messages"]

    def get_default_messages(self) -> Dict[str, str]:
        with self._lock:
            return dict(self.settings["messages"])

    def set_charset(self, charset: str) -> None:
        """Sets the charset to use when validating strings."""
        with self._lock:
            self.settings["charset"] = charset

    def get_charset(self) -> str:
        """Returns the charset to use when validating strings (default UTF-8)."""
        with self._lock:
            return self.settings["charset"]

    @property
    def charset(self) -> str:
        return self.get_charset()

    def as_dict(self) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self.settings)

    def __str__(self) -> str:
        return f"ValidatorSettings({self.as_dict()})"


_default_settings = ValidatorSettings()
_default_settings_lock = threading.Lock()


def get_default_settings() -> ValidatorSettings:
    """Returns the settings used by validators constructed without any."""
    return _default_settings


def set_default_settings(settings: ValidatorSettings) -> None:
    """Replaces the shared default settings.

    Args:
        settings (ValidatorSettings): The settings new validators should use
            when none are passed explicitly.
    """
    global _default_settings
    with _default_settings_lock:
        _default_settings = settings


def reset_default_settings() -> ValidatorSettings:
    """Restores the built-in defaults and returns the fresh settings object."""
    settings = ValidatorSettings()
    set_default_settings(settings)
    return settings
