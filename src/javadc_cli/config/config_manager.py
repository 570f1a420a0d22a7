"""Configuration manager for javadc.

Options live in two categories (server and decompiler), are optionally loaded
from / saved to a JSON file, and can be overridden through ``JAVADC_*``
environment variables.
"""

from __future__ import annotations

import json
import logging
import os

from pathlib import Path
from typing import Any

from javadc_cli.mcp_utils.debug_logger import DebugLogger

logger = logging.getLogger(__name__)

_TRUTHY = ("true", "1", "yes", "on")


class ConfigChangeListener:
    """Interface for configuration change listeners."""

    def on_config_changed(self, category: str, name: str, old_value: Any, new_value: Any) -> None:
        """Called when a configuration value changes."""


class ConfigManager:
    """Configuration manager for the javadc server."""

    # Configuration option categories
    SERVER_OPTIONS = "Server Options"
    DECOMPILER_OPTIONS = "Decompiler Options"

    # Option names
    SERVER_PORT = "Server Port"
    SERVER_HOST = "Server Host"
    DEBUG_MODE = "Debug Mode"
    CFR_JAR_PATH = "CFR Jar Path"
    JVM_PATH = "JVM Path"
    CLASSPATH_ENV_VAR = "Classpath Environment Variable"
    EXTRA_CFR_OPTIONS = "Extra CFR Options"

    # Default values
    DEFAULT_PORT = 3000
    DEFAULT_HOST = "127.0.0.1"
    DEFAULT_DEBUG_MODE = False
    DEFAULT_CFR_JAR_PATH = "cfr.jar"
    DEFAULT_JVM_PATH = None
    DEFAULT_CLASSPATH_ENV_VAR = "CLASSPATH"

    def __init__(self, config_file: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_file: Optional path to a JSON configuration file
        """
        self.config_file = config_file
        self._config: dict[str, dict[str, Any]] = {}
        self._change_listeners: set[ConfigChangeListener] = set()

        self._load_config()
        self._apply_env_overrides()

    def _load_config(self) -> None:
        """Load configuration from file if available."""
        if self.config_file and self.config_file.exists():
            try:
                with open(self.config_file) as f:
                    loaded = json.load(f)
                self._config = loaded if isinstance(loaded, dict) else {}
                DebugLogger.debug(self, f"Loaded configuration from {self.config_file}")
            except Exception as e:
                logger.warning(f"Failed to load config file {self.config_file}: {e}")
                self._config = {}
        else:
            self._config = {}

        for category in (self.SERVER_OPTIONS, self.DECOMPILER_OPTIONS):
            if not isinstance(self._config.get(category), dict):
                self._config[category] = {}

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides.  Overrides are never written back to the file."""
        if "JAVADC_PORT" in os.environ:
            try:
                port = int(os.environ["JAVADC_PORT"])
                self.set_server_port(port, persist=False)
            except ValueError:
                logger.warning("Invalid JAVADC_PORT value")

        if "JAVADC_HOST" in os.environ:
            host = os.environ["JAVADC_HOST"].strip()
            if host:
                self.set_server_host(host, persist=False)

        if "JAVADC_DEBUG" in os.environ:
            self.set_debug_mode(os.environ["JAVADC_DEBUG"].strip().lower() in _TRUTHY, persist=False)

        if os.environ.get("JAVADC_CFR_JAR", "").strip():
            self._set_option(self.DECOMPILER_OPTIONS, self.CFR_JAR_PATH, os.environ["JAVADC_CFR_JAR"].strip(), persist=False)

        if os.environ.get("JAVADC_JVM_PATH", "").strip():
            self._set_option(self.DECOMPILER_OPTIONS, self.JVM_PATH, os.environ["JAVADC_JVM_PATH"].strip(), persist=False)

        if os.environ.get("JAVADC_CLASSPATH_ENV", "").strip():
            self.set_classpath_env_var(os.environ["JAVADC_CLASSPATH_ENV"].strip(), persist=False)

    def save_config(self) -> None:
        """Save configuration to file."""
        if self.config_file:
            try:
                self.config_file.parent.mkdir(parents=True, exist_ok=True)
                with open(self.config_file, "w") as f:
                    json.dump(self._config, f, indent=2)
                DebugLogger.debug(self, f"Saved configuration to {self.config_file}")
            except Exception as e:
                logger.error(f"Failed to save config file {self.config_file}: {e}")

    def add_change_listener(self, listener: ConfigChangeListener) -> None:
        """Add a configuration change listener."""
        self._change_listeners.add(listener)

    def remove_change_listener(self, listener: ConfigChangeListener) -> None:
        """Remove a configuration change listener."""
        self._change_listeners.discard(listener)

    def _notify_change_listeners(self, category: str, name: str, old_value: Any, new_value: Any) -> None:
        for listener in self._change_listeners:
            try:
                listener.on_config_changed(category, name, old_value, new_value)
            except Exception as e:
                logger.error(f"Error notifying config change listener: {e}")

    def _get_option(self, category: str, name: str, default_value: Any = None) -> Any:
        category_config = self._config.get(category, {})
        return category_config.get(name, default_value)

    def _set_option(self, category: str, name: str, value: Any, persist: bool = True) -> None:
        if category not in self._config:
            self._config[category] = {}

        old_value = self._config[category].get(name)
        self._config[category][name] = value

        self._notify_change_listeners(category, name, old_value, value)

        if persist and self.config_file:
            self.save_config()

    # Server configuration methods
    def get_server_port(self) -> int:
        """Get the HTTP server port."""
        return self._get_option(self.SERVER_OPTIONS, self.SERVER_PORT, self.DEFAULT_PORT)

    def set_server_port(self, port: int, persist: bool = True) -> None:
        """Set the HTTP server port."""
        if port < 1 or port > 65535:
            raise ValueError("Port must be between 1 and 65535")
        self._set_option(self.SERVER_OPTIONS, self.SERVER_PORT, port, persist)

    def get_server_host(self) -> str:
        """Get the HTTP server bind host."""
        return self._get_option(self.SERVER_OPTIONS, self.SERVER_HOST, self.DEFAULT_HOST)

    def set_server_host(self, host: str, persist: bool = True) -> None:
        """Set the HTTP server bind host."""
        if not host or not host.strip():
            raise ValueError("Host cannot be empty")
        self._set_option(self.SERVER_OPTIONS, self.SERVER_HOST, host.strip(), persist)

    def is_debug_mode(self) -> bool:
        """Check if debug mode is enabled."""
        return self._get_option(self.SERVER_OPTIONS, self.DEBUG_MODE, self.DEFAULT_DEBUG_MODE)

    def set_debug_mode(self, enabled: bool, persist: bool = True) -> None:
        """Set debug mode."""
        self._set_option(self.SERVER_OPTIONS, self.DEBUG_MODE, bool(enabled), persist)
        DebugLogger.set_debug_enabled(bool(enabled))

    # Decompiler configuration methods
    def get_cfr_jar_path(self) -> Path:
        """Get the path of the CFR jar put on the JVM classpath."""
        return Path(self._get_option(self.DECOMPILER_OPTIONS, self.CFR_JAR_PATH, self.DEFAULT_CFR_JAR_PATH))

    def set_cfr_jar_path(self, path: str | Path, persist: bool = True) -> None:
        """Set the CFR jar path.  The jar must exist."""
        jar = Path(path).expanduser()
        if not jar.is_file():
            raise ValueError(f"CFR jar not found: {jar}")
        self._set_option(self.DECOMPILER_OPTIONS, self.CFR_JAR_PATH, str(jar), persist)

    def get_jvm_path(self) -> str | None:
        """Get an explicit libjvm path, or None to let JPype find the default JVM."""
        return self._get_option(self.DECOMPILER_OPTIONS, self.JVM_PATH, self.DEFAULT_JVM_PATH)

    def get_classpath_env_var(self) -> str:
        """Name of the environment variable consulted when a package lookup has no classpath."""
        return self._get_option(self.DECOMPILER_OPTIONS, self.CLASSPATH_ENV_VAR, self.DEFAULT_CLASSPATH_ENV_VAR)

    def set_classpath_env_var(self, name: str, persist: bool = True) -> None:
        """Set the classpath environment variable name."""
        if not name or not name.strip():
            raise ValueError("Environment variable name cannot be empty")
        self._set_option(self.DECOMPILER_OPTIONS, self.CLASSPATH_ENV_VAR, name.strip(), persist)

    def get_extra_cfr_options(self) -> dict[str, str]:
        """Additional CFR options passed to every decompilation."""
        options = self._get_option(self.DECOMPILER_OPTIONS, self.EXTRA_CFR_OPTIONS, {}) or {}
        return {str(k): str(v) for k, v in options.items()}

    def set_extra_cfr_options(self, options: dict[str, Any], persist: bool = True) -> None:
        """Set additional CFR options.  Keys must be alphanumeric."""
        for key in options:
            if not str(key).isalnum():
                raise ValueError(f"Invalid CFR option name: {key}")
        self._set_option(self.DECOMPILER_OPTIONS, self.EXTRA_CFR_OPTIONS, {str(k): str(v) for k, v in options.items()}, persist)

    def get_all_options(self) -> dict[str, dict[str, Any]]:
        """Get all configuration options."""
        return {category: dict(values) for category, values in self._config.items()}

    def reset_to_defaults(self) -> None:
        """Reset all options to defaults."""
        old_config = self.get_all_options()
        self._config = {self.SERVER_OPTIONS: {}, self.DECOMPILER_OPTIONS: {}}
        self._notify_change_listeners(self.SERVER_OPTIONS, "*", old_config, self._config)

        if self.config_file:
            self.save_config()

    def __str__(self) -> str:
        return f"ConfigManager(config_file={self.config_file}, options={len(self._config)})"
