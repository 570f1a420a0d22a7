"""Configuration management for javadc."""

from .config_manager import ConfigChangeListener, ConfigManager

__all__ = [
    "ConfigChangeListener",
    "ConfigManager",
]
