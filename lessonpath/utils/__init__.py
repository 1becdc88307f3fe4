"""lessonpath utilities."""

from .config import Settings, load_settings, DEFAULT_CONFIG_PATH

__all__ = ["Settings", "load_settings", "DEFAULT_CONFIG_PATH"]
