"""Module de configuration."""

from linux_kvconf.config.loader import ConfigLoader, FileConfigLoader
from linux_kvconf.config.settings import (
    BASE_ENV_VAR,
    StoreSettings,
    load_settings,
)

__all__ = [
    "ConfigLoader",
    "FileConfigLoader",
    "StoreSettings",
    "load_settings",
    "BASE_ENV_VAR",
]
