"""
Linux KVConf - Magasin de configuration clé=valeur pour scripts Linux.

Modules disponibles:
- kvconf: Lecture et modification de fichiers plats clé=valeur
  (ConfigStore, LinuxConfigStore)
- config: Réglages du magasin (StoreSettings, FileConfigLoader)
- filesystem: Accès aux fichiers texte (TextResource, LinuxTextResource)
- logging: Gestion des logs (Logger, FileLogger, SecurityLogger)
- errors: Exceptions et handlers d'erreurs
- cli: Ligne de commande kvconf
"""

__version__ = "1.0.1"

from linux_kvconf.logging import (
    Logger,
    FileLogger,
    SecurityLogger,
    SecurityEvent,
    SecurityEventType,
    parse_log_level,
    level_from_store,
)
from linux_kvconf.errors import (
    ApplicationError,
    MissingArgumentsError,
    ConfigurationError,
    ResourceNotFoundError,
    KeyNotFoundError,
    ReadFailureError,
    WriteFailureError,
    ErrorHandler,
    ErrorHandlerChain,
    ConsoleErrorHandler,
    LoggerErrorHandler,
)
from linux_kvconf.config import (
    ConfigLoader,
    FileConfigLoader,
    StoreSettings,
    load_settings,
)
from linux_kvconf.filesystem import TextResource, LinuxTextResource
from linux_kvconf.kvconf import (
    ConfigStore,
    LinuxConfigStore,
    Entry,
    KeyValueSpec,
    SetOutcome,
    SetResult,
    parse_spec,
)

__all__ = [
    # Logging
    "Logger",
    "FileLogger",
    "SecurityLogger",
    "SecurityEvent",
    "SecurityEventType",
    "parse_log_level",
    "level_from_store",
    # Errors
    "ApplicationError",
    "MissingArgumentsError",
    "ConfigurationError",
    "ResourceNotFoundError",
    "KeyNotFoundError",
    "ReadFailureError",
    "WriteFailureError",
    "ErrorHandler",
    "ErrorHandlerChain",
    "ConsoleErrorHandler",
    "LoggerErrorHandler",
    # Config
    "ConfigLoader",
    "FileConfigLoader",
    "StoreSettings",
    "load_settings",
    # Filesystem
    "TextResource",
    "LinuxTextResource",
    # KVConf
    "ConfigStore",
    "LinuxConfigStore",
    "Entry",
    "KeyValueSpec",
    "SetOutcome",
    "SetResult",
    "parse_spec",
]
