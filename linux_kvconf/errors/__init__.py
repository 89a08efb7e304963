"""Module de gestion des erreurs."""

from linux_kvconf.errors.base import ErrorHandler, ErrorHandlerChain
from linux_kvconf.errors.exceptions import (ApplicationError,
                                            MissingArgumentsError,
                                            ConfigurationError,
                                            ResourceNotFoundError,
                                            KeyNotFoundError,
                                            ReadFailureError,
                                            WriteFailureError)
from linux_kvconf.errors.console_handler import ConsoleErrorHandler
from linux_kvconf.errors.logger_handler import LoggerErrorHandler


__all__ = [
    "ApplicationError",
    "MissingArgumentsError",
    "ConfigurationError",
    "ResourceNotFoundError",
    "KeyNotFoundError",
    "ReadFailureError",
    "WriteFailureError",
    "ErrorHandler",
    "ConsoleErrorHandler",
    "LoggerErrorHandler",
    "ErrorHandlerChain",
]
