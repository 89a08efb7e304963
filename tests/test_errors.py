#!/usr/bin/env python3
"""Tests unitaires pour le module errors."""

import io
import unittest
from unittest.mock import MagicMock

from linux_kvconf.errors.base import ErrorHandlerChain
from linux_kvconf.errors.exceptions import (ApplicationError,
                                            ConfigurationError,
                                            KeyNotFoundError,
                                            MissingArgumentsError,
                                            ReadFailureError,
                                            ResourceNotFoundError,
                                            WriteFailureError)
from linux_kvconf.errors.console_handler import ConsoleErrorHandler
from linux_kvconf.errors.logger_handler import LoggerErrorHandler


class TestExceptions(unittest.TestCase):
    """Tests pour la hiérarchie d'exceptions et les codes de sortie."""

    def test_exit_codes(self):
        self.assertEqual(ApplicationError("x").exit_code, 1)
        self.assertEqual(ResourceNotFoundError("/a").exit_code, 1)
        self.assertEqual(KeyNotFoundError("k", "/a").exit_code, 1)
        self.assertEqual(WriteFailureError("x").exit_code, 1)
        self.assertEqual(ReadFailureError("x").exit_code, 1)
        self.assertEqual(MissingArgumentsError("x").exit_code, 2)

    def test_hierarchy(self):
        for error_type in (ResourceNotFoundError, KeyNotFoundError,
                           ReadFailureError, WriteFailureError):
            self.assertTrue(issubclass(error_type, ConfigurationError))
        self.assertTrue(issubclass(MissingArgumentsError, ApplicationError))

    def test_messages_reference_path(self):
        self.assertIn("/etc/api.conf", str(ResourceNotFoundError("/etc/api.conf")))
        error = KeyNotFoundError("host", "/etc/api.conf")
        self.assertIn("host", str(error))
        self.assertEqual(error.key, "host")


class TestConsoleErrorHandler(unittest.TestCase):
    """Tests pour ConsoleErrorHandler."""

    def setUp(self):
        self.stream = io.StringIO()
        self.handler = ConsoleErrorHandler(stream=self.stream)

    def test_handle_missing_arguments(self):
        """Vérifie le message pour MissingArgumentsError."""
        self.handler.handle(MissingArgumentsError("Arguments manquants : key"))
        output = self.stream.getvalue()
        self.assertIn("MissingArgumentsError: Arguments manquants : key", output)
        self.assertIn("--help", output)

    def test_handle_resource_not_found(self):
        """Vérifie le message pour ResourceNotFoundError."""
        self.handler.handle(ResourceNotFoundError("/base/etc/api.conf"))
        output = self.stream.getvalue()
        self.assertIn("/base/etc/api.conf", output)
        self.assertIn("Vérifiez le nom ou le chemin", output)

    def test_handle_write_failure(self):
        self.handler.handle(WriteFailureError("disque plein"))
        self.assertIn("permissions", self.stream.getvalue())

    def test_handle_read_failure(self):
        self.handler.handle(ReadFailureError("octets invalides"))
        self.assertIn("encodage", self.stream.getvalue())

    def test_handle_subclass_matches_parent(self):
        """KeyNotFoundError hérite de ConfigurationError, doit matcher."""
        self.handler.handle(KeyNotFoundError("host", "/a"))
        self.assertIn(
            "Vérifiez votre fichier de configuration.", self.stream.getvalue()
        )

    def test_custom_solution_takes_precedence(self):
        handler = ConsoleErrorHandler(
            solutions={ResourceNotFoundError: "Lancez install.sh"},
            stream=self.stream,
        )
        handler.handle(ResourceNotFoundError("/a"))
        self.assertIn("Solution : Lancez install.sh", self.stream.getvalue())

    def test_handle_unknown_error(self):
        """Vérifie le message pour une erreur inconnue."""
        self.handler.handle(RuntimeError("erreur inconnue"))
        output = self.stream.getvalue()
        self.assertIn("Erreur inattendue: erreur inconnue", output)
        self.assertIn("Type: RuntimeError", output)


class TestLoggerErrorHandler(unittest.TestCase):
    """Tests pour LoggerErrorHandler."""

    def setUp(self):
        self.mock_logger = MagicMock()
        self.handler = LoggerErrorHandler(self.mock_logger)

    def test_handle_known_error(self):
        """Vérifie le log pour une erreur connue."""
        self.handler.handle(ConfigurationError("config invalide"))
        self.mock_logger.log_error.assert_called_once_with(
            "ConfigurationError (code 1): config invalide"
        )

    def test_handle_unknown_error(self):
        """Vérifie le log pour une erreur inconnue."""
        self.handler.handle(RuntimeError("runtime error"))
        self.mock_logger.log_error.assert_called_once_with(
            "Erreur inattendue: RuntimeError: runtime error"
        )


class TestErrorHandlerChain(unittest.TestCase):
    """Tests pour ErrorHandlerChain."""

    def test_handle_calls_all_handlers(self):
        """Vérifie que tous les handlers sont appelés."""
        handler1 = MagicMock()
        handler2 = MagicMock()
        chain = ErrorHandlerChain().add_handler(handler1).add_handler(handler2)

        error = RuntimeError("test")
        chain.handle(error)

        handler1.handle.assert_called_once_with(error)
        handler2.handle.assert_called_once_with(error)

    def test_handle_and_exit_explicit_code(self):
        """Vérifie que handle_and_exit appelle sys.exit."""
        handler = MagicMock()
        chain = ErrorHandlerChain().add_handler(handler)

        error = RuntimeError("test")
        with self.assertRaises(SystemExit) as ctx:
            chain.handle_and_exit(error, exit_code=3)

        self.assertEqual(ctx.exception.code, 3)
        handler.handle.assert_called_once_with(error)

    def test_handle_and_exit_uses_error_code(self):
        chain = ErrorHandlerChain()
        with self.assertRaises(SystemExit) as ctx:
            chain.handle_and_exit(MissingArgumentsError("x"))
        self.assertEqual(ctx.exception.code, 2)

    def test_handle_and_exit_defaults_to_one(self):
        chain = ErrorHandlerChain()
        with self.assertRaises(SystemExit) as ctx:
            chain.handle_and_exit(RuntimeError("x"))
        self.assertEqual(ctx.exception.code, 1)


if __name__ == '__main__':
    unittest.main()
