"""
    ConsoleErrorHandler (générique, configurable)
"""
import sys

from linux_kvconf.errors.base import ErrorHandler
from linux_kvconf.errors.exceptions import (ApplicationError,
                                            MissingArgumentsError,
                                            ReadFailureError,
                                            ResourceNotFoundError,
                                            WriteFailureError,
                                            ConfigurationError)


class ConsoleErrorHandler(ErrorHandler):
    """Handler pour afficher les erreurs sur la sortie d'erreur.

    Distingue les erreurs connues (ApplicationError) des erreurs
    inattendues, et affiche un message de solution adapté au type
    d'erreur. La sortie standard reste réservée aux valeurs lues.
    """

    def __init__(
        self,
        solutions: dict[type[Exception], str] | None = None,
        stream=None,
    ) -> None:
        """Initialise le handler console.

        Args:
            solutions: Dictionnaire {TypeException: "message solution"}
                       prioritaire sur les messages par défaut.
            stream: Flux de sortie (défaut: sys.stderr à l'appel).
        """
        self.solutions = solutions or {}
        self.stream = stream

    def _print(self, message: str) -> None:
        print(message, file=self.stream or sys.stderr)

    def handle(self, error: Exception) -> None:
        """Affiche l'erreur avec un message utilisateur.

        Args:
            error: L'exception à afficher.
        """
        if isinstance(error, ApplicationError):
            self._handle_known_error(error)
        else:
            self._handle_unknown_error(error)

    def _solution_for(self, error: ApplicationError) -> str:
        for error_type, solution in self.solutions.items():
            if isinstance(error, error_type):
                return solution

        if isinstance(error, MissingArgumentsError):
            return "Indiquez tous les arguments requis (voir --help)."
        if isinstance(error, ResourceNotFoundError):
            return "Vérifiez le nom ou le chemin du fichier de configuration."
        if isinstance(error, WriteFailureError):
            return "Vérifiez l'espace disque et les permissions du fichier."
        if isinstance(error, ReadFailureError):
            return "Vérifiez les droits de lecture et l'encodage du fichier."
        if isinstance(error, ConfigurationError):
            return "Vérifiez votre fichier de configuration."
        return "Voir le message ci-dessus."

    def _handle_known_error(self, error: ApplicationError) -> None:
        """Gère les erreurs connues du projet.

        Args:
            error: L'exception métier à traiter.
        """
        self._print(f"{type(error).__name__}: {error}")
        self._print(f"Solution : {self._solution_for(error)}")

    def _handle_unknown_error(self, error: Exception) -> None:
        """Gère les erreurs inattendues.

        Args:
            error: L'exception non prévue à afficher.
        """
        self._print(f"Erreur inattendue: {error}")
        self._print(f"Type: {type(error).__name__}")
