"""Interface abstraite pour l'accès aux fichiers texte."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from pathlib import Path


class TextResource(ABC):
    """Interface de lecture/écriture d'un fichier texte complet."""

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """
        Vérifie si un fichier existe.

        Args:
            path: Chemin du fichier

        Returns:
            True si le fichier existe, False sinon
        """
        pass

    @abstractmethod
    def read_text(self, path: Path) -> str:
        """
        Lit le contenu complet d'un fichier, fins de ligne comprises.

        Args:
            path: Chemin du fichier

        Returns:
            Contenu du fichier
        """
        pass

    @abstractmethod
    def write_text(self, path: Path, content: str) -> None:
        """
        Remplace le contenu complet d'un fichier.

        Args:
            path: Chemin du fichier
            content: Nouveau contenu
        """
        pass

    @abstractmethod
    def locked(self, path: Path) -> AbstractContextManager:
        """
        Sérialise les accès lecture-modification-écriture sur un fichier.

        Args:
            path: Chemin du fichier

        Returns:
            Gestionnaire de contexte tenant le verrou
        """
        pass
