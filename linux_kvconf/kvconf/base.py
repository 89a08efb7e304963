"""Interface abstraite du magasin de configuration clé=valeur."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from linux_kvconf.errors.exceptions import KeyNotFoundError
from linux_kvconf.kvconf.models import Entry, SetResult


class ConfigStore(ABC):
    """Interface pour la lecture et la modification de fichiers clé=valeur.

    La lecture s'adresse à un fichier par son nom logique
    (``<base>/etc/<nom>.conf``) ; la modification s'adresse à un chemin
    fourni par l'appelant. Les deux points d'entrée restent distincts.
    """

    @abstractmethod
    def resolve(self, name: str) -> Path:
        """Retourne le chemin du fichier associé à un nom logique."""
        pass

    @abstractmethod
    def get_by_name(self, name: str, key: str) -> str:
        """Lit la valeur d'une clé dans un fichier nommé.

        Args:
            name: Nom logique du fichier (ex: "api").
            key: Clé à lire.

        Returns:
            Valeur de la première entrée active, sans blancs autour.

        Raises:
            MissingArgumentsError: Si name ou key est vide.
            ResourceNotFoundError: Si le fichier n'existe pas.
            KeyNotFoundError: Si aucune entrée active ne correspond.
        """
        pass

    @abstractmethod
    def get_by_path(self, path: Union[str, Path], key: str) -> str:
        """Lit la valeur d'une clé dans un fichier désigné par son chemin.

        Mêmes règles et exceptions que get_by_name().
        """
        pass

    @abstractmethod
    def entries(self, name: str) -> list[Entry]:
        """Liste les entrées actives d'un fichier nommé."""
        pass

    @abstractmethod
    def set_by_path(self, path: Union[str, Path], spec: str) -> SetResult:
        """Modifie, commente ou ajoute une entrée.

        Args:
            path: Chemin du fichier, qui doit exister.
            spec: "clé=valeur" pour affecter, "clé" pour commenter.

        Returns:
            SetResult décrivant la modification effectuée.

        Raises:
            MissingArgumentsError: Si path ou spec est vide.
            ResourceNotFoundError: Si le fichier n'existe pas.
            WriteFailureError: Si la réécriture échoue.
        """
        pass

    def lookup(
        self, name: str, key: str, default: Optional[str] = None
    ) -> Optional[str]:
        """Comme get_by_name(), mais retourne default si la clé est absente.

        ResourceNotFoundError reste propagée.
        """
        try:
            return self.get_by_name(name, key)
        except KeyNotFoundError:
            return default
