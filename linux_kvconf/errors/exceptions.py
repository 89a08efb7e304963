"""
Module contenant les exceptions personnalisées pour linux_kvconf.

Chaque exception porte un code de sortie (exit_code) utilisé par la
ligne de commande et par les scripts qui consomment la bibliothèque :
0 succès, 1 ressource absente ou erreur de traitement, 2 arguments
manquants.
"""


class ApplicationError(Exception):
    """Exception de base pour toute la bibliothèque."""

    exit_code: int = 1


class MissingArgumentsError(ApplicationError):
    """Levée quand un paramètre obligatoire est absent ou vide."""

    exit_code = 2


class ConfigurationError(ApplicationError):
    """Exception de base pour toutes les erreurs de configuration."""
    pass


class ResourceNotFoundError(ConfigurationError):
    """Levée quand le fichier de configuration cible n'existe pas."""

    def __init__(self, path) -> None:
        self.path = path
        super().__init__(f"Fichier de configuration introuvable : {path}")


class KeyNotFoundError(ConfigurationError):
    """Levée quand aucune entrée active ne correspond à la clé."""

    def __init__(self, key: str, path) -> None:
        self.key = key
        self.path = path
        super().__init__(f"Clé '{key}' absente de {path}")


class WriteFailureError(ConfigurationError):
    """Levée quand la réécriture d'un fichier échoue (disque, droits)."""
    pass


class ReadFailureError(ConfigurationError):
    """Levée quand la lecture d'un fichier échoue (droits, encodage)."""
    pass
