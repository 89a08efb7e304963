"""Réglages du magasin de configuration.

StoreSettings regroupe la convention de nommage des fichiers
(``<base>/etc/<nom>.conf``), l'encodage, la stratégie d'écriture
et les options du logger. Les réglages sont passés explicitement
aux composants à leur construction.
"""

import os
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, field_validator

from linux_kvconf.config.loader import ConfigLoader, FileConfigLoader
from linux_kvconf.logging.levels import parse_log_level

BASE_ENV_VAR = "KVCONF_BASE"


class StoreSettings(BaseModel):
    """Réglages du ConfigStore.

    Attributes:
        base_dir: Répertoire racine de l'installation.
        conf_dir: Sous-répertoire des fichiers nommés.
        conf_suffix: Extension des fichiers nommés.
        encoding: Encodage des fichiers de configuration.
        atomic_write: Réécriture via fichier temporaire + renommage.
        lock_file: Verrou consultatif ``<fichier>.lock`` entre processus.
        log_dir: Sous-répertoire des fichiers de log.
        log_level: Niveau de log (0..3 ou nom), None pour lire
            ``etc/logger.conf``.
    """

    model_config = {"extra": "forbid"}

    base_dir: Path = Path(".")
    conf_dir: str = "etc"
    conf_suffix: str = ".conf"
    encoding: str = "utf-8"
    atomic_write: bool = True
    lock_file: bool = False
    log_dir: str = "log"
    log_level: Optional[Union[int, str]] = None

    @field_validator("conf_suffix")
    @classmethod
    def suffix_starts_with_dot(cls, v: str) -> str:
        if v and not v.startswith("."):
            raise ValueError("L'extension doit commencer par un point")
        return v

    @field_validator("log_level")
    @classmethod
    def level_is_known(cls, v):
        if v is not None:
            parse_log_level(v)
        return v

    @property
    def conf_root(self) -> Path:
        """Répertoire contenant les fichiers nommés."""
        return self.base_dir / self.conf_dir


def load_settings(
    path: Optional[Union[str, Path]] = None,
    base_dir: Optional[Union[str, Path]] = None,
    loader: Optional[ConfigLoader] = None,
) -> StoreSettings:
    """
    Construit les réglages du magasin.

    Ordre de priorité pour le répertoire racine : argument base_dir,
    clé base_dir du fichier, variable d'environnement KVCONF_BASE,
    répertoire courant.

    Args:
        path: Fichier de réglages TOML ou JSON optionnel
        base_dir: Répertoire racine imposé par l'appelant
        loader: Chargeur injectable (FileConfigLoader par défaut)

    Returns:
        Instance validée de StoreSettings

    Raises:
        FileNotFoundError: Si path est fourni mais absent
        pydantic.ValidationError: Si les réglages sont invalides
    """
    data: dict = {}
    if path is not None:
        data = dict((loader or FileConfigLoader()).load(path))

    if base_dir is not None:
        data["base_dir"] = base_dir
    elif "base_dir" not in data:
        data["base_dir"] = os.environ.get(BASE_ENV_VAR, ".")

    return StoreSettings.model_validate(data)
