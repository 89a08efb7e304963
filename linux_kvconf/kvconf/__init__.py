"""Module KVConf pour les fichiers de configuration plats clé=valeur.

Ce module lit et modifie des fichiers ligne à ligne en conservant
leur mise en forme (indentation, espacements, commentaires, fins
de ligne) :
- Lecture d'une valeur par nom logique (``<base>/etc/<nom>.conf``)
- Modification, mise en commentaire ou ajout d'une entrée par chemin
- Réécriture atomique et verrou par fichier

Classes principales:
    - ConfigStore: Interface abstraite du magasin
    - LinuxConfigStore: Implémentation sur fichiers
    - Entry, KeyValueSpec, SetResult, SetOutcome: Structures de données

Example:
    >>> from linux_kvconf.kvconf import LinuxConfigStore
    >>> from linux_kvconf.config import StoreSettings
    >>> store = LinuxConfigStore(StoreSettings(base_dir="/opt/tools"))
    >>> store.get_by_name("logger", "level")
    '1'
    >>> store.set_by_path("/etc/app.conf", "timeout=30").outcome
    <SetOutcome.APPENDED: 'appended'>
"""

from linux_kvconf.kvconf.base import ConfigStore
from linux_kvconf.kvconf.models import (
    Entry,
    KeyValueSpec,
    SetOutcome,
    SetResult,
    parse_spec,
)
from linux_kvconf.kvconf.store import LinuxConfigStore

__all__ = [
    # Interface abstraite
    "ConfigStore",
    # Implémentation
    "LinuxConfigStore",
    # Structures de données
    "Entry",
    "KeyValueSpec",
    "SetOutcome",
    "SetResult",
    # Fonctions utilitaires
    "parse_spec",
]
