"""Conversion des niveaux de log utilisés par les scripts.

Les scripts shell historiques expriment le niveau sous forme numérique
dans le fichier ``etc/logger.conf`` :

    0 debug, 1 info, 2 warn, 3 error
"""

import logging
from typing import Any, Optional

from linux_kvconf.errors.exceptions import ApplicationError

NUMERIC_LEVELS = {
    0: logging.DEBUG,
    1: logging.INFO,
    2: logging.WARNING,
    3: logging.ERROR,
}

LEVEL_ALIASES = {
    "WARN": "WARNING",
}

STANDARD_LEVELS = frozenset(
    (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR,
     logging.CRITICAL)
)


def parse_log_level(value: Any, default: int = logging.INFO) -> int:
    """Convertit un niveau de log en constante du module logging.

    Accepte un entier de l'échelle 0..3, sa forme texte ("2"), une
    constante du module logging (logging.DEBUG) ou un nom de niveau
    ("debug", "WARNING", "warn").

    Args:
        value: Niveau brut (int, str ou None).
        default: Niveau retourné si value est None ou vide.

    Returns:
        Constante numérique du module logging.

    Raises:
        ValueError: Si le niveau n'est pas reconnu.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"Niveau de log invalide : {value!r}")
    if isinstance(value, int):
        if value in NUMERIC_LEVELS:
            return NUMERIC_LEVELS[value]
        if value in STANDARD_LEVELS:
            return value
        raise ValueError(f"Niveau de log hors échelle 0..3 : {value}")

    text = str(value).strip()
    if not text:
        return default
    if text.isdigit():
        return parse_log_level(int(text), default)

    name = LEVEL_ALIASES.get(text.upper(), text.upper())
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Niveau de log inconnu : {value!r}")
    return level


def level_from_store(
    store,
    default: int = logging.INFO,
    resource: str = "logger",
    key: str = "level",
) -> int:
    """Lit le niveau de log depuis le fichier de configuration ``logger``.

    Reproduit l'initialisation des scripts : si le fichier ou la clé
    sont absents, ou si la valeur est invalide, le niveau par défaut
    est conservé.

    Args:
        store: ConfigStore exposant resolve() et get_by_name().
        default: Niveau par défaut.
        resource: Nom logique du fichier de configuration.
        key: Clé portant le niveau.

    Returns:
        Constante numérique du module logging.
    """
    try:
        if not store.resolve(resource).is_file():
            return default
        raw: Optional[str] = store.get_by_name(resource, key)
    except ApplicationError:
        return default
    try:
        return parse_log_level(raw, default)
    except ValueError:
        return default
