"""Structures de données du magasin clé=valeur.

Ce module définit :
    - SetOutcome : nature de la modification effectuée par un Set.
    - Entry : une ligne clé=valeur d'un fichier de configuration.
    - KeyValueSpec : argument "clé=valeur" ou "clé" d'un Set.
    - SetResult : compte rendu immuable d'un Set.
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Optional

from linux_kvconf.errors.exceptions import MissingArgumentsError


class SetOutcome(StrEnum):
    """Classification de ce qu'a fait un Set."""

    MODIFIED = "modified"
    COMMENTED = "commented"
    APPENDED = "appended"


@dataclass(frozen=True)
class Entry:
    """Une entrée clé=valeur d'un fichier de configuration.

    Attributes:
        line_number: Numéro de ligne (à partir de 1).
        indentation: Blancs de début de ligne, conservés tels quels.
        key: Identifiant de l'entrée, sans blancs autour.
        value: Texte après le premier '=', sans blancs autour.
        active: False si la ligne est commentée ('#').
        raw_line: Texte d'origine sans fin de ligne.
        newline: Fin de ligne d'origine ("\\n", "\\r\\n" ou "").
    """

    line_number: int
    indentation: str
    key: str
    value: str
    active: bool
    raw_line: str
    newline: str = "\n"


@dataclass(frozen=True)
class KeyValueSpec:
    """Argument d'un Set découpé sur le premier '='.

    Attributes:
        key: Clé ciblée.
        value: Nouvelle valeur, écrite octet pour octet ; None quand
            l'argument ne contient pas de '=' (mise en commentaire).
    """

    key: str
    value: Optional[str] = None

    @property
    def is_assignment(self) -> bool:
        return self.value is not None


def parse_spec(spec: str) -> KeyValueSpec:
    """Découpe un argument "clé=valeur" ou "clé".

    Seuls les blancs autour de la clé sont retirés ; la valeur est
    conservée telle que fournie.

    Args:
        spec: Argument brut.

    Returns:
        KeyValueSpec correspondant.

    Raises:
        MissingArgumentsError: Si l'argument ou la clé est vide.
    """
    if not spec:
        raise MissingArgumentsError("Argument clé=valeur manquant")

    key, sep, value = spec.partition("=")
    key = key.strip()
    if not key:
        raise MissingArgumentsError(f"Clé manquante dans {spec!r}")
    return KeyValueSpec(key=key, value=value if sep else None)


@dataclass(frozen=True)
class SetResult:
    """Compte rendu d'un Set, destiné aux logs de l'appelant.

    Attributes:
        path: Fichier modifié.
        key: Clé ciblée.
        value: Valeur écrite, None pour une mise en commentaire.
        outcome: Modification effectuée.
        line_number: Ligne touchée (à partir de 1).
    """

    path: Path
    key: str
    value: Optional[str]
    outcome: SetOutcome
    line_number: int

    def describe(self) -> str:
        """Retourne la ligne d'état lisible affichée par la CLI."""
        if self.outcome is SetOutcome.MODIFIED:
            return f"Élément modifié : {self.key} = {self.value}"
        if self.outcome is SetOutcome.COMMENTED:
            return f"Élément mis en commentaire : {self.key}"
        if self.value is None:
            return f"Élément ajouté en commentaire : {self.key}"
        return f"Élément ajouté : {self.key} = {self.value}"
