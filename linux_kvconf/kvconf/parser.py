"""Analyse et rendu ligne à ligne des fichiers clé=valeur.

Fonctions pures sur du texte : aucune lecture ni écriture de fichier.
Les lignes sont manipulées avec leur fin de ligne afin que toute ligne
non ciblée soit réécrite à l'octet près.
"""

import re
from typing import Optional

from linux_kvconf.kvconf.models import Entry

COMMENT_PREFIX = "# "

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")
_ENTRY_RE = re.compile(
    r"^(?P<indent>\s*)(?P<comment>#\s*)?"
    r"(?P<key>[^\s=#][^=]*?)\s*=(?P<value>.*)$"
)


def split_lines(text: str) -> list[str]:
    """Découpe un texte en lignes en conservant les fins de ligne."""
    return _LINE_RE.findall(text)


def split_newline(line: str) -> tuple[str, str]:
    """Sépare le contenu d'une ligne de sa fin de ligne."""
    if line.endswith("\r\n"):
        return line[:-2], "\r\n"
    if line.endswith("\n"):
        return line[:-1], "\n"
    return line, ""


def detect_newline(lines: list[str]) -> str:
    """Retourne la fin de ligne de la première ligne terminée."""
    for line in lines:
        _, newline = split_newline(line)
        if newline:
            return newline
    return "\n"


def _active_pattern(key: str) -> re.Pattern:
    return re.compile(rf"^\s*{re.escape(key)}\s*=")


def parse_line(line: str, line_number: int) -> Optional[Entry]:
    """Analyse une ligne.

    Returns:
        Entry (active ou commentée), ou None pour une ligne vide,
        un en-tête de section ou un texte libre.
    """
    body, newline = split_newline(line)
    match = _ENTRY_RE.match(body)
    if match is None:
        return None
    return Entry(
        line_number=line_number,
        indentation=match.group("indent"),
        key=match.group("key").strip(),
        value=match.group("value").strip(),
        active=match.group("comment") is None,
        raw_line=body,
        newline=newline,
    )


def parse_entries(text: str) -> list[Entry]:
    """Retourne toutes les entrées d'un texte, actives ou commentées."""
    entries = []
    for number, line in enumerate(split_lines(text), start=1):
        entry = parse_line(line, number)
        if entry is not None:
            entries.append(entry)
    return entries


def find_active(lines: list[str], key: str) -> Optional[int]:
    """
    Index de la première ligne active ``<blancs>clé<blancs>=``.

    La clé est échappée : aucun caractère n'y a de sens d'expression
    régulière. Une ligne commençant par '#' ne correspond jamais.
    """
    pattern = _active_pattern(key)
    for index, line in enumerate(lines):
        if pattern.match(line):
            return index
    return None


def value_of(line: str) -> str:
    """Texte après le premier '=', sans blancs autour."""
    body, _ = split_newline(line)
    return body.split("=", 1)[1].strip()


def infer_indentation(lines: list[str], key: str) -> str:
    """
    Indentation de la première ligne qui mentionne la clé.

    Une ligne mentionne la clé si, après ses blancs et un éventuel
    marqueur de commentaire, elle commence par la clé suivie d'un
    blanc, d'un '=' ou de la fin de ligne.
    """
    pattern = re.compile(rf"^(\s*)(?:#\s*)?{re.escape(key)}(?=[\s=]|$)")
    for line in lines:
        match = pattern.match(split_newline(line)[0])
        if match:
            return match.group(1)
    return ""


def render_assignment(line: str, key: str, value: str) -> str:
    """Réécrit une ligne active en ``<indentation>clé=valeur``."""
    body, newline = split_newline(line)
    indentation = body[:len(body) - len(body.lstrip())]
    return f"{indentation}{key}={value}{newline}"


def render_commented(line: str) -> str:
    """Préfixe une ligne par le marqueur de commentaire."""
    return COMMENT_PREFIX + line


def render_appended(
    indentation: str, key: str, value: Optional[str], newline: str = "\n"
) -> str:
    """
    Ligne ajoutée en fin de fichier.

    Sans valeur (argument sans '='), la ligne est un emplacement
    commenté ``# clé =``, marqué comme une ligne mise en commentaire :
    le marqueur précède l'indentation.
    """
    if value is None:
        return render_commented(f"{indentation}{key} ={newline}")
    return f"{indentation}{key} = {value}{newline}"
