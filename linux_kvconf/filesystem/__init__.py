"""Module d'accès aux fichiers texte."""

from linux_kvconf.filesystem.base import TextResource
from linux_kvconf.filesystem.linux import LinuxTextResource

__all__ = [
    "TextResource",
    "LinuxTextResource",
]
