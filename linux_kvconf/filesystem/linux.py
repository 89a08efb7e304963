"""Implémentation Linux de l'accès aux fichiers texte."""

import fcntl
import os
import shutil
import tempfile
import threading
import weakref
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from linux_kvconf.errors.exceptions import ReadFailureError, WriteFailureError
from linux_kvconf.filesystem.base import TextResource
from linux_kvconf.logging.base import Logger

# Les octets invalides pour l'encodage sont conservés tels quels
DECODE_ERRORS = "surrogateescape"


class LinuxTextResource(TextResource):
    """
    Implémentation Linux de l'accès aux fichiers de configuration.

    Les fichiers sont lus avec ``newline=""`` afin que les fins de
    ligne d'origine soient réécrites à l'identique. Les octets qui ne
    respectent pas l'encodage (commentaire en latin-1 dans un fichier
    lu en UTF-8) sont restitués à l'identique à l'écriture. L'écriture
    passe par défaut par un fichier temporaire du même répertoire,
    synchronisé puis renommé sur l'original (os.replace) : un arrêt
    brutal ne laisse jamais de fichier tronqué.

    Toutes les opérations sont loggées via l'instance Logger.
    """

    _registry_guard = threading.Lock()
    # Un verrou disparaît du registre dès que plus personne ne le tient
    _path_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = (
        weakref.WeakValueDictionary()
    )

    def __init__(
        self,
        logger: Optional[Logger] = None,
        encoding: str = "utf-8",
        atomic_write: bool = True,
        lock_file: bool = False,
    ) -> None:
        """
        Initialise l'accès aux fichiers.

        Args:
            logger: Instance de Logger optionnelle
            encoding: Encodage des fichiers
            atomic_write: Écriture par fichier temporaire + renommage
            lock_file: Prendre en plus un verrou flock sur
                ``<fichier>.lock`` (coordination entre processus)
        """
        self.logger = logger
        self.encoding = encoding
        self.atomic_write = atomic_write
        self.lock_file = lock_file

    def _log_debug(self, message: str) -> None:
        if self.logger:
            self.logger.log_debug(message)

    def _log_error(self, message: str) -> None:
        if self.logger:
            self.logger.log_error(message)

    def exists(self, path: Path) -> bool:
        """Vérifie que le chemin désigne un fichier régulier."""
        return Path(path).is_file()

    def read_text(self, path: Path) -> str:
        """
        Lit le contenu d'un fichier.

        Raises:
            ReadFailureError: Si la lecture échoue (fichier absent,
                droits, encodage inconnu)
        """
        try:
            with open(
                path, "r", encoding=self.encoding,
                errors=DECODE_ERRORS, newline="",
            ) as f:
                content = f.read()
        except (OSError, UnicodeError, LookupError) as e:
            self._log_error(f"Échec de la lecture de {path}: {e}")
            raise ReadFailureError(
                f"Impossible de lire {path}: {e}"
            ) from e
        self._log_debug(f"Fichier {path} lu ({len(content)} caractères).")
        return content

    def write_text(self, path: Path, content: str) -> None:
        """
        Réécrit un fichier.

        Raises:
            WriteFailureError: Si l'écriture échoue (droits, disque plein)
        """
        path = Path(path)
        try:
            if self.atomic_write:
                self._replace_atomically(path, content)
            else:
                with open(
                    path, "w", encoding=self.encoding,
                    errors=DECODE_ERRORS, newline="",
                ) as f:
                    f.write(content)
        except (OSError, UnicodeError, LookupError) as e:
            self._log_error(f"Échec de l'écriture de {path}: {e}")
            raise WriteFailureError(
                f"Impossible d'écrire {path}: {e}"
            ) from e
        self._log_debug(f"Fichier {path} réécrit.")

    def _replace_atomically(self, path: Path, content: str) -> None:
        """Écrit dans un temporaire du même répertoire puis renomme."""
        fd, temp_path = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(
                fd, "w", encoding=self.encoding,
                errors=DECODE_ERRORS, newline="",
            ) as tmp_file:
                tmp_file.write(content)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            if path.exists():
                shutil.copymode(path, temp_path)
            os.replace(temp_path, path)
        except BaseException:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    @classmethod
    def _thread_lock_for(cls, path: Path) -> threading.Lock:
        key = os.path.realpath(path)
        with cls._registry_guard:
            lock = cls._path_locks.get(key)
            if lock is None:
                lock = threading.Lock()
                cls._path_locks[key] = lock
            return lock

    @contextmanager
    def locked(self, path: Path) -> Iterator[None]:
        """
        Verrouille un chemin pour la durée d'une opération.

        Un verrou par chemin réel est partagé par tous les threads du
        processus. Avec lock_file, un verrou consultatif flock sur
        ``<fichier>.lock`` coordonne aussi les processus ; il n'est
        créé que si le fichier cible existe.
        """
        path = Path(path)
        thread_lock = self._thread_lock_for(path)
        with thread_lock:
            if not self.lock_file or not self.exists(path):
                yield
                return
            lock_path = path.with_name(path.name + ".lock")
            try:
                fh = open(lock_path, "a")
            except OSError as e:
                raise WriteFailureError(
                    f"Verrou {lock_path} inaccessible: {e}"
                ) from e
            with fh:
                fcntl.flock(fh.fileno(), fcntl.LOCK_EX)
                try:
                    yield
                finally:
                    fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
