"""Magasin de configuration sur fichiers plats clé=valeur.

Ce module fournit LinuxConfigStore, qui lit et modifie des fichiers
de configuration ligne à ligne en préservant leur mise en forme :
seule la ligne ciblée change, toutes les autres sont réécrites à
l'octet près.

Example :
    Lecture d'un fichier nommé et modification d'un fichier système :

        from linux_kvconf import FileLogger, LinuxConfigStore, StoreSettings

        logger = FileLogger("/opt/tools/log/apply.log")
        store = LinuxConfigStore(
            StoreSettings(base_dir="/opt/tools"), logger=logger
        )
        host = store.get_by_name("api", "host")
        result = store.set_by_path(
            "/etc/postfix/main.cf", "smtpd_sasl_auth_enable=yes"
        )
        print(result.describe())
"""

from pathlib import Path
from typing import Optional, Union

from linux_kvconf.config.settings import StoreSettings
from linux_kvconf.errors.exceptions import (
    KeyNotFoundError,
    MissingArgumentsError,
    ResourceNotFoundError,
    WriteFailureError,
)
from linux_kvconf.filesystem.base import TextResource
from linux_kvconf.filesystem.linux import LinuxTextResource
from linux_kvconf.kvconf import parser
from linux_kvconf.kvconf.base import ConfigStore
from linux_kvconf.kvconf.models import (
    Entry,
    SetOutcome,
    SetResult,
    parse_spec,
)
from linux_kvconf.logging.base import Logger
from linux_kvconf.logging.security_logger import (
    SecurityEvent,
    SecurityEventType,
    SecurityLogger,
    current_user,
)


class LinuxConfigStore(ConfigStore):
    """Magasin clé=valeur sur le système de fichiers.

    Chaque appel relit le fichier : aucune donnée n'est mise en cache
    d'un appel à l'autre. Un Set est une séquence
    lecture-modification-écriture tenue sous le verrou du chemin.

    Attributes:
        settings: Réglages (répertoire racine, encodage, écriture).
        resource: Accès aux fichiers texte.
        _logger: Logger optionnel pour les diagnostics.
        _audit: SecurityLogger optionnel pour tracer les modifications.
    """

    def __init__(
        self,
        settings: Optional[StoreSettings] = None,
        logger: Optional[Logger] = None,
        resource: Optional[TextResource] = None,
        security_logger: Optional[SecurityLogger] = None,
    ) -> None:
        """Initialise le magasin.

        Args:
            settings: Réglages ; StoreSettings() par défaut.
            logger: Logger optionnel.
            resource: Accès fichiers injectable ; LinuxTextResource
                construit depuis les réglages par défaut.
            security_logger: Journal d'audit optionnel.
        """
        self.settings = settings or StoreSettings()
        self._logger = logger
        self.resource = resource or LinuxTextResource(
            logger=logger,
            encoding=self.settings.encoding,
            atomic_write=self.settings.atomic_write,
            lock_file=self.settings.lock_file,
        )
        self._audit = security_logger

    def _log_debug(self, message: str) -> None:
        if self._logger:
            self._logger.log_debug(message)

    def _log_info(self, message: str) -> None:
        if self._logger:
            self._logger.log_info(message)

    def _log_error(self, message: str) -> None:
        if self._logger:
            self._logger.log_error(message)

    def _audit_event(self, event: SecurityEvent) -> None:
        if self._audit:
            self._audit.log_event(event)

    @staticmethod
    def _require(**arguments) -> None:
        missing = [
            name for name, value in arguments.items()
            if value is None or not str(value).strip()
        ]
        if missing:
            raise MissingArgumentsError(
                f"Arguments manquants : {', '.join(missing)}"
            )

    def _ensure_exists(self, path: Path) -> None:
        if not self.resource.exists(path):
            self._log_error(f"Fichier de configuration '{path}' introuvable.")
            raise ResourceNotFoundError(path)

    def resolve(self, name: str) -> Path:
        """Retourne ``<base>/<conf_dir>/<nom><suffixe>``."""
        self._require(name=name)
        return self.settings.conf_root / f"{name}{self.settings.conf_suffix}"

    def get_by_name(self, name: str, key: str) -> str:
        self._require(name=name, key=key)
        return self.get_by_path(self.resolve(name), key)

    def get_by_path(self, path: Union[str, Path], key: str) -> str:
        self._require(path=path, key=key)
        path = Path(path)
        self._ensure_exists(path)

        lines = parser.split_lines(self.resource.read_text(path))
        index = parser.find_active(lines, key)
        if index is None:
            self._log_debug(f"Clé '{key}' absente de {path}.")
            raise KeyNotFoundError(key, path)

        value = parser.value_of(lines[index])
        self._log_debug(f"Lecture {path} : {key} (ligne {index + 1}).")
        return value

    def entries(self, name: str) -> list[Entry]:
        path = self.resolve(name)
        self._ensure_exists(path)
        return [
            entry
            for entry in parser.parse_entries(self.resource.read_text(path))
            if entry.active
        ]

    def set_by_path(self, path: Union[str, Path], spec: str) -> SetResult:
        self._require(path=path)
        wanted = parse_spec(spec)
        path = Path(path)
        self._ensure_exists(path)

        with self.resource.locked(path):
            # le fichier a pu disparaître pendant l'attente du verrou
            self._ensure_exists(path)
            lines = parser.split_lines(self.resource.read_text(path))
            index = parser.find_active(lines, wanted.key)

            if index is not None and wanted.is_assignment:
                lines[index] = parser.render_assignment(
                    lines[index], wanted.key, wanted.value
                )
                outcome = SetOutcome.MODIFIED
            elif index is not None:
                lines[index] = parser.render_commented(lines[index])
                outcome = SetOutcome.COMMENTED
            else:
                newline = parser.detect_newline(lines)
                indentation = parser.infer_indentation(lines, wanted.key)
                if lines and not parser.split_newline(lines[-1])[1]:
                    lines[-1] += newline
                lines.append(parser.render_appended(
                    indentation, wanted.key, wanted.value, newline
                ))
                index = len(lines) - 1
                outcome = SetOutcome.APPENDED

            try:
                self.resource.write_text(path, "".join(lines))
            except WriteFailureError as e:
                self._audit_event(SecurityEvent(
                    event_type=(
                        SecurityEventType.ACCESS_DENIED
                        if isinstance(e.__cause__, PermissionError)
                        else SecurityEventType.WRITE_FAILURE
                    ),
                    resource=str(path),
                    details={"key": wanted.key, "error": str(e)},
                    severity="error",
                    user_id=current_user(),
                ))
                raise

        result = SetResult(
            path=path,
            key=wanted.key,
            value=wanted.value,
            outcome=outcome,
            line_number=index + 1,
        )
        self._log_info(f"{path}: {result.describe()}")
        self._audit_event(SecurityEvent(
            event_type=SecurityEventType.CONFIG_CHANGE,
            resource=str(path),
            details={
                "key": wanted.key,
                "outcome": str(outcome),
                "line": result.line_number,
            },
            user_id=current_user(),
        ))
        return result
