"""Journal d'audit des modifications de configuration.

Ce module fournit les primitives pour tracer les événements sensibles
(modification d'un fichier de configuration, écriture refusée) via une
interface typée et une sortie JSON structurée.

SecurityLogger dépend de l'abstraction Logger, non d'une implémentation
concrète.
"""

import getpass
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from linux_kvconf.logging.base import Logger


class SecurityEventType(StrEnum):
    """Types d'événements traçables."""

    CONFIG_CHANGE = "config.change"
    ACCESS_DENIED = "access.denied"
    WRITE_FAILURE = "write.failure"


@dataclass(frozen=True)
class SecurityEvent:
    """Événement structuré pour audit trail.

    Attributes:
        event_type: Type d'événement (SecurityEventType).
        resource: Fichier concerné.
        details: Contexte additionnel de l'événement.
        severity: Niveau de sévérité (info, warning, error, critical).
        user_id: Utilisateur à l'origine de l'action.
        timestamp: Horodatage ISO 8601 UTC (auto-généré).
    """

    event_type: SecurityEventType
    resource: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    severity: str = "info"
    user_id: str | None = None
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


def current_user() -> str | None:
    """Retourne le login courant, ou None s'il est indéterminable."""
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return None


class SecurityLogger:
    """Logger spécialisé pour l'audit des fichiers de configuration.

    Formate chaque événement en JSON structuré et le transmet
    au Logger injecté selon le niveau de sévérité.

    Utilisation :
        audit = SecurityLogger(file_logger)
        audit.log_event(SecurityEvent(
            event_type=SecurityEventType.CONFIG_CHANGE,
            resource="/etc/postfix/main.cf",
            details={"key": "smtpd_sasl_auth_enable", "outcome": "modified"},
        ))
    """

    def __init__(self, logger: Logger) -> None:
        """Initialise le logger d'audit.

        Args:
            logger: Instance de Logger pour l'émission des messages.
        """
        self._logger = logger

    def log_event(self, event: SecurityEvent) -> None:
        """Enregistre un événement en JSON structuré.

        Args:
            event: Événement à journaliser.
        """
        payload: dict[str, Any] = {
            "security_event": str(event.event_type),
            "timestamp": event.timestamp,
            "resource": event.resource,
            "severity": event.severity,
            "details": event.details,
        }
        if event.user_id is not None:
            payload["user_id"] = event.user_id

        message = json.dumps(payload, ensure_ascii=False, default=str)

        if event.severity in ("error", "critical"):
            self._logger.log_error(message)
        elif event.severity == "warning":
            self._logger.log_warning(message)
        else:
            self._logger.log_info(message)
