"""Implémentation concrète du logger avec fichier."""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from linux_kvconf.logging.base import Logger
from linux_kvconf.logging.levels import parse_log_level

DEFAULT_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


class FileLogger(Logger):
    """
    Logger qui écrit dans un fichier avec option console.

    Caractéristiques:
    - Logger unique par fichier (évite les conflits)
    - Encodage UTF-8 explicite
    - Flush immédiat après chaque log
    - Pas de propagation (évite les logs en double)
    - Support optionnel de la sortie console
    """

    def __init__(
        self,
        log_file: Union[str, Path],
        config: Optional[Dict[str, Any]] = None,
        console_output: bool = False
    ) -> None:
        """
        Initialise le logger.

        Args:
            log_file: Chemin du fichier de log
            config: Configuration optionnelle
                    Clés supportées: logging.level, logging.format
                    (le niveau accepte l'échelle 0..3 des scripts)
            console_output: Activer la sortie console en plus du fichier
        """
        self.log_file = str(log_file)

        # Créer le répertoire de logs si nécessaire
        log_dir = os.path.dirname(self.log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        logging_cfg = (config or {}).get("logging", {})
        log_level = parse_log_level(logging_cfg.get("level"))
        log_format = logging_cfg.get("format", DEFAULT_FORMAT)

        # Créer un logger unique par fichier
        self.logger = logging.getLogger(f"linux_kvconf.{self.log_file}")
        self.logger.setLevel(log_level)

        # Éviter les handlers dupliqués
        if not self.logger.handlers:
            formatter = logging.Formatter(log_format, DEFAULT_DATEFMT)
            file_handler = logging.FileHandler(
                self.log_file, encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)
            self.handler = file_handler

            # Handler console optionnel
            if console_output:
                console_handler = logging.StreamHandler()
                console_handler.setFormatter(formatter)
                self.logger.addHandler(console_handler)
        else:
            self.handler = self.logger.handlers[0]

        # Ne pas propager pour éviter les logs en double
        self.logger.propagate = False

    @classmethod
    def for_script(
        cls,
        base_dir: Union[str, Path],
        script_name: str,
        level: Any = None,
        log_dir: str = "log",
        console_output: bool = False,
    ) -> "FileLogger":
        """
        Crée le logger journalier d'un script.

        Le fichier suit la convention des scripts historiques :
        ``<base>/log/<script>-AAAAMMJJ.log``.

        Args:
            base_dir: Répertoire racine de l'installation
            script_name: Nom du script (l'extension est retirée)
            level: Niveau de log (échelle 0..3 ou nom)
            log_dir: Sous-répertoire des logs
            console_output: Recopier les messages sur la console
        """
        stem = Path(script_name).stem or "kvconf"
        day = datetime.now().strftime('%Y%m%d')
        log_file = Path(base_dir) / log_dir / f"{stem}-{day}.log"
        config = {"logging": {"level": level}} if level is not None else None
        return cls(log_file, config=config, console_output=console_output)

    def set_level(self, level: Any) -> None:
        """Modifie le niveau du logger après sa création."""
        self.logger.setLevel(parse_log_level(level))

    def _flush(self) -> None:
        """Force l'écriture immédiate sur le disque."""
        if hasattr(self, 'handler') and self.handler:
            self.handler.flush()

    def log_debug(self, message: str) -> None:
        """Log un message de debug."""
        self.logger.debug(message)
        self._flush()

    def log_info(self, message: str) -> None:
        """Log un message d'information."""
        self.logger.info(message)
        self._flush()

    def log_warning(self, message: str) -> None:
        """Log un avertissement."""
        self.logger.warning(message)
        self._flush()

    def log_error(self, message: str) -> None:
        """Log une erreur."""
        self.logger.error(message)
        self._flush()
