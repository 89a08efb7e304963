"""Ligne de commande ``kvconf``.

Point d'entrée des scripts d'exploitation :

    kvconf get api host
    kvconf set /etc/postfix/main.cf smtpd_sasl_auth_enable=yes
    kvconf set /etc/postfix/main.cf smtpd_sasl_auth_enable
    kvconf list api

Codes de sortie : 0 succès, 1 fichier absent ou erreur de traitement,
2 arguments manquants.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from linux_kvconf import __version__
from linux_kvconf.config.settings import load_settings
from linux_kvconf.errors import (
    ApplicationError,
    ConsoleErrorHandler,
    ErrorHandlerChain,
    KeyNotFoundError,
    LoggerErrorHandler,
)
from linux_kvconf.kvconf.store import LinuxConfigStore
from linux_kvconf.logging import (
    FileLogger,
    SecurityLogger,
    level_from_store,
)

EXIT_OK = 0


def build_parser() -> argparse.ArgumentParser:
    """Construit l'analyseur d'arguments."""
    parser = argparse.ArgumentParser(
        prog="kvconf",
        description="Lecture et modification de fichiers clé=valeur.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--base", help="Répertoire racine (défaut: $KVCONF_BASE ou .)"
    )
    parser.add_argument(
        "--settings", help="Fichier de réglages TOML ou JSON"
    )
    log_group = parser.add_mutually_exclusive_group()
    log_group.add_argument("--log-file", help="Fichier de log")
    log_group.add_argument(
        "--log", action="store_true",
        help="Log journalier dans <base>/log/kvconf-AAAAMMJJ.log",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Niveau debug et recopie des logs sur la console",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    get_cmd = commands.add_parser("get", help="Lire une valeur")
    get_cmd.add_argument("name", help="Nom logique (<base>/etc/<nom>.conf)")
    get_cmd.add_argument("key", help="Clé à lire")
    get_cmd.add_argument(
        "--strict", action="store_true",
        help="Code 1 si la clé est absente (défaut: ligne vide, code 0)",
    )

    set_cmd = commands.add_parser("set", help="Modifier une entrée")
    set_cmd.add_argument("path", help="Chemin du fichier")
    set_cmd.add_argument(
        "spec", help="clé=valeur pour affecter, clé pour commenter"
    )

    list_cmd = commands.add_parser("list", help="Lister les entrées")
    list_cmd.add_argument("name", help="Nom logique")

    return parser


def _build_logger(args, settings) -> Optional[FileLogger]:
    if args.log_file:
        return FileLogger(args.log_file, console_output=args.verbose)
    if args.log:
        return FileLogger.for_script(
            settings.base_dir, "kvconf",
            log_dir=settings.log_dir, console_output=args.verbose,
        )
    return None


def _configure_level(logger: FileLogger, args, settings, store) -> None:
    if args.verbose:
        logger.set_level(logging.DEBUG)
    elif settings.log_level is not None:
        logger.set_level(settings.log_level)
    else:
        logger.set_level(level_from_store(store))


def _run(args, store: LinuxConfigStore) -> int:
    if args.command == "get":
        try:
            value = store.get_by_name(args.name, args.key)
        except KeyNotFoundError:
            if args.strict:
                raise
            value = ""
        print(value)
    elif args.command == "set":
        print(store.set_by_path(args.path, args.spec).describe())
    elif args.command == "list":
        for entry in store.entries(args.name):
            print(f"{entry.key} = {entry.value}")
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Exécute la commande et retourne le code de sortie."""
    args = build_parser().parse_args(argv)
    errors = ErrorHandlerChain().add_handler(ConsoleErrorHandler())

    try:
        settings = load_settings(args.settings, base_dir=args.base)
        logger = _build_logger(args, settings)
        store = LinuxConfigStore(
            settings,
            logger=logger,
            security_logger=SecurityLogger(logger) if logger else None,
        )
        if logger:
            _configure_level(logger, args, settings, store)
            errors.add_handler(LoggerErrorHandler(logger))
        return _run(args, store)
    except ApplicationError as e:
        errors.handle(e)
        return e.exit_code
    except (FileNotFoundError, ValueError) as e:
        # réglages absents ou invalides (pydantic.ValidationError
        # hérite de ValueError)
        errors.handle(e)
        return 1


def run() -> None:
    """Point d'entrée du script console."""
    sys.exit(main())
