import argparse
import asyncio
import logging
from typing import List, Optional

from pydantic import ValidationError
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from . import __version__
from .config import Settings
from .core.exceptions import PrerequisiteMissingError, ProvisioningAbortedError, ProvisioningError
from .dependencies import get_platform_factory, get_provisioning_service, get_settings
from .logging_config import get_app_logger, setup_logging
from .models import ProvisioningRequest

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="share-mount-provision",
        description=(
            "Create a local service account, run the backup service as it and "
            "register a startup task that mounts a network share as a drive letter."
        ),
    )
    parser.add_argument("network_path", help=r"Network share, e.g. \\nas\backup or smb://nas/backup")
    parser.add_argument("drive_letter", help="Drive letter to mount the share as, e.g. Z")
    parser.add_argument(
        "--account-name",
        default=settings.default_account_name,
        help=f"Local account to create and use (default: {settings.default_account_name})",
    )
    parser.add_argument("--password", help="Password for the local account (prompted if omitted)")
    parser.add_argument("--share-username", help="Username for the network share")
    parser.add_argument("--share-password", help="Password for the network share")
    parser.add_argument(
        "--mirror-exe",
        default=settings.mirror_executable,
        help="Path to the mirroring executable",
    )
    parser.add_argument(
        "--no-run-now",
        action="store_true",
        help="Register the task without starting it immediately",
    )
    parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Continue without asking if the network path is unreachable",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Console and file log level (default: {settings.log_level})",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def ask_to_continue(question: str) -> bool:
    try:
        return Confirm.ask(question, default=False)
    except (EOFError, KeyboardInterrupt):
        raise ProvisioningAbortedError("Aborted by operator: no answer to confirmation prompt")


def ask_for_password(account_name: str) -> str:
    try:
        return Prompt.ask(f"Password for account '{account_name}'", password=True)
    except (EOFError, KeyboardInterrupt):
        raise ProvisioningAbortedError("Aborted by operator: no account password given")


def always_continue(question: str) -> bool:
    logging.info(f"Continuing without confirmation: {question}")
    return True


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)

    if args.log_level:
        settings.log_level = args.log_level
    setup_logging(settings)
    logger = get_app_logger()

    config_info = settings.config_file_info
    logger.debug(f"Configuration loaded from: {config_info['active_config_file']}")

    try:
        password = args.password or ask_for_password(args.account_name)
    except ProvisioningAbortedError as e:
        logger.error(f"[bold red]Provisioning failed:[/] {escape(str(e))}")
        return EXIT_FAILED

    try:
        request = ProvisioningRequest(
            network_path=args.network_path,
            drive_letter=args.drive_letter,
            account_name=args.account_name,
            account_password=password,
            share_username=args.share_username,
            share_password=args.share_password,
            mirror_executable=args.mirror_exe,
            run_now=not args.no_run_now,
        )
    except ValidationError as e:
        for error in e.errors():
            logger.error(f"Invalid input: {escape(error['msg'])}")
        return EXIT_USAGE

    confirm = always_continue if args.yes else ask_to_continue

    try:
        service = get_provisioning_service(confirm)
        if not get_platform_factory().is_elevated():
            raise PrerequisiteMissingError("Administrator rights are required, run from an elevated prompt")

        logger.info(
            f"Provisioning [cyan]{escape(request.network_path)}[/] as "
            f"[yellow]{request.drive_letter}:[/] for account [cyan]{escape(request.account_name)}[/]"
        )
        report = asyncio.run(service.run(request))
    except ProvisioningError as e:
        logger.error(f"[bold red]Provisioning failed:[/] {escape(str(e))}")
        return EXIT_FAILED

    if report.warnings:
        logger.warning(f"[bold yellow]Provisioning completed with {len(report.warnings)} warning(s)[/]")
    else:
        logger.info("[bold green]Provisioning completed[/]")
    return EXIT_OK
