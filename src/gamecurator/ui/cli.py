from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from gamecurator import app
from gamecurator.common import configure_logging
from gamecurator.config import (
    ConfigurationError,
    get_identification_config,
    get_launchbox_config,
    get_library_config,
)
from gamecurator.domain.ports import NullProgress
from gamecurator.ui.progress import RichProgress
from gamecurator.ui.prompt import ConsoleConfirmation
from gamecurator.ui.report import show_duplicates

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

    from gamecurator.domain.ports import ProgressReporter

log = logging.getLogger(__name__)

COMMAND_ALIASES: dict[str, list[str]] = {
    "get-codes": ["getPossibleCodes"],
    "organize": ["organizeDirectories"],
    "launchbox-to-db": ["syncLaunchboxToDb"],
    "scan": ["buildDbFromFolders"],
    "download-sources": ["downloadSources"],
    "db-to-launchbox": ["convertDbToLaunchbox"],
    "force-update": ["forceUpdate"],
    "sync-all": ["syncAll"],
    "find-duplicates": ["findPossibleDuplicates"],
}
CANONICAL_COMMANDS: dict[str, str] = {
    alias: command for command, aliases in COMMAND_ALIASES.items() for alias in aliases
}


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Curate a game library and its LaunchBox catalog")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable progress bars (log lines only)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log at DEBUG level (overrides GAMECURATOR_LOG_LEVEL)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "get-codes",
        aliases=COMMAND_ALIASES["get-codes"],
        help="Search every locator for each unsorted directory",
    )
    subparsers.add_parser(
        "organize",
        aliases=COMMAND_ALIASES["organize"],
        help="Score gathered candidates and file resolved directories",
    )
    subparsers.add_parser(
        "launchbox-to-db",
        aliases=COMMAND_ALIASES["launchbox-to-db"],
        help="Copy LaunchBox edits back into the store",
    )
    subparsers.add_parser(
        "scan",
        aliases=COMMAND_ALIASES["scan"],
        help="Build or refresh store records from the library folders",
    )
    subparsers.add_parser(
        "download-sources",
        aliases=COMMAND_ALIASES["download-sources"],
        help="Fetch metadata for records that have none yet",
    )
    subparsers.add_parser(
        "db-to-launchbox",
        aliases=COMMAND_ALIASES["db-to-launchbox"],
        help="Write the store into the LaunchBox platform file",
    )

    force = subparsers.add_parser(
        "force-update",
        aliases=COMMAND_ALIASES["force-update"],
        help="Flag records for a refresh on the next scan or download",
    )
    force.add_argument(
        "canonical_ids",
        nargs="*",
        metavar="ID",
        help="Canonical ids to flag (default: every record)",
    )
    force.add_argument("--source", action="store_true", help="Re-download metadata")
    force.add_argument("--executable", action="store_true", help="Re-detect the executable")
    force.add_argument("--images", action="store_true", help="Re-download additional images")

    subparsers.add_parser(
        "find-duplicates",
        aliases=COMMAND_ALIASES["find-duplicates"],
        help="List library codes holding several copies or a broken layout",
    )
    subparsers.add_parser(
        "sync-all",
        aliases=COMMAND_ALIASES["sync-all"],
        help="get-codes, organize, launchbox-to-db, scan, download-sources, db-to-launchbox",
    )

    args = parser.parse_args(list(argv))
    args.command = CANONICAL_COMMANDS.get(args.command, args.command)
    if args.command == "force-update" and not (args.source or args.executable or args.images):
        raise ValueError("force-update needs at least one of --source, --executable, --images")
    return args


def _progress(args: argparse.Namespace) -> ProgressReporter:
    return NullProgress() if args.no_progress else RichProgress()


def _build_command(args: argparse.Namespace) -> Callable[[], object]:
    """Read the settings the command needs and return the call that runs it."""

    progress = _progress(args)
    # a live progress bar and a prompt cannot share the terminal
    organize_progress = NullProgress()
    match args.command:
        case "get-codes":
            identification = get_identification_config()
            return lambda: app.get_codes(config=identification, progress=progress)
        case "organize":
            identification = get_identification_config()
            return lambda: app.organize(
                confirmation=ConsoleConfirmation(),
                config=identification,
                progress=organize_progress,
            )
        case "launchbox-to-db":
            launchbox = get_launchbox_config()
            return lambda: app.import_catalog(config=launchbox, progress=progress)
        case "scan":
            library = get_library_config()
            return lambda: app.scan(config=library, progress=progress)
        case "download-sources":
            library = get_library_config()
            return lambda: app.download_game_sources(config=library, progress=progress)
        case "db-to-launchbox":
            launchbox = get_launchbox_config()
            return lambda: app.export_catalog(config=launchbox, progress=progress)
        case "force-update":
            return lambda: app.force_update(
                canonical_ids=args.canonical_ids or None,
                source=args.source,
                executable=args.executable,
                images=args.images,
            )
        case "find-duplicates":
            library = get_library_config()
            return lambda: show_duplicates(app.find_library_duplicates(config=library))
        case "sync-all":
            identification = get_identification_config()
            library = get_library_config()
            launchbox = get_launchbox_config()
            return lambda: app.sync_all(
                confirmation=ConsoleConfirmation(),
                identification=identification,
                library=library,
                launchbox=launchbox,
                progress=progress,
                organize_progress=organize_progress,
            )
        case _:
            raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.debug else None)
        command = _build_command(parsed_args)
    except (ValueError, ConfigurationError) as exc:
        configure_logging(level=logging.INFO)
        log.error("Invalid settings: %s", exc)  # noqa: TRY400
        sys.exit(2)

    try:
        result = command()
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)
    log.info("%s finished: %s", parsed_args.command, result)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point: load ``.env`` and install the Ctrl+C handler."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
