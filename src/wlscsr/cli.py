"""
Command-line interface for wlscsr.

Usage:
    wlscsr [options] command [command options]

Commands:
    save       Save the configuration of the connected displays
    restore    Restore the saved configuration for the connected displays
    info       Show connected displays and the configuration path
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import Config
from .config.dataclasses import BACKEND_EXECUTABLES
from .exceptions import (
    WlscsrError,
    ConfigError,
    ProviderError,
    ProviderNotFoundError,
    ReconciliationError,
    SnapshotError,
    SnapshotWriteError,
)
from .commands import restore_config, save_config, show_info
from .providers import get_provider


def setup_logging(level: str = "WARNING") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wlscsr",
        description="Save and restore monitor configurations on Wayland compositors"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to config file"
    )
    parser.add_argument(
        "--backend",
        choices=list(BACKEND_EXECUTABLES),
        help="Display backend (default: from config, else wlr-randr)"
    )
    parser.add_argument(
        "--executable",
        help="Backend executable to run (wlr-randr and hyprctl backends)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("save", help="Save screen configuration")

    restore_parser = subparsers.add_parser("restore", help="Restore previously saved screen configuration")
    restore_parser.add_argument(
        "--fallback-to-default",
        action="store_true",
        help="If no saved configuration matches, apply a default configuration"
    )
    restore_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be applied without applying it"
    )

    info_parser = subparsers.add_parser("info", help="Display information on connected monitors")
    info_parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of human-readable text"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logger = logging.getLogger(__name__)

    try:
        config = Config.load(config_file=args.config)

        level = "DEBUG" if args.verbose else config.logging.level
        setup_logging(level)

        if args.backend and args.backend != config.backend.name:
            # A configured executable belongs to the configured backend
            config.backend.name = args.backend
            config.backend.executable = None
        if args.executable:
            config.backend.executable = args.executable

        provider = get_provider(config.backend)
        logger.debug(f"Using {provider.name} backend")

        if args.command == "save":
            save_config(config, provider)
        elif args.command == "restore":
            restore_config(
                config,
                provider,
                fallback_to_default=args.fallback_to_default,
                dry_run=args.dry_run,
            )
        elif args.command == "info":
            show_info(config, provider, json_output=args.json)

        return 0

    # Handle specific error types with appropriate exit codes and messages
    except KeyboardInterrupt:
        print("\nCancelled by user", file=sys.stderr)
        return 130

    except ConfigError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 78  # EX_CONFIG

    except ProviderNotFoundError as e:
        print(f"Display Backend Not Found: {e}", file=sys.stderr)
        return 69  # EX_UNAVAILABLE

    except ProviderError as e:
        print(f"Display Backend Failed: {e}", file=sys.stderr)
        return 69  # EX_UNAVAILABLE

    except ReconciliationError as e:
        print(f"Cannot Restore Configuration: {e}", file=sys.stderr)
        print("\nRun 'wlscsr save' first, or use 'restore --fallback-to-default'.", file=sys.stderr)
        return 65  # EX_DATAERR

    except SnapshotWriteError as e:
        print(f"Cannot Save Configuration: {e}", file=sys.stderr)
        return 73  # EX_CANTCREAT

    except SnapshotError as e:
        print(f"Snapshot Error: {e}", file=sys.stderr)
        return 65  # EX_DATAERR

    except WlscsrError as e:
        # Catch-all for any other wlscsr errors
        print(f"Error: {e}", file=sys.stderr)
        logger.error(str(e))
        if args.verbose:
            raise
        return 1

    except Exception as e:
        # Unexpected errors - show full traceback in verbose mode
        print(f"Unexpected Error: {type(e).__name__}: {e}", file=sys.stderr)
        logger.error(f"Unexpected error: {type(e).__name__}: {e}")
        if args.verbose:
            raise
        print("\nRun with -v/--verbose for full traceback.", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
