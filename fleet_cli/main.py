"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m fleet_cli compile <association.json> [--out PATH]
    python -m fleet_cli inventory [--policy PATH] [--json]

Environment Variables:
    FLEET_DATA_STORE_PATH               Agent data store root
    FLEET_INVENTORY_ENABLED             Enable inventory collection (default: true)
    FLEET_INVENTORY_POLICY_LOCATION     Directory holding InventoryPolicy.json
    FLEET_LOG_LEVEL                     Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from core.config import RuntimeConfig
from fleet_cli import __version__
from fleet_cli.commands import compilation, inventory


logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_INVALID_INPUT = 2


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def load_config(path: Path | None = None) -> RuntimeConfig:
    """Load a YAML config file if given, then overlay FLEET_* variables."""
    if path is None:
        return RuntimeConfig.from_env()
    return RuntimeConfig.from_yaml(path).with_env_overrides()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="fleet",
        description="Fleet agent CLI - Compile association documents and collect inventory.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- compile command ---
    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile an association message into a document state",
        description="Parse an association message, bind its parameters, and print the compiled state.",
    )
    compile_parser.add_argument(
        "association",
        type=str,
        help="Path to the association message JSON",
    )
    compile_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the document state to this file instead of stdout",
    )
    compile_parser.set_defaults(func=compilation.compile_cmd)

    # --- inventory command ---
    inventory_parser = subparsers.add_parser(
        "inventory",
        help="Run one inventory cycle with the built-in gatherers",
        description="Apply the inventory policy once and print the collected batch. Nothing is uploaded.",
    )
    inventory_parser.add_argument(
        "--policy", "-p",
        type=str,
        default=None,
        help="Path to the inventory policy file (default: from config)",
    )
    inventory_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    inventory_parser.set_defaults(func=inventory.inventory_cmd)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=runtime error, 2=invalid input)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=args.log_level or config.log_level)

    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        logger.exception(f"Command {args.command} failed")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
