"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m distributor_cli generate [--source PATH|URL] [--out PATH] [--json]
    python -m distributor_cli lookup ADDRESS [--bundle PATH] [--json]
    python -m distributor_cli stats [--bundle PATH] [--top N] [--json]
    python -m distributor_cli verify ADDRESS [--amount N --proof H ...] [--json]
    python -m distributor_cli config --init

Environment Variables:
    DISTRIBUTOR_SOURCE_URL      Allocation report URL
    DISTRIBUTOR_SOURCE_PATH     Allocation report path (takes precedence over URL)
    DISTRIBUTOR_PROOFS_PATH     Where the proof bundle is written/read
    DISTRIBUTOR_LOG_LEVEL       Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.config.runtime import get_default_config_template, load_config
from distributor_cli.commands import generate, lookup, stats, verify
from distributor_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
)


__all__ = [
    "EXIT_SUCCESS",
    "EXIT_RUNTIME_ERROR",
    "EXIT_VERIFICATION_FAILED",
    "create_parser",
    "main",
    "setup_logging",
]


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_bundle_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--bundle", "-b",
        type=str,
        default=None,
        help="Path to the proof bundle (default: output.proofs_path from config)",
    )


def _add_json_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="distributor",
        description="Merkle distributor CLI - Generate proof bundles and look up claims.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./distributor.yaml or ~/.config/distributor/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- generate command ---
    generate_parser = subparsers.add_parser(
        "generate",
        help="Build the Merkle root and proof bundle from an allocation report",
    )
    generate_parser.add_argument(
        "--source", "-s",
        type=str,
        default=None,
        help="CSV path or http(s) URL (default: source from config)",
    )
    generate_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Output path for the proof bundle (default: output.proofs_path)",
    )
    _add_json_argument(generate_parser)
    generate_parser.set_defaults(func=generate.generate_cmd)

    # --- lookup command ---
    lookup_parser = subparsers.add_parser(
        "lookup",
        help="Show amount, proof and calldata for an address",
    )
    lookup_parser.add_argument("address", type=str, help="Recipient address")
    _add_bundle_argument(lookup_parser)
    _add_json_argument(lookup_parser)
    lookup_parser.set_defaults(func=lookup.lookup_cmd)

    # --- stats command ---
    stats_parser = subparsers.add_parser(
        "stats",
        help="Summarize a proof bundle",
    )
    _add_bundle_argument(stats_parser)
    stats_parser.add_argument(
        "--top",
        type=int,
        default=5,
        help="Number of largest claimants to list (default: 5)",
    )
    _add_json_argument(stats_parser)
    stats_parser.set_defaults(func=stats.stats_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a claim proof against the bundle root",
    )
    verify_parser.add_argument("address", type=str, help="Recipient address")
    _add_bundle_argument(verify_parser)
    verify_parser.add_argument(
        "--amount",
        type=int,
        default=None,
        help="Amount in base units (default: the bundle's entry)",
    )
    verify_parser.add_argument(
        "--proof",
        type=str,
        nargs="*",
        default=None,
        help="Sibling hashes, bottom-up (default: the bundle's entry)",
    )
    _add_json_argument(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="distributor.yaml",
        help="Path for the configuration file (default: distributor.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (DISTRIBUTOR_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: distributor config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed / not eligible)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
