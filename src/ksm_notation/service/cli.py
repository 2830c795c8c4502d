"""Command-line interface for parsing, validating and resolving notations."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Any

from ksm_notation.core.config.base import LogLevel
from ksm_notation.core.config.loader import load_from_file
from ksm_notation.core.config.settings import ResolverConfig
from ksm_notation.core.exceptions import NotationError, NotationResolverError
from ksm_notation.core.notation.grammar import parse_notation
from ksm_notation.core.validation.validator import InputValidator, ValidationPurpose
from ksm_notation.core.vault.providers import InMemoryVaultClient
from ksm_notation.service.factory import build_resolver, configure_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ksm-notation",
        description="Parse, validate and resolve Keeper notation strings.",
    )
    parser.add_argument(
        "--config",
        help="Path to a HOCON resolver configuration file.",
    )
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        default=None,
        help="Override the configured logging level.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    parse_cmd = commands.add_parser("parse", help="Print the parsed form of a notation.")
    parse_cmd.add_argument("notation")

    validate_cmd = commands.add_parser("validate", help="Validate a value for a given purpose.")
    validate_cmd.add_argument("purpose", choices=[purpose.value for purpose in ValidationPurpose])
    validate_cmd.add_argument("value")

    get_cmd = commands.add_parser("get", help="Resolve a notation against stored records.")
    get_cmd.add_argument("notation")
    get_cmd.add_argument(
        "--records",
        help="JSON export of records. Overrides the configured vault backend.",
    )
    get_cmd.add_argument(
        "--unmask",
        action="store_true",
        default=False,
        help="Print sensitive values in clear.",
    )
    return parser


def _print_json(value: Any) -> None:
    if isinstance(value, str):
        print(value)
    else:
        print(json.dumps(value, indent=2, default=str))


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint.

    Args:
        argv: Command-line arguments. Defaults to ``sys.argv[1:]``.

    Returns:
        Exit code: 0 for success, 1 for a rejected input or failed lookup.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_from_file(args.config, ResolverConfig) if args.config else ResolverConfig()
    except Exception as exc:
        print(f"error: failed to load configuration: {exc}", file=sys.stderr)
        return 1
    if args.log_level:
        config.logging.level = LogLevel(args.log_level)
    configure_logging(config.logging)

    try:
        if args.command == "parse":
            locator = parse_notation(args.notation)
            _print_json({k: v for k, v in asdict(locator).items() if v is not None})
        elif args.command == "validate":
            InputValidator().validate(args.purpose, args.value)
            print("ok")
        else:
            client = InMemoryVaultClient.from_file(args.records) if args.records else None
            resolver = build_resolver(config, client)
            _print_json(resolver.get_field(args.notation, unmask=args.unmask))
    except NotationError as exc:
        print(f"error: invalid notation: {exc.reason}", file=sys.stderr)
        return 1
    except NotationResolverError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
