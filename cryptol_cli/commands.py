"""
CLI subcommand implementations for the cryptol client.

Subcommands::

    cryptol-client sha384 EXPR [--server-url URL] [--timeout S]
    cryptol-client sha224|sha256|sha512 EXPR
    cryptol-client call FUNCTION [ARG ...] [--module M]
"""

import argparse
import json
import logging
import sys

from dotenv import load_dotenv

from cryptol_client import CryptolClientError, connect, sha224, sha256, sha384, sha512
from cryptol_client.config import SERVER_URL_ENV

HASH_COMMANDS = {
    "sha224": sha224,
    "sha256": sha256,
    "sha384": sha384,
    "sha512": sha512,
}


def _open_session(args):
    return connect(args.server_url, timeout_seconds=args.timeout)


def cmd_hash(args):
    """Hash a Cryptol expression with one of the SuiteB SHA-2 functions."""
    hasher = HASH_COMMANDS[args.command]
    print(f"Calling {args.command.upper()} on {args.expression}")
    session = _open_session(args)
    print(f"Hash: {hasher(session, args.expression)}")


def cmd_call(args):
    """Call an arbitrary function and print its value as JSON."""
    session = _open_session(args)
    if args.module:
        session.load_module(args.module)
    answer = session.call(args.function, args.arguments)
    print(f"Type: {answer.type_string}")
    print(json.dumps(answer.value, indent=2))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="cryptol-client",
        description="Call Cryptol functions through cryptol-remote-api",
    )
    parser.add_argument(
        "--server-url",
        help=f"cryptol-remote-api endpoint (default: ${SERVER_URL_ENV})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (default: 3600)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    for name in HASH_COMMANDS:
        p_hash = subparsers.add_parser(name, help=f"Compute {name.upper()} of an expression")
        p_hash.add_argument(
            "expression",
            help='Cryptol expression, e.g. 0x1234 or \'(join "Hello World")\'',
        )

    p_call = subparsers.add_parser("call", help="Call a Cryptol function")
    p_call.add_argument("function", help="Function name")
    p_call.add_argument("arguments", nargs="*", help="Argument expressions")
    p_call.add_argument("--module", help="Module to load before calling")

    return parser


def main(argv=None):
    """Main entry point with subcommand dispatch."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handler = cmd_call if args.command == "call" else cmd_hash
    try:
        handler(args)
    except CryptolClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
