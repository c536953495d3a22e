"""Command-line entrypoint for encoding and decoding secret-token URIs."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from .codec import PREFIX, decode, decode_bytes, encode, parse
from .config import SecretTokenSettings, load_settings
from .exceptions import ConfigurationError, MalformedSecretTokenError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_CONFIG = 2


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="secret-token", description="Encode and decode RFC 8959 secret-token URIs.")
    parser.add_argument(
        "--config",
        default=os.environ.get("SECRET_TOKEN_CONFIG_FILE"),
        help="Path to an optional configuration YAML file.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (overrides SECRET_TOKEN_LOG_LEVEL).")
    commands = parser.add_subparsers(dest="command", required=True)

    encode_parser = commands.add_parser("encode", help="Wrap a token in a secret-token URI.")
    encode_parser.add_argument("token", help="Token to encode, or '-' to read it from stdin.")

    decode_parser = commands.add_parser("decode", help="Extract the token from a secret-token URI.")
    decode_parser.add_argument("uri", help="URI to decode, or '-' to read it from stdin.")
    decode_parser.add_argument("--hex", action="store_true", help="Print the raw token bytes as hex.")

    env_parser = commands.add_parser("env", help="Decode a secret-token URI held in an environment variable.")
    env_parser.add_argument("name", nargs="?", default=None, help="Variable name (defaults to settings.source_env).")
    env_parser.add_argument(
        "--reveal",
        action="store_true",
        default=None,
        help="Print the URI and decoded token unmasked (overrides SECRET_TOKEN_REVEAL).",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def _read_argument(value: str) -> str:
    if value == "-":
        return sys.stdin.read().rstrip("\r\n")
    return value


def _mask(uri: str) -> str:
    if uri.startswith(PREFIX):
        return f"{PREFIX}****"
    return "****"


def _configure_logging(settings: SecretTokenSettings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _run_encode(args: argparse.Namespace) -> int:
    print(encode(_read_argument(args.token)), flush=True)
    return EXIT_OK


def _run_decode(args: argparse.Namespace) -> int:
    uri = _read_argument(args.uri)
    if args.hex:
        data = decode_bytes(uri)
        if data is None:
            print("[secret-token] The URI is invalid, cannot decode the token", file=sys.stderr, flush=True)
            return EXIT_INVALID
        print(data.hex(), flush=True)
        return EXIT_OK
    try:
        token = parse(uri)
    except MalformedSecretTokenError as exc:
        print(f"[secret-token] The URI is invalid, cannot decode the token: {exc} ({exc.code})", file=sys.stderr, flush=True)
        return EXIT_INVALID
    print(token, flush=True)
    return EXIT_OK


def _run_env(args: argparse.Namespace, settings: SecretTokenSettings) -> int:
    name = args.name or settings.source_env
    uri = os.environ.get(name)
    if uri is None:
        print(f"[secret-token] Cannot read environment variable {name}: not set", file=sys.stderr, flush=True)
        return EXIT_INVALID
    print(f"The URI: {uri if settings.reveal else _mask(uri)}", flush=True)
    token = decode(uri)
    if token is None:
        print("The URI is invalid, cannot decode the token", flush=True)
        return EXIT_INVALID
    print(f"The decoded token: {token if settings.reveal else '****'}", flush=True)
    return EXIT_OK


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    overrides: dict[str, object] = {}
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if getattr(args, "reveal", None):
        overrides["reveal"] = True
    try:
        settings = load_settings(Path(args.config) if args.config else None, overrides)
    except (ConfigurationError, ValidationError) as exc:
        print(f"[secret-token] Invalid configuration: {exc}", file=sys.stderr, flush=True)
        return EXIT_CONFIG
    _configure_logging(settings)
    logger.debug("Running %s command (config=%s)", args.command, settings.config_path)

    if args.command == "encode":
        return _run_encode(args)
    if args.command == "decode":
        return _run_decode(args)
    return _run_env(args, settings)


if __name__ == "__main__":
    sys.exit(main())
