"""Command-line entry point: extract a product record and print it as JSON."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .core.config import Settings, load_settings
from .core.errors import ConfigError, ExtractorError, ParseError, ProviderError
from .core.logging import setup_logging
from .prompts.prompt import SAMPLE_DESCRIPTION
from .services.extraction_service import extract_product

EXIT_OK = 0
EXIT_CONFIG = 2
EXIT_PROVIDER = 3
EXIT_PARSE = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="product-extractor",
        description="Extract name, price and features from a product description.",
    )
    parser.add_argument(
        "text",
        nargs="?",
        help="Product description; '-' reads stdin. Defaults to a bundled sample.",
    )
    parser.add_argument("--file", "-f", type=Path, help="Read the description from a file")
    parser.add_argument("--model", help="Model identifier")
    parser.add_argument("--temperature", type=float, help="Sampling temperature in [0, 1]")
    parser.add_argument("--max-tokens", type=int, dest="max_output_tokens", help="Cap on completion tokens")
    parser.add_argument("--max-retries", type=int, help="Retries after the first failed attempt")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument(
        "--json-mode",
        action="store_true",
        default=None,
        help="Ask the endpoint for a bare JSON object (rejected completions fail as parse errors)",
    )
    logs = parser.add_mutually_exclusive_group()
    logs.add_argument("--json-logs", dest="log_json", action="store_true", default=None)
    logs.add_argument("--console-logs", dest="log_json", action="store_false")
    return parser


def read_input(args: argparse.Namespace) -> str:
    if args.file is not None:
        return args.file.read_text(encoding="utf-8")
    if args.text == "-":
        return sys.stdin.read()
    if args.text is not None:
        return args.text
    return SAMPLE_DESCRIPTION


def settings_from_args(args: argparse.Namespace) -> Settings:
    overrides: Dict[str, Any] = {}
    for field, value in (
        ("model_id", args.model),
        ("temperature", args.temperature),
        ("max_output_tokens", args.max_output_tokens),
        ("max_retries", args.max_retries),
        ("log_level", args.log_level),
        ("log_json", args.log_json),
        ("json_mode", args.json_mode),
    ):
        if value is not None:
            overrides[field] = value
    return load_settings(**overrides)


def _report(exc: ExtractorError) -> None:
    print(f"error [{exc.code}]: {exc.message}", file=sys.stderr)
    if isinstance(exc, ConfigError):
        for issue in exc.details.get("errors", []):
            print(f"  {issue['field']}: {issue['message']}", file=sys.stderr)
    if isinstance(exc, ParseError):
        print("raw completion:", file=sys.stderr)
        print(exc.raw_text, file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = settings_from_args(args)
    except ConfigError as exc:
        _report(exc)
        return EXIT_CONFIG
    setup_logging(settings.log_level, settings.log_json, stream=sys.stderr)

    try:
        text = read_input(args)
    except OSError as exc:
        print(f"error: cannot read {args.file}: {exc}", file=sys.stderr)
        return EXIT_CONFIG

    try:
        result = asyncio.run(extract_product(text, settings))
    except ConfigError as exc:
        _report(exc)
        return EXIT_CONFIG
    except ProviderError as exc:
        _report(exc)
        return EXIT_PROVIDER
    except ParseError as exc:
        _report(exc)
        return EXIT_PARSE

    print(json.dumps(result.model_dump(), indent=2, ensure_ascii=False))
    return EXIT_OK
