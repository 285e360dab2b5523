"""Shared setup for the command-line entrypoints."""

from __future__ import annotations

import argparse
import logging

from dotenv import load_dotenv

from omexrdf.config import ExtractionSettings


def add_settings_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--max-triples", type=int, default=None, help="Reject graphs with more statements than this")
    parser.add_argument("--workers", type=int, default=None, help="Worker threads for independent graphs/archives")
    parser.add_argument("--log-level", default="WARNING", help="Logging level for stderr output")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, level.upper(), logging.WARNING),
    )


def load_settings(args: argparse.Namespace) -> ExtractionSettings:
    """Settings from ``.env``/environment, with command-line flags taking precedence."""
    load_dotenv()
    settings = ExtractionSettings.from_env()
    return ExtractionSettings(
        max_triples=args.max_triples if args.max_triples is not None else settings.max_triples,
        parse_timeout_ms=settings.parse_timeout_ms,
        workers=args.workers if args.workers is not None else settings.workers,
    )
