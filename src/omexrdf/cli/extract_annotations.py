"""CLI for extracting normalized annotations from OMEX archives as JSON."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from omexrdf.archive.loader import archive_annotations
from omexrdf.cli.common import add_settings_arguments, configure_logging, load_settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract singular, composite, process and energy annotations from OMEX archives"
    )
    parser.add_argument("paths", nargs="+", help="One or more .omex files")
    add_settings_arguments(parser)
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        settings = load_settings(args)
    except ValueError as error:
        logger.error("Configuration error: %s", error)
        return 2

    exit_code = 0
    results = []
    for raw_path in args.paths:
        path = Path(raw_path)
        if not path.is_file():
            results.append({"source_path": raw_path, "ok": False, "error": {"message": "File not found"}})
            exit_code = 1
            continue
        outcome = archive_annotations(path, settings)
        if not outcome.ok:
            exit_code = 1
        results.append({"source_path": raw_path, **outcome.to_dict()})

    print(json.dumps({"results": results}, ensure_ascii=True, indent=2))
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
