"""CLI for archive statistics over files or directories of .omex archives."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from omexrdf.cli.common import add_settings_arguments, configure_logging, load_settings
from omexrdf.stats import aggregate_stats, archive_basic_stats, omex_files_in_dir

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compute statistics for OMEX archives")
    parser.add_argument(
        "paths",
        nargs="*",
        help="Archive files or directories to scan for .omex files (default: current directory)",
    )
    add_settings_arguments(parser)
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        settings = load_settings(args)
    except ValueError as error:
        logger.error("Configuration error: %s", error)
        return 2

    exit_code = 0
    reports = []
    for raw_path in args.paths or [str(Path.cwd())]:
        path = Path(raw_path)
        if path.is_file():
            reports.append(archive_basic_stats(path, settings))
        elif path.is_dir():
            files = omex_files_in_dir(path)
            if files:
                reports.append(aggregate_stats(files, settings))
            else:
                reports.append({"source": raw_path, "error": "No .omex files found"})
        else:
            reports.append({"source": raw_path, "error": "Path not found"})
            exit_code = 1

    print(json.dumps({"reports": reports}, ensure_ascii=True, indent=2))
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
