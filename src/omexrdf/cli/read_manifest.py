"""CLI that prints the manifest.xml content listing of OMEX archives."""

from __future__ import annotations

import argparse
import json

from omexrdf.archive.manifest import metadata_entries, safe_read_manifest


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Read manifest.xml from OMEX archives")
    parser.add_argument("paths", nargs="+", help="One or more .omex files")
    parser.add_argument("--metadata-only", action="store_true", help="Only list RDF metadata entries")
    args = parser.parse_args(argv)

    exit_code = 0
    results = []
    for raw_path in args.paths:
        outcome = safe_read_manifest(raw_path)
        if not outcome.ok:
            exit_code = 1
            results.append({"source_path": raw_path, **outcome.to_dict()})
            continue
        entries = metadata_entries(outcome.data) if args.metadata_only else outcome.data
        results.append(
            {
                "source_path": raw_path,
                "ok": True,
                "manifest": [entry.to_dict() for entry in entries],
            }
        )

    print(json.dumps({"results": results}, ensure_ascii=True, indent=2))
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
