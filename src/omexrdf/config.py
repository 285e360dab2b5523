"""Runtime configuration for annotation extraction."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping


DEFAULT_WORKERS = 1


def _parse_optional_int(*, name: str, raw_value: str, minimum: int = 1) -> int | None:
    if not raw_value:
        return None
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


@dataclass(frozen=True, slots=True)
class ExtractionSettings:
    """Validated extraction limits.

    ``max_triples`` of ``None`` means no ceiling.  ``parse_timeout_ms`` is
    carried for callers that wrap graph loading in their own deadline; nothing
    in this package enforces it.
    """

    max_triples: int | None = None
    parse_timeout_ms: int | None = None
    workers: int = DEFAULT_WORKERS

    def __post_init__(self) -> None:
        if self.max_triples is not None and self.max_triples < 1:
            raise ValueError("max_triples must be >= 1")
        if self.parse_timeout_ms is not None and self.parse_timeout_ms < 1:
            raise ValueError("parse_timeout_ms must be >= 1")
        if self.workers < 1:
            raise ValueError("workers must be >= 1")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ExtractionSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        max_triples = _parse_optional_int(
            name="OMEX_MAX_TRIPLES",
            raw_value=source.get("OMEX_MAX_TRIPLES", "").strip(),
        )
        parse_timeout_ms = _parse_optional_int(
            name="OMEX_PARSE_TIMEOUT_MS",
            raw_value=source.get("OMEX_PARSE_TIMEOUT_MS", "").strip(),
        )
        workers = _parse_optional_int(
            name="OMEX_WORKERS",
            raw_value=source.get("OMEX_WORKERS", "").strip(),
        )

        return cls(
            max_triples=max_triples,
            parse_timeout_ms=parse_timeout_ms,
            workers=workers if workers is not None else DEFAULT_WORKERS,
        )
