"""Structured success/failure envelope shared by every extraction stage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any, Callable, Generic, Mapping, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorStage(str, Enum):
    """Pipeline stage an error originated from."""

    MANIFEST = "manifest"
    EXTRACT = "extract"
    RDF_PARSE = "rdf-parse"
    SINGULAR_EXTRACT = "singular-extract"
    COMPOSITE_EXTRACT = "composite-extract"
    PROCESS_EXTRACT = "process-extract"
    ENERGY_EXTRACT = "energy-extract"
    OPB_EXTRACT = "opb-extract"
    SPARQL = "sparql"


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    data: T

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {"ok": True, "data": _jsonable(self.data)}


@dataclass(frozen=True, slots=True)
class Err:
    stage: ErrorStage
    message: str
    details: Mapping[str, Any] | None = None
    cause_kind: str | None = None

    @property
    def ok(self) -> bool:
        return False

    def error_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"stage": self.stage.value, "message": self.message}
        if self.details is not None:
            payload["details"] = dict(self.details)
        if self.cause_kind is not None:
            payload["cause_kind"] = self.cause_kind
        return payload

    def to_dict(self) -> dict[str, Any]:
        return {"ok": False, "error": self.error_dict()}


ExtractionOutcome = Union[Ok[T], Err]


def _jsonable(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def run_stage(stage: ErrorStage, func: Callable[..., T], *args: Any, **kwargs: Any) -> ExtractionOutcome[T]:
    """Call *func* and wrap its result, turning any exception into a stage-tagged Err."""
    try:
        return Ok(func(*args, **kwargs))
    except Exception as exc:
        logger.warning("%s failed: %s: %s", stage.value, type(exc).__name__, exc)
        return Err(stage=stage, message=str(exc) or type(exc).__name__, cause_kind=type(exc).__name__)
