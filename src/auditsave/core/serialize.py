"""
Cycle-safe JSON serialization for artifact dumps.

Artifact bundles can reference themselves (network request graphs point back
at their initiators, page records at their frames, ...). A plain
``json.dumps`` would recurse forever, so :func:`to_jsonable` walks the graph
depth-first and keeps the identities of the containers on the *active path*.
Revisiting one of them yields a stable marker instead of recursing:

- ``"[Circular ~]"``            for a reference back to the root
- ``"[Circular ~.a.b.0]"``      for a reference back to ``root["a"]["b"][0]``

Objects that are merely shared (reachable twice but not through themselves)
are serialized in full at each position.

Strategies:
- Primitives (None, bool, int, float, str) -> returned as-is.
- Mappings -> new dict with keys coerced to str.
- list/tuple -> new list.
- Pydantic models and dataclasses -> their fields, walked like mappings.
- datetime/date -> ISO-8601 strings; Path -> str.
- Callables (e.g. a screenshot provider) -> dropped from their container.
- Anything else -> :class:`ArtifactSerializationError`.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from datetime import date, datetime
from pathlib import PurePath
from typing import Any

from pydantic import BaseModel

from .errors import ArtifactSerializationError

_SKIP = object()


def _marker(path: list[str]) -> str:
    if not path:
        return "[Circular ~]"
    return "[Circular ~." + ".".join(path) + "]"


def _fields(value: Any) -> Mapping[str, Any] | None:
    """Return the field mapping of a model-like object, else None."""
    if isinstance(value, BaseModel):
        fields = {name: getattr(value, name) for name in type(value).model_fields}
        fields.update(value.model_extra or {})
        return fields
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    return None


def _walk(value: Any, path: list[str], stack: dict[int, list[str]]) -> Any:
    if value is None or isinstance(value, bool | int | float | str):
        return value
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, PurePath):
        return str(value)

    fields = _fields(value)
    if isinstance(value, Mapping) or fields is not None or isinstance(value, list | tuple):
        key = id(value)
        if key in stack:
            return _marker(stack[key])
        stack[key] = list(path)
        try:
            if isinstance(value, list | tuple):
                seq: list[Any] = []
                for i, v in enumerate(value):
                    item = _walk(v, [*path, str(i)], stack)
                    seq.append(None if item is _SKIP else item)
                return seq
            items = fields if fields is not None else value
            out: dict[str, Any] = {}
            for k, v in items.items():
                converted = _walk(v, [*path, str(k)], stack)
                if converted is not _SKIP:
                    out[str(k)] = converted
            return out
        finally:
            del stack[key]

    if callable(value):
        return _SKIP
    raise ArtifactSerializationError("~." + ".".join(path) if path else "~", value)


def to_jsonable(value: Any) -> Any:
    """Return a JSON-safe, cycle-free copy of `value`."""
    converted = _walk(value, [], {})
    return None if converted is _SKIP else converted


def stringify_safe(value: Any, *, indent: int | None = None) -> str:
    """Serialize `value` to JSON, replacing circular references with markers."""
    return json.dumps(to_jsonable(value), ensure_ascii=False, indent=indent)


__all__ = ["stringify_safe", "to_jsonable"]
