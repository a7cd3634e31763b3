"""Unit tests for the cycle-safe artifact serializer."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest
from pydantic import BaseModel

from auditsave.core.contracts.screenshot import Screenshot
from auditsave.core.errors import ArtifactSerializationError
from auditsave.core.serialize import stringify_safe, to_jsonable


def test_self_reference_becomes_root_marker() -> None:
    """A dict pointing at itself serializes with the root marker."""
    root: dict[str, Any] = {"name": "root"}
    root["self"] = root
    assert json.loads(stringify_safe(root)) == {"name": "root", "self": "[Circular ~]"}


def test_nested_cycle_marker_names_the_ancestor_path() -> None:
    """A back-reference to an inner ancestor carries that ancestor's path."""
    request: dict[str, Any] = {"url": "https://example.com/app.js"}
    root: dict[str, Any] = {"networkRecords": [request]}
    request["initiator"] = request
    request["page"] = root

    out = to_jsonable(root)
    record = out["networkRecords"][0]
    assert record["initiator"] == "[Circular ~.networkRecords.0]"
    assert record["page"] == "[Circular ~]"


def test_shared_acyclic_objects_are_repeated() -> None:
    """Sharing without a cycle is not a circular reference."""
    shared = {"v": 1}
    assert to_jsonable({"a": shared, "b": [shared, shared]}) == {
        "a": {"v": 1},
        "b": [{"v": 1}, {"v": 1}],
    }


def test_models_dataclasses_and_scalars() -> None:
    """Pydantic models, dataclasses, datetimes and paths become JSON values."""

    class Page(BaseModel):
        url: str
        fetched: datetime

    @dataclass
    class Run:
        page: Page
        out: Path
        tags: tuple[str, ...] = ()
        meta: dict[str, Any] = field(default_factory=dict)

    run = Run(
        page=Page(url="https://example.com", fetched=datetime(2020, 1, 2, 3, 4, 5)),
        out=Path("out") / "run",
        tags=("a", "b"),
    )
    assert to_jsonable(run) == {
        "page": {"url": "https://example.com", "fetched": "2020-01-02T03:04:05"},
        "out": str(Path("out") / "run"),
        "tags": ["a", "b"],
        "meta": {},
    }


def test_dataclass_cycle_is_broken() -> None:
    """Cycles through dataclass fields are detected like mapping cycles."""

    @dataclass
    class Node:
        name: str
        parent: Any = None
        children: list[Any] = field(default_factory=list)

    root = Node("root")
    child = Node("child", parent=root)
    root.children.append(child)

    out = json.loads(stringify_safe(root))
    assert out["children"][0]["parent"] == "[Circular ~]"


def test_callables_are_dropped() -> None:
    """Functions vanish from objects and become null inside arrays."""
    out = to_jsonable({"fn": lambda t: t, "keep": 1, "list": [print, 2]})
    assert out == {"keep": 1, "list": [None, 2]}


def test_unsupported_values_raise() -> None:
    """Values with no JSON form are a defect, reported with their path."""
    with pytest.raises(ArtifactSerializationError) as excinfo:
        stringify_safe({"a": [{"b": {1, 2}}]})
    assert excinfo.value.path == "~.a.0.b"
    assert excinfo.value.value_type == "set"


def test_output_is_compact_json() -> None:
    """The dump is a single line of JSON."""
    text = stringify_safe({"a": [1, 2], "b": {"c": None}})
    assert "\n" not in text
    assert json.loads(text) == {"a": [1, 2], "b": {"c": None}}


def test_model_extra_fields_are_kept() -> None:
    """Extra keys stored on a pydantic model are dumped with its fields."""
    shot = Screenshot.model_validate({"timestamp": 2, "datauri": "data:y", "frame": 7})
    assert to_jsonable(shot) == {"timestamp": 2, "datauri": "data:y", "frame": 7}
