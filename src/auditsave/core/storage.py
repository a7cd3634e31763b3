"""Disk-backed writer for prepared trace/filmstrip assets.

This module persists :class:`PreparedAsset` objects next to a caller-chosen
base path (a directory plus a filename prefix, e.g. ``out/example.com_...``).

- Trace:       ``{base}-{index}.trace.json``        (JSON, 2-space indent)
- Filmstrip:   ``{base}-{index}.screenshots.html``  (written verbatim)
- Artifacts:   ``{base}.artifacts.log``             (cycle-safe JSON dump)
- Manifest:    ``{base}.manifest.json``             (optional index -> pass)

Every write is a full overwrite. Nothing is rolled back when a later write
fails; the files already written stay on disk.

Usage
-----
>>> writer = AssetWriter("out/run")
>>> writer.write_asset(0, asset)  # returns (trace_path, html_path)
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol

from .contracts.artifacts import PreparedAsset
from .serialize import stringify_safe
from .settings import get_logger

TRACE_INDENT = 2


class LogSink(Protocol):
    """The single logging operation the writer needs; `logging.Logger` fits."""

    def info(self, msg: str, *args: Any) -> None: ...


class AssetWriter:
    """Persist prepared assets and artifact dumps under a base path."""

    def __init__(self, base_path: str | Path, logger: LogSink | None = None) -> None:
        self.base_path = Path(base_path)
        self.logger: LogSink = logger if logger is not None else get_logger("auditsave.assets")

    # ------------------------------- Naming ----------------------------------

    def _sibling(self, suffix: str) -> Path:
        return self.base_path.with_name(self.base_path.name + suffix)

    def trace_path(self, index: int) -> Path:
        return self._sibling(f"-{index}.trace.json")

    def screenshots_path(self, index: int) -> Path:
        return self._sibling(f"-{index}.screenshots.html")

    @property
    def artifacts_path(self) -> Path:
        return self._sibling(".artifacts.log")

    @property
    def manifest_path(self) -> Path:
        return self._sibling(".manifest.json")

    # ------------------------------- Writes ----------------------------------

    def _ensure_parent(self) -> None:
        self.base_path.parent.mkdir(parents=True, exist_ok=True)

    def write_asset(self, index: int, asset: PreparedAsset) -> tuple[Path, Path]:
        """Write the trace and filmstrip of one pass; return both paths."""
        self._ensure_parent()

        trace_path = self.trace_path(index)
        trace_path.write_text(
            json.dumps(asset.trace_data, ensure_ascii=False, indent=TRACE_INDENT),
            encoding="utf-8",
        )
        self.logger.info("trace file saved to disk: %s", trace_path)

        html_path = self.screenshots_path(index)
        html_path.write_text(asset.html, encoding="utf-8")
        self.logger.info("screenshots saved to disk: %s", html_path)

        return trace_path, html_path

    def write_assets(self, assets: Sequence[PreparedAsset]) -> list[Path]:
        """Write every asset in index order and return the written paths."""
        written: list[Path] = []
        for index, asset in enumerate(assets):
            written.extend(self.write_asset(index, asset))
        return written

    def write_manifest(self, assets: Sequence[PreparedAsset]) -> Path:
        """Write ``{base}.manifest.json`` mapping each index to its pass name.

        Output filenames only carry the positional index; the manifest lets a
        reader of the output directory recover which pass produced which pair.
        """
        self._ensure_parent()
        payload = {
            "passes": [
                {
                    "index": index,
                    "pass_name": asset.pass_name,
                    "trace": self.trace_path(index).name,
                    "screenshots": self.screenshots_path(index).name,
                    "trace_event_count": len(asset.trace_data.get("traceEvents", [])),
                }
                for index, asset in enumerate(assets)
            ]
        }
        path = self.manifest_path
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=TRACE_INDENT)
            f.write("\n")
        self.logger.info("manifest saved to disk: %s", path)
        return path

    def write_artifacts(self, artifacts: Any) -> Path:
        """Dump the whole artifacts bundle to ``{base}.artifacts.log``."""
        self._ensure_parent()
        path = self.artifacts_path
        path.write_text(stringify_safe(artifacts), encoding="utf-8")
        self.logger.info("artifacts file saved to disk: %s", path)
        return path


__all__ = ["AssetWriter", "LogSink", "TRACE_INDENT"]
