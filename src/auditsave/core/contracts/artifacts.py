"""
Artifacts bundle and prepared-asset records.

The bundle is owned by the caller. The asset pipeline only reads
``traces`` and calls ``request_screenshots``; everything in ``extra`` is
carried along for the full-artifact dump and may reference itself.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from .screenshot import Screenshot

Trace = dict[str, Any]
ScreenshotLike = Screenshot | Mapping[str, Any]
ScreenshotResult = Sequence[ScreenshotLike] | Awaitable[Sequence[ScreenshotLike]]
ScreenshotProvider = Callable[[Trace], ScreenshotResult]


class ArtifactsBundle(Protocol):
    """Anything that exposes per-pass traces and a screenshot capability."""

    @property
    def traces(self) -> Mapping[str, Trace]: ...

    def request_screenshots(self, trace: Trace) -> ScreenshotResult: ...


@dataclass
class Artifacts:
    """
    Concrete artifacts bundle produced by an audit run.

    Attributes
    ----------
    traces : dict[str, Trace]
        Pass name to trace. Iteration order is the pass order and decides the
        positional index used in output filenames.
    screenshot_provider : ScreenshotProvider
        Capability returning the filmstrip frames of a trace, synchronously or
        as an awaitable.
    extra : dict[str, Any]
        Any further artifacts (network records, page metadata, ...). Only the
        full-artifact dump looks at these.
    """

    traces: dict[str, Trace]
    screenshot_provider: ScreenshotProvider
    extra: dict[str, Any] = field(default_factory=dict)

    def request_screenshots(self, trace: Trace) -> ScreenshotResult:
        """Delegate to the configured screenshot provider."""
        return self.screenshot_provider(trace)

    @classmethod
    def from_traces(cls, traces: Mapping[str, Trace], **extra: Any) -> Artifacts:
        """Build a bundle whose screenshots are read from the trace events."""
        # traces.screenshots imports this package; resolve at call time.
        from auditsave.traces.screenshots import screenshots_from_trace

        return cls(
            traces=dict(traces),
            screenshot_provider=screenshots_from_trace,
            extra=dict(extra),
        )


@dataclass(frozen=True, slots=True)
class PreparedAsset:
    """
    A trace and its rendered filmstrip, ready to be written to disk.

    Attributes
    ----------
    pass_name : str
        Name of the pass this asset came from. Output filenames only carry
        the positional index; the name is kept for the manifest.
    trace_data : Trace
        Shallow copy of the pass trace, possibly with synthesized events.
    html : str
        Self-contained filmstrip document.
    """

    pass_name: str
    trace_data: Trace
    html: str


__all__ = [
    "Artifacts",
    "ArtifactsBundle",
    "PreparedAsset",
    "ScreenshotProvider",
    "Trace",
]
