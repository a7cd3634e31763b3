"""
Asset saver pipeline: from in-memory audit artifacts to files on disk.

Flow Overview
-------------
1. **Prepare** (:func:`prepare_assets`)
   - Walk the bundle's passes in insertion order.
   - Fetch each pass's screenshots through the bundle's capability, awaiting
     it when it returns an awaitable.
   - Copy the trace; if audit results were given, append the synthesized
     user-timing events to the copy.
   - Render the filmstrip document.

2. **Write** (:func:`save_assets`)
   - ``{base}-{i}.trace.json`` and ``{base}-{i}.screenshots.html`` per pass,
     ``i`` being the pass position. Optionally ``{base}.manifest.json``.

3. **Dump** (:func:`save_artifacts`)
   - Independent of 1 and 2: the entire bundle, cycle-safe, to
     ``{base}.artifacts.log``.

Ordering
--------
Output filenames encode the pass *position*, not its name, so the order of
``artifacts.traces`` is load-bearing. Screenshot retrieval is sequential by
default to bound peak memory; with ``concurrency > 1`` passes are fetched in a
bounded pool and results are put back in pass order.

Failures
--------
Any collaborator error aborts the run and propagates; no partial asset list
is returned. In the bounded pool, passes still waiting for a slot never
start and passes in flight are cancelled. Write errors propagate too,
leaving earlier files in place.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Mapping, Sequence
from pathlib import Path
from typing import Any, TypeVar

from auditsave.core.contracts.artifacts import ArtifactsBundle, PreparedAsset, Trace
from auditsave.core.storage import AssetWriter, LogSink
from auditsave.render.filmstrip import screenshot_dump
from auditsave.traces.user_timing import UserTimingSynthesizer

T = TypeVar("T")

Events = Sequence[Mapping[str, Any]]
MetricsSynthesizer = Callable[[list[dict[str, Any]], Mapping[str, Any]], Events | Awaitable[Events]]


async def _resolve(value: T | Awaitable[T]) -> T:
    """Await `value` if it is awaitable; return it unchanged otherwise."""
    if inspect.isawaitable(value):
        return await value
    return value


def _copy_trace(trace: Trace) -> Trace:
    """Shallow-copy `trace`, also copying its event list so appends stay local."""
    trace_data = dict(trace)
    if "traceEvents" in trace_data:
        trace_data["traceEvents"] = list(trace_data["traceEvents"])
    return trace_data


async def _prepare_pass(
    artifacts: ArtifactsBundle,
    pass_name: str,
    trace: Trace,
    audits: Mapping[str, Any] | None,
    synthesizer: MetricsSynthesizer,
) -> PreparedAsset:
    screenshots = await _resolve(artifacts.request_screenshots(trace))
    trace_data = _copy_trace(trace)
    html = screenshot_dump(screenshots)

    if audits is not None:
        events = trace_data.setdefault("traceEvents", [])
        fake_events = await _resolve(synthesizer(list(events), audits))
        events.extend(fake_events)

    return PreparedAsset(pass_name=pass_name, trace_data=trace_data, html=html)


async def prepare_assets(
    artifacts: ArtifactsBundle,
    audits: Mapping[str, Any] | None = None,
    *,
    synthesizer: MetricsSynthesizer | None = None,
    concurrency: int = 1,
) -> list[PreparedAsset]:
    """Build one :class:`PreparedAsset` per pass, in pass order.

    Parameters
    ----------
    artifacts:
        The run's artifacts bundle. Never mutated.
    audits:
        Audit results passed to the synthesizer. ``None`` skips synthesis and
        leaves every trace's events untouched.
    synthesizer:
        Callable ``(trace_events, audits) -> events`` (sync or async).
        Defaults to :class:`UserTimingSynthesizer`.
    concurrency:
        Maximum passes whose screenshots are in flight at once.
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be >= 1, got {concurrency}")
    synth: MetricsSynthesizer = synthesizer if synthesizer is not None else UserTimingSynthesizer()
    passes = list(artifacts.traces.items())

    if concurrency == 1:
        assets: list[PreparedAsset] = []
        for pass_name, trace in passes:
            assets.append(await _prepare_pass(artifacts, pass_name, trace, audits, synth))
        return assets

    semaphore = asyncio.Semaphore(concurrency)
    aborted = asyncio.Event()

    async def bounded(pass_name: str, trace: Trace) -> PreparedAsset:
        async with semaphore:
            # A pass that gets its slot after another one failed never starts.
            if aborted.is_set():
                raise asyncio.CancelledError
            try:
                return await _prepare_pass(artifacts, pass_name, trace, audits, synth)
            except BaseException:
                aborted.set()
                raise

    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(bounded(name, trace)) for name, trace in passes]
    except ExceptionGroup as failures:
        # Surface the first collaborator error itself, as the sequential path does.
        raise failures.exceptions[0] from None

    return [task.result() for task in tasks]


async def save_assets(
    artifacts: ArtifactsBundle,
    audits: Mapping[str, Any] | None,
    base_path: str | Path,
    *,
    logger: LogSink | None = None,
    synthesizer: MetricsSynthesizer | None = None,
    concurrency: int = 1,
    write_manifest: bool = False,
) -> list[Path]:
    """Write the trace and filmstrip of every pass under `base_path`.

    Returns
    -------
    list[Path]
        Every file written, in write order (manifest last when requested).
    """
    assets = await prepare_assets(
        artifacts, audits, synthesizer=synthesizer, concurrency=concurrency
    )
    writer = AssetWriter(base_path, logger=logger)
    written = writer.write_assets(assets)
    if write_manifest:
        written.append(writer.write_manifest(assets))
    return written


def save_artifacts(
    artifacts: Any,
    base_path: str | Path,
    *,
    logger: LogSink | None = None,
) -> Path:
    """Dump the entire artifacts bundle to ``{base_path}.artifacts.log``."""
    return AssetWriter(base_path, logger=logger).write_artifacts(artifacts)


__all__ = ["prepare_assets", "save_assets", "save_artifacts", "MetricsSynthesizer"]
