"""
Synthesize user-timing trace events from computed audit results.

Metrics such as First Contentful Paint are computed after the trace is
recorded, so they are not visible when the trace is opened in a timeline
viewer. :class:`UserTimingSynthesizer` turns each known metric into a pair
of ``blink.user_timing`` async events (``ph`` ``"b"`` then ``"e"``) spanning
``navigationStart`` to the metric time, which the viewer draws as a labelled
bar on the User Timing track.

Audit results are read, never modified. A metric audit contributes when it
carries a numeric ``numericValue`` (or legacy ``rawValue``) in milliseconds.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from auditsave.core.settings import get_logger

USER_TIMING_CATEGORY = "blink.user_timing"


@dataclass(frozen=True, slots=True)
class MetricDefinition:
    """A metric audit and the label its synthesized events carry."""

    audit_id: str
    label: str
    aliases: tuple[str, ...] = ()


METRICS: tuple[MetricDefinition, ...] = (
    MetricDefinition("first-contentful-paint", "First Contentful Paint"),
    MetricDefinition("first-meaningful-paint", "First Meaningful Paint"),
    MetricDefinition("speed-index", "Speed Index", aliases=("speed-index-metric",)),
    MetricDefinition("largest-contentful-paint", "Largest Contentful Paint"),
    MetricDefinition("first-cpu-idle", "First CPU Idle", aliases=("first-interactive",)),
    MetricDefinition(
        "interactive", "Time to Interactive", aliases=("consistently-interactive",)
    ),
)


def _metric_value(audits: Mapping[str, Any], metric: MetricDefinition) -> float | None:
    """Return the metric time in ms, or None if the audit has no usable value."""
    for audit_id in (metric.audit_id, *metric.aliases):
        audit = audits.get(audit_id)
        if not isinstance(audit, Mapping):
            continue
        for key in ("numericValue", "rawValue"):
            value = audit.get(key)
            if isinstance(value, int | float) and not isinstance(value, bool):
                return float(value)
    return None


def _navigation_start(trace_events: Sequence[Mapping[str, Any]]) -> Mapping[str, Any] | None:
    for event in trace_events:
        if event.get("name") == "navigationStart" and isinstance(event.get("ts"), int | float):
            return event
    return None


class UserTimingSynthesizer:
    """Default metrics-synthesis collaborator for the asset pipeline."""

    def __init__(
        self,
        metrics: Sequence[MetricDefinition] = METRICS,
        logger: logging.Logger | None = None,
    ) -> None:
        self.metrics = tuple(metrics)
        self.logger = logger if logger is not None else get_logger("auditsave.user_timing")

    def __call__(
        self, trace_events: Sequence[Mapping[str, Any]], audits: Mapping[str, Any]
    ) -> list[dict[str, Any]]:
        return self.generate_fake_events(trace_events, audits)

    def generate_fake_events(
        self, trace_events: Sequence[Mapping[str, Any]], audits: Mapping[str, Any]
    ) -> list[dict[str, Any]]:
        """Return begin/end event pairs for every metric present in `audits`."""
        nav_start = _navigation_start(trace_events)
        if nav_start is None:
            self.logger.warning("no navigationStart event in trace; skipping fake events")
            return []

        start_ts = nav_start["ts"]
        events: list[dict[str, Any]] = []
        for index, metric in enumerate(self.metrics):
            value = _metric_value(audits, metric)
            if value is None:
                self.logger.debug("(%s) missing value, skipping", metric.label)
                continue

            self.logger.debug("synthesizing trace events for %s", metric.label)
            base = {
                "name": metric.label,
                "cat": USER_TIMING_CATEGORY,
                "id": f"0x{index:x}",
                "pid": nav_start.get("pid"),
                "tid": nav_start.get("tid"),
                "args": {},
            }
            events.append({**base, "ph": "b", "ts": start_ts})
            events.append({**base, "ph": "e", "ts": start_ts + round(value * 1000)})
        return events


__all__ = ["METRICS", "MetricDefinition", "UserTimingSynthesizer", "USER_TIMING_CATEGORY"]
