"""Helpers that read from, or synthesize into, Chrome trace event streams."""

from __future__ import annotations

from .screenshots import screenshots_from_trace
from .user_timing import METRICS, MetricDefinition, UserTimingSynthesizer

__all__ = [
    "METRICS",
    "MetricDefinition",
    "UserTimingSynthesizer",
    "screenshots_from_trace",
]
