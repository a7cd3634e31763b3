"""Typed contracts shared across auditsave.

- :class:`Screenshot`     : one filmstrip frame (timestamp + data URI).
- :class:`ResultIdentity` : the url/time pair used to name output files.
- :class:`Artifacts`      : a concrete artifacts bundle.
- :class:`PreparedAsset`  : a trace/filmstrip pair ready to be written.
"""

from __future__ import annotations

from .artifacts import (
    Artifacts,
    ArtifactsBundle,
    PreparedAsset,
    ScreenshotProvider,
    Trace,
)
from .screenshot import ResultIdentity, Screenshot

__all__ = [
    "Artifacts",
    "ArtifactsBundle",
    "PreparedAsset",
    "ResultIdentity",
    "Screenshot",
    "ScreenshotProvider",
    "Trace",
]
