"""Pipeline entry points for auditsave.

Currently exposed:

- :func:`prepare_assets`: per-pass screenshots, fake events and filmstrips.
- :func:`save_assets`   : prepare, then write traces and filmstrips to disk.
- :func:`save_artifacts`: dump the whole artifacts bundle (cycle-safe).
"""

from __future__ import annotations

from .asset_saver import (
    MetricsSynthesizer,
    prepare_assets,
    save_artifacts,
    save_assets,
)

__all__ = ["prepare_assets", "save_assets", "save_artifacts", "MetricsSynthesizer"]
