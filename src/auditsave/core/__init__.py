"""Core package initializer for auditsave.

Settings, contracts, naming, serialization and disk storage live here;
orchestration lives in :mod:`auditsave.pipelines`.
"""

from __future__ import annotations

__all__ = ["__doc__"]
