"""auditsave: persist audit-run traces, screenshot filmstrips and artifact dumps.

The public entry points live in :mod:`auditsave.pipelines`; the CLI is exposed
as ``auditsave.cli:app``.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
