"""Renderers producing standalone viewer documents."""

from __future__ import annotations

from .filmstrip import screenshot_dump

__all__ = ["screenshot_dump"]
