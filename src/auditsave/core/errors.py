"""Exception taxonomy for auditsave.

Only invalid input and serialization defects get their own types. Failures of
injected collaborators (screenshot providers, event synthesizers) and
``OSError`` from disk writes propagate unwrapped so callers see the original
traceback.
"""

from __future__ import annotations


class AuditSaveError(Exception):
    """Base class for errors raised by auditsave itself."""


class InvalidResultError(AuditSaveError, ValueError):
    """A result identity record is malformed (e.g. its URL is not absolute)."""


class ArtifactSerializationError(AuditSaveError, TypeError):
    """The artifact dumper met a value it has no JSON representation for."""

    def __init__(self, path: str, value: object) -> None:
        self.path = path
        self.value_type = type(value).__name__
        super().__init__(f"cannot serialize {self.value_type} at {path}")


__all__ = ["AuditSaveError", "InvalidResultError", "ArtifactSerializationError"]
