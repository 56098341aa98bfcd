"""Errors raised by the document store.

Absent documents are not errors: lookups return ``None``. Lock contention
and incomplete writes are reported by ``store``/``update`` returning
``None``. Filesystem errors raised while deleting are propagated as-is.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class StoreError(RuntimeError):
    """Base class for document store errors."""


class InvalidNameError(StoreError, ValueError):
    """Raised when a repository name is not filesystem safe."""

    def __init__(self, name: str) -> None:
        super().__init__(f"`{name}` is not a valid repository name.")
        self.name = name


class DirectoryUnavailableError(StoreError):
    """Raised when a repository directory cannot be created or written."""

    def __init__(self, path: Path, reason: str, cause: Optional[OSError] = None) -> None:
        super().__init__(f"`{path}` {reason}.")
        self.path = path
        self.cause = cause


class InvalidIdError(StoreError, ValueError):
    """Raised when a document ID would produce an unsafe filename."""

    def __init__(self, document_id: object) -> None:
        super().__init__(f"`{document_id}` is not a valid document ID.")
        self.document_id = document_id
