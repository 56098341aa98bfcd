from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional


class Formatter(ABC):
    """Codec between a document's field mapping and its stored bytes."""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Extension used for document files, without the leading dot."""

    @abstractmethod
    def encode(self, fields: Mapping[str, Any]) -> bytes:
        """Serialise ``fields`` to bytes."""

    @abstractmethod
    def decode(self, raw: bytes) -> Optional[dict[str, Any]]:
        """Parse ``raw`` into a field mapping, or ``None`` if it is not one."""
