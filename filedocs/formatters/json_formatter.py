from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from .base import Formatter


class JsonFormatter(Formatter):
    """Pretty-printed UTF-8 JSON objects."""

    def __init__(self, indent: int | None = 4) -> None:
        self._indent = indent

    @property
    def file_extension(self) -> str:
        return "json"

    def encode(self, fields: Mapping[str, Any]) -> bytes:
        return json.dumps(dict(fields), indent=self._indent, ensure_ascii=False).encode("utf-8")

    def decode(self, raw: bytes) -> Optional[dict[str, Any]]:
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            return None
        return data if isinstance(data, dict) else None
