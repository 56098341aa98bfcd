"""Markdown documents with YAML front matter.

A stored file looks like::

    ---
    title: Hello
    tags: [a, b]
    ---
    The body text, kept verbatim under ``body_field``.

Only a string body is written after the front matter. When the body field
is absent the file ends right after the closing ``---`` with no newline;
any other body value is kept inside the front matter.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import yaml

from .base import Formatter
from .yaml_formatter import has_string_keys

_DELIMITER = "---"


class MarkdownFormatter(Formatter):
    def __init__(self, body_field: str = "body") -> None:
        self.body_field = body_field

    @property
    def file_extension(self) -> str:
        return "md"

    def encode(self, fields: Mapping[str, Any]) -> bytes:
        body = fields.get(self.body_field)
        if not isinstance(body, str):
            front = yaml.safe_dump(dict(fields), sort_keys=False, allow_unicode=True)
            return f"{_DELIMITER}\n{front}{_DELIMITER}".encode("utf-8")

        meta = {key: value for key, value in fields.items() if key != self.body_field}
        out = ""
        if meta or body.startswith(_DELIMITER):
            front = yaml.safe_dump(meta, sort_keys=False, allow_unicode=True)
            out = f"{_DELIMITER}\n{front}{_DELIMITER}\n"
        return (out + body).encode("utf-8")

    def decode(self, raw: bytes) -> Optional[dict[str, Any]]:
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            return None

        lines = text.split("\n")
        if not lines or lines[0].rstrip("\r") != _DELIMITER:
            return {self.body_field: text}

        for idx in range(1, len(lines)):
            if lines[idx].rstrip("\r") == _DELIMITER:
                break
        else:
            # Opening delimiter without a closing one is not front matter
            return {self.body_field: text}

        try:
            meta = yaml.safe_load("\n".join(lines[1:idx]))
        except yaml.YAMLError:
            return None
        if meta is None:
            meta = {}
        if not isinstance(meta, dict) or not has_string_keys(meta):
            return None

        data: dict[str, Any] = dict(meta)
        # Nothing after the closing delimiter, not even a newline: no body.
        if idx + 1 < len(lines):
            data[self.body_field] = "\n".join(lines[idx + 1 :])
        return data
