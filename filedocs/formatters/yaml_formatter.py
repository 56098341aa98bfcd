from __future__ import annotations

from typing import Any, Mapping, Optional

import yaml

from .base import Formatter


def has_string_keys(data: Mapping[Any, Any]) -> bool:
    return all(isinstance(key, str) for key in data)


class YamlFormatter(Formatter):
    """YAML mappings via PyYAML's safe loader and dumper.

    A mapping with a non-string top-level key (``1: a``) is not a document
    and decodes to ``None``.
    """

    @property
    def file_extension(self) -> str:
        return "yaml"

    def encode(self, fields: Mapping[str, Any]) -> bytes:
        text = yaml.safe_dump(dict(fields), sort_keys=False, allow_unicode=True)
        return text.encode("utf-8")

    def decode(self, raw: bytes) -> Optional[dict[str, Any]]:
        try:
            data = yaml.safe_load(raw.decode("utf-8"))
        except (UnicodeDecodeError, yaml.YAMLError):
            return None
        if not isinstance(data, dict) or not has_string_keys(data):
            return None
        return data
