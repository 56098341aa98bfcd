"""Formatters convert a document's field mapping to stored bytes and back."""

from .base import Formatter
from .json_formatter import JsonFormatter
from .markdown_formatter import MarkdownFormatter
from .yaml_formatter import YamlFormatter

FORMATTERS: dict[str, type[Formatter]] = {
    "json": JsonFormatter,
    "yaml": YamlFormatter,
    "markdown": MarkdownFormatter,
}

__all__ = [
    "FORMATTERS",
    "Formatter",
    "JsonFormatter",
    "MarkdownFormatter",
    "YamlFormatter",
]
