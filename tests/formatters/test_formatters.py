from __future__ import annotations

from typing import Any

import pytest

from filedocs.formatters import (
    FORMATTERS,
    Formatter,
    JsonFormatter,
    MarkdownFormatter,
    YamlFormatter,
)

SAMPLE: dict[str, Any] = {
    "title": "Grüße",
    "count": 3,
    "ratio": 0.5,
    "published": True,
    "tags": ["a", "b"],
    "author": {"name": "Ada", "email": None},
}


@pytest.mark.parametrize("formatter", [JsonFormatter(), YamlFormatter()])
def test_structured_formats_are_lossless(formatter: Formatter) -> None:
    assert formatter.decode(formatter.encode(SAMPLE)) == SAMPLE


@pytest.mark.parametrize(
    "formatter, ext",
    [(JsonFormatter(), "json"), (YamlFormatter(), "yaml"), (MarkdownFormatter(), "md")],
)
def test_extensions(formatter: Formatter, ext: str) -> None:
    assert formatter.file_extension == ext


def test_registry_names() -> None:
    assert set(FORMATTERS) == {"json", "yaml", "markdown"}


def test_json_is_pretty_and_keeps_unicode() -> None:
    raw = JsonFormatter().encode({"title": "Grüße"})
    assert "Grüße".encode("utf-8") in raw
    assert raw.startswith(b"{\n    ")


@pytest.mark.parametrize("raw", [b"", b"{nope", b"[1, 2]", b"42", b'"text"', b"\xff\xfe"])
def test_json_decode_rejects_non_mappings(raw: bytes) -> None:
    assert JsonFormatter().decode(raw) is None


@pytest.mark.parametrize(
    "raw", [b"", b"- a\n- b\n", b"key: [unclosed", b"\xff", b"1: a\n", b"ok: 1\n2: b\n"]
)
def test_yaml_decode_rejects_non_mappings(raw: bytes) -> None:
    assert YamlFormatter().decode(raw) is None


def test_yaml_preserves_key_order() -> None:
    raw = YamlFormatter().encode({"b": 1, "a": 2})
    assert raw.decode("utf-8").splitlines() == ["b: 1", "a: 2"]


def test_markdown_front_matter_and_body() -> None:
    fmt = MarkdownFormatter()
    fields = {"title": "Post", "tags": ["x"], "body": "# Heading\n\nText.\n"}
    raw = fmt.encode(fields)
    text = raw.decode("utf-8")
    assert text.startswith("---\ntitle: Post\n")
    assert text.endswith("---\n# Heading\n\nText.\n")
    assert fmt.decode(raw) == fields


def test_markdown_custom_body_field() -> None:
    fmt = MarkdownFormatter(body_field="content")
    fields = {"title": "T", "content": "hello"}
    assert fmt.decode(fmt.encode(fields)) == fields


def test_markdown_without_front_matter() -> None:
    fmt = MarkdownFormatter()
    assert fmt.encode({"body": "plain"}) == b"plain"
    assert fmt.decode(b"plain text") == {"body": "plain text"}
    assert fmt.decode(b"---\nunterminated") == {"body": "---\nunterminated"}


def test_markdown_body_starting_with_delimiter_survives() -> None:
    fmt = MarkdownFormatter()
    fields = {"body": "---\nnot: meta\n---\n"}
    assert fmt.decode(fmt.encode(fields)) == fields


def test_markdown_missing_body_stays_missing() -> None:
    fmt = MarkdownFormatter()
    raw = fmt.encode({"title": "only meta"})
    assert raw == b"---\ntitle: only meta\n---"
    assert fmt.decode(raw) == {"title": "only meta"}
    assert fmt.decode(fmt.encode({})) == {}
    # A trailing newline after the front matter is an empty body.
    assert fmt.decode(b"---\ntitle: x\n---\n") == {"title": "x", "body": ""}


def test_markdown_non_string_body_kept_in_front_matter() -> None:
    fmt = MarkdownFormatter()
    raw = fmt.encode({"title": "n", "body": 5})
    assert raw == b"---\ntitle: n\nbody: 5\n---"
    assert fmt.decode(raw) == {"title": "n", "body": 5}
    assert fmt.decode(fmt.encode({"body": None})) == {"body": None}


@pytest.mark.parametrize(
    "raw",
    [b"---\n- a list\n---\nbody", b"---\nkey: [bad\n---\n", b"\xff", b"---\n1: a\n---\nbody"],
)
def test_markdown_decode_rejects_bad_front_matter(raw: bytes) -> None:
    assert MarkdownFormatter().decode(raw) is None


def test_formatter_is_abstract() -> None:
    with pytest.raises(TypeError):
        Formatter()  # type: ignore[abstract]
