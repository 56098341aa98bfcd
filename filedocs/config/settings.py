"""Application settings for the document store.

Environment variables are loaded from a ``.env`` file using
``python-dotenv``. :func:`load_settings` reads them into a Pydantic
settings object on each call, which :func:`build_store_config` turns into
a :class:`StoreConfig`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from filedocs.formatters import FORMATTERS, Formatter, MarkdownFormatter

from .store_config import StoreConfig

# Load environment variables from a .env file if present
load_dotenv()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_ROOT = "data"
DEFAULT_FORMAT = "json"
DEFAULT_MARKDOWN_BODY = "body"


class Settings(BaseModel):
    """Immutable settings object used across the application."""

    root_path: Path
    format: str = DEFAULT_FORMAT
    markdown_body_field: str = DEFAULT_MARKDOWN_BODY

    model_config = ConfigDict(frozen=True)

    def make_formatter(self) -> Formatter:
        if self.format == "markdown":
            return MarkdownFormatter(body_field=self.markdown_body_field)
        return FORMATTERS[self.format]()


def load_settings(root: Optional[Path] = None, fmt: Optional[str] = None) -> Settings:
    """Construct a ``Settings`` instance from environment variables.

    ``root`` and ``fmt`` take precedence over ``FILEDOCS_ROOT`` and
    ``FILEDOCS_FORMAT``; an overridden variable is not read or validated.
    """

    root_path = Path(root or os.getenv("FILEDOCS_ROOT") or DEFAULT_ROOT)
    fmt = (fmt or os.getenv("FILEDOCS_FORMAT") or DEFAULT_FORMAT).strip().lower()
    body_field = os.getenv("FILEDOCS_MARKDOWN_BODY") or DEFAULT_MARKDOWN_BODY

    if fmt not in FORMATTERS:
        raise RuntimeError(
            f"FILEDOCS_FORMAT must be one of {', '.join(sorted(FORMATTERS))}, got {fmt!r}"
        )

    return Settings(root_path=root_path, format=fmt, markdown_body_field=body_field)


def build_store_config(base: Optional[Settings] = None) -> StoreConfig:
    """Create the storage root if needed and return a ``StoreConfig``."""

    current = base or load_settings()
    current.root_path.mkdir(parents=True, exist_ok=True)
    return StoreConfig(root_path=current.root_path, formatter=current.make_formatter())

