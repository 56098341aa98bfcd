from __future__ import annotations

import random
from pathlib import Path
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from filedocs.formatters import Formatter, JsonFormatter
from filedocs.query import Query


class StoreConfig(BaseModel):
    """Storage root plus the pluggable pieces a repository is built from.

    >>> import tempfile
    >>> config = StoreConfig(root_path=tempfile.gettempdir())
    >>> config.get_option("formatter").file_extension
    'json'
    """

    root_path: Path
    formatter: Formatter = Field(default_factory=JsonFormatter)
    # Called with the repository; returns a query bound to it.
    query_factory: Callable[..., Any] = Query
    rng: random.Random = Field(default_factory=random.Random)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator("root_path")
    @classmethod
    def _root_must_be_directory(cls, v: Path) -> Path:
        if not v.is_dir():
            raise ValueError(f"root_path {v} is not an existing directory")
        return v

    def get_root_path(self) -> Path:
        return self.root_path

    def get_option(self, name: str) -> Any:
        if name == "root_path" or name not in type(self).model_fields:
            raise KeyError(name)
        return getattr(self, name)
