"""Schema-less documents stored one file per document in a directory."""

from .config import StoreConfig
from .domain import Document
from .errors import DirectoryUnavailableError, InvalidIdError, InvalidNameError, StoreError
from .formatters import Formatter, JsonFormatter, MarkdownFormatter, YamlFormatter
from .query import Query, QueryResult
from .repositories import DocumentRepo
from .repositories.cached import CachedRepository
from .repositories.filesystem import Repository

__all__ = [
    "CachedRepository",
    "DirectoryUnavailableError",
    "Document",
    "DocumentRepo",
    "Formatter",
    "InvalidIdError",
    "InvalidNameError",
    "JsonFormatter",
    "MarkdownFormatter",
    "Query",
    "QueryResult",
    "Repository",
    "StoreConfig",
    "StoreError",
    "YamlFormatter",
]
