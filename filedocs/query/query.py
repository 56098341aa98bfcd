from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Protocol, Union

from filedocs.domain import Document

from .predicate import DocumentTest, Predicate, PredicateGroup
from .result import QueryResult

if TYPE_CHECKING:
    from filedocs.repositories import DocumentRepo

logger = logging.getLogger(__name__)


class QueryFactory(Protocol):
    def __call__(self, repository: "DocumentRepo") -> "Query": ...


class Query:
    """Filter, order and paginate the documents of one repository.

    The whole repository is loaded through ``find_all`` on every
    ``execute``; there are no indexes.

    Example::

        repo.query().where("age", ">", 30).order_by("name DESC").limit(10).execute()
    """

    def __init__(self, repository: "DocumentRepo") -> None:
        self.repository = repository
        self._predicates = PredicateGroup()
        self._order: list[tuple[str, bool]] = []
        self._limit: Optional[int] = None
        self._offset = 0

    def where(
        self, field: Union[str, DocumentTest], op: str | None = None, value: Any = None
    ) -> "Query":
        self._predicates.add(Predicate(field, op, value), "and")
        return self

    def and_where(
        self, field: Union[str, DocumentTest], op: str | None = None, value: Any = None
    ) -> "Query":
        return self.where(field, op, value)

    def or_where(
        self, field: Union[str, DocumentTest], op: str | None = None, value: Any = None
    ) -> "Query":
        self._predicates.add(Predicate(field, op, value), "or")
        return self

    def order_by(self, *fields: str) -> "Query":
        """Sort by one or more ``"field [ASC|DESC]"`` specs, first one wins."""
        for spec in fields:
            parts = spec.split()
            if not parts or len(parts) > 2:
                raise ValueError(f"Invalid order spec: {spec!r}")
            direction = parts[1].upper() if len(parts) == 2 else "ASC"
            if direction not in ("ASC", "DESC"):
                raise ValueError(f"Invalid sort direction: {parts[1]!r}")
            self._order.append((parts[0], direction == "DESC"))
        return self

    def limit(self, count: Optional[int], offset: int = 0) -> "Query":
        """Keep at most ``count`` matches (all if None) after skipping ``offset``."""
        if (count is not None and count < 0) or offset < 0:
            raise ValueError("limit and offset must be non-negative")
        self._limit = count
        self._offset = offset
        return self

    def execute(self) -> QueryResult:
        docs = self.repository.find_all()
        if self._predicates:
            docs = [doc for doc in docs if self._predicates.matches(doc)]
        # Stable sorts applied from the last key to the first.
        for field, descending in reversed(self._order):
            docs = _sort(docs, field, descending)
        total = len(docs)
        end = None if self._limit is None else self._offset + self._limit
        page = docs[self._offset : end]
        logger.debug("Query matched %d documents, returning %d", total, len(page))
        return QueryResult(documents=page, total=total)


def _sort(docs: list[Document], field: str, descending: bool) -> list[Document]:
    present = [doc for doc in docs if doc.has(field)]
    missing = [doc for doc in docs if not doc.has(field)]
    try:
        present.sort(key=lambda doc: doc.get(field), reverse=descending)
    except TypeError:
        # Mixed types: fall back to ordering by type name, then value text.
        present.sort(
            key=lambda doc: (type(doc.get(field)).__name__, str(doc.get(field))),
            reverse=descending,
        )
    return present + missing
