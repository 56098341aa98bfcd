from __future__ import annotations

import operator
from typing import Any, Callable, Union

from filedocs.domain import Document


def _contains(container: Any, item: Any) -> bool:
    return item in container


def _within(item: Any, container: Any) -> bool:
    return item in container


def _not_within(item: Any, container: Any) -> bool:
    return item not in container


OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
    "in": _within,
    "not in": _not_within,
    "contains": _contains,
}

DocumentTest = Callable[[Document], bool]


class Predicate:
    """A single condition on a document field, or an arbitrary callable.

    Documents lacking the field never match, and neither do values the
    operator cannot compare.
    """

    def __init__(
        self,
        field: Union[str, DocumentTest],
        op: str | None = None,
        value: Any = None,
    ) -> None:
        if callable(field):
            self._test: DocumentTest = field
            self.field = None
            self.op = None
            self.value = None
            return
        if op is None:
            raise ValueError("A field predicate needs an operator")
        key = op.strip().lower()
        if key not in OPERATORS:
            raise ValueError(f"Unsupported operator: {op!r}")
        self.field = field
        self.op = key
        self.value = value
        compare = OPERATORS[key]

        def test(doc: Document) -> bool:
            if not doc.has(field):
                return False
            try:
                return bool(compare(doc.get(field), value))
            except TypeError:
                return False

        self._test = test

    def matches(self, doc: Document) -> bool:
        return self._test(doc)

    def __repr__(self) -> str:
        if self.field is None:
            return f"Predicate({self._test!r})"
        return f"Predicate({self.field!r} {self.op} {self.value!r})"


class PredicateGroup:
    """Predicates combined left to right with ``and``/``or``.

    ``a and b or c`` is evaluated as ``(a and b) or c``.
    """

    def __init__(self) -> None:
        self._clauses: list[tuple[str, Predicate]] = []

    def add(self, predicate: Predicate, conjunction: str = "and") -> None:
        if conjunction not in ("and", "or"):
            raise ValueError(f"Unsupported conjunction: {conjunction!r}")
        self._clauses.append((conjunction, predicate))

    def __bool__(self) -> bool:
        return bool(self._clauses)

    def matches(self, doc: Document) -> bool:
        result = True
        for idx, (conjunction, predicate) in enumerate(self._clauses):
            if idx == 0:
                result = predicate.matches(doc)
            elif conjunction == "and":
                result = result and predicate.matches(doc)
            else:
                result = result or predicate.matches(doc)
        return result
