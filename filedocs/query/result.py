from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

from filedocs.domain import Document


@dataclass(frozen=True)
class QueryResult:
    """A page of matching documents.

    ``total`` counts every match before ``limit``/``offset`` were applied.
    """

    documents: list[Document] = field(default_factory=list)
    total: int = 0

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.documents)

    def first(self) -> Optional[Document]:
        return self.documents[0] if self.documents else None

    def to_list(self) -> list[Document]:
        return list(self.documents)
