"""Repository interfaces and implementations.

This package defines the abstract document repository interface and its
concrete implementations: the directory-backed :class:`Repository` under
:mod:`filedocs.repositories.filesystem` and the caching decorator under
:mod:`filedocs.repositories.cached`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Union

from filedocs.domain import Document

if TYPE_CHECKING:
    from filedocs.query import Query


class DocumentRepo(ABC):
    """Repository interface for schema-less documents."""

    @abstractmethod
    def find_by_id(self, document_id: str) -> Optional[Document]:
        """
        Fetch a document by its ID.

        Example:
            >>> repo.find_by_id("a1B2c3D4e")
            Document(id='a1B2c3D4e', title='Hello')

        :param document_id: ID of the document.
        :return: Document if stored and decodable, otherwise None.
        """

    @abstractmethod
    def find_all(self) -> list[Document]:
        """Return every decodable document in the repository."""

    @abstractmethod
    def store(self, document: Document) -> Optional[str]:
        """
        Persist a document, assigning a generated ID when it has none.

        :param document: Document to write; its ID may be set in place.
        :return: The document ID, or None if the write did not happen.
        """

    @abstractmethod
    def update(self, document: Document) -> Optional[str]:
        """Persist a document that already exists; None if it does not."""

    @abstractmethod
    def delete(self, document: Union[str, Document]) -> None:
        """Remove a document given its ID or the document itself."""

    @abstractmethod
    def query(self) -> "Query":
        """Return a new query bound to this repository."""
