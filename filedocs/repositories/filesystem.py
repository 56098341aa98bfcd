"""Directory-backed document repository.

Each repository is a directory ``<root>/<name>`` holding one file per
document, named ``<id>.<extension>``, whose content is the formatter's
encoding of the document's fields.

Writers serialise on a non-blocking exclusive ``flock`` per file; a writer
that cannot take the lock gets ``None`` back and may retry. Readers take no
lock, so a reader racing a writer can see a partially written or stale
file.
"""

from __future__ import annotations

import fcntl
import logging
import os
from pathlib import Path
from typing import Callable, Optional, Union

from filedocs.config import StoreConfig
from filedocs.domain import Document
from filedocs.domain.value_objects.ids import (
    ID_ALPHABET,
    ID_LENGTH,
    DocumentId,
    RepositoryName,
    is_valid_document_id,
    is_valid_repository_name,
)
from filedocs.errors import DirectoryUnavailableError, InvalidIdError, InvalidNameError
from filedocs.formatters import Formatter
from filedocs.query import Query

from . import DocumentRepo

logger = logging.getLogger(__name__)

DIRECTORY_MODE = 0o777
FILE_MODE = 0o666


class Repository(DocumentRepo):
    """Filesystem implementation of :class:`DocumentRepo`."""

    def __init__(self, name: str, config: StoreConfig) -> None:
        if not is_valid_repository_name(name):
            raise InvalidNameError(name)

        self._name = RepositoryName(name)
        self._path = config.get_root_path() / name
        self._formatter = config.get_option("formatter")
        self._query_factory = config.get_option("query_factory")
        self._rng = config.get_option("rng")

        self._ensure_directory()

    def _ensure_directory(self) -> None:
        if not self._path.is_dir():
            try:
                self._path.mkdir()
                os.chmod(self._path, DIRECTORY_MODE)
            except OSError as exc:
                raise DirectoryUnavailableError(
                    self._path, "doesn't exist and can't be created", exc
                ) from exc
            logger.info(
                "Created repository directory %s", self._path, extra={"repository": self._name}
            )
        elif not os.access(self._path, os.W_OK):
            raise DirectoryUnavailableError(self._path, "is not writable")

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> Path:
        return self._path

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    @property
    def query_factory(self) -> Callable[..., Query]:
        return self._query_factory

    def query(self) -> Query:
        return self._query_factory(self)

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------
    def find_all(self) -> list[Document]:
        """Decode every ``*.<ext>`` file in the directory.

        Files that decode to nothing are skipped. An ``OSError`` on any file
        aborts the whole call.
        """
        documents: list[Document] = []
        for path in self._list_files():
            doc = self._read(path)
            if doc is None:
                logger.debug(
                    "Skipping undecodable document file %s",
                    path,
                    extra={"repository": self._name},
                )
                continue
            documents.append(doc)
        return documents

    def find_by_id(self, document_id: str) -> Optional[Document]:
        path = self.get_path_for_document(document_id)
        if not path.is_file():
            return None
        return self._read(path)

    def _read(self, path: Path) -> Optional[Document]:
        with open(path, "rb") as handle:
            raw = handle.read()
        data = self._formatter.decode(raw)
        if data is None:
            return None
        return Document.from_fields(data, id=self.get_id_from_path(path))

    def _list_files(self) -> list[Path]:
        pattern = f"*.{self._formatter.file_extension}"
        return sorted(p for p in self._path.glob(pattern) if p.is_file())

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------
    def store(self, document: Document) -> Optional[str]:
        """Write ``document`` to its file, generating an ID if it has none.

        Returns the ID, or ``None`` when another writer holds the file lock
        or the write did not complete.
        """
        if not document.get_id():
            document.set_id(self.generate_id())
        document_id = document.get_id()

        path = self.get_path_for_document(document_id)
        payload = self._formatter.encode(document.fields)

        # No O_TRUNC: the file is only truncated once the lock is held. Unbuffered,
        # so close() never retries a write that already failed.
        fd = os.open(path, os.O_WRONLY | os.O_CREAT, FILE_MODE)
        try:
            handle = os.fdopen(fd, "wb", buffering=0)
        except OSError:
            os.close(fd)
            raise

        with handle:
            try:
                fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
            except OSError:
                logger.warning(
                    "Document %s is locked by another writer",
                    document_id,
                    extra={"repository": self._name},
                )
                return None
            try:
                handle.truncate(0)
                written = handle.write(payload) or 0
            except OSError as exc:
                logger.warning(
                    "Writing document %s failed: %s",
                    document_id,
                    exc,
                    extra={"repository": self._name},
                )
                return None
            finally:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)

        if written != len(payload):
            logger.warning(
                "Short write for document %s (%d of %d bytes)",
                document_id,
                written,
                len(payload),
                extra={"repository": self._name},
            )
            return None
        return document_id

    def update(self, document: Document) -> Optional[str]:
        """Store ``document`` only if it has an ID and its file exists."""
        document_id = document.get_id()
        if not document_id:
            return None
        if not self.get_path_for_document(document_id).is_file():
            return None
        return self.store(document)

    def delete(self, document: Union[str, Document]) -> None:
        """Remove a document's file; filesystem errors propagate."""
        document_id = document.get_id() if isinstance(document, Document) else document
        os.unlink(self.get_path_for_document(document_id))

    # ------------------------------------------------------------------
    # IDs and paths
    # ------------------------------------------------------------------
    def get_path_for_document(self, document_id: Optional[str]) -> Path:
        if not self.validate_id(document_id):
            raise InvalidIdError(document_id)
        return self._path / self.get_filename(document_id)

    def get_filename(self, document_id: str) -> str:
        return f"{document_id}.{self._formatter.file_extension}"

    def get_id_from_path(self, path: Path) -> DocumentId:
        suffix = f".{self._formatter.file_extension}"
        name = path.name
        return DocumentId(name[: -len(suffix)] if name.endswith(suffix) else name)

    @staticmethod
    def validate_id(document_id: object) -> bool:
        return is_valid_document_id(document_id)

    def generate_id(self) -> DocumentId:
        """Random 9 character base62 ID.

        Existing files are not checked; with 62**9 possible IDs a collision
        is unlikely but not impossible.
        """
        return DocumentId("".join(self._rng.choice(ID_ALPHABET) for _ in range(ID_LENGTH)))
