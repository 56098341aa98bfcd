from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from filedocs.domain import Document
from filedocs.infrastructure.ttl_cache import TTLCache
from filedocs.logging_config import CacheStats
from filedocs.query import Query

from . import DocumentRepo
from .filesystem import Repository

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60.0


class CachedRepository(DocumentRepo):
    """:class:`Repository` decorator caching the full document listing.

    ``find_all`` and ``find_by_id`` are served from the cached listing; any
    successful write through this object drops the cache. Writes made by
    other processes or other repository objects are only seen once the
    entry expires.
    """

    def __init__(
        self,
        repository: Repository,
        *,
        cache: Optional[TTLCache[Path, list[Document]]] = None,
        stats: Optional[CacheStats] = None,
    ) -> None:
        self._repo = repository
        self._cache = cache if cache is not None else TTLCache(DEFAULT_TTL_SECONDS)
        self.stats = stats if stats is not None else CacheStats()

    @property
    def repository(self) -> Repository:
        return self._repo

    def query(self) -> Query:
        return self._repo.query_factory(self)

    def find_all(self) -> list[Document]:
        cached = self._cache.get(self._repo.path)
        if cached is not None:
            self.stats.record_hit()
        else:
            self.stats.record_miss()
            cached = self._repo.find_all()
            self._cache.set(self._repo.path, cached)
            self.stats.log_hit_rate(self._repo.name)
        return [doc.model_copy(deep=True) for doc in cached]

    def find_by_id(self, document_id: str) -> Optional[Document]:
        # Validates the ID exactly as the wrapped repository does.
        self._repo.get_path_for_document(document_id)
        for doc in self.find_all():
            if doc.get_id() == document_id:
                return doc
        return None

    def store(self, document: Document) -> Optional[str]:
        result = self._repo.store(document)
        if result is not None:
            self._invalidate()
        return result

    def update(self, document: Document) -> Optional[str]:
        result = self._repo.update(document)
        if result is not None:
            self._invalidate()
        return result

    def delete(self, document: Union[str, Document]) -> None:
        try:
            self._repo.delete(document)
        finally:
            self._invalidate()

    def _invalidate(self) -> None:
        logger.debug(
            "Invalidating cached listing for %s",
            self._repo.path,
            extra={"repository": self._repo.name},
        )
        self._cache.invalidate(self._repo.path)
