from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict

_MISSING = object()


class Document(BaseModel):
    """Schema-less record with an identity slot.

    Every attribute other than ``id`` is an extra field and belongs to the
    persisted field mapping.

    >>> doc = Document(title="Hello", meta={"lang": "en"})
    >>> doc.fields
    {'title': 'Hello', 'meta': {'lang': 'en'}}
    >>> doc.get("meta.lang")
    'en'
    """

    id: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any], id: Optional[str] = None) -> "Document":
        """Build a document from a decoded field mapping.

        An ``id`` key inside ``fields`` is ignored; the caller's ``id`` wins.
        """
        data = {key: value for key, value in fields.items() if key != "id"}
        doc = cls.model_validate(data)
        doc.id = id
        return doc

    def get_id(self) -> Optional[str]:
        return self.id

    def set_id(self, id: str) -> None:
        self.id = id

    @property
    def fields(self) -> dict[str, Any]:
        """Field mapping as persisted, in insertion order, without ``id``."""
        return dict(self.model_extra or {})

    def get(self, path: str, default: Any = None) -> Any:
        """Return the value at a dotted ``path`` or ``default`` if missing."""
        value = self._lookup(path)
        return default if value is _MISSING else value

    def has(self, path: str) -> bool:
        return self._lookup(path) is not _MISSING

    def _lookup(self, path: str) -> Any:
        if path == "id":
            return _MISSING if self.id is None else self.id
        current: Any = self.fields
        for part in path.split("."):
            if isinstance(current, Mapping) and part in current:
                current = current[part]
            elif isinstance(current, list) and part.isdigit() and int(part) < len(current):
                current = current[int(part)]
            else:
                return _MISSING
        return current
