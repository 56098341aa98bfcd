from .ids import (
    ID_ALPHABET,
    ID_LENGTH,
    DocumentId,
    RepositoryName,
    is_valid_document_id,
    is_valid_repository_name,
)

__all__ = [
    "ID_ALPHABET",
    "ID_LENGTH",
    "DocumentId",
    "RepositoryName",
    "is_valid_document_id",
    "is_valid_repository_name",
]
