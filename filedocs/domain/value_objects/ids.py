import re
import string
from typing import NewType

DocumentId = NewType("DocumentId", str)
RepositoryName = NewType("RepositoryName", str)

REPOSITORY_NAME_PATTERN = re.compile(r"^[0-9A-Za-z_-]{1,63}$")
# Characters that cannot appear in a single path segment on common filesystems.
UNSAFE_ID_PATTERN = re.compile(r"[/\\?*:;{}\n]")

ID_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
ID_LENGTH = 9


def is_valid_repository_name(name: object) -> bool:
    return isinstance(name, str) and REPOSITORY_NAME_PATTERN.fullmatch(name) is not None


def is_valid_document_id(document_id: object) -> bool:
    return (
        isinstance(document_id, str)
        and document_id != ""
        and UNSAFE_ID_PATTERN.search(document_id) is None
    )
