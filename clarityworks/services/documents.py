from typing import List, Sequence

from ..errors import DocumentError

ALLOWED_SUFFIX = ".txt"


def check_document_names(names: Sequence[str]) -> None:
    if not names:
        raise DocumentError("Please upload at least one document")
    for name in names:
        if not (name or "").lower().endswith(ALLOWED_SUFFIX):
            raise DocumentError("Please upload only .txt files")


def decode_documents(contents: Sequence[bytes]) -> List[str]:
    return [content.decode("utf-8", errors="replace") for content in contents]
