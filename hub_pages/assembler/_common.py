"""Helpers shared by the content and browse page assemblers."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from hub_pages.client import ContentRepositoryClient
    from hub_pages.models import ContentDocument, DocumentReference


class ContentNotFoundError(LookupError):
    """Raised when the requested page has no published document."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No content published at '{path}'.")
        self.path = path


def fetch_or_raise(client: ContentRepositoryClient, path: str) -> ContentDocument:
    """Return the document at ``path`` or raise ContentNotFoundError."""
    document = client.fetch(path)
    if document is None:
        raise ContentNotFoundError(path)
    return document


def link_payload(reference: DocumentReference | None) -> dict[str, str | None] | bool:
    """Return ``{title, link}`` for ``reference`` or False when absent."""
    if reference is None:
        return False
    return {"title": reference.title, "link": reference.base_path}


__all__ = ["ContentNotFoundError", "fetch_or_raise", "link_payload"]
