"""Select, truncate, sort, and merge related-document reference lists."""

from __future__ import annotations

import typing as typ

from ._constants import RELATED_CONTENT_LIMIT

if typ.TYPE_CHECKING:
    from .models import ContentDocument, DocumentReference


def format_related_content(
    related: list[DocumentReference] | None,
    *,
    limit: int | None = None,
    alphabetize: bool = False,
    combined_with: list[DocumentReference] | None = None,
) -> list[dict[str, typ.Any]]:
    """Return display payloads for ``related`` references.

    Parameters
    ----------
    related : list[DocumentReference] | None
        Primary references in relevance order; anything but a list yields
        an empty result.
    limit : int, optional
        Keep only the first ``limit`` references. Applied before sorting.
    alphabetize : bool, optional
        Sort the kept references by title.
    combined_with : list[DocumentReference], optional
        Supplementary references appended in full, unsorted.

    Returns
    -------
    list[dict[str, Any]]
        Reference payloads with ``title`` and ``link`` plus passthrough
        metadata.
    """
    if not isinstance(related, list):
        return []
    formatted = list(related)
    if limit:
        formatted = formatted[:limit]
    if alphabetize:
        formatted = sorted(formatted, key=lambda ref: ref.title)
    if isinstance(combined_with, list):
        formatted.extend(combined_with)
    return [ref.as_payload() for ref in formatted]


def related_items(document: ContentDocument) -> list[dict[str, typ.Any]]:
    """Return curated related links, falling back to suggested ones."""
    primary = document.link_list("ordered_related_items")
    if primary is None:
        primary = document.link_list("suggested_ordered_related_items")
    return format_related_content(
        primary,
        limit=RELATED_CONTENT_LIMIT,
        combined_with=document.link_list("related_guides"),
    )


__all__ = ["format_related_content", "related_items"]
