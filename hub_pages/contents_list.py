r"""Derive a document's table of contents from its parts or its headings.

Multi-part documents list one entry per part, marking the part being viewed.
Single-body documents list their level-two headings that carry an ``id``
attribute; headings without one cannot be deep-linked and are skipped.

Example
-------
>>> from hub_pages.contents_list import contents_from_headings
>>> [e.as_payload() for e in contents_from_headings('<h2 id="a">Apply:</h2>')]
[{'text': 'Apply', 'id': 'a'}]
"""

from __future__ import annotations

import re
import typing as typ

from bs4 import BeautifulSoup

from .models import ContentsListEntry

if typ.TYPE_CHECKING:
    from .models import ContentDocument, Part

TRAILING_COLON_PATTERN = re.compile(r":$")


def contents_from_parts(
    parts: list[Part], base_path: str, requested_slug: str | None
) -> list[ContentsListEntry]:
    """Return one entry per part, flagging the part currently being viewed.

    Parameters
    ----------
    parts : list[Part]
        Parts in reading order.
    base_path : str
        Public path of the parent document.
    requested_slug : str | None
        Slug (or full path) the reader asked for. When it equals
        ``base_path`` the first part is the current page.

    Returns
    -------
    list[ContentsListEntry]
        Entries in part order. At most one entry is current; it carries no
        navigable path.
    """
    entries: list[ContentsListEntry] = []
    current_found = False
    for index, part in enumerate(parts):
        is_current = not current_found and (
            part.slug == requested_slug
            or (requested_slug == base_path and index == 0)
        )
        current_found = current_found or is_current
        entries.append(
            ContentsListEntry(
                text=part.title,
                id_or_slug=None if is_current else f"{base_path}/{part.slug}",
                is_current_page=is_current,
            )
        )
    return entries


def contents_from_headings(html: str | None) -> list[ContentsListEntry]:
    """Return entries for each ``<h2>`` in ``html`` that has an ``id``."""
    if not html:
        return []
    soup = BeautifulSoup(html, "html.parser")
    entries: list[ContentsListEntry] = []
    for heading in soup.find_all("h2"):
        anchor = heading.get("id")
        if not anchor:
            continue
        text = TRAILING_COLON_PATTERN.sub("", heading.get_text())
        entries.append(ContentsListEntry(text=text, id_or_slug=anchor, is_heading=True))
    return entries


def build_contents_list(
    document: ContentDocument, requested_slug: str | None
) -> list[ContentsListEntry]:
    """Return the contents list for ``document`` from parts or headings."""
    if document.parts is not None:
        return contents_from_parts(document.parts, document.base_path, requested_slug)
    return contents_from_headings(document.body)


__all__ = ["build_contents_list", "contents_from_headings", "contents_from_parts"]
