"""Resolve root-first breadcrumb chains for content documents.

Ancestor data is embedded in each link, so ascending a ``parent`` or
``parent_taxons`` chain costs no network calls. Only HTML publications need an
extra fetch: their breadcrumbs are those of the parent publication.
"""

from __future__ import annotations

import logging
import typing as typ

from .models import BreadcrumbEntry

if typ.TYPE_CHECKING:
    from .client import ContentRepositoryClient
    from .models import ContentDocument, DocumentReference

logger = logging.getLogger(__name__)


def ascend(start: DocumentReference, link_category: str) -> list[DocumentReference]:
    """Return ``start`` followed by each ancestor reached via ``link_category``.

    The walk follows the first reference in ``link_category`` until none
    remains. A reference that reappears ends the walk so cyclic upstream data
    cannot loop forever.
    """
    chain: list[DocumentReference] = []
    seen: set[str] = set()
    current: DocumentReference | None = start
    while current is not None:
        key = current.identity
        if key is not None:
            if key in seen:
                logger.warning(
                    "Cyclic %s chain at %r; stopping breadcrumb ascent",
                    link_category,
                    key,
                )
                break
            seen.add(key)
        chain.append(current)
        current = current.first_link(link_category)
    return chain


class BreadcrumbResolver:
    """Build breadcrumb trails from parent, topic, or taxon links."""

    def __init__(self, client: ContentRepositoryClient) -> None:
        self.client = client

    def resolve(
        self, document: ContentDocument | None, *, html_publication: bool = False
    ) -> list[BreadcrumbEntry]:
        """Return the ancestors of ``document`` ordered root first.

        Parameters
        ----------
        document : ContentDocument | None
            Document being rendered; None yields an empty chain.
        html_publication : bool, optional
            When True the declared parent is fetched and the chain is resolved
            from the parent's perspective.

        Returns
        -------
        list[BreadcrumbEntry]
            Root-first ancestors, excluding ``document`` itself.
        """
        if document is None:
            return []
        if html_publication:
            document = self._fetch_parent(document)
            if document is None:
                return []
        nearest_first = self._nearest_first(document)
        if document.identity is not None:
            nearest_first = [
                ref for ref in nearest_first if ref.identity != document.identity
            ]
        return [BreadcrumbEntry.from_reference(ref) for ref in reversed(nearest_first)]

    def _fetch_parent(self, document: ContentDocument) -> ContentDocument | None:
        parent = document.first_link("parent")
        if parent is None:
            return None
        if parent.api_path:
            return self.client.fetch_api_path(parent.api_path)
        if parent.base_path:
            return self.client.fetch(parent.base_path)
        return None

    @staticmethod
    def _nearest_first(document: ContentDocument) -> list[DocumentReference]:
        parent = document.first_link("parent")
        if parent is not None:
            return ascend(parent, "parent")
        topics = document.link_list("topics")
        if topics:
            # Topic links are already a flat trail in root-last order.
            return list(topics)
        taxon = document.first_link("taxons")
        if taxon is not None:
            return ascend(taxon, "parent_taxons")
        return []


__all__ = ["BreadcrumbResolver", "ascend"]
