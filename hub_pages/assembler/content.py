"""Assemble view models for individual content pages.

Every content page payload carries the same key set so consumers can rely on
a stable shape; fields that do not apply to a document's schema family hold
``False`` or an empty collection. Schema-specific fields are filled in by a
closed dispatch over :class:`~hub_pages.models.SchemaFamily`.

Example
-------
>>> from hub_pages.assembler import PageAssembler
>>> assembler = PageAssembler()  # doctest: +SKIP
>>> page = assembler.content_page("universal-credit/how-to-claim")  # doctest: +SKIP
>>> page["contents_list"][1]["is_current_page"]  # doctest: +SKIP
True
"""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import re
import typing as typ
from urllib.parse import urlsplit

from hub_pages._constants import PRIORITY_TAXON_IDS, context_phrase
from hub_pages.contents_list import build_contents_list
from hub_pages.formatting import parse_timestamp
from hub_pages.models import SchemaFamily
from hub_pages.related import format_related_content, related_items

from ._common import fetch_or_raise

if typ.TYPE_CHECKING:
    from hub_pages.breadcrumbs import BreadcrumbResolver
    from hub_pages.client import ContentRepositoryClient
    from hub_pages.formatting import DateTimeFormatter
    from hub_pages.models import ContentDocument, DocumentReference, Part

_EPOCH = dt.datetime.min.replace(tzinfo=dt.UTC)


def site_link_pattern(site_root: str) -> re.Pattern[str]:
    """Return a pattern matching absolute links back to ``site_root``."""
    host = (urlsplit(site_root).hostname or "").removeprefix("www.")
    return re.compile(rf"https?://(www\.)?{re.escape(host)}(/)?")


class ContentPageAssembler:
    """Compose the content page payload from one fetched document."""

    def __init__(
        self,
        client: ContentRepositoryClient,
        formatter: DateTimeFormatter,
        breadcrumbs: BreadcrumbResolver,
        *,
        site_root: str,
        priority_taxon_ids: cabc.Collection[str] = PRIORITY_TAXON_IDS,
    ) -> None:
        self.client = client
        self.formatter = formatter
        self.breadcrumbs = breadcrumbs
        self.priority_taxon_ids = frozenset(priority_taxon_ids)
        self._site_link = site_link_pattern(site_root)

    def assemble(self, slug: str, *, html_publication: bool = False) -> dict[str, typ.Any]:
        """Fetch the document at ``slug`` and return its view model.

        Raises
        ------
        ContentNotFoundError
            Raised when no document is published at ``slug``.
        """
        document = fetch_or_raise(self.client, slug)
        return self.build(document, slug, html_publication=html_publication)

    def build(
        self,
        document: ContentDocument,
        slug: str,
        *,
        html_publication: bool = False,
    ) -> dict[str, typ.Any]:
        """Return the view model for an already fetched ``document``.

        Parameters
        ----------
        document : ContentDocument
            Document being rendered.
        slug : str
            Path the reader requested; selects the current part of multi-part
            documents.
        html_publication : bool, optional
            Render as an HTML publication: breadcrumbs and context come from
            the parent publication.

        Returns
        -------
        dict[str, Any]
            JSON-ready payload with a stable key set.
        """
        requested = requested_part_slug(document, slug)
        updated = self.formatter.any_updates(
            document.first_published_at, document.public_updated_at
        )
        payload: dict[str, typ.Any] = {
            "title": document.title,
            "description": document.description,
            "contents_list": [
                entry.as_payload()
                for entry in build_contents_list(document, requested)
            ],
            "is_consultation": False,
            "opening_date_time": False,
            "opening_date_time_display": False,
            "closing_date_time": False,
            "closing_date_time_display": False,
            "intro": document.detail("introduction") or False,
            "details": self._details(document, requested),
            "documents": document.detail("documents") or False,
            "show_form": False,
            "need_to_know": document.detail("need_to_know") or False,
            "breadcrumbs": [
                entry.as_payload()
                for entry in self.breadcrumbs.resolve(
                    document, html_publication=html_publication
                )
            ],
            "part_of_taxon": self._part_of_taxon(document),
            "context": context_phrase(document.document_type),
            "metadata": {
                "from": format_related_content(document.link_list("organisations")),
                "first_published": self.formatter.display_date(
                    document.first_published_display_at
                ),
                "last_updated": updated
                and self.formatter.display_date(document.public_updated_at),
            },
            "history": self._history(document) if updated else [],
            "topic": _first_payload(document.link_list("topics")),
            "related_content": related_items(document),
            "step_by_step": format_related_content(
                document.link_list("part_of_step_navs"), alphabetize=True
            ),
            "topical_events": format_related_content(
                document.link_list("topical_events")
            ),
            "collections": format_related_content(
                document.link_list("document_collections")
            ),
            "topics": format_related_content(
                document.link_list("topics"), alphabetize=True
            ),
            "is_html_publication": html_publication,
            "part_of_parent": False,
            "document_collections": [],
            "main_document": False,
            "archived_documents": [],
            "is_mainstream_guide": False,
        }

        if html_publication:
            parent = document.first_link("parent")
            if parent is not None:
                payload["part_of_parent"] = parent.as_payload()
                payload["context"] = context_phrase(parent.document_type)

        match SchemaFamily.of(document):
            case SchemaFamily.CONSULTATION:
                payload.update(self._consultation_fields(document))
            case SchemaFamily.DOCUMENT_COLLECTION:
                payload.update(self._collection_fields(document))
            case SchemaFamily.GUIDE:
                payload["is_mainstream_guide"] = True
            case SchemaFamily.LOCAL_TRANSACTION:
                payload["show_form"] = True
            case SchemaFamily.GENERIC:
                pass
        return payload

    def strip_site_links(self, html: str) -> str:
        """Rewrite absolute links back to this site as root-relative paths."""
        return self._site_link.sub("/", html)

    def _details(
        self, document: ContentDocument, requested: str
    ) -> str | list[dict[str, str]] | bool:
        if document.body is not None:
            return self.strip_site_links(document.body)
        if document.parts:
            return [
                {
                    "slug": f"{document.base_path}/{part.slug}",
                    "title": part.title,
                    "body": self.strip_site_links(part.body),
                }
                for part in select_parts(document.parts, document.base_path, requested)
            ]
        return False

    def _part_of_taxon(self, document: ContentDocument) -> dict[str, typ.Any] | bool:
        for taxon in document.link_list("taxons") or []:
            if taxon.content_id in self.priority_taxon_ids:
                return taxon.as_payload()
        return False

    def _history(self, document: ContentDocument) -> list[dict[str, typ.Any]]:
        changes = document.detail("change_history")
        if not isinstance(changes, list):
            return []
        history = [
            {
                "display_time": self.formatter.display_date(item.get("public_timestamp")),
                "note": item.get("note"),
                "timestamp": item.get("public_timestamp"),
            }
            for item in changes
            if isinstance(item, cabc.Mapping)
        ]
        history.sort(
            key=lambda item: parse_timestamp(item["timestamp"]) or _EPOCH, reverse=True
        )
        return history

    def _consultation_fields(self, document: ContentDocument) -> dict[str, typ.Any]:
        opening = document.detail("opening_date")
        closing = document.detail("closing_date")
        return {
            "is_consultation": True,
            "opening_date_time": opening or False,
            "opening_date_time_display": self.formatter.display_date_and_time(opening),
            "closing_date_time": closing or False,
            "closing_date_time_display": self.formatter.display_date_and_time(
                closing, rollback_midnight=True
            ),
        }

    def _collection_fields(self, document: ContentDocument) -> dict[str, typ.Any]:
        documents = [
            self._collection_document(ref) for ref in document.link_list("documents") or []
        ]
        return {
            "document_collections": self._collection_groups(document, documents),
            "main_document": documents[0] if documents else False,
            "archived_documents": documents[1:],
        }

    def _collection_document(self, reference: DocumentReference) -> dict[str, typ.Any]:
        payload = reference.as_payload()
        payload["formatted_date"] = self.formatter.display_date(reference.public_updated_at)
        payload["attribute"] = context_phrase(reference.document_type)
        return payload

    @staticmethod
    def _collection_groups(
        document: ContentDocument, documents: list[dict[str, typ.Any]]
    ) -> list[dict[str, typ.Any]]:
        groups = document.detail("collection_groups")
        if not documents or not isinstance(groups, list):
            return []
        by_id = {doc.get("content_id"): doc for doc in documents if doc.get("content_id")}
        collections: list[dict[str, typ.Any]] = []
        for group in groups:
            if not isinstance(group, cabc.Mapping):
                continue
            title = str(group.get("title") or "")
            members = [by_id[doc_id] for doc_id in group.get("documents") or [] if doc_id in by_id]
            if not members:
                continue
            collections.append(
                {
                    "title": title,
                    "slug": title.replace(" ", "-").lower(),
                    "body": group.get("body"),
                    "documents": members,
                }
            )
        return collections


def requested_part_slug(document: ContentDocument, slug: str) -> str:
    """Return the part slug named by ``slug``, or the base path for the first part."""
    path = "/" + slug.strip().strip("/")
    base_path = document.base_path
    if base_path and (path == base_path or path.startswith(base_path + "/")):
        remainder = path.removeprefix(base_path).strip("/")
    else:
        remainder = path.strip("/").rsplit("/", 1)[-1]
    return remainder or base_path


def select_parts(parts: list[Part], base_path: str, requested: str) -> list[Part]:
    """Return the part being viewed; the first part when ``requested`` is the base path."""
    if not parts:
        return []
    target = parts[0].slug if requested == base_path else requested
    return [part for part in parts if part.slug == target]


def _first_payload(references: list[DocumentReference] | None) -> dict[str, typ.Any] | bool:
    if not references:
        return False
    return references[0].as_payload()


__all__ = [
    "ContentPageAssembler",
    "requested_part_slug",
    "select_parts",
    "site_link_pattern",
]
