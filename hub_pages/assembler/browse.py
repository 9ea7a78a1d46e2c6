"""Assemble view models for the browse index, topic pages, and subtopic pages.

Topic and subtopic pages enrich the fetched document with live search data:
accordion items, latest news, publishing organisations, and popular content.
The independent queries run concurrently on a small thread pool; each page
request owns a fresh :class:`~hub_pages.search.SearchSession`, so the single
topic query serves both the news and organisation sections.
"""

from __future__ import annotations

import typing as typ
from concurrent.futures import ThreadPoolExecutor

from hub_pages.models import TopicType

from ._common import fetch_or_raise, link_payload

if typ.TYPE_CHECKING:
    from hub_pages.accordion import AccordionBuilder
    from hub_pages.client import ContentRepositoryClient
    from hub_pages.config import HubConfig
    from hub_pages.models import AccordionLink, ContentDocument, DocumentReference
    from hub_pages.search import SearchSession
    from hub_pages.taxonomy import TaxonomyFilter

_MAX_WORKERS = 3


class BrowsePageAssembler:
    """Compose browse index, topic, and subtopic payloads."""

    def __init__(
        self,
        client: ContentRepositoryClient,
        accordion: AccordionBuilder,
        taxonomy: TaxonomyFilter,
        config: HubConfig,
        session_factory: typ.Callable[[], SearchSession],
    ) -> None:
        self.client = client
        self.accordion = accordion
        self.taxonomy = taxonomy
        self.config = config
        self.session_factory = session_factory

    def browse_index(self) -> dict[str, typ.Any]:
        """Return the top-level browse pages ordered by title."""
        document = fetch_or_raise(self.client, "browse")
        pages = sorted(
            document.link_list("top_level_browse_pages") or [],
            key=lambda page: page.title,
        )
        return {
            "title": document.title,
            "subtopics": [
                {
                    "title": page.title,
                    "link": page.base_path,
                    "description": page.description,
                }
                for page in pages
            ],
        }

    def topic_page(self, topic_slug: str, topic_type: TopicType) -> dict[str, typ.Any]:
        """Return the topic page listing its subtopics and, when scoped, live data.

        Parameters
        ----------
        topic_slug : str
            Slug of the topic under its type's path prefix.
        topic_type : TopicType
            Mainstream topics order subtopics by their curated id list;
            specialist topics list their children as published.

        Returns
        -------
        dict[str, Any]
            Payload with ``subtopics`` plus news, organisations, and featured
            content when the topic maps to a taxonomy.
        """
        path = f"/{topic_type.path_prefix}/{topic_slug}"
        document = fetch_or_raise(self.client, path)
        subtopics = _topic_subtopics(document, topic_type)
        links = [link_payload(sub) for sub in subtopics]
        links.extend(link.as_payload() for link in self.config.topic_links(topic_slug))

        taxon_filter = self.taxonomy.taxon_filter_lookup(path)
        payload: dict[str, typ.Any] = {
            "title": document.title,
            "description": document.description,
            "subtopics": links,
            "taxon_search_filter": taxon_filter or False,
            "latest_news": [],
            "organisations": [],
            "featured": [],
        }
        if not taxon_filter:
            return payload

        session = self.session_factory()
        with ThreadPoolExecutor(max_workers=_MAX_WORKERS) as pool:
            topic_future = pool.submit(session.topic_query, topic_slug, topic_type)
            featured_future = pool.submit(
                session.popular_content,
                _subtopic_links(document, topic_type),
                topic_type,
            )
            topic_future.result()
            payload["featured"] = featured_future.result()
        payload["latest_news"] = session.latest_news(topic_slug, topic_type)
        payload["organisations"] = session.organisations(topic_slug, topic_type)
        return payload

    def subtopic_page(
        self, topic_slug: str, subtopic_slug: str, topic_type: TopicType
    ) -> dict[str, typ.Any]:
        """Return the subtopic page with its accordion sections and live data."""
        topic_path = f"{topic_slug}/{subtopic_slug}"
        path = f"/{topic_type.path_prefix}/{topic_path}"
        document = fetch_or_raise(self.client, path)
        taxon_filter = self.taxonomy.taxon_filter_lookup(path)

        session = self.session_factory()
        with ThreadPoolExecutor(max_workers=_MAX_WORKERS) as pool:
            items_future = pool.submit(session.accordion_items, document, topic_type)
            topic_future = (
                pool.submit(session.topic_query, topic_path, topic_type)
                if taxon_filter
                else None
            )
            search_items: list[AccordionLink] = items_future.result()
            if topic_future is not None:
                topic_future.result()

        sections = self.accordion.build(
            document,
            search_items,
            topic_slug=topic_slug,
            subtopic_slug=subtopic_slug,
        )
        payload: dict[str, typ.Any] = {
            "title": document.title,
            "description": document.description,
            "parent": link_payload(document.first_link("parent")),
            "subtopic_sections": {"items": [section.as_payload() for section in sections]},
            "taxon_search_filter": taxon_filter or False,
            "latest_news": [],
            "organisations": [],
            "related_topics": [],
        }
        if taxon_filter:
            payload["latest_news"] = session.latest_news(topic_path, topic_type)
            payload["organisations"] = session.organisations(topic_path, topic_type)
            payload["related_topics"] = [
                link_payload(ref)
                for ref in document.link_list("second_level_browse_pages") or []
            ]
        return payload


def _subtopic_links(
    document: ContentDocument, topic_type: TopicType
) -> list[DocumentReference]:
    """Return every subtopic linked from a topic, curated order or not."""
    rel = (
        "children"
        if topic_type is TopicType.SPECIALIST
        else "second_level_browse_pages"
    )
    return list(document.link_list(rel) or [])


def _topic_subtopics(
    document: ContentDocument, topic_type: TopicType
) -> list[DocumentReference]:
    """Return a topic's subtopics in display order."""
    links = _subtopic_links(document, topic_type)
    if topic_type is TopicType.SPECIALIST:
        return links
    order = document.detail("ordered_second_level_browse_pages") or []
    by_id = {ref.content_id: ref for ref in links if ref.content_id}
    return [by_id[content_id] for content_id in order if content_id in by_id]


__all__ = ["BrowsePageAssembler"]
