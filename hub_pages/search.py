"""Request-scoped search-index queries for topic and subtopic pages.

A :class:`SearchSession` belongs to exactly one page request. It owns a cache
keyed by the encoded query options, so the topic query that feeds "latest
news" also feeds the organisation facets without a second round trip. The
cache is discarded with the session; nothing is shared across requests.
"""

from __future__ import annotations

import collections.abc as cabc
import json
import logging
import typing as typ

from ._constants import (
    ACCORDION_SEARCH_LIMIT,
    LATEST_NEWS_COUNT,
    LATEST_NEWS_FIELDS,
    ORGANISATION_FACET_SIZE,
    PLACEHOLDER_IMAGE_URL,
    POPULAR_CONTENT_COUNT,
)
from .models import AccordionLink, TopicType

if typ.TYPE_CHECKING:
    from .client import SearchIndexClient
    from .models import ContentDocument, DocumentReference
    from .taxonomy import TaxonomyFilter

logger = logging.getLogger(__name__)


def _result_link(result: cabc.Mapping[str, typ.Any]) -> str:
    return str(result.get("_id") or result.get("link") or "")


def _strip_prefix(path: str | None, prefix: str) -> str:
    return (path or "").removeprefix(prefix)


class SearchSession:
    """Issue and memoise the search queries needed by one page request."""

    def __init__(
        self,
        client: SearchIndexClient,
        taxonomy: TaxonomyFilter,
        *,
        accordion_limit: int = ACCORDION_SEARCH_LIMIT,
        placeholder_image_url: str = PLACEHOLDER_IMAGE_URL,
    ) -> None:
        self.client = client
        self.taxonomy = taxonomy
        self.accordion_limit = accordion_limit
        self.placeholder_image_url = placeholder_image_url
        self._cache: dict[str, dict[str, typ.Any]] = {}

    def query(self, params: cabc.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
        """Return the response for ``params``, reusing an earlier identical query."""
        key = json.dumps(params, sort_keys=True)
        cached = self._cache.get(key)
        if cached is None:
            cached = self.client.search(params)
            self._cache[key] = cached
        return cached

    def accordion_items(
        self, document: ContentDocument, topic_type: TopicType | None
    ) -> list[AccordionLink]:
        """Return the title-ranked items tagged to a subtopic page.

        Parameters
        ----------
        document : ContentDocument
            Subtopic page whose tagged content is requested.
        topic_type : TopicType | None
            Selects the browse-page or specialist-sector filter. Unknown types
            are logged and the type-specific filter is omitted.

        Returns
        -------
        list[AccordionLink]
            Search results ordered by title, with titles stripped.
        """
        params: dict[str, typ.Any] = {
            "count": self.accordion_limit,
            "fields": "title",
            "order": "title",
        }
        match topic_type:
            case TopicType.MAINSTREAM:
                params["filter_mainstream_browse_page_content_ids"] = (
                    document.content_id or ""
                )
            case TopicType.SPECIALIST:
                params["filter_specialist_sectors"] = _strip_prefix(
                    document.base_path, "/topic/"
                )
            case _:
                logger.warning("Unknown topic type: %r", topic_type)
        response = self.query(params)
        if response.get("total") == self.accordion_limit:
            logger.warning(
                "Search returned its item count limit (%d); there are probably more.",
                self.accordion_limit,
            )
        return [
            AccordionLink(title=str(result.get("title") or "").strip(), link=link)
            for result in response["results"]
            if (link := _result_link(result))
        ]

    def popular_content(
        self, subtopics: list[DocumentReference], topic_type: TopicType | None
    ) -> list[dict[str, str]]:
        """Return the most popular items across a topic's subtopics."""
        params: dict[str, typ.Any] = {"count": POPULAR_CONTENT_COUNT, "fields": "title"}
        match topic_type:
            case TopicType.MAINSTREAM:
                params["filter_mainstream_browse_pages"] = [
                    _strip_prefix(sub.base_path, "/browse/") for sub in subtopics
                ]
            case TopicType.SPECIALIST:
                params["filter_specialist_sectors"] = [
                    _strip_prefix(sub.base_path, "/topic/") for sub in subtopics
                ]
            case _:
                logger.warning("Unknown topic type: %r", topic_type)
        return [
            {"title": str(result.get("title") or ""), "link": _result_link(result)}
            for result in self.query(params)["results"]
        ]

    def topic_query(
        self, topic_path: str, topic_type: TopicType | None
    ) -> dict[str, typ.Any]:
        """Return the latest-news query response, including organisation facets."""
        params: dict[str, typ.Any] = {
            "count": LATEST_NEWS_COUNT,
            "fields": list(LATEST_NEWS_FIELDS),
            "order": "-public_timestamp",
            "facet_organisations": ORGANISATION_FACET_SIZE,
        }
        params.update(self.taxonomy.topic_filter(topic_path, topic_type))
        return self.query(params)

    def latest_news(
        self, topic_path: str, topic_type: TopicType | None
    ) -> list[dict[str, typ.Any]]:
        """Return recent news cards for the topic."""
        return [
            {
                "title": result.get("title"),
                "description": result.get("description"),
                "url": _result_link(result),
                "topic": result.get("content_purpose_supergroup"),
                "subtopic": result.get("content_purpose_subgroup"),
                "image_url": result.get("image_url") or self.placeholder_image_url,
                "public_timestamp": result.get("public_timestamp"),
            }
            for result in self.topic_query(topic_path, topic_type)["results"]
        ]

    def organisations(
        self, topic_path: str, topic_type: TopicType | None
    ) -> list[dict[str, typ.Any]]:
        """Return organisations publishing under the topic, from search facets."""
        response = self.topic_query(topic_path, topic_type)
        facets = response.get("facets") or {}
        options = (facets.get("organisations") or {}).get("options") or []
        organisations: list[dict[str, typ.Any]] = []
        for option in options:
            value = option.get("value") if isinstance(option, cabc.Mapping) else None
            if not isinstance(value, cabc.Mapping):
                continue
            organisations.append(
                {
                    "title": value.get("title"),
                    "url": value.get("link"),
                    "crest": value.get("organisation_crest"),
                    "slug": value.get("slug"),
                }
            )
        return organisations


__all__ = ["SearchSession"]
