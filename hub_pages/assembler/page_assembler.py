"""Facade wiring configuration, HTTP clients, and builders into page requests."""

from __future__ import annotations

import typing as typ

from hub_pages.accordion import AccordionBuilder
from hub_pages.breadcrumbs import BreadcrumbResolver
from hub_pages.client import ContentRepositoryClient, SearchIndexClient, build_session
from hub_pages.config import HubConfig
from hub_pages.formatting import DateTimeFormatter
from hub_pages.models import TopicType
from hub_pages.search import SearchSession
from hub_pages.taxonomy import TaxonomyFilter

from .browse import BrowsePageAssembler
from .content import ContentPageAssembler


class PageAssembler:
    """Assemble view models for every page kind from one configuration.

    Parameters
    ----------
    config : HubConfig, optional
        Endpoints, display settings, taxonomy data, and overrides. Defaults
        to the built-in configuration.
    content_client : ContentRepositoryClient, optional
        Content API client; built from ``config.endpoints`` when omitted.
    search_client : SearchIndexClient, optional
        Search API client; built from ``config.endpoints`` when omitted.
    """

    def __init__(
        self,
        config: HubConfig | None = None,
        *,
        content_client: ContentRepositoryClient | None = None,
        search_client: SearchIndexClient | None = None,
    ) -> None:
        self.config = config or HubConfig()
        endpoints = self.config.endpoints
        session = None
        if content_client is None or search_client is None:
            session = build_session()
        self.content_client = content_client or ContentRepositoryClient(
            api_base=endpoints.content_api_base,
            site_root=endpoints.site_root,
            session=session,
            timeout=endpoints.timeout,
        )
        self.search_client = search_client or SearchIndexClient(
            search_url=endpoints.search_api_url,
            session=session,
            timeout=endpoints.timeout,
        )
        self.formatter = DateTimeFormatter(self.config.display.timezone)
        self.taxonomy = TaxonomyFilter(self.config.taxonomies)
        self.content = ContentPageAssembler(
            self.content_client,
            self.formatter,
            BreadcrumbResolver(self.content_client),
            site_root=endpoints.site_root,
        )
        self.browse = BrowsePageAssembler(
            self.content_client,
            AccordionBuilder(overrides=self.config.accordion_overrides),
            self.taxonomy,
            self.config,
            self.new_search_session,
        )

    def new_search_session(self) -> SearchSession:
        """Return a search session scoped to a single page request."""
        display = self.config.display
        return SearchSession(
            self.search_client,
            self.taxonomy,
            accordion_limit=display.accordion_search_limit,
            placeholder_image_url=display.placeholder_image_url,
        )

    def content_page(
        self, slug: str, *, html_publication: bool = False
    ) -> dict[str, typ.Any]:
        """Return the content page view model for ``slug``."""
        return self.content.assemble(slug, html_publication=html_publication)

    def topic_page(self, topic: str, topic_type: TopicType) -> dict[str, typ.Any]:
        """Return the topic page view model."""
        return self.browse.topic_page(topic, topic_type)

    def subtopic_page(
        self, topic: str, subtopic: str, topic_type: TopicType
    ) -> dict[str, typ.Any]:
        """Return the subtopic page view model."""
        return self.browse.subtopic_page(topic, subtopic, topic_type)

    def browse_index(self) -> dict[str, typ.Any]:
        """Return the browse index view model."""
        return self.browse.browse_index()


__all__ = ["PageAssembler"]
