"""Typed dataclasses describing hub configuration structures."""

from __future__ import annotations

import dataclasses as dc
import enum

from hub_pages._constants import ACCORDION_SEARCH_LIMIT, PLACEHOLDER_IMAGE_URL
from hub_pages.client import (
    DEFAULT_CONTENT_API_BASE,
    DEFAULT_SEARCH_API_URL,
    DEFAULT_SITE_ROOT,
)
from hub_pages.formatting import DEFAULT_TIMEZONE
from hub_pages.models import AccordionLink
from hub_pages.taxonomy import TaxonEntry


class HubConfigError(ValueError):
    """Raised when the hub configuration is invalid or incomplete."""


class OverrideAction(enum.Enum):
    """Adjustment an accordion override applies to a page's sections."""

    APPEND_SECTION = "append_section"
    APPEND_TO_SECTION = "append_to_section"


@dc.dataclass(slots=True)
class EndpointConfig:
    """Upstream endpoints and transport settings."""

    content_api_base: str = DEFAULT_CONTENT_API_BASE
    site_root: str = DEFAULT_SITE_ROOT
    search_api_url: str = DEFAULT_SEARCH_API_URL
    timeout: float = 10.0


@dc.dataclass(slots=True)
class DisplayConfig:
    """Presentation settings shared by every page."""

    timezone: str = DEFAULT_TIMEZONE
    placeholder_image_url: str = PLACEHOLDER_IMAGE_URL
    accordion_search_limit: int = ACCORDION_SEARCH_LIMIT


@dc.dataclass(slots=True)
class AccordionOverride:
    """Fixed links injected into one topic's subtopic accordions.

    Attributes
    ----------
    topic : str
        Topic slug the override applies to.
    subtopic : str | None
        Subtopic slug; None matches every subtopic of ``topic``.
    exclude_subtopics : list[str]
        Subtopic slugs skipped even when ``subtopic`` is None.
    action : OverrideAction
        Whether to add a new section or extend an existing one.
    section : str
        Heading of the section added or extended.
    links : list[AccordionLink]
        Links appended in order.
    """

    topic: str
    action: OverrideAction
    section: str
    links: list[AccordionLink]
    subtopic: str | None = None
    exclude_subtopics: list[str] = dc.field(default_factory=list)

    def matches(self, topic: str | None, subtopic: str | None) -> bool:
        """Return True when the override targets the given page."""
        if topic != self.topic:
            return False
        if subtopic in self.exclude_subtopics:
            return False
        return self.subtopic is None or self.subtopic == subtopic


@dc.dataclass(slots=True)
class TopicOverride:
    """Fixed subtopic links appended to a topic page."""

    topic: str
    links: list[AccordionLink]


@dc.dataclass(slots=True)
class HubConfig:
    """Resolved configuration consumed by the page assembler."""

    endpoints: EndpointConfig = dc.field(default_factory=EndpointConfig)
    display: DisplayConfig = dc.field(default_factory=DisplayConfig)
    taxonomies: list[TaxonEntry] = dc.field(default_factory=list)
    topic_overrides: list[TopicOverride] = dc.field(default_factory=list)
    accordion_overrides: list[AccordionOverride] = dc.field(default_factory=list)

    def topic_links(self, topic: str) -> list[AccordionLink]:
        """Return the extra subtopic links configured for ``topic``."""
        links: list[AccordionLink] = []
        for override in self.topic_overrides:
            if override.topic == topic:
                links.extend(override.links)
        return links


__all__ = [
    "AccordionOverride",
    "DisplayConfig",
    "EndpointConfig",
    "HubConfig",
    "HubConfigError",
    "OverrideAction",
    "TopicOverride",
]
