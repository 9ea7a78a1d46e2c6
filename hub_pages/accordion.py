"""Build the accordion sections listed on subtopic pages.

Sections blend two sources: the curated groups stored on the subtopic
document and the live, title-ranked search results for content tagged to it.
Search results double as an existence filter, so curated paths that no longer
resolve to published content silently drop out. Sections that end up with no
links are never emitted.

Per-page adjustments live in the configured override table and are applied
after the core algorithm, so the selection rules below stay free of one-off
cases.

Example
-------
>>> from hub_pages.models import AccordionLink, ContentDocument
>>> doc = ContentDocument.from_payload({"details": {"groups": []}})
>>> builder = AccordionBuilder()
>>> sections = builder.build(doc, [AccordionLink("Apply", "/apply")])
>>> [(s.heading_text, len(s.list_items)) for s in sections]
[('A to Z', 1)]
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ._constants import SYNTHETIC_GROUP_LABEL
from .config.models import AccordionOverride, OverrideAction
from .models import AccordionLink, AccordionSection, Group

if typ.TYPE_CHECKING:
    from .models import ContentDocument


class AccordionRenderer:
    """Render accordion link lists into list markup."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("accordion_list.jinja")

    def render(self, items: cabc.Sequence[AccordionLink]) -> str:
        """Return ``<ul>`` markup linking every item."""
        return self.template.render(items=items)


class AccordionBuilder:
    """Assemble accordion sections for a subtopic document."""

    def __init__(
        self,
        renderer: AccordionRenderer | None = None,
        overrides: cabc.Sequence[AccordionOverride] = (),
    ) -> None:
        self.renderer = renderer or AccordionRenderer()
        self.overrides = list(overrides)

    def build(
        self,
        document: ContentDocument,
        search_items: list[AccordionLink],
        *,
        topic_slug: str | None = None,
        subtopic_slug: str | None = None,
    ) -> list[AccordionSection]:
        """Return the non-empty accordion sections for ``document``.

        Parameters
        ----------
        document : ContentDocument
            Subtopic page carrying optional curated ``groups``, an ordering
            mode, and ``children`` links.
        search_items : list[AccordionLink]
            Search results for content tagged to the page, ranked by title.
        topic_slug, subtopic_slug : str, optional
            Identify the page when matching configured overrides.

        Returns
        -------
        list[AccordionSection]
            Sections in group order with rendered list markup.
        """
        declared = document.groups or []
        groups = declared or [Group(name=SYNTHETIC_GROUP_LABEL)]
        sections: list[AccordionSection] = []
        for group in groups:
            items = self._group_items(document, group, search_items, declared=bool(declared))
            if not items:
                continue
            sections.append(
                AccordionSection(
                    heading_text=group.name or SYNTHETIC_GROUP_LABEL,
                    list_items=items,
                )
            )
        sections = self._apply_overrides(sections, topic_slug, subtopic_slug)
        for section in sections:
            section.html = self.renderer.render(section.list_items)
        return sections

    @staticmethod
    def _group_items(
        document: ContentDocument,
        group: Group,
        search_items: list[AccordionLink],
        *,
        declared: bool,
    ) -> list[AccordionLink]:
        if not declared:
            return list(search_items)
        if document.second_level_ordering == "alphabetical" or group.contents is None:
            return alphabetical_items(document)
        return curated_items(group.contents, search_items)

    def _apply_overrides(
        self,
        sections: list[AccordionSection],
        topic_slug: str | None,
        subtopic_slug: str | None,
    ) -> list[AccordionSection]:
        for override in self.overrides:
            if not override.matches(topic_slug, subtopic_slug) or not override.links:
                continue
            match override.action:
                case OverrideAction.APPEND_SECTION:
                    sections.append(
                        AccordionSection(
                            heading_text=override.section,
                            list_items=list(override.links),
                        )
                    )
                case OverrideAction.APPEND_TO_SECTION:
                    for section in sections:
                        if section.heading_text == override.section:
                            section.list_items.extend(override.links)
        return sections


def alphabetical_items(document: ContentDocument) -> list[AccordionLink]:
    """Return the document's tagged children sorted by title."""
    children = document.link_list("children") or []
    return [
        AccordionLink(title=child.title, link=child.base_path or "")
        for child in sorted(children, key=lambda child: child.title)
    ]


def curated_items(
    ordered_paths: list[str], search_items: list[AccordionLink]
) -> list[AccordionLink]:
    """Return curated paths found in the search results, in curated order.

    Titles come from the search results so renamed content shows its current
    title.
    """
    titles: dict[str, str] = {}
    for item in search_items:
        titles.setdefault(item.link, item.title)
    return [
        AccordionLink(title=titles[path], link=path)
        for path in ordered_paths
        if path in titles
    ]


__all__ = [
    "AccordionBuilder",
    "AccordionRenderer",
    "alphabetical_items",
    "curated_items",
]
