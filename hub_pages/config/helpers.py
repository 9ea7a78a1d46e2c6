"""Utility helpers shared by the hub configuration loader."""

from __future__ import annotations

import typing as typ

from hub_pages.models import AccordionLink
from hub_pages.taxonomy import TaxonEntry

from .models import (
    AccordionOverride,
    DisplayConfig,
    EndpointConfig,
    HubConfigError,
    OverrideAction,
    TopicOverride,
)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: typ.Mapping[str, typ.Any], key: str, context: str) -> str:
    """Return ``payload[key]`` as a non-empty string or raise HubConfigError."""
    value = _optional_str(payload.get(key))
    if value is None:
        msg = f"{context} requires a '{key}'."
        raise HubConfigError(msg)
    return value


def _string_list(value: object) -> list[str]:
    """Normalize a scalar or list into a list of non-empty strings."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [text for item in value if (text := _optional_str(item))]


def _build_endpoint_config(payload: typ.Mapping[str, typ.Any]) -> EndpointConfig:
    """Build an EndpointConfig, keeping defaults for omitted keys."""
    base = EndpointConfig()
    return EndpointConfig(
        content_api_base=payload.get("content_api_base", base.content_api_base),
        site_root=payload.get("site_root", base.site_root),
        search_api_url=payload.get("search_api_url", base.search_api_url),
        timeout=float(payload.get("timeout", base.timeout)),
    )


def _build_display_config(payload: typ.Mapping[str, typ.Any]) -> DisplayConfig:
    """Build a DisplayConfig, keeping defaults for omitted keys."""
    base = DisplayConfig()
    return DisplayConfig(
        timezone=payload.get("timezone", base.timezone),
        placeholder_image_url=payload.get(
            "placeholder_image_url", base.placeholder_image_url
        ),
        accordion_search_limit=int(
            payload.get("accordion_search_limit", base.accordion_search_limit)
        ),
    )


def _build_links(entries: object, context: str) -> list[AccordionLink]:
    """Build accordion links from ``{title, link}`` mappings."""
    links: list[AccordionLink] = []
    match entries:
        case list() as items:
            iterable = items
        case _:
            return links
    for entry in iterable:
        match entry:
            case {"title": title, "link": link}:
                pass
            case _:
                msg = f"{context} links require 'title' and 'link'."
                raise HubConfigError(msg)
        if not title or not link:
            msg = f"{context} links require 'title' and 'link'."
            raise HubConfigError(msg)
        links.append(AccordionLink(title=str(title), link=str(link)))
    return links


def _build_taxonomies(entries: object) -> list[TaxonEntry]:
    """Build taxonomy reference entries from ``{path, content_id}`` mappings."""
    if not isinstance(entries, list):
        return []
    taxonomies: list[TaxonEntry] = []
    for entry in entries:
        if not isinstance(entry, dict):
            msg = "Taxonomy entries must be mappings."
            raise HubConfigError(msg)
        taxonomies.append(
            TaxonEntry(
                path=_require_str(entry, "path", "Taxonomy entry"),
                content_id=_require_str(entry, "content_id", "Taxonomy entry"),
            )
        )
    return taxonomies


def _build_topic_overrides(entries: object) -> list[TopicOverride]:
    """Build topic-page overrides from the configuration payload."""
    if not isinstance(entries, list):
        return []
    overrides: list[TopicOverride] = []
    for entry in entries:
        if not isinstance(entry, dict):
            msg = "Topic overrides must be mappings."
            raise HubConfigError(msg)
        topic = _require_str(entry, "topic", "Topic override")
        overrides.append(
            TopicOverride(
                topic=topic,
                links=_build_links(entry.get("links"), f"Topic override '{topic}'"),
            )
        )
    return overrides


def _build_accordion_overrides(entries: object) -> list[AccordionOverride]:
    """Build accordion overrides, validating their action names."""
    if not isinstance(entries, list):
        return []
    overrides: list[AccordionOverride] = []
    for entry in entries:
        if not isinstance(entry, dict):
            msg = "Accordion overrides must be mappings."
            raise HubConfigError(msg)
        topic = _require_str(entry, "topic", "Accordion override")
        context = f"Accordion override for '{topic}'"
        action_name = _require_str(entry, "action", context)
        try:
            action = OverrideAction(action_name)
        except ValueError as exc:
            known = ", ".join(member.value for member in OverrideAction)
            msg = f"{context} has unknown action '{action_name}'. Known: {known}"
            raise HubConfigError(msg) from exc
        overrides.append(
            AccordionOverride(
                topic=topic,
                subtopic=_optional_str(entry.get("subtopic")),
                exclude_subtopics=_string_list(entry.get("exclude_subtopics")),
                action=action,
                section=_require_str(entry, "section", context),
                links=_build_links(entry.get("links"), context),
            )
        )
    return overrides


__all__ = [
    "_build_accordion_overrides",
    "_build_display_config",
    "_build_endpoint_config",
    "_build_links",
    "_build_taxonomies",
    "_build_topic_overrides",
    "_optional_str",
    "_string_list",
]
