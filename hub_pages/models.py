"""Dataclasses describing upstream content documents and page view fragments.

Upstream payloads arrive as loosely shaped JSON mappings. The ``from_payload``
constructors normalise them into the typed structures below so the builders
never have to probe nested dictionaries themselves. Every builder output type
exposes ``as_payload`` returning the JSON-ready mapping placed in view models.

Example
-------
>>> doc = ContentDocument.from_payload(
...     {"title": "Pay", "base_path": "/pay", "details": {"body": "<p>x</p>"}}
... )
>>> doc.body
'<p>x</p>'
>>> doc.parts is None
True
"""

from __future__ import annotations

import collections.abc as cabc
import copy
import dataclasses as dc
import enum
import logging
import typing as typ

logger = logging.getLogger(__name__)


class TopicType(enum.Enum):
    """Discriminates mainstream browse pages from specialist topic pages."""

    MAINSTREAM = "mainstream"
    SPECIALIST = "specialist"

    @property
    def path_prefix(self) -> str:
        """Return the URL prefix used for pages of this topic type."""
        return "browse" if self is TopicType.MAINSTREAM else "topic"

    @classmethod
    def parse(cls, value: object) -> TopicType | None:
        """Return the matching member for ``value`` or None when unrecognised."""
        if isinstance(value, TopicType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning("Unknown topic type: %r", value)
            return None


class SchemaFamily(enum.Enum):
    """Closed set of schema families the page assembler branches on."""

    CONSULTATION = "consultation"
    DOCUMENT_COLLECTION = "document_collection"
    GUIDE = "guide"
    LOCAL_TRANSACTION = "local_transaction"
    GENERIC = "generic"

    @classmethod
    def of(cls, document: ContentDocument) -> SchemaFamily:
        """Classify ``document`` by its schema name alone."""
        try:
            return cls(document.schema_name or cls.GENERIC.value)
        except ValueError:
            return cls.GENERIC


def _as_mapping(value: object) -> cabc.Mapping[str, typ.Any]:
    return value if isinstance(value, cabc.Mapping) else {}


def _optional_str(value: object) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_links(value: object) -> dict[str, list[DocumentReference]]:
    """Parse a ``links`` mapping of edge category to reference lists."""
    links: dict[str, list[DocumentReference]] = {}
    for category, entries in _as_mapping(value).items():
        if not isinstance(entries, list):
            continue
        links[str(category)] = [
            DocumentReference.from_payload(entry)
            for entry in entries
            if isinstance(entry, cabc.Mapping)
        ]
    return links


@dc.dataclass(slots=True)
class DocumentReference:
    """Lightweight reference to another document, as embedded in ``links``.

    Attributes
    ----------
    content_id : str | None
        Stable identifier of the referenced document.
    title : str
        Display title.
    base_path : str | None
        Public path of the referenced document.
    api_path : str | None
        Path of the document within the content API.
    document_type : str | None
        Upstream document type used for context labels.
    links : dict[str, list[DocumentReference]]
        Nested links embedded with the reference (parents, parent taxons).
    raw : dict[str, Any]
        Original upstream mapping, kept for passthrough metadata.
    """

    content_id: str | None
    title: str
    base_path: str | None = None
    api_path: str | None = None
    document_type: str | None = None
    description: str | None = None
    public_updated_at: str | None = None
    links: dict[str, list[DocumentReference]] = dc.field(default_factory=dict)
    raw: dict[str, typ.Any] = dc.field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: cabc.Mapping[str, typ.Any]) -> DocumentReference:
        """Build a reference from an upstream link mapping."""
        return cls(
            content_id=_optional_str(payload.get("content_id")),
            title=str(payload.get("title") or "").strip(),
            base_path=_optional_str(payload.get("base_path")),
            api_path=_optional_str(payload.get("api_path")),
            document_type=_optional_str(payload.get("document_type")),
            description=_optional_str(payload.get("description")),
            public_updated_at=_optional_str(payload.get("public_updated_at")),
            links=_parse_links(payload.get("links")),
            raw=copy.deepcopy(dict(payload)),
        )

    @property
    def identity(self) -> str | None:
        """Return the key used to detect repeated references."""
        return self.content_id or self.base_path

    def first_link(self, category: str) -> DocumentReference | None:
        """Return the first nested reference in ``category`` if any."""
        entries = self.links.get(category) or []
        return entries[0] if entries else None

    def as_payload(self) -> dict[str, typ.Any]:
        """Return the passthrough mapping with a normalised ``link`` key."""
        payload = copy.deepcopy(self.raw)
        payload["title"] = self.title
        payload["link"] = self.base_path
        return payload


@dc.dataclass(slots=True)
class Part:
    """One slug-addressed page of a multi-part document."""

    slug: str
    title: str
    body: str = ""

    @classmethod
    def from_payload(cls, payload: cabc.Mapping[str, typ.Any]) -> Part:
        """Build a part from its upstream mapping."""
        return cls(
            slug=str(payload.get("slug") or "").strip(),
            title=str(payload.get("title") or "").strip(),
            body=str(payload.get("body") or ""),
        )


@dc.dataclass(slots=True)
class Group:
    """Curated accordion group: a heading and an ordered list of paths."""

    name: str | None
    contents: list[str] | None = None

    @classmethod
    def from_payload(cls, payload: cabc.Mapping[str, typ.Any]) -> Group:
        """Build a group; ``contents`` stays None when not curated."""
        contents = payload.get("contents")
        return cls(
            name=_optional_str(payload.get("name")),
            contents=[str(item) for item in contents]
            if isinstance(contents, list)
            else None,
        )


@dc.dataclass(slots=True)
class ContentDocument:
    """A published document in one of the body, parts, or groups shapes.

    ``parts`` and ``groups`` are None when the upstream omits the key, which
    is distinct from an explicitly empty list.
    """

    content_id: str | None
    title: str
    description: str | None
    document_type: str | None
    schema_name: str | None
    base_path: str
    body: str | None = None
    parts: list[Part] | None = None
    groups: list[Group] | None = None
    second_level_ordering: str | None = None
    first_published_at: str | None = None
    first_public_at: str | None = None
    public_updated_at: str | None = None
    links: dict[str, list[DocumentReference]] = dc.field(default_factory=dict)
    details: dict[str, typ.Any] = dc.field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: cabc.Mapping[str, typ.Any]) -> ContentDocument:
        """Normalise an upstream content payload."""
        details = dict(_as_mapping(payload.get("details")))
        body = details.get("body")
        parts_raw = details.get("parts")
        groups_raw = details.get("groups")
        return cls(
            content_id=_optional_str(payload.get("content_id")),
            title=str(payload.get("title") or "").strip(),
            description=_optional_str(payload.get("description")),
            document_type=_optional_str(payload.get("document_type")),
            schema_name=_optional_str(payload.get("schema_name")),
            base_path=str(payload.get("base_path") or ""),
            body=body if isinstance(body, str) else None,
            parts=[
                Part.from_payload(part)
                for part in parts_raw
                if isinstance(part, cabc.Mapping)
            ]
            if isinstance(parts_raw, list)
            else None,
            groups=[
                Group.from_payload(group)
                for group in groups_raw
                if isinstance(group, cabc.Mapping)
            ]
            if isinstance(groups_raw, list)
            else None,
            second_level_ordering=_optional_str(details.get("second_level_ordering")),
            first_published_at=_optional_str(payload.get("first_published_at")),
            first_public_at=_optional_str(details.get("first_public_at")),
            public_updated_at=_optional_str(payload.get("public_updated_at")),
            links=_parse_links(payload.get("links")),
            details=copy.deepcopy(details),
        )

    @property
    def first_published_display_at(self) -> str | None:
        """Return the timestamp shown as "first published"."""
        return self.first_public_at or self.first_published_at

    @property
    def identity(self) -> str | None:
        """Return the key used to detect repeated documents."""
        return self.content_id or self.base_path or None

    def link_list(self, category: str) -> list[DocumentReference] | None:
        """Return the references in ``category`` or None when the key is absent."""
        return self.links.get(category)

    def first_link(self, category: str) -> DocumentReference | None:
        """Return the first reference in ``category`` if any."""
        entries = self.links.get(category) or []
        return entries[0] if entries else None

    def detail(self, key: str) -> typ.Any:  # noqa: ANN401 - upstream passthrough
        """Return a raw ``details`` value or None."""
        return self.details.get(key)


@dc.dataclass(slots=True)
class BreadcrumbEntry:
    """Ancestor link shown in the breadcrumb trail."""

    title: str
    link: str | None
    content_id: str | None = None

    @classmethod
    def from_reference(cls, reference: DocumentReference) -> BreadcrumbEntry:
        """Build an entry from an embedded document reference."""
        return cls(
            title=reference.title,
            link=reference.base_path,
            content_id=reference.content_id,
        )

    def as_payload(self) -> dict[str, typ.Any]:
        """Return the JSON-ready mapping for this entry."""
        return {"title": self.title, "link": self.link}


@dc.dataclass(slots=True)
class ContentsListEntry:
    """Table-of-contents entry pointing at a part page or an in-page heading.

    Attributes
    ----------
    text : str
        Label shown in the contents list.
    id_or_slug : str | None
        Part path or heading id; None for the part currently being viewed.
    is_current_page : bool
        True for the part currently being viewed. Never set for headings.
    is_heading : bool
        True when ``id_or_slug`` is an in-page heading anchor.
    """

    text: str
    id_or_slug: str | None
    is_current_page: bool = False
    is_heading: bool = False

    def as_payload(self) -> dict[str, typ.Any]:
        """Return the JSON-ready mapping for this entry."""
        if self.is_heading:
            return {"text": self.text, "id": self.id_or_slug}
        return {
            "text": self.text,
            "slug": self.id_or_slug or False,
            "is_current_page": self.is_current_page,
        }


@dc.dataclass(slots=True)
class AccordionLink:
    """Navigable list item inside an accordion section."""

    title: str
    link: str

    def as_payload(self) -> dict[str, str]:
        """Return the JSON-ready mapping for this link."""
        return {"title": self.title, "link": self.link}


@dc.dataclass(slots=True)
class AccordionSection:
    """Collapsible navigation group on a topic or subtopic page."""

    heading_text: str
    list_items: list[AccordionLink]
    html: str = ""

    def as_payload(self) -> dict[str, typ.Any]:
        """Return the JSON-ready mapping consumed by the accordion component."""
        return {
            "heading": {"text": self.heading_text},
            "content": {"html": self.html},
            "list_items": [item.as_payload() for item in self.list_items],
        }


__all__ = [
    "AccordionLink",
    "AccordionSection",
    "BreadcrumbEntry",
    "ContentDocument",
    "ContentsListEntry",
    "DocumentReference",
    "Group",
    "Part",
    "SchemaFamily",
    "TopicType",
]
