"""Map topic paths to taxonomy identifiers used to scope search queries.

The mapping is reference data supplied through the ``taxonomies`` block of the
hub configuration, so this module only performs lookups.

Example
-------
>>> from hub_pages.models import TopicType
>>> taxonomy = TaxonomyFilter([TaxonEntry("/browse/benefits", "abc")])
>>> taxonomy.topic_filter("benefits", TopicType.MAINSTREAM)
{'filter_part_of_taxonomy_tree': 'abc'}
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging

from .models import TopicType

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class TaxonEntry:
    """Associate a topic page path with a taxonomy content id."""

    path: str
    content_id: str


def _normalize_path(path: str) -> str:
    return "/" + path.strip().strip("/")


class TaxonomyFilter:
    """Look up taxonomy ids for browse and topic page paths."""

    def __init__(self, entries: cabc.Iterable[TaxonEntry] = ()) -> None:
        self._by_path = {_normalize_path(entry.path): entry.content_id for entry in entries}

    def taxon_filter_lookup(self, path: str) -> str | None:
        """Return the taxonomy id registered for the page at ``path``."""
        return self._by_path.get(_normalize_path(path))

    def content_id(self, topic_path: str, topic_type: TopicType | None) -> str | None:
        """Return the taxonomy id for a ``topic`` or ``topic/subtopic`` path."""
        if topic_type is None:
            logger.warning("No topic type given for %r; skipping taxon filter", topic_path)
            return None
        return self.taxon_filter_lookup(f"/{topic_type.path_prefix}/{topic_path.strip('/')}")

    def topic_filter(
        self, topic_path: str, topic_type: TopicType | None
    ) -> dict[str, str]:
        """Return search filter options scoping results to the topic's taxon."""
        taxon_id = self.content_id(topic_path, topic_type)
        if taxon_id:
            return {"filter_part_of_taxonomy_tree": taxon_id}
        return {}


__all__ = ["TaxonEntry", "TaxonomyFilter"]
