"""Assemble JSON-ready view models for content, topic, and browse pages.

Examples
--------
>>> from hub_pages.assembler import PageAssembler
>>> from hub_pages.models import TopicType
>>> assembler = PageAssembler()  # doctest: +SKIP
>>> page = assembler.subtopic_page("benefits", "entitlement", TopicType.MAINSTREAM)  # doctest: +SKIP
>>> [s["heading"]["text"] for s in page["subtopic_sections"]["items"]]  # doctest: +SKIP
['A to Z']
"""

from ._common import ContentNotFoundError
from .browse import BrowsePageAssembler
from .content import ContentPageAssembler
from .page_assembler import PageAssembler

__all__ = [
    "BrowsePageAssembler",
    "ContentNotFoundError",
    "ContentPageAssembler",
    "PageAssembler",
]
