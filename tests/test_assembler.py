"""Tests for content, topic, subtopic, and browse index view models."""

from __future__ import annotations

import typing as typ

import pytest

from hub_pages._constants import PRIORITY_TAXON_IDS
from hub_pages.assembler import ContentNotFoundError, PageAssembler
from hub_pages.config import AccordionOverride, HubConfig, OverrideAction, TopicOverride
from hub_pages.models import AccordionLink, TopicType
from hub_pages.taxonomy import TaxonEntry

CONTENT_KEYS = {
    "title",
    "description",
    "contents_list",
    "is_consultation",
    "opening_date_time",
    "opening_date_time_display",
    "closing_date_time",
    "closing_date_time_display",
    "intro",
    "details",
    "documents",
    "show_form",
    "need_to_know",
    "breadcrumbs",
    "part_of_taxon",
    "context",
    "metadata",
    "history",
    "topic",
    "related_content",
    "step_by_step",
    "topical_events",
    "collections",
    "topics",
    "is_html_publication",
    "part_of_parent",
    "document_collections",
    "main_document",
    "archived_documents",
    "is_mainstream_guide",
}

GUIDE = {
    "title": "Universal Credit",
    "base_path": "/universal-credit",
    "schema_name": "guide",
    "document_type": "guide",
    "first_published_at": "2020-01-01T09:00:00Z",
    "public_updated_at": "2024-02-01T09:00:00Z",
    "details": {
        "parts": [
            {"slug": "what-it-is", "title": "What it is", "body": "<p>Intro</p>"},
            {
                "slug": "how-to-claim",
                "title": "How to claim",
                "body": '<a href="https://www.gov.uk/apply">Apply</a>',
            },
        ],
        "change_history": [
            {"public_timestamp": "2023-01-01T09:00:00Z", "note": "Older"},
            {"public_timestamp": "2024-02-01T09:00:00Z", "note": "Newer"},
        ],
    },
}


def _assembler(content_client, search_client, documents, responder=None, config=None):
    return PageAssembler(
        config or HubConfig(),
        content_client=content_client(documents),
        search_client=search_client(responder or (lambda query: {"results": []})),
    )


def _content_page(content_client, search_client, payload, slug, **kwargs):
    assembler = _assembler(content_client, search_client, {payload["base_path"]: payload})
    return assembler.content_page(slug, **kwargs)


def test_payload_keys_are_stable_across_schemas(content_client, search_client) -> None:
    plain = {"title": "Note", "base_path": "/note", "details": {"body": "<p>x</p>"}}
    guide_page = _content_page(content_client, search_client, GUIDE, "/universal-credit")
    plain_page = _content_page(content_client, search_client, plain, "/note")
    assert set(guide_page) == CONTENT_KEYS
    assert set(plain_page) == CONTENT_KEYS, (
        f"unexpected key differences: {set(plain_page) ^ CONTENT_KEYS!r}"
    )
    assert plain_page["is_consultation"] is False
    assert plain_page["main_document"] is False


def test_guide_part_selection_and_link_stripping(content_client, search_client) -> None:
    page = _content_page(
        content_client, search_client, GUIDE, "/universal-credit/how-to-claim"
    )
    assert page["is_mainstream_guide"] is True
    assert [part["title"] for part in page["details"]] == ["How to claim"]
    assert page["details"][0]["body"] == '<a href="/apply">Apply</a>', (
        "expected absolute site links to become root-relative"
    )
    current = [entry for entry in page["contents_list"] if entry["is_current_page"]]
    assert [entry["text"] for entry in current] == ["How to claim"]


def test_guide_base_path_shows_first_part(content_client, search_client) -> None:
    page = _content_page(content_client, search_client, GUIDE, "universal-credit")
    assert [part["title"] for part in page["details"]] == ["What it is"]
    assert page["contents_list"][0]["is_current_page"] is True


def test_metadata_and_history_for_updated_documents(content_client, search_client) -> None:
    page = _content_page(content_client, search_client, GUIDE, "/universal-credit")
    assert page["metadata"]["first_published"] == "1 January 2020"
    assert page["metadata"]["last_updated"] == "1 February 2024"
    assert [item["note"] for item in page["history"]] == ["Newer", "Older"]


def test_first_public_at_is_displayed_but_not_compared(
    content_client, search_client
) -> None:
    payload = {
        "title": "Migrated guidance",
        "base_path": "/migrated",
        "first_published_at": "2020-01-01T09:00:00Z",
        "public_updated_at": "2020-01-01T09:00:00Z",
        "details": {
            "body": "",
            "first_public_at": "2015-06-01T09:00:00Z",
            "change_history": [
                {"public_timestamp": "2020-01-01T09:00:00Z", "note": "First published"}
            ],
        },
    }
    page = _content_page(content_client, search_client, payload, "/migrated")
    assert page["metadata"]["first_published"] == "1 June 2015"
    assert page["metadata"]["last_updated"] is False, (
        "expected no update when the upstream timestamps are equal"
    )
    assert page["history"] == []


def test_priority_taxon_is_selected(content_client, search_client) -> None:
    payload = {
        "title": "Guidance",
        "base_path": "/guidance",
        "details": {"body": ""},
        "links": {
            "taxons": [
                {"content_id": "ordinary", "title": "Ordinary", "base_path": "/o"},
                {"content_id": PRIORITY_TAXON_IDS[1], "title": "Priority", "base_path": "/p"},
            ]
        },
    }
    page = _content_page(content_client, search_client, payload, "/guidance")
    assert page["part_of_taxon"]["title"] == "Priority"


def test_consultation_dates(content_client, search_client) -> None:
    payload = {
        "title": "Consultation on rates",
        "base_path": "/consultation",
        "schema_name": "consultation",
        "document_type": "open_consultation",
        "details": {
            "opening_date": "2024-01-01T12:00:00Z",
            "closing_date": "2024-01-10T00:00:00Z",
        },
    }
    page = _content_page(content_client, search_client, payload, "/consultation")
    assert page["is_consultation"] is True
    assert page["context"] == "Open consultation"
    assert page["opening_date_time_display"] == "midday on 1 January 2024"
    assert page["closing_date_time_display"] == "11:59pm on 9 January 2024"


def test_consultation_document_type_alone_is_not_a_consultation(
    content_client, search_client
) -> None:
    payload = {
        "title": "Consultation outcome report",
        "base_path": "/outcome",
        "schema_name": "publication",
        "document_type": "consultation",
        "details": {
            "body": "",
            "opening_date": "2024-01-01T12:00:00Z",
            "closing_date": "2024-01-10T00:00:00Z",
        },
    }
    page = _content_page(content_client, search_client, payload, "/outcome")
    assert page["is_consultation"] is False
    assert page["opening_date_time_display"] is False
    assert page["closing_date_time_display"] is False


def test_document_collection_groups(content_client, search_client) -> None:
    payload = {
        "title": "Forms",
        "base_path": "/forms",
        "schema_name": "document_collection",
        "details": {
            "collection_groups": [
                {"title": "Tax Forms", "documents": ["b", "missing"]},
                {"title": "Empty", "documents": ["missing"]},
            ]
        },
        "links": {
            "documents": [
                {"content_id": "a", "title": "Main", "base_path": "/a",
                 "document_type": "form", "public_updated_at": "2024-01-02T10:00:00Z"},
                {"content_id": "b", "title": "Archived", "base_path": "/b"},
            ]
        },
    }
    page = _content_page(content_client, search_client, payload, "/forms")
    assert page["main_document"]["title"] == "Main"
    assert page["main_document"]["formatted_date"] == "2 January 2024"
    assert [doc["title"] for doc in page["archived_documents"]] == ["Archived"]
    groups = page["document_collections"]
    assert [(group["slug"], len(group["documents"])) for group in groups] == [
        ("tax-forms", 1)
    ], f"unexpected collection groups: {groups!r}"


def test_html_publication_takes_parent_context(content_client, search_client) -> None:
    parent = {
        "title": "Annual report",
        "base_path": "/annual-report",
        "links": {"parent": [{"title": "Publications", "base_path": "/publications"}]},
    }
    child = {
        "title": "Annual report (HTML)",
        "base_path": "/annual-report/html",
        "details": {"body": '<h2 id="summary">Summary</h2>'},
        "links": {
            "parent": [
                {
                    "title": "Annual report",
                    "base_path": "/annual-report",
                    "document_type": "corporate_report",
                }
            ]
        },
    }
    assembler = _assembler(
        content_client,
        search_client,
        {"/annual-report": parent, "/annual-report/html": child},
    )
    page = assembler.content_page("/annual-report/html", html_publication=True)
    assert page["is_html_publication"] is True
    assert page["part_of_parent"]["title"] == "Annual report"
    assert page["context"] == "Corporate report"
    assert page["breadcrumbs"] == [{"title": "Publications", "link": "/publications"}]
    assert page["contents_list"] == [{"text": "Summary", "id": "summary"}]


def test_missing_content_raises(content_client, search_client) -> None:
    assembler = _assembler(content_client, search_client, {})
    with pytest.raises(ContentNotFoundError) as excinfo:
        assembler.content_page("/nowhere")
    assert excinfo.value.path == "/nowhere"


def _browse_topic() -> dict[str, typ.Any]:
    return {
        "title": "Benefits",
        "base_path": "/browse/benefits",
        "details": {"ordered_second_level_browse_pages": ["id-b", "id-a"]},
        "links": {
            "second_level_browse_pages": [
                {"content_id": "id-a", "title": "Appeals", "base_path": "/browse/benefits/a"},
                {"content_id": "id-b", "title": "Budgeting", "base_path": "/browse/benefits/b"},
            ]
        },
    }


def test_topic_page_orders_subtopics_and_adds_overrides(
    content_client, search_client
) -> None:
    config = HubConfig(
        topic_overrides=[
            TopicOverride("benefits", [AccordionLink("Extra", "/browse/benefits/extra")])
        ]
    )
    assembler = _assembler(
        content_client,
        search_client,
        {"/browse/benefits": _browse_topic()},
        config=config,
    )
    page = assembler.topic_page("benefits", TopicType.MAINSTREAM)
    assert [link["title"] for link in page["subtopics"]] == [
        "Budgeting",
        "Appeals",
        "Extra",
    ]
    assert page["taxon_search_filter"] is False
    assert page["latest_news"] == [] and page["featured"] == []


def test_topic_page_with_taxon_runs_searches(content_client, search_client) -> None:
    def responder(query: dict[str, typ.Any]) -> dict[str, typ.Any]:
        if "filter_part_of_taxonomy_tree" in query:
            return {"results": [{"title": "News", "link": "/news"}]}
        return {"results": [{"title": "Popular", "link": "/popular"}]}

    config = HubConfig(taxonomies=[TaxonEntry("/browse/benefits", "taxon-1")])
    assembler = _assembler(
        content_client,
        search_client,
        {"/browse/benefits": _browse_topic()},
        responder=responder,
        config=config,
    )
    page = assembler.topic_page("benefits", TopicType.MAINSTREAM)
    assert page["taxon_search_filter"] == "taxon-1"
    assert [item["title"] for item in page["latest_news"]] == ["News"]
    assert page["featured"] == [{"title": "Popular", "link": "/popular"}]
    assert len(assembler.search_client.queries) == 2, (
        "expected the news query to be reused for organisations"
    )


def test_popular_content_covers_subtopics_outside_curated_order(
    content_client, search_client
) -> None:
    topic = _browse_topic()
    topic["details"]["ordered_second_level_browse_pages"] = ["id-b"]
    config = HubConfig(taxonomies=[TaxonEntry("/browse/benefits", "taxon-1")])
    assembler = _assembler(
        content_client,
        search_client,
        {"/browse/benefits": topic},
        config=config,
    )
    page = assembler.topic_page("benefits", TopicType.MAINSTREAM)
    assert [link["title"] for link in page["subtopics"]] == ["Budgeting"]
    popular = [
        query
        for query in assembler.search_client.queries
        if "filter_mainstream_browse_pages" in query
    ]
    assert len(popular) == 1
    assert popular[0]["filter_mainstream_browse_pages"] == [
        "benefits/a",
        "benefits/b",
    ], "expected every linked subtopic to scope the popular content query"


def test_subtopic_page_sections_and_overrides(content_client, search_client) -> None:
    subtopic = {
        "title": "Work visas",
        "content_id": "sub-id",
        "base_path": "/browse/visas-immigration/work-visas",
        "details": {},
        "links": {
            "parent": [{"title": "Visas", "base_path": "/browse/visas-immigration"}]
        },
    }
    config = HubConfig(
        accordion_overrides=[
            AccordionOverride(
                topic="visas-immigration",
                action=OverrideAction.APPEND_SECTION,
                section="Operational guidance",
                links=[AccordionLink("Guidance", "/guidance")],
            )
        ]
    )
    assembler = _assembler(
        content_client,
        search_client,
        {subtopic["base_path"]: subtopic},
        responder=lambda query: {"results": [{"title": "Skilled worker", "link": "/sw"}]},
        config=config,
    )
    page = assembler.subtopic_page("visas-immigration", "work-visas", TopicType.MAINSTREAM)
    headings = [item["heading"]["text"] for item in page["subtopic_sections"]["items"]]
    assert headings == ["A to Z", "Operational guidance"]
    assert page["parent"] == {"title": "Visas", "link": "/browse/visas-immigration"}
    assert page["related_topics"] == []
    query = assembler.search_client.queries[0]
    assert query["filter_mainstream_browse_page_content_ids"] == "sub-id"


def test_browse_index_sorted_by_title(content_client, search_client) -> None:
    browse = {
        "title": "Browse",
        "base_path": "/browse",
        "links": {
            "top_level_browse_pages": [
                {"title": "Visas", "base_path": "/browse/visas", "description": "V"},
                {"title": "Benefits", "base_path": "/browse/benefits"},
            ]
        },
    }
    assembler = _assembler(content_client, search_client, {"/browse": browse})
    page = assembler.browse_index()
    assert [item["title"] for item in page["subtopics"]] == ["Benefits", "Visas"]
    assert page["subtopics"][1]["description"] == "V"
