"""Common literal values used across hub_pages.

These constants keep domain-specific tables and labels centralized so the
assemblers, builders, and tests can import the same values without drifting.
Intended for internal use within the hub_pages package.

Examples
--------
>>> from hub_pages import _constants
>>> _constants.CONTEXT_PHRASES["news_story"]
'News story'
>>> _constants.SYNTHETIC_GROUP_LABEL
'A to Z'
"""

SYNTHETIC_GROUP_LABEL = "A to Z"
PLACEHOLDER_IMAGE_URL = (
    "https://assets.publishing.service.gov.uk/media/"
    "5e59279b86650c53b2cefbfe/placeholder.jpg"
)
ACCORDION_SEARCH_LIMIT = 500
POPULAR_CONTENT_COUNT = 3
LATEST_NEWS_COUNT = 3
ORGANISATION_FACET_SIZE = "20"
RELATED_CONTENT_LIMIT = 3

PRIORITY_TAXON_IDS: tuple[str, ...] = (
    "634fd193-8039-4a70-a059-919c34ff4bfc",
    "614b2e65-56ac-4f8d-bb9c-d1a14167ba25",
    "d6c2de5d-ef90-45d1-82d4-5f2438369eea",
    "272308f4-05c8-4d0d-abc7-b7c2e3ccd249",
    "b7f57213-4b16-446d-8ded-81955d782680",
    "65666cdf-b177-4d79-9687-b9c32805e450",
)

LATEST_NEWS_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "image_url",
    "public_timestamp",
    "content_purpose_supergroup",
    "content_purpose_subgroup",
)

CONTEXT_PHRASES: dict[str, str] = {
    "aaib_report": "Air Accidents Investigation Branch report",
    "announcement": "Announcement",
    "asylum_support_decision": "Asylum support tribunal decision",
    "authored_article": "Authored article",
    "business_finance_support_scheme": "Business finance support scheme",
    "case_study": "Case study",
    "closed_consultation": "Closed consultation",
    "cma_case": "Competition and Markets Authority case",
    "coming_soon": "Coming Soon",
    "consultation": "Consultation",
    "consultation_outcome": "Consultation outcome",
    "corporate_information_page": "Information page",
    "corporate_report": "Corporate report",
    "correspondence": "Correspondence",
    "countryside_stewardship_grant": "Countryside Stewardship grant",
    "decision": "Decision",
    "detailed_guide": "Guidance",
    "dfid_research_output": "Research for Development Output",
    "document_collection": "Collection",
    "draft_text": "Draft text",
    "drug_safety_update": "Drug Safety Update",
    "employment_appeal_tribunal_decision": "Employment appeal tribunal decision",
    "employment_tribunal_decision": "Employment tribunal decision",
    "esi_fund": "European Structural and Investment Fund (ESIF)",
    "fatality_notice": "Fatality notice",
    "foi_release": "FOI release",
    "form": "Form",
    "government_response": "Government response",
    "guidance": "Guidance",
    "impact_assessment": "Impact assessment",
    "imported": "imported - awaiting type",
    "independent_report": "Independent report",
    "international_development_fund": "International development funding",
    "international_treaty": "International treaty",
    "maib_report": "Marine Accident Investigation Branch report",
    "map": "Map",
    "medical_safety_alert": "Alerts and recalls for drugs and medical devices",
    "national": "National statistics announcement",
    "national_statistics": "National Statistics",
    "national_statistics_announcement": "National statistics announcement",
    "news_article": "News article",
    "news_story": "News story",
    "notice": "Notice",
    "official": "Official statistics announcement",
    "official_statistics": "Official Statistics",
    "official_statistics_announcement": "Official statistics announcement",
    "open_consultation": "Open consultation",
    "oral_statement": "Oral statement to Parliament",
    "policy": "Policy",
    "policy_paper": "Policy paper",
    "press_release": "Press release",
    "promotional": "Promotional material",
    "publication": "Publication",
    "raib_report": "Rail Accident Investigation Branch report",
    "regulation": "Regulation",
    "research": "Research and analysis",
    "residential_property_tribunal_decision": "Residential property tribunal decision",
    "service_sign_in": "Service sign in",
    "service_standard_report": "Service Standard Report",
    "speaking_notes": "Speaking notes",
    "speech": "Speech",
    "standard": "Standard",
    "statement_to_parliament": "Statement to Parliament",
    "statistical_data_set": "Statistical data set",
    "statistics_announcement": "Statistics release announcement",
    "statutory_guidance": "Statutory guidance",
    "take_part": "Take part",
    "tax_tribunal_decision": "Tax and Chancery tribunal decision",
    "transcript": "Transcript",
    "transparency": "Transparency data",
    "utaac_decision": "Administrative appeals tribunal decision",
    "world_location_news_article": "News article",
    "world_news_story": "World news story",
    "written_statement": "Written statement to Parliament",
}


def context_phrase(document_type: str | None) -> str | None:
    """Return the human-readable label for ``document_type`` or None."""
    if not document_type:
        return None
    return CONTEXT_PHRASES.get(document_type)
