"""Cyclopts CLI entrypoint for assembling hub page view models as JSON.

The ``hub`` console script fetches live content and search data and prints
the JSON view model a template layer would render. Each command maps to one
page kind: individual content pages, topic pages, subtopic pages, and the
browse index. Options can also be supplied through ``INPUT_``-prefixed
environment variables, which keeps CI usage terse.

Examples
--------
Assemble a multi-part guide with the default configuration:

>>> from hub_pages.cli import app
>>> app.run(["content", "universal-credit/how-to-claim"])  # doctest: +SKIP

Render a specialist topic's subtopic page:

>>> app.run(
...     ["subtopic", "schools-colleges", "admissions", "--topic-type", "specialist"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import json
import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .assembler import ContentNotFoundError, PageAssembler
from .config import HubConfig, load_hub_config
from .models import TopicType

DEFAULT_CONFIG = Path("config/hub.yaml")

app = App(name="hub", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

logger = logging.getLogger(__name__)

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to hub config", env_var="INPUT_CONFIG")
]
VerboseOption = typ.Annotated[
    bool, Parameter(help="Log upstream requests and warnings")
]
TopicTypeOption = typ.Annotated[
    TopicType,
    Parameter(help="Mainstream browse or specialist topic", env_var="INPUT_TOPIC_TYPE"),
]


def _assembler(config: Path, *, verbose: bool) -> PageAssembler:
    """Configure logging and return an assembler for ``config``.

    When the default configuration file is absent the built-in defaults are
    used so the CLI works from any directory. An explicitly named file must
    exist.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if config == DEFAULT_CONFIG and not config.exists():
        logger.info("No configuration at %s; using defaults", config)
        return PageAssembler(HubConfig())
    return PageAssembler(load_hub_config(config))


def _emit(build: typ.Callable[[], dict[str, typ.Any]]) -> None:
    """Print the JSON payload produced by ``build`` or report a missing page."""
    try:
        payload = build()
    except ContentNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        raise SystemExit(1) from exc
    print(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command(help="Assemble the view model for a content page.")
def content(
    slug: str,
    *,
    html_publication: typ.Annotated[
        bool, Parameter(help="Render as an HTML publication of its parent")
    ] = False,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Print the content page view model for ``slug``.

    Parameters
    ----------
    slug : str
        Public path of the document, optionally ending in a part slug.
    html_publication : bool, optional
        Take breadcrumbs and context from the parent publication.
    config : Path, optional
        Path to the ``hub.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    verbose : bool, optional
        Enable debug logging.
    """
    assembler = _assembler(config, verbose=verbose)
    _emit(lambda: assembler.content_page(slug, html_publication=html_publication))


@app.command(help="Assemble the view model for a topic page.")
def topic(
    topic_slug: str,
    *,
    topic_type: TopicTypeOption = TopicType.MAINSTREAM,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Print the topic page view model for ``topic_slug``."""
    assembler = _assembler(config, verbose=verbose)
    _emit(lambda: assembler.topic_page(topic_slug, topic_type))


@app.command(help="Assemble the view model for a subtopic page.")
def subtopic(
    topic_slug: str,
    subtopic_slug: str,
    *,
    topic_type: TopicTypeOption = TopicType.MAINSTREAM,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Print the subtopic page view model, including accordion sections.

    Parameters
    ----------
    topic_slug : str
        Slug of the parent topic.
    subtopic_slug : str
        Slug of the subtopic beneath ``topic_slug``.
    topic_type : TopicType, optional
        ``mainstream`` for ``/browse`` pages or ``specialist`` for ``/topic``
        pages (overridable via ``INPUT_TOPIC_TYPE``).
    config : Path, optional
        Path to the ``hub.yaml`` configuration file.
    verbose : bool, optional
        Enable debug logging.
    """
    assembler = _assembler(config, verbose=verbose)
    _emit(lambda: assembler.subtopic_page(topic_slug, subtopic_slug, topic_type))


@app.command(help="Assemble the view model for the browse index.")
def browse(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    verbose: VerboseOption = False,
) -> None:
    """Print the top-level browse pages ordered by title."""
    assembler = _assembler(config, verbose=verbose)
    _emit(assembler.browse_index)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``hub`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
