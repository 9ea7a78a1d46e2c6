"""Assemble navigation hub and content page view models from a content API.

This package normalises published documents and live search results into
JSON-ready view models: breadcrumbs, contents lists, related links, date
labels, and the accordion sections shown on subtopic pages.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from hub_pages import main
>>> main()  # doctest: +SKIP
>>> from hub_pages import app
>>> app(["browse"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
