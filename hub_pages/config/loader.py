"""Load hub configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from .helpers import (
    _build_accordion_overrides,
    _build_display_config,
    _build_endpoint_config,
    _build_taxonomies,
    _build_topic_overrides,
)
from .models import HubConfig, HubConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path


def load_hub_config(path: Path) -> HubConfig:
    """Load the YAML configuration describing endpoints and page overrides.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/hub.yaml``).

    Returns
    -------
    HubConfig
        Parsed configuration with endpoints, display settings, taxonomy
        reference data, and override tables.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    HubConfigError
        If a section or entry is malformed (for example, an override with an
        unknown action).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from hub_pages.config import load_hub_config
    >>> config = load_hub_config(Path("config/hub.yaml"))  # doctest: +SKIP
    >>> config.endpoints.search_api_url  # doctest: +SKIP
    'https://www.gov.uk/api/search.json'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}
    if not isinstance(defaults, dict):
        msg = "The 'defaults' section must be a mapping."
        raise HubConfigError(msg)

    return HubConfig(
        endpoints=_build_endpoint_config(defaults),
        display=_build_display_config(defaults),
        taxonomies=_build_taxonomies(raw.get("taxonomies")),
        topic_overrides=_build_topic_overrides(raw.get("topic_overrides")),
        accordion_overrides=_build_accordion_overrides(raw.get("accordion_overrides")),
    )


__all__ = ["load_hub_config"]
