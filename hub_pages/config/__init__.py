"""Load and validate hub configuration YAML.

This subpackage parses the project's ``hub.yaml`` file into strongly typed
dataclasses (:class:`HubConfig` and friends): upstream endpoints, display
settings, the taxonomy reference data used to scope search queries, and the
declarative override tables applied to topic and subtopic pages. The primary
entry point is :func:`load_hub_config`.

Examples
--------
>>> from pathlib import Path
>>> from hub_pages.config import load_hub_config
>>> config = load_hub_config(Path("config/hub.yaml"))  # doctest: +SKIP
>>> [o.topic for o in config.accordion_overrides]  # doctest: +SKIP
['visas-immigration', 'citizenship']
"""

from .loader import load_hub_config
from .models import (
    AccordionOverride,
    DisplayConfig,
    EndpointConfig,
    HubConfig,
    HubConfigError,
    OverrideAction,
    TopicOverride,
)

__all__ = [
    "AccordionOverride",
    "DisplayConfig",
    "EndpointConfig",
    "HubConfig",
    "HubConfigError",
    "OverrideAction",
    "TopicOverride",
    "load_hub_config",
]
