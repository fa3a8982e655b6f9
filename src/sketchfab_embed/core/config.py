"""Embed settings with the public Sketchfab endpoints as defaults.

The settings module fills this from config.json and the environment; the
core treats it as read-only.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_API_BASE = "https://api.sketchfab.com/v2/models"
DEFAULT_MODEL_PAGE_BASE = "https://sketchfab.com/models"
DEFAULT_HOME_BASE = "https://sketchfab.com"
DEFAULT_SITE_NAME = "Sketchfab"
DEFAULT_DESCRIPTION_TEMPLATE = "{model} by {author} on {site}"


@dataclass(frozen=True)
class EmbedConfig:
    """Endpoints and viewer settings used when building embeds."""

    api_base: str = DEFAULT_API_BASE
    model_page_base: str = DEFAULT_MODEL_PAGE_BASE
    home_base: str = DEFAULT_HOME_BASE
    width: int = 600
    height: int = 400
    site_name: str = DEFAULT_SITE_NAME
    # Placeholders receive already-rendered links: {model}, {author}, {site}.
    description_template: str = DEFAULT_DESCRIPTION_TEMPLATE
