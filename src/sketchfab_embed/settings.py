"""Configuration loading for sketchfab-embed.

User-editable settings (endpoints, viewer size, HTTP, logging) live in a
single JSON file; a handful of environment variables, optionally read from a
.env file, override the endpoints for staging or self-hosted mirrors.
"""

from __future__ import annotations

import json
import os
import string
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from sketchfab_embed.adapters.http_client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from sketchfab_embed.core.config import EmbedConfig

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

# Default location of the user config; the CLI can point elsewhere.
CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.json")

ENV_OVERRIDES = {
    "SKETCHFAB_API_BASE": "api_base",
    "SKETCHFAB_MODEL_PAGE_BASE": "model_page_base",
    "SKETCHFAB_HOME_BASE": "home_base",
}
TEMPLATE_FIELDS = {"model", "author", "site"}


@dataclass(frozen=True)
class Settings:
    """Everything the application layer needs to wire the filter."""

    embed: EmbedConfig
    http_timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    logging: dict = field(default_factory=dict)
    project_root: str = PROJECT_ROOT


def load_json_config(path: str) -> dict:
    """Load the JSON config; a missing file means all defaults."""

    if not os.path.exists(path):
        return {}

    with open(path, "r", encoding="utf-8") as handle:
        config = json.load(handle)
    if not isinstance(config, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")
    return config


def _positive_int(value, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if number <= 0:
        raise ValueError(f"{name} must be positive, got {number}")
    return number


def _positive_float(value, name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}") from None
    if number <= 0:
        raise ValueError(f"{name} must be positive, got {number}")
    return number


def _validate_template(template: str) -> str:
    fields = {name for _, name, _, _ in string.Formatter().parse(template) if name is not None}
    unknown = fields - TEMPLATE_FIELDS
    if unknown:
        raise ValueError(f"Unknown description_template placeholders: {', '.join(sorted(unknown))}")
    return template


def build_embed_config(raw: dict) -> EmbedConfig:
    """Build an EmbedConfig from the ``embed`` section plus env overrides."""

    defaults = EmbedConfig()
    values = {
        "api_base": raw.get("api_base", defaults.api_base),
        "model_page_base": raw.get("model_page_base", defaults.model_page_base),
        "home_base": raw.get("home_base", defaults.home_base),
    }
    for env_name, key in ENV_OVERRIDES.items():
        override = os.getenv(env_name)
        if override:
            values[key] = override

    return EmbedConfig(
        api_base=str(values["api_base"]),
        model_page_base=str(values["model_page_base"]),
        home_base=str(values["home_base"]),
        width=_positive_int(raw.get("width", defaults.width), "embed.width"),
        height=_positive_int(raw.get("height", defaults.height), "embed.height"),
        site_name=str(raw.get("site_name", defaults.site_name)),
        description_template=_validate_template(
            str(raw.get("description_template", defaults.description_template))
        ),
    )


def load_settings(path: Optional[str] = None) -> Settings:
    """Load settings from ``path`` (or the default config.json) and the environment."""

    load_dotenv()
    config = load_json_config(path or CONFIG_PATH)

    http = config.get("http", {})
    timeout = os.getenv("SKETCHFAB_HTTP_TIMEOUT") or http.get("timeout", DEFAULT_TIMEOUT)

    return Settings(
        embed=build_embed_config(config.get("embed", {})),
        http_timeout=_positive_float(timeout, "http.timeout"),
        user_agent=str(http.get("user_agent", DEFAULT_USER_AGENT)),
        logging=config.get("logging", {}),
    )
