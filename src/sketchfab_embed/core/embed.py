"""Embed fragment rendering.

Every value that comes from the model API (name, author) is escaped here
before it reaches markup, so a hostile payload cannot inject tags.
"""

from __future__ import annotations

import html
from typing import Mapping, Optional
from urllib.parse import quote, urlencode

from sketchfab_embed.core.config import EmbedConfig
from sketchfab_embed.core.models import ModelMetadata

EMBED_CLASS = "sketchfab-embed"
DESCRIPTION_CLASS = "sketchfab-embed-desc"


def _format_attributes(attributes: Mapping[str, object]) -> str:
    return "".join(
        f' {name}="{html.escape(str(value), quote=True)}"' for name, value in attributes.items()
    )


def render_tag(name: str, content: str = "", attributes: Optional[Mapping[str, object]] = None) -> str:
    """Render an element; ``content`` is inserted as-is and must already be safe."""

    return f"<{name}{_format_attributes(attributes or {})}>{content}</{name}>"


def render_link(url: str, text: str, attributes: Optional[Mapping[str, object]] = None) -> str:
    """Render an anchor with escaped text that opens in a new browsing context."""

    merged = {"href": url, "target": "_blank"}
    merged.update(attributes or {})
    return render_tag("a", html.escape(text), merged)


def render_div(content: str, css_class: str) -> str:
    return render_tag("div", content, {"class": css_class})


def tracking_query(model_id: str) -> str:
    return urlencode(
        {"utm_source": "oembed", "utm_medium": "embed", "utm_campaign": model_id}
    )


def model_page_url(config: EmbedConfig, model_id: str) -> str:
    return f"{config.model_page_base.rstrip('/')}/{model_id}"


def render_viewer(config: EmbedConfig, model_id: str) -> str:
    """Render the viewer iframe for a model."""

    return render_tag(
        "iframe",
        "",
        {
            "width": config.width,
            "height": config.height,
            "src": f"{model_page_url(config, model_id)}/embed",
            "frameborder": 0,
            "allowfullscreen": "true",
            "mozallowfullscreen": "true",
            "webkitallowfullscreen": "true",
            # Placeholder only; no handler is attached.
            "onmousewheel": "",
        },
    )


def render_description(config: EmbedConfig, model_id: str, metadata: ModelMetadata) -> str:
    """Render the attribution sentence with its three outbound links."""

    query = tracking_query(model_id)
    home = config.home_base.rstrip("/")
    author_path = quote(metadata.author_display_name, safe="")

    model_link = render_link(f"{model_page_url(config, model_id)}?{query}", metadata.name)
    author_link = render_link(f"{home}/{author_path}?{query}", metadata.author_display_name)
    site_link = render_link(f"{home}?{query}", config.site_name)

    sentence = config.description_template.format(
        model=model_link,
        author=author_link,
        site=site_link,
    )
    return render_div(sentence, DESCRIPTION_CLASS)


def build_embed(config: EmbedConfig, model_id: str, metadata: ModelMetadata) -> str:
    """Return the full replacement markup (viewer + attribution) for one link."""

    viewer = render_viewer(config, model_id)
    description = render_description(config, model_id, metadata)
    return render_div(viewer + description, EMBED_CLASS)
