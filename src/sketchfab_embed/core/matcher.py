"""Model link detection (core domain)."""

from __future__ import annotations

import re
from functools import lru_cache
from sketchfab_embed.core.models import MatchRecord

CLOSING_ANCHOR = "</a>"


def target_segment(model_page_base: str) -> str:
    """Return the host + path part of the model page base, without scheme."""

    _, sep, rest = model_page_base.partition("://")
    segment = rest if sep else model_page_base
    return segment.rstrip("/")


@lru_cache(maxsize=8)
def compile_link_pattern(model_page_base: str) -> re.Pattern:
    """Compile the anchor pattern for one model page base.

    The href must be the model page URL itself (http or https); any other
    attributes may follow, and quoted values may contain ">". The inner
    content may span several lines but never crosses another anchor tag,
    so an empty or unclosed anchor does not match.
    """

    segment = re.escape(target_segment(model_page_base))
    return re.compile(
        r"<a\s+href=(?P<quote>[\"'])https?://"
        + segment
        + r"/(?P<model_id>[A-Za-z0-9_]+)(?P=quote)"
        + r"(?:[^>\"']|\"[^\"]*\"|'[^']*')*>"
        + r"(?P<link_text>(?:(?!</?a\b).)+)</a>",
        re.IGNORECASE | re.DOTALL,
    )


def has_candidate_links(text: str, model_page_base: str) -> bool:
    """Cheap pre-check: the text mentions the model pages and closes an anchor."""

    lowered = text.lower()
    if CLOSING_ANCHOR not in lowered:
        return False
    return target_segment(model_page_base).lower() in lowered


def find_model_links(text: str, model_page_base: str) -> list[MatchRecord]:
    """Return every model link in order of appearance.

    Anchors that do not fully match (no closing tag, unexpected characters in
    the model id, another domain) are skipped silently.
    """

    pattern = compile_link_pattern(model_page_base)
    return [
        MatchRecord(
            original_text=match.group(0),
            model_id=match.group("model_id"),
            link_text=match.group("link_text"),
            start=match.start(),
            end=match.end(),
        )
        for match in pattern.finditer(text)
    ]
