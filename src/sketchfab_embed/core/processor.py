"""Core link-to-embed filter.

The filter enforces a strict order:
1) Early exit for empty text or text without candidate links
2) Find every model link, in order of appearance
3) Resolve metadata and render an embed per link
4) Splice embeds into the text by offset, left to right

A link whose metadata cannot be resolved is left exactly as written.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from sketchfab_embed.core.config import EmbedConfig
from sketchfab_embed.core.embed import build_embed
from sketchfab_embed.core.errors import MetadataError
from sketchfab_embed.core.matcher import find_model_links, has_candidate_links
from sketchfab_embed.core.metadata import fetch_metadata
from sketchfab_embed.core.models import MatchRecord
from sketchfab_embed.core.ports import HttpClientPort

LOGGER = logging.getLogger(__name__)


def splice(text: str, replacements: list[tuple[MatchRecord, str]]) -> str:
    """Replace each record's span with its fragment.

    Records must be ordered by position and must not overlap, which is what
    the matcher produces.
    """

    parts: list[str] = []
    cursor = 0
    for record, fragment in replacements:
        parts.append(text[cursor : record.start])
        parts.append(fragment)
        cursor = record.end
    parts.append(text[cursor:])
    return "".join(parts)


class EmbedFilter:
    """Converts Sketchfab model links into inline viewer embeds."""

    def __init__(self, http_client: HttpClientPort, config: Optional[EmbedConfig] = None) -> None:
        self._http_client = http_client
        self._config = config or EmbedConfig()

    @property
    def config(self) -> EmbedConfig:
        return self._config

    def build(self, model_id: str) -> Optional[str]:
        """Return the embed for one model, or None when metadata is unavailable."""

        try:
            metadata = fetch_metadata(self._http_client, self._config, model_id)
        except MetadataError as exc:
            LOGGER.warning("Skipping model %s: %s", model_id, exc)
            return None
        return build_embed(self._config, model_id, metadata)

    def apply(self, text: Any, options: Optional[Mapping[str, Any]] = None) -> Any:
        """Return ``text`` with every resolvable model link replaced.

        ``options`` is accepted for filter-chain compatibility and ignored.
        Never raises: any per-link failure leaves that link unconverted.
        """

        if not isinstance(text, str) or not text:
            return text

        if not has_candidate_links(text, self._config.model_page_base):
            return text

        records = find_model_links(text, self._config.model_page_base)
        if not records:
            return text

        replacements: list[tuple[MatchRecord, str]] = []
        for record in records:
            try:
                fragment = self.build(record.model_id)
            except Exception:
                LOGGER.exception("Unexpected error while embedding model %s", record.model_id)
                continue
            if fragment is not None:
                replacements.append((record, fragment))

        LOGGER.info("Converted %s of %s model links", len(replacements), len(records))
        if not replacements:
            return text
        return splice(text, replacements)
