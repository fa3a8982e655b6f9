"""Model metadata lookup and decoding (core domain)."""

from __future__ import annotations

import json
import logging
from typing import Any

from sketchfab_embed.core.config import EmbedConfig
from sketchfab_embed.core.errors import MetadataDecodeError, MetadataFetchError
from sketchfab_embed.core.models import ModelMetadata
from sketchfab_embed.core.ports import HttpClientPort

LOGGER = logging.getLogger(__name__)


def metadata_url(config: EmbedConfig, model_id: str) -> str:
    return f"{config.api_base.rstrip('/')}/{model_id}"


def _require_str(payload: dict, key: str, label: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise MetadataDecodeError(f"Missing or invalid field: {label}")
    return value


def decode_metadata(body: str) -> ModelMetadata:
    """Decode an API response body into ModelMetadata.

    Only ``name`` and ``user.displayName`` are required; everything else in
    the payload is ignored.
    """

    try:
        payload: Any = json.loads(body)
    except ValueError as exc:
        raise MetadataDecodeError(f"Invalid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise MetadataDecodeError("Metadata payload is not a JSON object")

    user = payload.get("user")
    if not isinstance(user, dict):
        raise MetadataDecodeError("Missing or invalid field: user")

    return ModelMetadata(
        name=_require_str(payload, "name", "name"),
        author_display_name=_require_str(user, "displayName", "user.displayName"),
    )


def fetch_metadata(http_client: HttpClientPort, config: EmbedConfig, model_id: str) -> ModelMetadata:
    """Fetch and decode metadata for one model, raising MetadataError on failure."""

    url = metadata_url(config, model_id)
    LOGGER.debug("Fetching metadata for %s from %s", model_id, url)
    body = http_client.get_text(url)
    if not body:
        raise MetadataFetchError(f"Empty metadata response for {model_id}")
    return decode_metadata(body)
