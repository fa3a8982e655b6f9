"""Values passed between the matcher, the metadata lookup and the renderer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MatchRecord:
    """A single model link found in the scanned text."""

    original_text: str
    model_id: str
    link_text: str
    start: int
    end: int


@dataclass(frozen=True)
class ModelMetadata:
    """The subset of the model API payload needed for attribution."""

    name: str
    author_display_name: str
