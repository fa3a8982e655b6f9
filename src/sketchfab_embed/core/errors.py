"""Errors raised while resolving model metadata."""

from __future__ import annotations


class MetadataError(Exception):
    """Base class for any failure to obtain usable model metadata."""


class MetadataFetchError(MetadataError):
    """The metadata request failed (transport error, bad status, empty body)."""


class MetadataDecodeError(MetadataError):
    """The metadata response could not be decoded into the expected fields."""
