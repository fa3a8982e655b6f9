"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for network adapters so that the core can
be reused with different HTTP stacks or with fakes in tests.
"""

from __future__ import annotations

from typing import Protocol


class HttpClientPort(Protocol):
    """HTTP operations required by the core pipeline."""

    def get_text(self, url: str) -> str:
        """Return the body of a successful GET, or raise MetadataFetchError."""
        ...
