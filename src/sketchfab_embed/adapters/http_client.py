"""urllib-based HTTP adapter for metadata lookups.

Every transport problem is folded into MetadataFetchError so the core only
ever has to handle one failure type from the network.
"""

from __future__ import annotations

import logging
import urllib.error
import urllib.request

from sketchfab_embed.core.errors import MetadataFetchError

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "sketchfab-embed/0.1"


class UrllibHttpClient:
    """HttpClientPort implementation using blocking urllib requests."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self._timeout = timeout
        self._user_agent = user_agent

    def get_text(self, url: str) -> str:
        """GET ``url`` and return the decoded body of a 200 response."""

        try:
            request = urllib.request.Request(url, method="GET")
            request.add_header("Accept", "application/json")
            request.add_header("User-Agent", self._user_agent)
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                status = response.status
                raw = response.read()
        except urllib.error.HTTPError as e:
            raise MetadataFetchError(f"HTTP {e.code} from {url}") from e
        except urllib.error.URLError as e:
            raise MetadataFetchError(f"Request to {url} failed: {e.reason}") from e
        except (OSError, ValueError) as e:
            # Timeouts surface as OSError; malformed URLs as ValueError.
            raise MetadataFetchError(f"Request to {url} failed: {e}") from e

        if status != 200:
            raise MetadataFetchError(f"HTTP {status} from {url}")
        if not raw:
            raise MetadataFetchError(f"Empty response from {url}")

        LOGGER.debug("Fetched %s bytes from %s", len(raw), url)
        return raw.decode("utf-8", errors="replace")
