"""Brave Search provider for live web search.

Wraps the Brave Web Search API. Used when the server runs in production mode
with a ``BRAVE_API_KEY`` configured.

Brave API documentation: https://api-dashboard.search.brave.com/app/documentation

Example usage:
    provider = BraveWebSearchProvider(api_key="BSA...")
    result = await provider.search("machine learning trends", max_results=5)
"""

import logging
import os
from typing import Any, List, Optional

import httpx

from toolkit_mcp.core.result import Result, fail, ok
from toolkit_mcp.providers.base import SearchResult, WebSearchProvider

logger = logging.getLogger(__name__)

# Brave API constants
BRAVE_API_BASE_URL = "https://api.search.brave.com"
BRAVE_SEARCH_ENDPOINT = "/res/v1/web/search"
BRAVE_MAX_COUNT = 20
BRAVE_SCORE_STEP = 0.1
DEFAULT_TIMEOUT = 30.0


class BraveWebSearchProvider(WebSearchProvider):
    """Brave Web Search API provider.

    Failures are reported as ``Err`` with one of three distinguishable
    messages: transport failure, non-2xx HTTP status, or unparseable body.
    No retry is attempted.

    Attributes:
        api_key: Brave subscription token (required)
        base_url: API base URL (default: https://api.search.brave.com)
        timeout: Request timeout in seconds (default: 30.0)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = BRAVE_API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize Brave search provider.

        Args:
            api_key: Brave API key. If not provided, reads from BRAVE_API_KEY env var.
            base_url: API base URL
            timeout: Request timeout in seconds

        Raises:
            ValueError: If no API key is provided or found in environment
        """
        self._api_key = api_key or os.environ.get("BRAVE_API_KEY")
        if not self._api_key:
            raise ValueError(
                "Brave API key required. Provide via api_key parameter "
                "or BRAVE_API_KEY environment variable."
            )

        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def get_provider_name(self) -> str:
        return "brave"

    async def search(
        self,
        query: str,
        max_results: int = 5,
    ) -> Result[List[SearchResult], str]:
        """Execute a web search via the Brave API.

        Args:
            query: The search query string
            max_results: Maximum number of results to return (clamped to 20)

        Returns:
            ``Ok`` with at most ``max_results`` results, or ``Err`` with a message
        """
        url = f"{self._base_url}{BRAVE_SEARCH_ENDPOINT}"
        params = {"q": query, "count": str(min(max_results, BRAVE_MAX_COUNT))}
        headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip",
            "X-Subscription-Token": self._api_key,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.warning(f"Brave Search request failed: {e}")
            return fail(f"Brave Search fetch failed: {e}")

        if not 200 <= response.status_code < 300:
            logger.warning(f"Brave Search returned HTTP {response.status_code}")
            return fail(f"Brave Search API error: HTTP {response.status_code}")

        try:
            data = response.json()
            results = self._parse_response(data, max_results)
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning(f"Brave Search response could not be parsed: {e}")
            return fail("Failed to parse Brave Search response")

        logger.debug(f"Brave Search returned {len(results)} results")
        return ok(results)

    def _parse_response(
        self,
        data: Any,
        max_results: int,
    ) -> List[SearchResult]:
        """Parse a Brave API response into SearchResult objects.

        A missing ``web`` section or empty result list yields an empty list.
        """
        web = data.get("web") or {}
        raw_results = web.get("results") or []

        return [
            SearchResult(
                title=str(item["title"]),
                url=str(item["url"]),
                snippet=item.get("description") or "",
                score=round(1.0 - i * BRAVE_SCORE_STEP, 2),
            )
            for i, item in enumerate(raw_results[:max_results])
        ]
