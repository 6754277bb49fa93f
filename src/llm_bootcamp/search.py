"""Web search client for research agents.

Talks to the Tavily search API over ``httpx`` and maps HTTP failures onto the
same error hierarchy the model providers use, so an agent's tool error
handling does not care which service failed.
"""

import time
from dataclasses import dataclass
from typing import Any

import httpx
from langchain_core.tools import StructuredTool, ToolException

from llm_bootcamp.core.config import get_settings
from llm_bootcamp.core.errors import (
    AuthenticationError,
    BootcampError,
    ConfigurationError,
    ProviderError,
    RateLimitError,
    ServiceUnavailableError,
    TimeoutError,
)
from llm_bootcamp.core.logging import get_logger
from llm_bootcamp.core.retry import retry_with_backoff

logger = get_logger(__name__)

PROVIDER = "tavily"
DEFAULT_BASE_URL = "https://api.tavily.com"


@dataclass
class SearchResult:
    """One web search hit."""

    title: str
    url: str
    content: str
    score: float = 0.0


class WebSearchClient:
    """Client for the web search API."""

    def __init__(
        self,
        api_key: str | None = None,
        max_results: int | None = None,
        timeout: float | None = None,
        base_url: str = DEFAULT_BASE_URL,
        max_retries: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Search API key. Defaults to TAVILY_API_KEY.
            max_results: Results per query. Defaults to the configured value.
            timeout: Request timeout in seconds.
            base_url: API root.
            max_retries: Retries for rate limits, timeouts and 5xx responses.
            transport: Custom httpx transport, mostly for tests.

        Raises:
            ConfigurationError: If no API key is available.
        """
        settings = get_settings()
        self.api_key = api_key or settings.tavily_key
        if not self.api_key:
            raise ConfigurationError(
                "Web search API key not found. Set TAVILY_API_KEY environment variable.",
                {"provider": PROVIDER},
            )
        self.max_results = max_results or settings.search_max_results
        self.client = httpx.Client(
            base_url=base_url,
            timeout=timeout or settings.search_timeout,
            headers={"Authorization": f"Bearer {self.api_key}"},
            transport=transport,
        )
        self._search = retry_with_backoff(max_retries=max_retries)(self._search_once)

    def _raise_for_status(self, response: httpx.Response) -> None:
        status = response.status_code
        if status < 400:
            return
        detail = response.text[:200]
        if status in (401, 403):
            raise AuthenticationError(f"Search authentication failed: {detail}", PROVIDER)
        if status == 429:
            retry_after = response.headers.get("retry-after")
            raise RateLimitError(
                f"Search rate limit exceeded: {detail}",
                PROVIDER,
                retry_after=float(retry_after) if retry_after and retry_after.isdigit() else None,
            )
        if status >= 500:
            raise ServiceUnavailableError(f"Search service error {status}: {detail}", {"provider": PROVIDER})
        raise ProviderError(f"Search request failed with {status}: {detail}", PROVIDER, {"status": status})

    def _search_once(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self.client.post("/search", json=payload)
        except httpx.TimeoutException as e:
            raise TimeoutError(f"Search timed out: {e}", {"provider": PROVIDER}) from e
        except httpx.TransportError as e:
            raise ServiceUnavailableError(f"Search connection failed: {e}", {"provider": PROVIDER}) from e
        self._raise_for_status(response)
        return response.json()

    def search(self, query: str, max_results: int | None = None, topic: str = "general") -> list[SearchResult]:
        """Search the web.

        Args:
            query: Search query.
            max_results: Overrides the client default for this call.
            topic: "general" or "news".

        Returns:
            Results ordered as returned by the API.
        """
        payload = {"query": query, "max_results": max_results or self.max_results, "topic": topic}
        start = time.perf_counter()
        data = self._search(payload)
        results = [
            SearchResult(
                title=item.get("title") or "",
                url=item.get("url") or "",
                content=item.get("content") or "",
                score=float(item.get("score") or 0.0),
            )
            for item in data.get("results") or []
        ]
        logger.info(
            "web_search",
            query=query[:50],
            results=len(results),
            latency_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return results

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "WebSearchClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def create_web_search_tool(client: WebSearchClient | None = None, max_results: int | None = None) -> StructuredTool:
    """Wrap a search client as a LangChain tool named ``web_search``.

    Search failures come back to the model as the tool's text result instead
    of ending the agent run, so it can rephrase or answer without the web.
    """
    search_client = client or WebSearchClient()

    def web_search(query: str) -> list[dict[str, Any]]:
        """Search the web for current information.

        Args:
            query: Search query.
        """
        try:
            results = search_client.search(query, max_results=max_results)
        except BootcampError as e:
            logger.warning("web_search_failed", query=query[:50], error=str(e), error_type=type(e).__name__)
            raise ToolException(f"Web search failed: {e.message}") from e
        return [{"title": r.title, "url": r.url, "content": r.content} for r in results]

    return StructuredTool.from_function(
        func=web_search,
        name="web_search",
        description="Search the web for current information. Input is a search query.",
        handle_tool_error=True,
    )
