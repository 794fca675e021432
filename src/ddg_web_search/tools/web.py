"""MCP tools for web search and web content fetching."""

from typing import Any

from pydantic import BaseModel, Field

from ddg_web_search.fetcher.web_content import WebContentFetcher
from ddg_web_search.logging import get_logger
from ddg_web_search.searcher.web_searcher import WebSearcher
from ddg_web_search.tools.base import BaseTool, ToolError
from ddg_web_search.ui.formatters import format_search_results, truncate_content
from ddg_web_search.utils.urls import is_valid_url

logger = get_logger("ddg_web_search.tools.web")

DEFAULT_MAX_CONTENT_LENGTH = 10000


class SearchParams(BaseModel):
    """Input for SearchTool."""

    query: str = Field(
        min_length=1,
        description="The search query to execute on DuckDuckGo",
    )


class SearchTool(BaseTool[SearchParams]):
    """Search the web and return a numbered Markdown list of results."""

    name = "search"
    description = (
        "Search the web using DuckDuckGo with browser automation. "
        "Returns a list of search results with titles, URLs, and snippets."
    )
    parameters_schema = SearchParams

    def __init__(self, searcher: WebSearcher):
        """Initialize the search tool.

        Args:
            searcher: Searcher shared with the rest of the server
        """
        super().__init__()
        self.searcher = searcher

    def parse_arguments(self, arguments: dict[str, Any] | None) -> SearchParams:
        query = (arguments or {}).get("query")
        if not query or not isinstance(query, str):
            raise ToolError("Missing or invalid query parameter")

        query = query.strip()
        if not query:
            raise ToolError("Query cannot be empty")

        return SearchParams(query=query)

    async def execute(self, params: SearchParams) -> str:
        try:
            results = await self.searcher.search(params.query)
        except Exception as e:
            logger.error("Web search failed", query=params.query, error=str(e))
            raise ToolError(f"Web search failed: {str(e) or 'Search failed'}") from e

        return format_search_results(params.query, results)


class FetchWebContentParams(BaseModel):
    """Input for FetchWebContentTool."""

    url: str = Field(
        description="The URL to fetch content from",
        json_schema_extra={"format": "uri"},
    )


class FetchWebContentTool(BaseTool[FetchWebContentParams]):
    """Fetch a page and return its content as Markdown."""

    name = "fetch_web_content"
    description = (
        "Fetch and parse content from a web URL. "
        "Returns the text content of the webpage."
    )
    parameters_schema = FetchWebContentParams

    def __init__(
        self,
        fetcher: WebContentFetcher,
        max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH,
    ):
        """Initialize the fetch tool.

        Args:
            fetcher: Fetcher shared with the rest of the server
            max_content_length: Characters of content returned before truncation
        """
        super().__init__()
        self.fetcher = fetcher
        self.max_content_length = max_content_length

    def parse_arguments(self, arguments: dict[str, Any] | None) -> FetchWebContentParams:
        url = (arguments or {}).get("url")
        if not url or not isinstance(url, str):
            raise ToolError("Missing or invalid URL parameter")

        url = url.strip()
        if not url:
            raise ToolError("URL cannot be empty")

        if not is_valid_url(url):
            raise ToolError("Invalid URL format")

        return FetchWebContentParams(url=url)

    async def execute(self, params: FetchWebContentParams) -> str:
        url = params.url
        try:
            result = await self.fetcher.fetch(url)
            if not result.success:
                raise ToolError(result.error or "Failed to fetch content")
        except Exception as e:
            logger.error("Web content fetch failed", url=url, error=str(e))
            raise ToolError(f"Web content fetch failed: {str(e) or 'Fetch failed'}") from e

        if result.data is None or not result.data.content:
            return (
                f"Successfully fetched content from {url}, "
                "but no text content was extracted."
            )

        content = truncate_content(result.data.content, self.max_content_length)
        return f"Content from {url}:\n\n{content}"
