"""Text formatting shared by the CLI and the MCP tools."""

from ddg_web_search.models import SearchResult


def format_search_results(query: str, results: list[SearchResult]) -> str:
    """Format results as a numbered Markdown list.

    Args:
        query: The query that produced the results
        results: Search results

    Returns:
        str: Markdown text, or a "no results" sentence
    """
    if not results:
        return f'No search results found for query: "{query}"'

    entries = "\n".join(
        f"{index}. **{result.title}**\n   URL: {result.url}\n   {result.snippet}\n"
        for index, result in enumerate(results, start=1)
    )
    return f'Found {len(results)} search results for "{query}":\n\n{entries}'


def truncate_content(text: str, max_length: int = 10000) -> str:
    """Cut text to ``max_length`` characters and append a truncation notice.

    Args:
        text: Text to truncate
        max_length: Maximum number of characters kept

    Returns:
        str: The text unchanged, or its prefix followed by the notice
    """
    if len(text) <= max_length:
        return text

    return (
        f"{text[:max_length]}...\n\n"
        f"[Content truncated - showing first {max_length} characters]"
    )


def preview_text(text: str, max_length: int = 500) -> str:
    """Return the first ``max_length`` characters, with "..." if cut."""
    if len(text) <= max_length:
        return text

    return text[:max_length] + "..."
