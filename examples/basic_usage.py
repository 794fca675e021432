"""Demo script: search the web, then fetch the first result."""

import asyncio

from ddg_web_search import WebContentFetcher, WebSearcher


async def demo():
    """Search for a topic and preview the top page."""
    async with WebSearcher() as searcher:
        fetcher = WebContentFetcher()
        try:
            results = await searcher.search("Python asyncio tutorial")

            if not results:
                print("No search results found.")
                return

            print("Search Results:")
            print("=" * 50)
            for index, result in enumerate(results, start=1):
                print(f"{index:2d}. {result.title}\n    {result.url}")

            fetch_result = await fetcher.fetch(results[0].url)
            if fetch_result.success:
                content = fetch_result.data.content
                print(f"\nContent Length: {len(content)}")
                print(f"Content Preview:\n{content[:200]}...")
            else:
                print(f"Error: {fetch_result.error}")
        finally:
            await fetcher.aclose()


if __name__ == "__main__":
    asyncio.run(demo())
