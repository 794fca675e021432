"""Tests for HTML to Markdown extraction."""

import httpx
import pytest

from ddg_web_search.fetcher.scraper import (
    FetchError,
    clean_markdown,
    fetch_and_scrape,
    scrape_web_page,
)
from ddg_web_search.models import PageMetadata, ScraperOptions, ScraperSelectors


class TestScrapeWebPage:
    """Test scrape_web_page()."""

    def test_empty_html(self):
        """Test that empty input yields empty content."""
        result = scrape_web_page("")

        assert result.content == ""
        assert result.metadata == PageMetadata()

    def test_metadata_precedence(self, article_html):
        """Test that non-OG tags win over their OG duplicates."""
        result = scrape_web_page(article_html, "https://example.com/article")

        assert result.metadata == PageMetadata(
            title="Test Article",
            description="A page about testing",
            url="https://example.com/article",
            author="Jane Doe",
            publish_date="2024-01-15",
        )

    def test_metadata_og_fallbacks(self):
        """Test that OG tags and <time> are used when primary tags are absent."""
        html = """
        <html><head>
          <title>   </title>
          <meta property="og:title" content="OG Title">
          <meta property="og:description" content="OG description">
          <meta property="og:url" content="https://example.com/og">
          <meta property="article:author" content="OG Author">
        </head><body>
          <p>Body</p>
          <time datetime="2023-05-01T10:00:00Z">May 1</time>
          <time datetime="2022-01-01">Older</time>
        </body></html>
        """
        metadata = scrape_web_page(html).metadata

        assert metadata.title == "OG Title"
        assert metadata.description == "OG description"
        assert metadata.url == "https://example.com/og"
        assert metadata.author == "OG Author"
        assert metadata.publish_date == "2023-05-01T10:00:00Z"

    def test_metadata_alias(self, article_html):
        """Test that the publish date serializes as publishDate."""
        dumped = scrape_web_page(article_html).metadata.model_dump(by_alias=True)
        assert dumped["publishDate"] == "2024-01-15"

    def test_header_composition(self, article_html):
        """Test the title, source, author, date and description header."""
        result = scrape_web_page(article_html, "https://example.com/article")

        assert result.content.startswith(
            "# Test Article\n\n"
            "Source: https://example.com/article\n\n"
            "Author: Jane Doe\n\n"
            "Published: 2024-01-15\n\n"
            "A page about testing\n\n---\n\n"
        )

    def test_removes_boilerplate(self, article_html):
        """Test that nav, footer, script and sidebar text is dropped."""
        content = scrape_web_page(article_html).content

        assert "Navigation links" not in content
        assert "Footer text" not in content
        assert "tracking" not in content
        assert "Sidebar widget" not in content
        assert "## Main Heading" in content
        assert "Real content paragraph" in content

    def test_removes_boilerplate_without_main(self):
        """Test removal when the body is the content root."""
        html = """
        <html><body>
          <nav>Menu</nav>
          <div class="ad">Buy now</div>
          <div id="cookie-notice">We use cookies</div>
          <aside role="complementary">Related</aside>
          <p>Body text</p>
          <footer>Copyright</footer>
        </body></html>
        """
        content = scrape_web_page(html, options=ScraperOptions(include_metadata=False)).content

        assert content == "Body text"

    def test_custom_remove_selectors(self):
        """Test that caller selectors are removed with the defaults."""
        html = '<html><body><main><p>Keep me</p><div class="promo">Promo</div></main></body></html>'
        options = ScraperOptions(selectors=ScraperSelectors(remove=(".promo",)))

        content = scrape_web_page(html, options=options).content

        assert "Keep me" in content
        assert "Promo" not in content

    def test_focus_selector(self):
        """Test that only the focused element is rendered."""
        html = """
        <html><body>
          <div>Outside text</div>
          <main><p>Inside text</p></main>
        </body></html>
        """
        options = ScraperOptions(selectors=ScraperSelectors(focus="main"))

        content = scrape_web_page(html, options=options).content

        assert "Inside text" in content
        assert "Outside text" not in content

    def test_focus_selector_without_match(self):
        """Test that a focus selector matching nothing gives no body."""
        options = ScraperOptions(
            include_metadata=False,
            selectors=ScraperSelectors(focus="#missing"),
        )
        result = scrape_web_page("<html><body><p>Text</p></body></html>", options=options)

        assert result.content == ""
        assert result.metadata is None

    def test_main_content_probe_order(self):
        """Test that <main> is preferred over other content containers."""
        html = """
        <html><body>
          <article><p>Article text</p></article>
          <main><p>Main text</p></main>
        </body></html>
        """
        content = scrape_web_page(html).content

        assert "Main text" in content
        assert "Article text" not in content

    def test_links_preserved_by_default(self, article_html):
        """Test that anchors become Markdown links."""
        content = scrape_web_page(article_html).content
        assert "[useful link](https://example.com/link)" in content

    def test_links_removed(self, article_html):
        """Test that include_links=False keeps only the anchor text."""
        options = ScraperOptions(include_links=False)

        content = scrape_web_page(article_html, options=options).content

        assert "useful link" in content
        assert "](" not in content
        assert "https://example.com/link" not in content

    def test_without_metadata(self, article_html):
        """Test that disabling metadata drops the header."""
        result = scrape_web_page(article_html, options=ScraperOptions(include_metadata=False))

        assert result.metadata is None
        assert result.content.startswith("## Main Heading")

    def test_whitespace_cleaning(self):
        """Test that lines are separated by exactly one blank line."""
        html = "<html><body><ul><li>One</li><li>Two</li></ul></body></html>"

        cleaned = scrape_web_page(html).content
        raw = scrape_web_page(html, options=ScraperOptions(clean_whitespace=False)).content

        assert cleaned == "- One\n\n- Two"
        assert "- One\n- Two" in raw

    def test_code_blocks_are_fenced(self):
        """Test that <pre> blocks render as fenced code."""
        html = '<html><body><pre><code>print("hi")</code></pre></body></html>'

        content = scrape_web_page(html).content

        assert "```" in content
        assert 'print("hi")' in content

    def test_malformed_html(self):
        """Test that unclosed tags are repaired."""
        content = scrape_web_page("<p>Unclosed <b>bold").content
        assert "Unclosed **bold**" in content

    def test_long_content_not_truncated(self):
        """Test that the scraper never truncates."""
        text = "word " * 5000
        content = scrape_web_page(f"<html><body><p>{text}</p></body></html>").content

        assert len(content) >= len(text.strip())


class TestCleanMarkdown:
    """Test clean_markdown()."""

    def test_trims_and_collapses(self):
        """Test trimming, blank line removal and newline collapsing."""
        assert clean_markdown("  a  \n\n\n\n  b\n   \nc  ") == "a\n\nb\n\nc"

    def test_empty(self):
        """Test that empty input stays empty."""
        assert clean_markdown("") == ""


class TestFetchAndScrape:
    """Test fetch_and_scrape()."""

    @pytest.mark.asyncio
    async def test_success(self, article_html):
        """Test that the page is downloaded and scraped with its URL."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, html=article_html)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            result = await fetch_and_scrape("https://example.com/article", client=client)

        assert result.metadata.url == "https://example.com/article"
        assert "Real content paragraph" in result.content

    @pytest.mark.asyncio
    async def test_error_status(self):
        """Test that a non-2xx status raises FetchError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="boom")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(FetchError, match="500 Internal Server Error"):
                await fetch_and_scrape("https://example.com/broken", client=client)

    @pytest.mark.asyncio
    async def test_network_error_propagates(self):
        """Test that request errors are not wrapped."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(httpx.ConnectError):
                await fetch_and_scrape("https://example.com", client=client)
