"""HTML to Markdown extraction tuned for LLM consumption.

The pipeline removes boilerplate, reads page metadata, picks the main
content subtree and renders it as Markdown with ATX headings and fenced
code blocks.
"""

import re

import httpx
from bs4 import BeautifulSoup, Tag
from markdownify import ATX, markdownify

from ddg_web_search.logging import get_logger
from ddg_web_search.models import PageMetadata, ScraperOptions, WebContent

logger = get_logger("ddg_web_search.fetcher.scraper")

DEFAULT_REMOVE_SELECTORS: tuple[str, ...] = (
    "script",
    "style",
    "noscript",
    "iframe",
    "svg",
    "nav",
    "footer",
    'header[role="banner"]',
    '[role="navigation"]',
    '[role="complementary"]',
    ".advertisement",
    ".ad",
    ".sidebar",
    ".cookie-banner",
    "#cookie-notice",
)

# Probed in order when no focus selector is given
MAIN_CONTENT_SELECTORS: tuple[str, ...] = (
    "main",
    "article",
    '[role="main"]',
    "#content",
    ".content",
)

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


class FetchError(Exception):
    """Raised when a page cannot be downloaded."""

    pass


def scrape_web_page(
    html: str,
    url: str | None = None,
    options: ScraperOptions | None = None,
) -> WebContent:
    """Convert an HTML document to Markdown content and metadata.

    Args:
        html: Raw HTML (malformed markup is repaired by the parser)
        url: Page URL; preferred over og:url for the metadata url
        options: Scraper options (defaults apply when None)

    Returns:
        WebContent: Markdown content and, if enabled, page metadata
    """
    options = options or ScraperOptions()
    soup = BeautifulSoup(html or "", "lxml")

    for selector in (*DEFAULT_REMOVE_SELECTORS, *options.selectors.remove):
        for element in soup.select(selector):
            element.decompose()

    metadata = extract_metadata(soup, url) if options.include_metadata else None

    root = _find_content_root(soup, options.selectors.focus)

    if root is not None and not options.include_links:
        for anchor in root.find_all("a"):
            anchor.replace_with(anchor.get_text())

    inner_html = root.decode_contents() if root is not None else ""
    markdown = markdownify(
        inner_html,
        heading_style=ATX,
        bullets="-",
    ).strip()

    if options.clean_whitespace:
        markdown = clean_markdown(markdown)

    content = _compose(markdown, metadata)
    logger.debug(
        "Scraped page",
        url=url,
        html_chars=len(html or ""),
        content_chars=len(content),
    )
    return WebContent(content=content, metadata=metadata)


def extract_metadata(soup: BeautifulSoup, url: str | None = None) -> PageMetadata:
    """Read title, description, url, author and publish date.

    Each field takes the first non-empty source in a fixed order:
    title from <title> then og:title, description from the description meta
    then og:description, url from the argument then og:url, author from the
    author meta then article:author, publish date from
    article:published_time then the first <time datetime>.
    """
    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag is not None else ""

    time_tag = soup.select_one("time[datetime]")

    return PageMetadata(
        title=title or _meta(soup, prop="og:title"),
        description=_meta(soup, name="description") or _meta(soup, prop="og:description"),
        url=url or _meta(soup, prop="og:url"),
        author=_meta(soup, name="author") or _meta(soup, prop="article:author"),
        publish_date=(
            _meta(soup, prop="article:published_time")
            or (_attr(time_tag, "datetime") if time_tag is not None else None)
        ),
    )


def clean_markdown(markdown: str) -> str:
    """Trim every line, drop blank lines and separate the rest by one blank line."""
    lines = [line.strip() for line in markdown.split("\n")]
    text = "\n\n".join(line for line in lines if line)
    return _EXCESS_NEWLINES.sub("\n\n", text)


def _meta(soup: BeautifulSoup, *, name: str | None = None, prop: str | None = None) -> str | None:
    if name is not None:
        tag = soup.select_one(f'meta[name="{name}"]')
    else:
        tag = soup.select_one(f'meta[property="{prop}"]')
    return _attr(tag, "content") if tag is not None else None


def _attr(tag: Tag, attribute: str) -> str | None:
    value = tag.get(attribute)
    if isinstance(value, list):
        value = " ".join(value)
    return value or None


def _find_content_root(soup: BeautifulSoup, focus: str | None) -> Tag | None:
    if focus:
        return soup.select_one(focus)

    for selector in MAIN_CONTENT_SELECTORS:
        match = soup.select_one(selector)
        if match is not None:
            return match

    return soup.body or soup


def _compose(markdown: str, metadata: PageMetadata | None) -> str:
    parts: list[str] = []

    if metadata is not None:
        if metadata.title:
            parts.append(f"# {metadata.title}\n\n")
        if metadata.url:
            parts.append(f"Source: {metadata.url}\n\n")
        if metadata.author:
            parts.append(f"Author: {metadata.author}\n\n")
        if metadata.publish_date:
            parts.append(f"Published: {metadata.publish_date}\n\n")
        if metadata.description:
            parts.append(f"{metadata.description}\n\n---\n\n")

    parts.append(markdown)
    return "".join(parts)


async def fetch_and_scrape(
    url: str,
    options: ScraperOptions | None = None,
    client: httpx.AsyncClient | None = None,
) -> WebContent:
    """Download a page and convert it to Markdown.

    Args:
        url: Page URL
        options: Scraper options
        client: Optional httpx client to reuse

    Returns:
        WebContent: Extracted content

    Raises:
        FetchError: If the server answers with a non-2xx status
        httpx.RequestError: If the request itself fails
    """
    if client is None:
        async with httpx.AsyncClient(follow_redirects=True) as own_client:
            response = await own_client.get(url)
    else:
        response = await client.get(url)

    if not response.is_success:
        raise FetchError(
            f"Failed to fetch {url}: {response.status_code} {response.reason_phrase}"
        )

    return scrape_web_page(response.text, url, options)
