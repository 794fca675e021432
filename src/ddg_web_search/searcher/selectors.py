"""Selector cascades and result normalisation for DuckDuckGo result pages.

Result page markup changes without notice, so every lookup is an ordered
list of candidates tried until one matches. Keep the ordering: earlier
entries are the layouts seen most often.
"""

from ddg_web_search.models import SearchResult

SEARCH_ORIGIN = "https://duckduckgo.com"

CAPTCHA_SELECTOR = '.captcha, [id*="captcha"], [class*="captcha"]'

SEARCH_INPUT_SELECTORS: tuple[str, ...] = (
    'input[name="q"]',
    "#search_form_input",
    ".search__input",
)

SUBMIT_SELECTORS: tuple[str, ...] = (
    'button[type="submit"]',
    ".search__button",
    'input[type="submit"]',
)

RESULT_CONTAINER_SELECTORS: tuple[str, ...] = (
    ".result",
    ".web-result",
    "[data-result]",
    ".result__body",
    ".results_links",
    ".result-link",
    ".results .result",
)

GENERIC_CONTAINER_SELECTORS: tuple[str, ...] = (
    "article",
    '[data-testid*="result"]',
    ".snippet",
)

TITLE_SELECTORS: tuple[str, ...] = (
    ".result__title a",
    ".result__a",
    "h2 a",
    "h3 a",
    ".result-title a",
    'a[data-testid="result-title-a"]',
    "a[href]",
    ".titlelink",
    ".result-header a",
)

SNIPPET_SELECTORS: tuple[str, ...] = (
    ".result__snippet",
    ".result-snippet",
    ".snippet",
    ".description",
    '[data-result="snippet"]',
    ".result__body",
    ".summary",
)

# Redirect and tracking endpoints on the search engine itself
BLOCKED_URL_FRAGMENTS: tuple[str, ...] = (
    "duckduckgo.com/y.js",
    "duckduckgo.com/l/?uddg=",
    "javascript:",
)

# Runs in the page. For every container selector with matches it returns the
# raw title, href and snippet of each match; filtering happens in Python.
EXTRACT_RESULTS_SCRIPT = """
({containers, titles, snippets}) => {
  const firstWithText = (element, selectors) => {
    let found = null;
    for (const selector of selectors) {
      found = element.querySelector(selector);
      if (found && found.textContent && found.textContent.trim()) break;
    }
    return found;
  };

  const groups = [];
  for (const selector of containers) {
    const elements = document.querySelectorAll(selector);
    if (elements.length === 0) continue;

    const items = [];
    elements.forEach((element) => {
      const link = firstWithText(element, titles);
      if (!link) return;
      const snippet = firstWithText(element, snippets);
      items.push({
        title: (link.textContent || "").trim(),
        href: link.href || link.getAttribute("href") || "",
        snippet: snippet ? (snippet.textContent || "").trim() : "",
      });
    });
    groups.push({selector, items});
  }
  return groups;
}
"""


def normalize_result_url(url: str, origin: str = SEARCH_ORIGIN) -> str:
    """Make a result link absolute and upgrade it to https.

    Args:
        url: href as found in the page
        origin: Origin used for root-relative links

    Returns:
        str: Normalised URL
    """
    if url.startswith("//"):
        return "https:" + url
    if url.startswith("/"):
        return origin.rstrip("/") + url
    if url.startswith("http://"):
        return "https://" + url[len("http://"):]
    return url


def is_valid_result_url(url: str) -> bool:
    """Check that a normalised URL points at an external http(s) page."""
    if not url or not url.startswith("http"):
        return False
    return not any(fragment in url for fragment in BLOCKED_URL_FRAGMENTS)


def parse_result_groups(
    groups: list[dict],
    origin: str = SEARCH_ORIGIN,
) -> list[SearchResult]:
    """Turn raw extraction groups into results.

    Groups are visited in selector priority order and the first one that
    yields at least one valid result wins; later groups are ignored.

    Args:
        groups: ``[{"selector": str, "items": [{"title", "href", "snippet"}]}]``
        origin: Origin used for root-relative links

    Returns:
        list[SearchResult]: Results of the winning group, or an empty list
    """
    for group in groups:
        results = []
        for item in group.get("items") or []:
            title = (item.get("title") or "").strip()
            url = normalize_result_url(item.get("href") or "", origin)
            if not title or not is_valid_result_url(url):
                continue
            results.append(
                SearchResult(
                    title=title,
                    url=url,
                    snippet=(item.get("snippet") or "").strip(),
                    icon="",
                )
            )
        if results:
            return results
    return []
