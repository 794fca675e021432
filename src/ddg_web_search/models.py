"""Data models for search results, extracted content and scraper options."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SearchResult(BaseModel):
    """A single web search result."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Title of the search result")
    url: str = Field(description="Absolute http(s) URL of the result")
    snippet: str = Field(default="", description="Text snippet from the result")
    icon: str = Field(default="", description="Optional favicon URL")

    def __str__(self) -> str:
        """Human-readable string representation."""
        return f"{self.title}\n{self.url}\n{self.snippet[:100]}..."


class PageMetadata(BaseModel):
    """Metadata read from a page's <head>."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    description: str | None = None
    url: str | None = None
    author: str | None = None
    publish_date: str | None = Field(default=None, alias="publishDate")


class WebContent(BaseModel):
    """Markdown content extracted from a web page."""

    content: str = Field(description="Markdown rendering of the page (may be empty)")
    metadata: PageMetadata | None = Field(
        default=None,
        description="Page metadata, present when metadata extraction is enabled",
    )


class FetchResult(BaseModel):
    """Outcome of a fetch: data on success, an error message otherwise."""

    success: bool
    data: WebContent | None = None
    error: str | None = None

    @model_validator(mode="after")
    def check_outcome(self) -> "FetchResult":
        """Keep ``data`` and ``error`` consistent with ``success``."""
        if self.success and (self.data is None or self.error is not None):
            raise ValueError("a successful FetchResult carries data and no error")
        if not self.success and (self.error is None or self.data is not None):
            raise ValueError("a failed FetchResult carries an error and no data")
        return self

    @classmethod
    def ok(cls, data: WebContent) -> "FetchResult":
        """Create a successful result."""
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "FetchResult":
        """Create a failed result."""
        return cls(success=False, error=error)


class ScraperSelectors(BaseModel):
    """CSS selectors that adjust what the scraper keeps."""

    model_config = ConfigDict(frozen=True)

    remove: tuple[str, ...] = Field(
        default=(),
        description="Extra selectors removed together with the built-in denylist",
    )
    focus: str | None = Field(
        default=None,
        description="Selector of the content root; auto-detected when empty",
    )


class ScraperOptions(BaseModel):
    """Options for converting a page to Markdown."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    include_metadata: bool = True
    include_links: bool = True
    clean_whitespace: bool = True
    selectors: ScraperSelectors = Field(default_factory=ScraperSelectors)


class RateLimiterStatus(BaseModel):
    """Read-only snapshot of a rate limiter."""

    requests: int
    limit: int
    interval: int = Field(description="Window length in milliseconds")
