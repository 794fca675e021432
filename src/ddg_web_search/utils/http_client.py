"""Async HTTP client with a fixed default timeout and error logging."""

from typing import Any

import httpx

from ddg_web_search.logging import get_logger

logger = get_logger("ddg_web_search.utils.http_client")

DEFAULT_TIMEOUT_S = 10.0
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
)


class HttpClient:
    """Thin wrapper around ``httpx.AsyncClient``.

    Responses are decoded by content type: JSON bodies are parsed, textual
    bodies are returned as ``str`` and anything else as ``bytes``. Non-2xx
    responses raise ``httpx.HTTPStatusError``. Every failure is logged and
    re-raised unchanged.

    The underlying connection pool is created on first use. Callers own the
    instance and should close it with ``aclose()`` (or ``async with``).
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_S,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            timeout: Default request timeout in seconds
            headers: Extra default headers
            transport: Optional httpx transport (used by tests)
        """
        self.timeout = timeout
        self.headers = {"User-Agent": DEFAULT_USER_AGENT, **(headers or {})}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self.headers,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def get(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Perform a GET request.

        Args:
            url: URL to request
            params: Query parameters
            headers: Per-request headers
            timeout: Per-request timeout in seconds

        Returns:
            Decoded response body

        Raises:
            httpx.HTTPError: On network failure or non-2xx status
        """
        return await self._request("GET", url, params=params, headers=headers, timeout=timeout)

    async def post(
        self,
        url: str,
        data: Any = None,
        *,
        json: Any = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Perform a POST request.

        Args:
            url: URL to request
            data: Form data or raw body
            json: JSON body (takes precedence over data)
            headers: Per-request headers
            timeout: Per-request timeout in seconds

        Returns:
            Decoded response body

        Raises:
            httpx.HTTPError: On network failure or non-2xx status
        """
        kwargs: dict[str, Any] = {"headers": headers, "timeout": timeout}
        if json is not None:
            kwargs["json"] = json
        elif isinstance(data, (str, bytes)):
            kwargs["content"] = data
        elif data is not None:
            kwargs["data"] = data
        return await self._request("POST", url, **kwargs)

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        if kwargs.get("timeout") is None:
            kwargs.pop("timeout", None)

        try:
            response = await self._get_client().request(method, url, **kwargs)
            response.raise_for_status()
        except Exception as e:
            self._log_error(method, url, e)
            raise

        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        content_type = response.headers.get("content-type", "").lower()
        if "json" in content_type:
            return response.json()
        if not content_type or content_type.startswith("text/") or "xml" in content_type:
            return response.text
        return response.content

    @staticmethod
    def _log_error(method: str, url: str, error: Exception) -> None:
        if isinstance(error, httpx.HTTPStatusError):
            logger.error(
                "HTTP error",
                method=method,
                url=url,
                status=error.response.status_code,
                body=error.response.text[:200],
            )
        elif isinstance(error, httpx.RequestError):
            logger.error("No response received", method=method, url=url, error=str(error))
        else:
            logger.error("Unexpected error", method=method, url=url, error=str(error))

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
