"""Shared utilities: rate limiting, HTTP access and URL checks."""

from ddg_web_search.utils.http_client import HttpClient
from ddg_web_search.utils.rate_limiter import RateLimiter
from ddg_web_search.utils.urls import is_valid_url

__all__ = ["HttpClient", "RateLimiter", "is_valid_url"]
