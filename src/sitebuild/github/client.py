"""Async GitHub REST client with retries and Link header pagination."""

import asyncio
import logging
import re
import time
from collections.abc import AsyncIterator
from typing import Any

import httpx

from sitebuild import __version__
from sitebuild.github.auth import GitHubAuth

logger = logging.getLogger(__name__)

LINK_PART = re.compile(r'<([^>]+)>;\s*rel="([^"]+)"')


class GitHubHTTPError(Exception):
    """Raised when a GitHub request fails after retries."""


def parse_link_header(link_header: str | None) -> dict[str, str]:
    """Parse a Link header into a rel -> URL mapping."""
    if not link_header:
        return {}

    links = {}
    for part in link_header.split(","):
        match = LINK_PART.match(part.strip())
        if match:
            url, rel = match.groups()
            links[rel] = url
    return links


class GitHubClient:
    """Async HTTP client for the GitHub REST API.

    Retries server errors, timeouts and network errors with exponential
    backoff. Rate limited responses (429, or 403 with an exhausted quota)
    wait for Retry-After or the quota reset, up to MAX_RATE_LIMIT_WAIT.
    Requests are issued one at a time.
    """

    BASE_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 30.0
    DEFAULT_MAX_RETRIES = 3
    INITIAL_BACKOFF = 1.0
    BACKOFF_MULTIPLIER = 2.0
    MAX_RATE_LIMIT_WAIT = 300.0

    def __init__(
        self,
        auth: GitHubAuth,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_url: str = BASE_URL,
    ) -> None:
        """Initialize client.

        Args:
            auth: Token holder, possibly anonymous.
            timeout: Request timeout in seconds.
            max_retries: Maximum retries per request.
            base_url: API root.
        """
        self._auth = auth
        self._timeout = timeout
        self._max_retries = max_retries
        self._base_url = base_url.rstrip("/")
        self._client: httpx.AsyncClient | None = None

    def _get_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": f"sitebuild/{__version__}",
        }
        headers.update(self._auth.get_authorization_header())
        return headers

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=self._get_headers(),
                follow_redirects=True,
            )
        return self._client

    def _is_rate_limited(self, response: httpx.Response) -> bool:
        if response.status_code == 429:
            return True
        return response.status_code == 403 and (
            response.headers.get("x-ratelimit-remaining") == "0"
            or "retry-after" in response.headers
        )

    def _rate_limit_wait(self, response: httpx.Response, retry_count: int) -> float | None:
        """Seconds to wait before retrying a rate limited request.

        Uses ``Retry-After`` when present, else the ``x-ratelimit-reset``
        time, else exponential backoff. None means the wait would exceed
        MAX_RATE_LIMIT_WAIT and the request should fail instead.
        """
        wait_seconds = self.INITIAL_BACKOFF * (self.BACKOFF_MULTIPLIER**retry_count)
        try:
            if "retry-after" in response.headers:
                wait_seconds = float(response.headers["retry-after"])
            elif "x-ratelimit-reset" in response.headers:
                reset = int(response.headers["x-ratelimit-reset"])
                wait_seconds = max(reset - time.time(), 0.0) + 1
        except ValueError:
            logger.debug("Unparsable rate limit headers, using backoff")

        if wait_seconds > self.MAX_RATE_LIMIT_WAIT:
            return None
        return wait_seconds

    async def _backoff(self, retry_count: int, method: str, url: str) -> None:
        wait_seconds = self.INITIAL_BACKOFF * (self.BACKOFF_MULTIPLIER**retry_count)
        logger.debug(
            "Retry %d/%d for %s %s after %.1fs",
            retry_count + 1,
            self._max_retries,
            method,
            url,
            wait_seconds,
        )
        await asyncio.sleep(wait_seconds)

    async def request(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request, retrying transient failures.

        Args:
            method: HTTP method.
            url: API path or absolute URL (pagination links are absolute).
            **kwargs: Passed to httpx (params, json, ...).

        Returns:
            Successful or 404 response.

        Raises:
            GitHubHTTPError: On other 4xx responses or after exhausting retries.
        """
        client = self._ensure_client()

        for retry_count in range(self._max_retries + 1):
            logger.debug("%s %s (attempt %d)", method, url, retry_count + 1)
            try:
                response = await client.request(method, url, **kwargs)
            except (httpx.TimeoutException, httpx.NetworkError) as e:
                logger.warning("Request error for %s %s: %s", method, url, e)
                if retry_count >= self._max_retries:
                    raise GitHubHTTPError(f"Request failed for {method} {url}: {e}") from e
                await self._backoff(retry_count, method, url)
                continue

            if self._is_rate_limited(response):
                wait_seconds = self._rate_limit_wait(response, retry_count)
                if wait_seconds is None or retry_count >= self._max_retries:
                    reset = response.headers.get("x-ratelimit-reset", "unknown")
                    raise GitHubHTTPError(
                        f"GitHub rate limit exceeded for {method} {url} "
                        f"(status {response.status_code}, reset at {reset}). "
                        "Set a token to raise the limit."
                    )
                logger.warning(
                    "Rate limited (%d) for %s %s, retrying in %.0fs",
                    response.status_code,
                    method,
                    url,
                    wait_seconds,
                )
                await asyncio.sleep(wait_seconds)
                continue

            if 500 <= response.status_code < 600:
                logger.warning("Server error %d for %s %s", response.status_code, method, url)
                if retry_count >= self._max_retries:
                    break
                await self._backoff(retry_count, method, url)
                continue

            if 400 <= response.status_code < 500 and response.status_code != 404:
                raise GitHubHTTPError(
                    f"GitHub returned {response.status_code} for {method} {url}: {response.text}"
                )

            return response

        raise GitHubHTTPError(f"Max retries ({self._max_retries}) exceeded for {method} {url}")

    async def paginate(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> AsyncIterator[list[Any]]:
        """Yield the items of each page, following ``rel="next"`` links.

        A 404 on the first page yields nothing.
        """
        url: str | None = path
        page_params = params
        page_num = 1

        while url:
            response = await self.request("GET", url, params=page_params)
            if response.status_code == 404:
                logger.debug("Resource not found (404): %s", url)
                return

            data = response.json()
            yield data if isinstance(data, list) else [data]

            url = parse_link_header(response.headers.get("link")).get("next")
            # the next link already carries the query string
            page_params = None
            page_num += 1
            if url:
                logger.debug("Following pagination to page %d", page_num)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GitHubClient":
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
