import asyncio
import time
from typing import Dict, Optional

import aiohttp
from loguru import logger

from blogseo.core.config import settings
from blogseo.core.exceptions import FetchError
from blogseo.schemas.audit import DocumentSnapshot


class PageFetcher:
    """Fetches a page once and records what the auditor needs about it."""

    def __init__(
        self,
        user_agent: Optional[str] = None,
        timeout: Optional[int] = None,
        max_retries: Optional[int] = None,
    ):
        self.user_agent = user_agent or settings.AUDIT_USER_AGENT
        self.timeout = timeout or settings.AUDIT_TIMEOUT
        self.max_retries = (
            max_retries if max_retries is not None else settings.AUDIT_MAX_RETRIES
        )

    async def fetch(
        self, url: str, headers: Optional[Dict[str, str]] = None
    ) -> DocumentSnapshot:
        """
        Fetch a URL and measure its load time.

        Args:
            url: URL to fetch
            headers: Extra request headers

        Returns:
            DocumentSnapshot with HTML, lower-cased response headers,
            status code and wall-clock load time in milliseconds

        Raises:
            FetchError: if the page cannot be fetched after all retries
        """
        request_headers = {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        }
        if headers:
            request_headers.update(headers)

        return await self._fetch_url(url, request_headers)

    async def _fetch_url(
        self, url: str, headers: Dict[str, str], retry_count: int = 0
    ) -> DocumentSnapshot:
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            start_time = time.monotonic()
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(
                    url, headers=headers, allow_redirects=True
                ) as response:
                    html = await response.text(errors="replace")
                    load_time_ms = int((time.monotonic() - start_time) * 1000)

                    if response.status >= 500 and retry_count < self.max_retries:
                        # Server error, retry with backoff
                        await asyncio.sleep(2**retry_count)
                        return await self._fetch_url(url, headers, retry_count + 1)

                    if response.status >= 400:
                        logger.warning(f"Fetched {url} with HTTP {response.status}")

                    return DocumentSnapshot(
                        url=url,
                        html=html,
                        response_headers={
                            key.lower(): value for key, value in response.headers.items()
                        },
                        load_time_ms=load_time_ms,
                        status_code=response.status,
                    )

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            if retry_count < self.max_retries:
                wait_time = 2**retry_count
                logger.info(
                    f"Retrying {url} in {wait_time} seconds (attempt {retry_count + 1})"
                )
                await asyncio.sleep(wait_time)
                return await self._fetch_url(url, headers, retry_count + 1)

            logger.error(
                f"Failed to fetch {url} after {self.max_retries} retries: {str(e)}"
            )
            raise FetchError(url, str(e) or e.__class__.__name__) from e
