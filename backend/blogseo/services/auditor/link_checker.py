import asyncio
from typing import List, Optional
from urllib.parse import urljoin

import aiohttp
from loguru import logger

from blogseo.core.config import settings

MAX_BROKEN_LINKS = 3


class LinkChecker:
    """Finds suspect links among the internal links of a page."""

    def __init__(self, max_broken: int = MAX_BROKEN_LINKS):
        self.max_broken = min(max_broken, MAX_BROKEN_LINKS)

    async def find_broken(self, links: List[str], base_url: str = "") -> List[str]:
        """
        Return at most ``max_broken`` links that look broken.

        Args:
            links: Internal link hrefs, as written in the page
            base_url: URL of the page, for resolving relative hrefs

        Returns:
            Suspect hrefs in page order
        """
        raise NotImplementedError("Subclasses must implement find_broken method")


class SampledLinkChecker(LinkChecker):
    """
    Placeholder policy that performs no requests: every Nth link, starting
    with the first, is reported as broken.
    """

    def __init__(self, every: Optional[int] = None, max_broken: int = MAX_BROKEN_LINKS):
        super().__init__(max_broken)
        self.every = max(1, every or settings.LINK_CHECK_SAMPLE_EVERY)

    async def find_broken(self, links: List[str], base_url: str = "") -> List[str]:
        sampled = [link for index, link in enumerate(links) if index % self.every == 0]
        return sampled[: self.max_broken]


class HttpLinkChecker(LinkChecker):
    """Checks links with HEAD requests; HTTP >= 400 or a network error is broken."""

    def __init__(
        self,
        timeout: Optional[int] = None,
        concurrency: Optional[int] = None,
        user_agent: Optional[str] = None,
        max_broken: int = MAX_BROKEN_LINKS,
    ):
        super().__init__(max_broken)
        self.timeout = timeout or settings.LINK_CHECK_TIMEOUT
        self.concurrency = concurrency or settings.LINK_CHECK_CONCURRENCY
        self.user_agent = user_agent or settings.AUDIT_USER_AGENT

    async def find_broken(self, links: List[str], base_url: str = "") -> List[str]:
        if not links:
            return []

        semaphore = asyncio.Semaphore(self.concurrency)
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        headers = {"User-Agent": self.user_agent}

        async with aiohttp.ClientSession(timeout=timeout, headers=headers) as session:

            async def check(link: str) -> bool:
                try:
                    url = urljoin(base_url, link)
                except ValueError:
                    logger.warning(f"Link check skipped for unparseable {link}")
                    return True
                async with semaphore:
                    return await self._is_broken(session, url)

            verdicts = await asyncio.gather(*(check(link) for link in links))

        broken = [link for link, is_broken in zip(links, verdicts) if is_broken]
        logger.debug(f"Checked {len(links)} links, {len(broken)} broken")
        return broken[: self.max_broken]

    async def _is_broken(self, session: aiohttp.ClientSession, url: str) -> bool:
        try:
            async with session.head(url, allow_redirects=True) as response:
                if response.status == 405:
                    # Some servers refuse HEAD
                    async with session.get(url, allow_redirects=True) as fallback:
                        return fallback.status >= 400
                return response.status >= 400
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Link check failed for {url}: {str(e)}")
            return True


def get_link_checker(name: Optional[str] = None) -> LinkChecker:
    """
    Build the link checker selected in settings.

    Args:
        name: "sampled" or "http"; defaults to settings.LINK_CHECKER

    Returns:
        LinkChecker instance
    """
    name = (name or settings.LINK_CHECKER).lower()
    if name == "http":
        return HttpLinkChecker()
    if name != "sampled":
        logger.warning(f"Unknown link checker '{name}', using sampled checker")
    return SampledLinkChecker()
