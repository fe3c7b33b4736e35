from typing import Dict, Any, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
from loguru import logger

from blogseo.core.config import settings
from blogseo.schemas.audit import (
    AuditOptions,
    AuditResult,
    ContentAudit,
    DocumentSnapshot,
    Headings,
    Issue,
    IssueType,
    LinksAudit,
    ResponseHeaders,
    Severity,
    TechnicalAudit,
)
from blogseo.services.auditor.link_checker import LinkChecker, get_link_checker
from blogseo.services.parser.metadata_extractor import (
    extract_body_text,
    extract_canonical,
    extract_description,
    extract_headings,
    extract_images,
    extract_links,
    extract_robots,
    extract_title,
    extract_viewport,
)

SKIPPED_LINK_PREFIXES = ("#", "javascript:")


def _issue(type: IssueType, severity: Severity, message: str, suggestion: str) -> Issue:
    return Issue(type=type, severity=severity, message=message, suggestion=suggestion)


class SEOAuditor:
    """Audits an already-fetched page for content, technical and link issues."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        link_checker: Optional[LinkChecker] = None,
    ):
        """
        Initialize the auditor.

        Args:
            config: Optional threshold overrides (max_title_length,
                min_content_words, slow_page_threshold_ms)
            link_checker: Policy used to find broken links; defaults to the
                checker selected in settings
        """
        self.config = config or {}
        self.link_checker = link_checker or get_link_checker()
        self.max_title_length = self.config.get(
            "max_title_length", settings.MAX_TITLE_LENGTH
        )
        self.min_content_words = self.config.get(
            "min_content_words", settings.MIN_CONTENT_WORDS
        )
        self.slow_page_threshold_ms = self.config.get(
            "slow_page_threshold_ms", settings.SLOW_PAGE_THRESHOLD_MS
        )

    async def audit(
        self, snapshot: DocumentSnapshot, options: Optional[AuditOptions] = None
    ) -> AuditResult:
        """
        Run the enabled sub-audits over a page snapshot.

        Args:
            snapshot: Fetched page with headers and load time
            options: Which sub-audits to run

        Returns:
            AuditResult; disabled sub-audits are None
        """
        options = options or AuditOptions()
        soup = BeautifulSoup(snapshot.html, "html.parser")

        content_audit = self.audit_content(soup) if options.content else None
        technical_audit = (
            self.audit_technical(soup, snapshot) if options.technical else None
        )
        links_audit = (
            await self.audit_links(soup, snapshot.url) if options.links else None
        )

        result = AuditResult(
            url=snapshot.url,
            content_audit=content_audit,
            technical_audit=technical_audit,
            links_audit=links_audit,
            load_time_ms=snapshot.load_time_ms,
        )

        logger.info(f"SEO audit of {snapshot.url} found {len(result.issues)} issues")
        return result

    def audit_content(self, soup: BeautifulSoup) -> ContentAudit:
        """
        Check title, meta description, headings, images and content length.

        Args:
            soup: Parsed page

        Returns:
            ContentAudit with extracted values and issues
        """
        title = extract_title(soup)
        meta_description = extract_description(soup)
        headings = extract_headings(soup, ("h1", "h2"))
        images = extract_images(soup)
        word_count = len(extract_body_text(soup).split())

        issues: List[Issue] = []

        if not title:
            issues.append(
                _issue(
                    IssueType.CONTENT,
                    Severity.HIGH,
                    "The page has no title tag",
                    "Add an engaging title that contains the primary keyword",
                )
            )
        elif len(title) > self.max_title_length:
            issues.append(
                _issue(
                    IssueType.CONTENT,
                    Severity.MEDIUM,
                    "The page title is too long",
                    f"Shorten the title to under {self.max_title_length} characters",
                )
            )

        if not meta_description:
            issues.append(
                _issue(
                    IssueType.CONTENT,
                    Severity.MEDIUM,
                    "The page has no meta description",
                    "Write a compelling meta description of 120-160 characters",
                )
            )

        if not headings["h1"]:
            issues.append(
                _issue(
                    IssueType.CONTENT,
                    Severity.HIGH,
                    "The page has no H1 heading",
                    "Add an H1 heading that contains the primary keyword",
                )
            )
        elif len(headings["h1"]) > 1:
            issues.append(
                _issue(
                    IssueType.CONTENT,
                    Severity.MEDIUM,
                    "The page has multiple H1 headings",
                    "Keep a single main H1 heading on the page",
                )
            )

        images_without_alt = [img for img in images if not img["alt"]]
        if images_without_alt:
            issues.append(
                _issue(
                    IssueType.CONTENT,
                    Severity.MEDIUM,
                    f"{len(images_without_alt)} images have no alt text",
                    "Add descriptive alt text to every image",
                )
            )

        if word_count < self.min_content_words:
            issues.append(
                _issue(
                    IssueType.CONTENT,
                    Severity.MEDIUM,
                    "The page content is too short",
                    f"Increase the content to at least {self.min_content_words} words",
                )
            )

        return ContentAudit(
            word_count=word_count,
            title=title,
            title_length=len(title),
            meta_description=meta_description,
            meta_description_length=len(meta_description),
            headings=Headings(h1=headings["h1"], h2=headings["h2"]),
            images_count=len(images),
            images_without_alt_count=len(images_without_alt),
            issues=issues,
        )

    def audit_technical(
        self, soup: BeautifulSoup, snapshot: DocumentSnapshot
    ) -> TechnicalAudit:
        """
        Check load time, viewport, canonical link and indexing directives.

        Args:
            soup: Parsed page
            snapshot: Snapshot providing load time and response headers

        Returns:
            TechnicalAudit with signals and issues
        """
        viewport = extract_viewport(soup)
        canonical = extract_canonical(soup, snapshot.url)
        robots = (extract_robots(soup) or "").lower()
        noindex = "noindex" in robots
        headers = {key.lower(): value for key, value in snapshot.response_headers.items()}

        issues: List[Issue] = []

        if snapshot.load_time_ms > self.slow_page_threshold_ms:
            issues.append(
                _issue(
                    IssueType.TECHNICAL,
                    Severity.HIGH,
                    "The page takes too long to load",
                    "Optimize images and enable caching and compression",
                )
            )

        if not viewport:
            issues.append(
                _issue(
                    IssueType.TECHNICAL,
                    Severity.HIGH,
                    "The page has no viewport meta tag",
                    "Add a viewport meta tag to support mobile devices",
                )
            )

        if not canonical:
            issues.append(
                _issue(
                    IssueType.TECHNICAL,
                    Severity.MEDIUM,
                    "The page has no canonical link",
                    "Add a canonical link to avoid duplicate content",
                )
            )

        if noindex:
            issues.append(
                _issue(
                    IssueType.TECHNICAL,
                    Severity.HIGH,
                    "The page is marked noindex",
                    "Remove the noindex directive if the page should be indexed",
                )
            )

        return TechnicalAudit(
            load_time_ms=snapshot.load_time_ms,
            is_responsive=bool(viewport),
            has_canonical=bool(canonical),
            indexing_allowed=not noindex,
            headers=ResponseHeaders(
                content_encoding=headers.get("content-encoding"),
                cache_control=headers.get("cache-control"),
            ),
            issues=issues,
        )

    async def audit_links(self, soup: BeautifulSoup, page_url: str) -> LinksAudit:
        """
        Classify links and look for broken internal ones.

        Args:
            soup: Parsed page
            page_url: URL of the page, defines which links are internal

        Returns:
            LinksAudit with link counts, suspect links and issues
        """
        links = [
            link
            for link in extract_links(soup)
            if link["href"]
            and not link["href"].lower().startswith(SKIPPED_LINK_PREFIXES)
        ]

        try:
            host = urlparse(page_url).netloc.lower()
        except ValueError:
            host = ""
        internal = [
            link for link in links if self._is_internal(link["href"], page_url, host)
        ]
        nofollow = [link for link in links if "nofollow" in link["rel"]]

        broken = await self.link_checker.find_broken(
            [link["href"] for link in internal], base_url=page_url
        )
        broken = broken[: self.link_checker.max_broken]

        issues: List[Issue] = []
        if broken:
            issues.append(
                _issue(
                    IssueType.LINKS,
                    Severity.HIGH,
                    f"{len(broken)} broken internal links found",
                    "Fix or remove the broken links",
                )
            )

        return LinksAudit(
            total_links=len(links),
            internal_links=len(internal),
            external_links=len(links) - len(internal),
            nofollow_links=len(nofollow),
            broken_links=broken,
            issues=issues,
        )

    def _is_internal(self, href: str, page_url: str, host: str) -> bool:
        # Root-relative and relative hrefs resolve onto the page's host
        try:
            return urlparse(urljoin(page_url, href)).netloc.lower() == host
        except ValueError:
            logger.debug(f"Unparseable href counted as external: {href}")
            return False


async def audit_document(
    snapshot: DocumentSnapshot,
    options: Optional[AuditOptions] = None,
    link_checker: Optional[LinkChecker] = None,
) -> AuditResult:
    return await SEOAuditor(link_checker=link_checker).audit(snapshot, options)
