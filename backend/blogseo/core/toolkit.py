from typing import Dict, Any, Optional

from loguru import logger

from blogseo.core.config import settings
from blogseo.core.exceptions import InvalidContentError
from blogseo.schemas.analysis import AnalysisInput, OverallAnalysis
from blogseo.schemas.audit import (
    AuditOptions,
    AuditResult,
    DocumentSnapshot,
    Performance,
)
from blogseo.schemas.optimization import CurrentSeoData, OptimizationResult
from blogseo.services.analyzer.keyword_analyzer import KeywordAnalyzer
from blogseo.services.analyzer.recommendations import (
    generate_optimization_suggestions,
    generate_optimized_metadata,
)
from blogseo.services.analyzer.seo_analyzer import SEOAnalyzer
from blogseo.services.analyzer.utils.text_utils import flesch_readability_score
from blogseo.services.auditor.link_checker import LinkChecker
from blogseo.services.auditor.seo_auditor import SEOAuditor
from blogseo.services.parser.page_fetcher import PageFetcher


class SEOToolkit:
    """
    Entry point bundling scoring, auditing and metadata optimization.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        link_checker: Optional[LinkChecker] = None,
        fetcher: Optional[PageFetcher] = None,
    ):
        """
        Initialize the toolkit.

        Args:
            config: Optional configuration; the "analyzer", "keywords" and
                "auditor" sections are passed to the matching component
            link_checker: Link checking policy for link audits
            fetcher: Page fetcher used by audit_url
        """
        self.config = config or {}

        self.seo_analyzer = SEOAnalyzer(self.config.get("analyzer"))
        self.keyword_analyzer = KeywordAnalyzer(self.config.get("keywords"))
        self.auditor = SEOAuditor(self.config.get("auditor"), link_checker=link_checker)
        self.fetcher = fetcher or PageFetcher()
        self.site_name = self.config.get("site_name", settings.SITE_NAME)

    def analyze(self, data: AnalysisInput) -> OverallAnalysis:
        return self.seo_analyzer.analyze(data)

    async def audit(
        self, snapshot: DocumentSnapshot, options: Optional[AuditOptions] = None
    ) -> AuditResult:
        return await self.auditor.audit(snapshot, options)

    async def audit_url(
        self, url: str, options: Optional[AuditOptions] = None
    ) -> AuditResult:
        """
        Fetch a page and audit it.

        Args:
            url: URL to audit
            options: Which sub-audits to run

        Returns:
            AuditResult including the performance block

        Raises:
            FetchError: if the page cannot be fetched
        """
        snapshot = await self.fetcher.fetch(url)
        result = await self.auditor.audit(snapshot, options)
        result.performance = Performance(load_time_ms=snapshot.load_time_ms)
        return result

    def optimize(
        self,
        content: str,
        title: str,
        keywords: Optional[str] = None,
        current_seo_data: Optional[CurrentSeoData] = None,
    ) -> OptimizationResult:
        """
        Suggest metadata and content improvements for a post.

        Args:
            content: Post body (HTML, markdown or plain text)
            title: Post title
            keywords: Optional comma-separated author keywords
            current_seo_data: Stored meta title and description, if any

        Returns:
            OptimizationResult

        Raises:
            InvalidContentError: if the content or the title is blank
        """
        if not content or not content.strip():
            raise InvalidContentError("Content must not be empty")
        if not title or not title.strip():
            raise InvalidContentError("Title must not be empty")

        keyword_report = self.keyword_analyzer.analyze_keywords(content, keywords)

        result = OptimizationResult(
            keyword_analysis=keyword_report,
            optimized_metadata=generate_optimized_metadata(
                title,
                content,
                keyword_report,
                current_seo_data,
                site_name=self.site_name,
            ),
            suggestions=generate_optimization_suggestions(
                content, title, keyword_report, current_seo_data
            ),
            readability_score=flesch_readability_score(content),
        )

        logger.info(
            f"Optimization for '{title}' produced {len(result.suggestions)} suggestions"
        )
        return result
