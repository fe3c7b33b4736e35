from typing import Dict, Any, Optional
import math
from uuid import uuid4

from loguru import logger

from blogseo.core.exceptions import InvalidContentError
from blogseo.schemas.analysis import (
    AnalysisInput,
    ContentAnalysis,
    DescriptionAnalysis,
    KeywordAnalysis,
    OverallAnalysis,
    TitleAnalysis,
)
from blogseo.services.analyzer.base_analyzer import BaseAnalyzer
from blogseo.services.analyzer.keyword_analyzer import (
    keyword_positions,
    primary_keyword,
)
from blogseo.services.analyzer.recommendations import generate_suggestions
from blogseo.services.analyzer.utils.text_utils import (
    TextProcessor,
    clamp,
    round_half_up,
    simple_readability_score,
)

DESCRIPTION_FALLBACK_LENGTH = 160


class SEOAnalyzer(BaseAnalyzer):
    """On-page SEO scorer for posts and pages written in markdown."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        processor: Optional[TextProcessor] = None,
    ):
        """Initialize SEO analyzer with configuration."""
        super().__init__(config, processor)

        # Default scoring weights; the two bonuses are absolute points
        self.scoring_weights = self.config.get(
            "scoring_weights",
            {
                "title": 0.3,
                "description": 0.2,
                "keyword": 0.2,
                "content_length": 0.2,
                "h1_bonus": 20,
                "image_bonus": 10,
            },
        )
        self.title_range = self.config.get("title_range", (40, 60))
        self.description_range = self.config.get("description_range", (120, 160))
        self.density_range = self.config.get("density_range", (0.5, 2.5))

    def analyze(self, data: AnalysisInput) -> OverallAnalysis:
        """
        Score a post or page on its title, description, keyword and content.

        Args:
            data: Content, title and optional meta description and keywords

        Returns:
            OverallAnalysis with sub-analyses, suggestions and overall score

        Raises:
            InvalidContentError: if the content or the title is blank
        """
        if not data.content or not data.content.strip():
            raise InvalidContentError("Content must not be empty")
        if not data.title or not data.title.strip():
            raise InvalidContentError("Title must not be empty")

        keyword = primary_keyword(data.keywords)
        description = data.meta_description or data.content[:DESCRIPTION_FALLBACK_LENGTH]

        title_analysis = self.analyze_title(data.title, keyword)
        description_analysis = self.analyze_description(description, keyword)
        content_analysis = self.analyze_content(data.content)
        keyword_analysis = (
            self.analyze_keyword_usage(data.content, keyword, content_analysis.word_count)
            if keyword
            else None
        )

        overall_score = self.calculate_overall_score(
            title_analysis, description_analysis, content_analysis, keyword_analysis
        )

        result = OverallAnalysis(
            analysis_id=f"seo-{uuid4().hex}",
            overall_score=overall_score,
            title_analysis=title_analysis,
            description_analysis=description_analysis,
            keyword_analysis=keyword_analysis,
            content_analysis=content_analysis,
            suggestions=generate_suggestions(
                title_analysis, description_analysis, content_analysis, keyword_analysis
            ),
        )

        logger.info(
            f"SEO analysis {result.analysis_id} completed. Score: {overall_score}/100"
        )
        return result

    def analyze_title(self, title: str, keyword: Optional[str] = None) -> TitleAnalysis:
        """
        Analyze title length and keyword usage.

        Args:
            title: Page title
            keyword: Primary keyword, lower-cased

        Returns:
            TitleAnalysis
        """
        length = len(title)
        low, high = self.title_range

        return TitleAnalysis(
            length=length,
            ideal=low <= length <= high,
            contains_keyword=bool(keyword) and keyword in title.lower(),
            score=min(100, math.floor(length * 1.5)),
        )

    def analyze_description(
        self, description: str, keyword: Optional[str] = None
    ) -> DescriptionAnalysis:
        """
        Analyze meta description length and keyword usage.

        Args:
            description: Meta description, or the fallback content excerpt
            keyword: Primary keyword, lower-cased

        Returns:
            DescriptionAnalysis
        """
        length = len(description)
        low, high = self.description_range

        return DescriptionAnalysis(
            length=length,
            ideal=low <= length <= high,
            contains_keyword=bool(keyword) and keyword in description.lower(),
            score=min(100, math.floor(length * 0.625)),
        )

    def analyze_keyword_usage(
        self, content: str, keyword: str, word_count: int
    ) -> KeywordAnalysis:
        """
        Analyze how often the primary keyword appears in the content.

        Args:
            content: Markdown content
            keyword: Primary keyword, lower-cased
            word_count: Number of words in the content

        Returns:
            KeywordAnalysis with density as a percentage of the word count
        """
        count = content.lower().count(keyword)
        density = (count / word_count) * 100 if word_count else 0.0
        rounded_density = round_half_up(density, 2)
        low, high = self.density_range

        return KeywordAnalysis(
            count=count,
            density=rounded_density,
            ideal=low <= rounded_density <= high,
            positions=keyword_positions(content, keyword),
            score=min(100, math.floor(density * 40)),
        )

    def analyze_content(self, content: str) -> ContentAnalysis:
        """
        Collect structural signals of markdown content.

        Args:
            content: Markdown content

        Returns:
            ContentAnalysis
        """
        processor = self.text_processor
        headings = processor.markdown_headings(content)

        return ContentAnalysis(
            word_count=len(processor.tokenize_words(content)),
            paragraph_count=len(processor.split_paragraphs(content)),
            heading_count=len(headings),
            has_h1=any(level == 1 for level, _ in headings),
            image_count=len(processor.markdown_images(content)),
            readability_score=simple_readability_score(content),
        )

    def calculate_overall_score(
        self,
        title_analysis: TitleAnalysis,
        description_analysis: DescriptionAnalysis,
        content_analysis: ContentAnalysis,
        keyword_analysis: Optional[KeywordAnalysis] = None,
    ) -> int:
        """
        Combine sub-scores into the overall on-page score.

        The weighted sum is not normalized and can exceed 100 before the
        final clamp.

        Returns:
            Integer score between 0 and 100
        """
        weights = self.scoring_weights
        keyword_score = keyword_analysis.score if keyword_analysis else 0
        length_score = min(100, content_analysis.word_count * 0.1)

        raw_score = (
            title_analysis.score * weights.get("title", 0.3)
            + description_analysis.score * weights.get("description", 0.2)
            + keyword_score * weights.get("keyword", 0.2)
            + length_score * weights.get("content_length", 0.2)
            + (weights.get("h1_bonus", 20) if content_analysis.has_h1 else 0)
            + (weights.get("image_bonus", 10) if content_analysis.image_count > 0 else 0)
        )

        return int(clamp(round_half_up(raw_score)))


seo_analyzer = SEOAnalyzer()


def score_page(data: AnalysisInput) -> OverallAnalysis:
    return seo_analyzer.analyze(data)
