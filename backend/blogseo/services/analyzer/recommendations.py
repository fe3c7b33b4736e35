from typing import List, Optional

from loguru import logger

from blogseo.core.config import settings
from blogseo.schemas.analysis import (
    ContentAnalysis,
    DescriptionAnalysis,
    KeywordAnalysis,
    TitleAnalysis,
)
from blogseo.schemas.optimization import (
    CurrentSeoData,
    KeywordReport,
    OptimizationSuggestion,
    OptimizedMetadata,
    SuggestionPriority,
)

TITLE_SHORT = "Your title is short. Aim for 40-60 characters."
TITLE_LONG = "Your title is long. Keep it under 60 characters."
KEYWORD_NOT_IN_TITLE = "Include the primary keyword in the title."
DESCRIPTION_SHORT = "Your meta description is short. Aim for 120-160 characters."
DESCRIPTION_LONG = "Your meta description is long. Keep it under 160 characters."
CONTENT_SHORT = "Your content is short. Write at least 300 words."
MISSING_H1 = "Add an H1 heading to your content."
MISSING_IMAGE = "Add at least one image to your content."
DENSITY_LOW = "Keyword density is low. Aim for 0.5-2.5%."
DENSITY_HIGH = "Keyword density is high. Avoid repeating the keyword too often."
KEYWORD_NOT_IN_CONTENT = "Use the keyword in your content."
CONTENT_OK = "Your content looks good from an SEO perspective!"

MIN_TITLE_LENGTH = 40
MIN_DESCRIPTION_LENGTH = 120
MIN_WORD_COUNT = 300
MIN_KEYWORD_DENSITY = 0.5
RECOMMENDED_WORD_COUNT = 800
META_DESCRIPTION_EXCERPT = 140
SUGGESTED_DESCRIPTION_LENGTH = 160


def generate_suggestions(
    title_analysis: TitleAnalysis,
    description_analysis: DescriptionAnalysis,
    content_analysis: ContentAnalysis,
    keyword_analysis: Optional[KeywordAnalysis] = None,
) -> List[str]:
    """
    Turn on-page findings into remediation hints.

    Rules are evaluated in a fixed order and each adds at most one hint.

    Args:
        title_analysis: Title findings
        description_analysis: Meta description findings
        content_analysis: Body content findings
        keyword_analysis: Keyword findings, None when no keyword was given

    Returns:
        Ordered, never empty, list of suggestions
    """
    suggestions: List[str] = []

    if not title_analysis.ideal:
        suggestions.append(
            TITLE_SHORT if title_analysis.length < MIN_TITLE_LENGTH else TITLE_LONG
        )

    if keyword_analysis is not None and not title_analysis.contains_keyword:
        suggestions.append(KEYWORD_NOT_IN_TITLE)

    if not description_analysis.ideal:
        suggestions.append(
            DESCRIPTION_SHORT
            if description_analysis.length < MIN_DESCRIPTION_LENGTH
            else DESCRIPTION_LONG
        )

    if content_analysis.word_count < MIN_WORD_COUNT:
        suggestions.append(CONTENT_SHORT)

    if not content_analysis.has_h1:
        suggestions.append(MISSING_H1)

    if content_analysis.image_count == 0:
        suggestions.append(MISSING_IMAGE)

    if keyword_analysis is not None:
        if not keyword_analysis.ideal:
            suggestions.append(
                DENSITY_LOW
                if keyword_analysis.density < MIN_KEYWORD_DENSITY
                else DENSITY_HIGH
            )

        if not keyword_analysis.positions:
            suggestions.append(KEYWORD_NOT_IN_CONTENT)

    return suggestions or [CONTENT_OK]


def generate_optimization_suggestions(
    content: str,
    title: str,
    keyword_report: KeywordReport,
    current_seo_data: Optional[CurrentSeoData] = None,
) -> List[OptimizationSuggestion]:
    """
    Build prioritized optimization suggestions for a post.

    Args:
        content: Post body
        title: Post title
        keyword_report: Result of keyword analysis over the body
        current_seo_data: Stored SEO metadata; metadata rules only apply
            when it is supplied

    Returns:
        Suggestions with every high-priority entry ahead of the medium ones,
        insertion order kept within each group
    """
    suggestions: List[OptimizationSuggestion] = []
    top_keywords = keyword_report.top_keywords
    focus = keyword_report.primary_keyword or "your primary keyword"

    def add_suggestion(
        category: str, priority: SuggestionPriority, message: str, suggestion: str
    ):
        suggestions.append(
            OptimizationSuggestion(
                type=category,
                priority=priority,
                message=message,
                suggestion=suggestion,
            )
        )

    if len(title) < MIN_TITLE_LENGTH:
        add_suggestion(
            "title",
            SuggestionPriority.HIGH,
            f"Title is short (at least {MIN_TITLE_LENGTH} characters recommended)",
            f'Try expanding the title with the keyword "{focus}"',
        )

    if keyword_report.word_count < RECOMMENDED_WORD_COUNT:
        add_suggestion(
            "content",
            SuggestionPriority.MEDIUM,
            f"Your content is {keyword_report.word_count} words "
            f"(at least {RECOMMENDED_WORD_COUNT} words recommended)",
            "Write more about the topic or add practical examples",
        )

    if keyword_report.keyword_density < MIN_KEYWORD_DENSITY:
        add_suggestion(
            "keyword",
            SuggestionPriority.HIGH,
            "Primary keyword density is low",
            f'Use "{focus}" more often, naturally, throughout the content',
        )

    if current_seo_data is not None:
        if not current_seo_data.meta_title:
            add_suggestion(
                "metadata",
                SuggestionPriority.HIGH,
                "Meta title is not set",
                f'Consider using the title "{title} | {", ".join(top_keywords)}"',
            )

        if not current_seo_data.meta_description:
            excerpt = content[:SUGGESTED_DESCRIPTION_LENGTH]
            add_suggestion(
                "metadata",
                SuggestionPriority.MEDIUM,
                "Meta description is not set",
                f'Consider using this description: "{excerpt}"',
            )

    high = [s for s in suggestions if s.priority == SuggestionPriority.HIGH]
    rest = [s for s in suggestions if s.priority != SuggestionPriority.HIGH]

    logger.debug(
        f"Generated {len(suggestions)} optimization suggestions ({len(high)} high)"
    )
    return high + rest


def generate_optimized_metadata(
    title: str,
    content: str,
    keyword_report: KeywordReport,
    current_seo_data: Optional[CurrentSeoData] = None,
    site_name: Optional[str] = None,
) -> OptimizedMetadata:
    """
    Propose meta title, description and focus keywords.

    Stored values win over generated ones.

    Args:
        title: Post title
        content: Post body
        keyword_report: Result of keyword analysis over the body
        current_seo_data: Stored SEO metadata, if any
        site_name: Title suffix, defaults to the configured site name

    Returns:
        OptimizedMetadata
    """
    current = current_seo_data or CurrentSeoData()
    focus = keyword_report.primary_keyword
    site_name = site_name if site_name is not None else settings.SITE_NAME

    title_parts = [part for part in (title, focus, site_name) if part]

    return OptimizedMetadata(
        meta_title=current.meta_title or " | ".join(title_parts),
        meta_description=current.meta_description
        or f"{content[:META_DESCRIPTION_EXCERPT]}...",
        focus_keyword=focus,
        secondary_keywords=keyword_report.top_keywords[1:3],
    )
