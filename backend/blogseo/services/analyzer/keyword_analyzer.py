from typing import Dict, Any, List, Optional

from loguru import logger
from sklearn.feature_extraction.text import TfidfVectorizer

from blogseo.schemas.analysis import KeywordPosition
from blogseo.schemas.optimization import KeywordReport
from blogseo.services.analyzer.base_analyzer import BaseAnalyzer
from blogseo.services.analyzer.utils.text_utils import (
    TextProcessor,
    round_half_up,
)

MAX_KEYWORD_POSITIONS = 5
CONTEXT_CHARS = 20


def parse_keywords(keywords: Optional[str]) -> List[str]:
    """
    Split a comma-separated keyword string.

    Args:
        keywords: Comma-separated keywords, e.g. "coffee, home brewing"

    Returns:
        Trimmed, lower-cased, non-empty keywords in input order
    """
    if not keywords:
        return []
    return [k.strip().lower() for k in keywords.split(",") if k.strip()]


def primary_keyword(keywords: Optional[str]) -> Optional[str]:
    parsed = parse_keywords(keywords)
    return parsed[0] if parsed else None


def keyword_density(content: str, keyword: Optional[str]) -> float:
    """
    Percentage of words that contain the keyword.

    Args:
        content: Text to scan
        keyword: Keyword to look for (case-insensitive substring match)

    Returns:
        Density as a percentage rounded to 2 decimals, 0 without a keyword
    """
    if not keyword:
        return 0.0

    words = content.lower().split()
    if not words:
        return 0.0

    keyword_lower = keyword.lower()
    count = sum(1 for word in words if keyword_lower in word)
    return round_half_up((count / len(words)) * 100, 2)


def keyword_positions(
    content: str, keyword: Optional[str], limit: int = MAX_KEYWORD_POSITIONS
) -> List[KeywordPosition]:
    """
    Locate the first occurrences of a keyword with surrounding context.

    Args:
        content: Text to scan
        keyword: Keyword to look for (case-insensitive)
        limit: Maximum number of positions to return

    Returns:
        Positions in order of appearance, each with 20 characters of context
        on either side of the match
    """
    if not keyword:
        return []

    content_lower = content.lower()
    keyword_lower = keyword.lower()
    positions: List[KeywordPosition] = []

    pos = content_lower.find(keyword_lower)
    while pos != -1 and len(positions) < limit:
        start = max(0, pos - CONTEXT_CHARS)
        end = pos + len(keyword_lower) + CONTEXT_CHARS
        positions.append(KeywordPosition(position=pos, context=content[start:end]))
        pos = content_lower.find(keyword_lower, pos + 1)

    return positions


class KeywordAnalyzer(BaseAnalyzer):
    """Ranks the important terms of a single document."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        processor: Optional[TextProcessor] = None,
    ):
        """Initialize keyword analyzer with configuration."""
        super().__init__(config, processor)
        self.max_keywords = self.config.get("max_keywords", 10)
        self.min_term_length = self.config.get("min_term_length", 4)
        self.user_keyword_bonus = self.config.get("user_keyword_bonus", 2.0)

    def analyze(self, content: str, keywords: Optional[str] = None) -> KeywordReport:
        return self.analyze_keywords(content, keywords)

    def analyze_keywords(
        self, content: str, keywords: Optional[str] = None
    ) -> KeywordReport:
        """
        Extract the top keywords of a document.

        Args:
            content: HTML, markdown or plain text
            keywords: Optional comma-separated keywords supplied by the author

        Returns:
            KeywordReport with up to ten keywords, density of the first one,
            and the length and word count of the extracted text
        """
        text = self.text_processor.strip_markup(content)
        weights = self.rank_terms(text)

        # Author keywords outrank extracted terms
        for keyword in parse_keywords(keywords):
            weights[keyword] = weights.get(keyword, 0.0) + self.user_keyword_bonus

        ranked = sorted(weights.items(), key=lambda item: item[1], reverse=True)
        top_keywords = [term for term, _ in ranked[: self.max_keywords]]

        report = KeywordReport(
            top_keywords=top_keywords,
            keyword_density=keyword_density(
                text, top_keywords[0] if top_keywords else None
            ),
            content_length=len(text),
            word_count=len(self.text_processor.tokenize_words(text)),
        )

        logger.debug(
            f"Keyword analysis: {len(weights)} candidate terms, top={top_keywords[:3]}"
        )
        return report

    def rank_terms(self, text: str) -> Dict[str, float]:
        """
        Weight the terms of a document by TF-IDF.

        With a single document the IDF factor is constant, so the weights
        order terms by frequency. Short terms and inflected forms (terms
        whose stem differs from the term) are skipped.

        Args:
            text: Plain text

        Returns:
            Mapping of term to weight, in alphabetical term order
        """
        if not text.strip():
            return {}

        vectorizer = TfidfVectorizer(lowercase=True, stop_words="english")
        try:
            tfidf_matrix = vectorizer.fit_transform([text])
        except ValueError:
            # Only stop words or no word characters at all
            logger.warning("No rankable terms found in content")
            return {}

        feature_names = vectorizer.get_feature_names_out()
        tfidf_scores = tfidf_matrix.toarray()[0]

        weights: Dict[str, float] = {}
        for term, score in zip(feature_names, tfidf_scores):
            if len(term) < self.min_term_length:
                continue
            if self.text_processor.stem(term) != term:
                continue
            weights[str(term)] = float(score)

        return weights


keyword_analyzer = KeywordAnalyzer()


def analyze_keywords(content: str, keywords: Optional[str] = None) -> KeywordReport:
    return keyword_analyzer.analyze_keywords(content, keywords)
