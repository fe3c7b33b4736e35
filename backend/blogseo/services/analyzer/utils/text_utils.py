from typing import List, Tuple
import math
import re

from bs4 import BeautifulSoup
from nltk.stem import PorterStemmer

from blogseo.schemas.analysis import TextMetrics

SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
MARKDOWN_HEADING_RE = re.compile(r"^(#+)[ \t]+(.+)$", re.MULTILINE)
MARKDOWN_IMAGE_RE = re.compile(r"!\[(.*?)\]\((.*?)\)")


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves upward; the builtin round() sends them to the even neighbour."""
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def clamp(value: float, lower: float = 0, upper: float = 100) -> float:
    return min(upper, max(lower, value))


class TextProcessor:
    """Utility class for text processing tasks."""

    def __init__(self):
        """Initialize text processor."""
        # Original Porter rules; the NLTK extensions stem a few extra suffixes
        self.stemmer = PorterStemmer(mode=PorterStemmer.ORIGINAL_ALGORITHM)

    def tokenize_words(self, text: str) -> List[str]:
        """
        Tokenize text into words.

        Args:
            text: Text to tokenize

        Returns:
            List of non-empty whitespace-separated tokens
        """
        return text.split()

    def split_sentences(self, text: str) -> List[str]:
        """
        Split text into sentences on runs of terminal punctuation.

        Args:
            text: Text to split

        Returns:
            List of non-empty, trimmed sentences
        """
        return [s.strip() for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]

    def split_paragraphs(self, text: str) -> List[str]:
        """
        Split text into paragraphs on blank lines.

        Args:
            text: Text to split

        Returns:
            List of non-blank paragraphs
        """
        return [p for p in text.split("\n\n") if p.strip()]

    def estimate_syllables(self, word: str) -> int:
        # One syllable per three characters, never less than one
        return max(1, len(word) // 3)

    def stem(self, word: str) -> str:
        return self.stemmer.stem(word)

    def strip_markup(self, content: str) -> str:
        """
        Extract body text from HTML (plain text passes through unchanged).

        Args:
            content: HTML or plain text

        Returns:
            Visible text with script and style blocks removed
        """
        soup = BeautifulSoup(content, "html.parser")
        for tag in soup(["script", "style", "noscript"]):
            tag.decompose()
        root = soup.body if soup.body else soup
        return root.get_text(" ")

    def markdown_headings(self, text: str) -> List[Tuple[int, str]]:
        """
        Find markdown heading lines.

        Args:
            text: Markdown text

        Returns:
            List of (level, heading text) tuples in document order
        """
        return [
            (len(hashes), heading.strip())
            for hashes, heading in MARKDOWN_HEADING_RE.findall(text)
        ]

    def markdown_images(self, text: str) -> List[Tuple[str, str]]:
        """Return (alt text, target) for every markdown image."""
        return MARKDOWN_IMAGE_RE.findall(text)


text_processor = TextProcessor()


def text_metrics(content: str) -> TextMetrics:
    """
    Calculate word, sentence and paragraph statistics for text.

    Args:
        content: Text to measure

    Returns:
        TextMetrics including the Flesch-style readability score
    """
    words = text_processor.tokenize_words(content)
    sentence_count = max(1, len(text_processor.split_sentences(content)))
    syllables = sum(text_processor.estimate_syllables(word) for word in words)

    return TextMetrics(
        word_count=len(words),
        sentence_count=sentence_count,
        paragraph_count=len(text_processor.split_paragraphs(content)),
        syllable_estimate=syllables,
        readability_score=_flesch_score(len(words), sentence_count, syllables),
    )


def _flesch_score(word_count: int, sentence_count: int, syllables: int) -> int:
    if word_count == 0:
        return 0

    words_per_sentence = word_count / sentence_count
    syllables_per_word = syllables / word_count
    score = 206.835 - (1.015 * words_per_sentence) - (84.6 * syllables_per_word)

    return int(clamp(round_half_up(score)))


def flesch_readability_score(content: str) -> int:
    """
    Flesch reading-ease estimate, rounded and clamped to 0-100.

    Syllables are approximated from word length, so the result is only
    comparable with other scores produced by this function.
    """
    return text_metrics(content).readability_score


def simple_readability_score(content: str) -> float:
    """
    Sentence-length readability: 100 at ten words per sentence or fewer,
    minus two points per extra word.

    Args:
        content: Text to score

    Returns:
        Score between 0 and 100, rounded to 2 decimals
    """
    words = text_processor.tokenize_words(content)
    if not words:
        return 0.0

    sentence_count = max(1, len(text_processor.split_sentences(content)))
    avg_words_per_sentence = len(words) / sentence_count

    return round(clamp(100 - (avg_words_per_sentence - 10) * 2), 2)
