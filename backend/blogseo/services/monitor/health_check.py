import time
from typing import Dict, Any, List, Optional, Protocol, Tuple

from loguru import logger
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import cosine_similarity

from blogseo.core.config import settings
from blogseo.schemas.audit import Severity
from blogseo.schemas.monitor import (
    EntityIssue,
    EntityType,
    HealthCheckReport,
    HealthCheckStats,
    SeoEntity,
)
from blogseo.services.analyzer.utils.text_utils import TextProcessor, text_processor

MISSING_META_TITLE = "Post has no SEO title"
DUPLICATE_CONTENT = "Duplicate content detected"
MISSING_ALT_TEXT = "Image without alt text"

TITLE_SUGGESTION_CHARS = 30


class IssueStore(Protocol):
    def record(self, issue: EntityIssue) -> None: ...


class InMemoryIssueStore:
    """Keeps recorded issues in a list; suitable for tests and one-off runs."""

    def __init__(self):
        self.issues: List[EntityIssue] = []

    def record(self, issue: EntityIssue) -> None:
        self.issues.append(issue)


class HealthChecker:
    """
    Periodic SEO health check over stored posts.

    Looks for posts without an SEO title, posts whose content is nearly
    identical to another post, and markdown images without alt text.
    Every finding is recorded through the issue store.
    """

    def __init__(
        self,
        store: Optional[IssueStore] = None,
        config: Optional[Dict[str, Any]] = None,
        processor: Optional[TextProcessor] = None,
    ):
        self.store = store if store is not None else InMemoryIssueStore()
        self.config = config or {}
        self.text_processor = processor or text_processor

        self.batch_size = self.config.get("batch_size", settings.HEALTH_CHECK_BATCH_SIZE)
        self.duplicate_limit = self.config.get(
            "duplicate_limit", settings.HEALTH_CHECK_DUPLICATE_LIMIT
        )
        self.alt_text_limit = self.config.get(
            "alt_text_limit", settings.HEALTH_CHECK_ALT_TEXT_LIMIT
        )
        self.similarity_threshold = self.config.get(
            "similarity_threshold", settings.DUPLICATE_SIMILARITY_THRESHOLD
        )

    def run(self, entities: List[SeoEntity]) -> HealthCheckReport:
        """
        Run all checks over the given entities.

        Only posts are checked; pages and categories are ignored.

        Args:
            entities: Stored entities in storage order

        Returns:
            HealthCheckReport; success is False when a check itself failed
        """
        start_time = time.monotonic()
        posts = [e for e in entities if e.entity_type == EntityType.POST]

        try:
            missing_title = self.find_missing_meta_titles(posts)
            duplicates = self.find_duplicate_content(posts)
            missing_alt = self.find_missing_alt_text(posts)
        except Exception as e:
            logger.error(f"SEO health check failed: {str(e)}")
            return HealthCheckReport(success=False)

        issues: List[EntityIssue] = []

        for post in missing_title:
            issues.append(
                EntityIssue(
                    entity_type=post.entity_type,
                    entity_id=post.entity_id,
                    message=MISSING_META_TITLE,
                    severity=Severity.WARNING,
                    details={
                        "suggestion": f"Use '{post.title[:TITLE_SUGGESTION_CHARS]}...' "
                        "as the SEO title"
                    },
                )
            )

        for post, count in duplicates:
            issues.append(
                EntityIssue(
                    entity_type=post.entity_type,
                    entity_id=post.entity_id,
                    message=DUPLICATE_CONTENT,
                    severity=Severity.ERROR,
                    details={"duplicates": count, "slug": post.slug},
                )
            )

        for post in missing_alt[: self.alt_text_limit]:
            issues.append(
                EntityIssue(
                    entity_type=post.entity_type,
                    entity_id=post.entity_id,
                    message=MISSING_ALT_TEXT,
                    severity=Severity.WARNING,
                )
            )

        for issue in issues:
            self._record(issue)

        duration_ms = int((time.monotonic() - start_time) * 1000)
        logger.info(
            f"SEO health check completed in {duration_ms}ms, {len(issues)} issues found"
        )

        return HealthCheckReport(
            success=True,
            stats=HealthCheckStats(
                posts_without_meta_title=len(missing_title),
                duplicate_content=len(duplicates),
                posts_without_alt_text=len(missing_alt),
            ),
            issues=issues,
        )

    def find_missing_meta_titles(self, posts: List[SeoEntity]) -> List[SeoEntity]:
        missing = [p for p in posts if not (p.meta_title or "").strip()]
        return missing[: self.batch_size]

    def find_duplicate_content(
        self, posts: List[SeoEntity]
    ) -> List[Tuple[SeoEntity, int]]:
        """
        Find posts whose content is nearly identical to other posts.

        Args:
            posts: Posts to compare pairwise

        Returns:
            (post, duplicate count) pairs in input order, at most
            ``duplicate_limit`` of them
        """
        candidates = [p for p in posts if p.content.strip()]
        if len(candidates) < 2:
            return []

        vectorizer = TfidfVectorizer(lowercase=True, stop_words="english")
        try:
            tfidf_matrix = vectorizer.fit_transform([p.content for p in candidates])
        except ValueError:
            logger.warning("No comparable terms found in post contents")
            return []

        similarity = cosine_similarity(tfidf_matrix)

        duplicates = []
        for i, post in enumerate(candidates):
            count = sum(
                1
                for j in range(len(candidates))
                if j != i and similarity[i][j] > self.similarity_threshold
            )
            if count:
                duplicates.append((post, count))

        logger.debug(f"Compared {len(candidates)} posts, {len(duplicates)} duplicated")
        return duplicates[: self.duplicate_limit]

    def find_missing_alt_text(self, posts: List[SeoEntity]) -> List[SeoEntity]:
        return [
            p
            for p in posts
            if any(
                not alt.strip()
                for alt, _ in self.text_processor.markdown_images(p.content)
            )
        ]

    def _record(self, issue: EntityIssue) -> None:
        # A failing store must not abort the health check
        try:
            self.store.record(issue)
        except Exception as e:
            logger.error(
                f"Failed to record SEO issue for {issue.entity_type.value} "
                f"{issue.entity_id}: {str(e)}"
            )


def run_health_check(
    entities: List[SeoEntity], store: Optional[IssueStore] = None
) -> HealthCheckReport:
    return HealthChecker(store).run(entities)
