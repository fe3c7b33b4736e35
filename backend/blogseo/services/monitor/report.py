from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from loguru import logger

from blogseo.core.config import settings
from blogseo.schemas.audit import Severity
from blogseo.schemas.monitor import (
    EntityIssue,
    EntityType,
    IssueFilter,
    MonitorAnalysis,
    MonitorQuery,
    MonitorReport,
)

SEVERITY_BY_FILTER = {
    IssueFilter.ERRORS: Severity.ERROR,
    IssueFilter.WARNINGS: Severity.WARNING,
}


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def summarize_issues(
    issues: Iterable[EntityIssue],
    days: int = 30,
    type: IssueFilter = IssueFilter.ALL,
    entity_type: Optional[EntityType] = None,
    now: Optional[datetime] = None,
    limit: Optional[int] = None,
) -> MonitorReport:
    """
    Build the monitoring report over recorded SEO issues.

    Args:
        issues: Recorded issues, in any order
        days: Look-back window in days (1..365)
        type: Severity filter applied to the listed issues
        entity_type: Optional entity kind filter
        now: Reference time, defaults to the current UTC time
        limit: Maximum number of listed issues, defaults to settings

    Returns:
        MonitorReport with the newest matching issues and their analysis;
        error and warning totals ignore the severity filter
    """
    query = MonitorQuery(days=days, type=type, entity_type=entity_type)
    now = _as_utc(now or datetime.now(timezone.utc))
    limit = limit or settings.MONITOR_MAX_ISSUES
    threshold = now - timedelta(days=query.days)

    window: List[EntityIssue] = [
        issue
        for issue in issues
        if _as_utc(issue.created_at) >= threshold
        and (query.entity_type is None or issue.entity_type == query.entity_type)
    ]

    severity = SEVERITY_BY_FILTER.get(query.type)
    listed = [issue for issue in window if severity is None or issue.severity == severity]
    listed.sort(key=lambda issue: _as_utc(issue.created_at), reverse=True)
    listed = listed[:limit]

    severity_counts = Counter(issue.severity for issue in window)

    analysis = MonitorAnalysis(
        total=len(listed),
        errors=severity_counts[Severity.ERROR],
        warnings=severity_counts[Severity.WARNING],
        by_entity=dict(Counter(issue.entity_type.value for issue in listed)),
        common_issues=dict(Counter(issue.message for issue in listed)),
    )

    logger.info(
        f"SEO monitoring report created: days={query.days}, type={query.type.value}, "
        f"entity_type={query.entity_type.value if query.entity_type else None}"
    )

    return MonitorReport(query=query, generated_at=now, issues=listed, analysis=analysis)
