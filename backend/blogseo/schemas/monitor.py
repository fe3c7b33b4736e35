from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Dict, Any, List
from uuid import uuid4

from pydantic import BaseModel, Field

from blogseo.schemas.audit import Severity


class EntityType(str, Enum):
    POST = "POST"
    PAGE = "PAGE"
    CATEGORY = "CATEGORY"


class IssueFilter(str, Enum):
    ALL = "ALL"
    ERRORS = "ERRORS"
    WARNINGS = "WARNINGS"


class SeoEntity(BaseModel):
    """A stored post, page or category as seen by the health check."""

    entity_type: EntityType
    entity_id: str
    title: str
    slug: str
    content: str = ""
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    no_index: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EntityIssue(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    entity_type: EntityType
    entity_id: str
    message: str
    severity: Severity
    details: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class HealthCheckStats(BaseModel):
    posts_without_meta_title: int = 0
    duplicate_content: int = 0
    posts_without_alt_text: int = 0


class HealthCheckReport(BaseModel):
    success: bool
    stats: HealthCheckStats = Field(default_factory=HealthCheckStats)
    issues: List[EntityIssue] = Field(default_factory=list)


class MonitorQuery(BaseModel):
    days: int = Field(default=30, ge=1, le=365)
    type: IssueFilter = IssueFilter.ALL
    entity_type: Optional[EntityType] = None


class MonitorAnalysis(BaseModel):
    total: int
    errors: int
    warnings: int
    by_entity: Dict[str, int] = Field(default_factory=dict)
    common_issues: Dict[str, int] = Field(default_factory=dict)


class MonitorReport(BaseModel):
    query: MonitorQuery
    generated_at: datetime
    issues: List[EntityIssue]
    analysis: MonitorAnalysis
