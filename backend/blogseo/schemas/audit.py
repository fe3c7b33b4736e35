from enum import Enum
from typing import Optional, Dict, List

from pydantic import BaseModel, Field, ConfigDict, AnyHttpUrl


class IssueType(str, Enum):
    CONTENT = "content"
    TECHNICAL = "technical"
    LINKS = "links"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    # Severities used by the health-check monitor
    ERROR = "ERROR"
    WARNING = "WARNING"


class Issue(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: IssueType
    severity: Severity
    message: str
    suggestion: str


class DocumentSnapshot(BaseModel):
    """One fetched page at one point in time."""

    url: str
    html: str
    response_headers: Dict[str, str] = Field(default_factory=dict)
    load_time_ms: int = 0
    status_code: Optional[int] = None


class AuditOptions(BaseModel):
    content: bool = True
    technical: bool = True
    links: bool = False


class Headings(BaseModel):
    h1: List[str] = Field(default_factory=list)
    h2: List[str] = Field(default_factory=list)


class ContentAudit(BaseModel):
    word_count: int
    title: str
    title_length: int
    meta_description: str
    meta_description_length: int
    headings: Headings
    images_count: int
    images_without_alt_count: int
    issues: List[Issue] = Field(default_factory=list)


class ResponseHeaders(BaseModel):
    content_encoding: Optional[str] = None
    cache_control: Optional[str] = None


class TechnicalAudit(BaseModel):
    load_time_ms: int
    is_responsive: bool
    has_canonical: bool
    indexing_allowed: bool
    headers: ResponseHeaders
    issues: List[Issue] = Field(default_factory=list)


class LinksAudit(BaseModel):
    total_links: int
    internal_links: int
    external_links: int
    nofollow_links: int
    broken_links: List[str] = Field(default_factory=list, max_length=3)
    issues: List[Issue] = Field(default_factory=list)


class Performance(BaseModel):
    load_time_ms: int


class AuditResult(BaseModel):
    url: str
    content_audit: Optional[ContentAudit] = None
    technical_audit: Optional[TechnicalAudit] = None
    links_audit: Optional[LinksAudit] = None
    load_time_ms: int = 0
    # Set only when the toolkit fetched the page itself
    performance: Optional[Performance] = None

    @property
    def issues(self) -> List[Issue]:
        """All issues of the sub-audits that ran, in content/technical/links order."""
        issues: List[Issue] = []
        for audit in (self.content_audit, self.technical_audit, self.links_audit):
            if audit is not None:
                issues.extend(audit.issues)
        return issues


class AuditRequest(BaseModel):
    """Schema for a URL audit request."""

    url: AnyHttpUrl
    analyze_content: bool = True
    analyze_technical: bool = True
    analyze_links: bool = False

    def to_options(self) -> AuditOptions:
        return AuditOptions(
            content=self.analyze_content,
            technical=self.analyze_technical,
            links=self.analyze_links,
        )
