from blogseo.schemas.analysis import (
    AnalysisInput,
    AnalyzeRequest,
    ContentAnalysis,
    DescriptionAnalysis,
    KeywordAnalysis,
    KeywordPosition,
    OverallAnalysis,
    TextMetrics,
    TitleAnalysis,
)
from blogseo.schemas.audit import (
    AuditOptions,
    AuditRequest,
    AuditResult,
    ContentAudit,
    DocumentSnapshot,
    Headings,
    Issue,
    IssueType,
    LinksAudit,
    Performance,
    ResponseHeaders,
    Severity,
    TechnicalAudit,
)
from blogseo.schemas.optimization import (
    CurrentSeoData,
    KeywordReport,
    OptimizationResult,
    OptimizationSuggestion,
    OptimizedMetadata,
    OptimizeRequest,
    SuggestionPriority,
)
from blogseo.schemas.monitor import (
    EntityIssue,
    EntityType,
    HealthCheckReport,
    HealthCheckStats,
    IssueFilter,
    MonitorAnalysis,
    MonitorQuery,
    MonitorReport,
    SeoEntity,
)
from blogseo.schemas.markup import (
    RobotsTxtUpdate,
    SchemaMarkupRequest,
    SchemaType,
)
