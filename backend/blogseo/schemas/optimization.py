from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, Field


class KeywordReport(BaseModel):
    """Term-importance ranking of a single document."""

    top_keywords: List[str] = Field(default_factory=list, max_length=10)
    keyword_density: float = 0.0
    content_length: int = 0
    word_count: int = 0

    @property
    def primary_keyword(self) -> Optional[str]:
        return self.top_keywords[0] if self.top_keywords else None


class CurrentSeoData(BaseModel):
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None


class SuggestionPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


class OptimizationSuggestion(BaseModel):
    type: str
    priority: SuggestionPriority
    message: str
    suggestion: str


class OptimizedMetadata(BaseModel):
    meta_title: str
    meta_description: str
    focus_keyword: Optional[str] = None
    secondary_keywords: List[str] = Field(default_factory=list)


class OptimizationResult(BaseModel):
    keyword_analysis: KeywordReport
    optimized_metadata: OptimizedMetadata
    suggestions: List[OptimizationSuggestion]
    readability_score: int


class OptimizeRequest(BaseModel):
    """Schema for a metadata optimization request."""

    content: str = Field(min_length=100)
    title: str = Field(min_length=10, max_length=100)
    keywords: Optional[str] = None
    current_seo_data: Optional[CurrentSeoData] = None
