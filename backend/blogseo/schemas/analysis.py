from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict


class AnalysisInput(BaseModel):
    """Content submitted for on-page scoring."""

    model_config = ConfigDict(frozen=True)

    content: str
    title: str
    meta_description: Optional[str] = None
    keywords: Optional[str] = None


class TextMetrics(BaseModel):
    word_count: int
    sentence_count: int
    paragraph_count: int
    syllable_estimate: int
    readability_score: int = Field(ge=0, le=100)


class TitleAnalysis(BaseModel):
    length: int
    ideal: bool
    contains_keyword: bool
    score: int = Field(ge=0, le=100)


class DescriptionAnalysis(BaseModel):
    length: int
    ideal: bool
    contains_keyword: bool
    score: int = Field(ge=0, le=100)


class KeywordPosition(BaseModel):
    position: int
    context: str


class KeywordAnalysis(BaseModel):
    count: int
    density: float = Field(ge=0)
    ideal: bool
    positions: List[KeywordPosition] = Field(default_factory=list, max_length=5)
    score: int = Field(ge=0, le=100)


class ContentAnalysis(BaseModel):
    word_count: int
    paragraph_count: int
    heading_count: int
    has_h1: bool
    image_count: int
    readability_score: float = Field(ge=0, le=100)


class OverallAnalysis(BaseModel):
    analysis_id: str
    overall_score: int = Field(ge=0, le=100)
    title_analysis: TitleAnalysis
    description_analysis: DescriptionAnalysis
    keyword_analysis: Optional[KeywordAnalysis] = None
    content_analysis: ContentAnalysis
    suggestions: List[str]


class AnalyzeRequest(BaseModel):
    """Schema for a direct content analysis request."""

    content: str = Field(min_length=100)
    title: str = Field(min_length=10, max_length=100)
    meta_description: Optional[str] = Field(default=None, max_length=160)
    keywords: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "content": "# Brewing Coffee\n\nA sample post body about brewing coffee at home...",
                "title": "How to brew better coffee at home",
                "meta_description": "A practical guide to brewing coffee at home.",
                "keywords": "coffee",
            }
        }
    )

    def to_input(self) -> AnalysisInput:
        return AnalysisInput(
            content=self.content,
            title=self.title,
            meta_description=self.meta_description,
            keywords=self.keywords,
        )
