from enum import Enum
from typing import Optional, Dict, Any

from pydantic import BaseModel, Field

from blogseo.schemas.monitor import EntityType

MAX_ROBOTS_TXT_LENGTH = 5000


class SchemaType(str, Enum):
    ARTICLE = "Article"
    NEWS_ARTICLE = "NewsArticle"
    BLOG_POSTING = "BlogPosting"
    WEB_PAGE = "WebPage"
    ABOUT_PAGE = "AboutPage"
    CONTACT_PAGE = "ContactPage"
    BREADCRUMB_LIST = "BreadcrumbList"
    FAQ_PAGE = "FAQPage"
    PRODUCT = "Product"


class SchemaMarkupRequest(BaseModel):
    """Structured data attached to an entity, or site-wide when entity_type is None."""

    entity_type: Optional[EntityType] = None
    entity_id: Optional[str] = None
    schema_type: SchemaType
    markup_data: Dict[str, Any] = Field(default_factory=dict)


class RobotsTxtUpdate(BaseModel):
    content: str = Field(max_length=MAX_ROBOTS_TXT_LENGTH)
