from typing import Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "BlogSEO"

    # Site identity
    SITE_NAME: str = "BlogSEO"
    SITE_URL: str = "http://localhost:3000"
    SITEMAP_URL: Optional[str] = None

    # Audit settings
    AUDIT_USER_AGENT: str = "SEO-Audit-Bot/1.0"
    AUDIT_TIMEOUT: int = 30
    AUDIT_MAX_RETRIES: int = 2
    SLOW_PAGE_THRESHOLD_MS: int = 3000
    MIN_CONTENT_WORDS: int = 300
    MAX_TITLE_LENGTH: int = 60

    # Link checking
    LINK_CHECKER: str = "sampled"  # "sampled" or "http"
    LINK_CHECK_SAMPLE_EVERY: int = 10
    LINK_CHECK_TIMEOUT: int = 10
    LINK_CHECK_CONCURRENCY: int = 5

    # Health check / monitoring
    DUPLICATE_SIMILARITY_THRESHOLD: float = 0.8
    HEALTH_CHECK_BATCH_SIZE: int = 50
    HEALTH_CHECK_DUPLICATE_LIMIT: int = 20
    HEALTH_CHECK_ALT_TEXT_LIMIT: int = 20
    MONITOR_MAX_ISSUES: int = 100

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    @field_validator("LINK_CHECKER", mode="before")
    def normalize_link_checker(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().lower()
        raise ValueError(v)

    @model_validator(mode="after")
    def assemble_sitemap_url(self) -> "Settings":
        if not self.SITEMAP_URL:
            self.SITEMAP_URL = f"{self.SITE_URL.rstrip('/')}/sitemap.xml"
        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


settings = Settings()
