from typing import Iterable, List, Optional

from loguru import logger

from blogseo.core.config import settings
from blogseo.core.exceptions import InvalidContentError
from blogseo.schemas.markup import MAX_ROBOTS_TXT_LENGTH
from blogseo.schemas.monitor import EntityType, SeoEntity

DEFAULT_ROBOTS_TXT = """# Default robots.txt
User-agent: *
Allow: /
Disallow: /admin/
Disallow: /dashboard/
"""

ENTITY_PATH_PREFIXES = {
    EntityType.POST: "/posts/",
    EntityType.PAGE: "/pages/",
    EntityType.CATEGORY: "/categories/",
}


def entity_path(entity: SeoEntity) -> str:
    return f"{ENTITY_PATH_PREFIXES[entity.entity_type]}{entity.slug}"


def collect_noindex_paths(entities: Iterable[SeoEntity]) -> List[str]:
    return [entity_path(e) for e in entities if e.no_index]


def validate_robots_txt(content: str) -> str:
    """
    Check a custom robots.txt body before it is stored.

    Raises:
        InvalidContentError: if the body is longer than 5000 characters
    """
    if len(content) > MAX_ROBOTS_TXT_LENGTH:
        raise InvalidContentError(
            f"robots.txt cannot be longer than {MAX_ROBOTS_TXT_LENGTH} characters"
        )
    return content


def generate_robots_txt(
    custom: Optional[str] = None,
    noindex_paths: Iterable[str] = (),
    sitemap_url: Optional[str] = None,
) -> str:
    """
    Build robots.txt.

    Args:
        custom: Stored robots.txt body; the default body is used when empty
        noindex_paths: Paths of entities marked noindex
        sitemap_url: Sitemap location, defaults to settings.SITEMAP_URL

    Returns:
        robots.txt text: the body, then a "# NoIndex Routes" block when
        there are noindex paths, then the Sitemap line
    """
    paths = list(noindex_paths)
    sections = [(custom or DEFAULT_ROBOTS_TXT).strip()]

    if paths:
        sections.append(
            "\n".join(["# NoIndex Routes"] + [f"Disallow: {path}" for path in paths])
        )

    sections.append(f"Sitemap: {sitemap_url or settings.SITEMAP_URL}")

    logger.info(f"robots.txt generated with {len(paths)} noindex routes")
    return "\n\n".join(sections) + "\n"
