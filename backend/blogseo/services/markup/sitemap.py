import xml.etree.ElementTree as ET
from typing import Iterable, Optional

from loguru import logger

from blogseo.core.config import settings
from blogseo.schemas.monitor import EntityType, SeoEntity
from blogseo.services.markup.robots import entity_path

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

# (change frequency, priority) per entity kind, in sitemap order
SITEMAP_HINTS = {
    EntityType.POST: ("weekly", "0.8"),
    EntityType.PAGE: ("monthly", "0.6"),
    EntityType.CATEGORY: ("weekly", "0.7"),
}
ENTITY_ORDER = list(SITEMAP_HINTS)


def generate_sitemap(
    entities: Iterable[SeoEntity], base_url: Optional[str] = None
) -> str:
    """
    Build sitemap.xml for every indexable entity.

    Posts come first, then pages, then categories; order within a kind
    follows the input.

    Args:
        entities: Stored posts, pages and categories
        base_url: Site root, defaults to settings.SITE_URL

    Returns:
        Sitemap XML document
    """
    base_url = (base_url or settings.SITE_URL).rstrip("/")
    indexable = sorted(
        (e for e in entities if not e.no_index),
        key=lambda e: ENTITY_ORDER.index(e.entity_type),
    )

    urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
    for entity in indexable:
        changefreq, priority = SITEMAP_HINTS[entity.entity_type]
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = f"{base_url}{entity_path(entity)}"

        modified = entity.updated_at or entity.created_at
        if modified is not None:
            ET.SubElement(url, "lastmod").text = modified.isoformat()

        ET.SubElement(url, "changefreq").text = changefreq
        ET.SubElement(url, "priority").text = priority

    logger.info(f"Sitemap generated with {len(indexable)} URLs")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(
        urlset, encoding="unicode"
    )
