from typing import Dict, Any, Iterable, List, Optional, Tuple, Union

from blogseo.core.config import settings
from blogseo.schemas.markup import SchemaType
from blogseo.schemas.monitor import EntityType, SeoEntity

SCHEMA_CONTEXT = "https://schema.org"
DESCRIPTION_LENGTH = 200


def generate_json_ld(
    schema_type: Union[SchemaType, str], markup: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Wrap stored markup into a JSON-LD object.

    Args:
        schema_type: One of the supported schema.org types
        markup: Properties of the object

    Returns:
        JSON-LD dict with @context and @type first

    Raises:
        ValueError: if schema_type is not supported
    """
    schema_type = SchemaType(schema_type)
    json_ld: Dict[str, Any] = {"@context": SCHEMA_CONTEXT, "@type": schema_type.value}
    json_ld.update(
        {key: value for key, value in (markup or {}).items() if key not in json_ld}
    )
    return json_ld


def generate_json_ld_list(
    items: Iterable[Tuple[Union[SchemaType, str], Dict[str, Any]]]
) -> List[Dict[str, Any]]:
    return [generate_json_ld(schema_type, markup) for schema_type, markup in items]


def default_schema(
    entity: SeoEntity,
    author: Optional[str] = None,
    publisher: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """
    Build the default structured data for an entity without stored markup.

    Posts become a BlogPosting, pages a WebPage; categories have no default.
    """
    description = entity.content[:DESCRIPTION_LENGTH]

    if entity.entity_type == EntityType.POST:
        markup: Dict[str, Any] = {
            "headline": entity.title,
            "description": description,
        }
        if entity.created_at is not None:
            markup["datePublished"] = entity.created_at.isoformat()
        if entity.updated_at is not None:
            markup["dateModified"] = entity.updated_at.isoformat()
        markup["author"] = {"@type": "Person", "name": author}
        markup["publisher"] = {
            "@type": "Organization",
            "name": publisher or settings.SITE_NAME,
        }
        return generate_json_ld(SchemaType.BLOG_POSTING, markup)

    if entity.entity_type == EntityType.PAGE:
        return generate_json_ld(
            SchemaType.WEB_PAGE, {"headline": entity.title, "description": description}
        )

    return None
