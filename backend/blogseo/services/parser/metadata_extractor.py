from typing import Dict, Any, List, Optional
from urllib.parse import urljoin
import re

from bs4 import BeautifulSoup
from bs4.element import PreformattedString, Tag

NON_VISIBLE_TAGS = ("script", "style", "noscript", "template")


def _find_meta(soup: BeautifulSoup, name: str) -> Optional[Tag]:
    return soup.find("meta", attrs={"name": re.compile(f"^{re.escape(name)}$", re.I)})


def _meta_content(soup: BeautifulSoup, name: str) -> Optional[str]:
    meta = _find_meta(soup, name)
    if meta and "content" in meta.attrs:
        return meta["content"].strip()
    return None


def _rel_values(tag: Tag) -> List[str]:
    # html.parser returns multi-valued rel as a list
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return [value.lower() for value in rel]


def extract_title(soup: BeautifulSoup) -> str:
    """
    Extract the text of the <title> tag.

    Args:
        soup: BeautifulSoup object

    Returns:
        Page title, empty string when missing
    """
    title_tag = soup.find("title")
    if title_tag:
        return title_tag.get_text().strip()
    return ""


def extract_description(soup: BeautifulSoup) -> str:
    """
    Extract the meta description.

    Args:
        soup: BeautifulSoup object

    Returns:
        Meta description content, empty string when missing
    """
    return _meta_content(soup, "description") or ""


def extract_headings(soup: BeautifulSoup, levels=("h1", "h2")) -> Dict[str, List[str]]:
    """
    Extract heading texts grouped by tag.

    Args:
        soup: BeautifulSoup object
        levels: Heading tags to collect

    Returns:
        Mapping of tag name to heading texts in document order
    """
    return {
        level: [h.get_text().strip() for h in soup.find_all(level)] for level in levels
    }


def extract_images(soup: BeautifulSoup) -> List[Dict[str, Optional[str]]]:
    """
    Extract images with their source and alternative text.

    Args:
        soup: BeautifulSoup object

    Returns:
        List of {"src", "alt"} dicts; alt is "" when absent
    """
    return [
        {"src": img.get("src"), "alt": (img.get("alt") or "").strip()}
        for img in soup.find_all("img")
    ]


def extract_viewport(soup: BeautifulSoup) -> Optional[str]:
    return _meta_content(soup, "viewport") or None


def extract_robots(soup: BeautifulSoup) -> Optional[str]:
    return _meta_content(soup, "robots")


def extract_canonical(soup: BeautifulSoup, url: str) -> Optional[str]:
    """
    Extract canonical URL.

    Args:
        soup: BeautifulSoup object
        url: URL of the page, used to resolve relative canonicals

    Returns:
        Absolute canonical URL, the raw href when it cannot be parsed,
        or None
    """
    for link in soup.find_all("link", href=True):
        href = link["href"].strip()
        if "canonical" in _rel_values(link) and href:
            try:
                return urljoin(url, href)
            except ValueError:
                return href
    return None


def extract_links(soup: BeautifulSoup) -> List[Dict[str, Any]]:
    """
    Extract anchors.

    Args:
        soup: BeautifulSoup object

    Returns:
        List of {"href", "text", "rel", "target"} dicts in document order
    """
    return [
        {
            "href": (a.get("href") or "").strip(),
            "text": a.get_text().strip(),
            "rel": _rel_values(a),
            "target": a.get("target"),
        }
        for a in soup.find_all("a")
    ]


def extract_body_text(soup: BeautifulSoup) -> str:
    """Visible text of the <body>, or of the whole document without one."""
    root = soup.body if soup.body else soup
    return " ".join(
        text
        for text in root.find_all(string=True)
        if not isinstance(text, PreformattedString)
        and text.parent.name not in NON_VISIBLE_TAGS
    )
