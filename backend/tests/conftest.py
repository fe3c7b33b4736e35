from typing import Callable, Dict, Optional

import pytest

from blogseo.schemas.audit import DocumentSnapshot

SAMPLE_URL = "https://example.com/blog/home-coffee"

SAMPLE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>Home Coffee Guide</title>
    <meta name="description" content="How to brew great coffee at home with simple tools.">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <link rel="canonical" href="/blog/home-coffee">
    <style>body { font-family: sans-serif; }</style>
</head>
<body>
    <h1>Brewing coffee at home</h1>
    <h2>Tools</h2>
    <h2>Beans</h2>
    <p>Good coffee starts with fresh beans and clean water.</p>
    <img src="/img/kettle.jpg" alt="A gooseneck kettle">
    <img src="/img/grinder.jpg">
    <img src="/img/cup.jpg" alt="  ">
    <a href="/about">About</a>
    <a href="/blog/french-press">French press</a>
    <a href="https://example.com/contact">Contact</a>
    <a href="blog/aeropress">AeroPress</a>
    <a href="https://other.org/beans" rel="nofollow noopener">Beans shop</a>
    <a href="#top">Back to top</a>
    <a href="javascript:void(0)">Menu</a>
    <a href="">Empty</a>
    <script>var tracking = "not visible text";</script>
</body>
</html>
"""

SAMPLE_MARKDOWN_POST = """# Brewing Coffee at Home

Brewing coffee at home is easy. You need fresh beans, a grinder and hot water.

![A pour-over setup](/img/pour-over.jpg)

## Choosing beans

Pick whole beans roasted in the last few weeks. Grind them right before you brew.
"""


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture
def sample_markdown_post() -> str:
    return SAMPLE_MARKDOWN_POST


@pytest.fixture
def make_snapshot() -> Callable[..., DocumentSnapshot]:
    """Factory for page snapshots; defaults to the sample page."""

    def _make(
        html: str = SAMPLE_HTML,
        url: str = SAMPLE_URL,
        load_time_ms: int = 850,
        headers: Optional[Dict[str, str]] = None,
    ) -> DocumentSnapshot:
        return DocumentSnapshot(
            url=url,
            html=html,
            response_headers=headers
            if headers is not None
            else {"content-encoding": "gzip", "cache-control": "max-age=3600"},
            load_time_ms=load_time_ms,
            status_code=200,
        )

    return _make
