from typing import List

import pytest

from blogseo.schemas.audit import AuditOptions, IssueType, Severity
from blogseo.services.auditor.link_checker import LinkChecker, SampledLinkChecker
from blogseo.services.auditor.seo_auditor import SEOAuditor, audit_document

ALL_AUDITS = AuditOptions(content=True, technical=True, links=True)

BARE_PAGE = """<html><head>
<meta name="robots" content="NOINDEX, follow">
</head><body><h1>First</h1><h1>Second</h1><p>Too short.</p></body></html>"""


class RecordingLinkChecker(LinkChecker):
    """Reports a fixed set of links and remembers what it was asked."""

    def __init__(self, broken: List[str]):
        super().__init__()
        self.broken = broken
        self.calls = []

    async def find_broken(self, links, base_url=""):
        self.calls.append((list(links), base_url))
        return list(self.broken)


def _messages(issues):
    return [issue.message for issue in issues]


@pytest.mark.asyncio
async def test_default_options_skip_links(make_snapshot):
    result = await SEOAuditor().audit(make_snapshot())

    assert result.content_audit is not None
    assert result.technical_audit is not None
    assert result.links_audit is None
    assert result.url == "https://example.com/blog/home-coffee"
    assert result.load_time_ms == 850


@pytest.mark.asyncio
async def test_disabled_audits_are_none(make_snapshot):
    options = AuditOptions(content=False, technical=False, links=False)
    result = await SEOAuditor().audit(make_snapshot(), options)

    assert result.content_audit is None
    assert result.technical_audit is None
    assert result.links_audit is None
    assert result.issues == []


@pytest.mark.asyncio
async def test_content_audit_of_sample_page(make_snapshot):
    result = await SEOAuditor().audit(make_snapshot())
    content = result.content_audit

    assert content.title == "Home Coffee Guide"
    assert content.title_length == 17
    assert content.meta_description.startswith("How to brew great coffee")
    assert content.headings.h1 == ["Brewing coffee at home"]
    assert content.headings.h2 == ["Tools", "Beans"]
    assert content.images_count == 3
    assert content.images_without_alt_count == 2
    assert content.word_count < 300

    assert [(i.severity, i.message) for i in content.issues] == [
        (Severity.MEDIUM, "2 images have no alt text"),
        (Severity.MEDIUM, "The page content is too short"),
    ]
    assert all(i.type == IssueType.CONTENT for i in content.issues)


@pytest.mark.asyncio
async def test_content_audit_of_bare_page(make_snapshot):
    result = await SEOAuditor().audit(make_snapshot(html=BARE_PAGE))
    issues = result.content_audit.issues

    assert [(i.severity, i.message) for i in issues] == [
        (Severity.HIGH, "The page has no title tag"),
        (Severity.MEDIUM, "The page has no meta description"),
        (Severity.MEDIUM, "The page has multiple H1 headings"),
        (Severity.MEDIUM, "The page content is too short"),
    ]
    assert result.content_audit.title == ""
    assert result.content_audit.meta_description_length == 0


@pytest.mark.asyncio
async def test_content_audit_flags_long_title_and_missing_h1(make_snapshot):
    html = f"<html><head><title>{'x' * 61}</title></head><body></body></html>"
    result = await SEOAuditor().audit(make_snapshot(html=html))
    messages = _messages(result.content_audit.issues)

    assert "The page title is too long" in messages
    assert "The page has no H1 heading" in messages


@pytest.mark.asyncio
async def test_content_audit_word_threshold(make_snapshot):
    words = " ".join(["coffee"] * 300)
    html = (
        "<html><head><title>Coffee</title>"
        '<meta name="description" content="All about coffee.">'
        f"</head><body><h1>Coffee</h1><p>{words}</p></body></html>"
    )
    result = await SEOAuditor().audit(make_snapshot(html=html))

    assert result.content_audit.word_count == 301
    assert result.content_audit.issues == []


@pytest.mark.asyncio
async def test_technical_audit_of_sample_page(make_snapshot):
    result = await SEOAuditor().audit(make_snapshot())
    technical = result.technical_audit

    assert technical.is_responsive is True
    assert technical.has_canonical is True
    assert technical.indexing_allowed is True
    assert technical.headers.content_encoding == "gzip"
    assert technical.headers.cache_control == "max-age=3600"
    assert technical.issues == []


@pytest.mark.asyncio
async def test_technical_audit_of_bare_page(make_snapshot):
    snapshot = make_snapshot(html=BARE_PAGE, load_time_ms=4000, headers={})
    result = await SEOAuditor().audit(snapshot, AuditOptions(content=False))
    technical = result.technical_audit

    assert technical.is_responsive is False
    assert technical.has_canonical is False
    assert technical.indexing_allowed is False
    assert technical.headers.content_encoding is None
    assert [(i.severity, i.message) for i in technical.issues] == [
        (Severity.HIGH, "The page takes too long to load"),
        (Severity.HIGH, "The page has no viewport meta tag"),
        (Severity.MEDIUM, "The page has no canonical link"),
        (Severity.HIGH, "The page is marked noindex"),
    ]
    assert result.content_audit is None


@pytest.mark.asyncio
async def test_load_time_threshold_is_exclusive(make_snapshot):
    result = await SEOAuditor().audit(make_snapshot(load_time_ms=3000))
    assert "The page takes too long to load" not in _messages(
        result.technical_audit.issues
    )


@pytest.mark.asyncio
async def test_links_audit_classifies_links(make_snapshot):
    auditor = SEOAuditor(link_checker=SampledLinkChecker(every=10))
    result = await auditor.audit(make_snapshot(), ALL_AUDITS)
    links = result.links_audit

    # Fragment, javascript: and empty hrefs are ignored
    assert links.total_links == 5
    assert links.internal_links == 4
    assert links.external_links == 1
    assert links.nofollow_links == 1
    assert links.broken_links == ["/about"]
    assert [(i.type, i.severity) for i in links.issues] == [
        (IssueType.LINKS, Severity.HIGH)
    ]


@pytest.mark.asyncio
async def test_links_audit_passes_internal_links_to_checker(make_snapshot):
    checker = RecordingLinkChecker(broken=[])
    result = await SEOAuditor(link_checker=checker).audit(make_snapshot(), ALL_AUDITS)

    assert checker.calls == [
        (
            [
                "/about",
                "/blog/french-press",
                "https://example.com/contact",
                "blog/aeropress",
            ],
            "https://example.com/blog/home-coffee",
        )
    ]
    assert result.links_audit.broken_links == []
    assert result.links_audit.issues == []


@pytest.mark.asyncio
async def test_broken_links_are_capped(make_snapshot):
    checker = RecordingLinkChecker(broken=["/a", "/b", "/c", "/d", "/e"])
    result = await SEOAuditor(link_checker=checker).audit(make_snapshot(), ALL_AUDITS)

    assert result.links_audit.broken_links == ["/a", "/b", "/c"]
    assert result.links_audit.issues[0].message == "3 broken internal links found"


@pytest.mark.asyncio
async def test_issues_collects_all_sub_audits(make_snapshot):
    checker = RecordingLinkChecker(broken=["/about"])
    snapshot = make_snapshot(load_time_ms=5000)
    result = await audit_document(snapshot, ALL_AUDITS, link_checker=checker)

    assert [i.type for i in result.issues] == [
        IssueType.CONTENT,
        IssueType.CONTENT,
        IssueType.TECHNICAL,
        IssueType.LINKS,
    ]


@pytest.mark.asyncio
async def test_auditor_config_overrides_thresholds(make_snapshot):
    auditor = SEOAuditor({"min_content_words": 5, "slow_page_threshold_ms": 500})
    result = await auditor.audit(make_snapshot())

    assert "The page content is too short" not in _messages(
        result.content_audit.issues
    )
    assert "The page takes too long to load" in _messages(
        result.technical_audit.issues
    )


MALFORMED_URLS_PAGE = """<html><head>
<link rel="canonical" href="http://[bad">
</head><body>
<a href="/about">About</a>
<a href="http://[oops/">Broken markup</a>
</body></html>"""


@pytest.mark.asyncio
async def test_unparseable_href_counts_as_external(make_snapshot):
    checker = RecordingLinkChecker(broken=[])
    snapshot = make_snapshot(html=MALFORMED_URLS_PAGE)
    result = await audit_document(
        snapshot,
        AuditOptions(content=False, technical=False, links=True),
        link_checker=checker,
    )

    assert result.links_audit.total_links == 2
    assert result.links_audit.internal_links == 1
    assert result.links_audit.external_links == 1
    assert checker.calls[0][0] == ["/about"]


@pytest.mark.asyncio
async def test_unparseable_canonical_is_still_a_canonical(make_snapshot):
    snapshot = make_snapshot(html=MALFORMED_URLS_PAGE)
    result = await audit_document(snapshot, AuditOptions(content=False))

    assert result.technical_audit.has_canonical is True
    assert "The page has no canonical link" not in _messages(
        result.technical_audit.issues
    )
