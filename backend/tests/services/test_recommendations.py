from blogseo.schemas.analysis import (
    ContentAnalysis,
    DescriptionAnalysis,
    KeywordAnalysis,
    TitleAnalysis,
)
from blogseo.schemas.optimization import (
    CurrentSeoData,
    KeywordReport,
    SuggestionPriority,
)
from blogseo.services.analyzer import recommendations
from blogseo.services.analyzer.recommendations import (
    generate_optimization_suggestions,
    generate_optimized_metadata,
    generate_suggestions,
)


def _title(length, ideal, contains_keyword=True):
    return TitleAnalysis(
        length=length, ideal=ideal, contains_keyword=contains_keyword, score=50
    )


def _description(length, ideal):
    return DescriptionAnalysis(
        length=length, ideal=ideal, contains_keyword=False, score=50
    )


def _content(word_count=500, has_h1=True, image_count=1):
    return ContentAnalysis(
        word_count=word_count,
        paragraph_count=5,
        heading_count=2,
        has_h1=has_h1,
        image_count=image_count,
        readability_score=80.0,
    )


def test_sound_content_gets_positive_message():
    suggestions = generate_suggestions(
        _title(50, True), _description(130, True), _content()
    )
    assert suggestions == [recommendations.CONTENT_OK]


def test_every_rule_fires_in_order():
    keyword = KeywordAnalysis(count=0, density=0.2, ideal=False, positions=[], score=8)

    suggestions = generate_suggestions(
        _title(20, False, contains_keyword=False),
        _description(200, False),
        _content(word_count=100, has_h1=False, image_count=0),
        keyword,
    )

    assert suggestions == [
        recommendations.TITLE_SHORT,
        recommendations.KEYWORD_NOT_IN_TITLE,
        recommendations.DESCRIPTION_LONG,
        recommendations.CONTENT_SHORT,
        recommendations.MISSING_H1,
        recommendations.MISSING_IMAGE,
        recommendations.DENSITY_LOW,
        recommendations.KEYWORD_NOT_IN_CONTENT,
    ]


def test_long_title_short_description_high_density():
    keyword = KeywordAnalysis(
        count=9,
        density=4.5,
        ideal=False,
        positions=[{"position": 0, "context": "garden"}],
        score=100,
    )

    suggestions = generate_suggestions(
        _title(70, False), _description(60, False), _content(), keyword
    )

    assert suggestions == [
        recommendations.TITLE_LONG,
        recommendations.DESCRIPTION_SHORT,
        recommendations.DENSITY_HIGH,
    ]


def test_keyword_title_rule_needs_keyword_analysis():
    suggestions = generate_suggestions(
        _title(50, True, contains_keyword=False), _description(130, True), _content()
    )
    assert suggestions == [recommendations.CONTENT_OK]


def test_optimization_suggestions_put_high_priority_first():
    report = KeywordReport(
        top_keywords=["garden", "python"],
        keyword_density=0.2,
        content_length=500,
        word_count=100,
    )

    suggestions = generate_optimization_suggestions(
        "Body " * 50, "Short title", report, CurrentSeoData()
    )

    assert [s.type for s in suggestions] == [
        "title",
        "keyword",
        "metadata",
        "content",
        "metadata",
    ]
    assert [s.priority for s in suggestions] == [
        SuggestionPriority.HIGH,
        SuggestionPriority.HIGH,
        SuggestionPriority.HIGH,
        SuggestionPriority.MEDIUM,
        SuggestionPriority.MEDIUM,
    ]
    assert '"garden"' in suggestions[0].suggestion
    assert "Short title | garden, python" in suggestions[2].suggestion
    assert ("Body " * 50)[:160] in suggestions[4].suggestion


def test_optimization_suggestions_skip_metadata_without_seo_data():
    report = KeywordReport(keyword_density=1.0, word_count=1000)

    suggestions = generate_optimization_suggestions(
        "Body", "A title that is comfortably longer than forty chars", report
    )

    assert suggestions == []


def test_optimization_suggestions_fallback_focus():
    suggestions = generate_optimization_suggestions(
        "Body", "Short", KeywordReport(word_count=1000, keyword_density=1.0)
    )

    assert len(suggestions) == 1
    assert "your primary keyword" in suggestions[0].suggestion


def test_stored_metadata_is_not_flagged():
    report = KeywordReport(keyword_density=1.0, word_count=1000)
    stored = CurrentSeoData(meta_title="Stored title", meta_description="Stored")

    suggestions = generate_optimization_suggestions(
        "Body", "A title that is comfortably longer than forty chars", report, stored
    )

    assert suggestions == []


def test_optimized_metadata():
    report = KeywordReport(top_keywords=["garden", "python", "cloud", "market"])
    content = "Long body text. " * 20

    metadata = generate_optimized_metadata(
        "Brewing at home", content, report, site_name="BlogSEO"
    )

    assert metadata.meta_title == "Brewing at home | garden | BlogSEO"
    assert metadata.meta_description == content[:140] + "..."
    assert metadata.focus_keyword == "garden"
    assert metadata.secondary_keywords == ["python", "cloud"]


def test_optimized_metadata_keeps_stored_values():
    report = KeywordReport(top_keywords=["garden"])
    stored = CurrentSeoData(meta_title="Stored", meta_description="Stored description")

    metadata = generate_optimized_metadata("Title", "Body", report, stored, site_name="")

    assert metadata.meta_title == "Stored"
    assert metadata.meta_description == "Stored description"
    assert metadata.secondary_keywords == []


def test_optimized_metadata_without_keywords():
    metadata = generate_optimized_metadata(
        "Brewing at home", "Body", KeywordReport(), site_name="BlogSEO"
    )

    assert metadata.meta_title == "Brewing at home | BlogSEO"
    assert metadata.focus_keyword is None
