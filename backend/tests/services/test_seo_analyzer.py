import pytest

from blogseo.core.exceptions import InvalidContentError
from blogseo.schemas.analysis import AnalysisInput
from blogseo.services.analyzer import recommendations
from blogseo.services.analyzer.seo_analyzer import SEOAnalyzer, score_page

KEYWORD_CONTENT = "# Guide\n\n![img](a.png)\n\n" + "garden " * 10


def test_title_of_ideal_length():
    analysis = SEOAnalyzer().analyze_title("a" * 45)

    assert analysis.ideal is True
    assert analysis.score == 67
    assert analysis.contains_keyword is False


def test_title_score_is_capped():
    analysis = SEOAnalyzer().analyze_title("a" * 80)

    assert analysis.ideal is False
    assert analysis.score == 100


def test_title_keyword_match_is_case_insensitive():
    analysis = SEOAnalyzer().analyze_title("My GARDEN ideas", "garden")
    assert analysis.contains_keyword is True


def test_description_falls_back_to_content():
    result = score_page(
        AnalysisInput(content="word " * 40, title="A reasonable title for testing")
    )

    assert result.description_analysis.length == 160
    assert result.description_analysis.ideal is True
    assert result.description_analysis.score == 100


def test_has_h1_requires_single_hash():
    analyzer = SEOAnalyzer()

    h1 = analyzer.analyze_content("# Heading\n\nBody text")
    h2 = analyzer.analyze_content("## Heading\n\nBody text")

    assert h1.has_h1 is True
    assert h1.heading_count == 1
    assert h2.has_h1 is False
    assert h2.heading_count == 1


def test_content_signals():
    analysis = SEOAnalyzer().analyze_content(KEYWORD_CONTENT)

    assert analysis.word_count == 13
    assert analysis.paragraph_count == 3
    assert analysis.image_count == 1
    assert 0 <= analysis.readability_score <= 100


def test_keyword_usage():
    analysis = SEOAnalyzer().analyze_keyword_usage(KEYWORD_CONTENT, "garden", 13)

    assert analysis.count == 10
    assert analysis.density == 76.92
    assert analysis.ideal is False
    assert analysis.score == 100
    assert len(analysis.positions) == 5


def test_keyword_usage_rounds_density_halves_up():
    content = "garden " + "word " * 31
    analysis = SEOAnalyzer().analyze_keyword_usage(content, "garden", 32)

    assert analysis.density == 3.13
    assert analysis.ideal is False


def test_keyword_usage_ideal_density():
    content = "garden " + "word " * 99
    analysis = SEOAnalyzer().analyze_keyword_usage(content, "garden", 100)

    assert analysis.density == 1.0
    assert analysis.ideal is True
    assert analysis.score == 40


def test_score_page():
    result = score_page(
        AnalysisInput(
            content=KEYWORD_CONTENT,
            title="a" * 45,
            meta_description="d" * 120,
            keywords="Garden, python",
        )
    )

    # 67*0.3 + 75*0.2 + 100*0.2 + 1.3*0.2 + 20 + 10 = 85.36
    assert result.overall_score == 85
    assert result.analysis_id.startswith("seo-")
    assert result.suggestions == [
        recommendations.KEYWORD_NOT_IN_TITLE,
        recommendations.CONTENT_SHORT,
        recommendations.DENSITY_HIGH,
    ]


def test_score_page_without_keywords():
    result = score_page(AnalysisInput(content=KEYWORD_CONTENT, title="a" * 45))

    assert result.keyword_analysis is None
    assert recommendations.KEYWORD_NOT_IN_TITLE not in result.suggestions


def test_score_page_is_idempotent():
    data = AnalysisInput(
        content=KEYWORD_CONTENT, title="Garden notes", keywords="garden"
    )

    first = score_page(data)
    second = score_page(data)

    assert first.model_dump(exclude={"analysis_id"}) == second.model_dump(
        exclude={"analysis_id"}
    )
    assert first.analysis_id != second.analysis_id


def test_overall_score_is_clamped():
    weights = {
        "title": 5,
        "description": 5,
        "keyword": 5,
        "content_length": 5,
        "h1_bonus": 20,
        "image_bonus": 10,
    }
    analyzer = SEOAnalyzer({"scoring_weights": weights})
    result = analyzer.analyze(
        AnalysisInput(content=KEYWORD_CONTENT, title="a" * 45, keywords="garden")
    )

    assert result.overall_score == 100

    low = score_page(AnalysisInput(content="x", title="y"))
    assert low.overall_score == 0


@pytest.mark.parametrize(
    "content, title",
    [("", "A valid title"), ("   \n", "A valid title"), ("Some content", "  ")],
)
def test_blank_input_is_rejected(content, title):
    with pytest.raises(InvalidContentError):
        score_page(AnalysisInput(content=content, title=title))


def test_invalid_content_error_is_value_error():
    with pytest.raises(ValueError):
        score_page(AnalysisInput(content="", title="A valid title"))
