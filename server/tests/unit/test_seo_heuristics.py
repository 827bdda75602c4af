"""Unit tests for the SEO word-frequency heuristics."""

import pytest

from treksite.schemas.seo import SeoRequest
from treksite.seo.heuristics import (
    analyze_readability,
    extract_keywords,
    generate_content_improvements,
    generate_internal_link_suggestions,
    generate_local_suggestions,
    generate_long_tail_keywords,
    generate_meta_description,
    generate_meta_title,
    generate_schema,
    generate_slug,
    identify_missing_sections,
)


@pytest.mark.parametrize(
    "title, expected",
    [
        ("The Ultimate EBC Guide!!", "the-ultimate-ebc-guide"),
        ("  Annapurna -- Circuit  ", "annapurna-circuit"),
        ("snake_case title", "snake-case-title"),
        ("Café Trek", "caf-trek"),
        ("!!!", ""),
    ],
)
def test_generate_slug(title, expected):
    assert generate_slug(title) == expected


def test_extract_keywords_counts_repeated_long_words_only():
    content = (
        "Everest views. Everest sunrise. Sherpa villages and Sherpa culture. "
        "The trek trek trek is long. Yaks yaks."
    )
    # "trek" is a stopword; "yaks" is long enough; "is"/"the" are too short
    assert extract_keywords(content) == ["everest", "sherpa", "yaks"]


def test_extract_keywords_limits_to_ten():
    content = " ".join(f"word{i} word{i}" for i in range(15))
    assert len(extract_keywords(content)) == 10


def test_current_keywords_override_extraction():
    assert extract_keywords("Everest Everest", ["nepal trekking"]) == ["nepal trekking"]


def test_long_tails_are_deduplicated_and_capped():
    long_tails = generate_long_tail_keywords("Everest Base Camp Trek", ["everest", "sherpa", "glacier"], "Khumbu")
    assert len(long_tails) == 15
    assert len(set(long_tails)) == len(long_tails)
    assert long_tails[:4] == ["everest guide", "best everest", "everest tips", "how to everest"]


def test_long_tails_include_title_phrase():
    long_tails = generate_long_tail_keywords("Mardi Himal Trek Guide", [], "Annapurna")
    assert long_tails == ["Mardi Himal Trek guide", "Mardi Himal Trek in Annapurna"]


def test_meta_title_truncates_long_titles():
    title = "A" * 90
    meta = generate_meta_title(title, "everest")
    assert len(meta) <= 60
    assert meta.endswith("...")


def test_meta_title_prefixes_keyword_when_it_fits():
    assert generate_meta_title("Base Camp Trek", "everest") == "everest - Base Camp Trek"
    assert generate_meta_title("Everest Base Camp", "everest") == "Everest Base Camp"


def test_meta_description_uses_first_substantial_sentence():
    content = "Hi. Everest Base Camp is the classic Himalayan trek! More text follows."
    assert generate_meta_description(content, "Everest Base Camp") == "Everest Base Camp is the classic Himalayan trek"


def test_meta_description_mentions_title_and_is_capped():
    content = "A very long sentence " * 20
    description = generate_meta_description(content, "Langtang Valley Trek")
    assert description.startswith("Langtang Valley Trek... ")
    assert len(description) == 160
    assert description.endswith("...")


def test_meta_description_ignores_html_tags():
    description = generate_meta_description("<p>Langtang valley is closest to Kathmandu.</p>", "Langtang")
    assert "<p>" not in description


def test_readability_base_and_bonuses():
    assert analyze_readability("Short text.") == 60
    long_text = "\n\n".join(["word " * 100 + "." for _ in range(6)])
    # 600 words: +10 +5, 6 paragraphs: +10
    assert analyze_readability(long_text) == 85


def test_readability_penalizes_wall_of_text():
    assert analyze_readability("word " * 400) == 60  # +10 for length, -10 for one huge paragraph


def test_missing_sections_for_trek():
    missing = identify_missing_sections("Itinerary and price and altitude. FAQ.", "trek")
    assert "Day-by-day itinerary" not in missing
    assert "Pricing information" not in missing
    assert "Difficulty level information" in missing
    assert "Best time to visit" in missing
    assert "FAQ section" not in missing


def test_missing_sections_for_blog():
    missing = identify_missing_sections("one line", "blog")
    assert missing == [
        "Supporting images/photos",
        "Better formatting/headers",
        "Practical tips or advice",
        "FAQ section",
    ]


def test_content_improvements():
    improvements = generate_content_improvements("short", "trek")
    assert improvements[0] == "Expand content to at least 300 words for better SEO"
    assert "Add bullet points or lists for better readability" in improvements
    assert "Add specific elevation gain/loss data" in improvements

    with_lists = generate_content_improvements("# A\n## B\n### C\n- item", "page")
    assert "Add more heading sections to improve readability" not in with_lists
    assert "Add bullet points or lists for better readability" not in with_lists


def test_internal_link_suggestions():
    assert generate_internal_link_suggestions("Everest")[:2] == [
        "Link to Everest region guide page",
        "Link to other treks in Everest",
    ]
    assert len(generate_internal_link_suggestions()) == 4


def test_trek_schema_only_rates_when_rating_given():
    request = SeoRequest(title="Everest Base Camp", content="", content_type="trek", region="Khumbu")
    schema = generate_schema(request, "desc", "everest-base-camp", site_name="Nepal Treks", site_url="https://example.com")
    assert schema["@type"] == "TouristAttraction"
    assert schema["url"] == "https://example.com/treks/everest-base-camp"
    assert schema["areaServed"]["name"] == "Khumbu"
    assert "aggregateRating" not in schema

    rated = request.model_copy(update={"rating": 4.9, "review_count": 342})
    schema = generate_schema(rated, "desc", "everest-base-camp", site_name="Nepal Treks", site_url="https://example.com")
    assert schema["aggregateRating"]["ratingValue"] == "4.9"
    assert schema["aggregateRating"]["reviewCount"] == "342"


def test_blog_schema_names_the_site_as_author():
    request = SeoRequest(title="Packing List", content="<b>Bring layers</b>", content_type="blog")
    schema = generate_schema(request, "desc", "packing-list", site_name="Himalaya Co", site_url="https://example.com")
    assert schema["@type"] == "BlogPosting"
    assert schema["author"]["name"] == "Himalaya Co"
    assert schema["articleBody"] == "Bring layers"
    assert schema["url"] == "https://example.com/blog/packing-list"


def test_generate_local_suggestions_report():
    request = SeoRequest(
        title="The Ultimate EBC Guide!!",
        content="Everest Base Camp is iconic. Everest views and Sherpa culture. Sherpa guides lead the way.",
        content_type="trek",
        region="Everest",
    )
    report = generate_local_suggestions(request, site_name="Nepal Treks", site_url="https://nepaltreks.com")

    assert report.slug == "the-ultimate-ebc-guide"
    assert report.keywords == ["everest", "sherpa"]
    assert report.strategy == "local"
    assert report.meta_title == "everest - The Ultimate EBC Guide!!"
    assert report.og_tags.og_description == report.meta_description
    assert report.recommendations[0] == f'Update meta title to: "{report.meta_title}"'
    assert 0 <= report.readability_score <= 100
