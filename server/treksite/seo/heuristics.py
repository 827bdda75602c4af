"""
Word-frequency SEO heuristics.

Everything here is a pure function of its arguments: no I/O, no clock reads
except the blog publication stamp in ``generate_schema``.
"""

import re
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Optional

from ..schemas.seo import OgTags, SeoReport, SeoRequest, TwitterTags

STOPWORDS = frozenset({
    "the", "and", "this", "that", "with", "from", "have", "been",
    "will", "your", "which", "about", "more", "also", "trek",
})

MIN_KEYWORD_LENGTH = 4
MIN_KEYWORD_COUNT = 2
MAX_KEYWORDS = 10
MAX_LONG_TAILS = 15

META_TITLE_LIMIT = 60
META_DESCRIPTION_LIMIT = 160
ELLIPSIS = "..."

READABILITY_BASE = 60
READABILITY_MAX = 100

_HTML_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")
_SENTENCE_END = re.compile(r"[.!?]+")
_PARAGRAPH_BREAK = re.compile(r"\n\n+")


def _truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit - len(ELLIPSIS)] + ELLIPSIS
    return text


def _word_count(content: str) -> int:
    # Splitting an empty string still yields one piece
    return len(_WHITESPACE.split(content))


def strip_html(content: str) -> str:
    return _HTML_TAG.sub("", content)


def generate_slug(title: str) -> str:
    """
    Build a URL slug: lowercase, punctuation removed, whitespace and
    underscores turned into single hyphens, no leading/trailing hyphen.

    >>> generate_slug("The Ultimate EBC Guide!!")
    'the-ultimate-ebc-guide'
    """
    slug = title.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"[\s_]+", "-", slug)
    slug = re.sub(r"-{2,}", "-", slug)
    return slug.strip("-")


def extract_keywords(content: str, current_keywords: Optional[list[str]] = None) -> list[str]:
    """
    Return the most frequent content words.

    Words shorter than four characters and stopwords are ignored; a word must
    appear at least twice. Ties keep first-occurrence order. A non-empty
    ``current_keywords`` list is returned unchanged.
    """
    if current_keywords:
        return list(current_keywords)

    text = re.sub(r"[^\w\s]", " ", strip_html(content).lower(), flags=re.ASCII)
    words = [
        word for word in _WHITESPACE.split(text)
        if len(word) >= MIN_KEYWORD_LENGTH and word not in STOPWORDS
    ]

    frequency = Counter(words)
    ranked = sorted(frequency.items(), key=lambda item: -item[1])
    return [word for word, count in ranked if count >= MIN_KEYWORD_COUNT][:MAX_KEYWORDS]


def generate_long_tail_keywords(title: str, keywords: list[str], region: Optional[str] = None) -> list[str]:
    """Template variations of each keyword plus title-based phrases, deduplicated."""
    long_tails = []
    for keyword in keywords:
        long_tails.extend([
            f"{keyword} guide",
            f"best {keyword}",
            f"{keyword} tips",
            f"how to {keyword}",
        ])
        if region:
            long_tails.extend([f"{keyword} in {region}", f"{region} {keyword}"])

    title_words = " ".join(title.split()[:3])
    if title_words:
        long_tails.append(f"{title_words} guide")
        if region:
            long_tails.append(f"{title_words} in {region}")

    return list(dict.fromkeys(long_tails))[:MAX_LONG_TAILS]


def generate_meta_title(title: str, keyword: Optional[str] = None) -> str:
    """
    Truncate the title to 60 characters and prefix the top keyword when it is
    missing from the title and the result still fits.
    """
    meta_title = _truncate(title, META_TITLE_LIMIT)

    if keyword and keyword.lower() not in meta_title.lower():
        prefixed = f"{keyword} - {meta_title}"
        if len(prefixed) <= META_TITLE_LIMIT:
            meta_title = prefixed

    return meta_title


def generate_meta_description(content: str, title: str) -> str:
    """First substantial sentence of the content, mentioning the title, at most 160 characters."""
    text = strip_html(content)
    sentences = [s.strip() for s in _SENTENCE_END.split(text) if len(s.strip()) > 10]
    description = sentences[0] if sentences else text[:META_DESCRIPTION_LIMIT]

    if title.split(" ")[0] not in description:
        description = f"{title[:20]}... {description}"

    return _truncate(description, META_DESCRIPTION_LIMIT)


def analyze_readability(content: str) -> int:
    """Additive structure score starting at 60, capped at 100."""
    words = _word_count(content)
    sentences = len(_SENTENCE_END.split(content))
    paragraphs = len(_PARAGRAPH_BREAK.split(content))

    score = READABILITY_BASE
    if words > 300:
        score += 10
    if words > 500:
        score += 5
    if sentences > 20:
        score += 5
    if paragraphs > 3:
        score += 10

    if words / paragraphs > 150:
        score -= 10

    return min(score, READABILITY_MAX)


def identify_missing_sections(content: str, content_type: str) -> list[str]:
    """Sections whose marker words never appear in the content."""
    missing = []
    lower = content.lower()

    if content_type == "trek":
        if "itinerary" not in lower:
            missing.append("Day-by-day itinerary")
        if "cost" not in lower and "price" not in lower:
            missing.append("Pricing information")
        if "difficulty" not in lower:
            missing.append("Difficulty level information")
        if "best time" not in lower and "season" not in lower:
            missing.append("Best time to visit")
        if "altitude" not in lower:
            missing.append("Altitude information")
        if "map" not in lower and "route" not in lower:
            missing.append("Map or route visualization")

    if content_type == "blog":
        if "image" not in lower and "photo" not in lower:
            missing.append("Supporting images/photos")
        if len(content.split("\n")) < 5:
            missing.append("Better formatting/headers")
        if "tips" not in lower and "advice" not in lower:
            missing.append("Practical tips or advice")

    if "conclusion" not in lower and len(content) > 1000:
        missing.append("Conclusion section")
    if "faq" not in lower:
        missing.append("FAQ section")

    return missing


def generate_content_improvements(content: str, content_type: str) -> list[str]:
    improvements = []
    words = _word_count(content)

    if words < 300:
        improvements.append("Expand content to at least 300 words for better SEO")
    elif words < 500:
        improvements.append("Consider adding more detailed information (500+ words recommended)")

    if len(re.findall(r"#+", content)) < 3:
        improvements.append("Add more heading sections to improve readability")

    if "•" not in content and "-" not in content:
        improvements.append("Add bullet points or lists for better readability")

    if content_type == "trek":
        improvements.extend([
            "Add specific elevation gain/loss data",
            "Include accommodation details and options",
            "Add information about local culture or wildlife",
        ])

    if content_type == "blog":
        improvements.extend([
            "Add personal experiences or anecdotes",
            "Include practical examples or case studies",
            "Add actionable takeaways for readers",
        ])

    return improvements


def generate_internal_link_suggestions(region: Optional[str] = None) -> list[str]:
    suggestions = []
    if region:
        suggestions.append(f"Link to {region} region guide page")
        suggestions.append(f"Link to other treks in {region}")

    suggestions.extend([
        "Link to trek preparation guide",
        "Link to packing list article",
        "Link to accommodation guide",
        "Link to booking/pricing page",
    ])
    return suggestions


def _content_url(site_url: str, content_type: str, slug: str) -> str:
    if content_type == "trek":
        return f"{site_url}/treks/{slug}"
    if content_type == "blog":
        return f"{site_url}/blog/{slug}"
    return f"{site_url}/{slug}"


def generate_schema(
    request: SeoRequest,
    meta_description: str,
    slug: str,
    *,
    site_name: str,
    site_url: str,
) -> dict[str, Any]:
    """
    Build JSON-LD structured data.

    Treks become a TouristAttraction, blog posts a BlogPosting and anything
    else a WebPage. A rating block is only emitted for a real rating.
    """
    base = {
        "@context": "https://schema.org",
        "name": request.title,
        "description": meta_description or request.content[:META_DESCRIPTION_LIMIT],
        "url": _content_url(site_url, request.content_type, slug or generate_slug(request.title)),
    }

    if request.content_type == "trek":
        schema = {
            **base,
            "@type": "TouristAttraction",
            "areaServed": {"@type": "Place", "name": request.region or "Nepal"},
            "priceRange": "$$",
        }
        if request.rating is not None:
            schema["aggregateRating"] = {
                "@type": "AggregateRating",
                "ratingValue": str(request.rating),
                "reviewCount": str(request.review_count or 0),
            }
        return schema

    if request.content_type == "blog":
        return {
            **base,
            "@type": "BlogPosting",
            "datePublished": datetime.now(timezone.utc).isoformat(),
            "author": {"@type": "Organization", "name": site_name},
            "articleBody": strip_html(request.content)[:500],
        }

    return {**base, "@type": "WebPage"}


def generate_local_suggestions(request: SeoRequest, *, site_name: str, site_url: str) -> SeoReport:
    """Run every heuristic over one piece of content."""
    slug = generate_slug(request.title)
    keywords = extract_keywords(request.content, request.current_keywords)
    long_tails = generate_long_tail_keywords(request.title, keywords, request.region)
    meta_title = generate_meta_title(request.title, keywords[0] if keywords else None)
    meta_description = generate_meta_description(request.content, request.title)

    recommendations = [f'Update meta title to: "{meta_title}"']
    if keywords:
        recommendations.append(f"Add keywords: {', '.join(keywords)}")
    if long_tails:
        recommendations.append(f"Consider using long-tail keywords: {', '.join(long_tails[:3])}")
    recommendations.extend([
        "Ensure all images have descriptive alt text",
        "Add internal links to related pages",
    ])

    return SeoReport(
        meta_title=meta_title,
        meta_description=meta_description,
        slug=slug,
        keywords=keywords,
        long_tail_keywords=long_tails,
        schema_markup=generate_schema(
            request, meta_description, slug, site_name=site_name, site_url=site_url
        ),
        og_tags=OgTags(og_title=request.title[:100], og_description=meta_description),
        twitter_tags=TwitterTags(
            twitter_title=request.title[:70],
            twitter_description=meta_description[:100],
        ),
        content_improvements=generate_content_improvements(request.content, request.content_type),
        internal_link_suggestions=generate_internal_link_suggestions(request.region),
        missing_sections=identify_missing_sections(request.content, request.content_type),
        readability_score=analyze_readability(request.content),
        recommendations=recommendations,
        strategy="local",
    )
