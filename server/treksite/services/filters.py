"""
In-memory derived views over fetched entity lists.

None of these functions mutate their input; each returns a new list.
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

SORT_KEYS = ("popular", "price-low", "price-high", "rating", "duration")
ALL_CATEGORIES = "all"

_LEADING_INT = re.compile(r"\s*(\d+)")


@dataclass(frozen=True)
class TrekFilter:
    """Listing parameters as they arrive in the query string."""

    search: str = ""
    region: str = ""
    difficulty: str = ""
    sort: str = "popular"


def _norm(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def _matches_search(trek: Any, needle: str) -> bool:
    fields = (trek.name, trek.region, trek.short_description, trek.description)
    return any(needle in (field or "").lower() for field in fields)


def duration_days(duration: Optional[str]) -> Optional[int]:
    """Leading integer of a free-text duration ("14 Days" -> 14)."""
    match = _LEADING_INT.match(duration or "")
    return int(match.group(1)) if match else None


def sort_treks(treks: Sequence[Any], sort: str) -> list[Any]:
    """
    Sort treks by key. Unknown keys sort as ``popular``.

    Every sort is stable, so ties keep the source order. Treks without a price,
    rating or parseable duration go last.
    """
    items = list(treks)
    if sort == "price-low":
        return sorted(items, key=lambda t: (t.price is None, t.price or 0))
    if sort == "price-high":
        return sorted(items, key=lambda t: (t.price is None, -(t.price or 0)))
    if sort == "rating":
        return sorted(items, key=lambda t: (t.rating is None, -(t.rating or 0)))
    if sort == "duration":
        def by_days(trek):
            days = duration_days(trek.duration)
            return (days is None, days or 0)
        return sorted(items, key=by_days)
    return sorted(items, key=lambda t: not t.is_featured)


def filter_treks(treks: Sequence[Any], criteria: TrekFilter) -> list[Any]:
    """Apply search, region and difficulty filters (all must match), then sort."""
    needle = _norm(criteria.search)
    region = _norm(criteria.region)
    difficulty = _norm(criteria.difficulty)

    matched = [
        trek for trek in treks
        if (not needle or _matches_search(trek, needle))
        and (not region or _norm(trek.region) == region)
        and (not difficulty or _norm(trek.difficulty) == difficulty)
    ]
    return sort_treks(matched, criteria.sort)


def published_only(items: Iterable[Any]) -> list[Any]:
    return [item for item in items if item.is_published]


def find_by_slug(items: Iterable[Any], slug: str) -> Optional[Any]:
    return next((item for item in items if item.slug == slug), None)


def _display_key(item: Any) -> tuple[bool, int]:
    return (item.display_order is None, item.display_order or 0)


def group_faqs(faqs: Iterable[Any]) -> list[tuple[str, list[Any]]]:
    """
    Active FAQs grouped by category.

    Categories keep first-seen order; entries within a category are ordered by
    display order.
    """
    groups: dict[str, list[Any]] = {}
    for faq in faqs:
        if faq.is_active:
            groups.setdefault(faq.category, []).append(faq)
    return [(category, sorted(items, key=_display_key)) for category, items in groups.items()]


def active_team(members: Iterable[Any]) -> list[Any]:
    return sorted((m for m in members if m.is_active), key=_display_key)


def filter_gallery(media: Iterable[Any], region: Optional[str] = None) -> list[Any]:
    """Public media items; narrowed to one category unless region is empty or "All"."""
    wanted = _norm(region)
    public = [item for item in media if item.is_public]
    if not wanted or wanted == ALL_CATEGORIES:
        return public
    return [item for item in public if _norm(item.category) == wanted]


def filter_posts(posts: Iterable[Any], category: Optional[str] = None) -> list[Any]:
    wanted = _norm(category)
    items = list(posts)
    if not wanted or wanted == ALL_CATEGORIES:
        return items
    return [post for post in items if _norm(post.category) == wanted]


def split_featured(posts: Sequence[Any]) -> tuple[Optional[Any], list[Any]]:
    """Separate the first featured post from the rest."""
    featured = next((post for post in posts if post.is_featured), None)
    rest = [post for post in posts if post is not featured]
    return featured, rest
