"""Unit tests for the in-memory derived views."""

from types import SimpleNamespace

from treksite.services.filters import (
    TrekFilter,
    active_team,
    duration_days,
    filter_gallery,
    filter_posts,
    filter_treks,
    find_by_slug,
    group_faqs,
    published_only,
    split_featured,
)


def trek(name, **overrides):
    values = {
        "name": name,
        "slug": name.lower().replace(" ", "-"),
        "region": "Everest",
        "short_description": None,
        "description": None,
        "difficulty": "Moderate",
        "duration": "10 Days",
        "price": 1000,
        "rating": 4.5,
        "is_featured": False,
        "is_published": True,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def names(items):
    return [item.name for item in items]


CATALOG = [
    trek("Everest Base Camp", difficulty="Challenging", duration="14 Days", price=1450, rating=4.9, is_featured=True),
    trek("Annapurna Circuit", region="Annapurna", difficulty="Challenging", duration="12-18 Days", price=1250, rating=4.8),
    trek("Langtang Valley", region="Langtang", duration="7-10 Days", price=850, rating=4.7, is_featured=True),
    trek("Mardi Himal", region="Annapurna", duration="5-7 Days", price=650, rating=4.8,
         description="A hidden gem with Annapurna views"),
]


def test_default_sort_puts_featured_first_keeping_source_order():
    result = filter_treks(CATALOG, TrekFilter())
    assert names(result) == ["Everest Base Camp", "Langtang Valley", "Annapurna Circuit", "Mardi Himal"]


def test_unknown_sort_key_falls_back_to_popular():
    assert names(filter_treks(CATALOG, TrekFilter(sort="newest"))) == names(filter_treks(CATALOG, TrekFilter()))


def test_search_is_case_insensitive_over_name_region_and_descriptions():
    assert names(filter_treks(CATALOG, TrekFilter(search="LANGTANG"))) == ["Langtang Valley"]
    # "annapurna" matches a region and a description
    assert set(names(filter_treks(CATALOG, TrekFilter(search="annapurna")))) == {"Annapurna Circuit", "Mardi Himal"}


def test_filters_are_conjunctive():
    result = filter_treks(CATALOG, TrekFilter(region="annapurna", difficulty="challenging"))
    assert names(result) == ["Annapurna Circuit"]


def test_price_sorts():
    assert [t.price for t in filter_treks(CATALOG, TrekFilter(sort="price-low"))] == [650, 850, 1250, 1450]
    assert [t.price for t in filter_treks(CATALOG, TrekFilter(sort="price-high"))] == [1450, 1250, 850, 650]


def test_rating_sort_is_descending_and_stable():
    result = filter_treks(CATALOG, TrekFilter(sort="rating"))
    assert names(result) == ["Everest Base Camp", "Annapurna Circuit", "Mardi Himal", "Langtang Valley"]


def test_duration_sort_uses_leading_number_and_puts_unparseable_last():
    treks = CATALOG + [trek("Custom Trip", duration="Flexible")]
    result = filter_treks(treks, TrekFilter(sort="duration"))
    assert names(result) == [
        "Mardi Himal", "Langtang Valley", "Annapurna Circuit", "Everest Base Camp", "Custom Trip",
    ]


def test_missing_prices_sort_last():
    treks = [trek("No Price", price=None)] + CATALOG
    assert names(filter_treks(treks, TrekFilter(sort="price-low")))[-1] == "No Price"
    assert names(filter_treks(treks, TrekFilter(sort="price-high")))[-1] == "No Price"


def test_source_list_is_not_mutated():
    source = list(CATALOG)
    filter_treks(source, TrekFilter(sort="price-high", search="a"))
    assert source == CATALOG


def test_duration_days():
    assert duration_days("14 Days") == 14
    assert duration_days("12-18 Days") == 12
    assert duration_days("Flexible") is None
    assert duration_days(None) is None


def test_published_only_and_find_by_slug():
    items = CATALOG + [trek("Draft Trek", is_published=False)]
    published = published_only(items)
    assert "Draft Trek" not in names(published)
    assert find_by_slug(published, "mardi-himal").name == "Mardi Himal"
    assert find_by_slug(published, "draft-trek") is None


def test_group_faqs_keeps_category_order_and_sorts_by_display_order():
    faqs = [
        SimpleNamespace(category="Booking", question="b2", display_order=2, is_active=True),
        SimpleNamespace(category="Health", question="h1", display_order=1, is_active=True),
        SimpleNamespace(category="Booking", question="b1", display_order=1, is_active=True),
        SimpleNamespace(category="Booking", question="hidden", display_order=0, is_active=False),
    ]
    groups = group_faqs(faqs)
    assert [category for category, _ in groups] == ["Booking", "Health"]
    assert [faq.question for faq in groups[0][1]] == ["b1", "b2"]


def test_active_team_orders_by_display_order():
    members = [
        SimpleNamespace(name="C", display_order=None, is_active=True),
        SimpleNamespace(name="B", display_order=2, is_active=True),
        SimpleNamespace(name="A", display_order=1, is_active=True),
        SimpleNamespace(name="X", display_order=0, is_active=False),
    ]
    assert [m.name for m in active_team(members)] == ["A", "B", "C"]


def test_filter_gallery():
    media = [
        SimpleNamespace(file_name="ebc.jpg", category="Everest", is_public=True),
        SimpleNamespace(file_name="abc.jpg", category="Annapurna", is_public=True),
        SimpleNamespace(file_name="private.jpg", category="Everest", is_public=False),
    ]
    assert [m.file_name for m in filter_gallery(media, "All")] == ["ebc.jpg", "abc.jpg"]
    assert [m.file_name for m in filter_gallery(media, "")] == ["ebc.jpg", "abc.jpg"]
    assert [m.file_name for m in filter_gallery(media, "everest")] == ["ebc.jpg"]


def test_filter_posts_and_split_featured():
    posts = [
        SimpleNamespace(title="Packing", category="Tips", is_featured=False),
        SimpleNamespace(title="Permits", category="Guides", is_featured=True),
        SimpleNamespace(title="Altitude", category="Tips", is_featured=True),
    ]
    assert [p.title for p in filter_posts(posts, "tips")] == ["Packing", "Altitude"]

    featured, rest = split_featured(posts)
    assert featured.title == "Permits"
    assert [p.title for p in rest] == ["Packing", "Altitude"]

    featured, rest = split_featured([])
    assert featured is None
    assert rest == []
