"""Unit tests for the shared query cache."""

import pytest

from treksite.core.backend import BackendError
from treksite.services.cache import MAX_LOAD_ATTEMPTS, QueryCache, QueryKey


def loader_returning(*batches):
    """Loader yielding each batch in turn; counts its calls."""
    calls = []

    async def load():
        calls.append(1)
        return list(batches[min(len(calls), len(batches)) - 1])

    load.calls = calls
    return load


def test_query_key_ignores_filter_order():
    assert QueryKey.build("treks", {"a": 1, "b": 2}) == QueryKey.build("treks", {"b": 2, "a": 1})
    assert QueryKey.build("treks") != QueryKey.build("treks", {"a": 1})


@pytest.mark.asyncio
async def test_fetch_loads_once_then_serves_cache():
    cache = QueryCache()
    key = QueryKey.build("treks")
    load = loader_returning(["a", "b"])

    assert await cache.fetch(key, load) == ["a", "b"]
    assert await cache.fetch(key, load) == ["a", "b"]
    assert len(load.calls) == 1


@pytest.mark.asyncio
async def test_force_reloads():
    cache = QueryCache()
    key = QueryKey.build("treks")
    load = loader_returning(["a"], ["a", "b"])

    await cache.fetch(key, load)
    assert await cache.fetch(key, load, force=True) == ["a", "b"]
    assert cache.get(key) == ["a", "b"]


@pytest.mark.asyncio
async def test_get_returns_a_copy():
    cache = QueryCache()
    key = QueryKey.build("treks")
    await cache.fetch(key, loader_returning(["a"]))

    cache.get(key).append("mutated")

    assert cache.get(key) == ["a"]


@pytest.mark.asyncio
async def test_failed_load_leaves_key_cold():
    cache = QueryCache()
    key = QueryKey.build("treks")

    async def failing():
        raise BackendError("boom", table="treks")

    with pytest.raises(BackendError):
        await cache.fetch(key, failing)

    assert cache.get(key) is None
    assert await cache.fetch(key, loader_returning(["a"])) == ["a"]


@pytest.mark.asyncio
async def test_patch_updates_owner_and_invalidates_sibling_queries():
    cache = QueryCache()
    everything = QueryKey.build("trek_itineraries")
    one_trek = QueryKey.build("trek_itineraries", {"trek_id": 1})
    other_entity = QueryKey.build("treks")
    for key in (everything, one_trek, other_entity):
        await cache.fetch(key, loader_returning(["x"]))

    cache.patch(one_trek, lambda items: items + ["y"])

    assert cache.get(one_trek) == ["x", "y"]
    assert cache.get(everything) is None
    assert cache.get(other_entity) == ["x"]


@pytest.mark.asyncio
async def test_patch_on_cold_key_stays_cold():
    cache = QueryCache()
    key = QueryKey.build("faqs")

    cache.patch(key, lambda items: items + ["y"])

    assert cache.get(key) is None
    assert cache.generation("faqs") == 1


@pytest.mark.asyncio
async def test_load_that_keeps_racing_writes_is_returned_but_not_stored():
    cache = QueryCache()
    key = QueryKey.build("faqs")
    calls = []

    async def racing():
        calls.append(1)
        cache.patch(key, lambda items: items)
        return ["a"]

    assert await cache.fetch(key, racing) == ["a"]
    assert len(calls) == MAX_LOAD_ATTEMPTS
    assert cache.get(key) is None


@pytest.mark.asyncio
async def test_listeners_see_loads_and_patches_until_unsubscribed():
    cache = QueryCache()
    key = QueryKey.build("blog_posts")
    seen = []
    unsubscribe = cache.subscribe(key, lambda k: seen.append(cache.get(k)))

    await cache.fetch(key, loader_returning(["a"]))
    cache.patch(key, lambda items: ["b"] + items)
    unsubscribe()
    cache.patch(key, lambda items: ["c"] + items)

    assert seen == [["a"], ["b", "a"]]


@pytest.mark.asyncio
async def test_refresh_reloads_every_warm_key_and_skips_failures():
    cache = QueryCache()
    good = QueryKey.build("treks")
    bad = QueryKey.build("faqs")
    good_load = loader_returning(["old"], ["new"])
    state = {"fail": False}

    async def flaky():
        if state["fail"]:
            raise BackendError("down", table="faqs")
        return ["faq"]

    await cache.fetch(good, good_load)
    await cache.fetch(bad, flaky)
    state["fail"] = True

    refreshed = await cache.refresh()

    assert refreshed == 1
    assert cache.get(good) == ["new"]
    # A failed refresh keeps the last good snapshot
    assert cache.get(bad) == ["faq"]


@pytest.mark.asyncio
async def test_clear_drops_everything():
    cache = QueryCache()
    await cache.fetch(QueryKey.build("treks"), loader_returning(["a"]))

    cache.clear()

    assert cache.keys() == []
