"""Concurrency tests for shared fetches, cancellation and background refresh."""

import asyncio
from types import SimpleNamespace

import pytest

from treksite.services.cache import QueryCache
from treksite.services.content import FaqService
from treksite.workers.cache_refresh_worker import CacheRefreshWorker


class GatedBackend:
    """Backend stub whose selects read the rows, then block until released."""

    def __init__(self, rows=None):
        self.rows = list(rows or [])
        self.selects = 0
        self.gate = asyncio.Event()
        self._next_id = 0

    async def select(self, table, *, filters=None, order_by=(), limit=None):
        self.selects += 1
        snapshot = list(self.rows)
        await self.gate.wait()
        return snapshot

    async def insert(self, table, values):
        self._next_id += 1
        row = SimpleNamespace(id=self._next_id, **values)
        self.rows.append(row)
        return row


def faq(question):
    return SimpleNamespace(id=question, category="General", question=question, display_order=1, is_active=True)


@pytest.mark.asyncio
async def test_concurrent_fetches_share_one_backend_call():
    backend = GatedBackend([faq("a"), faq("b")])
    cache = QueryCache()
    services = [FaqService(backend, cache) for _ in range(5)]

    tasks = [asyncio.create_task(service.fetch()) for service in services]
    await asyncio.sleep(0)
    backend.gate.set()
    results = await asyncio.gather(*tasks)

    assert backend.selects == 1
    assert all([row.id for row in result.data] == ["a", "b"] for result in results)
    assert all(service.loading is False for service in services)


@pytest.mark.asyncio
async def test_closing_one_consumer_does_not_cancel_shared_load():
    backend = GatedBackend([faq("a")])
    cache = QueryCache()
    closed = FaqService(backend, cache)
    active = FaqService(backend, cache)

    closed.mount()
    pending = asyncio.create_task(active.fetch())
    await asyncio.sleep(0)

    closed.close()
    backend.gate.set()
    result = await pending

    assert [row.id for row in result.data] == ["a"]
    assert backend.selects == 1
    # The late response never reaches the closed consumer
    assert closed.items == []
    assert closed.closed


@pytest.mark.asyncio
async def test_load_completes_after_every_waiter_is_cancelled():
    backend = GatedBackend([faq("a")])
    cache = QueryCache()
    service = FaqService(backend, cache)

    service.mount()
    await asyncio.sleep(0)
    service.close()
    backend.gate.set()
    for _ in range(5):
        await asyncio.sleep(0)

    assert cache.get(service.key) == [backend.rows[0]]
    assert service.items == []


@pytest.mark.asyncio
async def test_mounted_consumers_see_each_others_creates():
    backend = GatedBackend()
    backend.gate.set()
    cache = QueryCache()
    first = FaqService(backend, cache)
    second = FaqService(backend, cache)
    await first.mount()
    await second.mount()

    await asyncio.gather(*(first.create({"question": f"q{i}"}) for i in range(5)))

    assert len(second.items) == 5
    assert {row.question for row in second.items} == {f"q{i}" for i in range(5)}

    first.close()
    second.close()


@pytest.mark.asyncio
async def test_refresh_worker_reloads_warm_keys():
    backend = GatedBackend([faq("a")])
    backend.gate.set()
    cache = QueryCache()
    service = FaqService(backend, cache)
    await service.fetch()

    backend.rows.append(faq("b"))
    worker = CacheRefreshWorker(cache, interval_seconds=0.01)
    await worker.start()
    await asyncio.sleep(0.05)
    await worker.stop()

    assert backend.selects >= 2
    assert [row.id for row in cache.get(service.key)] == ["a", "b"]
    assert not worker.running


@pytest.mark.asyncio
async def test_refresh_worker_idles_on_cold_cache():
    backend = GatedBackend()
    worker = CacheRefreshWorker(QueryCache(), interval_seconds=0.01)

    await worker.start()
    await asyncio.sleep(0.03)
    await worker.stop()

    assert backend.selects == 0


async def wait_for_selects(backend, count):
    while backend.selects < count:
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_create_during_refresh_survives_the_stale_load():
    backend = GatedBackend([faq("a")])
    backend.gate.set()
    cache = QueryCache()
    service = FaqService(backend, cache)
    await service.fetch()

    backend.gate.clear()
    refresh = asyncio.create_task(cache.refresh())
    await wait_for_selects(backend, 2)

    created = await service.create({"question": "b"})
    backend.gate.set()
    assert await refresh == 1

    assert created.data in cache.get(service.key)
    assert backend.selects == 3


@pytest.mark.asyncio
async def test_create_during_cold_load_survives_the_stale_load():
    backend = GatedBackend([faq("a")])
    cache = QueryCache()
    reader = FaqService(backend, cache)
    writer = FaqService(backend, cache)

    pending = asyncio.create_task(reader.fetch())
    await wait_for_selects(backend, 1)

    created = await writer.create({"question": "b"})
    backend.gate.set()
    result = await pending

    assert created.data in result.data
    assert created.data in cache.get(reader.key)
    assert backend.selects == 2
