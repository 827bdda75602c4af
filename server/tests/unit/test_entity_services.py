"""Unit tests for entity services over the in-memory database."""

import uuid
from datetime import date

import pytest

from treksite.schemas.seo import SeoRequest
from treksite.seo.heuristics import generate_local_suggestions
from treksite.services.base import EntityService
from treksite.services.bookings import BookingService
from treksite.services.cache import QueryCache
from treksite.services.catalog import ItineraryService, TrekService, load_itinerary
from treksite.services.contact import ContactSubmissionService
from treksite.services.content import FaqService, TeamMemberService
from treksite.services.media import MediaLibraryService
from treksite.services.seo_suggestion import SeoSuggestionService
from treksite.services.site_settings import NO_SETTINGS, SiteSettingsService
from treksite.services.storage import StorageError


class TestListAndMutations:
    @pytest.mark.asyncio
    async def test_create_prepends_and_is_visible_to_other_consumers(self, backend, cache, sample_trek_data):
        first = TrekService(backend, cache)
        second = TrekService(backend, cache)
        await first.fetch()
        await second.fetch()

        await first.create(sample_trek_data)
        created = await first.create({"name": "Mardi Himal", "slug": "mardi-himal"})

        assert [t.slug for t in first.items] == ["mardi-himal", "everest-base-camp"]
        # The second service reads the same cached snapshot
        assert [t.slug for t in (await second.fetch()).data] == ["mardi-himal", "everest-base-camp"]
        assert created.data.is_published is False

    @pytest.mark.asyncio
    async def test_fetch_orders_faqs_by_category_then_display_order(self, backend, cache):
        service = FaqService(backend, cache)
        await service.create({"category": "Health", "question": "q3", "answer": "a", "display_order": 1})
        await service.create({"category": "Booking", "question": "q2", "answer": "a", "display_order": 2})
        await service.create({"category": "Booking", "question": "q1", "answer": "a", "display_order": 1})

        result = await FaqService(backend, cache).fetch(force=True)

        assert [faq.question for faq in result.data] == ["q1", "q2", "q3"]

    @pytest.mark.asyncio
    async def test_append_services_add_new_rows_at_the_end(self, backend, cache):
        service = TeamMemberService(backend, cache)
        await service.fetch()

        await service.create({"name": "Pemba", "role": "Lead Guide", "display_order": 1})
        await service.create({"name": "Nima", "role": "Guide", "display_order": 2})

        assert [m.name for m in service.items] == ["Pemba", "Nima"]

    @pytest.mark.asyncio
    async def test_update_replaces_row_in_place(self, backend, cache, sample_trek_data):
        service = TrekService(backend, cache)
        trek = (await service.create(sample_trek_data)).data
        await service.create({"name": "Mardi Himal", "slug": "mardi-himal"})
        await service.fetch()

        result = await service.update(trek.id, {"price": 1500})

        assert result.ok
        assert result.data.price == 1500
        assert [t.slug for t in service.items] == ["mardi-himal", "everest-base-camp"]
        assert service.items[1].price == 1500

    @pytest.mark.asyncio
    async def test_update_of_unknown_row_returns_error(self, backend, cache):
        result = await TrekService(backend, cache).update(uuid.uuid4(), {"price": 10})

        assert not result.ok
        assert "No treks row" in result.error
        assert result.not_found

    @pytest.mark.asyncio
    async def test_delete_removes_exactly_the_requested_row(self, backend, cache):
        service = FaqService(backend, cache)
        twin = {"category": "General", "question": "Same?", "answer": "Yes", "display_order": 1}
        keep = (await service.create(twin)).data
        drop = (await service.create(twin)).data
        await service.fetch()

        result = await service.delete(drop.id)

        assert result.ok and result.data is True
        assert [faq.id for faq in service.items] == [keep.id]
        assert [faq.id for faq in (await service.fetch(force=True)).data] == [keep.id]

    @pytest.mark.asyncio
    async def test_delete_of_unknown_row_reports_nothing_removed(self, backend, cache):
        result = await FaqService(backend, cache).delete(uuid.uuid4())

        assert result.ok
        assert result.data is False

    @pytest.mark.asyncio
    async def test_backend_failures_come_back_as_errors(self, backend, cache):
        class Missing(EntityService):
            table = "no_such_table"

        service = Missing(backend, cache)

        fetched = await service.fetch()
        created = await service.create({"name": "x"})

        assert fetched.error == "Unknown table 'no_such_table'"
        assert created.error == "Unknown table 'no_such_table'"
        assert service.error == "Unknown table 'no_such_table'"
        assert service.loading is False

    @pytest.mark.asyncio
    async def test_duplicate_slug_is_a_create_error(self, backend, cache, sample_trek_data):
        service = TrekService(backend, cache)
        await service.create(sample_trek_data)

        result = await service.create(sample_trek_data)

        assert result.error == "Duplicate or invalid value for treks"

    @pytest.mark.asyncio
    async def test_context_manager_mounts_and_closes(self, backend, cache, sample_trek_data):
        await TrekService(backend, cache).create(sample_trek_data)

        async with TrekService(backend, cache) as service:
            assert [t.slug for t in service.items] == ["everest-base-camp"]
            assert not service.closed

        assert service.closed


class TestItinerary:
    @pytest.mark.asyncio
    async def test_days_are_scoped_to_trek_and_ordered(self, backend, cache, sample_trek_data):
        treks = TrekService(backend, cache)
        ebc = (await treks.create(sample_trek_data)).data
        other = (await treks.create({"name": "Mardi Himal", "slug": "mardi-himal"})).data

        days = ItineraryService(backend, cache, ebc.id)
        await days.create({"day_number": 2, "title": "Phakding"})
        await days.create({"day_number": 1, "title": "Fly to Lukla", "trek_id": other.id})
        await ItineraryService(backend, cache, other.id).create({"day_number": 1, "title": "Kande"})

        result = await load_itinerary(backend, QueryCache(), ebc.id)

        assert [d.title for d in result.data] == ["Fly to Lukla", "Phakding"]
        assert all(d.trek_id == ebc.id for d in result.data)

    @pytest.mark.asyncio
    async def test_update_cannot_move_a_day_to_another_trek(self, backend, cache, sample_trek_data):
        ebc = (await TrekService(backend, cache).create(sample_trek_data)).data
        days = ItineraryService(backend, cache, ebc.id)
        day = (await days.create({"day_number": 1, "title": "Kathmandu"})).data

        result = await days.update(day.id, {"title": "Arrive in Kathmandu", "trek_id": uuid.uuid4()})

        assert result.data.title == "Arrive in Kathmandu"
        assert result.data.trek_id == ebc.id

    @pytest.mark.asyncio
    async def test_trek_delete_drops_cached_itineraries(self, backend, cache, sample_trek_data):
        treks = TrekService(backend, cache)
        ebc = (await treks.create(sample_trek_data)).data
        days = ItineraryService(backend, cache, ebc.id)
        await days.create({"day_number": 1, "title": "Kathmandu"})
        await days.fetch()
        assert cache.get(days.key) is not None

        await treks.delete(ebc.id)

        assert cache.get(days.key) is None

    @pytest.mark.asyncio
    async def test_no_trek_means_no_itinerary(self, backend, cache):
        result = await load_itinerary(backend, cache, None)

        assert result.ok
        assert result.data == []


class TestSiteSettings:
    @pytest.mark.asyncio
    async def test_missing_row_loads_as_none(self, backend, cache):
        result = await SiteSettingsService(backend, cache).load()

        assert result.ok
        assert result.data is None

    @pytest.mark.asyncio
    async def test_update_without_row_fails(self, backend, cache):
        result = await SiteSettingsService(backend, cache).update_settings({"whatsapp": "+977"})

        assert result.error == NO_SETTINGS

    @pytest.mark.asyncio
    async def test_update_existing_row(self, backend, cache):
        service = SiteSettingsService(backend, cache)
        await service.create({"phone_numbers": ["+977 1 4000000"]})

        result = await service.update_settings({"whatsapp": "+977 9800000000"})

        assert result.ok
        assert result.data.whatsapp == "+977 9800000000"
        assert service.current.phone_numbers == ["+977 1 4000000"]


class TestContactAndBookings:
    @pytest.mark.asyncio
    async def test_submit_then_respond(self, backend, cache):
        service = ContactSubmissionService(backend, cache)
        message = (await service.submit({
            "full_name": "Ada Lovelace",
            "email": "ada@example.com",
            "message": "Is October a good month?",
        })).data
        assert message.is_read is False

        result = await service.respond(message.id, "Yes, October is peak season.", "staff@nepaltreks.com")

        assert result.data.is_read is True
        assert result.data.response_text == "Yes, October is peak season."
        assert result.data.responded_by == "staff@nepaltreks.com"
        assert result.data.responded_at is not None

    @pytest.mark.asyncio
    async def test_mark_as_read(self, backend, cache):
        service = ContactSubmissionService(backend, cache)
        message = (await service.submit({"full_name": "A", "email": "a@example.com", "message": "Hi"})).data

        result = await service.mark_as_read(message.id)

        assert result.data.is_read is True

    @pytest.mark.asyncio
    async def test_unknown_booking_status_is_stored_as_given(self, backend, cache, sample_trek_data):
        trek = (await TrekService(backend, cache).create(sample_trek_data)).data
        bookings = BookingService(backend, cache)
        booking = (await bookings.create({
            "trek_id": trek.id,
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "phone": "+44",
            "departure_date": date(2026, 10, 1),
            "travelers_count": 2,
            "total_price": 2900,
        })).data

        result = await bookings.update_status(booking.id, "waitlisted")

        assert result.data.booking_status == "waitlisted"
        assert booking.payment_status == "pending"


class BrokenStorage:
    def __init__(self):
        self.removed = []

    async def put(self, key, data, content_type=None):
        raise StorageError("disk full")

    async def remove(self, key):
        self.removed.append(key)


class TestMedia:
    @pytest.mark.asyncio
    async def test_upload_stores_bytes_and_row(self, backend, cache, storage):
        service = MediaLibraryService(backend, cache, storage)

        result = await service.upload("ebc sunrise.jpg", b"jpeg-bytes", "image/jpeg", category="Everest")

        item = result.data
        assert item.file_name == "ebc sunrise.jpg"
        assert item.file_size_bytes == len(b"jpeg-bytes")
        assert item.category == "Everest"
        assert item.file_url == f"http://test/media/{item.storage_path}"
        assert (storage.root / item.storage_path).read_bytes() == b"jpeg-bytes"

    @pytest.mark.asyncio
    async def test_delete_removes_row_and_object(self, backend, cache, storage):
        service = MediaLibraryService(backend, cache, storage)
        item = (await service.upload("abc.png", b"png", "image/png")).data

        result = await service.delete(item.id)

        assert result.data is True
        assert not (storage.root / item.storage_path).exists()
        assert (await service.fetch()).data == []

    @pytest.mark.asyncio
    async def test_storage_failure_creates_no_row(self, backend, cache):
        service = MediaLibraryService(backend, cache, BrokenStorage())

        result = await service.upload("ebc.jpg", b"x", "image/jpeg")

        assert result.error == "disk full"
        assert (await service.fetch()).data == []

    @pytest.mark.asyncio
    async def test_row_failure_discards_stored_object(self, backend, cache, storage):
        service = MediaLibraryService(backend, cache, storage)

        result = await service.upload("ebc.jpg", b"x", "image/jpeg", not_a_column=True)

        assert not result.ok
        assert not any(storage.root.iterdir())


class TestSeoSuggestions:
    @pytest.mark.asyncio
    async def test_record_and_apply_to_trek(self, backend, cache, sample_trek_data):
        trek = (await TrekService(backend, cache).create(sample_trek_data)).data
        request = SeoRequest(
            title=trek.name,
            content="Everest views every day. Everest sunrise from Kala Patthar.",
            content_type="trek",
            content_id=trek.id,
        )
        report = generate_local_suggestions(request, site_name="Nepal Treks", site_url="https://example.com")
        suggestions = SeoSuggestionService(backend, cache)

        suggestion = (await suggestions.record(request, report)).data
        result = await suggestions.apply(suggestion.id)

        assert result.data.is_applied is True
        assert result.data.applied_at is not None
        updated = (await TrekService(backend, cache).get(trek.id)).data
        assert updated.meta_title == report.meta_title
        assert updated.meta_description == report.meta_description
        assert updated.seo_keywords == ["everest"]

    @pytest.mark.asyncio
    async def test_page_suggestions_cannot_be_applied(self, backend, cache):
        request = SeoRequest(title="About us", content="We guide treks.", content_type="page", content_id=uuid.uuid4())
        report = generate_local_suggestions(request, site_name="Nepal Treks", site_url="https://example.com")
        suggestions = SeoSuggestionService(backend, cache)
        suggestion = (await suggestions.record(request, report)).data

        result = await suggestions.apply(suggestion.id)

        assert result.error == "Suggestions for 'page' content cannot be applied"
        assert not result.not_found

    @pytest.mark.asyncio
    async def test_apply_unknown_suggestion(self, backend, cache):
        result = await SeoSuggestionService(backend, cache).apply(uuid.uuid4())

        assert result.error.startswith("No SEO suggestion with id")
        assert result.not_found
