"""
Tests for the Trip Library

Saved itineraries with a current selection; each operation records its own
error and leaves local state alone when the repository fails.
"""

import pytest

from persistence import InMemoryItineraryRepository, PersistenceError, SavedItinerary
from planner.trip_library import DELETE_ERROR, LOAD_ERROR, SAVE_ERROR, TripLibrary


def _itinerary(user_id="rider-7", name=None):
    return SavedItinerary(
        user_id=user_id,
        generated_plan=[{"day": 1}],
        overall_recommendation={"overall_sentiment": "positive"},
        itinerary_name=name,
    )


class _FailingRepository:
    async def create(self, itinerary):
        raise PersistenceError("down")

    async def list(self, user_id=None):
        raise PersistenceError("down")

    async def get(self, itinerary_id):
        raise PersistenceError("down")

    async def delete(self, itinerary_id):
        raise PersistenceError("down")


class TestTripLibrary:

    @pytest.mark.asyncio
    async def test_save_appends_and_selects(self):
        library = TripLibrary(InMemoryItineraryRepository())
        saved = await library.save(_itinerary(name="Spiti loop"))
        assert library.itineraries == [saved]
        assert library.current == saved
        assert library.save_error is None

    @pytest.mark.asyncio
    async def test_fetch_replaces_local_list(self):
        repo = InMemoryItineraryRepository()
        await repo.create(_itinerary(user_id="rider-7"))
        await repo.create(_itinerary(user_id="someone-else"))
        library = TripLibrary(repo)
        await library.save(_itinerary(user_id="rider-7"))

        fetched = await library.fetch("rider-7")
        assert len(fetched) == 2
        assert all(i.user_id == "rider-7" for i in library.itineraries)

    @pytest.mark.asyncio
    async def test_delete_current_clears_selection(self):
        library = TripLibrary(InMemoryItineraryRepository())
        first = await library.save(_itinerary(name="first"))
        second = await library.save(_itinerary(name="second"))

        assert await library.delete(second.id) is True
        assert library.itineraries == [first]
        assert library.current is None

    @pytest.mark.asyncio
    async def test_delete_other_keeps_selection(self):
        library = TripLibrary(InMemoryItineraryRepository())
        first = await library.save(_itinerary(name="first"))
        second = await library.save(_itinerary(name="second"))

        await library.delete(first.id)
        assert library.current == second

    def test_select(self):
        library = TripLibrary(InMemoryItineraryRepository())
        itinerary = _itinerary()
        library.select(itinerary)
        assert library.current is itinerary
        library.select(None)
        assert library.current is None

    @pytest.mark.asyncio
    async def test_failures_set_their_own_error(self):
        library = TripLibrary(_FailingRepository())
        kept = _itinerary()
        library.itineraries = [kept]
        library.current = kept

        assert await library.save(_itinerary()) is None
        assert library.save_error == SAVE_ERROR

        assert await library.fetch("rider-7") == [kept]
        assert library.load_error == LOAD_ERROR

        assert await library.delete(kept.id) is False
        assert library.delete_error == DELETE_ERROR

        assert library.itineraries == [kept]
        assert library.current is kept

    @pytest.mark.asyncio
    async def test_success_clears_previous_error(self):
        library = TripLibrary(_FailingRepository())
        await library.save(_itinerary())
        library.repository = InMemoryItineraryRepository()
        await library.save(_itinerary())
        assert library.save_error is None

    @pytest.mark.asyncio
    async def test_reset(self):
        library = TripLibrary(_FailingRepository())
        await library.fetch("rider-7")
        library.reset()
        assert library.itineraries == []
        assert library.current is None
        assert library.load_error is None
