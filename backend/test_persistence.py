"""
Tests for the persistence layer

Record validation, in-memory repositories and the Motor repositories
against a stub collection (no MongoDB server needed).
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from pymongo.errors import PyMongoError

from persistence import (
    InMemoryItineraryRepository,
    InMemoryRideRepository,
    MongoItineraryRepository,
    MongoRideRepository,
    PersistenceError,
    Ride,
    SavedItinerary,
)


T0 = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)


def _ride(name="Kabir", minutes=0, **kwargs):
    return Ride(rider_name=name, origin="Pune", destination="Lonavala",
                created_at=T0 + timedelta(minutes=minutes), **kwargs)


def _itinerary(user_id="user-1", minutes=0, **kwargs):
    return SavedItinerary(
        user_id=user_id,
        generated_plan=[{"day": 1, "destination": "Goa"}],
        overall_recommendation={"overall_sentiment": "positive"},
        created_at=T0 + timedelta(minutes=minutes),
        **kwargs,
    )


class _Cursor:
    def __init__(self, docs):
        self.docs = docs

    def sort(self, key, direction):
        self.docs = sorted(self.docs, key=lambda d: d[key], reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        return self.docs


class _StubCollection:
    """Just enough of an AsyncIOMotorCollection for the repositories."""

    def __init__(self):
        self.docs = []
        self.indexes = []

    async def create_index(self, keys, **kwargs):
        self.indexes.append(keys)

    async def insert_one(self, doc):
        self.docs.append({"_id": object(), **doc})

    def find(self, query, projection):
        matches = [d for d in self.docs if all(d.get(k) == v for k, v in query.items())]
        hidden = {k for k, v in projection.items() if v == 0}
        return _Cursor([{k: v for k, v in d.items() if k not in hidden} for d in matches])

    async def find_one(self, query, projection):
        for d in self.docs:
            if all(d.get(k) == v for k, v in query.items()):
                return {k: v for k, v in d.items() if k != "_id"}
        return None

    async def delete_one(self, query):
        before = len(self.docs)
        self.docs = [d for d in self.docs if not all(d.get(k) == v for k, v in query.items())]
        return SimpleNamespace(deleted_count=before - len(self.docs))


class _BrokenCollection:
    async def insert_one(self, doc):
        raise PyMongoError("write concern failed")

    def find(self, query, projection):
        raise PyMongoError("not primary")

    async def find_one(self, query, projection):
        raise PyMongoError("not primary")

    async def delete_one(self, query):
        raise PyMongoError("not primary")


class TestRide:

    def test_name_is_trimmed(self):
        assert _ride(name="  Kabir  ").rider_name == "Kabir"

    @pytest.mark.parametrize("field,value", [
        ("rider_name", "   "),
        ("origin", ""),
        ("destination", None),
    ])
    def test_required_fields(self, field, value):
        data = {"rider_name": "Kabir", "origin": "Pune", "destination": "Lonavala", field: value}
        with pytest.raises(ValueError, match=f"{field} is required"):
            Ride(**data)

    def test_date_defaults_to_created_at(self):
        ride = _ride()
        assert ride.date == ride.created_at == ride.updated_at == T0

    def test_ids_are_unique(self):
        assert _ride().id != _ride().id

    def test_mongo_round_trip_ignores_unknown_keys(self):
        ride = _ride(vehicle="Himalayan", club="Pune Riders")
        doc = {**ride.to_mongo_doc(), "_id": "mongo-id"}
        assert Ride.from_mongo_doc(doc) == ride


class TestSavedItinerary:

    def test_user_required(self):
        with pytest.raises(ValueError, match="user_id is required"):
            SavedItinerary(user_id="", generated_plan=[], overall_recommendation={})

    def test_created_at_defaults_to_now(self):
        itinerary = SavedItinerary(user_id="u", generated_plan=[], overall_recommendation={})
        assert itinerary.created_at.tzinfo is not None


class TestInMemoryRepositories:

    @pytest.mark.asyncio
    async def test_rides_newest_first(self):
        repo = InMemoryRideRepository()
        first = await repo.create(_ride(name="A", minutes=0))
        second = await repo.create(_ride(name="B", minutes=5))
        assert [r.id for r in await repo.list()] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_ties_keep_latest_insert_first(self):
        repo = InMemoryRideRepository()
        first = await repo.create(_ride(name="A"))
        second = await repo.create(_ride(name="B"))
        assert [r.id for r in await repo.list()] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_ride_get_and_delete(self):
        repo = InMemoryRideRepository()
        ride = await repo.create(_ride())
        assert await repo.get(ride.id) == ride
        assert await repo.delete(ride.id) is True
        assert await repo.delete(ride.id) is False
        assert await repo.get(ride.id) is None

    @pytest.mark.asyncio
    async def test_itineraries_filtered_by_user(self):
        repo = InMemoryItineraryRepository()
        mine = await repo.create(_itinerary(user_id="me", minutes=1))
        await repo.create(_itinerary(user_id="you", minutes=2))
        newer = await repo.create(_itinerary(user_id="me", minutes=3))
        assert [i.id for i in await repo.list("me")] == [newer.id, mine.id]
        assert len(await repo.list()) == 3


class TestMongoRepositories:

    @pytest.mark.asyncio
    async def test_ride_crud(self):
        collection = _StubCollection()
        repo = MongoRideRepository(SimpleNamespace(rides=collection))
        await repo.ensure_indexes()
        older = await repo.create(_ride(name="A", minutes=0))
        newer = await repo.create(_ride(name="B", minutes=10))

        assert [r.id for r in await repo.list()] == [newer.id, older.id]
        assert await repo.get(older.id) == older
        assert await repo.get("missing") is None
        assert await repo.delete(older.id) is True
        assert await repo.delete(older.id) is False
        assert "id" in collection.indexes

    @pytest.mark.asyncio
    async def test_itinerary_list_by_user(self):
        collection = _StubCollection()
        repo = MongoItineraryRepository(SimpleNamespace(itineraries=collection))
        mine = await repo.create(_itinerary(user_id="me", itinerary_name="Konkan coast"))
        await repo.create(_itinerary(user_id="you"))

        listed = await repo.list("me")
        assert listed == [mine]
        assert listed[0].itinerary_name == "Konkan coast"
        assert len(await repo.list()) == 2

    @pytest.mark.asyncio
    async def test_driver_errors_become_persistence_errors(self):
        rides = MongoRideRepository(SimpleNamespace(rides=_BrokenCollection()))
        itineraries = MongoItineraryRepository(SimpleNamespace(itineraries=_BrokenCollection()))

        with pytest.raises(PersistenceError):
            await rides.create(_ride())
        with pytest.raises(PersistenceError):
            await rides.list()
        with pytest.raises(PersistenceError):
            await rides.delete("x")
        with pytest.raises(PersistenceError):
            await itineraries.get("x")
        with pytest.raises(PersistenceError):
            await itineraries.list("me")
