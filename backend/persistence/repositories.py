"""
MongoDB repositories (Motor).

Each repository wraps one collection of an AsyncIOMotorDatabase. Driver
errors are logged and re-raised as PersistenceError so callers can map them
to HTTP 500 without knowing about pymongo.
"""

import logging
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from .contracts import PersistenceError
from .models import Ride, SavedItinerary

logger = logging.getLogger(__name__)


class MongoRideRepository:
    """Rides stored in the `rides` collection."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.rides

    async def ensure_indexes(self) -> None:
        await self.collection.create_index("id", unique=True)
        await self.collection.create_index([("created_at", DESCENDING)])

    async def create(self, ride: Ride) -> Ride:
        try:
            await self.collection.insert_one(ride.to_mongo_doc())
        except PyMongoError as e:
            logger.error(f"Failed to insert ride {ride.id}: {e}")
            raise PersistenceError("Could not save ride") from e
        logger.info(f"Created ride {ride.id} for {ride.rider_name}")
        return ride

    async def list(self) -> List[Ride]:
        try:
            cursor = self.collection.find({}, {"_id": 0}).sort("created_at", DESCENDING)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to list rides: {e}")
            raise PersistenceError("Could not load rides") from e
        return [Ride.from_mongo_doc(doc) for doc in docs]

    async def get(self, ride_id: str) -> Optional[Ride]:
        try:
            doc = await self.collection.find_one({"id": ride_id}, {"_id": 0})
        except PyMongoError as e:
            logger.error(f"Failed to load ride {ride_id}: {e}")
            raise PersistenceError("Could not load ride") from e
        return Ride.from_mongo_doc(doc) if doc else None

    async def delete(self, ride_id: str) -> bool:
        try:
            result = await self.collection.delete_one({"id": ride_id})
        except PyMongoError as e:
            logger.error(f"Failed to delete ride {ride_id}: {e}")
            raise PersistenceError("Could not delete ride") from e
        return result.deleted_count > 0


class MongoItineraryRepository:
    """Saved itineraries stored in the `itineraries` collection."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.itineraries

    async def ensure_indexes(self) -> None:
        await self.collection.create_index("id", unique=True)
        await self.collection.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])

    async def create(self, itinerary: SavedItinerary) -> SavedItinerary:
        try:
            await self.collection.insert_one(itinerary.to_mongo_doc())
        except PyMongoError as e:
            logger.error(f"Failed to insert itinerary {itinerary.id}: {e}")
            raise PersistenceError("Could not save itinerary") from e
        logger.info(f"Saved itinerary {itinerary.id} for user {itinerary.user_id}")
        return itinerary

    async def list(self, user_id: Optional[str] = None) -> List[SavedItinerary]:
        query = {"user_id": user_id} if user_id else {}
        try:
            cursor = self.collection.find(query, {"_id": 0}).sort("created_at", DESCENDING)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to list itineraries for {user_id}: {e}")
            raise PersistenceError("Could not load itineraries") from e
        return [SavedItinerary.from_mongo_doc(doc) for doc in docs]

    async def get(self, itinerary_id: str) -> Optional[SavedItinerary]:
        try:
            doc = await self.collection.find_one({"id": itinerary_id}, {"_id": 0})
        except PyMongoError as e:
            logger.error(f"Failed to load itinerary {itinerary_id}: {e}")
            raise PersistenceError("Could not load itinerary") from e
        return SavedItinerary.from_mongo_doc(doc) if doc else None

    async def delete(self, itinerary_id: str) -> bool:
        try:
            result = await self.collection.delete_one({"id": itinerary_id})
        except PyMongoError as e:
            logger.error(f"Failed to delete itinerary {itinerary_id}: {e}")
            raise PersistenceError("Could not delete itinerary") from e
        return result.deleted_count > 0
