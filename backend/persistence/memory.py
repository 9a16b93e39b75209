"""In-memory repositories for demo and test mode. Same contract as the Mongo ones."""

from typing import Dict, List, Optional

from .models import Ride, SavedItinerary


class InMemoryRideRepository:
    def __init__(self) -> None:
        self._rides: Dict[str, Ride] = {}

    async def create(self, ride: Ride) -> Ride:
        self._rides[ride.id] = ride
        return ride

    async def list(self) -> List[Ride]:
        return sorted(reversed(list(self._rides.values())), key=lambda r: r.created_at, reverse=True)

    async def get(self, ride_id: str) -> Optional[Ride]:
        return self._rides.get(ride_id)

    async def delete(self, ride_id: str) -> bool:
        return self._rides.pop(ride_id, None) is not None


class InMemoryItineraryRepository:
    def __init__(self) -> None:
        self._itineraries: Dict[str, SavedItinerary] = {}

    async def create(self, itinerary: SavedItinerary) -> SavedItinerary:
        self._itineraries[itinerary.id] = itinerary
        return itinerary

    async def list(self, user_id: Optional[str] = None) -> List[SavedItinerary]:
        items = [i for i in reversed(list(self._itineraries.values())) if not user_id or i.user_id == user_id]
        return sorted(items, key=lambda i: i.created_at, reverse=True)

    async def get(self, itinerary_id: str) -> Optional[SavedItinerary]:
        return self._itineraries.get(itinerary_id)

    async def delete(self, itinerary_id: str) -> bool:
        return self._itineraries.pop(itinerary_id, None) is not None
