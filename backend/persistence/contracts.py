from __future__ import annotations

from typing import List, Optional, Protocol

from .models import Ride, SavedItinerary


class PersistenceError(Exception):
    """Raised when the backing store rejects or fails an operation."""


class RideRepository(Protocol):
    async def create(self, ride: Ride) -> Ride:
        ...

    async def list(self) -> List[Ride]:
        """All rides, newest first."""
        ...

    async def get(self, ride_id: str) -> Optional[Ride]:
        ...

    async def delete(self, ride_id: str) -> bool:
        ...


class ItineraryRepository(Protocol):
    async def create(self, itinerary: SavedItinerary) -> SavedItinerary:
        ...

    async def list(self, user_id: Optional[str] = None) -> List[SavedItinerary]:
        """Saved itineraries, newest first, optionally for one user."""
        ...

    async def get(self, itinerary_id: str) -> Optional[SavedItinerary]:
        ...

    async def delete(self, itinerary_id: str) -> bool:
        ...
