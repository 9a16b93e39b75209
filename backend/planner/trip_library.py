"""
Trip Library - saved itineraries with a current selection.

Wraps an ItineraryRepository. Each operation records its own error string
and leaves the local list and selection untouched when the repository fails.

This is the client-side library model for callers that keep a rider's saved
trips in process, such as scripts or embedding applications. The HTTP routes in server.py are
stateless and talk to the repositories directly.
"""

import logging
from typing import List, Optional

from persistence.contracts import ItineraryRepository, PersistenceError
from persistence.models import SavedItinerary

logger = logging.getLogger(__name__)

SAVE_ERROR = "Failed to save itinerary. Please check your data and try again."
LOAD_ERROR = "Failed to load itineraries. Please check your connection."
DELETE_ERROR = "Failed to delete itinerary. Please try again."


class TripLibrary:
    def __init__(self, repository: ItineraryRepository):
        self.repository = repository
        self.itineraries: List[SavedItinerary] = []
        self.current: Optional[SavedItinerary] = None
        self.save_error: Optional[str] = None
        self.load_error: Optional[str] = None
        self.delete_error: Optional[str] = None

    async def save(self, itinerary: SavedItinerary) -> Optional[SavedItinerary]:
        """Persist an itinerary, append it locally and make it the current one."""
        self.save_error = None
        try:
            saved = await self.repository.create(itinerary)
        except PersistenceError as e:
            logger.error(f"Error saving itinerary: {e}")
            self.save_error = SAVE_ERROR
            return None
        self.itineraries = [*self.itineraries, saved]
        self.current = saved
        return saved

    async def fetch(self, user_id: str) -> List[SavedItinerary]:
        """Replace the local list with the user's saved itineraries."""
        self.load_error = None
        try:
            self.itineraries = await self.repository.list(user_id)
        except PersistenceError as e:
            logger.error(f"Error fetching itineraries for {user_id}: {e}")
            self.load_error = LOAD_ERROR
        return self.itineraries

    def select(self, itinerary: Optional[SavedItinerary]) -> None:
        self.current = itinerary

    async def delete(self, itinerary_id: str) -> bool:
        """Delete remotely, then drop it locally and clear the selection if it was current."""
        self.delete_error = None
        try:
            await self.repository.delete(itinerary_id)
        except PersistenceError as e:
            logger.error(f"Error deleting itinerary {itinerary_id}: {e}")
            self.delete_error = DELETE_ERROR
            return False
        self.itineraries = [i for i in self.itineraries if i.id != itinerary_id]
        if self.current is not None and self.current.id == itinerary_id:
            self.current = None
        return True

    def reset(self) -> None:
        self.itineraries = []
        self.current = None
        self.save_error = None
        self.load_error = None
        self.delete_error = None
