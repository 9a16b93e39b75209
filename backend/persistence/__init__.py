"""
Persistence package - rides and saved itineraries

Submodules:
- models: Ride and SavedItinerary records with Mongo document conversion
- contracts: Repository protocols and PersistenceError
- repositories: Motor-backed MongoDB repositories
- memory: In-memory repositories for demo/test mode
"""

from .contracts import ItineraryRepository, PersistenceError, RideRepository
from .memory import InMemoryItineraryRepository, InMemoryRideRepository
from .models import Ride, SavedItinerary
from .repositories import MongoItineraryRepository, MongoRideRepository

__all__ = [
    "InMemoryItineraryRepository",
    "InMemoryRideRepository",
    "ItineraryRepository",
    "MongoItineraryRepository",
    "MongoRideRepository",
    "PersistenceError",
    "Ride",
    "RideRepository",
    "SavedItinerary",
]
