"""
Persisted records: community rides and saved itineraries.

Both are stored as plain MongoDB documents keyed by a uuid4 string `id`;
Mongo's own `_id` never leaves the repository layer.
"""

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


def _from_doc(cls, doc: Dict[str, Any]):
    known = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in doc.items() if k in known})


@dataclass(frozen=True)
class Ride:
    """A community ride announcement."""
    rider_name: str
    origin: str
    destination: str
    date: datetime = None
    vehicle: Optional[str] = None
    cause: Optional[str] = None
    club: Optional[str] = None
    id: str = field(default_factory=_new_id)
    created_at: datetime = None
    updated_at: datetime = None

    def __post_init__(self):
        rider_name = (self.rider_name or "").strip()
        if not rider_name:
            raise ValueError("rider_name is required")
        if not (self.origin or "").strip():
            raise ValueError("origin is required")
        if not (self.destination or "").strip():
            raise ValueError("destination is required")
        object.__setattr__(self, 'rider_name', rider_name)

        now = _now()
        if self.created_at is None:
            object.__setattr__(self, 'created_at', now)
        if self.updated_at is None:
            object.__setattr__(self, 'updated_at', self.created_at)
        if self.date is None:
            object.__setattr__(self, 'date', self.created_at)

    def to_mongo_doc(self) -> dict:
        """Convert to MongoDB document."""
        return asdict(self)

    @classmethod
    def from_mongo_doc(cls, doc: Dict[str, Any]) -> "Ride":
        return _from_doc(cls, doc)


@dataclass(frozen=True)
class SavedItinerary:
    """A generated itinerary saved with snapshots of the inputs it was built from."""
    user_id: str
    generated_plan: List[Dict[str, Any]]
    overall_recommendation: Dict[str, Any]
    itinerary_name: Optional[str] = None
    rider_profile: Dict[str, Any] = field(default_factory=dict)
    vehicle_specs: Dict[str, Any] = field(default_factory=dict)
    vehicle_condition: Dict[str, Any] = field(default_factory=dict)
    trip_preferences: Dict[str, Any] = field(default_factory=dict)
    external_factors: Dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=_new_id)
    created_at: datetime = None

    def __post_init__(self):
        if not self.user_id:
            raise ValueError("user_id is required")
        if self.created_at is None:
            object.__setattr__(self, 'created_at', _now())

    def to_mongo_doc(self) -> dict:
        """Convert to MongoDB document."""
        return asdict(self)

    @classmethod
    def from_mongo_doc(cls, doc: Dict[str, Any]) -> "SavedItinerary":
        return _from_doc(cls, doc)
