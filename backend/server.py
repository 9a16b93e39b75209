from fastapi import FastAPI, APIRouter, HTTPException, Query
from dotenv import load_dotenv
from starlette.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorClient
import os
import logging
import random
from pathlib import Path
from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any
from datetime import date, datetime

from providers import get_providers, SpecsLookupError
from providers.contracts import VehicleSpecsFields
from planner import state as planner
from planner.session_store import SessionStore
from itinerary_service import ItineraryValidationError
from persistence import (
    InMemoryItineraryRepository,
    InMemoryRideRepository,
    MongoItineraryRepository,
    MongoRideRepository,
    PersistenceError,
    Ride,
    SavedItinerary,
)

ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# MongoDB connection (optional for demo/test)
mongo_url = os.environ.get('MONGO_URL', 'mongodb://localhost:27017')
client = None
db = None

# In-memory stores used in demo/test mode
memory_rides = InMemoryRideRepository()
memory_itineraries = InMemoryItineraryRepository()

# Planner sessions live for the lifetime of the process
sessions = SessionStore()


def _use_memory_store() -> bool:
    return os.environ.get('RIDEINDIA_MODE', 'prod').lower() in {'demo', 'test'}


# We'll connect on app startup instead of during module import
async def connect_to_mongo():
    global client, db
    if _use_memory_store():
        logger.info("RIDEINDIA_MODE is demo/test; using in-memory repositories")
        return False
    try:
        temp_client = AsyncIOMotorClient(mongo_url, serverSelectionTimeoutMS=5000)
        # Test connection
        await temp_client.admin.command('ping')
        client = temp_client
        db = client[os.environ.get('DB_NAME', 'rideindia')]
        await MongoRideRepository(db).ensure_indexes()
        await MongoItineraryRepository(db).ensure_indexes()
        logger.info("MongoDB connection successful")
        return True
    except Exception as e:
        logger.warning(f"MongoDB connection failed: {e}. Running without database.")
        client = None
        db = None
        return False


def ride_repository():
    if _use_memory_store():
        return memory_rides
    if db is None:
        logger.warning("Database not available for rides")
        raise HTTPException(status_code=503, detail="Database not available. Rides require database connection.")
    return MongoRideRepository(db)


def itinerary_repository():
    if _use_memory_store():
        return memory_itineraries
    if db is None:
        logger.warning("Database not available for itineraries")
        raise HTTPException(status_code=503, detail="Database not available. Saved itineraries require database connection.")
    return MongoItineraryRepository(db)


# Create the main app
app = FastAPI(title="RideIndia Planner API")

# Create a router with the /api prefix
api_router = APIRouter(prefix="/api")

# ==================== Models ====================

class SpecsLookupRequest(BaseModel):
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None

class RiderProfilePatch(BaseModel):
    name: Optional[str] = None
    age: Optional[float] = None
    height: Optional[float] = None  # cm
    weight: Optional[float] = None  # kg
    experience_years: Optional[float] = None
    riding_style: Optional[str] = None  # Aggressive, Scenic, Fuel-saving, Balanced
    preferred_daily_distance: Optional[float] = None
    pillion: Optional[bool] = None
    pillion_gender: Optional[str] = None
    luggage_weight: Optional[float] = None
    has_hard_luggage: Optional[bool] = None
    sleep_hours: Optional[float] = None
    hydration_litres: Optional[float] = None
    terrain_adaptability: Optional[str] = None
    recent_fatigue: Optional[str] = None
    fitness_level: Optional[str] = None
    diet_quality: Optional[str] = None

class TripPreferencesPatch(BaseModel):
    desired_pace: Optional[str] = None  # relaxed, moderate, fast
    trip_duration_days: Optional[int] = None
    expected_terrain: Optional[str] = None  # highway, mixed, off-road
    comfort_priority: Optional[str] = None
    weather_tolerance: Optional[str] = None

class ExternalFactorsPatch(BaseModel):
    road_conditions: Optional[str] = None  # good, patchy, rough, off-road
    weather_forecast: Optional[str] = None  # clear, rainy, windy, hot, cold
    traffic_density: Optional[str] = None  # low, moderate, high

class VehicleSpecsPatch(VehicleSpecsFields):
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None

class VehicleConditionPatch(BaseModel):
    current_odometer: Optional[float] = None
    tire_pressure_front: Optional[float] = None
    tire_pressure_rear: Optional[float] = None
    tire_wear_level_front: Optional[float] = None
    tire_wear_level_rear: Optional[float] = None
    brake_pad_wear_front: Optional[float] = None
    brake_pad_wear_rear: Optional[float] = None
    brake_fluid_level: Optional[str] = None
    chain_lube_status: Optional[str] = None
    chain_tension_status: Optional[str] = None
    oil_level_status: Optional[str] = None
    coolant_level_status: Optional[str] = None
    battery_health: Optional[float] = None
    headlight_function: Optional[str] = None
    taillight_function: Optional[str] = None
    turn_signal_function: Optional[str] = None
    horn_function: Optional[str] = None
    mirror_condition: Optional[str] = None
    last_tire_change_km: Optional[float] = None
    last_oil_change_km: Optional[float] = None
    last_brake_pad_change_km: Optional[float] = None
    last_chain_change_km: Optional[float] = None
    last_service_km: Optional[float] = None
    last_service_date: Optional[str] = None  # YYYY-MM-DD
    recent_issues: Optional[List[str]] = None
    customizations: Optional[List[str]] = None

class SessionResponse(BaseModel):
    session_id: str
    state: Dict[str, Any]
    error: Optional[str] = None

class ItineraryRequest(BaseModel):
    seed: Optional[int] = None
    start_date: Optional[date] = None

class SaveItineraryRequest(BaseModel):
    user_id: str
    itinerary_name: Optional[str] = None
    rider_profile: Dict[str, Any] = Field(default_factory=dict)
    vehicle_specs: Dict[str, Any] = Field(default_factory=dict)
    vehicle_condition: Dict[str, Any] = Field(default_factory=dict)
    trip_preferences: Dict[str, Any] = Field(default_factory=dict)
    external_factors: Dict[str, Any] = Field(default_factory=dict)
    generated_plan: List[Dict[str, Any]]
    overall_recommendation: Dict[str, Any]

class RideRequest(BaseModel):
    rider_name: str
    origin: str
    destination: str
    date: Optional[datetime] = None
    vehicle: Optional[str] = None
    cause: Optional[str] = None
    club: Optional[str] = None


def _session_response(session_id: str, state: "planner.PlannerState", error: Optional[str] = None) -> SessionResponse:
    return SessionResponse(session_id=session_id, state=state.to_dict(), error=error)


def _get_session(session_id: str) -> "planner.PlannerState":
    state = sessions.get(session_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return state


def _patch_dict(patch: BaseModel) -> Dict[str, Any]:
    # Only fields the client actually sent; an explicit null stays in the patch
    return patch.model_dump(exclude_unset=True)

# ==================== API Routes ====================

@api_router.get("/")
async def root():
    return {"message": "RideIndia Planner API", "version": "1.0", "features": ["stamina", "maintenance", "itinerary", "rides"]}

@api_router.get("/health")
async def health_check():
    return {"status": "healthy", "timestamp": datetime.utcnow().isoformat(), "database": db is not None}

# ==================== Vehicle Specs ====================

@api_router.post("/vehicles/specs")
async def lookup_vehicle_specs(request: SpecsLookupRequest):
    """Look up detailed specs for a make/model/year."""
    if not request.make or not request.model:
        raise HTTPException(status_code=400, detail="make and model are required")
    logger.info(f"Specs lookup: {request.make} {request.model} {request.year}")
    try:
        specs = await get_providers().specs.get_specs(request.make, request.model, request.year)
    except SpecsLookupError as e:
        logger.error(f"Error fetching detailed vehicle specs: {e}")
        raise HTTPException(status_code=502, detail=planner.SPECS_LOOKUP_FAILED_MESSAGE)
    if not specs:
        raise HTTPException(
            status_code=404,
            detail=planner.SPECS_NOT_FOUND_MESSAGE.format(make=request.make, model=request.model, year=request.year),
        )
    return {"make": request.make, "model": request.model, "year": request.year, "specs": specs}

# ==================== Planner Sessions ====================

@api_router.post("/sessions", response_model=SessionResponse, status_code=201)
async def create_session():
    """Start a planner session with default inputs."""
    session_id, state = sessions.create()
    return _session_response(session_id, state)

@api_router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str):
    return _session_response(session_id, _get_session(session_id))

@api_router.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    if not sessions.delete(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"success": True}

@api_router.post("/sessions/{session_id}/reset", response_model=SessionResponse)
async def reset_session(session_id: str):
    _get_session(session_id)
    state = sessions.put(session_id, planner.reset())
    return _session_response(session_id, state)

@api_router.patch("/sessions/{session_id}/rider", response_model=SessionResponse)
async def patch_rider_profile(session_id: str, patch: RiderProfilePatch):
    state = planner.update_rider_profile(_get_session(session_id), _patch_dict(patch))
    return _session_response(session_id, sessions.put(session_id, state))

@api_router.patch("/sessions/{session_id}/trip", response_model=SessionResponse)
async def patch_trip_preferences(session_id: str, patch: TripPreferencesPatch):
    state = planner.update_trip_preferences(_get_session(session_id), _patch_dict(patch))
    return _session_response(session_id, sessions.put(session_id, state))

@api_router.patch("/sessions/{session_id}/external", response_model=SessionResponse)
async def patch_external_factors(session_id: str, patch: ExternalFactorsPatch):
    state = planner.update_external_factors(_get_session(session_id), _patch_dict(patch))
    return _session_response(session_id, sessions.put(session_id, state))

@api_router.patch("/sessions/{session_id}/vehicle/specs", response_model=SessionResponse)
async def patch_vehicle_specs(session_id: str, patch: VehicleSpecsPatch):
    """Update specs; a make/model/year change triggers a specs lookup."""
    current = _get_session(session_id)
    state, error = await planner.update_vehicle_specs(current, _patch_dict(patch), get_providers().specs)
    return _session_response(session_id, sessions.put(session_id, state), error)

@api_router.patch("/sessions/{session_id}/vehicle/condition", response_model=SessionResponse)
async def patch_vehicle_condition(session_id: str, patch: VehicleConditionPatch):
    state = planner.update_vehicle_condition(_get_session(session_id), _patch_dict(patch))
    return _session_response(session_id, sessions.put(session_id, state))

@api_router.post("/sessions/{session_id}/itinerary")
async def generate_session_itinerary(session_id: str, request: Optional[ItineraryRequest] = None):
    """Generate a day-by-day itinerary from the session's current inputs."""
    request = request or ItineraryRequest()
    state = _get_session(session_id)
    rng = random.Random(request.seed) if request.seed is not None else random.Random()
    try:
        plan = planner.generate_itinerary(state, rng=rng, start_date=request.start_date)
    except ItineraryValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return plan.to_dict()

# ==================== Rides ====================

@api_router.post("/rides", status_code=201)
async def create_ride(request: RideRequest):
    repo = ride_repository()
    try:
        ride = Ride(**request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    try:
        saved = await repo.create(ride)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return saved.to_mongo_doc()

@api_router.get("/rides")
async def list_rides():
    repo = ride_repository()
    try:
        rides = await repo.list()
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [r.to_mongo_doc() for r in rides]

@api_router.get("/rides/{ride_id}")
async def get_ride(ride_id: str):
    repo = ride_repository()
    try:
        ride = await repo.get(ride_id)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if ride is None:
        raise HTTPException(status_code=404, detail="Ride not found")
    return ride.to_mongo_doc()

@api_router.delete("/rides/{ride_id}")
async def delete_ride(ride_id: str):
    repo = ride_repository()
    try:
        deleted = await repo.delete(ride_id)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Ride not found")
    return {"message": "Ride deleted successfully"}

# ==================== Saved Itineraries ====================

@api_router.post("/itineraries", status_code=201)
async def save_itinerary(request: SaveItineraryRequest):
    repo = itinerary_repository()
    try:
        itinerary = SavedItinerary(**request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    try:
        saved = await repo.create(itinerary)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return saved.to_mongo_doc()

@api_router.get("/itineraries")
async def list_itineraries(user_id: Optional[str] = Query(None, alias="userId")):
    repo = itinerary_repository()
    try:
        itineraries = await repo.list(user_id)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [i.to_mongo_doc() for i in itineraries]

@api_router.get("/itineraries/{itinerary_id}")
async def get_itinerary(itinerary_id: str):
    repo = itinerary_repository()
    try:
        itinerary = await repo.get(itinerary_id)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if itinerary is None:
        raise HTTPException(status_code=404, detail="Itinerary not found")
    return itinerary.to_mongo_doc()

@api_router.delete("/itineraries/{itinerary_id}")
async def delete_itinerary(itinerary_id: str):
    repo = itinerary_repository()
    try:
        deleted = await repo.delete(itinerary_id)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Itinerary not found")
    return {"success": True}


# Add CORS middleware first, before including router
app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers in the main app
app.include_router(api_router)

@app.on_event("startup")
async def startup_db_client():
    await connect_to_mongo()

@app.on_event("shutdown")
async def shutdown_db_client():
    if client is not None:
        client.close()
