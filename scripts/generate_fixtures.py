#!/usr/bin/env python3
"""
Generate demo fixtures for the RideIndia planner

Writes the demo vehicle specs table read by FakeSpecsProvider
(RIDEINDIA_MODE=demo|test). The output is deterministic and reproducible.

Usage:
    python scripts/generate_fixtures.py
"""

import json
from pathlib import Path
from typing import Any, Dict

FIXTURES_DIR = Path(__file__).resolve().parent.parent / "backend" / "fixtures" / "demo"

# Shared by every demo bike unless overridden
COMMON_SPECS = {
    "transmission_type": "manual",
    "emission_standard": "BS6",
    "has_abs": True,
}


def _bike(
    engine_cc: float,
    ground_clearance: float,
    vehicle_weight: float,
    fuel_tank_capacity: float,
    fuel_efficiency: float,
    load_capacity: float,
    tire_type: str,
    brake_type: str,
    suspension_type: str,
    cooling_system: str,
    service: tuple,
    lifespans: tuple,
    traction_control: bool = False,
    quick_shifter: bool = False,
) -> Dict[str, Any]:
    service_km, service_months = service
    tire_km, brake_km, chain_km = lifespans
    return {
        "engine_cc": engine_cc,
        "ground_clearance": ground_clearance,
        "vehicle_weight": vehicle_weight,
        "fuel_tank_capacity": fuel_tank_capacity,
        "fuel_efficiency": fuel_efficiency,
        "load_capacity": load_capacity,
        "tire_type": tire_type,
        "brake_type": brake_type,
        "suspension_type": suspension_type,
        "cooling_system": cooling_system,
        "transmission_type": COMMON_SPECS["transmission_type"],
        "service_interval_km": service_km,
        "service_interval_months": service_months,
        "emission_standard": COMMON_SPECS["emission_standard"],
        "has_abs": COMMON_SPECS["has_abs"],
        "has_traction_control": traction_control,
        "has_quick_shifter": quick_shifter,
        "typical_tire_lifespan_km": tire_km,
        "typical_brake_pad_lifespan_km": brake_km,
        "typical_chain_lifespan_km": chain_km,
    }


def generate_specs_fixture() -> Path:
    """Generate the demo specs table keyed by make then model."""
    vehicles = {
        "Honda": {
            "CB350": _bike(348, 166, 181, 15, 45, 170, "dual-sport", "disc", "standard", "air",
                           service=(6000, 6), lifespans=(20000, 18000, 30000)),
            "CBR650R": _bike(649, 130, 208, 15.4, 20, 180, "sport", "ABS", "adjustable", "liquid",
                             service=(12000, 12), lifespans=(15000, 12000, 20000),
                             traction_control=True, quick_shifter=True),
        },
        "Royal Enfield": {
            "Himalayan": _bike(411, 220, 199, 15, 30, 200, "off-road", "ABS", "off-road", "air",
                               service=(10000, 12), lifespans=(25000, 20000, 35000)),
            "Classic 350": _bike(349, 170, 195, 13, 35, 160, "road", "disc", "standard", "air",
                                 service=(5000, 6), lifespans=(20000, 18000, 30000)),
        },
        "KTM": {
            "390 Duke": _bike(373, 185, 163, 13.4, 28, 150, "sport", "ABS", "upside-down", "liquid",
                              service=(7500, 12), lifespans=(12000, 10000, 18000),
                              traction_control=True, quick_shifter=True),
        },
    }

    out_dir = FIXTURES_DIR / "specs"
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / "data.json"
    with open(path, 'w') as f:
        json.dump({
            "version": "1.0",
            "description": "Demo vehicle specifications keyed by make then model",
            "vehicles": vehicles,
        }, f, indent=2)
        f.write("\n")

    print(f"✓ Generated specs fixture with {sum(len(m) for m in vehicles.values())} vehicles")
    return path


def main():
    """Generate all fixtures."""
    print("Generating RideIndia demo fixtures...")
    generate_specs_fixture()
    print("\n✓ All fixtures generated successfully!")
    print(f"\nFixtures location: {FIXTURES_DIR}")


if __name__ == "__main__":
    main()
