from __future__ import annotations

import asyncio
import json
import logging
import os
import re
from typing import Any, Dict, Optional

import httpx
from google import genai

from planner.models import VehicleSpecs

from .contracts import SpecsLookupError, SpecsProvider, coerce_specs

logger = logging.getLogger(__name__)

GOOGLE_API_KEY = os.environ.get("GEMINI_API_KEY", "") or os.environ.get("GOOGLE_API_KEY", "")
SPECS_MODEL_NAME = os.environ.get("SPECS_MODEL_NAME", "gemini-2.0-flash")

# Lookup-populated fields; make/model/year always come from the rider.
SPEC_FIELDS = [f for f in VehicleSpecs.input_fields() if f not in VehicleSpecs.IDENTITY_FIELDS]

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def _clean_specs(raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise SpecsLookupError("Specs payload is not a JSON object")
    return coerce_specs({k: v for k, v in raw.items() if k in SPEC_FIELDS})


def _parse_specs_response(text: str) -> Optional[Dict[str, Any]]:
    """
    Parse the model's reply into spec fields.

    Accepts bare JSON, fenced ```json blocks, or JSON embedded in prose.
    Returns None when the model reports the vehicle as unknown.

    Raises:
        SpecsLookupError: If no JSON object can be recovered
    """
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`")
        if cleaned.lower().startswith("json"):
            cleaned = cleaned[4:]
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        match = _JSON_OBJECT.search(text)
        if not match:
            raise SpecsLookupError("Specs response did not contain JSON")
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise SpecsLookupError(f"Specs response JSON is malformed: {e}") from e

    if not isinstance(data, dict):
        raise SpecsLookupError("Specs response is not a JSON object")
    if data.get("found") is False:
        return None
    specs = _clean_specs(data.get("specs", data))
    return specs or None


def _build_prompt(make: str, model: str, year: Optional[int]) -> str:
    fields = ", ".join(SPEC_FIELDS)
    return (
        "You are a motorcycle specifications database for the Indian market.\n"
        f"Return the manufacturer specifications for the {year or ''} {make} {model}.\n"
        "Respond with a single JSON object and nothing else.\n"
        f"Use exactly these keys: {fields}.\n"
        "Units: ground_clearance mm, vehicle_weight kg (dry), fuel_tank_capacity litres, "
        "fuel_efficiency km per litre, load_capacity kg, lifespans in km.\n"
        "tire_type is one of road, dual-sport, off-road, sport. brake_type is one of disc, drum, ABS. "
        "suspension_type is one of standard, adjustable, upside-down, off-road. "
        "cooling_system is air or liquid.\n"
        'If you do not know this vehicle, respond with {"found": false}.'
    )


class GeminiSpecsProvider(SpecsProvider):
    """Specs lookup backed by a Gemini model."""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None) -> None:
        self.api_key = api_key if api_key is not None else GOOGLE_API_KEY
        self.model_name = model_name or SPECS_MODEL_NAME

    async def get_specs(self, make: str, model: str, year: Optional[int]) -> Optional[Dict[str, Any]]:
        if not self.api_key:
            raise SpecsLookupError("Specs lookup is not configured (missing GEMINI_API_KEY)")

        prompt = _build_prompt(make, model, year)
        try:
            client = genai.Client(api_key=self.api_key)
            loop = asyncio.get_event_loop()
            response_obj = await loop.run_in_executor(
                None,
                lambda: client.models.generate_content(model=self.model_name, contents=prompt),
            )
        except Exception as e:
            logger.error(f"Gemini specs lookup failed for {make} {model} {year}: {type(e).__name__}: {e}")
            raise SpecsLookupError(str(e)) from e

        return _parse_specs_response(response_obj.text or "")


class HttpSpecsProvider(SpecsProvider):
    """Specs lookup against a remote specs service (POST make/model/year, 404 when unknown)."""

    def __init__(self, url: str, timeout: float = 10.0) -> None:
        self.url = url
        self.timeout = timeout

    async def get_specs(self, make: str, model: str, year: Optional[int]) -> Optional[Dict[str, Any]]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.url, json={"make": make, "model": model, "year": year})
                if response.status_code == 404:
                    return None
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Specs service request failed for {make} {model} {year}: {e}")
            raise SpecsLookupError(str(e)) from e

        if not isinstance(data, dict):
            raise SpecsLookupError("Specs service returned a non-object body")
        specs = _clean_specs(data.get("specs", data))
        return specs or None
