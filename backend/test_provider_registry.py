import pytest

from providers.fake_providers import FakeSpecsProvider
from providers.registry import get_providers, reload_providers
from providers.real_providers import GeminiSpecsProvider, HttpSpecsProvider


@pytest.fixture(autouse=True)
def _demo_mode(monkeypatch):
    monkeypatch.setenv("RIDEINDIA_MODE", "demo")
    monkeypatch.delenv("SPECS_API_URL", raising=False)
    reload_providers()
    yield
    reload_providers("prod")


def test_demo_mode_uses_fakes():
    providers = get_providers()
    assert isinstance(providers.specs, FakeSpecsProvider)


def test_providers_are_cached():
    assert get_providers() is get_providers()


@pytest.mark.asyncio
async def test_specs_lookup_deterministic():
    providers = get_providers()
    first = await providers.specs.get_specs("Honda", "CB350", 2023)
    second = await providers.specs.get_specs("Honda", "CB350", 2023)
    assert first == second
    assert first["engine_cc"] == 348
    assert first["typical_tire_lifespan_km"] == 20000


@pytest.mark.asyncio
async def test_specs_lookup_is_case_insensitive():
    providers = get_providers()
    specs = await providers.specs.get_specs("royal enfield", " himalayan ", 2022)
    assert specs is not None
    assert specs["ground_clearance"] == 220


@pytest.mark.asyncio
async def test_unknown_vehicle_returns_none():
    providers = get_providers()
    assert await providers.specs.get_specs("Bajaj", "Chetak", 1990) is None
    assert await providers.specs.get_specs("Honda", "Gold Wing", 2020) is None


def test_prod_mode_switch(monkeypatch):
    monkeypatch.setenv("RIDEINDIA_MODE", "prod")
    reload_providers()
    providers = get_providers()
    assert isinstance(providers.specs, GeminiSpecsProvider)


def test_prod_mode_uses_specs_service_when_configured(monkeypatch):
    monkeypatch.setenv("RIDEINDIA_MODE", "prod")
    monkeypatch.setenv("SPECS_API_URL", "http://specs.internal/lookup")
    reload_providers()
    providers = get_providers()
    assert isinstance(providers.specs, HttpSpecsProvider)
    assert providers.specs.url == "http://specs.internal/lookup"
