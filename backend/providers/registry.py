from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .contracts import SpecsProvider
from .fake_providers import FakeSpecsProvider
from .real_providers import GeminiSpecsProvider, HttpSpecsProvider


@dataclass
class ProviderSet:
    specs: SpecsProvider


def _build_prod() -> ProviderSet:
    specs_api_url = os.environ.get("SPECS_API_URL", "")
    if specs_api_url:
        return ProviderSet(specs=HttpSpecsProvider(specs_api_url))
    return ProviderSet(specs=GeminiSpecsProvider())


def _build_fake() -> ProviderSet:
    return ProviderSet(specs=FakeSpecsProvider())


_provider_cache: Optional[ProviderSet] = None


def load_providers(mode: Optional[str] = None) -> ProviderSet:
    global _provider_cache
    active_mode = (mode or os.environ.get("RIDEINDIA_MODE", "prod")).lower()
    if _provider_cache and mode is None:
        return _provider_cache
    if active_mode in {"demo", "test"}:
        _provider_cache = _build_fake()
    else:
        _provider_cache = _build_prod()
    return _provider_cache


def get_providers() -> ProviderSet:
    return load_providers()


def reload_providers(mode: Optional[str] = None) -> ProviderSet:
    global _provider_cache
    _provider_cache = None
    return load_providers(mode)
