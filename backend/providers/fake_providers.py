from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from .contracts import SpecsProvider

FIXTURES_ROOT = Path(__file__).parent.parent / "fixtures" / "demo"


class _FixtureLoader:
    def __init__(self, fixture_name: str):
        self.path = FIXTURES_ROOT / fixture_name / "data.json"
        with self.path.open("r", encoding="utf-8") as f:
            self.data = json.load(f)


class FakeSpecsProvider(SpecsProvider, _FixtureLoader):
    """Demo specs table keyed by make then model. Year is ignored."""

    def __init__(self) -> None:
        _FixtureLoader.__init__(self, "specs")

    async def get_specs(self, make: str, model: str, year: Optional[int]) -> Optional[Dict[str, Any]]:
        make_key = make.strip().lower()
        model_key = model.strip().lower()
        for known_make, models in self.data.get("vehicles", {}).items():
            if known_make.lower() != make_key:
                continue
            for known_model, specs in models.items():
                if known_model.lower() == model_key:
                    return dict(specs)
        return None
