"""
Deep Merge

Applies a partial patch to a nested record without clobbering untouched
nested fields.

Rules:
  - nested dicts merge recursively
  - lists (and any other non-dict value) replace the existing value
  - an explicit None in the patch sets the value to None
  - keys missing from the patch are left untouched
Neither argument is mutated.
"""

import copy
from typing import Any, Dict, Mapping


def deep_merge(base: Mapping[str, Any], patch: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a new dict with `patch` merged over `base`."""
    merged: Dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in patch.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged
