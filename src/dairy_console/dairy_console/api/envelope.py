from __future__ import annotations

from typing import Any, Dict, List


def unwrap_list(payload: Any, plural: str, singular: str, *, wrap_single: bool = True) -> List[Dict[str, Any]]:
    """Normalize the list shapes the backend answers with.

    Accepted: ``[...]``, ``{plural: [...]}``, ``{singular: {...}}`` and a bare
    object. The last two become a one-item list unless ``wrap_single`` is off.
    """

    if isinstance(payload, list):
        return payload
    if not isinstance(payload, dict):
        return []
    if isinstance(payload.get(plural), list):
        return payload[plural]
    if not wrap_single:
        return []
    if isinstance(payload.get(singular), dict):
        return [payload[singular]]
    if payload:
        return [payload]
    return []


def unwrap_item(payload: Any, singular: str) -> Dict[str, Any]:
    if isinstance(payload, dict) and isinstance(payload.get(singular), dict):
        return payload[singular]
    if isinstance(payload, dict):
        return payload
    return {}


def to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
