# housepoints/utils/houses.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class HouseDefinition:
    key: str
    name: str
    color: str
    numeric_id: int


HOUSE_DEFINITIONS: tuple[HouseDefinition, ...] = (
    HouseDefinition(key="earth", name="Earth", color="#16a34a", numeric_id=1),
    HouseDefinition(key="water", name="Water", color="#2563eb", numeric_id=2),
    HouseDefinition(key="fire", name="Fire", color="#f97316", numeric_id=3),
    HouseDefinition(key="wind", name="Wind", color="#facc15", numeric_id=4),
    HouseDefinition(key="spirit", name="Spirit", color="#a855f7", numeric_id=5),
)

_KEY_LOOKUP: dict[str, str] = {}
for _h in HOUSE_DEFINITIONS:
    _KEY_LOOKUP[_h.key] = _h.key
    _KEY_LOOKUP[str(_h.numeric_id)] = _h.key


def resolve_house_key(value: object) -> str | None:
    """
    Accepts a slug ("fire"), a numeric id (3) or its string form ("3").
    Returns the canonical slug, or None if unknown.
    """
    if value is None or isinstance(value, bool):
        return None
    return _KEY_LOOKUP.get(str(value).strip().lower())
