"""Radar data model: rings, quadrants and blips."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

MAX_RINGS = 4

QuadrantOrder = str

# Slot order and start angle (degrees) of the four fixed sectors.
QUADRANT_SLOTS: Tuple[Tuple[QuadrantOrder, float], ...] = (
    ("first", 90.0),
    ("second", 0.0),
    ("third", -90.0),
    ("fourth", -180.0),
)


class MalformedDataError(ValueError):
    """Raised when radar input cannot be assembled into a model."""


@dataclass(frozen=True)
class Ring:
    name: str
    order: int


@dataclass(eq=False)
class Blip:
    """A single classified item to be placed on the radar."""

    name: str
    ring: Ring
    is_new: bool = False
    topic: Optional[str] = None
    description: Optional[str] = None
    number: Optional[int] = None
    width: Optional[int] = None

    def __repr__(self) -> str:
        return f"Blip(number={self.number!r}, name={self.name!r}, ring={self.ring.name!r})"


@dataclass(eq=False)
class Quadrant:
    name: str
    blips: List[Blip] = field(default_factory=list)

    def add(self, blip: Blip) -> None:
        self.blips.append(blip)

    def blips_in(self, ring: Ring) -> List[Blip]:
        return [blip for blip in self.blips if blip.ring == ring]


@dataclass
class QuadrantSlot:
    """One of the four fixed 90 degree sectors of the disc."""

    order: QuadrantOrder
    start_angle: float
    quadrant: Optional[Quadrant] = None


class Radar:
    """Rings plus up to four quadrants, numbered in insertion order."""

    def __init__(self, rings: Iterable[Ring] = ()):
        self._rings: List[Ring] = sorted(rings, key=lambda ring: ring.order)
        self._slots: List[QuadrantSlot] = [
            QuadrantSlot(order=order, start_angle=angle) for order, angle in QUADRANT_SLOTS
        ]
        self._filled = 0
        self._blip_number = 0

    def add_ring(self, ring: Ring) -> None:
        self._rings.append(ring)
        self._rings.sort(key=lambda r: r.order)

    def add_quadrant(self, quadrant: Quadrant) -> QuadrantSlot:
        if self._filled >= len(self._slots):
            raise MalformedDataError(
                f"a radar holds at most {len(self._slots)} quadrants "
                f"(cannot add {quadrant.name!r})"
            )
        slot = self._slots[self._filled]
        slot.quadrant = quadrant
        self._filled += 1
        for blip in quadrant.blips:
            self._blip_number += 1
            blip.number = self._blip_number
        logger.debug("Quadrant %r assigned to slot %s", quadrant.name, slot.order)
        return slot

    def rings(self) -> List[Ring]:
        return list(self._rings)

    def slots(self) -> List[QuadrantSlot]:
        """Return the filled quadrant slots in slot order."""

        return [slot for slot in self._slots if slot.quadrant is not None]

    def quadrants(self) -> List[Quadrant]:
        return [slot.quadrant for slot in self.slots()]  # type: ignore[misc]

    def blips(self) -> List[Blip]:
        return [blip for quadrant in self.quadrants() for blip in quadrant.blips]


def _coerce_is_new(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() == "true"


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text or None


def build_rings(names: Sequence[str]) -> Dict[str, Ring]:
    rings: Dict[str, Ring] = {}
    for idx, name in enumerate(names):
        if idx == MAX_RINGS:
            raise MalformedDataError(f"a radar supports at most {MAX_RINGS} rings")
        rings[name] = Ring(name=name, order=idx)
    return rings


def _unique_in_order(values: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for value in values:
        seen.setdefault(value, None)
    return list(seen)


def build_radar(
    entries: Sequence[Mapping[str, Any]],
    ring_names: Optional[Sequence[str]] = None,
) -> Radar:
    """Assemble a :class:`Radar` from already-parsed row mappings."""

    for idx, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise MalformedDataError(f"entry {idx} is not a mapping")
        for key in ("name", "ring", "quadrant"):
            if not entry.get(key):
                raise MalformedDataError(f"entry {idx} is missing {key!r}")

    names = list(ring_names) if ring_names else _unique_in_order(str(e["ring"]) for e in entries)
    ring_map = build_rings(names)

    quadrants: Dict[str, Quadrant] = {}
    for entry in entries:
        ring_name = str(entry["ring"])
        ring = ring_map.get(ring_name)
        if ring is None:
            raise MalformedDataError(
                f"blip {entry['name']!r} references unknown ring {ring_name!r}"
            )
        key = str(entry["quadrant"])
        if key not in quadrants:
            quadrants[key] = Quadrant(name=key.capitalize())
        quadrants[key].add(
            Blip(
                name=str(entry["name"]),
                ring=ring,
                is_new=_coerce_is_new(entry.get("isNew")),
                topic=_optional_text(entry.get("topic")),
                description=_optional_text(entry.get("description")),
            )
        )

    radar = Radar(ring_map.values())
    for quadrant in quadrants.values():
        radar.add_quadrant(quadrant)

    logger.info(
        "Built radar with %d ring(s), %d quadrant(s), %d blip(s)",
        len(ring_map),
        len(quadrants),
        len(entries),
    )
    return radar
