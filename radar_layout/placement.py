"""Blip placement inside one quadrant/ring annulus."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .config import LayoutOptions
from .logging_utils import apply_debug_logging
from .model import Blip, QuadrantOrder, Ring
from .sampler import DeterministicSampler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    x: float
    y: float
    radius: float
    angle: float


@dataclass(frozen=True)
class PlacedBlip:
    """Final position of a blip in disc space."""

    blip: Blip
    quadrant: QuadrantOrder
    ring: Ring
    x: float
    y: float
    width: int
    radius: float
    angle: float
    degraded: bool = False

    @property
    def coordinates(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Annulus:
    """Ring band of one quadrant sector, centred on ``(center, center)``."""

    min_radius: float
    max_radius: float
    start_angle: float
    center: float

    @property
    def thickness(self) -> float:
        return self.max_radius - self.min_radius

    def orientation(self) -> Tuple[float, float]:
        theta = math.radians(self.start_angle)
        adjust_x = math.sin(theta) - math.cos(theta)
        adjust_y = -math.cos(theta) - math.sin(theta)
        return round(adjust_x), round(adjust_y)

    def radius_range(self, width: float, max_angle_delta: float = 45.0) -> Tuple[float, float]:
        """Radii at which a ``width`` square stays inside both the band and the sector."""

        half = width / 2.0
        sector_floor = half / math.sin(math.radians(max_angle_delta))
        return max(self.min_radius + half, sector_floor), self.max_radius - half

    def fits(self, width: float, max_angle_delta: float = 45.0) -> bool:
        low, high = self.radius_range(width, max_angle_delta)
        return low <= high


def angle_delta(width: float, radius: float, cap: float = 45.0) -> float:
    """Half-spread in degrees that keeps a ``width`` square off the sector edges."""

    ratio = min(1.0, (width / 2.0) / radius) if radius > 0 else 1.0
    return min(math.degrees(math.asin(ratio)), cap)


def generate_candidate(
    width: float,
    annulus: Annulus,
    sampler: DeterministicSampler,
    max_angle_delta: float = 45.0,
) -> Candidate:
    low, high = annulus.radius_range(width, max_angle_delta)
    radius = sampler.next_float(low, high)
    delta = angle_delta(width, radius, max_angle_delta)
    angle = sampler.next_int(math.ceil(delta), math.floor(90.0 - delta))
    adjust_x, adjust_y = annulus.orientation()
    theta = math.radians(angle)
    x = annulus.center + radius * math.cos(theta) * adjust_x
    y = annulus.center + radius * math.sin(theta) * adjust_y
    return Candidate(x=x, y=y, radius=radius, angle=float(angle))


def collides(
    x: float, y: float, width: float, placed: Sequence[Tuple[float, float]]
) -> bool:
    """Axis-aligned square proximity test against already placed centres."""

    return any(abs(px - x) < width and abs(py - y) < width for px, py in placed)


def starting_width(blip: Blip, annulus: Annulus, options: LayoutOptions) -> int:
    width = int(blip.width) if blip.width is not None else options.initial_width
    width = max(width, options.min_width)
    nominal = width
    while width > options.min_width and not annulus.fits(width, options.max_angle_delta):
        width -= 1
    if width != nominal:
        logger.debug(
            "Blip %r width %d does not fit its ring, starting at %d", blip.name, nominal, width
        )
    return width


def place_blip(
    blip: Blip,
    quadrant: QuadrantOrder,
    annulus: Annulus,
    sampler: DeterministicSampler,
    occupied: Sequence[Tuple[float, float]],
    options: LayoutOptions,
) -> PlacedBlip:
    """Find a position for ``blip``, shrinking it one unit at a time on exhaustion."""

    width = starting_width(blip, annulus, options)
    while True:
        candidate = generate_candidate(width, annulus, sampler, options.max_angle_delta)
        for _ in range(options.max_attempts):
            if not collides(candidate.x, candidate.y, width, occupied):
                return _placed(blip, quadrant, candidate, width, degraded=False)
            candidate = generate_candidate(width, annulus, sampler, options.max_angle_delta)

        if width > options.min_width:
            width -= 1
            continue

        degraded = collides(candidate.x, candidate.y, width, occupied)
        if degraded:
            logger.warning(
                "Blip %r in %s quadrant placed with residual collision at width %d",
                blip.name,
                quadrant,
                width,
            )
        return _placed(blip, quadrant, candidate, width, degraded=degraded)


def _placed(
    blip: Blip, quadrant: QuadrantOrder, candidate: Candidate, width: int, *, degraded: bool
) -> PlacedBlip:
    return PlacedBlip(
        blip=blip,
        quadrant=quadrant,
        ring=blip.ring,
        x=candidate.x,
        y=candidate.y,
        width=width,
        radius=candidate.radius,
        angle=candidate.angle,
        degraded=degraded,
    )


def place_ring(
    blips: Sequence[Blip],
    quadrant: QuadrantOrder,
    annulus: Annulus,
    sampler: DeterministicSampler,
    options: LayoutOptions,
    occupied: Optional[List[Tuple[float, float]]] = None,
) -> List[PlacedBlip]:
    """Place ``blips`` in order, each avoiding the ones placed before it."""

    occupied = [] if occupied is None else occupied
    placed: List[PlacedBlip] = []
    for blip in blips:
        result = place_blip(blip, quadrant, annulus, sampler, occupied, options)
        occupied.append(result.coordinates)
        placed.append(result)
    return placed


apply_debug_logging(globals(), logger=logger, skip={"generate_candidate", "collides", "angle_delta"})
