"""Layout coordinator: places every blip of a radar."""

from __future__ import annotations

import logging
import math
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence, Tuple

from .config import LayoutOptions, get_layout_options
from .logging_utils import apply_debug_logging
from .model import QUADRANT_SLOTS, Radar
from .placement import Annulus, PlacedBlip, place_ring
from .rings import InvalidGeometry, RingCalculator
from .sampler import DeterministicSampler

logger = logging.getLogger(__name__)


def disc_center(size: float) -> int:
    """Centre coordinate of a ``size`` wide disc, rounding halves up."""

    return int(math.floor(size / 2.0 + 0.5))


def validate_geometry(radar: Radar, size: float, options: LayoutOptions) -> RingCalculator:
    """Check structural geometry and return the ring calculator for ``radar``."""

    if size <= 0:
        raise InvalidGeometry(f"disc size must be positive (got {size})")
    if options.min_width <= 0 or options.initial_width <= 0:
        raise InvalidGeometry("blip widths must be positive")
    if options.min_width > options.initial_width:
        raise InvalidGeometry(
            f"width floor {options.min_width} exceeds initial width {options.initial_width}"
        )
    if options.max_attempts < 0:
        raise InvalidGeometry(f"max_attempts must be >= 0 (got {options.max_attempts})")
    if not 0 < options.max_angle_delta <= 45.0:
        raise InvalidGeometry(
            f"max_angle_delta must lie in (0, 45] degrees (got {options.max_angle_delta})"
        )

    rings = radar.rings()
    if not rings:
        raise InvalidGeometry("radar has no rings")
    orders = [ring.order for ring in rings]
    if orders != list(range(len(rings))):
        raise InvalidGeometry(f"ring orders must be contiguous from 0 (got {orders})")

    slots = radar.slots()
    if len(slots) != len(QUADRANT_SLOTS):
        raise InvalidGeometry(
            f"layout needs exactly {len(QUADRANT_SLOTS)} quadrants (got {len(slots)})"
        )

    ring_set = set(rings)
    for blip in radar.blips():
        if blip.ring not in ring_set:
            raise InvalidGeometry(
                f"blip {blip.name!r} references ring {blip.ring.name!r} outside this radar"
            )
        if blip.width is not None and (
            isinstance(blip.width, bool) or not isinstance(blip.width, int)
        ):
            raise InvalidGeometry(f"blip {blip.name!r} width must be an integer (got {blip.width!r})")
        if blip.width is not None and blip.width < options.min_width:
            raise InvalidGeometry(
                f"blip {blip.name!r} width {blip.width} is below the floor {options.min_width}"
            )

    calculator = RingCalculator(len(rings), disc_center(size))
    thinnest = calculator.min_thickness()
    if options.min_width > thinnest:
        raise InvalidGeometry(
            f"width floor {options.min_width} exceeds thinnest ring ({thinnest:.3f})"
        )
    for ring in rings:
        lo, hi = calculator.bounds(ring.order)
        band = Annulus(min_radius=lo, max_radius=hi, start_angle=0.0, center=calculator.center)
        if not band.fits(options.min_width, options.max_angle_delta):
            raise InvalidGeometry(
                f"width floor {options.min_width} does not fit inside the sector of ring {ring.name!r}"
            )
    return calculator


def layout_radar(
    radar: Radar, size: float, options: Optional[LayoutOptions] = None
) -> List[PlacedBlip]:
    """Place every blip of ``radar`` on a disc of side ``size``.

    The result is grouped by quadrant slot, then ring order, then the blip's
    position in its quadrant. Equal inputs give identical placements.
    """

    options = options or get_layout_options()
    calculator = validate_geometry(radar, size, options)
    center = calculator.center

    placed: List[PlacedBlip] = []
    for slot in radar.slots():
        quadrant = slot.quadrant
        assert quadrant is not None
        for ring in radar.rings():
            ring_blips = quadrant.blips_in(ring)
            if not ring_blips:
                continue
            min_radius, max_radius = calculator.bounds(ring.order)
            annulus = Annulus(
                min_radius=min_radius,
                max_radius=max_radius,
                start_angle=slot.start_angle,
                center=center,
            )
            sampler = DeterministicSampler.for_pair(ring.name, quadrant.name)
            placed.extend(place_ring(ring_blips, slot.order, annulus, sampler, options))

    degraded = sum(1 for item in placed if item.degraded)
    logger.info(
        "Laid out %d blip(s) across %d quadrant(s), %d degraded",
        len(placed),
        len(radar.slots()),
        degraded,
    )
    return placed


def group_placements(
    placed: Sequence[PlacedBlip],
) -> Dict[Tuple[str, str], List[PlacedBlip]]:
    """Index placements by ``(quadrant order, ring name)`` keeping their order."""

    groups: Dict[Tuple[str, str], List[PlacedBlip]] = OrderedDict()
    for item in placed:
        groups.setdefault((item.quadrant, item.ring.name), []).append(item)
    return groups


apply_debug_logging(globals(), logger=logger, skip={"disc_center", "group_placements"})
