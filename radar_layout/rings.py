"""Ring boundary radii for the radar disc."""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

logger = logging.getLogger(__name__)

# Radial increment of each ring, innermost first. Increments shrink outward
# so annulus areas stay comparable. Rings past the table get weight 1.
RING_WEIGHTS: Tuple[int, ...] = (0, 6, 5, 3, 2, 1, 1, 1)


class InvalidGeometry(ValueError):
    """Raised when the disc or ring geometry cannot host a layout."""


def _cumulative_weight(index: int) -> int:
    head = RING_WEIGHTS[: index + 1]
    tail = max(0, index + 1 - len(RING_WEIGHTS))
    return sum(head) + tail


def compute_ring_radii(ring_count: int, center: float) -> List[float]:
    """Return ``ring_count + 1`` boundary radii from ``0`` up to ``center``."""

    if ring_count <= 0:
        raise InvalidGeometry(f"ring count must be positive (got {ring_count})")
    if center <= 0:
        raise InvalidGeometry(f"disc center must be positive (got {center})")

    total = _cumulative_weight(ring_count)
    radii = [float(center) * _cumulative_weight(i) / total for i in range(ring_count + 1)]
    # keep the outer edge exact regardless of float rounding
    radii[-1] = float(center)
    logger.info("Computed %d ring radii for center=%s", len(radii), center)
    return radii


class RingCalculator:
    """Cached radii for one radar."""

    def __init__(self, ring_count: int, center: float):
        self.ring_count = ring_count
        self.center = float(center)
        self._radii = compute_ring_radii(ring_count, center)

    @property
    def radii(self) -> Sequence[float]:
        return tuple(self._radii)

    def radius(self, index: int) -> float:
        return self._radii[index]

    def bounds(self, ring_order: int) -> Tuple[float, float]:
        """Return ``(min_radius, max_radius)`` of the annulus for ``ring_order``."""

        if not 0 <= ring_order < self.ring_count:
            raise InvalidGeometry(
                f"ring order {ring_order} outside 0..{self.ring_count - 1}"
            )
        return self._radii[ring_order], self._radii[ring_order + 1]

    def thickness(self, ring_order: int) -> float:
        lo, hi = self.bounds(ring_order)
        return hi - lo

    def min_thickness(self) -> float:
        return min(self.thickness(i) for i in range(self.ring_count))
