"""Render plan: plain drawing coordinates derived from a layout.

Nothing here paints. A renderer (SVG, canvas, TikZ, ...) walks the plan and
emits its own primitives.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .layout import disc_center
from .model import Blip, Radar
from .placement import PlacedBlip
from .rings import compute_ring_radii

logger = logging.getLogger(__name__)

# Blip glyph paths are drawn in a 34 unit box; labels are sized for width 22.
GLYPH_BOX = 34.0
LABEL_REFERENCE_WIDTH = 22.0
LABEL_BASELINE_OFFSET = 4.0
AXIS_OVERHANG = 2.0


@dataclass(frozen=True)
class ArcSpec:
    quadrant: str
    ring: str
    inner_radius: float
    outer_radius: float
    start_angle: float
    end_angle: float


@dataclass(frozen=True)
class LineSpec:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class LabelSpec:
    text: str
    x: float
    y: float
    anchor: str = "middle"


@dataclass(frozen=True)
class GlyphSpec:
    number: Optional[int]
    shape: str
    x: float
    y: float
    width: int
    scale: float
    font_size: float
    label: LabelSpec
    degraded: bool = False


@dataclass
class QuadrantListing:
    order: str
    name: str
    rings: List[Tuple[str, List[str]]] = field(default_factory=list)


@dataclass
class RenderPlan:
    size: float
    center: float
    arcs: List[ArcSpec] = field(default_factory=list)
    axis_lines: Dict[str, List[LineSpec]] = field(default_factory=dict)
    ring_labels: List[LabelSpec] = field(default_factory=list)
    glyphs: List[GlyphSpec] = field(default_factory=list)
    listings: List[QuadrantListing] = field(default_factory=list)


def _mirrored_x(order: str) -> bool:
    return order not in ("first", "fourth")


def axis_lines(size: float, start_angle: float) -> List[LineSpec]:
    """The two axis segments bounding a quadrant sector."""

    center = disc_center(size)
    s = math.radians(start_angle)
    e = math.radians(start_angle - 90.0)
    start_x = size * (1 - (-math.sin(s) + 1) / 2)
    end_x = size * (1 - (-math.sin(e) + 1) / 2)
    start_y = size * (1 - (math.cos(s) + 1) / 2)
    end_y = size * (1 - (math.cos(e) + 1) / 2)
    if start_y > end_y:
        start_y, end_y = end_y, start_y
    return [
        LineSpec(center, start_y - AXIS_OVERHANG, center, end_y + AXIS_OVERHANG),
        LineSpec(end_x, center, start_x, center),
    ]


def blip_list_text(blip: Blip) -> str:
    text = f"{blip.number}. {blip.name}"
    if blip.topic:
        text += f". - {blip.topic}"
    return text


def glyph_for(item: PlacedBlip) -> GlyphSpec:
    label = LabelSpec(
        text="" if item.blip.number is None else str(item.blip.number),
        x=item.x,
        y=item.y + LABEL_BASELINE_OFFSET,
    )
    return GlyphSpec(
        number=item.blip.number,
        shape="triangle" if item.blip.is_new else "circle",
        x=item.x,
        y=item.y,
        width=item.width,
        scale=item.width / GLYPH_BOX,
        font_size=item.width * 10.0 / LABEL_REFERENCE_WIDTH,
        label=label,
        degraded=item.degraded,
    )


def build_render_plan(radar: Radar, placed: Sequence[PlacedBlip], size: float) -> RenderPlan:
    """Collect the coordinates a renderer needs for ``radar`` and its layout."""

    center = disc_center(size)
    rings = radar.rings()
    radii = compute_ring_radii(len(rings), center)
    plan = RenderPlan(size=size, center=center)

    for slot in radar.slots():
        for ring in rings:
            inner, outer = radii[ring.order], radii[ring.order + 1]
            plan.arcs.append(
                ArcSpec(
                    quadrant=slot.order,
                    ring=ring.name,
                    inner_radius=inner,
                    outer_radius=outer,
                    start_angle=slot.start_angle,
                    end_angle=slot.start_angle - 90.0,
                )
            )
            mid = (inner + outer) / 2
            x = center - mid if _mirrored_x(slot.order) else center + mid
            plan.ring_labels.append(LabelSpec(ring.name, x, center + LABEL_BASELINE_OFFSET))
        plan.axis_lines[slot.order] = axis_lines(size, slot.start_angle)

    listings: Dict[str, QuadrantListing] = {}
    for slot in radar.slots():
        listings[slot.order] = QuadrantListing(order=slot.order, name=slot.quadrant.name)  # type: ignore[union-attr]

    for item in placed:
        plan.glyphs.append(glyph_for(item))
        listing = listings[item.quadrant]
        if not listing.rings or listing.rings[-1][0] != item.ring.name:
            listing.rings.append((item.ring.name, []))
        listing.rings[-1][1].append(blip_list_text(item.blip))

    plan.listings = list(listings.values())
    logger.info(
        "Render plan: %d arc(s), %d glyph(s), %d label(s)",
        len(plan.arcs),
        len(plan.glyphs),
        len(plan.ring_labels),
    )
    return plan
