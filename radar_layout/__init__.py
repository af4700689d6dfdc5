from .config import LayoutOptions, get_layout_options, set_layout_options
from .layout import disc_center, group_placements, layout_radar, validate_geometry
from .model import (
    Blip,
    MalformedDataError,
    Quadrant,
    QuadrantSlot,
    Radar,
    Ring,
    build_radar,
)
from .placement import PlacedBlip, collides
from .render import RenderPlan, build_render_plan
from .rings import InvalidGeometry, RingCalculator, compute_ring_radii
from .sampler import DeterministicSampler, sampler_seed

__all__ = [
    'LayoutOptions',
    'get_layout_options',
    'set_layout_options',
    'disc_center',
    'group_placements',
    'layout_radar',
    'validate_geometry',
    'Blip',
    'MalformedDataError',
    'Quadrant',
    'QuadrantSlot',
    'Radar',
    'Ring',
    'build_radar',
    'PlacedBlip',
    'collides',
    'RenderPlan',
    'build_render_plan',
    'InvalidGeometry',
    'RingCalculator',
    'compute_ring_radii',
    'DeterministicSampler',
    'sampler_seed',
]
