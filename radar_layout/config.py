"""Configuration for the placement engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass


@dataclass
class LayoutOptions:
    """Blip sizing and retry limits."""

    initial_width: int = 22
    min_width: int = 12
    max_attempts: int = 200
    max_angle_delta: float = 45.0


_LAYOUT_OPTIONS = LayoutOptions()


def get_layout_options() -> LayoutOptions:
    return copy.deepcopy(_LAYOUT_OPTIONS)


def set_layout_options(options: LayoutOptions) -> None:
    global _LAYOUT_OPTIONS
    _LAYOUT_OPTIONS = copy.deepcopy(options)
