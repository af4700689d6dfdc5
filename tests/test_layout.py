import math

import pytest

from radar_layout import (
    Blip,
    InvalidGeometry,
    LayoutOptions,
    Quadrant,
    Radar,
    Ring,
    collides,
    compute_ring_radii,
    group_placements,
    layout_radar,
)
from radar_layout.placement import angle_delta

RING_NAMES = ['Adopt', 'Trial', 'Assess', 'Hold']
QUADRANT_NAMES = ['Techniques', 'Tools', 'Platforms', 'Languages']
SIGNS = {'first': (1, -1), 'second': (-1, -1), 'third': (-1, 1), 'fourth': (1, 1)}


def _radar(blips_by_quadrant, ring_names=RING_NAMES):
    rings = {name: Ring(name, idx) for idx, name in enumerate(ring_names)}
    radar = Radar(rings.values())
    for qname in QUADRANT_NAMES:
        quadrant = Quadrant(qname)
        for name, ring_name in blips_by_quadrant.get(qname, []):
            quadrant.add(Blip(name=name, ring=rings[ring_name]))
        radar.add_quadrant(quadrant)
    return radar


def _mixed_radar():
    return _radar(
        {
            'Techniques': [(f't{i}', RING_NAMES[i % 4]) for i in range(14)],
            'Tools': [('a', 'Adopt'), ('b', 'Hold'), ('c', 'Adopt'), ('d', 'Trial')],
            'Platforms': [(f'p{i}', 'Assess') for i in range(9)],
            'Languages': [('python', 'Adopt')],
        }
    )


def test_tools_adopt_scenario():
    radar = _radar({'Tools': [('x', 'Adopt'), ('y', 'Adopt'), ('z', 'Adopt')]})

    placed = layout_radar(radar, 600)

    assert len(placed) == 3
    assert {item.quadrant for item in placed} == {'second'}
    coords = [(item.x, item.y) for item in placed]
    assert len(set(coords)) == 3
    assert all(item.width == 22 and not item.degraded for item in placed)
    for j, item in enumerate(placed):
        assert not collides(item.x, item.y, item.width, coords[:j])
        assert 11.0 <= math.hypot(item.x - 300, item.y - 300) <= 112.5 - 11.0 + 1e-9
        assert item.x <= 300 and item.y <= 300


def test_layout_is_deterministic():
    first = layout_radar(_mixed_radar(), 620)
    second = layout_radar(_mixed_radar(), 620)

    assert [(p.blip.name, p.x, p.y, p.width, p.degraded) for p in first] == [
        (p.blip.name, p.x, p.y, p.width, p.degraded) for p in second
    ]


def test_layout_order_is_quadrant_then_ring_then_input():
    placed = layout_radar(_mixed_radar(), 620)

    keys = [(p.quadrant, p.ring.order) for p in placed]
    slot_rank = {'first': 0, 'second': 1, 'third': 2, 'fourth': 3}
    assert keys == sorted(keys, key=lambda k: (slot_rank[k[0]], k[1]))
    techniques_adopt = [p.blip.name for p in placed if p.quadrant == 'first' and p.ring.name == 'Adopt']
    assert techniques_adopt == ['t0', 't4', 't8', 't12']


def test_shared_blip_prefix_places_identically_across_radars():
    radar_a = _radar({'Tools': [('alpha', 'Trial'), ('beta', 'Trial'), ('gamma', 'Trial')]})
    radar_b = _radar(
        {
            'Techniques': [('t', 'Trial')],
            'Tools': [('omega', 'Trial'), ('psi', 'Trial'), ('x', 'Adopt')],
            'Platforms': [('p', 'Hold')],
        }
    )

    tools_a = group_placements(layout_radar(radar_a, 600))[('second', 'Trial')]
    tools_b = group_placements(layout_radar(radar_b, 600))[('second', 'Trial')]

    assert [(p.x, p.y, p.width) for p in tools_a[:2]] == [(p.x, p.y, p.width) for p in tools_b]


def test_non_degraded_blips_do_not_collide():
    placed = layout_radar(_mixed_radar(), 620)

    for group in group_placements(placed).values():
        for j, later in enumerate(group):
            if later.degraded:
                continue
            earlier = [(p.x, p.y) for p in group[:j]]
            assert not collides(later.x, later.y, later.width, earlier)


def test_placements_are_contained_in_sector_and_annulus():
    size = 620
    center = 310
    radii = compute_ring_radii(4, center)

    for item in layout_radar(_mixed_radar(), size):
        dx, dy = item.x - center, item.y - center
        sx, sy = SIGNS[item.quadrant]
        assert dx * sx >= 0 and dy * sy >= 0
        half = item.width / 2
        distance = math.hypot(dx, dy)
        assert radii[item.ring.order] + half - 1e-9 <= distance <= radii[item.ring.order + 1] - half + 1e-9
        delta = angle_delta(item.width, item.radius)
        assert math.ceil(delta) <= item.angle <= math.floor(90 - delta)
        assert min(abs(dx), abs(dy)) >= half - 1e-9


def test_crowded_ring_terminates_above_floor():
    radar = _radar({'Tools': [(f'crowd{i}', 'Adopt') for i in range(120)]})
    options = LayoutOptions(initial_width=14, min_width=12, max_attempts=10)

    placed = layout_radar(radar, 600, options)

    assert len(placed) == 120
    assert all(12 <= item.width <= 14 for item in placed)
    degraded = [item for item in placed if item.degraded]
    assert degraded
    assert all(item.width == 12 for item in degraded)


def test_crowding_shrinks_width():
    radar = _radar({'Tools': [(f'crowd{i}', 'Adopt') for i in range(30)]})

    placed = layout_radar(radar, 600, LayoutOptions(max_attempts=10))

    assert any(item.width < 22 for item in placed)


def test_group_placements_keys():
    groups = group_placements(layout_radar(_mixed_radar(), 620))

    assert ('second', 'Adopt') in groups
    assert [p.blip.name for p in groups[('second', 'Adopt')]] == ['a', 'c']


def test_layout_requires_four_quadrants():
    rings = [Ring('Adopt', 0)]
    radar = Radar(rings)
    radar.add_quadrant(Quadrant('Tools', [Blip('x', rings[0])]))

    with pytest.raises(InvalidGeometry, match='exactly 4 quadrants'):
        layout_radar(radar, 600)


@pytest.mark.parametrize('size', [0, -100])
def test_layout_rejects_non_positive_size(size):
    with pytest.raises(InvalidGeometry):
        layout_radar(_mixed_radar(), size)


def test_layout_rejects_floor_thicker_than_ring():
    # thinnest of four rings at center 300 is 37.5
    with pytest.raises(InvalidGeometry, match='thinnest ring'):
        layout_radar(_mixed_radar(), 600, LayoutOptions(initial_width=40, min_width=38))


def test_layout_rejects_floor_above_initial_width():
    with pytest.raises(InvalidGeometry):
        layout_radar(_mixed_radar(), 600, LayoutOptions(initial_width=10, min_width=12))


def test_layout_rejects_gapped_ring_orders():
    radar = _radar({}, ring_names=['Adopt'])
    radar.add_ring(Ring('Hold', 2))

    with pytest.raises(InvalidGeometry, match='contiguous'):
        layout_radar(radar, 600)


def test_layout_rejects_foreign_ring():
    radar = _radar({'Tools': [('x', 'Adopt')]})
    radar.quadrants()[0].add(Blip('stray', Ring('Elsewhere', 0)))

    with pytest.raises(InvalidGeometry, match='outside this radar'):
        layout_radar(radar, 600)


def test_layout_rejects_radar_without_rings():
    radar = Radar()
    for name in QUADRANT_NAMES:
        radar.add_quadrant(Quadrant(name))

    with pytest.raises(InvalidGeometry, match='no rings'):
        layout_radar(radar, 600)


def test_squares_near_center_stay_inside_sector():
    radar = _radar({'Tools': [(f'b{i}', 'Adopt') for i in range(40)]})

    placed = layout_radar(radar, 600, LayoutOptions(max_attempts=30))

    for item in placed:
        dx, dy = item.x - 300, item.y - 300
        assert dx <= 0 and dy <= 0
        assert min(abs(dx), abs(dy)) >= item.width / 2 - 1e-9


@pytest.mark.parametrize('override', [5, 11])
def test_layout_rejects_blip_width_below_floor(override):
    radar = _radar({'Tools': [('x', 'Adopt')]})
    radar.quadrants()[1].blips[0].width = override

    with pytest.raises(InvalidGeometry, match='below the floor'):
        layout_radar(radar, 600)


def test_layout_rejects_fractional_blip_width():
    radar = _radar({'Tools': [('x', 'Adopt')]})
    radar.quadrants()[1].blips[0].width = 20.5

    with pytest.raises(InvalidGeometry, match='must be an integer'):
        layout_radar(radar, 600)


def test_width_overrides_never_end_below_floor():
    radar = _radar({'Tools': [(f'crowd{i}', 'Adopt') for i in range(60)]})
    for blip in radar.quadrants()[1].blips:
        blip.width = 16

    placed = layout_radar(radar, 600, LayoutOptions(max_attempts=5))

    assert all(12 <= item.width <= 16 for item in placed)
    assert all(isinstance(item.width, int) for item in placed)


def test_layout_rejects_floor_that_cannot_fit_the_sector():
    # one ring of radius 20: a 17 wide square fits the band but not the 90 degree corner
    radar = _radar({}, ring_names=['Adopt'])

    with pytest.raises(InvalidGeometry, match='does not fit inside the sector'):
        layout_radar(radar, 40, LayoutOptions(min_width=17))


@pytest.mark.parametrize('delta', [0.0, 60.0])
def test_layout_rejects_angle_cap_outside_quarter(delta):
    with pytest.raises(InvalidGeometry, match='max_angle_delta'):
        layout_radar(_mixed_radar(), 600, LayoutOptions(max_angle_delta=delta))
