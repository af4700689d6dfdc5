import json
from pathlib import Path

from radar_layout import build_radar, build_render_plan, layout_radar

EXAMPLE = Path(__file__).resolve().parent.parent / 'examples' / 'tech_radar.json'


def test_example_radar_lays_out():
    document = json.loads(EXAMPLE.read_text(encoding='utf-8'))
    radar = build_radar(document['blips'], document['rings'])

    placed = layout_radar(radar, 620)
    plan = build_render_plan(radar, placed, 620)

    assert len(placed) == len(document['blips'])
    assert sorted(p.blip.number for p in placed) == list(range(1, len(placed) + 1))
    assert not any(p.degraded for p in placed)
    assert len(plan.glyphs) == len(placed)
    assert [listing.name for listing in plan.listings] == [
        'Techniques', 'Tools', 'Platforms', 'Languages & frameworks'
    ]
