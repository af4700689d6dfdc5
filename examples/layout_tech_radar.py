"""Example pipeline: build a radar, lay out its blips and print the render plan."""

import json
from pathlib import Path

from radar_layout import build_radar, build_render_plan, layout_radar

SIZE = 620


def main() -> None:
    document = json.loads(Path(__file__).with_name("tech_radar.json").read_text(encoding="utf-8"))
    radar = build_radar(document["blips"], document["rings"])

    placed = layout_radar(radar, SIZE)
    for item in placed:
        flag = " degraded" if item.degraded else ""
        print(f"{item.blip.number:>3} {item.quadrant:<6} {item.ring.name:<7} "
              f"({item.x:.2f}, {item.y:.2f}) w={item.width}{flag}")

    plan = build_render_plan(radar, placed, SIZE)
    print(f"\n{len(plan.arcs)} arcs, {len(plan.glyphs)} glyphs")
    for listing in plan.listings:
        print(f"{listing.name}:")
        for ring_name, lines in listing.rings:
            print(f"  {ring_name}")
            for line in lines:
                print(f"    {line}")


if __name__ == "__main__":
    main()
