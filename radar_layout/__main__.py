import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from radar_layout import (
    InvalidGeometry,
    MalformedDataError,
    PlacedBlip,
    build_radar,
    get_layout_options,
    layout_radar,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _placement_record(item: PlacedBlip) -> Dict[str, Any]:
    return {
        "number": item.blip.number,
        "name": item.blip.name,
        "quadrant": item.quadrant,
        "ring": item.ring.name,
        "x": item.x,
        "y": item.y,
        "width": item.width,
        "degraded": item.degraded,
    }


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Lay out the blips of a radar")
    parser.add_argument("path", help="Path to a JSON radar description")
    parser.add_argument(
        "--size",
        type=float,
        default=620,
        help="Disc size in pixels (default: 620)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--min-width",
        type=int,
        help="Override the blip width floor",
    )
    parser.add_argument(
        "--output-path",
        help="Write the placements as JSON to the given path",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    with open(args.path, encoding="utf-8") as fin:
        try:
            document = json.load(fin)
        except json.JSONDecodeError as exc:
            logger.error("Cannot parse %s: %s", args.path, exc)
            raise SystemExit(1)

    if not isinstance(document, dict) or not isinstance(document.get("blips", []), list):
        logger.error("%s must hold a JSON object with a \"blips\" list", args.path)
        raise SystemExit(1)

    options = get_layout_options()
    if args.min_width is not None:
        options.min_width = args.min_width

    logger.info("Building radar from %s", args.path)
    try:
        radar = build_radar(document.get("blips", []), document.get("rings"))
        placed = layout_radar(radar, args.size, options)
    except (MalformedDataError, InvalidGeometry) as exc:
        logger.error("Cannot lay out %s: %s", args.path, exc)
        raise SystemExit(1)

    records: List[Dict[str, Any]] = [_placement_record(item) for item in placed]
    for record in records:
        flag = " (degraded)" if record["degraded"] else ""
        print(
            f"{record['number']:>3} {record['quadrant']:<6} {record['ring']:<10} "
            f"({record['x']:.3f}, {record['y']:.3f}) w={record['width']}{flag}  {record['name']}"
        )

    if args.output_path:
        output_path = Path(args.output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing placements to %s", output_path)
        output_path.write_text(json.dumps(records, indent=2), encoding="utf-8")
        print(f"Placements written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
