import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from drawing_ir import (
    Circle,
    Drawing,
    LayoutMode,
    PathRecord,
    ViewInput,
    build_drawing,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _view_input(name: str, payload: Any) -> Optional[ViewInput]:
    if not isinstance(payload, Mapping):
        logger.warning("View %s is not an object; skipping", name)
        return None
    return ViewInput(
        visible_paths=list(payload.get("visible") or []),
        hidden_paths=list(payload.get("hidden") or []),
        view_box=payload.get("viewBox"),
        hidden_view_box=payload.get("hiddenViewBox"),
    )


def _record_to_json(record: PathRecord) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": record.id,
        "groupId": record.group_id,
        "type": record.type,
        "data": record.data,
        "view": record.view,
    }
    geometry = record.geometry
    if isinstance(geometry, Circle):
        out["geometry"] = {
            "center": list(geometry.center),
            "radius": geometry.radius,
            "diameter": geometry.diameter,
        }
    elif geometry is not None:
        out["geometry"] = {
            "endpoints": [list(p) for p in geometry.endpoints],
            "length": geometry.length,
        }
    return out


def drawing_to_json(drawing: Drawing) -> Dict[str, Any]:
    return {
        "viewBox": str(drawing.view_box) if drawing.view_box is not None else None,
        "placements": [
            {
                "view": placement.view_name,
                "translate": list(placement.translate),
                "viewBox": str(placement.view_box),
            }
            for placement in drawing.placements
        ],
        "paths": [_record_to_json(record) for record in drawing.paths],
    }


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Normalize and lay out projected drawing views")
    parser.add_argument("path", help="JSON file mapping view names to paths and viewBoxes")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in LayoutMode],
        default=LayoutMode.STANDARD.value,
        help="Layout mode (default: standard)",
    )
    parser.add_argument(
        "--no-normalize",
        action="store_true",
        help="Keep each view's own viewBox instead of the shared padded size",
    )
    parser.add_argument(
        "--output",
        help="Write the drawing JSON to this path instead of stdout",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    try:
        with open(args.path, encoding="utf-8") as fin:
            payload = json.load(fin)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Could not read views from %s: %s", args.path, exc)
        raise SystemExit(1)
    if not isinstance(payload, Mapping):
        logger.error("Expected a JSON object of views in %s", args.path)
        raise SystemExit(1)

    views: Dict[str, ViewInput] = {}
    for name, view_payload in payload.items():
        view = _view_input(name, view_payload)
        if view is not None:
            views[name] = view
    logger.info("Loaded %d view(s) from %s", len(views), args.path)

    drawing = build_drawing(views, LayoutMode(args.mode), normalize=not args.no_normalize)
    if not drawing.placements:
        logger.warning("No views could be placed")

    rendered = json.dumps(drawing_to_json(drawing), indent=2)
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered + "\n", encoding="utf-8")
        logger.info("Wrote %d path record(s) to %s", len(drawing.paths), output_path)
    else:
        print(rendered)


if __name__ == "__main__":
    main(sys.argv[1:])
