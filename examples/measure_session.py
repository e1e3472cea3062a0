"""Example: measure an edge and a hole, then snap a point-to-line distance."""

from drawing_ir import (
    DrawingSession,
    ScreenTransform,
    Snapping,
    SnapSubtype,
    display_text,
    normalize_paths,
    screen_to_svg,
)


def main() -> None:
    records = normalize_paths(
        ["M0 0L40 0L40 20L0 20Z", "M15 10A5 5 0 1 0 25 10A5 5 0 1 0 15 10"],
        id_prefix="standard_front_visible",
    )
    session = DrawingSession.from_records(records)

    edge = session.click_path("standard_front_visible_0_0")
    hole = session.click_path("standard_front_visible_1_circle")
    for measurement in (edge, hole):
        print(f"{measurement.id}: {display_text(measurement)}")

    session.set_mode(Snapping(SnapSubtype.POINT_TO_LINE))
    screen = ScreenTransform.from_pan_zoom(4.0, 100.0, 50.0)
    pointer = screen_to_svg(180.0, 90.0, screen)
    snapped = session.click_point(pointer, "standard_front")
    print(f"Snapped to {snapped}")
    measurement = session.click_path("standard_front_visible_0_3")
    if measurement is not None:
        print(f"{measurement.id}: {display_text(measurement)}")


if __name__ == "__main__":
    main()
