"""Example pipeline: lay out three projected views of a plate with a hole."""

from drawing_ir import LayoutMode, ViewInput, build_drawing

FRONT = ViewInput(
    visible_paths=[
        "M0 0L40 0L40 20L0 20Z",
        "M15 10A5 5 0 1 0 25 10A5 5 0 1 0 15 10",
    ],
    view_box="0 0 40 20",
)
TOP = ViewInput(
    visible_paths=["M0 0L40 0", "M40 0L40 4", "M40 4L0 4", "M0 4L0 0"],
    hidden_paths=["M15 0L15 4", "M25 0L25 4"],
    view_box="0 0 40 4",
)
RIGHT = ViewInput(
    visible_paths=["M0 0H4V20H0Z"],
    hidden_paths=["M0 5L4 5", "M0 15L4 15"],
    view_box="0 0 4 20",
)


def main() -> None:
    drawing = build_drawing({"front": FRONT, "top": TOP, "right": RIGHT}, LayoutMode.STANDARD)
    print(f"Combined viewBox: {drawing.view_box}")
    for placement in drawing.placements:
        print(f"  {placement.view_name}: translate={placement.translate} viewBox={placement.view_box}")
    for record in drawing.paths:
        print(f"{record.id:32s} {record.type:8s} {record.data}")


if __name__ == "__main__":
    main()
