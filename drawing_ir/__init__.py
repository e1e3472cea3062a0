from .model import (
    Circle,
    DrawingError,
    MeasurementError,
    PathCommand,
    PathDataError,
    PathRecord,
    Segment,
    SegmentGeometry,
    SnapKind,
    SnapPoint,
    ViewBox,
    ViewPlacement,
)
from .config import EngineConfig, get_engine_config, set_engine_config
from .geometry import TOLERANCE, are_collinear, points_close
from .parser import parse_path_data
from .printer import format_path_number, serialize_path_data
from .transform import translate_commands, translate_path_data
from .segments import decompose_commands, decompose_path
from .circles import arc_center, detect_circle
from .merge import merge_collinear_segments
from .normalize import RawPath, coerce_raw_path, normalize_paths
from .viewbox import combine_view_boxes, format_view_box, normalized_view_box, parse_view_box
from .layout import (
    Drawing,
    Layout,
    LayoutMode,
    ViewInput,
    build_drawing,
    build_part_drawings,
    compute_layout,
)
from .coords import ScreenTransform, screen_delta_to_svg, screen_to_svg
from .snapping import collect_snap_points, find_nearest_snap_point
from .dimensions import (
    DimensionStyle,
    circle_dimension,
    line_dimension,
    point_to_line_dimension,
    radius_dimension,
)
from .measurements import Measurement, MeasurementKind, display_text, measurement_geometry
from .session import (
    DeletingLine,
    DrawingCustomLine,
    DrawingSession,
    Measuring,
    PlacingText,
    Snapping,
    SnapSubtype,
)

__all__ = [
    'Circle',
    'DrawingError',
    'MeasurementError',
    'PathCommand',
    'PathDataError',
    'PathRecord',
    'Segment',
    'SegmentGeometry',
    'SnapKind',
    'SnapPoint',
    'ViewBox',
    'ViewPlacement',
    'EngineConfig',
    'get_engine_config',
    'set_engine_config',
    'TOLERANCE',
    'are_collinear',
    'points_close',
    'parse_path_data',
    'format_path_number',
    'serialize_path_data',
    'translate_commands',
    'translate_path_data',
    'decompose_commands',
    'decompose_path',
    'arc_center',
    'detect_circle',
    'merge_collinear_segments',
    'RawPath',
    'coerce_raw_path',
    'normalize_paths',
    'combine_view_boxes',
    'format_view_box',
    'normalized_view_box',
    'parse_view_box',
    'Drawing',
    'Layout',
    'LayoutMode',
    'ViewInput',
    'build_drawing',
    'build_part_drawings',
    'compute_layout',
    'ScreenTransform',
    'screen_delta_to_svg',
    'screen_to_svg',
    'collect_snap_points',
    'find_nearest_snap_point',
    'DimensionStyle',
    'circle_dimension',
    'line_dimension',
    'point_to_line_dimension',
    'radius_dimension',
    'Measurement',
    'MeasurementKind',
    'display_text',
    'measurement_geometry',
    'DeletingLine',
    'DrawingCustomLine',
    'DrawingSession',
    'Measuring',
    'PlacingText',
    'Snapping',
    'SnapSubtype',
]
