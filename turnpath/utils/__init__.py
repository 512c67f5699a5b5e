"""Geometry and compensation helpers for profile calculation."""

from .vector_math import (
    taper_angle,
    find_arc_center,
    intersect_line_circle
)
from .corner_resolver import (
    CornerResolution,
    precompensated_size,
    resolve_corner,
    resolve_dual_arc,
    resolve_adjacent_corners
)
from .groove import expand_groove
from .arc_utils import is_clockwise, classify_arc_direction, calculate_ik_offsets
from .nose_compensation import (
    CenterTrackCompensator,
    compensate_segments,
    mirror_tip_number,
    tip_offset_unit
)
from .intersection_compensation import IntersectionCompensator, manual_shift_amounts
from .interference import check_interference
from .gcode_format import (
    round_coordinate,
    format_coordinate,
    generate_linear_move,
    generate_arc_move,
    format_results
)
from .validators import (
    validate_points,
    validate_tool,
    validate_machine,
    validate_profile
)

__all__ = [
    # vector_math
    'taper_angle',
    'find_arc_center',
    'intersect_line_circle',
    # corner_resolver
    'CornerResolution',
    'precompensated_size',
    'resolve_corner',
    'resolve_dual_arc',
    'resolve_adjacent_corners',
    # groove
    'expand_groove',
    # arc_utils
    'is_clockwise',
    'classify_arc_direction',
    'calculate_ik_offsets',
    # nose_compensation
    'CenterTrackCompensator',
    'compensate_segments',
    'mirror_tip_number',
    'tip_offset_unit',
    # intersection_compensation
    'IntersectionCompensator',
    'manual_shift_amounts',
    # interference
    'check_interference',
    # gcode_format
    'round_coordinate',
    'format_coordinate',
    'generate_linear_move',
    'generate_arc_move',
    'format_results',
    # validators
    'validate_points',
    'validate_tool',
    'validate_machine',
    'validate_profile',
]
