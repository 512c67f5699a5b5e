"""Profile builder: ordered points to a chain of line, chamfer and arc segments.

The walk is a fold over ``ProfileStep`` records. Each step starts at the
cursor left by the previous one, so continuity of the chain can be checked
step by step. Compensation runs once over the finished chain.
"""
import dataclasses
import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from .models import (
    CalculationResult,
    MachineSettings,
    Point,
    SegmentResult,
    Tool,
    SEGMENT_ARC,
    SEGMENT_CHAMFER,
    SEGMENT_LINE,
)
from .presets import default_tools, find_tool
from .utils.arc_utils import classify_arc_direction
from .utils.corner_resolver import (
    ArcPair,
    CornerResolution,
    precompensated_size,
    resolve_adjacent_corners,
    resolve_corner,
    resolve_dual_arc,
)
from .utils.groove import expand_groove
from .utils.intersection_compensation import manual_shift_amounts
from .utils.interference import check_interference
from .utils.nose_compensation import compensate_segments, nose_radius_for
from .utils.vector_math import taper_angle

logger = logging.getLogger(__name__)

Cursor = Tuple[float, float]
InterferenceChecker = Callable[[Sequence[SegmentResult], Optional[Tool], MachineSettings], List[str]]


@dataclass
class ProfileStep:
    """Segments emitted for one advance of the walk."""
    segments: List[SegmentResult]
    cursor: Cursor  # where the next step starts
    index: int      # last point consumed


def _position(point: Point) -> Cursor:
    return (point.x, point.z)


def _line(start: Cursor, end: Cursor, angle: Optional[float] = None) -> Optional[SegmentResult]:
    """Straight segment, or None when start and end coincide."""
    if start == end:
        return None
    if angle is None:
        angle = taper_angle(start[0], start[1], end[0], end[1])
    return SegmentResult(
        index=0,
        kind=SEGMENT_LINE,
        start_x=start[0],
        start_z=start[1],
        end_x=end[0],
        end_z=end[1],
        angle=angle,
        g_code='G01',
    )


def _corner_segment(resolution: CornerResolution, machine: MachineSettings) -> SegmentResult:
    if not resolution.is_arc:
        return SegmentResult(
            index=0,
            kind=SEGMENT_CHAMFER,
            start_x=resolution.entry_x,
            start_z=resolution.entry_z,
            end_x=resolution.exit_x,
            end_z=resolution.exit_z,
            angle=taper_angle(resolution.entry_x, resolution.entry_z, resolution.exit_x, resolution.exit_z),
            is_left_turn=resolution.is_left_turn,
            g_code='G01',
            dist_to_vertex=resolution.dist_to_vertex,
        )
    return SegmentResult(
        index=0,
        kind=SEGMENT_ARC,
        start_x=resolution.entry_x,
        start_z=resolution.entry_z,
        end_x=resolution.exit_x,
        end_z=resolution.exit_z,
        center_x=resolution.center_x,
        center_z=resolution.center_z,
        radius=resolution.radius,
        i=resolution.i,
        k=resolution.k,
        is_convex=resolution.is_convex,
        is_left_turn=resolution.is_left_turn,
        g_code=classify_arc_direction(resolution.is_left_turn, machine.tool_post, machine.cutting_direction),
        dist_to_vertex=resolution.dist_to_vertex,
        original_radius=resolution.original_radius,
    )


def _approach(cursor: Cursor, resolutions: Sequence[CornerResolution], machine: MachineSettings) -> List[SegmentResult]:
    """Line from the cursor to the first entry point, then the corner segments."""
    segments = []
    line = _line(cursor, resolutions[0].entry)
    if line is not None:
        segments.append(line)
    segments.extend(_corner_segment(r, machine) for r in resolutions)
    return segments


def _advance(
    points: Sequence[Point],
    index: int,
    cursor: Cursor,
    machine: MachineSettings,
    nose_radius: float
) -> Tuple[List[SegmentResult], Cursor, int]:
    """
    One transition of the walk: consume the vertex after points[index].

    Tries, in order, an S-curve over the next two vertices, a dual arc,
    a single corner, and finally a plain line to the raw vertex.

    Returns:
        (segments, new cursor, index of the last consumed point)
    """
    last = len(points) - 1
    vertex = points[index + 1]
    corner = vertex.corner

    if corner.is_active and index + 2 <= last:
        following = points[index + 2]

        # A grooved vertex needs its own advance so the groove follows it
        if (
            vertex.groove is None
            and corner.is_radius
            and following.corner.is_radius
            and index + 3 <= last
        ):
            pair: Optional[ArcPair] = resolve_adjacent_corners(
                cursor,
                _position(vertex),
                _position(following),
                _position(points[index + 3]),
                corner,
                following.corner,
            )
            if pair is not None:
                return _approach(cursor, pair, machine), pair[1].exit, index + 2

        size = precompensated_size(corner, nose_radius)
        resolution = resolve_corner(cursor, _position(vertex), _position(following), corner, size)
        if resolution is not None:
            if resolution.is_arc and corner.has_second_arc():
                pair = resolve_dual_arc(cursor, _position(vertex), _position(following), corner)
                if pair is not None:
                    return _approach(cursor, pair, machine), pair[1].exit, index + 1
                logger.debug("Dual arc at point %d fell back to a single radius", index + 1)
            return _approach(cursor, [resolution], machine), resolution.exit, index + 1

        logger.debug("Corner at point %d left sharp", index + 1)

    line = _line(cursor, _position(vertex))
    return ([line] if line is not None else []), _position(vertex), index + 1


def _groove_lines(cursor: Cursor, point: Point) -> Tuple[List[SegmentResult], Cursor]:
    lines = expand_groove(cursor[0], cursor[1], point.groove)
    if lines is None:
        return [], cursor
    segments = [_line(start, end, angle) for start, end, angle in lines]
    return [s for s in segments if s is not None], lines[-1][1]


def iter_profile_steps(
    points: Sequence[Point],
    machine: MachineSettings,
    nose_radius: float = 0.0
) -> Iterator[ProfileStep]:
    """
    Walk the points, yielding the segments of each advance.

    Args:
        points: Profile vertices in machining order
        machine: Tool post and cutting direction for arc codes
        nose_radius: Pre-compensation applied to corner radii (0 for none)

    Yields:
        ProfileStep per advance; nothing for fewer than two points
    """
    if len(points) < 2:
        return

    cursor = _position(points[0])
    if points[0].groove is not None:
        segments, cursor = _groove_lines(cursor, points[0])
        yield ProfileStep(segments, cursor, 0)

    index = 0
    while index < len(points) - 1:
        segments, cursor, index = _advance(points, index, cursor, machine, nose_radius)
        if points[index].groove is not None:
            groove_segments, cursor = _groove_lines(cursor, points[index])
            segments.extend(groove_segments)
        yield ProfileStep(segments, cursor, index)


def build_segments(
    points: Sequence[Point],
    machine: MachineSettings,
    nose_radius: float = 0.0
) -> List[SegmentResult]:
    """Fold the walk into one numbered segment list."""
    segments = []
    for step in iter_profile_steps(points, machine, nose_radius):
        for segment in step.segments:
            segments.append(dataclasses.replace(segment, index=len(segments) + 1))
    return segments


def check_chain_continuity(
    segments: Sequence[SegmentResult],
    tolerance: float = 1e-6,
    compensated: bool = False
) -> List[int]:
    """
    Find breaks in a segment chain.

    Args:
        segments: Emitted segments in order
        tolerance: Allowed gap per axis
        compensated: Check the compensated coordinates instead of the profile

    Returns:
        Index of every segment whose start does not meet the previous end
    """
    breaks = []
    for before, after in zip(segments, segments[1:]):
        a, b = before, after
        if compensated:
            a, b = before.compensated, after.compensated
            if a is None or b is None:
                breaks.append(after.index)
                continue
        if abs(a.end_x - b.start_x) > tolerance or abs(a.end_z - b.start_z) > tolerance:
            breaks.append(after.index)
    return breaks


def _manual_shift(segment: SegmentResult, nose_radius: float) -> Optional[dict]:
    if segment.is_arc or segment.angle is None or nose_radius <= 0:
        return None
    if segment.angle <= 0 or segment.angle >= 90:
        return None
    return manual_shift_amounts(segment.angle, nose_radius)


def calculate_profile(
    points: Sequence[Point],
    machine: Optional[MachineSettings] = None,
    tools: Optional[Sequence[Tool]] = None,
    interference_checker: Optional[InterferenceChecker] = check_interference,
    precompensate_corners: bool = False
) -> CalculationResult:
    """
    Calculate the machining path for a lathe profile.

    Args:
        points: Profile vertices in machining order (diameter X)
        machine: Machine settings, defaults to a rear post cutting toward -Z
        tools: Tool library searched for machine.active_tool_id; the default
            library when omitted
        interference_checker: Callable producing warnings for the emitted
            segments; None disables warnings
        precompensate_corners: Adjust corner radii by the nose radius before
            resolving them (convex + r, concave - r)

    Returns:
        CalculationResult with segments, warnings and, when compensation
        ran, compensated program coordinates on every segment
    """
    machine = machine or MachineSettings()
    if tools is None:
        tools = default_tools()
    tool = find_tool(tools, machine.active_tool_id)

    nose_radius = None
    if machine.compensation_enabled:
        nose_radius = nose_radius_for(tool)
        if nose_radius is None:
            logger.warning(
                "Nose radius compensation skipped: active tool %r is missing or invalid",
                machine.active_tool_id,
            )

    pre_radius = nose_radius if (precompensate_corners and nose_radius) else 0.0
    segments = build_segments(points, machine, pre_radius)
    if not segments:
        return CalculationResult()

    warnings = []
    if interference_checker is not None:
        warnings = list(interference_checker(segments, tool, machine))

    if nose_radius is not None:
        compensated = compensate_segments([s.to_segment() for s in segments], tool, machine)
        segments = [
            dataclasses.replace(segment, compensated=coords, manual_shift=_manual_shift(segment, nose_radius))
            for segment, coords in zip(segments, compensated)
        ]

    logger.debug("Calculated %d segments from %d points", len(segments), len(points))
    return CalculationResult(
        segments=segments,
        warnings=warnings,
        tool_id=tool.id if tool is not None else None,
        nose_radius=nose_radius,
    )
