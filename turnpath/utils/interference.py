"""Cutting-edge interference warnings for straight profile segments."""
import math
from typing import List, Optional, Sequence

from ..models import (
    MachineSettings,
    SegmentResult,
    Tool,
    CUT_TOWARD_MINUS_Z,
    CUT_TOWARD_PLUS_Z,
    SEGMENT_ARC,
)
from .nose_compensation import travel_polarity


def feed_angle(segment: SegmentResult, tool: Tool, machine: MachineSettings) -> float:
    """
    Signed angle of a straight segment against the feed direction, degrees.

    Positive angles climb away from the material, negative angles descend
    into it. 0 follows the feed, 90 is a pure X move away from the axis of
    an external part, 180 runs backwards.
    """
    rise = (segment.end_x - segment.start_x) / 2.0
    if tool.is_internal:
        rise = -rise
    forward = -(segment.end_z - segment.start_z) * travel_polarity(machine.cutting_direction)
    return round(math.degrees(math.atan2(rise, forward)), 3)


def _cuts_with_leading_edge(tool: Tool, machine: MachineSettings) -> bool:
    if tool.hand == 'right':
        return machine.cutting_direction == CUT_TOWARD_MINUS_Z
    if tool.hand == 'left':
        return machine.cutting_direction == CUT_TOWARD_PLUS_Z
    return False


def check_interference(
    segments: Sequence[SegmentResult],
    tool: Optional[Tool],
    machine: MachineSettings
) -> List[str]:
    """
    Warn about straight segments the active tool cannot follow.

    A segment climbing steeper than the lead angle hits the main cutting
    edge; one descending steeper than the back angle drags the trailing
    edge. Only handed tools feeding toward their cutting side are checked.

    Args:
        segments: Emitted profile segments
        tool: Active tool, or None
        machine: Machine settings

    Returns:
        Warning messages, empty when nothing interferes
    """
    warnings = []
    if tool is None or not _cuts_with_leading_edge(tool, machine):
        return warnings

    for segment in segments:
        if segment.kind == SEGMENT_ARC:
            continue
        if segment.start_x == segment.end_x and segment.start_z == segment.end_z:
            continue
        angle = feed_angle(segment, tool, machine)
        if tool.lead_angle and angle > tool.lead_angle:
            warnings.append(
                f"Warning {segment.index}: angle {angle}° exceeds the lead angle of {tool.id} ({tool.lead_angle}°)"
            )
        if tool.back_angle and angle < -tool.back_angle:
            warnings.append(
                f"Warning {segment.index}: angle {angle}° is below the back angle of {tool.id} (-{tool.back_angle}°)"
            )
    return warnings
