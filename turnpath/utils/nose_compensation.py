"""Tool nose radius compensation, center-track method.

The tool center P is computed first for every node of the segment chain,
then moved to the program point O the controller expects through the
tip-orientation offset V, with P = O + V. X is handled in radius units
and returned as diameter.
"""
import logging
import math
from typing import Dict, List, Optional, Tuple

from ..models import (
    CompensatedCoords,
    MachineSettings,
    Segment,
    Tool,
    TOOL_POST_FRONT,
    CUT_TOWARD_PLUS_Z,
)
from .gcode_format import round_coordinate
from .vector_math import (
    Vec,
    add,
    clamp,
    dot,
    left_normal,
    normalize,
    scale,
    sub,
    to_radius,
)

logger = logging.getLogger(__name__)

# Tool center relative to the program point, in nose radii, for a rear
# tool post cutting toward -Z.
TIP_OFFSETS: Dict[int, Tuple[int, int]] = {
    1: (-1, 1),
    2: (-1, -1),
    3: (1, 1),
    4: (1, -1),
    5: (0, 1),
    6: (-1, 0),
    7: (0, -1),
    8: (1, 0),
    9: (0, 0),
}
DEFAULT_TIP_NUMBER = 3

# Offsets at sharp junctions are capped at this many nose radii
MAX_OFFSET_FACTOR = 4.0
MIN_COS_HALF_SQUARED = 0.001
MIN_COMPENSATED_RADIUS = 0.001


def tip_offset_unit(tip_number: int) -> Tuple[int, int]:
    """Unit tip offset for an orientation index; 0 and unknown map to 3."""
    return TIP_OFFSETS.get(tip_number, TIP_OFFSETS[DEFAULT_TIP_NUMBER])


def mirror_tip_number(tip_number: int) -> int:
    """Tip number whose X offset is negated (1<->3, 2<->4, 6<->8)."""
    ux, uz = tip_offset_unit(tip_number)
    for number, offset in TIP_OFFSETS.items():
        if offset == (-ux, uz):
            return number
    return tip_number


def is_valid_tip_number(tip_number) -> bool:
    return isinstance(tip_number, int) and not isinstance(tip_number, bool) and 0 <= tip_number <= 9


def tool_post_polarity(tool_post: str) -> int:
    return -1 if tool_post == TOOL_POST_FRONT else 1


def travel_polarity(cutting_direction: str) -> int:
    return -1 if cutting_direction == CUT_TOWARD_PLUS_Z else 1


def compensated_arc_radius(radius: float, nose_radius: float, is_convex: bool) -> float:
    """Radius of the tool-center arc, clamped for concave arcs tighter than the nose."""
    if is_convex:
        return radius + nose_radius
    return max(MIN_COMPENSATED_RADIUS, radius - nose_radius)


class CenterTrackCompensator:
    """
    Compensate a segment chain for a tool nose radius.

    Args:
        nose_radius: Tool nose radius (0 gives program points equal to the profile)
        is_external: False for boring (internal) tools
        tip_number: Tip orientation index, 0-9
        tool_post: 'front' or 'rear'
        cutting_direction: '-z' or '+z'
    """

    def __init__(
        self,
        nose_radius: float,
        is_external: bool = True,
        tip_number: int = DEFAULT_TIP_NUMBER,
        tool_post: str = 'rear',
        cutting_direction: str = '-z'
    ):
        self.nose_radius = nose_radius
        self.is_external = is_external
        self.tip_number = tip_number
        self.tool_post = tool_post
        self.cutting_direction = cutting_direction

        ux, uz = tip_offset_unit(tip_number)
        self.tip_offset: Vec = (
            ux * nose_radius * tool_post_polarity(tool_post),
            uz * nose_radius * travel_polarity(cutting_direction),
        )
        # Line normals: left of travel, flipped for bores and for +Z cutting
        self._line_side = (1 if is_external else -1) * travel_polarity(cutting_direction)

    @classmethod
    def for_tool(cls, tool: Tool, machine: MachineSettings) -> 'CenterTrackCompensator':
        return cls(
            tool.nose_radius,
            is_external=not tool.is_internal,
            tip_number=tool.tip_number,
            tool_post=machine.tool_post,
            cutting_direction=machine.cutting_direction,
        )

    def segment_normal(self, segment: Segment, at_start: bool) -> Vec:
        """
        Unit normal pointing away from the material at one end of a segment.

        Args:
            segment: Line or arc, diameter-valued
            at_start: Normal at the start point, else at the end point

        Returns:
            (x, z) normal in radius units, (0, 0) for degenerate segments
        """
        start = to_radius(segment.start_x, segment.start_z)
        end = to_radius(segment.end_x, segment.end_z)

        if segment.is_arc:
            center = to_radius(segment.center_x, segment.center_z)
            radial = normalize(sub(start if at_start else end, center))
            if radial is None:
                return (0.0, 0.0)
            return radial if segment.is_convex else scale(radial, -1.0)

        direction = normalize(sub(end, start))
        if direction is None:
            return (0.0, 0.0)
        return scale(left_normal(direction), self._line_side)

    def _interior_center(self, node: Vec, before: Segment, after: Segment) -> Vec:
        """Tool center at a junction, on the bisector of the two normals."""
        r = self.nose_radius
        n1 = self.segment_normal(before, at_start=False)
        n2 = self.segment_normal(after, at_start=True)

        cos_half = math.sqrt(max(MIN_COS_HALF_SQUARED, (1.0 + clamp(dot(n1, n2))) / 2.0))
        offset = min(MAX_OFFSET_FACTOR * r, r / cos_half)
        if offset < r / cos_half:
            logger.debug("Offset at %s capped at %.3f", node, offset)

        direction = normalize(add(n1, n2), 1e-4) or n1
        return add(node, scale(direction, offset))

    def tool_center_path(self, segments: List[Segment]) -> List[Vec]:
        """
        Tool center for every node of the chain, in radius units.

        Returns:
            len(segments) + 1 points; the open ends sit where the program
            point coincides with the profile point
        """
        if not segments:
            return []

        nodes = [to_radius(segments[0].start_x, segments[0].start_z)]
        nodes.extend(to_radius(s.end_x, s.end_z) for s in segments)

        centers = [add(nodes[0], self.tip_offset)]
        for index in range(1, len(segments)):
            centers.append(self._interior_center(nodes[index], segments[index - 1], segments[index]))
        centers.append(add(nodes[-1], self.tip_offset))
        return centers

    def to_program_point(self, center: Vec) -> Tuple[float, float]:
        """Tool center (radius units) to the rounded program point (diameter X, Z)."""
        ox, oz = sub(center, self.tip_offset)
        return (round_coordinate(ox * 2), round_coordinate(oz))

    def compensate(self, segments: List[Segment]) -> List[CompensatedCoords]:
        """
        Compensate every segment of a continuous chain.

        Args:
            segments: Chain of lines and arcs, each starting where the last ended

        Returns:
            One CompensatedCoords per segment, in order
        """
        program = [self.to_program_point(p) for p in self.tool_center_path(segments)]

        results = []
        for index, segment in enumerate(segments):
            start_x, start_z = program[index]
            end_x, end_z = program[index + 1]
            coords = CompensatedCoords(start_x, start_z, end_x, end_z)

            if segment.is_arc:
                # Arc center in the program-point frame
                cx, cz = sub(to_radius(segment.center_x, segment.center_z), self.tip_offset)
                coords.radius = round_coordinate(
                    compensated_arc_radius(segment.radius, self.nose_radius, segment.is_convex)
                )
                coords.center_x = round_coordinate(cx * 2)
                coords.center_z = round_coordinate(cz)
                coords.i = round_coordinate(cx - start_x / 2.0)
                coords.k = round_coordinate(cz - start_z)

            results.append(coords)
        return results


def compensate_segments(
    segments: List[Segment],
    tool: Tool,
    machine: MachineSettings
) -> List[CompensatedCoords]:
    """Run the center-track compensator for a tool and machine."""
    return CenterTrackCompensator.for_tool(tool, machine).compensate(segments)


def nose_radius_for(tool: Optional[Tool]) -> Optional[float]:
    """Nose radius of a usable tool, or None when the tool cannot be compensated."""
    if tool is None:
        return None
    if tool.nose_radius is None or tool.nose_radius < 0 or not is_valid_tip_number(tool.tip_number):
        return None
    return tool.nose_radius
