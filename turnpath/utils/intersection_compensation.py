"""Nose radius compensation by intersecting offset elements.

Each segment is offset by the nose radius (lines become parallel lines,
arcs become concentric circles) and neighbouring offsets are intersected
to find the tool center at every junction. Ends, tip offsets and arc
output follow CenterTrackCompensator, so both methods can be compared
node by node.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..models import Segment
from .gcode_format import round_coordinate
from .nose_compensation import CenterTrackCompensator, compensated_arc_radius
from .vector_math import (
    Vec,
    add,
    circle_intersections,
    line_circle_intersections,
    line_intersection,
    nearest,
    scale,
    to_radius,
)

logger = logging.getLogger(__name__)


@dataclass
class OffsetElement:
    """A segment moved out by the nose radius, in radius units."""
    start: Vec
    end: Vec
    center: Optional[Vec] = None
    radius: Optional[float] = None

    @property
    def is_circle(self) -> bool:
        return self.center is not None


class IntersectionCompensator(CenterTrackCompensator):
    """Compensator that solves offset-element intersections at each junction."""

    def offset_element(self, segment: Segment) -> OffsetElement:
        """Offset a segment away from the material by the nose radius."""
        r = self.nose_radius
        start = to_radius(segment.start_x, segment.start_z)
        end = to_radius(segment.end_x, segment.end_z)
        if segment.is_arc:
            return OffsetElement(
                start=add(start, scale(self.segment_normal(segment, True), r)),
                end=add(end, scale(self.segment_normal(segment, False), r)),
                center=to_radius(segment.center_x, segment.center_z),
                radius=compensated_arc_radius(segment.radius, r, segment.is_convex),
            )
        normal = self.segment_normal(segment, True)
        return OffsetElement(add(start, scale(normal, r)), add(end, scale(normal, r)))

    def _interior_center(self, node: Vec, before: Segment, after: Segment) -> Vec:
        first = self.offset_element(before)
        second = self.offset_element(after)

        if not first.is_circle and not second.is_circle:
            hit = line_intersection(first.start, first.end, second.start, second.end)
        elif first.is_circle and second.is_circle:
            hit = nearest(
                circle_intersections(first.center, first.radius, second.center, second.radius),
                node,
            )
        else:
            line, circle = (second, first) if first.is_circle else (first, second)
            hit = nearest(
                line_circle_intersections(line.start, line.end, circle.center, circle.radius),
                node,
            )

        if hit is None:
            # Tangent junction: both offsets touch at the shifted node
            return first.end
        return hit


def manual_shift_amounts(taper_angle_deg: float, nose_radius: float) -> dict:
    """
    Manual X/Z shifts for programming a taper without controller compensation.

    Two shop formulas are returned. Smid: with c = (90 - angle) / 2,
    dZ = R*tan(c) and dX = 2R*(1 - tan(c)*tan(angle)). The half-angle
    method: dZ = R*(1 - tan(angle/2)) and dX = 2R*(1 - tan(angle/2)).

    Args:
        taper_angle_deg: Taper angle from the Z axis, degrees
        nose_radius: Tool nose radius

    Returns:
        Dict with 'smid_x', 'smid_z', 'half_angle_x', 'half_angle_z'
        (X shifts are diameter values)
    """
    theta = math.radians(taper_angle_deg)
    comp = (math.pi / 2 - theta) / 2
    half = math.tan(theta / 2)
    return {
        'smid_x': round_coordinate(2 * nose_radius * (1 - math.tan(comp) * math.tan(theta))),
        'smid_z': round_coordinate(nose_radius * math.tan(comp)),
        'half_angle_x': round_coordinate(2 * nose_radius * (1 - half)),
        'half_angle_z': round_coordinate(nose_radius * (1 - half)),
    }
