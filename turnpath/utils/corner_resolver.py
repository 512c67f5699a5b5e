"""Corner resolution: fillets, chamfers, dual arcs and S-curves.

Every resolver takes diameter-valued (X, Z) tuples, works in radius units
and returns rounded diameter-valued results, or None when the geometry
cannot host the requested corner. The profile builder treats None as
"run a straight line to the raw vertex".
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..models import (
    CornerTreatment,
    CORNER_CHAMFER,
    CORNER_CONVEX_RADIUS,
)
from .gcode_format import round_coordinate
from .vector_math import (
    Vec,
    add,
    angle_between,
    bisector,
    cross,
    distance,
    dot,
    is_left_turn,
    left_normal,
    length,
    normalize,
    scale,
    sub,
    tangent_distance,
    to_radius,
)

logger = logging.getLogger(__name__)

# Share of an incident segment a corner may consume
ROOM_FACTOR = 0.99
MIN_SEGMENT_LENGTH = 1e-9
MIN_HALF_ANGLE = 1e-4
# Flanks closer than this (cross product of unit vectors) count as parallel
PARALLEL_TOLERANCE = 0.01
# Turn multiplier used when a dual arc mixes concave and convex radii
DIFFERING_TYPE_TURN_FACTOR = 1.5
# Smallest radius pre-compensation may leave on a concave corner
MIN_PRECOMPENSATED_RADIUS = 0.001


@dataclass
class CornerResolution:
    """Resolved corner geometry. Coordinates are diameter X and Z."""
    entry_x: float
    entry_z: float
    exit_x: float
    exit_z: float
    is_left_turn: bool
    center_x: Optional[float] = None
    center_z: Optional[float] = None
    radius: Optional[float] = None
    i: Optional[float] = None
    k: Optional[float] = None
    is_convex: Optional[bool] = None
    original_radius: Optional[float] = None
    dist_to_vertex: Optional[float] = None

    @property
    def is_arc(self) -> bool:
        return self.radius is not None

    @property
    def entry(self) -> Tuple[float, float]:
        return (self.entry_x, self.entry_z)

    @property
    def exit(self) -> Tuple[float, float]:
        return (self.exit_x, self.exit_z)


ArcPair = Tuple[CornerResolution, CornerResolution]


def precompensated_size(corner: CornerTreatment, nose_radius: float) -> float:
    """
    Corner size adjusted for the tool nose before resolution.

    Args:
        corner: The requested corner treatment
        nose_radius: Active tool nose radius

    Returns:
        size + nose radius for convex radii, size - nose radius (floored at
        0.001) for concave radii, the unchanged size otherwise
    """
    if nose_radius <= 0 or not corner.is_radius:
        return corner.size
    if corner.corner_type == CORNER_CONVEX_RADIUS:
        return corner.size + nose_radius
    return max(MIN_PRECOMPENSATED_RADIUS, corner.size - nose_radius)


def _build_resolution(
    entry: Vec,
    exit_point: Vec,
    left: bool,
    center: Optional[Vec] = None,
    radius: Optional[float] = None,
    is_convex: Optional[bool] = None,
    original_radius: Optional[float] = None,
    dist_to_vertex: Optional[float] = None
) -> CornerResolution:
    """Round radius-unit geometry into a diameter-valued CornerResolution."""
    resolution = CornerResolution(
        entry_x=round_coordinate(entry[0] * 2),
        entry_z=round_coordinate(entry[1]),
        exit_x=round_coordinate(exit_point[0] * 2),
        exit_z=round_coordinate(exit_point[1]),
        is_left_turn=left,
        is_convex=is_convex,
        original_radius=original_radius,
        dist_to_vertex=round_coordinate(dist_to_vertex) if dist_to_vertex is not None else None,
    )
    if center is not None:
        resolution.center_x = round_coordinate(center[0] * 2)
        resolution.center_z = round_coordinate(center[1])
        resolution.radius = round_coordinate(radius)
        resolution.i = round_coordinate(center[0] - entry[0])
        resolution.k = round_coordinate(center[1] - entry[1])
    return resolution


def _incident_vectors(prev: Tuple[float, float], vertex: Tuple[float, float], following: Tuple[float, float]):
    """Unit vectors from the vertex toward both neighbours, with lengths."""
    v = to_radius(*vertex)
    to_prev = sub(to_radius(*prev), v)
    to_next = sub(to_radius(*following), v)
    l1 = length(to_prev)
    l2 = length(to_next)
    if l1 < MIN_SEGMENT_LENGTH or l2 < MIN_SEGMENT_LENGTH:
        return None
    return v, scale(to_prev, 1.0 / l1), scale(to_next, 1.0 / l2), l1, l2


def resolve_corner(
    prev: Tuple[float, float],
    vertex: Tuple[float, float],
    following: Tuple[float, float],
    corner: CornerTreatment,
    size: Optional[float] = None
) -> Optional[CornerResolution]:
    """
    Resolve a single fillet or chamfer at a vertex.

    The radius is shrunk automatically so that neither tangent point uses
    more than 99% of its incident segment.

    Args:
        prev: Point before the vertex (diameter X, Z), usually the path cursor
        vertex: The corner vertex
        following: Point after the vertex
        corner: Corner treatment carried by the vertex
        size: Size to use instead of corner.size (pre-compensated radius)

    Returns:
        CornerResolution, or None for zero-length neighbours, straight or
        folded-back vertices, or a non-positive size
    """
    if size is None:
        size = corner.size
    if size <= 0 or not (corner.is_radius or corner.corner_type == CORNER_CHAMFER):
        return None

    vectors = _incident_vectors(prev, vertex, following)
    if vectors is None:
        logger.debug("Corner at %s rejected: zero-length incident segment", vertex)
        return None
    v, u1, u2, l1, l2 = vectors
    left = is_left_turn(scale(u1, -1.0), u2)

    if corner.corner_type == CORNER_CHAMFER:
        leg = min(size, ROOM_FACTOR * l1, ROOM_FACTOR * l2)
        return _build_resolution(
            add(v, scale(u1, leg)),
            add(v, scale(u2, leg)),
            left,
            dist_to_vertex=leg,
        )

    half = angle_between(u1, u2) / 2.0
    direction = bisector(u1, u2)
    if direction is None or half <= MIN_HALF_ANGLE:
        logger.debug("Corner at %s rejected: no usable bisector", vertex)
        return None

    radius = min(size, ROOM_FACTOR * min(l1, l2) * math.tan(half))
    if radius <= 0:
        return None
    if radius < size:
        logger.debug("Corner at %s: radius %.4f shrunk to %.4f", vertex, size, radius)

    t_dist = tangent_distance(radius, half)
    center = add(v, scale(direction, radius / math.sin(half)))
    return _build_resolution(
        add(v, scale(u1, t_dist)),
        add(v, scale(u2, t_dist)),
        left,
        center=center,
        radius=radius,
        is_convex=corner.is_convex,
        original_radius=corner.size,
        dist_to_vertex=t_dist,
    )


def resolve_dual_arc(
    prev: Tuple[float, float],
    vertex: Tuple[float, float],
    following: Tuple[float, float],
    corner: CornerTreatment
) -> Optional[ArcPair]:
    """
    Resolve a vertex carrying two chained radii into two consecutive arcs.

    For two radii of the same type the shared tangent length L solves
    k*tau*T^2 + (1 + k)*T - tau = 0 with k = r1/r2, tau = tan(turn/2) and
    L = r1*T. Mixed concave/convex pairs use L = r1*tan(0.75*turn), an
    approximation rather than an exact tangency solution.

    Args:
        prev: Point before the vertex (diameter X, Z)
        vertex: The corner vertex
        following: Point after the vertex
        corner: Treatment with a radius type and a radius second_arc

    Returns:
        (first arc, second arc), or None if the pair does not fit
    """
    second = corner.second_arc
    if not corner.is_radius or corner.size <= 0 or not corner.has_second_arc():
        return None

    vectors = _incident_vectors(prev, vertex, following)
    if vectors is None:
        return None
    v, u1, u2, l1, l2 = vectors
    direction = bisector(u1, u2)
    if direction is None:
        return None

    r1 = corner.size
    r2 = second.size
    turn = math.pi - angle_between(u1, u2)
    left = is_left_turn(scale(u1, -1.0), u2)
    same_type = corner.corner_type == second.corner_type

    if same_type:
        ratio = r1 / r2
        tau = math.tan(turn / 2.0)
        if tau < 1e-9:
            return None
        a = ratio * tau
        b = 1.0 + ratio
        c = -tau
        t = (-b + math.sqrt(b * b - 4.0 * a * c)) / (2.0 * a)
        shared = r1 * t
    else:
        spread = DIFFERING_TYPE_TURN_FACTOR * turn
        if spread >= math.pi:
            return None
        shared = r1 * math.tan(spread / 2.0)

    if not math.isfinite(shared) or shared <= 0 or shared >= min(l1, l2):
        logger.debug("Dual arc at %s does not fit (L=%s)", vertex, shared)
        return None

    entry = add(v, scale(u1, shared))
    exit_point = add(v, scale(u2, shared))
    mid = add(v, scale(direction, shared))

    side = 1.0 if left else -1.0
    center1 = add(entry, scale(left_normal(u1), side * r1))
    # left_normal(u2) points away from the bisector on a left turn
    side2 = -side if same_type else side
    center2 = add(exit_point, scale(left_normal(u2), side2 * r2))

    first = _build_resolution(
        entry, mid, left,
        center=center1,
        radius=r1,
        is_convex=corner.is_convex,
        original_radius=r1,
        dist_to_vertex=shared,
    )
    second_left = left if same_type else not left
    last = _build_resolution(
        mid, exit_point, second_left,
        center=center2,
        radius=r2,
        is_convex=second.is_convex,
        original_radius=r2,
        dist_to_vertex=shared,
    )
    return first, last


def _on_segment(point: Vec, start: Vec, direction: Vec, seg_length: float) -> bool:
    along = dot(sub(point, start), direction)
    return -1e-9 <= along <= seg_length + 1e-9


def resolve_adjacent_corners(
    p1: Tuple[float, float],
    p2: Tuple[float, float],
    p3: Tuple[float, float],
    p4: Tuple[float, float],
    first: CornerTreatment,
    second: CornerTreatment
) -> Optional[ArcPair]:
    """
    Resolve two neighbouring radius corners on a step into an S-curve.

    Applies when the flanks p1-p2 and p3-p4 are parallel and run the same
    way, and the two fillets would overlap on the short middle segment
    p2-p3. The middle segment is then replaced by two arcs tangent to each
    other; the remaining gap along the flanks is split in proportion to the
    radii.

    Args:
        p1: Path cursor before the first corner (diameter X, Z)
        p2: First corner vertex
        p3: Second corner vertex
        p4: Point after the second corner
        first: Treatment at p2
        second: Treatment at p3

    Returns:
        (first arc, second arc), or None to resolve each vertex on its own
    """
    if not (first.is_radius and second.is_radius and first.size > 0 and second.size > 0):
        return None

    a, b, c, d = (to_radius(*p) for p in (p1, p2, p3, p4))
    t1 = normalize(sub(b, a))
    t2 = normalize(sub(c, b))
    t3 = normalize(sub(d, c))
    if t1 is None or t2 is None or t3 is None:
        return None

    turn1 = cross(t1, t2)
    turn2 = cross(t2, t3)
    if abs(turn1) < 1e-9 or abs(turn2) < 1e-9:
        return None
    if abs(cross(t1, t3)) >= PARALLEL_TOLERANCE or dot(t1, t3) <= 0:
        return None
    # Parallel flanks running the same way always turn in opposite senses
    if (turn1 > 0) == (turn2 > 0):
        return None

    r1 = first.size
    r2 = second.size
    target = r1 + r2
    # A step at least as tall as both radii hosts two independent fillets
    if abs(dot(sub(c, b), left_normal(t1))) >= target:
        return None

    s1 = 1.0 if turn1 > 0 else -1.0
    s3 = 1.0 if turn2 > 0 else -1.0
    n1 = scale(left_normal(t1), s1)
    n3 = scale(left_normal(t3), s3)

    # Center lines of both fillets, offset from the flanks
    base1 = add(b, scale(n1, r1))
    base2 = add(c, scale(n3, r2))
    gap = sub(base2, base1)
    h = abs(dot(gap, left_normal(t1)))
    if h >= target:
        return None

    shift = math.sqrt(target * target - h * h) - dot(gap, t1)
    center1 = sub(base1, scale(t1, shift * r1 / target))
    center2 = add(base2, scale(t1, shift * r2 / target))
    if abs(distance(center1, center2) - target) > 1e-6:
        return None

    entry = sub(center1, scale(n1, r1))
    exit_point = sub(center2, scale(n3, r2))
    if not (_on_segment(entry, a, t1, distance(a, b)) and _on_segment(exit_point, c, t3, distance(c, d))):
        logger.debug("S-curve between %s and %s leaves the flanks", p2, p3)
        return None

    mid = add(center1, scale(sub(center2, center1), r1 / target))
    arc1 = _build_resolution(
        entry, mid, turn1 < 0,
        center=center1,
        radius=r1,
        is_convex=first.is_convex,
        original_radius=r1,
        dist_to_vertex=distance(entry, b),
    )
    arc2 = _build_resolution(
        mid, exit_point, turn2 < 0,
        center=center2,
        radius=r2,
        is_convex=second.is_convex,
        original_radius=r2,
        dist_to_vertex=distance(exit_point, c),
    )
    return arc1, arc2
