"""2D vector helpers for profile geometry.

Points and vectors are (x, z) tuples. Unless a function says otherwise,
X is radius-valued here: callers convert diameter X with ``to_radius`` on
the way in and ``to_diameter`` on the way out.

Turn sense throughout the package is read with Z to the right and X up,
the way lathe drawings are laid out. In (x, z) tuples that view is a mirror
image, so a left turn in the drawing has a negative ``cross``.
"""
import math
from typing import List, Optional, Tuple

Vec = Tuple[float, float]

EPSILON = 1e-10


def to_radius(x: float, z: float) -> Vec:
    """Diameter-valued X to an (x, z) radius-unit point."""
    return (x / 2.0, z)


def to_diameter(point: Vec) -> Tuple[float, float]:
    """Radius-unit point back to (diameter X, Z)."""
    return (point[0] * 2.0, point[1])


def add(a: Vec, b: Vec) -> Vec:
    return (a[0] + b[0], a[1] + b[1])


def sub(a: Vec, b: Vec) -> Vec:
    return (a[0] - b[0], a[1] - b[1])


def scale(v: Vec, factor: float) -> Vec:
    return (v[0] * factor, v[1] * factor)


def dot(a: Vec, b: Vec) -> float:
    return a[0] * b[0] + a[1] * b[1]


def cross(a: Vec, b: Vec) -> float:
    return a[0] * b[1] - a[1] * b[0]


def length(v: Vec) -> float:
    return math.hypot(v[0], v[1])


def distance(a: Vec, b: Vec) -> float:
    return length(sub(b, a))


def normalize(v: Vec, min_length: float = EPSILON) -> Optional[Vec]:
    """Unit vector along v, or None when v is too short to have a direction."""
    mag = length(v)
    if mag < min_length:
        return None
    return (v[0] / mag, v[1] / mag)


def left_normal(v: Vec) -> Vec:
    """Rotate v by +90 degrees in the (x, z) plane."""
    return (-v[1], v[0])


def clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def angle_between(u1: Vec, u2: Vec) -> float:
    """Angle in radians between two unit vectors."""
    return math.acos(clamp(dot(u1, u2)))


def is_left_turn(travel_in: Vec, travel_out: Vec) -> bool:
    """True when the path turns left (counter-clockwise) in the drawing view.

    Args:
        travel_in: Direction of travel arriving at the vertex
        travel_out: Direction of travel leaving the vertex
    """
    return cross(travel_in, travel_out) < 0


def bisector(u1: Vec, u2: Vec, min_length: float = 1e-6) -> Optional[Vec]:
    """Normalized bisector of two unit vectors, None when they cancel out."""
    return normalize(add(u1, u2), min_length)


def tangent_distance(radius: float, half_angle: float) -> float:
    """Distance from a corner vertex to the tangent points of a fillet.

    Args:
        radius: Fillet radius
        half_angle: Half of the included angle at the vertex (radians)

    Returns:
        Distance along each incident segment from vertex to tangent point
    """
    return radius / math.tan(half_angle)


def line_intersection(
    a1: Vec,
    a2: Vec,
    b1: Vec,
    b2: Vec
) -> Optional[Vec]:
    """
    Intersection of two infinite lines, each given by two points.

    Args:
        a1, a2: Two points on the first line
        b1, b2: Two points on the second line

    Returns:
        Intersection point, or None if the lines are parallel
    """
    d1 = sub(a2, a1)
    d2 = sub(b2, b1)
    denom = cross(d1, d2)
    if abs(denom) < EPSILON:
        return None
    t = cross(sub(b1, a1), d2) / denom
    return add(a1, scale(d1, t))


def line_circle_intersections(
    p1: Vec,
    p2: Vec,
    center: Vec,
    radius: float
) -> List[Vec]:
    """All intersections of the infinite line p1-p2 with a circle."""
    d = sub(p2, p1)
    a = dot(d, d)
    if a < EPSILON:
        return []
    f = sub(p1, center)
    b = 2.0 * dot(f, d)
    c = dot(f, f) - radius * radius
    disc = b * b - 4.0 * a * c
    if disc < 0:
        return []
    root = math.sqrt(disc)
    ts = [(-b - root) / (2.0 * a), (-b + root) / (2.0 * a)]
    return [add(p1, scale(d, t)) for t in ts]


def circle_intersections(
    c1: Vec,
    r1: float,
    c2: Vec,
    r2: float
) -> List[Vec]:
    """All intersections of two circles (empty when disjoint or concentric)."""
    d = distance(c1, c2)
    if d < EPSILON or d > r1 + r2 or d < abs(r1 - r2):
        return []
    a = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
    h = math.sqrt(max(0.0, r1 * r1 - a * a))
    along = scale(sub(c2, c1), 1.0 / d)
    base = add(c1, scale(along, a))
    offset = scale(left_normal(along), h)
    return [add(base, offset), sub(base, offset)]


def nearest(candidates: List[Vec], reference: Vec) -> Optional[Vec]:
    """Candidate closest to reference, None for an empty list."""
    if not candidates:
        return None
    return min(candidates, key=lambda p: distance(p, reference))


def taper_angle(x1: float, z1: float, x2: float, z2: float) -> float:
    """
    Angle of a straight segment from the Z axis, in degrees.

    X values are diameter-valued. A pure X move reports 90.

    Args:
        x1, z1: Start point
        x2, z2: End point

    Returns:
        Angle in degrees, 0-90, rounded to 3 decimals
    """
    dx = abs(x2 - x1) / 2.0
    dz = abs(z2 - z1)
    if dz == 0:
        return 90.0
    return round(math.degrees(math.atan(dx / dz)), 3)


def find_arc_center(
    p1: Tuple[float, float],
    p2: Tuple[float, float],
    radius: float,
    is_left: bool,
    is_large_arc: bool = False
) -> Optional[Tuple[float, float]]:
    """
    Locate the center of an arc of known radius through two points.

    Args:
        p1: Arc start (diameter X, Z)
        p2: Arc end (diameter X, Z)
        radius: Arc radius
        is_left: Arc turns left in the drawing view (G03 on a rear post lathe)
        is_large_arc: Pick the center that makes the arc longer than 180 degrees

    Returns:
        Center as (diameter X, Z) rounded to 3 decimals, or None when the
        radius cannot span the chord or the points coincide
    """
    a = to_radius(*p1)
    b = to_radius(*p2)
    chord = sub(b, a)
    dist = length(chord)
    if dist == 0 or dist > 2 * radius:
        return None

    mid = scale(add(a, b), 0.5)
    h = math.sqrt(max(0.0, radius * radius - dist * dist / 4.0))
    sign = (1 if is_left else -1) * (-1 if is_large_arc else 1)
    # (dz, -dx) is the drawing-view left of the chord
    cx = mid[0] + sign * h * chord[1] / dist
    cz = mid[1] - sign * h * chord[0] / dist
    return (round(cx * 2, 3), round(cz, 3))


def intersect_line_circle(
    point: Tuple[float, float],
    angle_deg: float,
    center: Tuple[float, float],
    radius: float
) -> List[Tuple[float, float]]:
    """
    Intersect a line through a point at an angle from the Z axis with a circle.

    Args:
        point: Point on the line (diameter X, Z)
        angle_deg: Line angle measured from the Z axis toward +X
        center: Circle center (diameter X, Z)
        radius: Circle radius

    Returns:
        Zero, one or two intersection points (diameter X, Z), rounded
    """
    rad = math.radians(angle_deg)
    origin = to_radius(*point)
    direction = (math.sin(rad), math.cos(rad))
    far = add(origin, direction)
    hits = line_circle_intersections(origin, far, to_radius(*center), radius)
    if len(hits) == 2 and distance(hits[0], hits[1]) < EPSILON:
        hits = hits[:1]
    return [(round(p[0] * 2, 3), round(p[1], 3)) for p in hits]
