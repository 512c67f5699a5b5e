"""Shared dataclasses for lathe profile calculation."""
import uuid
from dataclasses import dataclass, field, asdict
from typing import List, Optional, Dict, Any


# Corner treatment types
CORNER_NONE = 'none'
CORNER_CONCAVE_RADIUS = 'concave-radius'
CORNER_CONVEX_RADIUS = 'convex-radius'
CORNER_CHAMFER = 'chamfer'

CORNER_TYPES = (CORNER_NONE, CORNER_CONCAVE_RADIUS, CORNER_CONVEX_RADIUS, CORNER_CHAMFER)
RADIUS_CORNER_TYPES = (CORNER_CONCAVE_RADIUS, CORNER_CONVEX_RADIUS)

# Shop-floor names used on lathe drawings
CORNER_ALIASES = {
    'sumi-r': CORNER_CONCAVE_RADIUS,
    'kaku-r': CORNER_CONVEX_RADIUS,
    'kaku-c': CORNER_CHAMFER,
}

# Segment kinds
SEGMENT_LINE = 'line'
SEGMENT_ARC = 'arc'
SEGMENT_CHAMFER = 'chamfer'

# Machine settings
TOOL_POST_FRONT = 'front'
TOOL_POST_REAR = 'rear'
CUT_TOWARD_MINUS_Z = '-z'
CUT_TOWARD_PLUS_Z = '+z'

TOOL_TYPES = ('external', 'internal', 'facing', 'grooving', 'threading', 'other')
TOOL_HANDS = ('right', 'left', 'neutral')


def normalize_corner_type(corner_type: Optional[str]) -> str:
    """Map a corner type name or alias onto its canonical name.

    Unknown names are returned lowercased so validators can report them.
    """
    if not corner_type:
        return CORNER_NONE
    key = corner_type.strip().lower()
    return CORNER_ALIASES.get(key, key)


@dataclass
class CornerTreatment:
    """Rounding or chamfer applied at a profile vertex."""
    corner_type: str = CORNER_NONE  # 'none', 'concave-radius', 'convex-radius', 'chamfer'
    size: float = 0.0               # radius or chamfer leg length
    second_arc: Optional['CornerTreatment'] = None  # chained radius for dual-arc vertices

    def __post_init__(self):
        self.corner_type = normalize_corner_type(self.corner_type)

    @property
    def is_active(self) -> bool:
        return self.corner_type != CORNER_NONE and self.size > 0

    @property
    def is_radius(self) -> bool:
        return self.corner_type in RADIUS_CORNER_TYPES

    @property
    def is_convex(self) -> bool:
        return self.corner_type == CORNER_CONVEX_RADIUS

    def has_second_arc(self) -> bool:
        return (
            self.second_arc is not None
            and self.second_arc.is_radius
            and self.second_arc.size > 0
        )


@dataclass
class GrooveInsert:
    """Rectangular or dovetail groove cut in at a vertex, toward -Z."""
    width: float
    depth: float                  # radial depth
    left_angle: float = 90.0      # wall angle from the Z axis, degrees
    right_angle: float = 90.0


@dataclass
class Point:
    """A profile vertex. X is diameter-valued."""
    x: float
    z: float
    corner: CornerTreatment = field(default_factory=CornerTreatment)
    groove: Optional[GrooveInsert] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class Tool:
    """A turning tool from the tool library."""
    id: str
    name: str = ''
    machining_type: str = 'external'  # see TOOL_TYPES
    nose_radius: float = 0.0
    tip_number: int = 3               # 0-9 tip orientation index
    hand: str = 'right'               # 'right', 'left', 'neutral'
    lead_angle: Optional[float] = None
    back_angle: Optional[float] = None
    width: Optional[float] = None     # grooving tools only
    insert_shape: Optional[str] = None

    @property
    def is_internal(self) -> bool:
        return self.machining_type == 'internal'

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Tool':
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)


@dataclass
class MachineSettings:
    """The machine fields the calculation consults."""
    tool_post: str = TOOL_POST_REAR                # 'front' or 'rear'
    cutting_direction: str = CUT_TOWARD_MINUS_Z    # '-z' or '+z'
    active_tool_id: Optional[str] = None
    compensation_enabled: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Segment:
    """Pre-compensation path element fed to the compensation engines."""
    kind: str  # 'line' or 'arc'
    start_x: float
    start_z: float
    end_x: float
    end_z: float
    center_x: Optional[float] = None
    center_z: Optional[float] = None
    radius: Optional[float] = None
    is_convex: bool = False

    @property
    def is_arc(self) -> bool:
        return self.kind == SEGMENT_ARC


@dataclass
class CompensatedCoords:
    """Program coordinates of one segment after nose radius compensation."""
    start_x: float
    start_z: float
    end_x: float
    end_z: float
    radius: Optional[float] = None
    i: Optional[float] = None
    k: Optional[float] = None
    center_x: Optional[float] = None
    center_z: Optional[float] = None


@dataclass
class SegmentResult:
    """One emitted profile segment."""
    index: int
    kind: str  # 'line', 'arc', 'chamfer'
    start_x: float
    start_z: float
    end_x: float
    end_z: float
    angle: Optional[float] = None        # straight segments, degrees from Z axis
    center_x: Optional[float] = None
    center_z: Optional[float] = None
    radius: Optional[float] = None
    i: Optional[float] = None            # radius-valued
    k: Optional[float] = None
    is_convex: Optional[bool] = None
    is_left_turn: Optional[bool] = None
    g_code: Optional[str] = None         # 'G01', 'G02', 'G03'
    dist_to_vertex: Optional[float] = None
    original_radius: Optional[float] = None
    manual_shift: Optional[Dict[str, float]] = None  # taper shifts without controller compensation
    compensated: Optional[CompensatedCoords] = None

    @property
    def is_arc(self) -> bool:
        return self.kind == SEGMENT_ARC

    def to_segment(self) -> Segment:
        """Strip output fields, keeping the geometry the engines need."""
        if self.is_arc:
            return Segment(
                kind=SEGMENT_ARC,
                start_x=self.start_x,
                start_z=self.start_z,
                end_x=self.end_x,
                end_z=self.end_z,
                center_x=self.center_x,
                center_z=self.center_z,
                radius=self.radius,
                is_convex=bool(self.is_convex),
            )
        return Segment(SEGMENT_LINE, self.start_x, self.start_z, self.end_x, self.end_z)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        return {k: v for k, v in data.items() if v is not None or k == 'compensated'}


@dataclass
class CalculationResult:
    """Output of a profile calculation."""
    segments: List[SegmentResult] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    tool_id: Optional[str] = None
    nose_radius: Optional[float] = None  # None when compensation did not run

    @property
    def is_compensated(self) -> bool:
        return self.nose_radius is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'segments': [segment.to_dict() for segment in self.segments],
            'warnings': list(self.warnings),
            'tool_id': self.tool_id,
            'nose_radius': self.nose_radius,
        }
