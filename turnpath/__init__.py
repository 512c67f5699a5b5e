"""Lathe profile calculation: corners, grooves and nose radius compensation."""

from .models import (
    CornerTreatment,
    GrooveInsert,
    Point,
    Tool,
    MachineSettings,
    Segment,
    SegmentResult,
    CompensatedCoords,
    CalculationResult
)
from .profile_builder import (
    calculate_profile,
    build_segments,
    iter_profile_steps,
    check_chain_continuity,
    ProfileStep
)
from .presets import (
    default_tools,
    find_tool,
    machine_preset,
    list_presets
)
from .file_parser import (
    ParseError,
    ProfileDocument,
    parse_profile_document,
    parse_input_file
)

__all__ = [
    # Models
    'CornerTreatment',
    'GrooveInsert',
    'Point',
    'Tool',
    'MachineSettings',
    'Segment',
    'SegmentResult',
    'CompensatedCoords',
    'CalculationResult',
    # Profile builder
    'calculate_profile',
    'build_segments',
    'iter_profile_steps',
    'check_chain_continuity',
    'ProfileStep',
    # Presets
    'default_tools',
    'find_tool',
    'machine_preset',
    'list_presets',
    # Parsing
    'ParseError',
    'ProfileDocument',
    'parse_profile_document',
    'parse_input_file',
]
