"""JSON profile document parsing."""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .models import (
    CornerTreatment,
    GrooveInsert,
    MachineSettings,
    Point,
    Tool,
    normalize_corner_type,
)
from .presets import DEFAULT_PRESET, MACHINE_PRESETS, default_tools


class ParseError(Exception):
    """Custom exception for parsing errors."""
    pass


@dataclass
class ProfileDocument:
    points: List[Point]
    machine: MachineSettings
    tools: List[Tool] = field(default_factory=list)


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise ParseError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ParseError(f"{name} must be a number, got {value!r}")


def _optional_number(value: Any, name: str) -> Optional[float]:
    if value is None:
        return None
    return _number(value, name)


def parse_corner(data: Optional[Dict[str, Any]], name: str = 'corner') -> CornerTreatment:
    """Parse a corner treatment; missing data means no treatment."""
    if not data:
        return CornerTreatment()
    if not isinstance(data, dict):
        raise ParseError(f"{name} must be an object")

    second = data.get('second_arc', data.get('secondArc'))
    return CornerTreatment(
        corner_type=normalize_corner_type(data.get('type', data.get('corner_type'))),
        size=_number(data.get('size', 0), f"{name}.size"),
        second_arc=parse_corner(second, f"{name}.second_arc") if second else None,
    )


def parse_groove(data: Optional[Dict[str, Any]], name: str = 'groove') -> Optional[GrooveInsert]:
    if not data:
        return None
    if not isinstance(data, dict):
        raise ParseError(f"{name} must be an object")
    try:
        width = data['width']
        depth = data['depth']
    except KeyError as e:
        raise ParseError(f"{name} is missing {e.args[0]}")
    left = _optional_number(data.get('left_angle'), f"{name}.left_angle")
    right = _optional_number(data.get('right_angle'), f"{name}.right_angle")
    return GrooveInsert(
        width=_number(width, f"{name}.width"),
        depth=_number(depth, f"{name}.depth"),
        left_angle=left or 90.0,
        right_angle=right or 90.0,
    )


def parse_point(data: Dict[str, Any], number: int) -> Point:
    name = f"points[{number}]"
    if not isinstance(data, dict):
        raise ParseError(f"{name} must be an object")
    if 'x' not in data or 'z' not in data:
        raise ParseError(f"{name} needs both x and z")

    point = Point(
        x=_number(data['x'], f"{name}.x"),
        z=_number(data['z'], f"{name}.z"),
        corner=parse_corner(data.get('corner'), f"{name}.corner"),
        groove=parse_groove(data.get('groove'), f"{name}.groove"),
    )
    if data.get('id'):
        point.id = str(data['id'])
    return point


def parse_tool(data: Dict[str, Any]) -> Tool:
    if not isinstance(data, dict) or not data.get('id'):
        raise ParseError("Each tool needs an id")
    tool = Tool.from_dict(data)
    tool.id = str(tool.id)
    tool.nose_radius = _number(tool.nose_radius, f"tool {tool.id} nose_radius")
    tip = data.get('tip_number', 3)
    if isinstance(tip, float) and tip.is_integer():
        tip = int(tip)
    if not isinstance(tip, int) or isinstance(tip, bool):
        raise ParseError(f"tool {tool.id} tip_number must be an integer")
    tool.tip_number = tip
    tool.lead_angle = _optional_number(tool.lead_angle, f"tool {tool.id} lead_angle")
    tool.back_angle = _optional_number(tool.back_angle, f"tool {tool.id} back_angle")
    return tool


def parse_machine(data: Optional[Any], default_preset: str = DEFAULT_PRESET) -> MachineSettings:
    """
    Parse machine settings.

    Accepts a preset name, an object with an optional 'preset' key whose
    values the other keys override, or nothing (the default preset).
    """
    if data is None:
        data = {}
    if isinstance(data, str):
        data = {'preset': data}
    if not isinstance(data, dict):
        raise ParseError("machine must be an object or a preset name")

    preset_name = data.get('preset', default_preset)
    if preset_name not in MACHINE_PRESETS:
        raise ParseError(f"Unknown machine preset '{preset_name}'")

    values = dict(MACHINE_PRESETS[preset_name])
    for key in ('tool_post', 'cutting_direction', 'active_tool_id'):
        if key in data:
            values[key] = data[key]
    values['compensation_enabled'] = bool(data.get('compensation_enabled', False))
    return MachineSettings(**values)


def parse_profile_document(data: Dict[str, Any], default_preset: str = DEFAULT_PRESET) -> ProfileDocument:
    """
    Build points, machine settings and tool library from a decoded document.

    Args:
        data: Decoded JSON object with 'points', optional 'machine' and 'tools'
        default_preset: Machine preset used when the document names none

    Returns:
        ProfileDocument

    Raises:
        ParseError: If a field is missing or has the wrong type
    """
    if not isinstance(data, dict):
        raise ParseError("Profile document must be a JSON object")

    raw_points = data.get('points')
    if not isinstance(raw_points, list):
        raise ParseError("Profile document needs a 'points' list")
    points = [parse_point(item, number) for number, item in enumerate(raw_points)]

    raw_tools = data.get('tools')
    if raw_tools is None:
        tools = default_tools()
    elif isinstance(raw_tools, list):
        tools = [parse_tool(item) for item in raw_tools]
    else:
        raise ParseError("'tools' must be a list")

    machine = parse_machine(data.get('machine'), default_preset)
    return ProfileDocument(points=points, machine=machine, tools=tools)


def parse_input_file(file_path: str, default_preset: str = DEFAULT_PRESET) -> ProfileDocument:
    """Parse a JSON profile document from disk."""
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError:
        raise ParseError(f"Input file not found: {file_path}")
    except OSError as e:
        raise ParseError(f"Error reading file {file_path}: {str(e)}")

    if not content.strip():
        raise ParseError("Input file is empty")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in {file_path}: line {e.lineno}: {e.msg}")

    return parse_profile_document(data, default_preset)
