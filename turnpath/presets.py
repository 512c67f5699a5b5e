"""Default tool library and machine presets."""
from typing import Dict, List, Optional, Sequence

from .models import MachineSettings, Tool

DEFAULT_TOOLS = [
    {
        'id': 't01',
        'name': 'External roughing (W insert)',
        'machining_type': 'external',
        'insert_shape': 'W',
        'hand': 'right',
        'nose_radius': 0.8,
        'tip_number': 3,
        'lead_angle': 95,
        'back_angle': 5,
    },
    {
        'id': 't02',
        'name': 'External finishing (D insert)',
        'machining_type': 'external',
        'insert_shape': 'D',
        'hand': 'right',
        'nose_radius': 0.4,
        'tip_number': 3,
        'lead_angle': 93,
        'back_angle': 32,
    },
    {
        'id': 't03',
        'name': 'Profiling (V insert)',
        'machining_type': 'external',
        'insert_shape': 'V',
        'hand': 'right',
        'nose_radius': 0.4,
        'tip_number': 3,
        'lead_angle': 93,
        'back_angle': 52,
    },
    {
        'id': 't04',
        'name': 'Grooving (3mm)',
        'machining_type': 'grooving',
        'insert_shape': 'GROOVING',
        'hand': 'neutral',
        'nose_radius': 0.2,
        'tip_number': 3,
        'width': 3.0,
    },
    {
        'id': 't05',
        'name': 'Threading (16ER)',
        'machining_type': 'threading',
        'insert_shape': 'THREADING',
        'hand': 'right',
        'nose_radius': 0.1,
        'tip_number': 3,
    },
]

MACHINE_PRESETS = {
    'standard_front': {'tool_post': 'front', 'cutting_direction': '-z', 'active_tool_id': 't02'},
    'standard_rear': {'tool_post': 'rear', 'cutting_direction': '-z', 'active_tool_id': 't02'},
    # Mazatrol machines are mostly rear post
    'mazatrol': {'tool_post': 'rear', 'cutting_direction': '-z', 'active_tool_id': 't02'},
}

DEFAULT_PRESET = 'standard_rear'


def default_tools() -> List[Tool]:
    """Fresh copies of the default tool library."""
    return [Tool.from_dict(data) for data in DEFAULT_TOOLS]


def find_tool(tools: Sequence[Tool], tool_id: Optional[str]) -> Optional[Tool]:
    """Look up a tool by id."""
    if tool_id is None:
        return None
    for tool in tools:
        if tool.id == tool_id:
            return tool
    return None


def machine_preset(name: str, compensation_enabled: bool = False) -> MachineSettings:
    """
    Build machine settings from a named preset.

    Raises:
        KeyError: If the preset name is unknown
    """
    return MachineSettings(compensation_enabled=compensation_enabled, **MACHINE_PRESETS[name])


def list_presets() -> Dict[str, Dict]:
    return {name: dict(values) for name, values in MACHINE_PRESETS.items()}
