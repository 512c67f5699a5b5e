"""Tool library and machine preset lookups."""
from typing import Dict, List, Optional

from turnpath.models import MachineSettings, Tool
from turnpath.presets import default_tools, find_tool, list_presets, machine_preset


class SettingsService:
    """Service for tool and machine settings."""

    # --- Tool Methods ---

    @staticmethod
    def get_all_tools() -> List[Tool]:
        """Get the default tool library."""
        return default_tools()

    @staticmethod
    def get_tool(tool_id: str) -> Optional[Tool]:
        """Get a single default tool by ID."""
        return find_tool(default_tools(), tool_id)

    @staticmethod
    def get_tools_list() -> List[Dict]:
        """Get all tools as dicts for JSON serialization."""
        return [tool.to_dict() for tool in SettingsService.get_all_tools()]

    # --- Machine Methods ---

    @staticmethod
    def get_presets_dict() -> Dict[str, Dict]:
        """Get machine presets keyed by name."""
        return list_presets()

    @staticmethod
    def get_machine_settings(preset: str, compensation_enabled: bool = False) -> Optional[MachineSettings]:
        """Get machine settings for a preset, None if the name is unknown."""
        try:
            return machine_preset(preset, compensation_enabled)
        except KeyError:
            return None
