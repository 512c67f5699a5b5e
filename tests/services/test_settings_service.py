"""Tests for SettingsService."""
from turnpath.models import MachineSettings
from web.services.settings_service import SettingsService


class TestToolMethods:
    """Tests for tool-related methods."""

    def test_get_all_tools(self):
        """Test getting the default tool library."""
        tools = SettingsService.get_all_tools()
        assert len(tools) == 5
        assert tools[0].id == 't01'

    def test_get_tool(self):
        """Test getting a single tool by ID."""
        tool = SettingsService.get_tool('t03')
        assert tool is not None
        assert tool.insert_shape == 'V'
        assert tool.back_angle == 52

    def test_get_tool_not_found(self):
        """Test getting a non-existent tool."""
        assert SettingsService.get_tool('nonexistent') is None

    def test_get_tools_list(self):
        """Test getting tools as dicts for JSON."""
        tools = SettingsService.get_tools_list()
        assert tools[1]['id'] == 't02'
        assert tools[1]['nose_radius'] == 0.4
        assert tools[1]['tip_number'] == 3


class TestMachineMethods:
    """Tests for machine preset methods."""

    def test_get_presets_dict(self):
        """Test getting presets keyed by name."""
        presets = SettingsService.get_presets_dict()
        assert presets['mazatrol']['tool_post'] == 'rear'

    def test_get_machine_settings(self):
        """Test building machine settings from a preset."""
        machine = SettingsService.get_machine_settings('standard_front', compensation_enabled=True)
        assert machine == MachineSettings('front', '-z', 't02', True)

    def test_get_machine_settings_unknown(self):
        """Test an unknown preset returns None."""
        assert SettingsService.get_machine_settings('okuma') is None
