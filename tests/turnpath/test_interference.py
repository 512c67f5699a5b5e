"""Tests for lead/back angle interference warnings."""
import pytest

from turnpath.models import MachineSettings, SegmentResult, Tool
from turnpath.utils.interference import check_interference, feed_angle


def _line(index, x1, z1, x2, z2, kind='line'):
    return SegmentResult(index=index, kind=kind, start_x=x1, start_z=z1, end_x=x2, end_z=z2)


@pytest.fixture
def roughing_tool():
    return Tool(id='t01', nose_radius=0.8, hand='right', lead_angle=95, back_angle=5)


class TestFeedAngle:
    """Tests for feed_angle()."""

    @pytest.mark.parametrize("segment,expected", [
        (_line(1, 40.0, 0.0, 40.0, -10.0), 0.0),
        (_line(1, 40.0, 0.0, 60.0, 0.0), 90.0),
        (_line(1, 60.0, 0.0, 40.0, 0.0), -90.0),
        (_line(1, 40.0, 0.0, 60.0, -10.0), 45.0),
        (_line(1, 40.0, -10.0, 40.0, 0.0), 180.0),
    ])
    def test_external_minus_z(self, segment, expected, roughing_tool):
        """Angles are measured from the feed direction, positive away from the axis."""
        assert feed_angle(segment, roughing_tool, MachineSettings()) == expected

    def test_plus_z_feed(self, roughing_tool):
        """Cutting toward +Z measures from the +Z direction."""
        machine = MachineSettings(cutting_direction='+z')
        assert feed_angle(_line(1, 40.0, -10.0, 40.0, 0.0), roughing_tool, machine) == 0.0

    def test_internal_tool_rises_toward_axis(self):
        """For a boring tool, moving toward the axis climbs away from the material."""
        tool = Tool(id='b', machining_type='internal', nose_radius=0.4)
        assert feed_angle(_line(1, 30.0, 0.0, 20.0, 0.0), tool, MachineSettings()) == 90.0


class TestCheckInterference:
    """Tests for check_interference()."""

    def test_climb_past_lead_angle(self, roughing_tool):
        """A face climbing back toward +Z exceeds a 95 degree lead angle."""
        warnings = check_interference([_line(1, 40.0, 0.0, 60.0, 2.0)], roughing_tool, MachineSettings())
        assert warnings == ['Warning 1: angle 101.31° exceeds the lead angle of t01 (95°)']

    def test_descent_past_back_angle(self, roughing_tool):
        """A 45 degree descent drags the trailing edge of a 5 degree back angle."""
        warnings = check_interference([_line(3, 60.0, 0.0, 40.0, -10.0)], roughing_tool, MachineSettings())
        assert warnings == ['Warning 3: angle -45.0° is below the back angle of t01 (-5°)']

    def test_plain_turning_is_clean(self, roughing_tool):
        """Straight turning and a square face raise nothing."""
        segments = [_line(1, 40.0, 0.0, 40.0, -10.0), _line(2, 40.0, -10.0, 60.0, -10.0)]
        assert check_interference(segments, roughing_tool, MachineSettings()) == []

    def test_arcs_are_skipped(self, roughing_tool):
        """Arcs are never checked."""
        arc = _line(1, 60.0, 0.0, 40.0, -10.0, kind='arc')
        assert check_interference([arc], roughing_tool, MachineSettings()) == []

    def test_zero_length_segment_skipped(self, roughing_tool):
        """A segment with no length has no angle."""
        assert check_interference([_line(1, 40.0, 0.0, 40.0, 0.0)], roughing_tool, MachineSettings()) == []

    def test_no_tool(self):
        """Without an active tool there is nothing to check."""
        assert check_interference([_line(1, 60.0, 0.0, 40.0, -10.0)], None, MachineSettings()) == []

    def test_tool_feeding_away_from_its_edge(self, roughing_tool):
        """A right-hand tool cutting toward +Z is not checked."""
        machine = MachineSettings(cutting_direction='+z')
        assert check_interference([_line(1, 60.0, 0.0, 40.0, 10.0)], roughing_tool, machine) == []

    def test_left_hand_tool_toward_plus_z(self):
        """Left-hand tools are checked when feeding toward +Z."""
        tool = Tool(id='l1', hand='left', lead_angle=95, back_angle=5)
        machine = MachineSettings(cutting_direction='+z')
        warnings = check_interference([_line(1, 60.0, 0.0, 40.0, 10.0)], tool, machine)
        assert len(warnings) == 1
        assert 'back angle' in warnings[0]

    def test_neutral_tool_not_checked(self):
        """Neutral grooving tools never warn."""
        tool = Tool(id='g', hand='neutral', lead_angle=10, back_angle=1)
        assert check_interference([_line(1, 40.0, 0.0, 60.0, 0.0)], tool, MachineSettings()) == []

    def test_missing_angles_not_checked(self):
        """Tools without lead or back angles never warn."""
        tool = Tool(id='t', hand='right')
        assert check_interference([_line(1, 40.0, 0.0, 60.0, 2.0)], tool, MachineSettings()) == []
