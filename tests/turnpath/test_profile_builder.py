"""Tests for the profile builder and calculate_profile()."""
import logging
import pytest

from turnpath.file_parser import parse_profile_document
from turnpath.models import CornerTreatment, GrooveInsert, MachineSettings, Point
from turnpath.profile_builder import (
    build_segments,
    calculate_profile,
    check_chain_continuity,
    iter_profile_steps,
)


def _kinds(segments):
    return [s.kind for s in segments]


class TestBuildSegments:
    """Tests for build_segments()."""

    def test_plain_polyline(self, taper_points):
        """Points without treatments become straight lines."""
        segments = build_segments(taper_points, MachineSettings())

        assert _kinds(segments) == ['line', 'line']
        assert [s.angle for s in segments] == [0.0, 45.0]
        assert all(s.g_code == 'G01' for s in segments)

    def test_indices_are_sequential(self, groove_points):
        """Segments are numbered from 1 in chain order."""
        segments = build_segments(groove_points, MachineSettings())
        assert [s.index for s in segments] == list(range(1, len(segments) + 1))

    def test_s_curve_step(self, step_points):
        """Convex R2 then concave R2 on a short step gives two tangent arcs."""
        segments = build_segments(step_points, MachineSettings())

        assert _kinds(segments) == ['line', 'arc', 'arc', 'line']
        first, second = segments[1], segments[2]
        assert abs(first.end_x - second.start_x) < 1e-6
        assert abs(first.end_z - second.start_z) < 1e-6
        assert first.is_convex is True
        assert second.is_convex is False
        assert (first.g_code, second.g_code) == ('G03', 'G02')
        assert (segments[3].start_x, segments[3].start_z) == (98.0, -11.323)

    def test_front_post_swaps_arc_codes(self, step_points):
        """The same step on a front post lathe reverses both arc codes."""
        segments = build_segments(step_points, MachineSettings(tool_post='front'))
        assert (segments[1].g_code, segments[2].g_code) == ('G02', 'G03')

    def test_groove_mid_chain(self, groove_points):
        """A groove expands to three lines and the chain continues one width along."""
        segments = build_segments(groove_points, MachineSettings())

        assert _kinds(segments) == ['line'] * 5
        assert [(s.end_x, s.end_z) for s in segments[1:4]] == [(46.0, -10.0), (46.0, -13.0), (50.0, -13.0)]
        assert (segments[4].start_x, segments[4].start_z) == (50.0, -13.0)
        assert (segments[4].end_x, segments[4].end_z) == (50.0, -30.0)

    def test_groove_on_first_point(self):
        """A groove on the start point is cut before the first move."""
        points = [
            Point(x=50.0, z=0.0, groove=GrooveInsert(width=3.0, depth=2.0)),
            Point(x=50.0, z=-20.0),
        ]
        segments = build_segments(points, MachineSettings())

        assert len(segments) == 4
        assert (segments[0].start_x, segments[0].start_z) == (50.0, 0.0)
        assert (segments[3].start_x, segments[3].start_z) == (50.0, -3.0)

    def test_unresolvable_corner_runs_to_vertex(self):
        """A radius on a straight vertex falls back to a line to the raw point."""
        points = [
            Point(x=100.0, z=10.0),
            Point(x=100.0, z=0.0, corner=CornerTreatment('convex-radius', 2.0)),
            Point(x=100.0, z=-10.0),
        ]
        segments = build_segments(points, MachineSettings())

        assert _kinds(segments) == ['line', 'line']
        assert (segments[0].end_x, segments[0].end_z) == (100.0, 0.0)

    def test_corners_on_end_points_are_ignored(self):
        """The last point has no following neighbour and stays sharp."""
        points = [
            Point(x=40.0, z=0.0),
            Point(x=40.0, z=-10.0, corner=CornerTreatment('chamfer', 1.0)),
        ]
        segments = build_segments(points, MachineSettings())
        assert _kinds(segments) == ['line']
        assert (segments[0].end_x, segments[0].end_z) == (40.0, -10.0)

    def test_chamfer_segment(self):
        """A chamfer is emitted as its own straight segment."""
        points = [
            Point(x=40.0, z=2.0),
            Point(x=40.0, z=0.0, corner=CornerTreatment('kaku-c', 1.0)),
            Point(x=60.0, z=0.0),
        ]
        segments = build_segments(points, MachineSettings())

        assert _kinds(segments) == ['line', 'chamfer', 'line']
        assert segments[1].angle == 45.0
        assert segments[1].dist_to_vertex == 1.0

    def test_zero_size_corner_is_sharp(self):
        """A treatment with no size leaves the vertex sharp."""
        points = [
            Point(x=40.0, z=2.0),
            Point(x=40.0, z=0.0, corner=CornerTreatment('chamfer', 0.0)),
            Point(x=60.0, z=0.0),
        ]
        segments = build_segments(points, MachineSettings())

        assert _kinds(segments) == ['line', 'line']
        assert (segments[0].end_x, segments[0].end_z) == (40.0, 0.0)

    def test_dual_arc(self):
        """A vertex with a chained second radius emits two arcs."""
        corner = CornerTreatment('concave-radius', 2.0, second_arc=CornerTreatment('concave-radius', 2.0))
        points = [Point(x=40.0, z=10.0), Point(x=40.0, z=0.0, corner=corner), Point(x=60.0, z=0.0)]
        segments = build_segments(points, MachineSettings())

        assert _kinds(segments) == ['line', 'arc', 'arc', 'line']
        assert check_chain_continuity(segments) == []

    def test_dual_arc_falls_back_to_single_radius(self):
        """A dual arc that does not fit becomes one shrunk radius."""
        corner = CornerTreatment('concave-radius', 30.0, second_arc=CornerTreatment('concave-radius', 30.0))
        points = [Point(x=40.0, z=10.0), Point(x=40.0, z=0.0, corner=corner), Point(x=60.0, z=0.0)]
        segments = build_segments(points, MachineSettings())

        assert _kinds(segments) == ['line', 'arc', 'line']
        assert segments[1].radius == pytest.approx(9.9)
        assert segments[1].original_radius == 30.0

    def test_fewer_than_two_points(self):
        """One point is not a profile."""
        assert build_segments([Point(x=10.0, z=0.0)], MachineSettings()) == []


class TestIterProfileSteps:
    """Tests for iter_profile_steps()."""

    def test_cursor_after_groove(self, groove_points):
        """The step that cuts the groove leaves the cursor at its exit."""
        steps = list(iter_profile_steps(groove_points, MachineSettings()))

        assert [step.index for step in steps] == [1, 2]
        assert steps[0].cursor == (50.0, -13.0)
        assert len(steps[0].segments) == 4

    def test_each_step_starts_at_previous_cursor(self, step_points):
        """Every step begins where the last one stopped."""
        cursor = (step_points[0].x, step_points[0].z)
        for step in iter_profile_steps(step_points, MachineSettings()):
            assert (step.segments[0].start_x, step.segments[0].start_z) == cursor
            cursor = step.cursor

    def test_s_curve_consumes_two_vertices(self, step_points):
        """The S-curve advance jumps over both corner vertices."""
        steps = list(iter_profile_steps(step_points, MachineSettings()))
        assert [step.index for step in steps] == [2, 3]

    def test_groove_on_first_s_curve_vertex(self, step_points):
        """A groove on the first of two corner vertices is still cut."""
        step_points[1].groove = GrooveInsert(width=3.0, depth=1.0)
        steps = list(iter_profile_steps(step_points, MachineSettings()))

        assert steps[0].index == 1
        assert [s.kind for s in steps[0].segments] == ['line', 'arc', 'line', 'line', 'line']
        assert steps[0].cursor[1] == -13.0
        assert check_chain_continuity(build_segments(step_points, MachineSettings())) == []


class TestCheckChainContinuity:
    """Tests for check_chain_continuity()."""

    def test_reports_breaks(self, taper_points):
        """A moved start point is reported by segment index."""
        segments = build_segments(taper_points, MachineSettings())
        segments[1].start_z = 0.5
        assert check_chain_continuity(segments) == [2]

    def test_missing_compensation_is_a_break(self, taper_points):
        """Compensated checks need compensated coordinates."""
        segments = build_segments(taper_points, MachineSettings())
        assert check_chain_continuity(segments, compensated=True) == [2]


class TestCalculateProfile:
    """Tests for calculate_profile()."""

    def test_full_document(self, profile_document):
        """Chamfer, shoulder radius and groove with the finishing tool."""
        document = parse_profile_document(profile_document)
        result = calculate_profile(document.points, document.machine, document.tools)

        assert _kinds(result.segments) == [
            'line', 'chamfer', 'line', 'arc', 'line', 'line', 'line', 'line', 'line'
        ]
        assert result.tool_id == 't02'
        assert result.nose_radius == 0.4
        assert result.is_compensated
        assert all(s.compensated is not None for s in result.segments)
        assert check_chain_continuity(result.segments, compensated=True) == []

        arc = result.segments[3]
        assert (arc.start_x, arc.start_z, arc.end_x, arc.end_z) == (56.0, 0.0, 60.0, -2.0)
        assert arc.g_code == 'G03'
        assert arc.compensated.radius == 2.4

    def test_groove_wall_warning(self, profile_document):
        """The groove entry wall descends past the back angle of t02."""
        document = parse_profile_document(profile_document)
        result = calculate_profile(document.points, document.machine, document.tools)

        assert len(result.warnings) == 1
        assert result.warnings[0].startswith('Warning 6:')
        assert 'back angle' in result.warnings[0]

    def test_without_interference_checker(self, profile_document):
        """Passing no checker disables warnings."""
        document = parse_profile_document(profile_document)
        result = calculate_profile(document.points, document.machine, document.tools,
                                   interference_checker=None)
        assert result.warnings == []

    def test_custom_interference_checker(self, taper_points):
        """Warnings from a supplied checker are passed through untouched."""
        def checker(segments, tool, machine):
            return [f"{len(segments)} segments checked"]

        result = calculate_profile(taper_points, MachineSettings(), interference_checker=checker)
        assert result.warnings == ['2 segments checked']

    def test_compensation_disabled(self, taper_points, external_tool):
        """Without the enable flag no compensated coordinates are written."""
        machine = MachineSettings(active_tool_id='ext08')
        result = calculate_profile(taper_points, machine, [external_tool])

        assert not result.is_compensated
        assert all(s.compensated is None for s in result.segments)

    def test_missing_tool_skips_compensation(self, taper_points, caplog):
        """An unknown active tool leaves the profile uncompensated."""
        machine = MachineSettings(active_tool_id='nope', compensation_enabled=True)
        with caplog.at_level(logging.WARNING, logger='turnpath.profile_builder'):
            result = calculate_profile(taper_points, machine, [])

        assert len(result.segments) == 2
        assert not result.is_compensated
        assert 'compensation skipped' in caplog.text

    def test_fewer_than_two_points(self, rear_machine, external_tool):
        """Malformed input returns an empty result instead of raising."""
        result = calculate_profile([Point(x=10.0, z=0.0)], rear_machine, [external_tool])
        assert result.segments == []
        assert result.warnings == []

    def test_precompensated_corners(self, external_tool, rear_machine):
        """Pre-compensation grows a convex radius by the nose radius."""
        points = [
            Point(x=42.0, z=0.0),
            Point(x=60.0, z=0.0, corner=CornerTreatment('convex-radius', 2.0)),
            Point(x=60.0, z=-30.0),
        ]
        result = calculate_profile(points, rear_machine, [external_tool], precompensate_corners=True)
        arc = result.segments[1]

        assert arc.radius == 2.8
        assert arc.original_radius == 2.0
        assert arc.compensated.radius == 3.6

    def test_manual_shift_on_tapers_only(self, taper_points, external_tool, rear_machine):
        """Taper segments carry manual shift amounts, straight turning does not."""
        result = calculate_profile(taper_points, rear_machine, [external_tool])

        assert result.segments[0].manual_shift is None
        assert set(result.segments[1].manual_shift) == {'smid_x', 'smid_z', 'half_angle_x', 'half_angle_z'}

    def test_result_to_dict(self, taper_points, external_tool, rear_machine):
        """The serialized result keeps compensation and drops empty fields."""
        data = calculate_profile(taper_points, rear_machine, [external_tool]).to_dict()

        assert data['tool_id'] == 'ext08'
        assert data['nose_radius'] == 0.8
        segment = data['segments'][1]
        assert segment['compensated']['start_z'] == -0.469
        assert 'radius' not in segment
