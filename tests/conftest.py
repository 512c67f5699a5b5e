"""Test configuration and fixtures."""
import pytest

from app import create_app
from turnpath.models import CornerTreatment, GrooveInsert, MachineSettings, Point, Tool


class TestConfig:
    """Test configuration."""
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    LOG_LEVEL = 'DEBUG'
    CORS_ORIGINS = '*'
    DEFAULT_MACHINE_PRESET = 'standard_rear'
    MAX_PROFILE_POINTS = 50


@pytest.fixture
def app():
    """Create and configure a test application instance."""
    app = create_app(TestConfig)

    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create a test client."""
    return app.test_client()


@pytest.fixture
def external_tool():
    """External tool with a 0.8 nose radius, tip 3."""
    return Tool(id='ext08', name='Test external R0.8', machining_type='external',
                nose_radius=0.8, tip_number=3, hand='right')


@pytest.fixture
def rear_machine():
    """Rear tool post cutting toward -Z with compensation on."""
    return MachineSettings(tool_post='rear', cutting_direction='-z',
                           active_tool_id='ext08', compensation_enabled=True)


@pytest.fixture
def taper_points():
    """Shoulder into a 45 degree taper: (100,10) -> (100,0) -> (120,-10)."""
    return [
        Point(x=100.0, z=10.0),
        Point(x=100.0, z=0.0),
        Point(x=120.0, z=-10.0),
    ]


@pytest.fixture
def step_points():
    """Down-step with a convex R2 then a concave R2."""
    return [
        Point(x=100.0, z=0.0),
        Point(x=100.0, z=-10.0, corner=CornerTreatment('convex-radius', 2.0)),
        Point(x=98.0, z=-10.0, corner=CornerTreatment('concave-radius', 2.0)),
        Point(x=98.0, z=-20.0),
    ]


@pytest.fixture
def groove_points():
    """Straight diameter with a 3 wide, 2 deep groove at Z-10."""
    return [
        Point(x=50.0, z=0.0),
        Point(x=50.0, z=-10.0, groove=GrooveInsert(width=3.0, depth=2.0)),
        Point(x=50.0, z=-30.0),
    ]


@pytest.fixture
def profile_document():
    """JSON profile document with a shoulder radius, chamfer and groove."""
    return {
        'points': [
            {'x': 40, 'z': 2},
            {'x': 40, 'z': 0, 'corner': {'type': 'kaku-c', 'size': 1}},
            {'x': 60, 'z': 0, 'corner': {'type': 'kaku-r', 'size': 2}},
            {'x': 60, 'z': -30, 'groove': {'width': 3, 'depth': 2}},
            {'x': 60, 'z': -50},
        ],
        'machine': {'preset': 'standard_rear', 'compensation_enabled': True, 'active_tool_id': 't02'},
    }
