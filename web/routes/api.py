"""API routes - JSON endpoints for profile calculation."""
from flask import Blueprint, current_app, request

from turnpath.file_parser import ParseError
from web.services.profile_service import ProfileService
from web.services.settings_service import SettingsService
from web.utils.responses import success_response, error_response, validation_response

api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health():
    """Liveness check."""
    return success_response(message='ok')


@api_bp.route('/profile/calculate', methods=['POST'])
def calculate_profile():
    """Calculate segments and compensated coordinates for a profile."""
    data = request.get_json(silent=True)
    if not data:
        return error_response('No data provided')

    try:
        result = ProfileService.calculate(data, use_radius=ProfileService.get_arc_output(data))
        return success_response(data=result)
    except (ParseError, ValueError) as e:
        return error_response(str(e))
    except Exception as e:
        current_app.logger.exception("Profile calculation failed")
        return error_response(str(e), 500)


@api_bp.route('/profile/validate', methods=['POST'])
def validate_profile():
    """Validate a profile document without calculating it."""
    data = request.get_json(silent=True)
    if not data:
        return error_response('No data provided')

    errors = ProfileService.validate(data)
    return validation_response(errors)


@api_bp.route('/tools')
def list_tools():
    """Get the default tool library."""
    return success_response(data=SettingsService.get_tools_list())


@api_bp.route('/tools/<tool_id>')
def get_tool(tool_id):
    """Get one default tool."""
    tool = SettingsService.get_tool(tool_id)
    if not tool:
        return error_response('Tool not found', 404)
    return success_response(data=tool.to_dict())


@api_bp.route('/machine/presets')
def list_machine_presets():
    """Get the machine presets."""
    return success_response(data=SettingsService.get_presets_dict())
