"""Profile calculation service."""
from typing import Dict, List, Optional

from flask import current_app

from turnpath.file_parser import ParseError, ProfileDocument, parse_profile_document
from turnpath.presets import DEFAULT_PRESET
from turnpath.profile_builder import calculate_profile, check_chain_continuity
from turnpath.utils.gcode_format import format_results
from turnpath.utils.validators import validate_profile


class ProfileService:
    """Service for profile calculation and validation."""

    @staticmethod
    def parse(data: Dict) -> ProfileDocument:
        """Parse a request body, using the configured default machine preset."""
        preset = current_app.config.get('DEFAULT_MACHINE_PRESET', DEFAULT_PRESET)
        return parse_profile_document(data, preset)

    @staticmethod
    def validate(data: Dict) -> List[str]:
        """
        Validate a profile document.

        Returns list of error messages (empty if valid).
        """
        try:
            document = ProfileService.parse(data)
        except ParseError as e:
            return [str(e)]

        max_points = current_app.config.get('MAX_PROFILE_POINTS')
        return validate_profile(document.points, document.machine, document.tools, max_points)

    @staticmethod
    def calculate(data: Dict, use_radius: bool = True) -> Dict:
        """
        Calculate a profile document.

        Returns dict with segments, warnings, the listing of program
        lines and, when compensation ran, the compensated listing.

        Raises:
            ParseError: If the document is malformed
            ValueError: If the document fails validation
        """
        document = ProfileService.parse(data)
        max_points = current_app.config.get('MAX_PROFILE_POINTS')
        errors = validate_profile(document.points, document.machine, document.tools, max_points)
        if errors:
            raise ValueError('; '.join(errors))

        result = calculate_profile(document.points, document.machine, document.tools)

        breaks = check_chain_continuity(result.segments)
        if breaks:
            current_app.logger.warning("Profile chain breaks before segments %s", breaks)

        response = result.to_dict()
        response['listing'] = format_results(result, use_radius=use_radius)
        response['compensated_listing'] = None
        if result.is_compensated:
            response['compensated_listing'] = format_results(result, use_compensated=True, use_radius=use_radius)

        current_app.logger.info(
            "Calculated %d segments (%d warnings)", len(result.segments), len(result.warnings)
        )
        return response

    @staticmethod
    def get_arc_output(data: Optional[Dict]) -> bool:
        """True for R-word arcs (default), False for I/K."""
        if not data:
            return True
        return str(data.get('arc_output', 'R')).upper() != 'IK'
