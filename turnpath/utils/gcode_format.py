"""Coordinate rounding and program-style listing of calculated segments."""
from typing import List, Optional

# Output resolution for every computed coordinate
DECIMALS = 3


def round_coordinate(value: float) -> float:
    """Round a computed value to the output resolution.

    Negative zero is folded to 0.0 so listings never print "-0.000".
    """
    rounded = round(value, DECIMALS)
    return rounded + 0.0


def format_coordinate(value: float, precision: int = DECIMALS) -> str:
    """
    Format a coordinate value with appropriate decimal places.

    Args:
        value: The coordinate value
        precision: Number of decimal places (default 3)

    Returns:
        Formatted string representation
    """
    return f"{value + 0.0:.{precision}f}"


def generate_linear_move(x: float, z: float) -> str:
    """Generate a G01 feed move."""
    return f"G01 X{format_coordinate(x)} Z{format_coordinate(z)}"


def generate_arc_move(
    g_code: str,
    x: float,
    z: float,
    i: Optional[float] = None,
    k: Optional[float] = None,
    radius: Optional[float] = None
) -> str:
    """
    Generate a G02/G03 arc move.

    Uses R-word format when a radius is given, I/K otherwise.

    Args:
        g_code: "G02" or "G03"
        x: End X (diameter)
        z: End Z
        i: Radius-valued X offset from start to center
        k: Z offset from start to center
        radius: Arc radius for R-word output

    Returns:
        G-code line
    """
    line = f"{g_code} X{format_coordinate(x)} Z{format_coordinate(z)}"
    if radius is not None:
        return f"{line} R{format_coordinate(radius)}"
    return f"{line} I{format_coordinate(i or 0.0)} K{format_coordinate(k or 0.0)}"


def format_results(result, use_compensated: bool = False, use_radius: bool = True) -> List[str]:
    """
    Render a calculation result as one program line per segment.

    Args:
        result: CalculationResult from calculate_profile
        use_compensated: Emit compensated program coordinates where present
        use_radius: R-word arcs instead of I/K

    Returns:
        Listing lines, starting with the rapid to the first point
    """
    if not result.segments:
        return []

    first = result.segments[0]
    start_x, start_z = first.start_x, first.start_z
    if use_compensated and first.compensated is not None:
        start_x, start_z = first.compensated.start_x, first.compensated.start_z

    lines = [f"G00 X{format_coordinate(start_x)} Z{format_coordinate(start_z)}"]
    for segment in result.segments:
        comp = segment.compensated if use_compensated else None
        end_x = comp.end_x if comp is not None else segment.end_x
        end_z = comp.end_z if comp is not None else segment.end_z

        if segment.is_arc:
            if comp is not None:
                lines.append(generate_arc_move(
                    segment.g_code, end_x, end_z,
                    i=comp.i, k=comp.k,
                    radius=comp.radius if use_radius else None,
                ))
            else:
                lines.append(generate_arc_move(
                    segment.g_code, end_x, end_z,
                    i=segment.i, k=segment.k,
                    radius=segment.radius if use_radius else None,
                ))
        else:
            lines.append(generate_linear_move(end_x, end_z))

    return lines
