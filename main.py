#!/usr/bin/env python3

import argparse
import json
import logging
import sys

from turnpath.file_parser import parse_input_file, ParseError
from turnpath.presets import DEFAULT_PRESET
from turnpath.profile_builder import calculate_profile
from turnpath.utils.gcode_format import format_results
from turnpath.utils.validators import validate_profile


def build_parser():
    parser = argparse.ArgumentParser(
        description='Calculate a lathe profile with corners, grooves and nose radius compensation'
    )
    parser.add_argument('input', help='JSON profile document')
    parser.add_argument('--preset', default=DEFAULT_PRESET,
                        help='Machine preset when the document names none (default: %(default)s)')
    parser.add_argument('--compensate', action='store_true',
                        help='Enable nose radius compensation regardless of the document')
    parser.add_argument('--tool', help='Active tool id, overriding the document')
    parser.add_argument('--ik', action='store_true', help='Print arcs with I/K instead of R')
    parser.add_argument('--json', action='store_true', help='Print the full result as JSON')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug logging')
    return parser


def main(argv=None):
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    try:
        document = parse_input_file(args.input, args.preset)
    except ParseError as e:
        print("❌ ERROR: Problem with input file format:")
        print(str(e))
        sys.exit(1)

    machine = document.machine
    if args.compensate:
        machine.compensation_enabled = True
    if args.tool:
        machine.active_tool_id = args.tool

    errors = validate_profile(document.points, machine, document.tools)
    if errors:
        print("❌ Profile is not valid:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    result = calculate_profile(document.points, machine, document.tools)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    print(f"=== Profile: {len(document.points)} points, {len(result.segments)} segments ===")
    print(f"Tool post: {machine.tool_post}  Cutting: {machine.cutting_direction}  Tool: {machine.active_tool_id}")
    for line in format_results(result, use_radius=not args.ik):
        print(line)

    if result.is_compensated:
        print(f"\n--- Compensated (nose R {result.nose_radius}) ---")
        for line in format_results(result, use_compensated=True, use_radius=not args.ik):
            print(line)
    elif machine.compensation_enabled:
        print("\n⚠️  Compensation was requested but the active tool is missing or invalid")

    for warning in result.warnings:
        print(f"⚠️  {warning}")


if __name__ == "__main__":
    main()
