"""
Tube Joint Studio - Main Entry Point
Builds a tube chain from the command line and writes the JSON export
"""

import argparse
import sys

from PyQt5.QtCore import QCoreApplication

from export_assembly import write_export
from logging_config import setup_logging
from tube_assembly import TubeAssembly
from tube_segment import PROFILES, TubeDimensionError, TubeParameters
from user_settings import get_settings


def build_parser(settings):
    parser = argparse.ArgumentParser(
        prog="tubejoint",
        description="Join tubes end-to-end at the given angles and export the chain."
    )
    parser.add_argument("angles", nargs="*", type=float,
                        help="joint angle (degrees) for each tube after the first")
    parser.add_argument("--profile", choices=PROFILES, default=settings.get('default_profile'))
    parser.add_argument("--width", type=float, default=settings.get('default_width'))
    parser.add_argument("--height", type=float, default=settings.get('default_height'))
    parser.add_argument("--thickness", type=float, default=settings.get('default_thickness'))
    parser.add_argument("--length", type=float, default=settings.get('default_length'))
    parser.add_argument("--no-snap", action="store_true", help="use angles as given")
    parser.add_argument("--output-dir", default=settings.export_directory)
    parser.add_argument("--log-level", default=settings.get('log_level'))
    return parser


def main(argv=None):
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)
    setup_logging(args.log_level)

    app = QCoreApplication.instance() or QCoreApplication(["tubejoint"])
    app.setApplicationName("Tube Joint Studio")

    assembly = TubeAssembly.from_settings(settings)
    params = TubeParameters.from_settings(settings)
    params.profile = args.profile
    params.width = args.width
    params.height = args.height
    params.thickness = args.thickness
    params.length = args.length
    params.snap = settings.snap_to_angle and not args.no_snap

    try:
        # First tube sits at the origin; each angle adds one more
        assembly.add_segment(params)
        for angle in args.angles:
            params.angle = angle
            assembly.add_segment(params)
    except TubeDimensionError as e:
        print(f"Invalid tube: {e}", file=sys.stderr)
        return 2

    try:
        path = write_export(assembly, args.output_dir)
    except OSError as e:
        print(f"Could not write export: {e}", file=sys.stderr)
        return 1

    print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
