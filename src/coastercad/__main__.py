#!/usr/bin/env python3
"""
Command line front end for coastercad.

Usage:
    python -m coastercad generate [options] [-o FILE]
    python -m coastercad shapes
    python -m coastercad templates

Examples:
    # Plain 100 mm disc
    python -m coastercad generate -o coaster.stl

    # Hexagon with a raised rim and grip dots, ASCII STL
    python -m coastercad generate --shape hexagon --edge raised_rim --nonslip --ascii

    # Photo relief, also written as 3MF
    python -m coastercad generate --image photo.png --relief 2 --3mf coaster.3mf

    # Start from a built-in preset
    python -m coastercad generate --template "Functional Grip" -o grip.stl
"""

import argparse
import logging
import sys
from pathlib import Path

from coastercad import __version__
from coastercad.designer import CoasterDesigner
from coastercad.io.threemf import ThreeMfOptions
from coastercad.logging_config import setup_logging
from coastercad.settings import EdgeStyle, ShapeKind, TextElement, parse_enum
from coastercad.templates import builtin_template, builtin_templates

logger = logging.getLogger("coastercad.cli")


def _apply_overrides(designer: CoasterDesigner, args) -> None:
    spec = designer.spec
    if args.shape is not None:
        spec.shape = parse_enum(ShapeKind, args.shape)
    if args.edge is not None:
        spec.edge_style = parse_enum(EdgeStyle, args.edge)
    for attr, value in (('diameter', args.diameter),
                        ('base_thickness', args.thickness),
                        ('total_height', args.height),
                        ('relief_depth', args.relief),
                        ('corner_radius', args.corners),
                        ('polygon_sides', args.sides)):
        if value is not None:
            setattr(spec, attr, value)
    if args.invert:
        spec.invert_relief = True
    if args.nonslip:
        spec.add_non_slip_bottom = True
    spec.validate()


def cmd_generate(args) -> int:
    """Generate one coaster and write STL (and optionally 3MF)."""
    designer = CoasterDesigner()

    if args.template:
        template = builtin_template(args.template)
        if template is not None:
            designer.apply_template(template)
        elif Path(args.template).exists():
            designer.load_template(args.template)
        else:
            print(f"Error: Unknown template: {args.template}", file=sys.stderr)
            return 1

    _apply_overrides(designer, args)
    spec = designer.spec

    print(f"Generating {spec.shape.name.lower()} coaster...")
    print(f"  Diameter: {spec.diameter}mm")
    print(f"  Thickness: {spec.base_thickness}mm")
    print(f"  Total Height: {spec.total_height}mm")
    print(f"  Edge Style: {spec.edge_style.name.lower()}")

    if args.image:
        print(f"  Loading image: {args.image}")
        designer.load_image(args.image, resolution=args.resolution)
        print(f"  Relief Depth: {spec.relief_depth}mm")

    for text in args.text or []:
        designer.add_text(TextElement(text=text))

    result = designer.generate_and_export(args.output, binary=not args.ascii)
    print(result.summary())
    if not result.is_valid:
        print("Error: mesh failed validation, nothing written", file=sys.stderr)
        return 1

    print(f"Wrote {args.output}")
    print(f"Estimated filament: {designer.estimate_filament_usage():.1f} g")

    if args.threemf:
        designer.export_3mf(args.threemf, ThreeMfOptions(model_name=Path(args.output).stem))
        print(f"Wrote {args.threemf}")
    return 0


def cmd_shapes(args) -> int:
    """List shapes and edge styles."""
    print("Shapes:")
    for shape in ShapeKind:
        print(f"  {shape.value}")
    print("Edge styles:")
    for style in EdgeStyle:
        print(f"  {style.value}")
    return 0


def cmd_templates(args) -> int:
    """List built-in templates."""
    for template in builtin_templates():
        tags = ", ".join(template.tags)
        print(f"  {template.name:<20} {template.description} [{tags}]")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coastercad",
        description="Parametric 3D printable coaster generator",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Also write the log to this file")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    gen = subparsers.add_parser("generate", help="Generate a coaster")
    gen.add_argument("-o", "--output", default="coaster.stl", help="Output STL path")
    gen.add_argument("-s", "--shape", help="Shape (see 'shapes')")
    gen.add_argument("-d", "--diameter", type=float, help="Diameter in mm (70-150)")
    gen.add_argument("-t", "--thickness", type=float, help="Base thickness in mm (2-8)")
    gen.add_argument("--height", type=float, help="Total height in mm (3-15)")
    gen.add_argument("-e", "--edge", help="Edge style (see 'shapes')")
    gen.add_argument("-i", "--image", help="Image for the relief surface")
    gen.add_argument("--resolution", type=int, default=128, help="Relief grid resolution")
    gen.add_argument("-r", "--relief", type=float, help="Relief depth in mm (0.5-5)")
    gen.add_argument("--invert", action="store_true", help="Invert the relief")
    gen.add_argument("--nonslip", action="store_true", help="Add non-slip stubs underneath")
    gen.add_argument("--corners", type=float, help="Corner radius for rounded squares")
    gen.add_argument("--sides", type=int, help="Side count for custom polygons (3-12)")
    gen.add_argument("--text", action="append", help="Emboss a line of text (repeatable)")
    gen.add_argument("--ascii", action="store_true", help="Write ASCII STL")
    gen.add_argument("--3mf", dest="threemf", help="Also write a 3MF package")
    gen.add_argument("--template", help="Built-in template name or template file")
    gen.set_defaults(func=cmd_generate)

    shapes = subparsers.add_parser("shapes", help="List shapes and edge styles")
    shapes.set_defaults(func=cmd_shapes)

    templates = subparsers.add_parser("templates", help="List built-in templates")
    templates.set_defaults(func=cmd_templates)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    try:
        return args.func(args)
    except (OSError, ValueError) as exc:
        logger.debug("command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
