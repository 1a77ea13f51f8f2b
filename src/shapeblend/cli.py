"""
Command-line interface for shapeblend.

Provides commands for blending two features, exporting a single outline,
listing dataset names and writing a default config.
"""

import argparse
import sys

from shapeblend.config import load_config, save_default_config
from shapeblend.tracer import configure_tracer, get_tracer


def _add_trace_args(parser):
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="shapeblend",
        description="shapeblend: blend two region outlines into one hybrid silhouette",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Hybrid command
    hybrid_parser = subparsers.add_parser("hybrid", help="Blend two named features")
    hybrid_parser.add_argument(
        "--geojson", "-g",
        required=True,
        help="GeoJSON FeatureCollection with the features",
    )
    hybrid_parser.add_argument(
        "--a",
        dest="name_a",
        required=True,
        help="First feature name (the reference frame)",
    )
    hybrid_parser.add_argument(
        "--b",
        dest="name_b",
        required=True,
        help="Second feature name (rotated onto the first)",
    )
    hybrid_parser.add_argument(
        "--out", "-o",
        default=None,
        help="SVG file to write",
    )
    hybrid_parser.add_argument(
        "--json-out",
        default=None,
        help="Write the hybrid result as JSON",
    )
    hybrid_parser.add_argument(
        "--report-dir",
        default=None,
        help="Directory for the validation report files",
    )
    hybrid_parser.add_argument(
        "--print-path",
        action="store_true",
        help="Print the SVG path data to stdout",
    )
    hybrid_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    _add_trace_args(hybrid_parser)

    # Outline command
    outline_parser = subparsers.add_parser("outline", help="Export one feature's projected outline")
    outline_parser.add_argument("--geojson", "-g", required=True, help="GeoJSON FeatureCollection")
    outline_parser.add_argument("--name", "-n", required=True, help="Feature name")
    outline_parser.add_argument("--out", "-o", required=True, help="SVG file to write")
    outline_parser.add_argument("--config", "-c", default=None, help="Path to YAML configuration file")
    _add_trace_args(outline_parser)

    # List command
    list_parser = subparsers.add_parser("list", help="List feature names in a dataset")
    list_parser.add_argument("--geojson", "-g", required=True, help="GeoJSON FeatureCollection")

    # Init config command
    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="shapeblend_config.yaml",
        help="Output path for config file",
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "hybrid":
        return handle_hybrid(args)
    elif args.command == "outline":
        return handle_outline(args)
    elif args.command == "list":
        return handle_list(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def _configure_tracing(args, tracing):
    """Command-line flags win over the tracing section of the config file."""
    configure_tracer(
        enabled=args.trace or tracing.enabled,
        level=args.trace_level if args.trace else tracing.level,
        file_path=args.trace_file or tracing.file_path,
        json_output=args.trace_json or tracing.json_output,
    )


def handle_hybrid(args):
    """Handle the hybrid command."""
    config = load_config(args.config)
    _configure_tracing(args, config.tracing)
    tracer = get_tracer()

    try:
        from shapeblend.io.save_artifacts import save_json
        from shapeblend.models import HybridStatus
        from shapeblend.pipeline import run_hybrid
        from shapeblend.validate.report import generate_report

        with tracer.span("cli_hybrid", module="cli"):
            result = run_hybrid(
                geojson_path=args.geojson,
                name_a=args.name_a,
                name_b=args.name_b,
                out_path=args.out,
                config=config,
            )

        if args.json_out:
            save_json(result, args.json_out)

        if args.report_dir and result.status == HybridStatus.OK:
            generate_report(result, args.report_dir)

        if result.status != HybridStatus.OK:
            print(f"\n[!] {result.message}", file=sys.stderr)
            return 1

        if args.print_path:
            print(result.svg_path)
            return 0

        print(f"\nHybrid completed: {' + '.join(result.names)}")
        print(f"  Points: {len(result.points)}")
        print(f"  Rotation applied: {result.rotation:.4f} rad")
        print(f"  Validation errors: {result.validation.error_count}")
        print(f"  Validation warnings: {result.validation.warning_count}")
        if args.out:
            print(f"\nSVG saved to: {args.out}")

        return 1 if result.validation.has_errors else 0

    except Exception as e:
        tracer.event(f"Hybrid failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1


def handle_outline(args):
    """Handle the outline command."""
    config = load_config(args.config)
    _configure_tracing(args, config.tracing)
    tracer = get_tracer()

    try:
        from shapeblend.export.svg_export import create_outline_svg, export_svg
        from shapeblend.geo.catalog import load_catalog
        from shapeblend.geo.projection import make_projection

        with tracer.span("cli_outline", module="cli"):
            catalog = load_catalog(args.geojson)
            feature = catalog.get(args.name)
            project = make_projection(config.projection)
            export_svg(create_outline_svg(feature, project, config), args.out)

        print(f"Outline saved to: {args.out}")
        return 0

    except LookupError as e:
        print(f"\n[!] {str(e)}", file=sys.stderr)
        return 1
    except Exception as e:
        tracer.event(f"Outline failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1


def handle_list(args):
    """Handle the list command."""
    try:
        from shapeblend.geo.catalog import load_catalog

        catalog = load_catalog(args.geojson)
    except Exception as e:
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1

    for name in catalog.names():
        print(name)
    return 0


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
