"""
geobraille command line interface

Usage:
    geobraille [options] INPUT

Examples:
    geobraille counties.geojson
    geobraille -a -c 80 -r 30 parcels.topojson
    cat stops.csv | geobraille -f csv --lat stop_lat --lon stop_lon -
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import TextIO

from geobraille import __version__
from geobraille.config import Settings, settings
from geobraille.engine.config import RenderConfig
from geobraille.engine.pipeline import Pipeline
from geobraille.errors import DecodeError, GeobrailleError
from geobraille.formats import DecodeOptions, decode, get_registry, infer_format, load_builtin_decoders

logger = logging.getLogger(__name__)

STDIN_PATH = "-"


def build_parser(config: Settings = settings) -> argparse.ArgumentParser:
    load_builtin_decoders()
    parser = argparse.ArgumentParser(
        prog="geobraille",
        description="Preview map files in the terminal as Braille text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("input", help=f"input file path, or '{STDIN_PATH}' to read stdin")
    parser.add_argument(
        "-f", "--format",
        choices=get_registry().names(),
        help="input format (default: inferred from the file extension)",
    )
    parser.add_argument(
        "-s", "--simplify",
        type=float,
        default=config.geobraille_simplify,
        help="simplification proportion; 0 disables (default: %(default)s)",
    )
    parser.add_argument(
        "-a", "--area",
        action="store_true",
        help="draw polygons as filled areas instead of outlines",
    )
    parser.add_argument("-c", "--columns", type=int, help="output width in characters (default: terminal width)")
    parser.add_argument("-r", "--rows", type=int, help="output height in lines (default: terminal height - 1)")
    parser.add_argument("--lat", default="lat", help="CSV latitude column (default: %(default)s)")
    parser.add_argument("--lon", default="lon", help="CSV longitude column (default: %(default)s)")
    parser.add_argument(
        "-p", "--precision",
        type=int,
        default=5,
        help="encoded polyline precision (default: %(default)s)",
    )
    parser.add_argument(
        "-j", "--workers",
        type=int,
        default=config.geobraille_workers,
        help="row sampling threads (default: %(default)s)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="hide progress messages")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def output_size(columns: int | None, rows: int | None) -> tuple[int, int]:
    """Requested size, filling gaps from the terminal. One line is left for the prompt."""
    term = shutil.get_terminal_size()
    width = columns if columns is not None else term.columns
    height = rows if rows is not None else max(term.lines - 1, 1)
    return width, height


def read_input(path: str, stdin: TextIO) -> str | bytes:
    """Raw input bytes; each format decides how to turn them into text."""
    if path == STDIN_PATH:
        # In-memory text streams have no binary buffer.
        return getattr(stdin, "buffer", stdin).read()
    return Path(path).read_bytes()


def resolve_format(path: str, explicit: str | None, config: Settings = settings) -> str:
    if explicit:
        return explicit
    if path == STDIN_PATH:
        return config.geobraille_default_format
    return infer_format(path)


def configure_logging(verbose: bool, quiet: bool = False, config: Settings = settings) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = getattr(logging, config.geobraille_log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    width, height = output_size(args.columns, args.rows)
    config = RenderConfig(
        width=width,
        height=height,
        is_area=args.area,
        simplify=args.simplify,
        workers=args.workers,
    )
    options = DecodeOptions(
        lat_column=args.lat,
        lon_column=args.lon,
        polyline_precision=args.precision,
    )

    try:
        format_name = resolve_format(args.input, args.format)
        logger.info("Reading file %s", args.input)
        data = read_input(args.input, stdin)
        logger.info("Decoding %s input", format_name)
        geometries = decode(data, format_name, options)
        result = Pipeline(config).run(geometries)
    except DecodeError as e:
        logger.error("Could not read %s: %s", args.input, e)
        return 1
    except GeobrailleError as e:
        logger.error("Could not render %s: %s", args.input, e)
        return 1
    except OSError as e:
        logger.error("Could not open %s: %s", args.input, e)
        return 1

    stdout.write(result.text + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
