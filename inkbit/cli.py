"""Command-line interface for inkbit.

Human-readable status goes to stderr; ``--json`` prints structured output
for scripting.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from inkbit.core.processor import DEFAULT_WIDTH, Algorithm


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inkbit",
        description="Convert images to 1-bit rasters for thermal and dot-matrix printers.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- convert subcommand ---
    convert = subparsers.add_parser(
        "convert",
        help="Binarize an image file.",
    )
    convert.add_argument("input", help="Input image file path.")
    convert.add_argument(
        "-o", "--output",
        help="Output file path. Defaults to <input>_<algorithm>.png (.bin with --raw).",
    )
    convert.add_argument(
        "-a", "--algorithm",
        default=Algorithm.FLOYD_STEINBERG.value,
        help="Binarization algorithm, case-insensitive (default: floyd-steinberg).",
    )
    convert.add_argument(
        "-w", "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help=f"Printer width in dots (default: {DEFAULT_WIDTH}).",
    )
    convert.add_argument(
        "--raw",
        action="store_true",
        help="Write packed 1-bit raster rows instead of an image.",
    )
    convert.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON (pipe-friendly).",
    )
    convert.add_argument(
        "--debug",
        action="store_true",
        help="Show stack traces on error.",
    )

    subparsers.add_parser("algorithms", help="List binarization algorithms.")

    return parser


def _auto_output_path(input_path: Path, algorithm: Algorithm, raw: bool) -> Path:
    """Generate default output path from input."""
    suffix = ".bin" if raw else ".png"
    return input_path.parent / f"{input_path.stem}_{algorithm.value}{suffix}"


def _fail(message: str, code: str, is_json: bool, debug: bool = False) -> None:
    """Report an error on stderr and exit with status 1."""
    if debug:
        import traceback
        traceback.print_exc(file=sys.stderr)
    if is_json:
        err = {"status": "error", "error": message, "code": code}
        print(json.dumps(err), file=sys.stderr)
    else:
        print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _run_convert(args: argparse.Namespace) -> None:
    """Run the convert pipeline."""
    from inkbit.core.processor import (
        Settings,
        UnknownAlgorithmError,
        WidthMismatchError,
        parse_algorithm,
        process,
    )
    from inkbit.core.reader import load_image
    from inkbit.core.writer import save_image, save_raw

    is_json = args.json
    input_path = Path(args.input).resolve()

    try:
        algorithm = parse_algorithm(args.algorithm)
    except UnknownAlgorithmError as e:
        _fail(str(e), "UNKNOWN_ALGORITHM", is_json)

    try:
        source = load_image(input_path)
    except FileNotFoundError as e:
        _fail(str(e), "FILE_NOT_FOUND", is_json)
    except (ValueError, OSError) as e:
        _fail(str(e), "INVALID_INPUT", is_json, args.debug)

    settings = Settings(algorithm=algorithm, width=args.width)
    if args.output:
        output_path = Path(args.output).resolve()
    else:
        output_path = _auto_output_path(input_path, algorithm, args.raw)

    if not is_json:
        print(
            f"Binarizing {input_path.name} ({source.width}x{source.height}) "
            f"with {algorithm.value} at {settings.width} px...",
            file=sys.stderr,
        )

    try:
        result = process(source, settings.width, settings.algorithm)
    except WidthMismatchError as e:
        _fail(str(e), "WIDTH_MISMATCH", is_json)
    except ValueError as e:
        _fail(str(e), "INVALID_INPUT", is_json, args.debug)

    try:
        if args.raw:
            save_raw(result, output_path)
        else:
            save_image(result, output_path)
    except Exception as e:
        _fail(str(e), "PROCESSING_ERROR", is_json, args.debug)

    if not is_json:
        print(f"Saved to {output_path}", file=sys.stderr)
    else:
        summary = {
            "status": "success",
            "input": str(input_path),
            "output": str(output_path),
            "settings": {
                "algorithm": settings.algorithm.value,
                "width": settings.width,
            },
            "metadata": {
                "input_size": [source.width, source.height],
                "output_size": [result.width, result.height],
                "output_format": "raw" if args.raw else output_path.suffix.lstrip("."),
            },
        }
        print(json.dumps(summary, indent=2))


def main(argv: list[str] | None = None) -> None:
    """Main entry point.

    Routing:
      inkbit convert <file> [opts]  → binarize a file
      inkbit algorithms             → list algorithm names
      inkbit                        → help
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command == "convert":
        _run_convert(args)
    elif args.command == "algorithms":
        for algorithm in Algorithm:
            print(algorithm.value)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
