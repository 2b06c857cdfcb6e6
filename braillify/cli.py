"""Command-line interface for braillify.

Prints the braille rendering of an image to stdout, or a JSON document
with --json for scripting.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from braillify.core.errors import BraillifyError, DecodeError, EmptyImageError
from braillify.core.glyphs import RowMapping

err_console = Console(stderr=True)


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="braillify",
        description="Render an image as dithered Unicode braille text.",
    )
    parser.add_argument("input", help="Input image file path.")
    parser.add_argument(
        "-t", "--threshold",
        type=float,
        default=0.5,
        help="Dot cutoff in [0, 1] (default: 0.5). "
             "Values outside the range give all-on or all-off output.",
    )
    parser.add_argument(
        "-i", "--invert",
        action="store_true",
        help="Invert every braille cell.",
    )
    parser.add_argument(
        "--legacy-rows",
        action="store_true",
        help="Sample every dot row from the second pixel row of each band, "
             "matching the output of the original C tool.",
    )
    size = parser.add_mutually_exclusive_group()
    size.add_argument(
        "-w", "--width",
        type=_positive_int,
        help="Resize to this many output columns (default: native size).",
    )
    size.add_argument(
        "--fit",
        action="store_true",
        help="Resize to fit the current terminal.",
    )
    parser.add_argument(
        "-o", "--output",
        help="Write the text to this file instead of stdout.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON (pipe-friendly).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show stack traces on error.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log pipeline steps to stderr.",
    )
    return parser


def _fail(message: str, code: str, args: argparse.Namespace) -> int:
    """Report an error on stderr and return the exit status."""
    if args.debug:
        import traceback
        traceback.print_exc(file=sys.stderr)
    if args.json:
        err = {"status": "error", "error": message, "code": code}
        print(json.dumps(err), file=sys.stderr)
    else:
        err_console.print(f"[bold red]Error:[/] {escape(message)}", highlight=False)
    return 1


def _run_convert(args: argparse.Namespace) -> int:
    """Run the conversion and emit its result. Returns the exit status."""
    from braillify.core.processor import Settings, convert_image
    from braillify.core.reader import open_grayscale
    from braillify.utils.terminal import fit_to_terminal

    try:
        img = open_grayscale(args.input)
        width = args.width
        if args.fit and img.width and img.height:
            width = fit_to_terminal(img.width, img.height)
        settings = Settings(
            threshold=args.threshold,
            invert=args.invert,
            rows=RowMapping.LEGACY if args.legacy_rows else RowMapping.CORRECT,
            width=width,
        )
        text = convert_image(img, settings)
    except DecodeError as e:
        return _fail(str(e), "DECODE_FAILED", args)
    except EmptyImageError as e:
        return _fail(str(e), "EMPTY_IMAGE", args)
    except BraillifyError as e:
        return _fail(str(e), "PROCESSING_ERROR", args)

    lines = text.splitlines()
    if args.output:
        output_path = Path(args.output).resolve()
        try:
            output_path.write_text(text, encoding="utf-8")
        except OSError as e:
            return _fail(f"Cannot write {output_path}: {e}", "WRITE_FAILED", args)

    if args.json:
        result = {
            "status": "success",
            "input": str(Path(args.input).resolve()),
            "output": str(output_path) if args.output else None,
            "text": text,
            "lines": lines,
            "columns": len(lines[0]) if lines else 0,
            "rows": len(lines),
            "settings": {
                "threshold": settings.threshold,
                "invert": settings.invert,
                "rows": settings.rows.value,
                "width": settings.width,
            },
        }
        print(json.dumps(result, indent=2, ensure_ascii=False))
    elif not args.output:
        sys.stdout.write(text)
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point: `braillify [options] <file>`."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )
    sys.exit(_run_convert(args))


if __name__ == "__main__":
    main()
