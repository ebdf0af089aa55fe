"""
Filter Tool command line.

Opens an image (or grabs one from a camera URL), applies edit menu filters
in the order given, optionally applies a color range, and saves the result.

Examples:
    python filter_tool.py target.png -o blurred.png --apply "Blur/3x3"
    python filter_tool.py target.png -o mask.png --apply "Color Space/BGR->HSV" \\
        --color-range 40,80,80 80,255,255
    python filter_tool.py --list-filters
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from FT_Libs.constants import DEFAULT_RANGE_KEEP, DEFAULT_RANGE_MAXIMUMS, DEFAULT_RANGE_MINIMUMS
from FT_Libs.FiltersLib.color_range_filter import ColorRangeFilter
from FT_Libs.WorkbenchLib.filter_menu import build_edit_menu, find_menu_item
from FT_Libs.WorkbenchLib.preferences_store import PreferencesStore
from FT_Libs.WorkbenchLib.workbench import FilterWorkbench

logger = logging.getLogger("filter_tool")


def _parse_channel_values(text: str) -> List[int]:
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected comma separated integers, got '{text}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Try out image processing filters on an image.")
    parser.add_argument("input", nargs="?", help="Image file to open (or URL with --url)")
    parser.add_argument(
        "-o",
        "--output",
        help="Where to save the result. Required with an input or --url; "
        "when reopening the last image it defaults to the last saved file.",
    )
    parser.add_argument(
        "--apply",
        action="append",
        default=[],
        metavar="MENU/LABEL",
        help="Edit menu entry to apply, e.g. 'Blur/3x3'. May be repeated.",
    )
    parser.add_argument(
        "--color-range",
        nargs=2,
        type=_parse_channel_values,
        metavar=("MINS", "MAXS"),
        help="Comma separated per-channel minimums and maximums",
    )
    parser.add_argument("--remove", action="store_true", help="Remove in-range pixels instead of keeping them")
    parser.add_argument("--url", action="store_true", help="Treat input as an image URL (default: preference URL)")
    parser.add_argument("--preferences", help="Preferences file to use")
    parser.add_argument("--list-filters", action="store_true", help="List edit menu entries and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s",
        datefmt="%H:%M:%S",
    )

    color_range = ColorRangeFilter(DEFAULT_RANGE_MINIMUMS, DEFAULT_RANGE_MAXIMUMS, DEFAULT_RANGE_KEEP)
    menu = build_edit_menu(color_range)

    if args.list_filters:
        for item in menu:
            print(item.path)
        return 0

    if (args.input or args.url) and not args.output:
        print("error: no output given; use -o to choose where to save the result", file=sys.stderr)
        return 1

    preferences = PreferencesStore(Path(args.preferences) if args.preferences else None)
    workbench = FilterWorkbench(preferences)

    try:
        if args.url:
            workbench.grab_image(args.input)
        elif args.input:
            workbench.open_image(Path(args.input))
        elif workbench.restore_last_opened() is None:
            print("error: no input image given and no previously opened image", file=sys.stderr)
            return 1

        for path in args.apply:
            workbench.apply_filter(find_menu_item(menu, path).image_filter)

        if args.color_range:
            minimums, maximums = args.color_range
            color_range.configure(minimums, maximums, not args.remove)
            workbench.apply_filter(color_range)

        saved = workbench.save_image(Path(args.output) if args.output else None)
    except (OSError, ValueError, KeyError, RuntimeError) as exc:
        # InvalidConfiguration from --color-range is a ValueError
        message = exc.args[0] if isinstance(exc, KeyError) and exc.args else exc
        print(f"error: {message}", file=sys.stderr)
        return 1

    logger.info(f"Result written to {saved}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
