"""Command-line entry point for tplmatch.

Searches a needle image in a haystack image and prints how well it matches,
from 0 to 1, along with the location of the best match. The matched window is
outlined on the haystack and shown in a window unless ``--no-show`` is given.
"""

from __future__ import annotations

import argparse
import logging
import platform
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final

import cv2 as cv

from . import _about  # pyright: ignore[reportPrivateUsage]
from .core import draw_match, load_image, match, save_match, show_match
from .models import ImageLoadError

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ("main",)

logger = logging.getLogger(__name__)

_LOG_FORMAT: Final[str] = "%(asctime)s.%(msecs)03d %(levelname)s %(module)s - %(funcName)s: %(message)s"
_LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
_EXIT_OK: Final[int] = 0
_EXIT_FAILURE: Final[int] = 1


def _version_summary() -> str:
    about_file = _about.__file__
    path = Path(about_file).resolve().parent if about_file else Path.cwd()
    sha1 = _about.__git_sha1__[:8]
    python_summary = f"{platform.python_implementation()} {platform.python_version()} {platform.python_compiler()}"
    return (
        f"tplmatch ({_about.__version__}) [{sha1}]\n"
        f"located at {path}\n"
        f"{python_summary}\n"
        f"OpenCV {cv.__version__}\n"
    )


def _build_parser(prog: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Searches needle image in haystack and returns result match value from 0 to 1.",
        epilog=f"Using OpenCV version {cv.__version__}",
    )
    parser.add_argument("haystack", nargs="?", help="image to search within")
    parser.add_argument("needle", nargs="?", help="image to search for")
    parser.add_argument("-o", "--output", type=Path, help="save the annotated haystack to this path")
    parser.add_argument("--no-show", action="store_true", help="do not display the annotated haystack")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--version", action="store_true", help="print package information and exit")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line tool and return its exit code."""
    parser = _build_parser("tplmatch")
    args = parser.parse_args(argv)

    if args.version:
        sys.stderr.write(_version_summary())
        return _EXIT_OK

    logging.basicConfig(
        level="DEBUG" if args.verbose else "INFO",
        format=_LOG_FORMAT,
        datefmt=_LOG_DATE_FORMAT,
    )

    if not args.haystack or not args.needle:
        parser.print_help(sys.stderr)
        return _EXIT_FAILURE

    try:
        haystack = load_image(args.haystack)
        needle = load_image(args.needle)
    except ImageLoadError as exc:
        logger.debug("%s", exc)
        sys.stderr.write("Couldn't load images!\n")
        return _EXIT_FAILURE

    result = match(haystack, needle)
    sys.stdout.write(f"Result: {result.confidence:g}\n")
    # A zero-confidence window is reported without a location.
    if not result.found or result.confidence == 0.0:
        return _EXIT_OK

    sys.stdout.write(f"Found at [{result.x},{result.y}]\n")
    annotated = draw_match(haystack, needle, result)
    if args.output is not None:
        save_match(annotated, args.output)
    if not args.no_show:
        show_match(annotated)
    return _EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
