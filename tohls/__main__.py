"""
Command-line interface for the tohls HLS conversion pipeline
"""
import argparse
import logging
import sys
from pathlib import Path

from . import __version__, config
from .exceptions import DependencyError, FormatParseError, TohlsError
from .formats import parse_formats
from .formatting import print_error, print_header, print_success
from .logging import configure_logging
from .pipeline import process_files
from .utils import check_dependencies

FORMAT_HELP = """\
Each FORMAT value must follow this grammar:

    FORMAT = SIZE:FRAMERATE:QUALITY

    SIZE = WxH | Hp
    W = <video width in pixels>
    H = <video height in pixels>

    FRAMERATE = <frame rate of the video, can be a decimal number> | EMPTY

    QUALITY = <quality factor of the video, usually between 0.07 and 0.15> | EMPTY

    EMPTY = <empty string>

When SIZE is given as Hp, W is calculated from the aspect ratio of the input.
When FRAMERATE is not given, the frame rate of the input is kept.
When QUALITY is not given, a medium value of 0.11 is used.

Examples:
  -f 1920x1080::   Convert into 1920x1080 keeping the frame rate, medium quality
  -f 1080p:30:     Convert into 1080p (W is 1920 for 16/9 input) at 30fps
  -f 360p::0.07    Convert into 360p using a low quality factor
"""

def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid positive integer: '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"invalid positive integer: '{value}'")
    return number

def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="tohls",
        description="Convert media files into HLS renditions and a master playlist",
        epilog=FORMAT_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help=f"Set logging level (default from config: {config.LOG_LEVEL})"
    )
    parser.add_argument(
        "-f", "--format",
        dest="formats",
        action="append",
        default=[],
        metavar="FORMAT",
        help="Format into which input files are converted; repeat for multiple formats"
    )
    parser.add_argument(
        "-o", "--output-dir",
        dest="output_dir",
        type=Path,
        default=Path("."),
        help="Directory receiving renditions and master playlists (default: current directory)"
    )
    parser.add_argument(
        "-j", "--jobs",
        type=_positive_int,
        default=config.MAX_PARALLEL_ENCODES,
        help="Number of renditions encoded in parallel (default: %(default)s)"
    )
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        metavar="FILE",
        help="Input media files"
    )
    args = parser.parse_intermixed_args(argv)

    if not args.formats:
        parser.error("no formats given")
    if not args.files:
        parser.error("no input files given")
    return args

def main(argv=None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    try:
        log_file = configure_logging(args.log_level)
    except OSError as e:
        print_error(f"Unable to set up logging in '{config.LOG_DIR}': {e}")
        return 1

    log = logging.getLogger("tohls")
    if log_file:
        log.debug("Log file: %s", log_file)

    try:
        formats = parse_formats(args.formats)
    except FormatParseError as e:
        print_error(f"Error: {e.message}")
        return 1

    try:
        check_dependencies([config.FFMPEG, config.FFPROBE])
    except DependencyError as e:
        print_error(f"Error: {e.message}")
        return 1

    try:
        args.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print_error(f"Unable to create output directory '{args.output_dir}': {e}")
        return 1

    print_header(f"tohls v{__version__}")
    try:
        masters = process_files(args.files, formats, output_dir=args.output_dir, jobs=args.jobs)
    except KeyboardInterrupt:
        log.warning("Conversion interrupted by user")
        return 130
    except TohlsError as e:
        log.debug("Conversion failed", exc_info=True)
        print_error(e.message)
        return 1

    for master in masters:
        print_success(f"Wrote {master}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
