"""Command-line interface.

Usage::

    levbound (-d | -l | -u) FILE1 FILE2 [READ_LIMIT]

Each file is read as the byte string it contains (at most READ_LIMIT
bytes of it), then the Levenshtein distance, or a bound on it, is
printed followed by a newline.  The exit status is zero if and only if
a number was printed.
"""
from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from buffer import load
from engine import DistanceEngine, Mode
from errors import DistanceError
from factory import EngineFactory, VerificationError
from models import DistanceRequest

logger = logging.getLogger(__name__)

EPILOG = """\
A bound takes considerably less time than the distance on large files.
For large files you may want a READ_LIMIT: only that many leading bytes
of each file are compared.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="levbound",
        description="Print (a bound on) the Levenshtein distance between two files.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("-d", dest="mode", action="store_const", const=Mode.DISTANCE,
                      help="Print the Levenshtein distance")
    mode.add_argument("-l", dest="mode", action="store_const", const=Mode.LOWER,
                      help="Print a lower bound on the distance (fastest)")
    mode.add_argument("-u", dest="mode", action="store_const", const=Mode.UPPER,
                      help="Print an upper bound on the distance")
    parser.add_argument("file1", help="First file")
    parser.add_argument("file2", help="Second file")
    parser.add_argument("read_limit", nargs="?", default=None,
                        help="Maximum number of bytes read from each file")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging on stderr")
    parser.add_argument("--verify", action="store_true",
                        help="Verify the engine against its properties before use")
    return parser


def _fail(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        request = DistanceRequest(
            mode=args.mode,
            first=args.file1,
            second=args.file2,
            read_limit=args.read_limit,
        )
    except ValidationError as e:
        logger.debug("rejected request: %s", e)
        return _fail("Could not accept read_limit.")

    if args.verify:
        try:
            engine = EngineFactory.create()
        except VerificationError as e:
            logger.error("%s", e.report.summary())
            return _fail("Engine verification failed.")
    else:
        engine = DistanceEngine()

    try:
        first = load(request.first, request.read_limit)
    except DistanceError as e:
        logger.debug("%s", e)
        return _fail("Could not read first file.")
    try:
        second = load(request.second, request.read_limit)
    except DistanceError as e:
        logger.debug("%s", e)
        return _fail("Could not read second file.")

    try:
        result = engine.compute(request.mode, first, second)
    except DistanceError as e:
        logger.debug("%s failed: %s", request.mode.flag, e)
        return _fail("Computation failed.")

    try:
        print(result, flush=True)
    except OSError:
        return _fail("Could not print.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
