"""Codec Tester - Command Line Interface

Round-trips each input file through the selected codec at every maximum
symbol size and reports anything that does not come back byte-for-byte.
Exit status is the number of errors found (capped at 255), so zero means a
clean run.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from codec_tester import __version__
from codec_tester.adapters import list_codecs, load_codec
from codec_tester.core.cases import MAX_SYMBOL_BITS, MIN_SYMBOL_BITS
from codec_tester.core.config import get_settings
from codec_tester.core.exceptions import CodecLoadError
from codec_tester.core.fuzz import FuzzInjector
from codec_tester.core.orchestrator import TestOrchestrator
from codec_tester.utils.logger import configure_logging, get_logger

#: Largest portable process exit status
MAX_EXIT_STATUS = 255


def parse_seed(value: str) -> int:
    """Parse a decimal or 0x-prefixed 64-bit seed for argparse.

    Raises:
        argparse.ArgumentTypeError: If the value is not a 64-bit integer

    """
    try:
        seed = int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid seed: {value!r}") from None
    if not 0 <= seed < 1 << 64:
        raise argparse.ArgumentTypeError(f"seed must fit in 64 bits: {value!r}")
    return seed


def parse_maxbits(value: str) -> int:
    """Parse ``--maxbits``: 0 to cycle, or a single size 9-16."""
    try:
        bits = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid maxbits: {value!r}") from None
    if bits != 0 and not MIN_SYMBOL_BITS <= bits <= MAX_SYMBOL_BITS:
        raise argparse.ArgumentTypeError(
            f"maxbits must be 0 or {MIN_SYMBOL_BITS}-{MAX_SYMBOL_BITS}, got {bits}"
        )
    return bits


def exit_status(errors: int) -> int:
    """Clamp an error count to a valid exit status that stays non-zero."""
    return min(errors, MAX_EXIT_STATUS)


def create_parser() -> argparse.ArgumentParser:
    """Create the harness argument parser."""
    parser = argparse.ArgumentParser(
        prog="codec-tester",
        description=(
            "Byte-for-byte round-trip verification of a compressor/decompressor "
            "pair at every maximum symbol size, with optional fuzzing."
        ),
        epilog="Example: %(prog)s -q -f -e corpus/*.bin",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("files", nargs="*", metavar="file", help="Input files to test")

    sizes = parser.add_mutually_exclusive_group()
    sizes.add_argument(
        "-b",
        "--maxbits",
        type=parse_maxbits,
        default=0,
        metavar="N",
        help=(
            f"Test only max symbol size N ({MIN_SYMBOL_BITS}-{MAX_SYMBOL_BITS}); "
            "0 cycles through all sizes (default)"
        ),
    )
    sizes.add_argument(
        "-0",
        dest="maxbits",
        action="store_const",
        const=0,
        help="Cycle through all max symbol sizes (same as -b 0)",
    )
    for index, bits in enumerate(range(MIN_SYMBOL_BITS, MAX_SYMBOL_BITS + 1), 1):
        sizes.add_argument(
            f"-{index}",
            dest="maxbits",
            action="store_const",
            const=bits,
            help=f"Test only max symbol size {bits} (same as -b {bits})",
        )
    parser.add_argument(
        "-f",
        "--fuzz",
        action="store_true",
        help="Fuzz test (deterministically corrupt compressed data)",
    )
    parser.add_argument(
        "--seed",
        type=parse_seed,
        default=None,
        metavar="N",
        help="Initial fuzz generator state (decimal or 0x hex)",
    )
    parser.add_argument(
        "-e",
        "--exhaustive",
        action="store_true",
        help="Exhaustive test (repeat every size on progressively truncated data)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report errors and the final summary",
    )
    parser.add_argument(
        "-c",
        "--codec",
        default=None,
        metavar="NAME",
        help="Registered codec name or module:attribute (default: zlib)",
    )
    parser.add_argument(
        "--list-codecs", action="store_true", help="List registered codecs and exit"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging on stderr"
    )
    parser.add_argument(
        "--log-format",
        choices=["console", "json"],
        default=None,
        help="Log output format (default: console)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        metavar="PATH",
        help="Also write log records to PATH",
    )
    parser.add_argument(
        "--version", action="version", version=f"Codec Tester v{__version__}"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the harness over the given files.

    Returns:
        Number of errors detected, capped at 255; 0 when there is nothing to do

    """
    parser = create_parser()
    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        parser.print_help()
        return 0

    args = parser.parse_args(argv)
    settings = get_settings()

    log_level = "DEBUG" if args.verbose else settings.log_level.value
    log_format = args.log_format or settings.log_format
    configure_logging(
        log_level=log_level,
        json_format=log_format == "json",
        log_file=args.log_file,
    )
    logger = get_logger(__name__)

    if args.list_codecs:
        for name in list_codecs():
            print(name)
        return 0

    if not args.files:
        parser.print_usage()
        return 0

    codec_spec = args.codec or settings.default_codec
    try:
        codec = load_codec(codec_spec)
    except CodecLoadError as e:
        print(f"Error: {e.message}")
        return 1

    seed = settings.fuzz_seed if args.seed is None else args.seed
    logger.info(
        "run_started",
        codec=codec.name,
        files=len(args.files),
        maxbits=args.maxbits or "all",
        fuzz=args.fuzz,
        seed=hex(seed),
        exhaustive=args.exhaustive,
    )

    orchestrator = TestOrchestrator(
        codec,
        settings,
        max_symbol_bits=args.maxbits or None,
        exhaustive=args.exhaustive,
        injector=FuzzInjector(seed, enabled=args.fuzz),
        quiet=args.quiet,
    )
    stats = orchestrator.run(args.files)

    if args.fuzz:
        logger.info("fuzz_summary", corruptions=orchestrator.injector.corruptions)

    return exit_status(stats.errors_found)


if __name__ == "__main__":
    sys.exit(main())
