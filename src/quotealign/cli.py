import sys
import logging
import argparse
from pathlib import Path
from typing import Optional

import structlog

from quotealign.engine import align
from quotealign.quote import coerce_multi_line, quote_to_partial


def _configure_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _read_fragment(fragment: Optional[str]) -> str:
    if fragment is not None:
        return fragment
    return sys.stdin.read()


def mode_align(rich_path: Path, fragment: str, verbose: bool) -> str:
    rich_text = rich_path.read_text(encoding="utf-8")
    result = align(rich_text, fragment)

    if verbose:
        status = "aligned" if result.aligned else f"abstained ({result.reason.value})"
        print(f"Alignment {status}", file=sys.stderr)

    return result.text


def mode_partial(quote_path: Path, fragment: str) -> str:
    quote_block = quote_path.read_text(encoding="utf-8")
    return quote_to_partial(quote_block, fragment)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Recover the marked-up source of a plain-text selection"
    )
    parser.add_argument("rich_file", type=Path, help="File holding the rich (marked-up) post text")
    parser.add_argument(
        "fragment", nargs="?", help="Selected plain text (read from stdin if omitted)"
    )
    parser.add_argument(
        "--partial",
        action="store_true",
        help="Treat rich_file as a full [quote] block and narrow it to the fragment",
    )
    parser.add_argument(
        "--multi-line", action="store_true", help="Lay out the output over several lines"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log diagnostics to stderr")

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if not args.rich_file.exists():
        print(f"Error: File {args.rich_file} not found.", file=sys.stderr)
        return 1

    fragment = _read_fragment(args.fragment)

    if args.partial:
        output = mode_partial(args.rich_file, fragment)
    else:
        output = mode_align(args.rich_file, fragment, args.verbose)

    if args.multi_line:
        output = coerce_multi_line(output)

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
