"""Command-line interface for utf8codec."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import utf8codec
from utf8codec.decoder import find_invalid
from utf8codec.errors import Utf8DecodeError
from utf8codec.strategies import AUTO, PROBE_ORDER, get_codec

logger = logging.getLogger(__name__)

_STRATEGY_NAMES = [AUTO, *PROBE_ORDER]


def _report(label: str, data: bytes) -> None:
    issues = find_invalid(data)
    if not issues:
        print(f"{label}: valid UTF-8")
        return
    first = issues[0]
    print(
        f"{label}: {len(issues)} ill-formed sequence(s), "
        f"first at byte {first.start} ({first.reason})"
    )


def _process(label: str, data: bytes, args: argparse.Namespace) -> bool:
    """Handle one input; return False if it failed in strict mode."""
    if args.check:
        _report(label, data)
        return True
    codec = get_codec(args.strategy)
    errors = "strict" if args.strict else "replace"
    try:
        text = codec.decode(data, errors)
    except Utf8DecodeError as e:
        print(f"utf8codec: {label}: {e.reason} at byte {e.start}", file=sys.stderr)
        return False
    sys.stdout.buffer.write(codec.encode(text))
    sys.stdout.buffer.flush()
    return True


def main(argv: list[str] | None = None) -> int:
    """Run the ``utf8codec`` command-line tool.

    Each input is decoded and written back to stdout as well-formed UTF-8,
    with ill-formed sequences replaced by U+FFFD.  With ``--check`` the
    report is built by :func:`~utf8codec.decoder.find_invalid`, so its counts
    and offsets do not depend on ``--strategy``.

    :param argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    :returns: The process exit status.
    """
    parser = argparse.ArgumentParser(
        description="Repair or check the UTF-8 encoding of files."
    )
    parser.add_argument("files", nargs="*", help="Files to read (default: stdin)")
    parser.add_argument(
        "--check",
        action="store_true",
        help=(
            "Report ill-formed sequences instead of writing repaired output; "
            "spans always come from the pure decoder, whatever --strategy says"
        ),
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first ill-formed sequence instead of replacing it",
    )
    parser.add_argument(
        "-s",
        "--strategy",
        default=None,
        choices=_STRATEGY_NAMES,
        help="Codec strategy (default: $UTF8CODEC_STRATEGY or auto)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    parser.add_argument(
        "--version", action="version", version=f"utf8codec {utf8codec.__version__}"
    )

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    ok = True
    if args.files:
        for filepath in args.files:
            try:
                data = Path(filepath).read_bytes()
            except OSError as e:
                print(f"utf8codec: {filepath}: {e}", file=sys.stderr)
                ok = False
                continue
            logger.debug("Read %d bytes from %s", len(data), filepath)
            ok = _process(filepath, data, args) and ok
    else:
        ok = _process("stdin", sys.stdin.buffer.read(), args)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
