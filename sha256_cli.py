"""Command-line front end for the SHA-256 digest engine in `sha256.py`.

Usage:
    python sha256_cli.py "message"            # digest of the UTF-8 bytes
    python sha256_cli.py -f path/to/file      # digest of the raw file bytes
    python sha256_cli.py --label "message"    # print a header line first

The digest is printed as 64 lowercase hex characters followed by a newline.
Running without a message or file prints the usage text to stderr and exits
with a non-zero status.
"""

from __future__ import annotations

import argparse
import sys

from sha256 import hexdigest


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sha256",
        description="Print the SHA-256 digest of a message or a file",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "message",
        nargs="?",
        help="Message to hash (encoded as UTF-8)",
    )
    source.add_argument(
        "-f",
        "--file",
        help="Hash the raw bytes of this file instead of a message",
    )
    parser.add_argument(
        "--label",
        action="store_true",
        help='Print a "SHA-256 hash of ..." header line before the digest',
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point; returns the process exit status."""
    args = _build_parser().parse_args(argv)

    if args.file is not None:
        try:
            with open(args.file, "rb") as f:
                data = f.read()
        except OSError as e:
            sys.stderr.write(f"Error reading file '{args.file}': {e}\n")
            return 1
        subject = args.file
    else:
        data = args.message.encode("utf-8")
        subject = args.message

    if args.label:
        print(f'SHA-256 hash of "{subject}":')
    print(hexdigest(data))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
