"""Check the digest engine against a YAML file of known-answer vectors.

Usage:
    python check_vectors.py                          # vectors/fips180_4.yaml
    python check_vectors.py path/to/vectors.yaml
    python check_vectors.py --skip-repeat-over 1000  # skip huge messages

File format:

    vectors:
      - name: abc
        message: abc                 # UTF-8 text, or ...
        message_hex: 616263          # ... raw bytes as hex
        repeat: 1                    # optional, default 1
        digest: ba7816bf...f20015ad  # 64 lowercase hex characters

Prints one [PASS]/[FAIL] line per vector followed by a summary, and exits
with status 0 only if every checked vector matches.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import Dict, List, Optional, Tuple

import yaml

from sha256 import DIGEST_SIZE, hexdigest


DEFAULT_VECTORS = os.path.join(os.path.dirname(os.path.abspath(__file__)), "vectors", "fips180_4.yaml")


def load_vectors(path: str) -> List[Dict]:
    """Read and validate the vector list from a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        document = yaml.safe_load(f)

    if not isinstance(document, dict) or not isinstance(document.get("vectors"), list):
        raise ValueError(f"{path}: expected a mapping with a 'vectors' list")

    vectors = document["vectors"]
    for idx, entry in enumerate(vectors):
        _validate_entry(entry, idx)
    return vectors


def _validate_entry(entry, idx: int) -> None:
    if not isinstance(entry, dict):
        raise ValueError(f"vector #{idx}: expected a mapping, got {type(entry).__name__}")

    name = entry.get("name", f"#{idx}")
    has_text = "message" in entry
    has_hex = "message_hex" in entry
    if has_text == has_hex:
        raise ValueError(f"vector {name}: exactly one of 'message' or 'message_hex' is required")

    source = entry["message"] if has_text else entry["message_hex"]
    if not isinstance(source, str):
        raise ValueError(f"vector {name}: message must be a string, got {type(source).__name__}")

    repeat = entry.get("repeat", 1)
    if not isinstance(repeat, int) or isinstance(repeat, bool) or repeat < 1:
        raise ValueError(f"vector {name}: repeat must be a positive integer, got {repeat!r}")

    expected = entry.get("digest")
    if not isinstance(expected, str) or len(expected) != 2 * DIGEST_SIZE:
        raise ValueError(f"vector {name}: digest must be {2 * DIGEST_SIZE} hex characters")
    try:
        bytes.fromhex(expected)
    except ValueError:
        raise ValueError(f"vector {name}: digest is not valid hex: {expected!r}") from None


def vector_message(entry: Dict) -> bytes:
    """Return the raw message bytes described by a vector entry."""
    if "message_hex" in entry:
        try:
            unit = bytes.fromhex(entry["message_hex"])
        except ValueError:
            raise ValueError(
                f"vector {entry.get('name', '?')}: message_hex is not valid hex"
            ) from None
    else:
        unit = entry["message"].encode("utf-8")
    return unit * entry.get("repeat", 1)


def check_vectors(
    vectors: List[Dict], skip_repeat_over: Optional[int] = None
) -> List[Tuple[str, bool, str, str]]:
    """Hash every vector and compare with its expected digest.

    Returns a list of ``(name, ok, expected_hex, actual_hex)`` tuples. Vectors
    whose `repeat` exceeds `skip_repeat_over` are left out.
    """
    results: List[Tuple[str, bool, str, str]] = []
    for idx, entry in enumerate(vectors):
        if skip_repeat_over is not None and entry.get("repeat", 1) > skip_repeat_over:
            continue
        name = entry.get("name", f"#{idx}")
        expected = entry["digest"].lower()
        actual = hexdigest(vector_message(entry))
        results.append((name, actual == expected, expected, actual))
    return results


def main(argv: list[str] | None = None) -> int:
    """CLI entry point; returns the process exit status."""
    parser = argparse.ArgumentParser(
        description="Check the SHA-256 engine against known-answer vectors"
    )
    parser.add_argument(
        "vectors",
        nargs="?",
        default=DEFAULT_VECTORS,
        help="YAML vector file (default: vectors/fips180_4.yaml)",
    )
    parser.add_argument(
        "--skip-repeat-over",
        type=int,
        default=None,
        help="Skip vectors whose repeat count exceeds this value",
    )
    args = parser.parse_args(argv)

    try:
        vectors = load_vectors(args.vectors)
    except (OSError, ValueError, yaml.YAMLError) as e:
        sys.stderr.write(f"Error loading vectors from '{args.vectors}': {e}\n")
        return 1

    results = check_vectors(vectors, skip_repeat_over=args.skip_repeat_over)

    failed = 0
    for name, ok, expected, actual in results:
        if ok:
            print(f"[PASS] {name}")
        else:
            failed += 1
            print(f"[FAIL] {name}")
            print(f"  expected: {expected}")
            print(f"  actual  : {actual}")

    skipped = len(vectors) - len(results)
    print(f"\n[SUMMARY] {len(results) - failed} passed, {failed} failed, {skipped} skipped")
    return 0 if failed == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
