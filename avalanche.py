"""Coarse avalanche check for the SHA-256 engine.

For a sample of random messages, flip one random input bit and count how many
of the 256 output bits change. A sound hash changes about half of them on
average. This is a regression check, not a security argument.

Usage:
    python avalanche.py
    python avalanche.py --samples 500 --length 64 --seed 1
    python avalanche.py --output report.yaml
"""

from __future__ import annotations

import argparse
import random
from typing import Dict, List

import yaml

from sha256 import DIGEST_SIZE, digest


DIGEST_BITS = DIGEST_SIZE * 8

# Accepted range for the mean number of flipped output bits.
DEFAULT_LOW = 112.0
DEFAULT_HIGH = 144.0


def flip_bit(message: bytes, bit_index: int) -> bytes:
    """Return a copy of `message` with bit `bit_index` inverted (MSB first)."""
    if not 0 <= bit_index < len(message) * 8:
        raise ValueError(f"bit index {bit_index} out of range for a {len(message)}-byte message")
    flipped = bytearray(message)
    flipped[bit_index // 8] ^= 0x80 >> (bit_index % 8)
    return bytes(flipped)


def hamming_distance(x: bytes, y: bytes) -> int:
    """Number of differing bits between two equal-length byte strings."""
    if len(x) != len(y):
        raise ValueError(f"length mismatch: {len(x)} vs {len(y)}")
    return sum(bin(a ^ b).count("1") for a, b in zip(x, y))


def run_avalanche(samples: int, length: int, seed: int) -> Dict:
    """Measure flipped output bits over `samples` random single-bit flips."""
    if samples < 1:
        raise ValueError(f"samples must be positive, got {samples}")
    if length < 1:
        raise ValueError(f"length must be positive, got {length}")

    rng = random.Random(seed)
    distances: List[int] = []
    for _ in range(samples):
        message = bytes(rng.getrandbits(8) for _ in range(length))
        bit_index = rng.randrange(length * 8)
        distances.append(hamming_distance(digest(message), digest(flip_bit(message, bit_index))))

    return {
        "samples": samples,
        "message_length_bytes": length,
        "seed": seed,
        "mean_flipped_bits": sum(distances) / samples,
        "min_flipped_bits": min(distances),
        "max_flipped_bits": max(distances),
        "digest_bits": DIGEST_BITS,
    }


def main(argv: list[str] | None = None) -> int:
    """CLI entry point; returns the process exit status."""
    parser = argparse.ArgumentParser(
        description="Measure how many SHA-256 output bits change per flipped input bit"
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=200,
        help="Number of random messages to test (default: 200)",
    )
    parser.add_argument(
        "--length",
        type=int,
        default=64,
        help="Message length in bytes (default: 64)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed (default: 0)",
    )
    parser.add_argument(
        "--low",
        type=float,
        default=DEFAULT_LOW,
        help=f"Lowest accepted mean (default: {DEFAULT_LOW})",
    )
    parser.add_argument(
        "--high",
        type=float,
        default=DEFAULT_HIGH,
        help=f"Highest accepted mean (default: {DEFAULT_HIGH})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the report to this YAML file",
    )
    args = parser.parse_args(argv)

    if args.samples < 1 or args.length < 1:
        parser.error("--samples and --length must be positive")

    print(f"Flipping one bit in {args.samples:,} messages of {args.length} bytes (seed {args.seed})...")
    report = run_avalanche(args.samples, args.length, args.seed)
    ok = args.low <= report["mean_flipped_bits"] <= args.high
    report["accepted_range"] = [args.low, args.high]
    report["passed"] = ok

    print(f"  mean flipped bits: {report['mean_flipped_bits']:.2f} / {DIGEST_BITS}")
    print(f"  min / max        : {report['min_flipped_bits']} / {report['max_flipped_bits']}")

    if args.output:
        with open(args.output, "w") as f:
            yaml.dump(report, f, default_flow_style=False, sort_keys=False)
        print(f"Report written to {args.output}")

    print("[OK] avalanche within range" if ok else "[FAIL] avalanche outside range")
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
