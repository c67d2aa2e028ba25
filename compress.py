"""SHA-256 block compression.

Everything needed to fold one 512-bit message block into the running hash
state lives here:

- the 64 round constants `K_VALUES`,
- the 32-bit bit-mixing helpers (rotr, σ0, σ1, Σ0, Σ1, Ch, Maj),
- the message schedule expansion `w[0..63]`,
- a single round (`compression`), the 64-round loop (`compress64`), and
- `compress(state, block)`, which updates an 8-word hash state in place.

A single round, given working registers `(a, b, c, d, e, f, g, h)`, the round
constant `k` and the schedule word `w`, computes:

    T1 = h + Σ1(e) + Ch(e, f, g) + k + w
    T2 = Σ0(a) + Maj(a, b, c)

    a' = T1 + T2        e' = d + T1
    b' = a   c' = b   d' = c   f' = e   g' = f   h' = g

All additions are performed modulo 2**32.
"""

from __future__ import annotations

from typing import List, MutableSequence, Sequence, Tuple


MASK32 = 0xFFFFFFFF

BLOCK_SIZE = 64
ROUNDS = 64

# First 32 bits of the fractional parts of the cube roots of the first 64
# primes (FIPS 180-4, section 4.2.2).
K_VALUES: Tuple[int, ...] = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5, 0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3, 0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC, 0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7, 0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13, 0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3, 0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5, 0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208, 0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)


def rotr(x: int, n: int) -> int:
    """Right-rotate a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return ((x >> n) | (x << (32 - n))) & MASK32


def small_sigma0(x: int) -> int:
    """σ0, used when expanding the message schedule."""
    return rotr(x, 7) ^ rotr(x, 18) ^ ((x & MASK32) >> 3)


def small_sigma1(x: int) -> int:
    """σ1, used when expanding the message schedule."""
    return rotr(x, 17) ^ rotr(x, 19) ^ ((x & MASK32) >> 10)


def big_sigma0(x: int) -> int:
    """Σ0, applied to register `a` in every round."""
    return rotr(x, 2) ^ rotr(x, 13) ^ rotr(x, 22)


def big_sigma1(x: int) -> int:
    """Σ1, applied to register `e` in every round."""
    return rotr(x, 6) ^ rotr(x, 11) ^ rotr(x, 25)


def ch(x: int, y: int, z: int) -> int:
    """Choice: for each bit, take `y` where `x` is set, otherwise `z`."""
    return ((x & y) ^ (~x & z)) & MASK32


def maj(x: int, y: int, z: int) -> int:
    """Majority vote of the three inputs, bit by bit."""
    return ((x & y) ^ (x & z) ^ (y & z)) & MASK32


def build_message_schedule(block: Sequence[int]) -> List[int]:
    """Expand one 64-byte block into the 64-word message schedule.

    Words 0..15 are the block bytes packed big-endian; words 16..63 follow
    the recurrence ``w[i] = σ1(w[i-2]) + w[i-7] + σ0(w[i-15]) + w[i-16]``.
    """
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Expected {BLOCK_SIZE}-byte block, got {len(block)}")

    data = bytes(block)
    w: List[int] = [int.from_bytes(data[i : i + 4], byteorder="big") for i in range(0, BLOCK_SIZE, 4)]

    for i in range(16, ROUNDS):
        w.append((small_sigma1(w[i - 2]) + w[i - 7] + small_sigma0(w[i - 15]) + w[i - 16]) & MASK32)

    return w


def compression(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    w: int,
    k: int,
) -> Tuple[int, int, int, int, int, int, int, int]:
    """Perform one SHA-256 compression round.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        32-bit working registers before the round.
    w : int
        Message schedule word `w[i]`.
    k : int
        Round constant `k[i]`.

    Returns
    -------
    (a, b, c, d, e, f, g, h) : tuple[int, ...]
        Working registers after the round, reduced modulo 2**32.
    """
    temp1 = (h + big_sigma1(e) + ch(e, f, g) + k + w) & MASK32
    temp2 = (big_sigma0(a) + maj(a, b, c)) & MASK32

    return (
        (temp1 + temp2) & MASK32,
        a & MASK32,
        b & MASK32,
        c & MASK32,
        (d + temp1) & MASK32,
        e & MASK32,
        f & MASK32,
        g & MASK32,
    )


def compress64(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    ws: Sequence[int],
) -> Tuple[int, int, int, int, int, int, int, int]:
    """Run the 64-round loop for one block.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        Initial working registers (a copy of the current hash state).
    ws : Sequence[int]
        The 64-word message schedule `w[0..63]` for this block.

    Returns
    -------
    (a, b, c, d, e, f, g, h) : tuple[int, ...]
        Working registers after 64 rounds, before the feed-forward addition.
    """
    if len(ws) != ROUNDS:
        raise ValueError(f"compress64 expects {ROUNDS} message schedule words, got {len(ws)}")

    regs = (a, b, c, d, e, f, g, h)
    for w, k in zip(ws, K_VALUES):
        regs = compression(*regs, w, k)

    return regs


def compress(state: MutableSequence[int], block: Sequence[int]) -> None:
    """Fold one 64-byte block into the 8-word hash `state`, in place.

    The working registers produced by `compress64` are added back into the
    state word by word modulo 2**32.
    """
    if len(state) != 8:
        raise ValueError(f"Hash state must hold 8 words, got {len(state)}")

    ws = build_message_schedule(block)
    work_out = compress64(*state, ws)

    for i, word in enumerate(work_out):
        state[i] = (state[i] + word) & MASK32
