"""SHA-256 digest engine built on `compress` from `compress.py`.

This module provides:

- `digest(message, length=None) -> bytes`: the 32-byte SHA-256 digest of the
  first `length` bytes of `message`.
- `sha256(data)` / `hexdigest(data)`: convenience wrappers over `digest`.
- The padding and serialization steps (`final_blocks`, `pad_message`,
  `split_into_blocks`, `finalize_digest`) as standalone helpers.

A computation has two phases. While at least 64 unprocessed bytes remain, the
engine absorbs full blocks straight from the input. The remaining 0..63 bytes
are then finalized: a 0x80 byte, zero bytes up to offset 56 and the message
length in bits as a 64-bit big-endian integer. When the 0x80 byte lands past
offset 56 the length field no longer fits, so the padding spills into a second
block.

Messages whose bit length does not fit the 64-bit length field (more than
`MAX_MESSAGE_BYTES` bytes) are rejected with `ValueError`.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, Union

from compress import BLOCK_SIZE, MASK32, compress


DIGEST_SIZE = 32

# Offset of the 64-bit length field inside the final block.
LENGTH_OFFSET = BLOCK_SIZE - 8

MAX_MESSAGE_BYTES = (2**64 - 1) // 8

# First 32 bits of the fractional parts of the square roots of the first 8
# primes 2..19 (FIPS 180-4, section 5.3.3).
_H0: Tuple[int, ...] = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)

Message = Union[bytes, bytearray, memoryview, Sequence[int]]


def initial_state() -> List[int]:
    """Return a fresh, caller-owned copy of the initial hash state."""
    return list(_H0)


def _as_view(message: Message, length: Optional[int]) -> memoryview:
    """Return a byte view over the first `length` bytes of `message`."""
    if isinstance(message, (bytes, bytearray, memoryview)):
        view = memoryview(message)
        if not view.c_contiguous:
            view = memoryview(view.tobytes())
        view = view.cast("B")
    else:
        view = memoryview(bytes(message))

    if length is None:
        length = len(view)
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    if length > len(view):
        raise ValueError(f"length {length} exceeds the {len(view)} bytes available in message")
    if length > MAX_MESSAGE_BYTES:
        raise ValueError(
            f"message of {length} bytes exceeds the SHA-256 limit of {MAX_MESSAGE_BYTES} bytes"
        )

    return view[:length]


def final_blocks(tail: Sequence[int], length: int) -> List[bytes]:
    """Build the padding block(s) that close a message.

    `tail` holds the last ``length % 64`` message bytes (0..63 of them) and
    `length` is the full message length in bytes. Returns one block when the
    0x80 marker leaves room for the length field, otherwise two.
    """
    if len(tail) >= BLOCK_SIZE:
        raise ValueError(f"tail must be shorter than {BLOCK_SIZE} bytes, got {len(tail)}")
    if len(tail) != length % BLOCK_SIZE:
        raise ValueError(
            f"tail of {len(tail)} bytes does not match a {length}-byte message"
        )

    length_field = (length * 8).to_bytes(8, byteorder="big")

    block = bytearray(tail)
    block.append(0x80)

    if len(block) <= LENGTH_OFFSET:
        block.extend(bytes(LENGTH_OFFSET - len(block)))
        block.extend(length_field)
        return [bytes(block)]

    block.extend(bytes(BLOCK_SIZE - len(block)))
    return [bytes(block), bytes(LENGTH_OFFSET) + length_field]


def pad_message(message: Message, length: Optional[int] = None) -> bytes:
    """Return the fully padded message; its length is a multiple of 64."""
    view = _as_view(message, length)
    full = len(view) - len(view) % BLOCK_SIZE
    return bytes(view[:full]) + b"".join(final_blocks(view[full:], len(view)))


def split_into_blocks(padded: Sequence[int]) -> List[bytes]:
    """Split a padded message into 64-byte blocks."""
    if len(padded) % BLOCK_SIZE != 0:
        raise ValueError(
            f"Padded message length must be a multiple of {BLOCK_SIZE} bytes, got {len(padded)}"
        )

    data = bytes(padded)
    return [data[i : i + BLOCK_SIZE] for i in range(0, len(data), BLOCK_SIZE)]


def finalize_digest(state: Sequence[int]) -> bytes:
    """Serialize an 8-word hash state into the 32-byte digest."""
    if len(state) != 8:
        raise ValueError(f"Hash state must hold 8 words, got {len(state)}")
    return b"".join((word & MASK32).to_bytes(4, byteorder="big") for word in state)


def digest(message: Message, length: Optional[int] = None) -> bytes:
    """Compute the SHA-256 digest of the first `length` bytes of `message`.

    `length` defaults to the whole buffer. The hash state, blocks and
    schedules are private to this call.
    """
    view = _as_view(message, length)
    state = initial_state()

    # Absorb every full block.
    offset = 0
    while len(view) - offset >= BLOCK_SIZE:
        compress(state, view[offset : offset + BLOCK_SIZE])
        offset += BLOCK_SIZE

    # Finalize the 0..63 byte remainder.
    for block in final_blocks(view[offset:], len(view)):
        compress(state, block)

    return finalize_digest(state)


def sha256(data: Message) -> bytes:
    """Compute the SHA-256 digest of all of `data`."""
    return digest(data)


def hexdigest(data: Message) -> str:
    """Return the SHA-256 digest of `data` as 64 lowercase hex characters."""
    return digest(data).hex()
