import pytest

from compress import (
    K_VALUES,
    MASK32,
    big_sigma0,
    big_sigma1,
    build_message_schedule,
    ch,
    compress,
    compress64,
    compression,
    maj,
    rotr,
    small_sigma0,
    small_sigma1,
)
from sha256 import initial_state, pad_message


# Single padded block for the message "abc" (FIPS 180-4 example).
ABC_BLOCK = pad_message(b"abc")

# Working registers after round 0 and round 63 of the "abc" block, as listed
# in the FIPS 180-2 appendix B.1 walkthrough.
ABC_ROUND_0 = (
    0x5D6AEBCD,
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xFA2A4622,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
)
ABC_ROUND_63 = (
    0x506E3058,
    0xD39A2165,
    0x04D24D6C,
    0xB85E2CE9,
    0x5EF50F24,
    0xFB121210,
    0x948D25B6,
    0x961F4894,
)


def test_round_constants_table():
    assert len(K_VALUES) == 64
    assert K_VALUES[0] == 0x428A2F98
    assert K_VALUES[63] == 0xC67178F2
    assert all(0 <= k <= MASK32 for k in K_VALUES)


@pytest.mark.parametrize(
    "x,n,expected",
    [
        (0x00000001, 1, 0x80000000),
        (0x12345678, 8, 0x78123456),
        (0x80000000, 31, 0x00000001),
        (0xFFFFFFFF, 13, 0xFFFFFFFF),
    ],
)
def test_rotr(x, n, expected):
    assert rotr(x, n) == expected


def test_choice_and_majority():
    y, z = 0x12345678, 0x9ABCDEF0
    assert ch(MASK32, y, z) == y
    assert ch(0, y, z) == z
    assert ch(0xFFFF0000, y, z) == (y & 0xFFFF0000) | (z & 0x0000FFFF)

    assert maj(y, y, z) == y
    assert maj(z, y, z) == z
    assert maj(0, 0, MASK32) == 0


def test_sigma_functions_stay_within_32_bits():
    for x in (0, 1, 0x18, 0x61626380, MASK32):
        for fn in (small_sigma0, small_sigma1, big_sigma0, big_sigma1):
            assert 0 <= fn(x) <= MASK32


def test_small_sigma1_known_value():
    # w[17] of the "abc" block reduces to σ1(0x18).
    assert small_sigma1(0x18) == 0x000F0000


def test_message_schedule_for_abc_block():
    w = build_message_schedule(ABC_BLOCK)

    assert len(w) == 64
    assert w[0] == 0x61626380
    assert w[1:15] == [0] * 14
    assert w[15] == 0x00000018
    assert w[16] == 0x61626380
    assert w[17] == 0x000F0000
    assert all(0 <= word <= MASK32 for word in w)


@pytest.mark.parametrize("size", [0, 63, 65, 128])
def test_message_schedule_rejects_wrong_block_size(size):
    with pytest.raises(ValueError):
        build_message_schedule(bytes(size))


def test_first_round_matches_fips_walkthrough():
    w = build_message_schedule(ABC_BLOCK)
    state = initial_state()

    assert compression(*state, w[0], K_VALUES[0]) == ABC_ROUND_0


def test_compression_shifts_registers():
    regs = (1, 2, 3, 4, 5, 6, 7, 8)
    a, b, c, d, e, f, g, h = compression(*regs, 0x67452301, K_VALUES[5])

    assert (b, c, d) == (1, 2, 3)
    assert (f, g, h) == (5, 6, 7)


def test_compress64_matches_fips_walkthrough():
    w = build_message_schedule(ABC_BLOCK)

    assert compress64(*initial_state(), w) == ABC_ROUND_63


def test_compress64_rejects_short_schedule():
    with pytest.raises(ValueError):
        compress64(*initial_state(), [0] * 63)


def test_compress_updates_state_in_place():
    state = initial_state()
    original = list(state)

    result = compress(state, ABC_BLOCK)

    assert result is None
    expected = [(h + r) & MASK32 for h, r in zip(original, ABC_ROUND_63)]
    assert state == expected
    assert b"".join(word.to_bytes(4, "big") for word in state).hex() == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_compress_accepts_memoryview_block():
    state_from_bytes = initial_state()
    state_from_view = initial_state()

    compress(state_from_bytes, ABC_BLOCK)
    compress(state_from_view, memoryview(ABC_BLOCK))

    assert state_from_bytes == state_from_view


def test_compress_rejects_bad_state():
    with pytest.raises(ValueError):
        compress([0] * 7, ABC_BLOCK)
