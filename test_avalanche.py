import pytest
import yaml

from avalanche import DIGEST_BITS, flip_bit, hamming_distance, main, run_avalanche


def test_flip_bit_msb_first():
    assert flip_bit(b"\x00\x00", 0) == b"\x80\x00"
    assert flip_bit(b"\x00\x00", 15) == b"\x00\x01"
    assert flip_bit(flip_bit(b"abc", 9), 9) == b"abc"


def test_flip_bit_out_of_range():
    with pytest.raises(ValueError):
        flip_bit(b"a", 8)


def test_hamming_distance():
    assert hamming_distance(b"\x00", b"\xff") == 8
    assert hamming_distance(b"abc", b"abc") == 0
    with pytest.raises(ValueError):
        hamming_distance(b"a", b"ab")


def test_average_flip_is_about_half_the_output():
    report = run_avalanche(samples=100, length=32, seed=7)

    assert report["samples"] == 100
    assert 0 < report["min_flipped_bits"] <= report["max_flipped_bits"] < DIGEST_BITS
    assert 112 <= report["mean_flipped_bits"] <= 144


def test_run_is_reproducible_for_a_seed():
    assert run_avalanche(20, 16, seed=3) == run_avalanche(20, 16, seed=3)


def test_rejects_bad_parameters():
    with pytest.raises(ValueError):
        run_avalanche(0, 16, seed=0)
    with pytest.raises(ValueError):
        run_avalanche(10, 0, seed=0)


def test_main_writes_yaml_report(tmp_path, capsys):
    output = tmp_path / "report.yaml"

    assert main(["--samples", "50", "--length", "8", "--output", str(output)]) == 0
    assert "[OK]" in capsys.readouterr().out

    report = yaml.safe_load(output.read_text())
    assert report["samples"] == 50
    assert report["message_length_bytes"] == 8
    assert report["passed"] is True


def test_main_fails_outside_band(capsys):
    assert main(["--samples", "10", "--low", "250", "--high", "256"]) == 1
    assert "[FAIL]" in capsys.readouterr().out


def test_entry_point_is_documented():
    assert main.__doc__
