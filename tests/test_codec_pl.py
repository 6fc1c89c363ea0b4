import numpy as np
import pytest

from codec_core import Strategy, compress, expand
from errors import CorruptStream, EndOfInput, LengthOverflow, RunLengthOverflow, TruncatedStream

PL = Strategy.POSITION_LENGTH


def bits_of(s: str) -> np.ndarray:
    return np.array([int(c) for c in s], dtype=np.uint8)


def test_encode_example():
    """00001111 -> length 8, then (start=4, length=4)."""
    assert compress(bits_of("00001111"), PL) == bytes([0, 8, 0, 4, 4])


def test_encode_multiple_runs_in_start_order():
    data = compress(bits_of("1100010111"), PL)
    assert data == bytes([0, 10,
                          0, 0, 2,
                          0, 5, 1,
                          0, 7, 3])


def test_empty_roundtrip():
    data = compress([], PL)
    assert data == bytes([0, 0])
    assert expand(data, PL).size == 0


def test_all_zeros_has_no_pairs():
    data = compress(np.zeros(1000, dtype=np.uint8), PL)
    assert data == bytes([0x03, 0xE8])
    assert np.array_equal(expand(data, PL), np.zeros(1000, dtype=np.uint8))


def test_roundtrip_unaligned_and_random():
    rng = np.random.default_rng(7)
    for n in (1, 7, 9, 333, 4096):
        bits = (rng.random(n) < 0.3).astype(np.uint8)
        assert np.array_equal(expand(compress(bits, PL), PL), bits)


def test_trailing_one_run_is_kept():
    bits = bits_of("0011")
    assert np.array_equal(expand(compress(bits, PL), PL), bits)


def test_run_of_255_fits():
    bits = np.ones(255, dtype=np.uint8)
    assert np.array_equal(expand(compress(bits, PL), PL), bits)


def test_run_length_overflow():
    bits = np.concatenate([np.zeros(3, dtype=np.uint8), np.ones(256, dtype=np.uint8)])
    with pytest.raises(RunLengthOverflow, match="256 bits at offset 3"):
        compress(bits, PL)


def test_length_overflow():
    with pytest.raises(LengthOverflow):
        compress(np.zeros(65536, dtype=np.uint8), PL)


def test_max_length_is_accepted():
    bits = np.zeros(65535, dtype=np.uint8)
    bits[-1] = 1
    data = compress(bits, PL)
    assert data == bytes([0xFF, 0xFF, 0xFF, 0xFE, 1])
    assert np.array_equal(expand(data, PL), bits)


def test_truncated_stream_detected():
    data = compress(bits_of("0110011100"), PL)
    with pytest.raises(TruncatedStream):
        expand(data[:-1], PL)
    with pytest.raises(EndOfInput):
        expand(data[:1], PL)


def test_out_of_order_runs_are_corrupt():
    # second run starts inside the first
    data = bytes([0, 10, 0, 2, 3, 0, 3, 1])
    with pytest.raises(CorruptStream, match="precedes cursor"):
        expand(data, PL)


def test_run_past_declared_length_is_corrupt():
    data = bytes([0, 4, 0, 2, 5])
    with pytest.raises(CorruptStream, match="extends past length 4"):
        expand(data, PL)
