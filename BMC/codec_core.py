from enum import Enum
from typing import Callable, Dict, NamedTuple

import numpy as np

import codec_arl
import codec_pl
from bitpack import BitReader, BitWriter, reader_from_bits, unpack_bits


class Strategy(Enum):
    POSITION_LENGTH = 0
    ALTERNATING_RUN_LENGTH = 1

    @classmethod
    def parse(cls, value) -> "Strategy":
        if isinstance(value, cls):
            return value
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise ValueError(f"Unknown strategy: {value!r} (expected 0 or 1)") from None


class BitCodec(NamedTuple):
    """encode/decode pair; both read a BitReader and write a BitWriter."""
    name: str
    encode: Callable[[BitReader, BitWriter], int]
    decode: Callable[[BitReader, BitWriter], int]


CODECS: Dict[Strategy, BitCodec] = {
    Strategy.POSITION_LENGTH: BitCodec(codec_pl.NAME, codec_pl.encode, codec_pl.decode),
    Strategy.ALTERNATING_RUN_LENGTH: BitCodec(codec_arl.NAME, codec_arl.encode, codec_arl.decode),
}


def get_codec(strategy) -> BitCodec:
    return CODECS[Strategy.parse(strategy)]


def compress(bits, strategy) -> bytes:
    """
    bits: array-like of 0/1 (any length)
    Returns the encoded byte stream.
    """
    codec = get_codec(strategy)
    src = reader_from_bits(bits)
    with BitWriter() as bw:
        codec.encode(src, bw)
    return bw.getvalue()


def expand(data: bytes, strategy) -> np.ndarray:
    """
    Returns the decoded bits as a flat uint8 0/1 array.
    """
    codec = get_codec(strategy)
    with BitWriter() as bw:
        n = codec.decode(BitReader(data), bw)
    return unpack_bits(bw.getvalue(), n)


def compression_ratio(nbits_in: int, nbytes_out: int):
    """Encoded bits per input bit; None when there is no input."""
    if nbits_in == 0:
        return None
    return (8 * nbytes_out) / nbits_in
