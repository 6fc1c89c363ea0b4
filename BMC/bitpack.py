from typing import Optional

import numpy as np

from errors import EndOfInput

MAX_UINT_BITS = 32


class BitWriter:
    """
    MSB-first bit sink. Bits accumulate in memory; finish() pads the last
    partial byte with zeros and, when a binary stream was given, writes the
    bytes to it. Used as a context manager it is finished exactly once on exit.
    """

    def __init__(self, stream=None):
        self._stream = stream
        self._buf = bytearray()
        self._cur = 0
        self._nbits = 0  # bits currently in _cur (0..7)
        self._total = 0
        self._out: Optional[bytes] = None

    @property
    def nbits_written(self) -> int:
        return self._total

    @property
    def closed(self) -> bool:
        return self._out is not None

    def write_bit(self, bit: int):
        if self._out is not None:
            raise ValueError("BitWriter already finished")
        self._cur = (self._cur << 1) | (1 if bit else 0)
        self._nbits += 1
        self._total += 1
        if self._nbits == 8:
            self._buf.append(self._cur)
            self._cur = 0
            self._nbits = 0

    def write_uint(self, value: int, width: int):
        """Write 'width' bits of value (MSB-first)."""
        if not (1 <= width <= MAX_UINT_BITS):
            raise ValueError(f"field width out of range (1..{MAX_UINT_BITS}): {width}")
        value = int(value)
        if not (0 <= value < (1 << width)):
            raise ValueError(f"value {value} does not fit in {width} bits")
        for i in range(width - 1, -1, -1):
            self.write_bit((value >> i) & 1)

    def finish(self) -> bytes:
        """Pad remaining bits with zeros."""
        if self._out is not None:
            return self._out
        if self._nbits > 0:
            self._buf.append(self._cur << (8 - self._nbits))
            self._cur = 0
            self._nbits = 0
        self._out = bytes(self._buf)
        if self._stream is not None:
            self._stream.write(self._out)
            self._stream.flush()
        return self._out

    finalize = finish

    def getvalue(self) -> bytes:
        return self.finish()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.finish()
        return False


class BitReader:
    """
    MSB-first bit source over a byte buffer. nbits caps the readable bits so
    a sequence that does not end on a byte boundary is read back exactly.
    """

    def __init__(self, data: bytes, nbits: Optional[int] = None):
        self.data = bytes(data)
        limit = 8 * len(self.data)
        if nbits is None:
            nbits = limit
        if not (0 <= nbits <= limit):
            raise ValueError(f"nbits out of range (0..{limit}): {nbits}")
        self.nbits = nbits
        self.pos = 0

    def remaining(self) -> int:
        return self.nbits - self.pos

    def is_exhausted(self) -> bool:
        return self.pos >= self.nbits

    def read_bit(self) -> int:
        if self.pos >= self.nbits:
            raise EndOfInput("Unexpected end of bitstream")
        i, bit = divmod(self.pos, 8)
        self.pos += 1
        return (self.data[i] >> (7 - bit)) & 1

    def read_uint(self, width: int) -> int:
        if not (1 <= width <= MAX_UINT_BITS):
            raise ValueError(f"field width out of range (1..{MAX_UINT_BITS}): {width}")
        if self.remaining() < width:
            raise EndOfInput(
                f"Unexpected end of bitstream: need {width} bits, {self.remaining()} left"
            )
        value = 0
        for _ in range(width):
            value = (value << 1) | self.read_bit()
        return value

    def __iter__(self):
        while not self.is_exhausted():
            yield self.read_bit()


def as_bits(bits) -> np.ndarray:
    """Flat uint8 0/1 view of any array-like of bits; rejects other values."""
    b = np.asarray(bits).ravel()
    if b.dtype == np.bool_:
        return b.astype(np.uint8)
    if b.size and not np.all((b == 0) | (b == 1)):
        raise ValueError("bit array must contain only 0 and 1")
    return b.astype(np.uint8)


def pack_bits(bits01) -> bytes:
    """
    Pack a flat uint8 array of 0/1 into bytes (MSB-first).
    """
    b = as_bits(bits01)
    return np.packbits(b, bitorder="big").tobytes()


def unpack_bits(data: bytes, nbits: Optional[int] = None) -> np.ndarray:
    """
    Unpack bytes -> uint8 0/1 array length nbits (MSB-first).
    """
    buf = np.frombuffer(bytes(data), dtype=np.uint8)
    if nbits is None:
        nbits = buf.size * 8
    if nbits > buf.size * 8:
        raise ValueError(f"Malformed stream: {nbits} bits requested from {len(data)} bytes")
    return np.unpackbits(buf, bitorder="big")[:nbits].astype(np.uint8)


def reader_from_bits(bits) -> BitReader:
    b = as_bits(bits)
    return BitReader(pack_bits(b), nbits=int(b.size))
