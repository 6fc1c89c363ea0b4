from bitpack import BitReader, BitWriter
from errors import EndOfInput, TruncatedStream

# Field widths shared by both wire formats (all unsigned, MSB-first)
LENGTH_BITS = 16    # total bit count (Position-Length header)
START_BITS = 16     # 1-run start offset (Position-Length)
RUN_BITS = 8        # run length field (both strategies)

MAX_LENGTH = (1 << LENGTH_BITS) - 1
RUN_MAX = (1 << RUN_BITS) - 1


def field_capacity(width: int) -> int:
    return (1 << width) - 1


def write_escaped(sink: BitWriter, n: int, width: int = RUN_BITS):
    """
    Write run length n into alternating run fields of 'width' bits.
    While n exceeds the field capacity, emit a full field followed by a zero
    field for the opposite bit value, so a decoder that strictly alternates
    zero-runs and one-runs reassembles the run without detecting escapes.
    """
    cap = field_capacity(width)
    if n < 0:
        raise ValueError(f"run length must be non-negative: {n}")
    while n > cap:
        sink.write_uint(cap, width)
        sink.write_uint(0, width)
        n -= cap
    sink.write_uint(n, width)


def read_field(source: BitReader, width: int, what: str) -> int:
    try:
        return source.read_uint(width)
    except EndOfInput as e:
        raise TruncatedStream(f"Malformed stream: {what} field truncated ({e})") from e


def write_run(sink: BitWriter, bit: int, n: int):
    for _ in range(n):
        sink.write_bit(bit)
