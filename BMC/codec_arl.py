"""
Alternating Run-Length codec.

Stream layout: u8 run lengths alternating zero-run, one-run, zero-run, ...
always starting with a (possibly empty) zero-run. There is no length header;
the decoder stops when the stream is exhausted, and a stream may end right
after a zero-run field. Runs longer than 255 are split by the escape chain in
framing.write_escaped.
"""
from bitpack import BitReader, BitWriter
from framing import RUN_BITS, read_field, write_escaped, write_run

NAME = "alternating-run-length"


def encode(source: BitReader, sink: BitWriter) -> int:
    """Compress every remaining bit of source into sink; returns bits consumed."""
    n = 0
    value = 0   # bit value of the run being counted
    run = 0
    while not source.is_exhausted():
        bit = source.read_bit()
        n += 1
        if bit == value:
            run += 1
        else:
            write_escaped(sink, run, RUN_BITS)
            value = bit
            run = 1
    # input ending inside a zero-run leaves no trailing one-run field
    if n:
        write_escaped(sink, run, RUN_BITS)
    return n


def decode(source: BitReader, sink: BitWriter) -> int:
    """Expand an alternating run stream into sink; returns bits written."""
    n = 0
    while not source.is_exhausted():
        zeros = read_field(source, RUN_BITS, "zero-run")
        write_run(sink, 0, zeros)
        n += zeros
        if source.is_exhausted():
            break
        ones = read_field(source, RUN_BITS, "one-run")
        write_run(sink, 1, ones)
        n += ones
    return n
