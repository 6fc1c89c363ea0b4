"""
Position-Length codec.

Stream layout:
    length(u16) then, per maximal 1-run in increasing start order,
    start(u16) runlen(u8)
Gaps between runs are implicitly 0. Run lengths are not escaped, so a single
1-run longer than 255 bits cannot be represented.
"""
from bitpack import BitReader, BitWriter
from errors import CorruptStream, LengthOverflow, RunLengthOverflow
from framing import LENGTH_BITS, MAX_LENGTH, RUN_BITS, RUN_MAX, START_BITS, read_field, write_run

NAME = "position-length"


def _emit(sink: BitWriter, start: int, run: int):
    if run > RUN_MAX:
        raise RunLengthOverflow(
            f"1-run of {run} bits at offset {start} exceeds the {RUN_BITS}-bit run field (max {RUN_MAX})"
        )
    sink.write_uint(start, START_BITS)
    sink.write_uint(run, RUN_BITS)


def encode(source: BitReader, sink: BitWriter) -> int:
    """Compress every remaining bit of source into sink; returns bits consumed."""
    n = source.remaining()
    if n > MAX_LENGTH:
        raise LengthOverflow(f"{n} bits exceed the {LENGTH_BITS}-bit length field (max {MAX_LENGTH})")
    sink.write_uint(n, LENGTH_BITS)

    run = 0
    start = 0
    for i in range(n):
        if source.read_bit():
            if run == 0:
                start = i
            run += 1
        elif run > 0:
            _emit(sink, start, run)
            run = 0
    if run > 0:
        _emit(sink, start, run)
    return n


def decode(source: BitReader, sink: BitWriter) -> int:
    """Expand a Position-Length stream into sink; returns bits written."""
    length = read_field(source, LENGTH_BITS, "length")
    pos = 0
    while not source.is_exhausted():
        start = read_field(source, START_BITS, "run start")
        run = read_field(source, RUN_BITS, "run length")
        if start < pos:
            raise CorruptStream(f"Malformed stream: run start {start} precedes cursor {pos}")
        if start + run > length:
            raise CorruptStream(
                f"Malformed stream: run [{start}, {start + run}) extends past length {length}"
            )
        write_run(sink, 0, start - pos)
        write_run(sink, 1, run)
        pos = start + run
    write_run(sink, 0, length - pos)
    return length
