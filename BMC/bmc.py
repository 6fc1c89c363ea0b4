import argparse
import sys

from bitpack import BitReader, BitWriter
from codec_core import Strategy, compression_ratio, get_codec
from errors import CodecError

MODES = {"-": "compress", "+": "expand"}


def build_parser():
    ap = argparse.ArgumentParser(
        prog="bmc",
        description="Compress (-) or expand (+) a binary bitmap.",
    )
    ap.add_argument("mode", choices=sorted(MODES), help="'-' = compress, '+' = expand")
    ap.add_argument("strategy", choices=["0", "1"],
                    help="0 = position-length, 1 = alternating run-length")
    ap.add_argument("--input", help="input file (default: stdin)")
    ap.add_argument("--output", help="output file (default: stdout)")
    ap.add_argument("--quiet", action="store_true", help="no report on stderr")
    return ap


def _read_input(path):
    if path is None:
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def run(mode: str, strategy, data: bytes, out) -> dict:
    """Run one pass over data, writing the result to the binary stream out."""
    codec = get_codec(strategy)
    src = BitReader(data)
    with BitWriter(out) as bw:
        if mode == "-":
            nin = codec.encode(src, bw)
        else:
            nin = 8 * len(data)
            codec.decode(src, bw)
    return dict(mode=MODES[mode], codec=codec.name, bits_in=nin, bits_out=bw.nbits_written,
                bytes_out=len(bw.getvalue()))


def main(argv=None):
    args = build_parser().parse_args(argv)
    data = _read_input(args.input)
    strategy = Strategy.parse(args.strategy)

    try:
        if args.output is None:
            stats = run(args.mode, strategy, data, sys.stdout.buffer)
        else:
            with open(args.output, "wb") as f:
                stats = run(args.mode, strategy, data, f)
    except CodecError as e:
        print(f"[bmc] error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        tag = stats["mode"]
        print(f"[{tag}] {stats['codec']}: {stats['bits_in']} bits -> {stats['bits_out']} bits", file=sys.stderr)
        ratio = compression_ratio(stats["bits_in"], stats["bytes_out"])
        if tag == "compress" and ratio is not None:
            print(f"[{tag}] ratio={ratio:.3f}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
