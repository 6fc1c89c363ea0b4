import argparse
import sys

from bitpack import unpack_bits


def dump_bits(data: bytes, width: int = 16) -> str:
    """
    Bits of data as '0'/'1' text, 'width' per line, then a bit count line.
    width == 0 prints only the count.
    """
    bits = unpack_bits(data)
    lines = []
    if width > 0:
        chars = "".join("1" if b else "0" for b in bits)
        lines = [chars[i:i + width] for i in range(0, len(chars), width)]
    lines.append(f"{bits.size} bits")
    return "\n".join(lines)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Print the bits of a binary file.")
    ap.add_argument("width", nargs="?", type=int, default=16, help="bits per line (0 = count only)")
    ap.add_argument("--input", help="input file (default: stdin)")
    args = ap.parse_args(argv)
    if args.width < 0:
        ap.error("width must be >= 0")

    if args.input is None:
        data = sys.stdin.buffer.read()
    else:
        with open(args.input, "rb") as f:
            data = f.read()
    print(dump_bits(data, args.width))
    return 0


if __name__ == "__main__":
    sys.exit(main())
