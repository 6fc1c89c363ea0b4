import argparse

import numpy as np

from codec_core import Strategy, compress, compression_ratio, expand
from errors import CodecError
from phantom import generate_bitmap_phantom, image_to_bits

SIZES = [(48, 32), (96, 64), (192, 128)]


def run_benchmark(sizes=SIZES, noise=0.0, seed=0):
    """
    Compress one phantom per size with both strategies.
    Returns one row per (size, strategy).
    """
    rows = []
    for h, w in sizes:
        bits = image_to_bits(generate_bitmap_phantom(height=h, width=w, seed=seed, noise=noise))
        for strategy in Strategy:
            row = dict(size=f"{w}x{h}", strategy=strategy.name, bits_in=int(bits.size))
            try:
                data = compress(bits, strategy)
            except CodecError as e:
                row.update(bits_out=None, ratio=None, skipped=type(e).__name__)
                rows.append(row)
                continue
            if not np.array_equal(expand(data, strategy), bits):
                raise RuntimeError(f"round-trip mismatch: {strategy.name} {w}x{h}")
            row.update(bits_out=8 * len(data), ratio=compression_ratio(bits.size, len(data)), skipped=None)
            rows.append(row)
    return rows


def format_rows(rows) -> str:
    lines = [f"{'size':>9} {'strategy':<24} {'bits_in':>8} {'bits_out':>8} {'ratio':>7}"]
    for r in rows:
        if r["skipped"]:
            lines.append(f"{r['size']:>9} {r['strategy']:<24} {r['bits_in']:>8} {'-':>8} {r['skipped']}")
        else:
            lines.append(f"{r['size']:>9} {r['strategy']:<24} {r['bits_in']:>8} {r['bits_out']:>8} {r['ratio']:>7.3f}")
    return "\n".join(lines)


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--noise", type=float, default=0.0, help="pixel flip probability")
    ap.add_argument("--seed", type=int, default=0)
    ap.add_argument("--plot", help="save a bar chart of the ratios to this path")
    args = ap.parse_args(argv)

    rows = run_benchmark(noise=args.noise, seed=args.seed)
    print(format_rows(rows))
    if args.plot:
        from plot_ratio import plot_ratios
        plot_ratios(rows, args.plot)
        print(f"[bench] wrote {args.plot}")
    return 0


if __name__ == "__main__":
    main()
