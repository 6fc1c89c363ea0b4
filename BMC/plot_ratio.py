import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np


def plot_ratios(rows, path="results/fig_ratio.png"):
    sizes = list(dict.fromkeys(r["size"] for r in rows))
    strategies = list(dict.fromkeys(r["strategy"] for r in rows))
    x = np.arange(len(sizes))
    width = 0.8 / max(1, len(strategies))

    plt.figure(figsize=(6, 3))
    for i, s in enumerate(strategies):
        # skipped rows plot as an empty bar
        ratios = [next((r["ratio"] or 0.0 for r in rows if r["size"] == sz and r["strategy"] == s), 0.0)
                  for sz in sizes]
        plt.bar(x + i * width, ratios, width, label=s.lower().replace("_", "-"))
    plt.xticks(x + width * (len(strategies) - 1) / 2, sizes)
    plt.ylabel("compressed / original bits")
    plt.legend(fontsize=8)
    plt.tight_layout()

    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    plt.savefig(path, dpi=150)
    plt.close()
    return path
