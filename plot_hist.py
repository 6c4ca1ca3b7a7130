# plot_hist.py — folded-histogram views: matplotlib plot or ASCII bars
from __future__ import annotations
from typing import List, Optional
import numpy as np

def ascii_window(hist: np.ndarray, start: int, width: int, bins: int = 30, bar_width: int = 60) -> List[str]:
    """Rebin [start, start+width) into `bins` rows and draw one '#' bar per row."""
    seg = np.asarray(hist[start:start + width], dtype=np.int64)
    edges = np.linspace(0, seg.size, bins + 1).astype(int)
    counts = np.add.reduceat(seg, edges[:-1]) if seg.size else np.zeros(bins, dtype=np.int64)
    # reduceat repeats a value when two edges coincide; empty rows count zero
    counts = np.where(np.diff(edges) > 0, counts, 0)
    peak = counts.max() if counts.size and counts.max() > 0 else 1
    lines = []
    for i, c in enumerate(counts):
        lo = start + edges[i]; hi = start + edges[i + 1]
        bar = "#" * int(round(bar_width * (c / peak)))
        lines.append(f"[{lo:6d},{hi:6d})  {int(c):7d}  {bar}")
    return lines

def plot_histogram(hist: np.ndarray, start: int, width: int, title: str = "", out: Optional[str] = None):
    """Full-period histogram with the analysis window and its thirds shaded."""
    import matplotlib
    if out:
        matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    part = width // 3
    x = np.arange(hist.size)
    fig, (ax_full, ax_win) = plt.subplots(2, 1, figsize=(8.0, 6.0))
    ax_full.plot(x, hist, lw=0.6)
    ax_full.axvspan(start, start + width, color="tab:orange", alpha=0.25)
    ax_full.set_xlim(0, hist.size)
    ax_full.set_xlabel("Time in period (ps)"); ax_full.set_ylabel("Counts")
    ax_full.set_title(title or "Folded arrival-time histogram")

    xs = x[start:start + width]
    ax_win.bar(xs, hist[start:start + width], width=1.0, align="edge")
    for lo, hi, name, col in ((start, start + part, "C1", "tab:gray"),
                              (start + part, start + 2 * part, "D1", "tab:green"),
                              (start + 2 * part, start + width, "C2", "tab:gray")):
        ax_win.axvspan(lo, hi, color=col, alpha=0.15)
        ax_win.text(0.5 * (lo + hi), 1.0, name, ha="center", va="bottom",
                    transform=ax_win.get_xaxis_transform())
    ax_win.set_xlim(start, start + width)
    ax_win.set_xlabel("Time in period (ps)"); ax_win.set_ylabel("Counts")
    fig.tight_layout()
    if out:
        fig.savefig(out, dpi=150)
        plt.close(fig)
    else:
        plt.show()
