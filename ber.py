# ber.py — C1 | D1 | C2 partition of the densest window, BER / visibility, guard-band sweep
#
# The window found by histogram.find_densest_window is split in three equal parts:
#   C1 = [start, start+w/3)   D1 = [start+w/3, start+2w/3)   C2 = the rest
#
# Guard band g (ps): inside every slot (1 ns by default) the first g//2 and the
# last g//2 picoseconds are dropped from the sums. Two bins are special:
#   - absolute bin 0 only loses the trailing g//2 of its slot
#   - the last bin of the window only loses the leading g//2 of its slot
#
# Metrics (same convention with and without guard band):
#   BER        = D1 / (C1 + D1 + C2)
#   Visibility = (C1 + C2) / D1
# Zero denominators give nan / inf instead of raising.

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np

from config import BerConfig
from histogram import find_densest_window

def guard_band_mask(start: int, width: int, guard_band: int, slot: int) -> np.ndarray:
    """Boolean mask over [start, start+width): True where the bin is counted."""
    idx = np.arange(start, start + width)
    pos = idx % slot
    half = guard_band // 2
    lead = pos < half
    trail = pos >= slot - half
    excluded = lead | trail
    # specific edges first, general rule everywhere else
    excluded = np.where(idx == 0, trail, excluded)
    excluded[-1] = lead[-1]
    return ~excluded

def partition_sums(
    hist: np.ndarray, start: int, width: int, guard_band: int = 0, slot: int = 1000
) -> Tuple[int, int, int]:
    """Return (C1, D1, C2). Remainder bins of width % 3 go to C2."""
    hist = np.asarray(hist)
    if width < 3:
        raise ValueError("partition_sums: width must be >= 3.")
    if start < 0 or start + width > hist.size:
        raise ValueError(f"partition_sums: window [{start}, {start + width}) outside histogram of {hist.size} bins.")
    if guard_band < 0:
        raise ValueError("partition_sums: guard_band must be >= 0.")
    if slot <= 0:
        raise ValueError("partition_sums: slot must be > 0.")

    counts = hist[start:start + width].astype(np.int64)
    if guard_band > 0:
        counts = np.where(guard_band_mask(start, width, guard_band, slot), counts, 0)
    part = width // 3
    c1 = int(counts[:part].sum())
    d1 = int(counts[part:2 * part].sum())
    c2 = int(counts[2 * part:].sum())
    return c1, d1, c2

def compute_metrics(c1: int, d1: int, c2: int) -> Tuple[float, float]:
    """(BER, visibility); non-finite when a denominator is zero."""
    total = np.float64(c1 + d1 + c2)
    with np.errstate(divide="ignore", invalid="ignore"):
        ber = np.float64(d1) / total
        vis = np.float64(c1 + c2) / np.float64(d1)
    return float(ber), float(vis)

def is_degenerate(ber: float, vis: float) -> bool:
    return not (np.isfinite(ber) and np.isfinite(vis))


@dataclass
class SweepResult:
    widths: np.ndarray
    bers: np.ndarray
    visibilities: np.ndarray
    best_ber_gb: Optional[int]
    best_ber: float
    best_vis_gb: Optional[int]
    best_vis: float

def sweep_guard_band(
    hist: np.ndarray,
    start: int,
    width: int,
    gb_min: int,
    gb_max: int,
    gb_step: int = 1,
    slot: int = 1000,
) -> SweepResult:
    """
    Recompute the guard-banded metrics for g = gb_min, gb_min+step, ... <= gb_max.
    Keeps the g with the lowest BER and, separately, the g with the highest
    visibility. Strict comparisons: the first g reaching a value keeps it, nan never wins.
    """
    if gb_step <= 0:
        raise ValueError("sweep_guard_band: gb_step must be > 0.")
    if gb_min < 0 or gb_min > gb_max:
        raise ValueError(f"sweep_guard_band: invalid range [{gb_min}, {gb_max}].")

    widths = np.arange(gb_min, gb_max + 1, gb_step, dtype=np.int64)
    bers = np.empty(widths.size, dtype=np.float64)
    vis = np.empty(widths.size, dtype=np.float64)

    best_ber_gb, best_ber = None, np.inf
    best_vis_gb, best_vis = None, -np.inf
    for k, g in enumerate(widths):
        b, v = compute_metrics(*partition_sums(hist, start, width, int(g), slot))
        bers[k], vis[k] = b, v
        if b < best_ber:
            best_ber_gb, best_ber = int(g), b
        if v > best_vis:
            best_vis_gb, best_vis = int(g), v

    return SweepResult(
        widths=widths,
        bers=bers,
        visibilities=vis,
        best_ber_gb=best_ber_gb,
        best_ber=best_ber if best_ber_gb is not None else float("nan"),
        best_vis_gb=best_vis_gb,
        best_vis=best_vis if best_vis_gb is not None else float("nan"),
    )


@dataclass
class BerResult:
    start: int
    window_total: int
    sums: Tuple[int, int, int]
    sums_gb: Tuple[int, int, int]
    ber: float
    vis: float
    ber_gb: float
    vis_gb: float
    sweep: Optional[SweepResult] = None

    def csv_line(self, label: str) -> str:
        return f"{label},{self.ber:.6f},{self.vis:.6f},{self.ber_gb:.6f},{self.vis_gb:.6f}"

def analyze(hist: np.ndarray, cfg: BerConfig) -> BerResult:
    """Window search, plain and guard-banded metrics, optional sweep."""
    start, total = find_densest_window(hist, cfg.width)
    sums = partition_sums(hist, start, cfg.width, 0, cfg.slot)
    sums_gb = partition_sums(hist, start, cfg.width, cfg.guard_band, cfg.slot)
    ber, vis = compute_metrics(*sums)
    ber_gb, vis_gb = compute_metrics(*sums_gb)
    sweep = None
    if cfg.sweep:
        sweep = sweep_guard_band(hist, start, cfg.width, cfg.gb_min, cfg.gb_max, cfg.gb_step, cfg.slot)
    return BerResult(start, total, sums, sums_gb, ber, vis, ber_gb, vis_gb, sweep)
