# histogram.py — fold timestamps into one laser period and find the densest window
# (inputs in picoseconds)
from __future__ import annotations
from typing import List, Tuple
import numpy as np

from config import WINDOW_SIZE_PS

def fold(t_ps, window_size: int = WINDOW_SIZE_PS):
    """
    Phase-fold timestamps: truncate toward zero, then reduce modulo window_size.
    Result is always in [0, window_size); negative values wrap around.
    Accepts a scalar or an array.
    """
    t_int = np.trunc(np.asarray(t_ps, dtype=np.float64)).astype(np.int64)
    folded = np.mod(t_int, window_size)
    if folded.ndim == 0:
        return int(folded)
    return folded

def build_histogram(timestamps_ps: np.ndarray, window_size: int = WINDOW_SIZE_PS) -> np.ndarray:
    """
    One bin per picosecond of the period; bin k counts the timestamps folding to k.
    The sum over all bins equals the number of timestamps.
    """
    if window_size <= 0:
        raise ValueError("build_histogram: window_size must be > 0.")
    t = np.asarray(timestamps_ps, dtype=np.float64).ravel()
    if t.size == 0:
        return np.zeros(window_size, dtype=np.int64)
    return np.bincount(fold(t, window_size), minlength=window_size).astype(np.int64)

def nonzero_bins(hist: np.ndarray) -> List[Tuple[int, int]]:
    idx = np.flatnonzero(hist)
    return [(int(i), int(hist[i])) for i in idx]

def find_densest_window(hist: np.ndarray, width: int) -> Tuple[int, int]:
    """
    Linear sliding-window maximum of `width` consecutive bins.

    The window does not wrap past the last bin even though the phase is periodic.
    Equivalent to a running sum that drops hist[i-width] and adds hist[i] while
    only a strictly greater sum replaces the best start, so the earliest maximum
    wins ties (np.argmax returns the first occurrence).

    Returns (start, window_total).
    """
    hist = np.asarray(hist)
    S = hist.size
    if width <= 0 or width > S:
        raise ValueError(f"find_densest_window: width must be in [1, {S}], got {width}.")
    c = np.concatenate(([0], np.cumsum(hist, dtype=np.int64)))
    window_sums = c[width:] - c[:-width]     # (S - width + 1,), sums of [s, s+width)
    start = int(np.argmax(window_sums))
    return start, int(window_sums[start])
