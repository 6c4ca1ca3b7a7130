# reader.py — timestamp reader for detector CSV exports
# Returns timestamps (float64 picoseconds) as:
#     timestamps_ps = read_timestamps_csv(filepath)
#
# Expected layout:
#   - first row is a header and is skipped whatever it contains
#   - each following row: <timestamp_ps>,<second column>[,...]
#   - only the first column is kept; the second one is read and dropped
#
# Reading stops at the first row that does not carry two numeric fields
# (short row, text, EOF). That row is treated as end of data, not as an error.

from __future__ import annotations
import csv, math
from typing import List
import numpy as np

def _parse_row(row: List[str]):
    """Return the timestamp of a data row, or None when the row ends the data."""
    if len(row) < 2:
        return None
    try:
        t_ps = float(row[0])
        float(row[1])  # second column must be numeric too, value unused
    except ValueError:
        return None
    if not math.isfinite(t_ps):
        return None
    return t_ps

def read_timestamps_csv(filepath: str) -> np.ndarray:
    """
    Read a two-column timestamp CSV and return the first column as float64 ps.

    Raises OSError (FileNotFoundError, PermissionError, ...) when the file
    cannot be opened. The header is dropped as one raw line, never parsed as
    CSV. Blank lines between records are skipped.
    """
    times_ps: List[float] = []
    # undecodable bytes turn into U+FFFD instead of raising
    with open(filepath, "r", encoding="utf-8", errors="replace", newline="") as f:
        f.readline()  # header, one physical line whatever it holds
        rows = csv.reader(f)
        for row in rows:
            if not row:
                continue
            t_ps = _parse_row(row)
            if t_ps is None:
                break
            times_ps.append(t_ps)
    return np.asarray(times_ps, dtype=np.float64)

# Simple CLI for quick testing:
if __name__ == "__main__":
    import argparse, os
    ap = argparse.ArgumentParser(description="Read photon timestamps (ps) from a two-column CSV.")
    ap.add_argument("csv", help="Path to timestamp CSV")
    args = ap.parse_args()
    t = read_timestamps_csv(args.csv)
    print(f"File: {os.path.basename(args.csv)}")
    print(f"Timestamps: {t.size:,}")
    if t.size:
        print(f"Span: {(t.max() - t.min())/1e12:.6f} s")
