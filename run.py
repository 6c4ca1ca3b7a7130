# run.py — read CSV → fold histogram → densest 3 ns window → BER / visibility
import argparse, csv, sys
import numpy as np

from config import (BerConfig, WINDOW_SIZE_PS, WIDTH_PS, SLOT_PS, GUARD_BAND_PS,
                    GB_MIN_PS, GB_MAX_PS, GB_STEP_PS, LABEL)
from reader import read_timestamps_csv
from histogram import build_histogram, nonzero_bins
from ber import analyze, is_degenerate

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="BER and visibility from photon arrival timestamps (ps, CSV)")
    ap.add_argument("csv", help="Timestamp CSV: header row, then <timestamp_ps>,<ignored>")
    ap.add_argument("--window-size", type=int, default=WINDOW_SIZE_PS, help="folding period in ps (default 32000)")
    ap.add_argument("--width", type=int, default=WIDTH_PS, help="analysis window in ps (default 3000)")
    ap.add_argument("--slot", type=int, default=SLOT_PS, help="time-bin length for the guard band in ps (default 1000)")
    ap.add_argument("--guard-band", type=int, default=GUARD_BAND_PS, help="guard band in ps (default 100)")
    ap.add_argument("--label", type=str, default=LABEL, help="group label printed first on the result line")
    ap.add_argument("--sweep", action="store_true", help="sweep the guard band and report the best widths")
    ap.add_argument("--gb-min", type=int, default=GB_MIN_PS)
    ap.add_argument("--gb-max", type=int, default=GB_MAX_PS)
    ap.add_argument("--gb-step", type=int, default=GB_STEP_PS)
    ap.add_argument("--sweep-csv", type=str, default=None, help="write the sweep table to this CSV (implies --sweep)")
    ap.add_argument("--dump-hist", action="store_true", help="print every non-zero histogram bin")
    ap.add_argument("--plot", action="store_true", help="plot the folded histogram")
    ap.add_argument("--ascii", action="store_true", help="print an ASCII view of the window instead of plotting")
    ap.add_argument("--out", type=str, default="", help="save plot to PNG (implies --plot)")
    ap.add_argument("-v", "--verbose", action="store_true", help="run summary on stderr")
    return ap

def _fmt_gb(gb) -> str:
    return "n/a" if gb is None else f"{gb} ps"

def write_sweep_csv(path: str, sweep) -> None:
    with open(path, "w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["guard_band_ps", "ber", "visibility"])
        for g, b, v in zip(sweep.widths, sweep.bers, sweep.visibilities):
            w.writerow([int(g), f"{b:.6f}", f"{v:.6f}"])

def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    if args.sweep_csv:
        args.sweep = True

    try:
        cfg = BerConfig.from_args(args).validate()
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    try:
        t_ps = read_timestamps_csv(args.csv)
    except OSError as e:
        print(f"ERROR: could not open file {args.csv}: {e.strerror or e}", file=sys.stderr)
        return 1

    hist = build_histogram(t_ps, cfg.window_size)
    res = analyze(hist, cfg)

    if args.verbose:
        sys.stderr.write(f"File: {args.csv}\n")
        sys.stderr.write(f"Timestamps: {t_ps.size:,}   Non-empty bins: {np.count_nonzero(hist):,}\n")
        sys.stderr.write(f"Window: [{res.start}, {res.start + cfg.width}) ps   counts: {res.window_total:,}\n")
        sys.stderr.write(f"C1/D1/C2: {res.sums}   with guard band {cfg.guard_band} ps: {res.sums_gb}\n")
        if is_degenerate(res.ber, res.vis) or is_degenerate(res.ber_gb, res.vis_gb):
            sys.stderr.write("Note: zero counts in a denominator, metrics are not finite.\n")

    if args.dump_hist:
        print(f"Histogram of timestamps within {cfg.window_size} ps window:")
        for i, n in nonzero_bins(hist):
            print(f"Bin {i}: {n} counts")

    print(res.csv_line(cfg.label))

    if res.sweep is not None:
        sw = res.sweep
        print(f"Optimal guard band for min BER: {_fmt_gb(sw.best_ber_gb)} (BER = {sw.best_ber:.6f})")
        print(f"Optimal guard band for max visibility: {_fmt_gb(sw.best_vis_gb)} (V = {sw.best_vis:.6f})")
        if args.sweep_csv:
            try:
                write_sweep_csv(args.sweep_csv, sw)
            except OSError as e:
                print(f"ERROR: could not write file {args.sweep_csv}: {e.strerror or e}", file=sys.stderr)
                return 1
            if args.verbose:
                sys.stderr.write(f"Saved sweep table to {args.sweep_csv}\n")

    if args.ascii and not args.out:
        from plot_hist import ascii_window
        for line in ascii_window(hist, res.start, cfg.width):
            print(line)
    elif args.plot or args.out:
        try:
            from plot_hist import plot_histogram
            plot_histogram(hist, res.start, cfg.width, title=f"{args.csv} — window at {res.start} ps", out=args.out or None)
            if args.out:
                sys.stderr.write(f"Saved plot to {args.out}\n")
        except ImportError as e:
            sys.stderr.write(f"(Plotting unavailable: {e})  Falling back to ASCII.\n")
            from plot_hist import ascii_window
            for line in ascii_window(hist, res.start, cfg.width):
                print(line)
    return 0

if __name__ == "__main__":
    sys.exit(main())
