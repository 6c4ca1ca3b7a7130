import numpy as np
from histogram import fold, build_histogram, nonzero_bins, find_densest_window

def test_fold_truncates_then_wraps():
    assert fold(1500.0) == 1500
    assert fold(33500.0) == 1500
    assert fold(31999.9) == 31999
    assert fold(32000.0) == 0
    assert fold(-1.0) == 31999          # negatives wrap into [0, W)
    assert fold(-0.5) == 0              # truncation toward zero first

def test_fold_idempotent():
    rng = np.random.default_rng(3)
    t = rng.integers(0, 10**12, size=5000)
    once = fold(t)
    assert np.array_equal(fold(once), once)
    assert once.min() >= 0 and once.max() < 32000

def test_histogram_total_equals_rows():
    rng = np.random.default_rng(4)
    t = rng.random(12345) * 1e9
    hist = build_histogram(t)
    assert hist.size == 32000
    assert hist.sum() == t.size

def test_histogram_two_rows_same_bin():
    hist = build_histogram(np.array([1500.0, 33500.0]))
    assert hist[1500] == 2
    assert hist.sum() == 2
    assert nonzero_bins(hist) == [(1500, 2)]

def test_histogram_empty():
    hist = build_histogram(np.array([]), window_size=10)
    assert hist.shape == (10,) and hist.sum() == 0

def test_single_spike_inside_window():
    S = 50
    for i in (0, 7, 25, 49):
        hist = np.zeros(S, dtype=np.int64)
        hist[i] = 9
        for W in (1, 5, 17, 50):
            s, total = find_densest_window(hist, W)
            assert s <= i < s + W
            assert total == 9

def test_window_tie_keeps_earliest():
    hist = np.array([0, 4, 0, 0, 0, 4, 0, 0])
    assert find_densest_window(hist, 2) == (0, 4)
    assert find_densest_window(hist, 1) == (1, 4)

def test_window_does_not_wrap():
    # densest pair straddles the end/start boundary but is never considered
    hist = np.array([5, 0, 0, 1, 1, 0, 0, 5])
    s, total = find_densest_window(hist, 2)
    assert (s, total) == (0, 5)

def test_window_matches_running_sum():
    rng = np.random.default_rng(5)
    hist = rng.integers(0, 20, size=300)
    W = 37
    run = best = int(hist[:W].sum()); best_s = 0
    for i in range(W, hist.size):
        run += int(hist[i]) - int(hist[i - W])
        if run > best:
            best, best_s = run, i - W + 1
    assert find_densest_window(hist, W) == (best_s, best)

def test_toy_window():
    hist = np.zeros(10, dtype=np.int64)
    hist[3:6] = [2, 5, 3]
    s, total = find_densest_window(hist, 9)
    assert s == 0 and total == 10

def test_window_width_checked():
    hist = np.zeros(10)
    for bad in (0, 11):
        try:
            find_densest_window(hist, bad)
        except ValueError:
            pass
        else:
            raise AssertionError("expected ValueError")
