import numpy as np
from reader import read_timestamps_csv
from histogram import build_histogram

def _write(tmp_path, text, name="ts.csv"):
    p = tmp_path / name
    p.write_text(text)
    return str(p)

def test_two_rows_fold_to_same_bin(tmp_path):
    path = _write(tmp_path, "time_ps,channel\n1500,0.0\n33500,0.0\n")
    t = read_timestamps_csv(path)
    assert t.tolist() == [1500.0, 33500.0]
    hist = build_histogram(t)
    assert hist[1500] == 2 and hist.sum() == 2

def test_header_always_skipped(tmp_path):
    # a numeric header row is still dropped
    path = _write(tmp_path, "10,1\n20,1\n30,1\n")
    assert read_timestamps_csv(path).tolist() == [20.0, 30.0]

def test_stops_at_malformed_row(tmp_path):
    path = _write(tmp_path, "h\n1,0\n2,0\nbad,0\n4,0\n")
    assert read_timestamps_csv(path).tolist() == [1.0, 2.0]

def test_stops_at_short_row(tmp_path):
    path = _write(tmp_path, "h\n1,0\n2\n3,0\n")
    assert read_timestamps_csv(path).tolist() == [1.0]

def test_fractional_and_extra_columns(tmp_path):
    path = _write(tmp_path, "h\n1500.75,2.5,extra\n42.2,0\n")
    t = read_timestamps_csv(path)
    assert t.tolist() == [1500.75, 42.2]
    hist = build_histogram(t)
    assert hist[1500] == 1 and hist[42] == 1

def test_blank_lines_skipped(tmp_path):
    path = _write(tmp_path, "h\n1,0\n\n2,0\n\n")
    assert read_timestamps_csv(path).tolist() == [1.0, 2.0]

def test_header_only_and_empty(tmp_path):
    assert read_timestamps_csv(_write(tmp_path, "h\n", "a.csv")).size == 0
    assert read_timestamps_csv(_write(tmp_path, "", "b.csv")).size == 0

def test_row_count_matches_histogram(tmp_path):
    rng = np.random.default_rng(7)
    t = rng.integers(0, 10**9, size=500)
    body = "".join(f"{v},{i % 2}\n" for i, v in enumerate(t))
    hist = build_histogram(read_timestamps_csv(_write(tmp_path, "t,c\n" + body)))
    assert hist.sum() == 500

def test_missing_file_raises(tmp_path):
    try:
        read_timestamps_csv(str(tmp_path / "nope.csv"))
    except OSError:
        pass
    else:
        raise AssertionError("expected OSError")

def test_header_with_unmatched_quote(tmp_path):
    path = _write(tmp_path, '"time (ps),ch\n1500,0\n33500,0\n')
    assert read_timestamps_csv(path).tolist() == [1500.0, 33500.0]

def test_header_not_utf8(tmp_path):
    p = tmp_path / "latin1.csv"
    p.write_bytes(b"time (\xb5s),ch\n1500,0\n")
    assert read_timestamps_csv(str(p)).tolist() == [1500.0]

def test_undecodable_data_row_ends_data(tmp_path):
    p = tmp_path / "bad.csv"
    p.write_bytes(b"h\n1,0\n\xff\xfe,0\n3,0\n")
    assert read_timestamps_csv(str(p)).tolist() == [1.0]
