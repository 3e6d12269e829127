import pytest

from dtxkit.latency import LatencyHistogram


def test_empty_histogram_statistics():
    hist = LatencyHistogram()
    assert hist.count() == 0
    assert hist.total() == 0
    assert hist.avg() == 0
    assert hist.min() == 3968
    assert hist.max() == 0
    assert hist.format() == ""


def test_exact_small_values():
    hist = LatencyHistogram()
    samples = [3, 17, 64, 127]
    for s in samples:
        hist.update(s)
    assert hist.count() == len(samples)
    assert hist.total() == sum(samples)
    assert hist.min() == min(samples)
    assert hist.max() == max(samples)
    assert hist.avg() == sum(samples) // len(samples)


def test_format_line():
    hist = LatencyHistogram()
    for _ in range(3):
        hist.update(5)
    assert hist.format() == "   5      3\n"


def test_overflow_bucket():
    hist = LatencyHistogram()
    hist.update(10)
    hist.update(100000)
    assert hist.max() == 3968
    assert hist.min() == 10
    assert hist.format().splitlines()[-1].split() == ["3968", "1"]


def test_bucketed_values_never_exceed_input():
    for us in [128, 129, 383, 384, 900, 1919, 1920, 3967]:
        hist = LatencyHistogram()
        hist.update(us)
        assert hist.min() == hist.max()
        assert hist.max() <= us
        assert us - hist.max() < 16


def test_neighbouring_values_share_bucket():
    hist = LatencyHistogram()
    hist.update(130)
    hist.update(131)
    assert hist.min() == hist.max()
    assert hist.format().split()[1] == "2"


def test_min_avg_max_ordering():
    hist = LatencyHistogram()
    for us in range(0, 5000, 37):
        hist.update(us)
    assert hist.min() <= hist.avg() <= hist.max()


def test_percentile_monotonic_and_bounds():
    hist = LatencyHistogram()
    for us in range(1, 101):
        hist.update(us)
    ps = [i / 20 for i in range(21)]
    values = [hist.percentile(p) for p in ps]
    assert values == sorted(values)
    assert hist.percentile(0.0) == hist.min()
    assert hist.percentile(1.0) == 3968


@pytest.mark.parametrize("p", [-0.1, 1.5])
def test_percentile_rejects_out_of_range(p):
    with pytest.raises(ValueError):
        LatencyHistogram().percentile(p)


def test_update_rejects_negative():
    with pytest.raises(ValueError):
        LatencyHistogram().update(-1)


def test_iadd_merges_counts():
    a, b = LatencyHistogram(), LatencyHistogram()
    for us in (1, 2, 300):
        a.update(us)
    for us in (2, 5000):
        b.update(us)
    result = a.__iadd__(b)
    assert result is a
    a += LatencyHistogram()
    assert a.count() == 5
    assert a.max() == 3968
    assert b.count() == 2


def test_reset_clears():
    hist = LatencyHistogram()
    hist.update(50)
    hist.update(9999)
    hist.reset()
    assert hist.count() == 0
    assert hist.format() == ""