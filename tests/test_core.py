import itertools
import threading
import time

import pytest

from quicksorty.core import (
    MAX_LEN_REC,
    NS_CONC,
    FloatOption,
    GoroutineQuota,
    Settings,
    mean,
    median3,
    median4,
    min_max_four,
    min_max_sample,
    search,
    settings,
)

IARR = [
    9, 8, 7, 6, 5, 4, 3, 2, 1, 7, 8, 9, 7, 6, 5, 4, 3, 2, 1, 0, 1, 2, 0, -1, 1, 2, 0,
    -9, -8, -7, -6, -5, -4, -3, -2, -1, 0, 9, 8, 7, 6, 5, 4, 3, 2, 1, 0, 1, 2, 0, -1,
    9, 8, 7, 6, 5, 4, 3, 2, 1, 0, -9, -8, -7, -6, -5, -4, -3, -2, -1, 0, 1, 2, 0, -1,
    -9, 8, -7, 6, -5, 4, -3, 2, -1, 0, 9, -8, 7, -6, 5, -4, 3, -2, 1, 0, 1, 2, 0, -1,
    9, 8, 7, 6, 5, 4, 3, 2, 1, 0, -9, -8, -7, -6, -5, -4, -3, -2, -1, 0, 1, 2, 0, -1,
    -9, -8, -7, -6, -5, -4, -3, -2, -1, 0, -9, -8, -7, -6, -5, -4, -3, -2, -1, 0, -9]


def test_min_max_sample_properties():
    for n in range(2, 3 * NS_CONC + 1):
        for slen in range(2 * n, 3 * MAX_LEN_REC + 1):
            first, step, last = min_max_sample(slen, n)
            diff = last - first

            assert first < last < slen
            assert 2 <= step <= diff
            assert slen - last - 1 <= first <= slen - last
            assert (n - 1) * step == diff

            tail = slen - diff
            suboptimal = (tail >= n and first > (step + 1) >> 1) or (
                step >> 1 > (tail + n - 1) >> 1
            )
            assert not suboptimal


def test_min_max_four_matches_sample():
    for slen in range(8, 3 * MAX_LEN_REC + 1):
        f1, s1, _ = min_max_sample(slen, 4)
        assert min_max_four(slen) == (f1, s1)


@pytest.mark.parametrize("slen,n", [(3, 2), (10, 1), (5, 3)])
def test_min_max_sample_rejects_bad_input(slen, n):
    with pytest.raises(ValueError):
        min_max_sample(slen, n)


def test_min_max_four_rejects_short():
    with pytest.raises(ValueError):
        min_max_four(7)


def test_search_on_sorted_array():
    arr = sorted(IARR)
    n = len(arr)
    k = search(n, lambda i: arr[i] >= 5)
    missing = search(n, lambda i: arr[i] >= 10)
    assert arr[k - 1] == 4
    assert arr[k] == 5
    assert missing == n


@pytest.mark.parametrize("n,threshold,expected", [(0, 0, 0), (10, 3, 3), (10, 0, 0), (10, 20, 10)])
def test_search_values(n, threshold, expected):
    assert search(n, lambda i: i >= threshold) == expected


@pytest.mark.parametrize("a,b,expected", [(3, 4, 3), (4, 4, 4), (-3, -4, -4), (-1, 0, -1), (0, 9, 4)])
def test_mean_is_floor(a, b, expected):
    assert mean(a, b) == expected


def test_median3_all_orders():
    for p in itertools.permutations((1, 2, 3)):
        assert median3(*p) == 2
    assert median3("b", "a", "c") == "b"


def test_median4():
    for p in itertools.permutations((1, 2, 3, 4)):
        assert median4(*p) == 2
    assert median4(4, 10, 0, 6) == 5
    assert median4(-3, -1, -7, 0) == -2


@pytest.mark.parametrize("value", [0, -1, 4097])
def test_settings_rejects_bad_max_gor(value):
    with pytest.raises(ValueError):
        Settings(max_gor=value)


def test_settings_rejects_non_int_max_gor():
    with pytest.raises(TypeError):
        Settings(max_gor=2.5)


def test_settings_coerces_nan_option():
    assert Settings(nan_option=-1).nan_option is FloatOption.NAN_SMALL
    assert Settings(nan_option=1).nan_option is FloatOption.NAN_LARGE
    with pytest.raises(ValueError):
        Settings(nan_option=5)


def test_global_settings_validate_assignment():
    local = Settings(max_gor=2)
    assert local.max_gor == 2
    with pytest.raises(ValueError):
        local.max_gor = 0
    assert local.max_gor == 2

    old = settings.max_gor
    with pytest.raises(ValueError):
        settings.max_gor = 0
    assert settings.max_gor == old
    settings.max_gor = 4
    try:
        assert settings.max_gor == 4
    finally:
        settings.max_gor = old


def test_quota_counts():
    quota = GoroutineQuota(2)
    assert not quota.full()
    quota.acquire()
    assert quota.full()
    assert quota.release() is False
    assert not quota.full()
    quota.wait()
    assert quota.errors == []


def test_quota_reraises_worker_error():
    quota = GoroutineQuota(3)
    quota.acquire()
    quota.errors.append(KeyError("boom"))
    assert quota.release() is False
    with pytest.raises(KeyError):
        quota.wait()