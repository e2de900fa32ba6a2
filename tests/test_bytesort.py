import os
import random
import sys

import pytest
from hypothesis import given
from hypothesis import strategies as st

from quicksorty.bytesort import is_sorted_bytes, sort_bytes


def _implant(count, seed):
    """Overlapping 12-byte bodies cut from one random buffer."""
    rnd = random.Random(seed)
    buf = bytes(rnd.getrandbits(8) for _ in range(4 * count + 12))
    return [buf[4 * k : 4 * k + 12] for k in range(count)]


def _random_bytes(count, seed, maxlen=6, alphabet=b"abc"):
    rnd = random.Random(seed)
    return [
        bytes(rnd.choice(alphabet) for _ in range(rnd.randint(0, maxlen))) for _ in range(count)
    ]


@pytest.mark.parametrize("size", [0, 1, 2, 5, 30, 31, 100, 300, 301, 601, 602, 1500, 4000])
@pytest.mark.parametrize("max_gor", [1, 2, 3])
def test_sort_matches_sorted(size, max_gor):
    data = _implant(size, size * 7 + max_gor)
    expected = sorted(data)
    sort_bytes(data, max_gor=max_gor)
    assert data == expected
    assert is_sorted_bytes(data) == 0


@pytest.mark.parametrize("max_gor", [1, 2, 3, 4])
def test_many_equal_elements(max_gor):
    data = _random_bytes(5000, max_gor, maxlen=3, alphabet=b"ab")
    expected = sorted(data)
    sort_bytes(data, max_gor=max_gor)
    assert data == expected


def test_environment_and_arguments_repeated():
    items = [a.encode("utf-8", "surrogateescape") for a in sys.argv]
    items += [f"{k}={v}".encode("utf-8", "surrogateescape") for k, v in os.environ.items()]
    data = [x for _ in range(16) for x in reversed(items)]
    sort_bytes(data)
    assert is_sorted_bytes(data) == 0
    assert data == sorted(data)


def test_bytearray_elements_are_accepted():
    data = [bytearray(b"zeta"), b"alpha", bytearray(b"mu"), b""]
    sort_bytes(data)
    assert data == [b"", b"alpha", b"mu", b"zeta"]


def test_is_sorted_bytes_reports_last_descent():
    assert is_sorted_bytes([b"b", b"a"]) == 1
    assert is_sorted_bytes([b"a", b"c", b"b"]) == 2
    assert is_sorted_bytes([b"c", b"a", b"b"]) == 1
    assert is_sorted_bytes([b"a", b"a", b"ab"]) == 0
    assert is_sorted_bytes([]) == 0


def test_rejects_non_bytes_elements():
    with pytest.raises(TypeError):
        sort_bytes([b"a", "b"])
    with pytest.raises(TypeError):
        is_sorted_bytes([1, 2])


def test_rejects_single_bytes_object():
    with pytest.raises(TypeError):
        sort_bytes(b"abc")


def test_invalid_max_gor():
    with pytest.raises(ValueError):
        sort_bytes([b"a"], max_gor=0)


@given(st.lists(st.binary(max_size=5), max_size=400))
def test_property_sorted(data):
    expected = sorted(data)
    sort_bytes(data, max_gor=1)
    assert data == expected