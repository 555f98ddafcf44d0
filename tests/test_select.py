import random

import pytest

from mphkit.select import Select, select_next_query_packed, select_query_packed


@pytest.fixture
def sample():
    keys = [0, 1, 2, 3]
    return Select.generate(keys, keys[3])


def _check_values(query, next_query):
    index = query(0)
    assert index - 0 == 0
    index = next_query(index)
    assert index == 2
    index = query(1)
    assert index - 1 == 1
    index = next_query(index)
    assert index == 4
    index = query(2)
    assert index - 2 == 2
    index = next_query(index)
    assert index == 6
    index = query(3)
    assert index - 3 == 3


def test_source_case_queries(sample):
    _check_values(sample.query, sample.next_query)


def test_source_case_space_usage(sample):
    assert sample.space_usage() == 128


def test_source_case_dump_load(sample):
    buf = sample.dump()
    assert len(buf) == 16
    loaded = Select.load(buf)
    assert loaded == sample
    _check_values(loaded.query, loaded.next_query)


def test_source_case_packed(sample):
    packed = sample.pack()
    assert len(packed) == sample.packed_size()
    _check_values(
        lambda i: select_query_packed(packed, i),
        lambda i: select_next_query_packed(packed, i),
    )


def test_large_sequence_crosses_sample_blocks():
    rng = random.Random(7)
    m = 1000
    keys = sorted(rng.randrange(m + 1) for _ in range(300))
    sel = Select.generate(keys, m)
    for j, key in enumerate(keys):
        assert sel.query(j) == j + key
    for j in range(len(keys) - 1):
        assert sel.next_query(sel.query(j)) == sel.query(j + 1)
    packed = sel.pack()
    assert [select_query_packed(packed, j) for j in range(len(keys))] == [
        j + k for j, k in enumerate(keys)
    ]


def test_duplicate_keys():
    sel = Select.generate([0, 0, 0], 0)
    assert [sel.query(j) for j in range(3)] == [0, 1, 2]


def test_query_past_end_raises(sample):
    with pytest.raises(IndexError):
        sample.query(4)


def test_empty_sequence_query_raises():
    sel = Select.generate([], 5)
    with pytest.raises(IndexError):
        sel.query(0)


def test_unsorted_keys_rejected():
    with pytest.raises(ValueError):
        Select.generate([3, 1], 5)


def test_key_above_bound_rejected():
    with pytest.raises(ValueError):
        Select.generate([1, 9], 5)


def test_load_truncated_buffer(sample):
    with pytest.raises(ValueError):
        Select.load(sample.dump()[:-1])