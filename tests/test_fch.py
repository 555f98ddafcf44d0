import random
import struct

import pytest

from mphkit.fch import (
    Fch,
    FchBuildError,
    calc_b,
    calc_p1,
    calc_p2,
    fch_search_packed,
    mixh10h11h12,
)
from mphkit.hashing import HashFunction

KEYS = [f"key-{i}" for i in range(200)]


@pytest.fixture(scope="module")
def built():
    return Fch.build(KEYS, rng=random.Random(1234))


def test_build_is_minimal_perfect(built):
    values = sorted(built.search(k) for k in KEYS)
    assert values == list(range(len(KEYS)))


def test_small_c_replaced_by_default(built):
    assert built.c == 2.6
    assert built.m == len(KEYS)
    assert len(built.g) == built.b


def test_parameters_follow_formulas(built):
    assert built.b == calc_b(built.c, built.m)
    assert built.p1 == calc_p1(built.m)
    assert built.p2 == calc_p2(built.b)


def test_single_key():
    f = Fch.build(["only"], rng=random.Random(7))
    assert f.search("only") == 0


def test_bytes_and_str_keys_agree(built):
    assert built.search(b"key-5") == built.search("key-5")


def test_explicit_c_and_hashfuncs():
    keys = [f"w{i}" for i in range(50)]
    f = Fch.build(keys, c=3.0, hashfuncs=[HashFunction.JENKINS], rng=random.Random(3))
    assert f.c == 3.0
    assert sorted(f.search(k) for k in keys) == list(range(50))


def test_dump_load_round_trip(built):
    loaded = Fch.load(built.dump())
    assert loaded == built
    assert [loaded.search(k) for k in KEYS] == [built.search(k) for k in KEYS]


def test_dump_starts_with_hash_state(built):
    data = built.dump()
    (length,) = struct.unpack_from("<I", data)
    assert data[4:4 + length].startswith(b"jenkins\0")


def test_load_truncated_raises(built):
    with pytest.raises(ValueError):
        Fch.load(built.dump()[:-3])


def test_packed_search_matches(built):
    packed = built.pack()
    assert [fch_search_packed(packed, k) for k in KEYS] == [built.search(k) for k in KEYS]


def test_packed_size_counts_algorithm_tag(built):
    assert built.packed_size() == len(built.pack()) + 4
    assert len(built.pack()) == 40 + 4 * built.b


def test_mix_stays_in_buckets():
    m = 1000
    b = calc_b(2.6, m)
    p1, p2 = calc_p1(m), calc_p2(b)
    results = {mixh10h11h12(b, p1, p2, i) for i in range(m)}
    assert all(0 <= r < b for r in results)
    assert all(r < p2 for r in (mixh10h11h12(b, p1, p2, i) for i in range(int(p1))))


def test_empty_keys_rejected():
    with pytest.raises(ValueError):
        Fch.build([])


def test_duplicate_keys_fail():
    with pytest.raises(FchBuildError):
        Fch.build(["a", "a"], rng=random.Random(0))


def test_mismatched_g_rejected(built):
    with pytest.raises(ValueError):
        Fch(built.m, built.c, built.b, built.p1, built.p2, built.g[:-1], built.h1, built.h2)