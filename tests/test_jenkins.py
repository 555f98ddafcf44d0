import random

import pytest

from mphkit.jenkins import (
    JenkinsState,
    hash_packed,
    hash_vector_packed,
    jenkins_hash,
    jenkins_hash_vector,
)

KEYS = [b"", b"a", b"abc", b"hello world!", b"0123456789abcdefghij", bytes(range(256))]


def test_dump_is_little_endian_seed():
    assert JenkinsState(42).dump() == b"\x2a\x00\x00\x00"
    assert JenkinsState(1).pack() == b"\x01\x00\x00\x00"


def test_dump_load_round_trip():
    state = JenkinsState(0xDEADBEEF)
    assert JenkinsState.load(state.dump()) == state


def test_load_short_buffer_rejected():
    with pytest.raises(ValueError):
        JenkinsState.load(b"\x01\x02")


def test_seed_out_of_range_rejected():
    with pytest.raises(ValueError):
        JenkinsState(2**32)


@pytest.mark.parametrize("key", KEYS)
def test_hash_is_last_word_of_vector(key):
    state = JenkinsState(12345)
    vector = state.hash_vector(key)
    assert len(vector) == 3
    assert all(0 <= word < 2**32 for word in vector)
    assert state.hash(key) == vector[2]


@pytest.mark.parametrize("length", range(0, 30))
def test_packed_and_module_functions_agree(length):
    key = bytes((i * 37 + 200) % 256 for i in range(length))
    state = JenkinsState(777)
    packed = state.pack()
    assert hash_packed(packed, key) == state.hash(key) == jenkins_hash(777, key)
    assert hash_vector_packed(packed, key) == jenkins_hash_vector(777, key)


def test_str_keys_hash_as_utf8():
    assert jenkins_hash(9, "héllo") == jenkins_hash(9, "héllo".encode("utf-8"))


def test_hash_is_deterministic_and_32_bit():
    first = jenkins_hash(5, b"some key")
    second = JenkinsState(5).hash(b"some key")
    assert 0 <= first < 2**32
    assert first == second


def test_new_draws_seed_below_size():
    rng = random.Random(3)
    states = [JenkinsState.new(17, rng) for _ in range(50)]
    assert all(0 <= s.seed < 17 for s in states)


def test_new_reproducible_with_same_rng_seed():
    first = JenkinsState.new(1000, random.Random(8))
    second = JenkinsState.new(1000, random.Random(8))
    assert 0 <= first.seed < 1000
    assert first.seed == second.seed


def test_new_rejects_zero_size():
    with pytest.raises(ValueError):
        JenkinsState.new(0, random.Random(1))