import random

import pytest

from mphkit.hashing import (
    HashFunction,
    copy_hash_state,
    dump_hash_state,
    hash_key,
    hash_packed,
    hash_state_packed_size,
    hash_type,
    hash_vector,
    hash_vector_packed,
    load_hash_state,
    new_hash_state,
    pack_hash_state,
)
from mphkit.jenkins import JenkinsState, jenkins_hash, jenkins_hash_vector


@pytest.fixture
def state():
    return new_hash_state(HashFunction.JENKINS, 1000, random.Random(42))


def test_label_round_trip():
    assert HashFunction.JENKINS.label == "jenkins"
    assert HashFunction.from_label("jenkins") is HashFunction.JENKINS


def test_unknown_label_raises():
    with pytest.raises(ValueError):
        HashFunction.from_label("md5")


def test_new_state_seed_below_size():
    rng = random.Random(7)
    for _ in range(50):
        s = new_hash_state(HashFunction.JENKINS, 10, rng)
        assert 0 <= s.seed < 10


def test_new_state_zero_size_raises():
    with pytest.raises(ValueError):
        new_hash_state(HashFunction.JENKINS, 0, random.Random(1))


def test_hash_type(state):
    assert hash_type(state) is HashFunction.JENKINS
    with pytest.raises(TypeError):
        hash_type("not a state")


def test_hash_key_matches_jenkins(state):
    assert hash_key(state, b"hello") == jenkins_hash(state.seed, b"hello")
    assert hash_vector(state, b"hello") == jenkins_hash_vector(state.seed, b"hello")


def test_dump_prefix(state):
    data = dump_hash_state(state)
    assert data.startswith(b"jenkins\x00")
    assert data[len(b"jenkins\x00"):] == state.dump()


def test_dump_load_round_trip(state):
    loaded = load_hash_state(dump_hash_state(state))
    assert loaded == state
    assert hash_key(loaded, b"key") == hash_key(state, b"key")


def test_load_unknown_name_raises():
    with pytest.raises(ValueError):
        load_hash_state(b"nosuch\x00\x01\x00\x00\x00")


def test_load_without_terminator_raises():
    with pytest.raises(ValueError):
        load_hash_state(b"jenkins")


def test_copy_is_equal(state):
    copied = copy_hash_state(state)
    assert copied == state
    assert hash_key(copied, b"abc") == hash_key(state, b"abc")


def test_packed_size_and_pack(state):
    assert hash_state_packed_size(HashFunction.JENKINS) == 4
    assert len(pack_hash_state(state)) == hash_state_packed_size(HashFunction.JENKINS)


def test_packed_size_unknown_raises():
    with pytest.raises(ValueError):
        hash_state_packed_size(99)


@pytest.mark.parametrize("key", [b"", b"a", b"twelve bytes", b"a longer key of many bytes"])
def test_packed_hash_matches(state, key):
    packed = pack_hash_state(state)
    assert hash_packed(packed, HashFunction.JENKINS, key) == hash_key(state, key)
    assert hash_vector_packed(packed, HashFunction.JENKINS, key) == hash_vector(state, key)


def test_packed_hash_unknown_type_raises(state):
    with pytest.raises(ValueError):
        hash_packed(pack_hash_state(state), 5, b"x")


def test_distinct_seeds_give_distinct_hashes():
    a = JenkinsState(1)
    b = JenkinsState(2)
    assert hash_key(a, b"same key") != hash_key(b, b"same key")