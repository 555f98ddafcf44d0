"""Hash function selection, state serialisation and packed evaluation."""

from __future__ import annotations

import dataclasses
import random
from enum import IntEnum
from typing import Optional

from . import jenkins
from .jenkins import JenkinsState, Key

HashState = JenkinsState


class HashFunction(IntEnum):
    """The hash function families that can back a hash state."""

    JENKINS = 0

    @property
    def label(self) -> str:
        """The name under which the function is stored and selected."""
        return _HASH_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "HashFunction":
        for func, name in _HASH_LABELS.items():
            if name == label:
                return func
        raise ValueError(f"unknown hash function: {label!r}")


_HASH_LABELS = {HashFunction.JENKINS: "jenkins"}
_PACKED_SIZES = {HashFunction.JENKINS: len(JenkinsState(0).pack())}


class Algorithm(IntEnum):
    """The minimal perfect hash construction algorithms."""

    BMZ = 0
    BMZ8 = 1
    CHM = 2
    BRZ = 3
    FCH = 4
    BDZ = 5
    BDZ_PH = 6
    CHD_PH = 7
    CHD = 8


def new_hash_state(
    hashfunc: HashFunction, hashsize: int, rng: Optional[random.Random] = None
) -> HashState:
    """Create a fresh hash state whose seed is drawn below ``hashsize``."""
    func = HashFunction(hashfunc)
    if rng is None:
        rng = random.Random()
    if func is HashFunction.JENKINS:
        return JenkinsState.new(hashsize, rng)
    raise ValueError(f"unsupported hash function: {func!r}")


def hash_type(state: HashState) -> HashFunction:
    """Return the hash function family of ``state``."""
    if isinstance(state, JenkinsState):
        return HashFunction.JENKINS
    raise TypeError(f"not a hash state: {state!r}")


def hash_key(state: HashState, key: Key) -> int:
    """Return the 32-bit hash of ``key``."""
    hash_type(state)
    return state.hash(key)


def hash_vector(state: HashState, key: Key) -> tuple[int, int, int]:
    """Return the three 32-bit hash words of ``key``."""
    hash_type(state)
    return state.hash_vector(key)


def dump_hash_state(state: HashState) -> bytes:
    """Serialise ``state`` as its NUL-terminated function name and its data."""
    func = hash_type(state)
    return func.label.encode("ascii") + b"\0" + state.dump()


def load_hash_state(buf: bytes) -> HashState:
    """Rebuild a hash state from the output of :func:`dump_hash_state`."""
    name, sep, rest = bytes(buf).partition(b"\0")
    if not sep:
        raise ValueError("hash state has no terminated function name")
    func = HashFunction.from_label(name.decode("ascii", errors="replace"))
    if func is HashFunction.JENKINS:
        return JenkinsState.load(rest)
    raise ValueError(f"unsupported hash function: {func!r}")


def copy_hash_state(state: HashState) -> HashState:
    """Return an independent copy of ``state``."""
    hash_type(state)
    return dataclasses.replace(state)


def pack_hash_state(state: HashState) -> bytes:
    """Return the packed form of ``state``; its type is stored elsewhere."""
    hash_type(state)
    return state.pack()


def hash_state_packed_size(hashfunc: HashFunction) -> int:
    """Return the number of bytes a packed state of ``hashfunc`` takes."""
    return _PACKED_SIZES[HashFunction(hashfunc)]


def hash_packed(packed: bytes, hashfunc: HashFunction, key: Key) -> int:
    """Hash ``key`` using a packed state of type ``hashfunc``."""
    func = HashFunction(hashfunc)
    if func is HashFunction.JENKINS:
        return jenkins.hash_packed(packed, key)
    raise ValueError(f"unsupported hash function: {func!r}")


def hash_vector_packed(
    packed: bytes, hashfunc: HashFunction, key: Key
) -> tuple[int, int, int]:
    """Return the three hash words of ``key`` using a packed state."""
    func = HashFunction(hashfunc)
    if func is HashFunction.JENKINS:
        return jenkins.hash_vector_packed(packed, key)
    raise ValueError(f"unsupported hash function: {func!r}")