"""Bob Jenkins' 32-bit lookup hash, seeded, as used by the hash functions."""

from __future__ import annotations

import random
import struct
from dataclasses import dataclass
from typing import Union

Key = Union[bytes, bytearray, memoryview, str]

_MASK = 0xFFFFFFFF
_GOLDEN_RATIO = 0x9E3779B9
_SEED_FORMAT = struct.Struct("<I")

# For each position in the final partial block: which accumulator it feeds,
# the shift applied, and whether the byte is sign-extended first.
_TAIL = (
    (0, 0, False),
    (0, 8, True),
    (0, 16, True),
    (0, 24, True),
    (1, 0, False),
    (1, 8, True),
    (1, 16, True),
    (1, 24, True),
    (2, 8, True),
    (2, 16, True),
    (2, 24, True),
)


def _as_bytes(key: Key) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    return bytes(key)


def _widen(byte: int) -> int:
    """Widen a byte to 32 bits the way a signed char is widened."""
    return (byte | 0xFFFFFF00) if byte >= 0x80 else byte


def _word(chunk: bytes) -> int:
    total = sum(_widen(byte) << shift for byte, shift in zip(chunk, (0, 8, 16, 24)))
    return total & _MASK


def _mix(a: int, b: int, c: int) -> tuple[int, int, int]:
    a = (a - b - c) & _MASK
    a ^= c >> 13
    b = (b - c - a) & _MASK
    b ^= (a << 8) & _MASK
    c = (c - a - b) & _MASK
    c ^= b >> 13
    a = (a - b - c) & _MASK
    a ^= c >> 12
    b = (b - c - a) & _MASK
    b ^= (a << 16) & _MASK
    c = (c - a - b) & _MASK
    c ^= b >> 5
    a = (a - b - c) & _MASK
    a ^= c >> 3
    b = (b - c - a) & _MASK
    b ^= (a << 10) & _MASK
    c = (c - a - b) & _MASK
    c ^= b >> 15
    return a, b, c


def jenkins_hash_vector(seed: int, key: Key) -> tuple[int, int, int]:
    """Return the three 32-bit words of the Jenkins hash of ``key``."""
    data = _as_bytes(key)
    length = len(data)
    a = b = _GOLDEN_RATIO
    c = seed & _MASK

    full = length - length % 12
    for offset in range(0, full, 12):
        a = (a + _word(data[offset:offset + 4])) & _MASK
        b = (b + _word(data[offset + 4:offset + 8])) & _MASK
        c = (c + _word(data[offset + 8:offset + 12])) & _MASK
        a, b, c = _mix(a, b, c)

    acc = [a, b, (c + length) & _MASK]
    for byte, (slot, shift, signed) in zip(data[full:], _TAIL):
        value = _widen(byte) if signed else byte
        acc[slot] = (acc[slot] + (value << shift)) & _MASK
    return _mix(*acc)


def jenkins_hash(seed: int, key: Key) -> int:
    """Return the 32-bit Jenkins hash of ``key`` under ``seed``."""
    return jenkins_hash_vector(seed, key)[2]


def _seed_from(packed: bytes) -> int:
    if len(packed) < _SEED_FORMAT.size:
        raise ValueError("packed jenkins state needs at least 4 bytes")
    return _SEED_FORMAT.unpack_from(packed)[0]


def hash_packed(packed: bytes, key: Key) -> int:
    """Hash ``key`` with a state stored in packed form."""
    return jenkins_hash(_seed_from(packed), key)


def hash_vector_packed(packed: bytes, key: Key) -> tuple[int, int, int]:
    """Return the three hash words of ``key`` using a packed state."""
    return jenkins_hash_vector(_seed_from(packed), key)


@dataclass(frozen=True)
class JenkinsState:
    """A seeded Jenkins hash function."""

    seed: int

    def __post_init__(self) -> None:
        if not 0 <= self.seed <= _MASK:
            raise ValueError(f"seed {self.seed} does not fit in 32 bits")

    @classmethod
    def new(cls, size: int, rng: random.Random) -> "JenkinsState":
        """Draw a seed below ``size`` from ``rng``."""
        if size <= 0:
            raise ValueError("hash table size must be positive")
        return cls(rng.getrandbits(31) % size)

    def hash(self, key: Key) -> int:
        return jenkins_hash(self.seed, key)

    def hash_vector(self, key: Key) -> tuple[int, int, int]:
        return jenkins_hash_vector(self.seed, key)

    def dump(self) -> bytes:
        """Serialise the state as its little-endian 32-bit seed."""
        return _SEED_FORMAT.pack(self.seed)

    @classmethod
    def load(cls, buf: bytes) -> "JenkinsState":
        return cls(_seed_from(bytes(buf)))

    def pack(self) -> bytes:
        return self.dump()