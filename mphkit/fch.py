"""Minimal perfect hash functions built with the FCH algorithm.

Keys are first spread over ``b`` buckets by a skewed first-level hash
``h1``. Buckets are then placed, largest first, by choosing a displacement
``g[bucket]`` so that ``(h2(key) + g[bucket]) % m`` lands every key of the
bucket on a free slot.
"""

from __future__ import annotations

import math
import random
import struct
import sys
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, Union

from .fch_buckets import FchBuckets
from .hashing import (
    HashFunction,
    HashState,
    dump_hash_state,
    hash_key,
    hash_packed,
    hash_state_packed_size,
    hash_type,
    load_hash_state,
    new_hash_state,
    pack_hash_state,
)
from .jenkins import Key

Buffer = Union[bytes, bytearray, memoryview]

_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")
_F64 = struct.Struct("<d")
_ALGO_TAG_SIZE = 4
_MAPPING_ATTEMPTS = 100
_SEARCH_ROUNDS = 10
_H2_ATTEMPTS = 1000


class FchBuildError(RuntimeError):
    """Raised when no minimal perfect hash function could be found."""


def calc_b(c: float, m: int) -> int:
    """Return the number of buckets for ``m`` keys and constant ``c``."""
    return int(math.ceil((c * m) / (math.log(m) / math.log(2.0) + 1)))


def calc_p1(m: int) -> float:
    """Return the key threshold that separates dense from sparse buckets."""
    return float(math.ceil(0.55 * m))


def calc_p2(b: int) -> float:
    """Return the number of buckets reserved for the dense part."""
    return float(math.ceil(0.3 * b))


def mixh10h11h12(b: int, p1: float, p2: float, initial_index: int) -> int:
    """Map a first-level hash value in ``[0, m)`` to a bucket in ``[0, b)``."""
    int_p2 = int(p2)
    if initial_index < p1:
        return initial_index % int_p2
    initial_index %= b
    if initial_index < p2:
        initial_index += int_p2
    return initial_index


def _log(verbosity: int, message: str) -> None:
    if verbosity:
        print(message, file=sys.stderr)


def _mapping(
    keys: Sequence[Key], m: int, c: float, hashfunc: HashFunction, rng: random.Random
) -> tuple[HashState, int, float, float, FchBuckets]:
    h1 = new_hash_state(hashfunc, m, rng)
    b = calc_b(c, m)
    p1 = calc_p1(m)
    p2 = calc_p2(b)
    buckets = FchBuckets(b)
    for key in keys:
        index = mixh10h11h12(b, p1, p2, hash_key(h1, key) % m)
        buckets.insert(index, key)
    return h1, b, p1, p2, buckets


def _has_h2_collisions(
    h2: HashState, m: int, buckets: FchBuckets, order: Sequence[int]
) -> bool:
    """Return whether ``h2`` maps two keys of one bucket to the same slot."""
    for bucket in order:
        seen: set[int] = set()
        for j in range(buckets.size(bucket)):
            index = hash_key(h2, buckets.key(bucket, j)) % m
            if index in seen:
                return True
            seen.add(index)
    return False


def _searching(
    m: int,
    b: int,
    buckets: FchBuckets,
    order: Sequence[int],
    hashfunc: HashFunction,
    rng: random.Random,
) -> tuple[bool, list[int], Optional[HashState]]:
    """Try to place every bucket; return (failed, g, h2)."""
    g = [0] * b
    random_table = list(range(m))
    for i in range(m):
        j = rng.getrandbits(31) % m
        random_table[i], random_table[j] = random_table[j], random_table[i]
    map_table = [0] * m
    for i, value in enumerate(random_table):
        map_table[value] = i

    searching_iterations = 0
    h2_attempts = 0
    h2: Optional[HashState] = None
    while True:
        h2 = new_hash_state(hashfunc, m, rng)
        restart = _has_h2_collisions(h2, m, buckets, order)
        filled_count = 0
        if restart:
            h2_attempts += 1
        else:
            searching_iterations += 1
            h2_attempts = 0

        for bucket in order:
            if restart:
                break
            bucketsize = buckets.size(bucket)
            if bucketsize == 0:
                restart = False
                break
            restart = True
            z = 0
            while z < m - filled_count and restart:
                first = hash_key(h2, buckets.key(bucket, 0)) % m
                counter = 0
                restart = False
                g[bucket] = (m + random_table[filled_count + z] - first) % m
                j = 0
                while True:
                    h = hash_key(h2, buckets.key(bucket, j)) % m
                    index = (h + g[bucket]) % m
                    if map_table[index] >= filled_count:
                        y = map_table[index]
                        random_table[y], random_table[filled_count] = (
                            random_table[filled_count],
                            random_table[y],
                        )
                        map_table[random_table[y]] = y
                        map_table[random_table[filled_count]] = filled_count
                        filled_count += 1
                        counter += 1
                    else:
                        restart = True
                        filled_count -= counter
                        counter = 0
                        break
                    j = (j + 1) % bucketsize
                    if j == 0:
                        break
                z += 1

        if not (
            restart
            and searching_iterations < _SEARCH_ROUNDS
            and h2_attempts < _H2_ATTEMPTS
        ):
            return restart, g, h2


def _read(view: bytes, fmt: struct.Struct, offset: int) -> tuple[int, int]:
    if offset + fmt.size > len(view):
        raise ValueError("FCH buffer is truncated")
    return fmt.unpack_from(view, offset)[0], offset + fmt.size


def _read_g(data: bytes, offset: int, b: int) -> Tuple[int, ...]:
    if offset + 4 * b > len(data):
        raise ValueError("FCH buffer is truncated")
    return struct.unpack_from(f"<{b}I", data, offset)


@dataclass(frozen=True)
class Fch:
    """A minimal perfect hash function over ``m`` keys."""

    m: int
    c: float
    b: int
    p1: float
    p2: float
    g: Tuple[int, ...]
    h1: HashState
    h2: HashState

    def __post_init__(self) -> None:
        object.__setattr__(self, "g", tuple(self.g))
        if len(self.g) != self.b:
            raise ValueError("displacement table length does not match b")
        if self.m <= 0:
            raise ValueError("m must be positive")

    @classmethod
    def build(
        cls,
        keys: Iterable[Key],
        c: float = 0.0,
        hashfuncs: Optional[Sequence[HashFunction]] = None,
        rng: Optional[random.Random] = None,
        verbosity: int = 0,
    ) -> "Fch":
        """Build a function mapping each of ``keys`` to a distinct value in ``[0, m)``.

        A ``c`` of 2 or less is replaced by 2.6. Only the first two entries of
        ``hashfuncs`` are used.
        """
        key_list = list(keys)
        m = len(key_list)
        if m == 0:
            raise ValueError("at least one key is needed")
        if c <= 2:
            c = 2.6
        funcs = [HashFunction.JENKINS, HashFunction.JENKINS]
        for i, func in enumerate(list(hashfuncs or ())[:2]):
            funcs[i] = HashFunction(func)
        if rng is None:
            rng = random.Random()

        for _ in range(_MAPPING_ATTEMPTS):
            _log(verbosity, f"Entering mapping step for mph creation of {m} keys")
            h1, b, p1, p2, buckets = _mapping(key_list, m, c, funcs[0], rng)
            _log(verbosity, "Starting ordering step")
            order = buckets.indexes_sorted_by_size()
            _log(verbosity, "Starting searching step.")
            failed, g, h2 = _searching(m, b, buckets, order, funcs[1], rng)
            if not failed and h2 is not None:
                _log(verbosity, "Successfully generated minimal perfect hash function")
                return cls(m, c, b, p1, p2, tuple(g), h1, h2)
        raise FchBuildError("unable to create minimal perfect hash function")

    def search(self, key: Key) -> int:
        """Return the hash value of ``key``."""
        h1 = hash_key(self.h1, key) % self.m
        h2 = hash_key(self.h2, key) % self.m
        h1 = mixh10h11h12(self.b, self.p1, self.p2, h1)
        return (h2 + self.g[h1]) % self.m

    def __len__(self) -> int:
        return self.m

    def dump(self) -> bytes:
        """Serialise both hash states, the parameters and ``g``, little-endian."""
        parts = []
        for state in (self.h1, self.h2):
            raw = dump_hash_state(state)
            parts.append(_U32.pack(len(raw)) + raw)
        parts.append(_U32.pack(self.m))
        parts.append(_F64.pack(self.c))
        parts.append(_U32.pack(self.b))
        parts.append(_F64.pack(self.p1))
        parts.append(_F64.pack(self.p2))
        parts.append(struct.pack(f"<{self.b}I", *self.g))
        return b"".join(parts)

    @classmethod
    def load(cls, buf: Buffer) -> "Fch":
        """Rebuild a function from the output of :meth:`dump`."""
        data = bytes(buf)
        offset = 0
        states = []
        for _ in range(2):
            length, offset = _read(data, _U32, offset)
            if offset + length > len(data):
                raise ValueError("FCH buffer is truncated")
            states.append(load_hash_state(data[offset:offset + length]))
            offset += length
        m, offset = _read(data, _U32, offset)
        c, offset = _read(data, _F64, offset)
        b, offset = _read(data, _U32, offset)
        p1, offset = _read(data, _F64, offset)
        p2, offset = _read(data, _F64, offset)
        g = _read_g(data, offset, b)
        return cls(m, c, b, p1, p2, g, states[0], states[1])

    def pack(self) -> bytes:
        """Return the packed form used by :func:`fch_search_packed`."""
        parts = []
        for state in (self.h1, self.h2):
            parts.append(_U32.pack(int(hash_type(state))))
            parts.append(pack_hash_state(state))
        parts.append(_U32.pack(self.m))
        parts.append(_U32.pack(self.b))
        parts.append(_U64.pack(int(self.p1)))
        parts.append(_U64.pack(int(self.p2)))
        parts.append(struct.pack(f"<{self.b}I", *self.g))
        return b"".join(parts)

    def packed_size(self) -> int:
        """Return the packed size, counting the 4-byte algorithm tag that precedes it."""
        return (
            _ALGO_TAG_SIZE
            + hash_state_packed_size(hash_type(self.h1))
            + hash_state_packed_size(hash_type(self.h2))
            + 4 * 4
            + 2 * 8
            + 4 * self.b
        )


def fch_search_packed(packed: Buffer, key: Key) -> int:
    """Evaluate a function stored in packed form on ``key``."""
    data = bytes(packed)
    offset = 0
    states = []
    for _ in range(2):
        type_code, offset = _read(data, _U32, offset)
        func = HashFunction(type_code)
        size = hash_state_packed_size(func)
        if offset + size > len(data):
            raise ValueError("FCH buffer is truncated")
        states.append((func, data[offset:offset + size]))
        offset += size
    m, offset = _read(data, _U32, offset)
    b, offset = _read(data, _U32, offset)
    p1, offset = _read(data, _U64, offset)
    p2, offset = _read(data, _U64, offset)
    if m == 0:
        raise ValueError("packed function holds no keys")
    (f1, s1), (f2, s2) = states
    h1 = hash_packed(s1, f1, key) % m
    h2 = hash_packed(s2, f2, key) % m
    h1 = mixh10h11h12(b, float(p1), float(p2), h1)
    if h1 >= b:
        raise ValueError("FCH buffer is truncated")
    (g_value,) = struct.unpack_from("<I", data, offset + 4 * h1) if offset + 4 * h1 + 4 <= len(data) else (None,)
    if g_value is None:
        raise ValueError("FCH buffer is truncated")
    return (h2 + g_value) % m