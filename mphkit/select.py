"""Select queries over a bit vector that encodes a sorted integer sequence.

A non-decreasing sequence ``keys`` of ``n`` values in ``[0, m]`` is stored
as a bit vector in which the ``j``-th set bit sits at position
``j + keys[j]``. A sampled table records the position of every 128th set
bit, so finding the ``j``-th set bit only needs a short scan.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from functools import cached_property
from typing import Sequence, Tuple, Union

from .select_tables import RANK_LOOKUP_TABLE, SELECT_LOOKUP_TABLE

STEP_SELECT_TABLE = 128
_NBITS_STEP = 7
_MASK_STEP = 0x7F
_MASK32 = 0xFFFFFFFF
_HEADER = struct.Struct("<II")

Buffer = Union[bytes, bytearray, memoryview]


def _vec_words(n: int, m: int) -> int:
    return (n + m + 31) >> 5


def _table_len(n: int) -> int:
    return (n >> _NBITS_STEP) + 1


def _words_to_bytes(words: Sequence[int]) -> bytes:
    return struct.pack(f"<{len(words)}I", *words)


def _scan(bits: bytes, byte_idx: int, one_idx: int) -> int:
    """Return the position of the ``one_idx``-th set bit counted from ``byte_idx``."""
    part_sum = 0
    while True:
        if byte_idx >= len(bits):
            raise IndexError("select query runs past the end of the bit vector")
        old_part_sum = part_sum
        part_sum += RANK_LOOKUP_TABLE[bits[byte_idx]]
        byte_idx += 1
        if part_sum > one_idx:
            break
    last = byte_idx - 1
    return SELECT_LOOKUP_TABLE[bits[last]][one_idx - old_part_sum] + (last << 3)


def _query(bits: bytes, table: Sequence[int], one_idx: int) -> int:
    if one_idx < 0:
        raise ValueError("rank must be non-negative")
    block = one_idx >> _NBITS_STEP
    if block >= len(table):
        raise IndexError(f"rank {one_idx} is beyond the stored sequence")
    vec_bit_idx = table[block]
    byte_idx = vec_bit_idx >> 3
    if byte_idx >= len(bits):
        raise IndexError(f"rank {one_idx} is beyond the stored sequence")
    below = bits[byte_idx] & ((1 << (vec_bit_idx & 7)) - 1)
    one_idx = (one_idx & _MASK_STEP) + RANK_LOOKUP_TABLE[below]
    return _scan(bits, byte_idx, one_idx)


def _next_query(bits: bytes, vec_bit_idx: int) -> int:
    if vec_bit_idx < 0:
        raise ValueError("bit position must be non-negative")
    byte_idx = vec_bit_idx >> 3
    if byte_idx >= len(bits):
        raise IndexError(f"bit position {vec_bit_idx} is outside the bit vector")
    below = bits[byte_idx] & ((1 << (vec_bit_idx & 7)) - 1)
    one_idx = RANK_LOOKUP_TABLE[below] + 1
    return _scan(bits, byte_idx, one_idx)


@dataclass(frozen=True)
class Select:
    """A select structure over ``n`` sorted values in ``[0, m]``."""

    n: int
    m: int
    bits_vec: Tuple[int, ...]
    select_table: Tuple[int, ...]

    def __post_init__(self) -> None:
        if not (0 <= self.n <= _MASK32 and 0 <= self.m <= _MASK32):
            raise ValueError("n and m must fit in 32 bits")
        object.__setattr__(self, "bits_vec", tuple(self.bits_vec))
        object.__setattr__(self, "select_table", tuple(self.select_table))
        if len(self.bits_vec) != _vec_words(self.n, self.m):
            raise ValueError("bit vector length does not match n and m")
        if len(self.select_table) != _table_len(self.n):
            raise ValueError("select table length does not match n")

    @classmethod
    def generate(cls, keys: Sequence[int], m: int) -> "Select":
        """Build the structure for the non-decreasing ``keys``, each in ``[0, m]``."""
        values = list(keys)
        if m < 0:
            raise ValueError("m must be non-negative")
        previous = 0
        for value in values:
            if value < previous:
                raise ValueError("keys must be sorted in non-decreasing order")
            if value > m:
                raise ValueError(f"key {value} exceeds the upper bound {m}")
            previous = value
        n = len(values)
        positions = [j + value for j, value in enumerate(values)]
        vector = sum(1 << pos for pos in positions)
        words = tuple(
            (vector >> (32 * w)) & _MASK32 for w in range(_vec_words(n, m))
        )
        samples = positions[::STEP_SELECT_TABLE]
        table = samples + [0] * (_table_len(n) - len(samples))
        return cls(n, m, words, tuple(table))

    @cached_property
    def _bits(self) -> bytes:
        return _words_to_bytes(self.bits_vec)

    def query(self, one_idx: int) -> int:
        """Return the position of the ``one_idx``-th set bit."""
        return _query(self._bits, self.select_table, one_idx)

    def next_query(self, vec_bit_idx: int) -> int:
        """Return the position of the set bit following the one at ``vec_bit_idx``."""
        return _next_query(self._bits, vec_bit_idx)

    def space_usage(self) -> int:
        """Return the size of the structure in bits."""
        return 32 * (2 + len(self.bits_vec) + len(self.select_table))

    def dump(self) -> bytes:
        """Serialise as n, m, the bit vector words and the select table, little-endian."""
        return (
            _HEADER.pack(self.n, self.m)
            + self._bits
            + _words_to_bytes(self.select_table)
        )

    @classmethod
    def load(cls, buf: Buffer) -> "Select":
        """Rebuild a structure from the output of :meth:`dump`."""
        bits, table, n, m = _parse(buf)
        words = struct.unpack(f"<{len(bits) // 4}I", bits)
        return cls(n, m, words, table)

    def pack(self) -> bytes:
        return self.dump()

    def packed_size(self) -> int:
        return 4 * (2 + len(self.bits_vec) + len(self.select_table))


def _parse(packed: Buffer) -> tuple[bytes, Tuple[int, ...], int, int]:
    data = bytes(packed)
    if len(data) < _HEADER.size:
        raise ValueError("select buffer is too short for its header")
    n, m = _HEADER.unpack_from(data)
    vec_size = _vec_words(n, m)
    table_size = _table_len(n)
    bits_end = _HEADER.size + 4 * vec_size
    end = bits_end + 4 * table_size
    if len(data) < end:
        raise ValueError("select buffer is truncated")
    table = struct.unpack_from(f"<{table_size}I", data, bits_end)
    return data[_HEADER.size:bits_end], table, n, m


def select_query_packed(packed: Buffer, one_idx: int) -> int:
    """Run :meth:`Select.query` directly on a packed structure."""
    bits, table, _, _ = _parse(packed)
    return _query(bits, table, one_idx)


def select_next_query_packed(packed: Buffer, vec_bit_idx: int) -> int:
    """Run :meth:`Select.next_query` directly on a packed structure."""
    bits, _, _, _ = _parse(packed)
    return _next_query(bits, vec_bit_idx)