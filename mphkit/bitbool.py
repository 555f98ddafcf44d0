"""Bit, 2-bit and packed variable-width integer access in byte and word arrays.

Byte arrays are ``bytearray`` objects; word arrays are mutable sequences of
unsigned 32-bit integers (such as ``list[int]``). Setters change the array in
place.
"""

from __future__ import annotations

from typing import MutableSequence

_MASK32 = 0xFFFFFFFF
_VALUE_MASK = (0xFC, 0xF3, 0xCF, 0x3F)

Words = MutableSequence[int]


def get_bit(array: bytearray, i: int) -> int:
    """Return bit ``i`` (0 or 1) of a byte array."""
    return (array[i >> 3] >> (i & 7)) & 1


def set_bit(array: bytearray, i: int) -> None:
    """Set bit ``i`` of a byte array to one."""
    array[i >> 3] |= 1 << (i & 7)


def set_value1(array: bytearray, i: int, v: int) -> None:
    """Store the 2-bit value ``v`` at slot ``i`` of an array filled with ones."""
    shift = (i & 3) << 1
    array[i >> 2] &= ((v << shift) | _VALUE_MASK[i & 3]) & 0xFF


def set_value0(array: bytearray, i: int, v: int) -> None:
    """Store the 2-bit value ``v`` at slot ``i`` of an array filled with zeros."""
    array[i >> 2] |= (v << ((i & 3) << 1)) & 0xFF


def get_value(array: bytearray, i: int) -> int:
    """Return the 2-bit value at slot ``i``."""
    return (array[i >> 2] >> ((i & 3) << 1)) & 3


def set_bit32(array: Words, i: int) -> None:
    """Set bit ``i`` of a word array to one."""
    array[i >> 5] |= 1 << (i & 31)


def get_bit32(array: Words, i: int) -> bool:
    """Return whether bit ``i`` of a word array is set."""
    return bool(array[i >> 5] & (1 << (i & 31)))


def unset_bit32(array: Words, i: int) -> None:
    """Flip bit ``i`` of a word array; clears it when it was set."""
    array[i >> 5] ^= 1 << (i & 31)


def bits_table_size(n: int, bits_length: int) -> int:
    """Return the number of 32-bit words holding ``n`` values of ``bits_length`` bits."""
    return (n * bits_length + 31) >> 5


def _store(table: Words, pos: int, bits: int, length: int, mask: int) -> None:
    word = pos >> 5
    shift1 = pos & 31
    shift2 = 32 - shift1
    table[word] &= ~(mask << shift1) & _MASK32
    table[word] |= (bits << shift1) & _MASK32
    if shift2 < length:
        table[word + 1] &= ~(mask >> shift2) & _MASK32
        table[word + 1] |= (bits >> shift2) & _MASK32


def _fetch(table: Words, pos: int, length: int, mask: int) -> int:
    word = pos >> 5
    shift1 = pos & 31
    shift2 = 32 - shift1
    bits = (table[word] >> shift1) & mask
    if shift2 < length:
        bits |= (table[word + 1] << shift2) & mask
    return bits


def set_bits_value(
    bits_table: Words, index: int, bits_string: int, string_length: int, string_mask: int
) -> None:
    """Store ``bits_string`` as the ``index``-th value of width ``string_length``."""
    _store(bits_table, index * string_length, bits_string, string_length, string_mask & _MASK32)


def get_bits_value(
    bits_table: Words, index: int, string_length: int, string_mask: int
) -> int:
    """Return the ``index``-th value of width ``string_length``."""
    return _fetch(bits_table, index * string_length, string_length, string_mask & _MASK32)


def _length_mask(string_length: int) -> int:
    return ((1 << string_length) - 1) & _MASK32


def set_bits_at_pos(
    bits_table: Words, pos: int, bits_string: int, string_length: int
) -> None:
    """Store ``bits_string`` of width ``string_length`` starting at bit ``pos``."""
    _store(bits_table, pos, bits_string, string_length, _length_mask(string_length))


def get_bits_at_pos(bits_table: Words, pos: int, string_length: int) -> int:
    """Return the ``string_length``-bit value starting at bit ``pos``."""
    return _fetch(bits_table, pos, string_length, _length_mask(string_length))