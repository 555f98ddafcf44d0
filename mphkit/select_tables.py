"""Per-byte rank and select lookup tables for bit vectors."""

from __future__ import annotations

NO_SUCH_BIT = 255
"""Returned by :func:`select_in_byte` when the byte has too few set bits."""


def _set_positions(byte: int) -> tuple[int, ...]:
    return tuple(bit for bit in range(8) if byte >> bit & 1)


RANK_LOOKUP_TABLE: tuple[int, ...] = tuple(len(_set_positions(b)) for b in range(256))
"""``RANK_LOOKUP_TABLE[b]`` is the number of bits set in byte ``b``."""

SELECT_LOOKUP_TABLE: tuple[tuple[int, ...], ...] = tuple(
    _set_positions(b) + (NO_SUCH_BIT,) * (8 - len(_set_positions(b)))
    for b in range(256)
)
"""``SELECT_LOOKUP_TABLE[b][j]`` is the position of the ``j``-th set bit of ``b``."""


def _check_byte(byte: int) -> None:
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"{byte} is not a byte value")


def rank_of_byte(byte: int) -> int:
    """Return the number of bits set to one in ``byte``."""
    _check_byte(byte)
    return RANK_LOOKUP_TABLE[byte]


def select_in_byte(byte: int, j: int) -> int:
    """Return the position of the ``j``-th set bit of ``byte`` (counting from 0).

    When ``byte`` has at most ``j`` set bits, 255 is returned.
    """
    _check_byte(byte)
    if not 0 <= j < 8:
        raise ValueError(f"bit rank {j} is outside 0..7")
    return SELECT_LOOKUP_TABLE[byte][j]