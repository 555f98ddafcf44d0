"""Buckets of keys grouped by their first-level hash value."""

from __future__ import annotations

from typing import Union

Key = Union[bytes, bytearray, memoryview, str]


def _as_bytes(key: Key) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    return bytes(key)


class FchBuckets:
    """A fixed number of buckets, each an ordered list of keys."""

    def __init__(self, nbuckets: int) -> None:
        if nbuckets < 0:
            raise ValueError("number of buckets must be non-negative")
        self._buckets: list[list[bytes]] = [[] for _ in range(nbuckets)]
        self._max_size = 0

    def _bucket(self, index: int) -> list[bytes]:
        if not 0 <= index < len(self._buckets):
            raise IndexError(f"bucket {index} out of range")
        return self._buckets[index]

    def is_empty(self, index: int) -> bool:
        return not self._bucket(index)

    def insert(self, index: int, key: Key) -> None:
        bucket = self._bucket(index)
        bucket.append(_as_bytes(key))
        self._max_size = max(self._max_size, len(bucket))

    def size(self, index: int) -> int:
        return len(self._bucket(index))

    def key(self, index: int, index_key: int) -> bytes:
        bucket = self._bucket(index)
        if not 0 <= index_key < len(bucket):
            raise IndexError(f"key {index_key} out of range in bucket {index}")
        return bucket[index_key]

    def max_size(self) -> int:
        """Return the size of the largest bucket."""
        return self._max_size

    def nbuckets(self) -> int:
        return len(self._buckets)

    def indexes_sorted_by_size(self) -> list[int]:
        """Return bucket indexes from largest to smallest; equal sizes keep index order."""
        return sorted(range(len(self._buckets)), key=lambda i: -len(self._buckets[i]))

    def describe(self) -> str:
        """Return a listing of every bucket and its keys."""
        lines: list[str] = []
        for index, bucket in enumerate(self._buckets):
            lines.append(f"Printing bucket {index} ...")
            lines.extend(
                f"  key: {key.decode('utf-8', errors='replace')}" for key in bucket
            )
        return "\n".join(lines)