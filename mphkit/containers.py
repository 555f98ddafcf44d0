"""Small containers: a bounded FIFO queue, a growable stack and an ordered string map."""

from __future__ import annotations

from collections import deque
from typing import Any, Iterator


class VQueue:
    """A FIFO queue of unsigned integers holding at most ``capacity`` items."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self.capacity = capacity
        self._items: deque[int] = deque()

    def is_empty(self) -> bool:
        return not self._items

    def insert(self, val: int) -> None:
        if len(self._items) >= self.capacity:
            raise IndexError("queue is full")
        self._items.append(val)

    def remove(self) -> int:
        if not self._items:
            raise IndexError("queue is empty")
        return self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[int]:
        return iter(self._items)


class VStack:
    """A LIFO stack of unsigned integers whose capacity grows by doubling."""

    def __init__(self) -> None:
        self._items: list[int] = []
        self.capacity = 0

    def reserve(self, size: int) -> None:
        """Make room for ``size`` items, growing as capacity + 1 doubled."""
        if self.capacity < size:
            new_capacity = self.capacity + 1
            while new_capacity < size:
                new_capacity *= 2
            self.capacity = new_capacity

    def push(self, val: int) -> None:
        self.reserve(len(self._items) + 1)
        self._items.append(val)

    def pop(self) -> int:
        if not self._items:
            raise IndexError("pop from empty stack")
        return self._items.pop()

    def top(self) -> int:
        if not self._items:
            raise IndexError("top of empty stack")
        return self._items[-1]

    def empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)


class LinearStringMap:
    """An insertion-ordered map from strings to values, searched linearly."""

    def __init__(self) -> None:
        self._entries: list[tuple[str, Any]] = []

    def append(self, key: str, value: Any) -> None:
        self._entries.append((key, value))

    def search(self, key: str) -> Any:
        """Return the value of the first entry named ``key``, or None."""
        return next((value for name, value in self._entries if name == key), None)

    def keys(self) -> Iterator[str]:
        return (name for name, _ in self._entries)

    def values(self) -> Iterator[Any]:
        return (value for _, value in self._entries)

    def __len__(self) -> int:
        return len(self._entries)