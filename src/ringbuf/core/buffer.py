# src/ringbuf/core/buffer.py
from __future__ import annotations
from typing import Generic, Iterator, List, Optional, TypeVar

from ringbuf.core import log

T = TypeVar("T")

__all__ = [
    "RingBuffer",
    "RingBufferError",
    "BufferFullError",
    "BufferEmptyError",
    "ErrBufferFull",
    "ErrBufferEmpty",
]


class RingBufferError(Exception):
    """Base for the expected, recoverable conditions of a RingBuffer."""


class BufferFullError(RingBufferError):
    """push() on a buffer already holding `capacity` elements."""


class BufferEmptyError(RingBufferError):
    """pop() or peek() on a buffer holding no elements."""


# Short aliases for callers that prefer the sentinel-style names
ErrBufferFull = BufferFullError
ErrBufferEmpty = BufferEmptyError


class RingBuffer(Generic[T]):
    """
    Fixed-capacity FIFO over a pre-allocated list.
    - push() writes at `front`, pop() reads at `back`, both wrap around
    - `full` tells FULL from EMPTY when the two cursors are equal
    - never overwrites: push on FULL raises BufferFullError, pop/peek on
      EMPTY raises BufferEmptyError, and the state is left untouched
    Not thread-safe; wrap it in your own lock if it is shared.
    """

    def __init__(self, capacity: int, name: str = "ringbuf"):
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise TypeError(f"capacity must be an int, got {type(capacity).__name__}")
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.name = name
        self.l = log.get(name)
        self._cap = capacity
        self._data: List[Optional[T]] = [None] * capacity
        self._front = 0  # next slot to write
        self._back = 0   # oldest element, next slot to read
        self._full = False

    def _advance(self, idx: int) -> int:
        return (idx + 1) % self._cap

    def push(self, item: T) -> None:
        if self._front == self._back and self._full:
            self.l.debug("push rejected: buffer full (cap=%d)", self._cap)
            raise BufferFullError(f"ring buffer full (cap={self._cap})")
        self._data[self._front] = item
        self._front = self._advance(self._front)
        if self._front == self._back:
            self._full = True

    def pop(self) -> T:
        if self._front == self._back and not self._full:
            self.l.debug("pop rejected: buffer empty")
            raise BufferEmptyError("ring buffer empty")
        item = self._data[self._back]
        self._back = self._advance(self._back)
        # any successful pop leaves room for one more push
        self._full = False
        return item  # type: ignore[return-value]

    def pop_all(self) -> List[T]:
        out: List[T] = []
        while True:
            try:
                out.append(self.pop())
            except BufferEmptyError:
                return out

    def peek(self) -> T:
        if self._front == self._back and not self._full:
            self.l.debug("peek rejected: buffer empty")
            raise BufferEmptyError("ring buffer empty")
        return self._data[self._back]  # type: ignore[return-value]

    def length(self) -> int:
        if self._full:
            return self._cap
        return (self._front - self._back) % self._cap

    @property
    def capacity(self) -> int:
        return self._cap

    @property
    def is_empty(self) -> bool:
        return self._front == self._back and not self._full

    @property
    def is_full(self) -> bool:
        return self._full

    def __len__(self) -> int:
        return self.length()

    def __iter__(self) -> Iterator[T]:
        # snapshot, oldest first; does not consume
        n = self.length()
        items = [self._data[(self._back + i) % self._cap] for i in range(n)]
        return iter(items)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"RingBuffer(name={self.name!r}, len={self.length()}, cap={self._cap})"
