from __future__ import annotations

from collections import deque
from typing import Deque, Iterator


class ReadyQueue:
    """
    FIFO of batch indices waiting for the CPU.

    Holds indices rather than task names so a dequeued item maps straight
    back to the scheduler's per-task state.
    """

    def __init__(self) -> None:
        self._items: Deque[int] = deque()

    def enqueue(self, index: int) -> None:
        self._items.append(index)

    def dequeue(self) -> int:
        """
        Remove and return the head. Raises IndexError when empty.
        """
        if not self._items:
            raise IndexError("dequeue from an empty ready queue")
        return self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[int]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"ReadyQueue({list(self._items)!r})"
