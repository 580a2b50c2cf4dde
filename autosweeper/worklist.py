"""Circular doubly-linked worklist of cells awaiting deduction."""

from typing import Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class CircularWorklist(Generic[T]):
    """
    Circular doubly-linked list stored as an arena of nodes.

    Each node is addressed by the integer handle returned from append().
    Links live in parallel next/prev arrays, so append and remove are O(1)
    and no node holds a reference to another node object.

    When non-empty the list is closed into a ring: next[tail] == head and
    prev[head] == tail. Handles are never reused; a removed node keeps its
    value but loses its links and cannot be re-inserted.
    """

    def __init__(self) -> None:
        self._values: List[T] = []
        self._next: List[int] = []
        self._prev: List[int] = []
        self._linked: List[bool] = []
        self.head: Optional[int] = None
        self.tail: Optional[int] = None
        self._size: int = 0

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __contains__(self, handle: object) -> bool:
        return (
            isinstance(handle, int)
            and 0 <= handle < len(self._linked)
            and self._linked[handle]
        )

    def value(self, handle: int) -> T:
        return self._values[handle]

    def next(self, handle: int) -> int:
        self._check_linked(handle)
        return self._next[handle]

    def prev(self, handle: int) -> int:
        self._check_linked(handle)
        return self._prev[handle]

    def append(self, value: T) -> int:
        """Link a new node after the tail and return its handle."""
        handle = len(self._values)
        self._values.append(value)
        self._next.append(handle)
        self._prev.append(handle)
        self._linked.append(True)

        if self.head is None or self.tail is None:
            self.head = handle
            self.tail = handle
        else:
            self._next[self.tail] = handle
            self._prev[handle] = self.tail
            self.tail = handle
        self._close_ring()
        self._size += 1
        return handle

    def remove(self, handle: int) -> None:
        """
        Unlink a node currently in the list.

        Raises:
            KeyError: If the handle is not linked into this list.
        """
        self._check_linked(handle)

        if handle == self.head and handle == self.tail:
            self.head = None
            self.tail = None
        else:
            prev_handle = self._prev[handle]
            next_handle = self._next[handle]
            self._next[prev_handle] = next_handle
            self._prev[next_handle] = prev_handle
            if self.head == handle:
                self.head = next_handle
            if self.tail == handle:
                self.tail = prev_handle
            self._close_ring()

        self._next[handle] = handle
        self._prev[handle] = handle
        self._linked[handle] = False
        self._size -= 1

    def traverse(self) -> Iterator[int]:
        """
        Yield handles from the head, following next links forever.

        The ring never ends on its own, so the consumer must decide when to
        stop. The consumer may remove the handle it was just given; traversal
        then resumes at that node's former successor. The generator only
        returns once the list is empty.
        """
        current = self.head
        while current is not None:
            successor = self._next[current]
            yield current

            if self._linked[current]:
                current = self._next[current]
            elif successor in self:
                current = successor
            else:
                current = self.head

    def _close_ring(self) -> None:
        if self.head is not None and self.tail is not None:
            self._next[self.tail] = self.head
            self._prev[self.head] = self.tail

    def _check_linked(self, handle: int) -> None:
        if handle not in self:
            raise KeyError(f"Node {handle} is not linked into this worklist.")
