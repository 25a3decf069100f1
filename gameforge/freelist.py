"""First-fit allocator that tracks free and used ranges of a fixed-size region."""

from __future__ import annotations

from typing import Any, Iterator


class FreelistFullError(MemoryError):
    """Raised when no free block is large enough for a request."""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            f"not enough memory to fit the request "
            f"(requested: {requested}B available: {available}B)"
        )
        self.requested = requested
        self.available = available


class FreelistNode:
    """A contiguous range of a freelist, either free or in use."""

    def __init__(
        self,
        offset: int,
        size: int,
        is_free: bool = True,
        memory: Any = None,
    ) -> None:
        self._offset = int(offset)
        self._size = int(size)
        self._is_free = bool(is_free)
        self._memory = memory
        self._prev: FreelistNode | None = None
        self._next: FreelistNode | None = None

    @property
    def offset(self) -> int:
        """Start of the range within the region."""
        return self._offset

    @property
    def size(self) -> int:
        """Length of the range."""
        return self._size

    @property
    def is_free(self) -> bool:
        """True if the range is available for allocation."""
        return self._is_free

    @property
    def memory(self) -> Any:
        """Backing memory object attached to this node, if any."""
        return self._memory

    def _unlink(self) -> None:
        if self._prev is not None:
            self._prev._next = self._next
        if self._next is not None:
            self._next._prev = self._prev
        self._prev = None
        self._next = None

    def _absorb_next(self) -> None:
        following = self._next
        if following is not None:
            self._size += following._size
            following._unlink()

    def free_block(self) -> None:
        """Mark this range free and merge it with free neighbours.

        Merging always keeps the earlier node, so a node merged into its
        predecessor is detached from the list afterwards.
        """
        self._is_free = True
        node = self
        previous = self._prev
        if previous is not None and previous._is_free:
            previous._absorb_next()
            node = previous
        following = node._next
        if following is not None and following._is_free:
            node._absorb_next()

    def __repr__(self) -> str:
        state = "free" if self._is_free else "used"
        return f"FreelistNode(offset={self._offset}, size={self._size}, {state})"


class Freelist:
    """Hands out ranges of a region of ``total_size`` bytes, first fit."""

    def __init__(self, total_size: int, memory: Any = None) -> None:
        if total_size < 0:
            raise ValueError("total size must not be negative")
        self.total_size = int(total_size)
        self.memory = memory
        self._first = FreelistNode(0, self.total_size, True, memory)

    def __iter__(self) -> Iterator[FreelistNode]:
        """Yield the nodes in offset order."""
        node: FreelistNode | None = self._first
        while node is not None:
            yield node
            node = node._next

    def allocate_block(self, size: int) -> FreelistNode:
        """Take ``size`` bytes from the first free block that fits.

        Raises :class:`FreelistFullError` when no free block is large enough.
        """
        size = int(size)
        if size < 0:
            raise ValueError("allocation size must not be negative")
        for current in self:
            if not current._is_free or current._size < size:
                continue
            occupied = FreelistNode(current._offset, size, False)
            occupied._prev = current._prev
            occupied._next = current
            if current._prev is not None:
                current._prev._next = occupied
            else:
                self._first = occupied
            current._prev = occupied
            current._offset += size
            current._size -= size
            if current._size == 0:
                current._unlink()
            return occupied
        raise FreelistFullError(size, self.free_space())

    def free_by_offset(self, offset: int) -> bool:
        """Free the used block starting at ``offset``; False if there is none."""
        for node in self:
            if node._offset == offset and not node._is_free:
                node.free_block()
                return True
        return False

    def clear(self) -> None:
        """Release every block, leaving one free range over the whole region."""
        self._first = FreelistNode(0, self.total_size, True, self.memory)

    def free_space(self) -> int:
        """Bytes not held by used blocks."""
        return self.total_size - sum(node._size for node in self if not node._is_free)