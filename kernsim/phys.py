"""A bump allocator over a range of physical memory."""

from __future__ import annotations


class PhysicalAllocator:
    """Hands out addresses from ``start`` upward; memory is never reclaimed."""

    def __init__(self, start: int, length: int) -> None:
        if length < 0:
            raise ValueError("region length cannot be negative")
        self.start = start
        self.end = start + length
        self._next = start

    @property
    def used(self) -> int:
        return self._next - self.start

    @property
    def remaining(self) -> int:
        return self.end - self._next

    def alloc(self, length: int) -> int:
        """Reserve ``length`` bytes and return their address."""
        if length < 0:
            raise ValueError("allocation length cannot be negative")
        if self._next + length > self.end:
            raise MemoryError(f"cannot allocate {length} bytes, {self.remaining} left")
        address = self._next
        self._next += length
        return address

    def free(self, address: int) -> None:
        """Release an allocation; the bump allocator keeps the space in use."""
        if not self.start <= address < self._next:
            raise ValueError(f"address {address:#x} was not allocated here")