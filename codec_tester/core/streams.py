"""Byte Streams - Fixed-Capacity Pull/Push Buffers.

The codec under test never sees files or bytes objects. It talks to two
narrow capabilities: a producer it pulls bytes from and a consumer it pushes
bytes into. ByteStream implements both over a fixed-capacity buffer.

Overflow is not an error here. A push past capacity wraps the cursor back to
zero and bumps ``wrap_count``, so the orchestrator can tell "output did not
fit" apart from a crash and classify it as inflation.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteProducer(Protocol):
    """Source side of the codec boundary."""

    def pull(self) -> int | None:
        """Return the next byte, or None once the data is exhausted."""
        ...


@runtime_checkable
class ByteConsumer(Protocol):
    """Sink side of the codec boundary."""

    def push(self, value: int) -> None:
        """Accept one output byte."""
        ...


class ByteStream:
    """Position-addressed byte buffer with ring-buffer overflow semantics.

    Attributes:
        buffer: Backing storage (bytearray or memoryview window)
        capacity: Effective size, never larger than the backing storage
        cursor: Next read/write position, ``0 <= cursor <= capacity``
        wrap_count: Number of times a push crossed the capacity boundary

    """

    def __init__(self, buffer: bytearray | memoryview, capacity: int | None = None):
        """Wrap existing storage.

        Args:
            buffer: Storage to read from or write into
            capacity: Effective capacity (defaults to the whole buffer)

        Raises:
            ValueError: If capacity exceeds the buffer size

        """
        self.buffer: bytearray | memoryview | None = buffer
        self.capacity = len(buffer) if capacity is None else capacity
        if not 0 <= self.capacity <= len(buffer):
            raise ValueError(
                f"capacity {self.capacity} outside buffer of {len(buffer)} bytes"
            )
        self.cursor = 0
        self.wrap_count = 0

    @classmethod
    def allocate(cls, capacity: int) -> ByteStream:
        """Create a zero-filled stream owning ``capacity`` bytes.

        Raises:
            MemoryError: If the allocation cannot be satisfied

        """
        return cls(bytearray(capacity))

    @property
    def allocated(self) -> int:
        """Size of the backing storage."""
        return 0 if self.buffer is None else len(self.buffer)

    @property
    def wrapped(self) -> bool:
        return self.wrap_count > 0

    def pull(self) -> int | None:
        if self.cursor == self.capacity:
            return None

        value = self.buffer[self.cursor]
        self.cursor += 1
        return value

    def push(self, value: int) -> None:
        if self.cursor == self.capacity:
            self.cursor = 0
            self.wrap_count += 1

        self.buffer[self.cursor] = value & 0xFF
        self.cursor += 1

    def reset(self, capacity: int | None = None) -> None:
        """Rewind for the next configuration.

        Args:
            capacity: Optional new effective capacity, bounded by the
                allocated storage

        Raises:
            ValueError: If capacity exceeds the allocated storage

        """
        if capacity is not None:
            if not 0 <= capacity <= self.allocated:
                raise ValueError(
                    f"capacity {capacity} outside buffer of {self.allocated} bytes"
                )
            self.capacity = capacity
        self.cursor = 0
        self.wrap_count = 0

    def written(self) -> memoryview:
        """Zero-copy view of the bytes between the start and the cursor."""
        return memoryview(self.buffer)[: self.cursor]

    def release(self) -> None:
        """Drop the backing storage. The stream is unusable afterwards."""
        self.buffer = None
        self.capacity = self.cursor = self.wrap_count = 0

    def __len__(self) -> int:
        return self.capacity

    def __repr__(self) -> str:
        return (
            f"ByteStream(capacity={self.capacity}, cursor={self.cursor}, "
            f"wrap_count={self.wrap_count})"
        )
