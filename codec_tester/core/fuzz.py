"""Fuzz Injector - Deterministic Compressed-Stream Corruption.

Corrupts roughly one byte in every 65536 written to the compressed sink.
The generator has no external entropy: the same seed and the same sequence
of pushes always corrupt the same positions with the same values, so a
failure seen once can be reproduced by rerunning the same command line.

The injector sits between the compressor's output and the sink stream only.
Source bytes and the verifier's reference are never touched.
"""

from __future__ import annotations

import structlog

from codec_tester.core.streams import ByteConsumer, ByteStream

logger = structlog.get_logger(__name__)

#: Initial generator state (the digits of pi)
DEFAULT_FUZZ_SEED = 0x3141592653589793

_MASK64 = (1 << 64) - 1


class FuzzInjector:
    """Encapsulated 64-bit mixing generator.

    Each call to :meth:`corrupt` runs three rounds of
    ``state = ((state << 4) - state) ^ 1`` and, when the top 16 bits of the
    result are all zero, XORs the byte with bits 40-47 of the state.

    Attributes:
        state: Current 64-bit generator state
        enabled: When False, bytes pass through and the state never moves
        corruptions: Number of bytes actually changed so far

    """

    def __init__(self, seed: int = DEFAULT_FUZZ_SEED, enabled: bool = True):
        self.seed = seed & _MASK64
        self.state = self.seed
        self.enabled = enabled
        self.corruptions = 0

    def advance(self) -> int:
        """Run the three mixing rounds and return the new state."""
        state = self.state
        for _ in range(3):
            state = (((state << 4) - state) ^ 1) & _MASK64
        self.state = state
        return state

    def corrupt(self, value: int) -> int:
        """Return ``value``, occasionally with some bits flipped."""
        if not self.enabled:
            return value

        state = self.advance()
        if state >> 48:
            return value

        corrupted = value ^ ((state >> 40) & 0xFF)
        if corrupted != value:
            self.corruptions += 1
        return corrupted

    def wrap(self, sink: ByteStream) -> ByteConsumer:
        """Route pushes to ``sink`` through this injector.

        A disabled injector returns the sink itself.
        """
        if not self.enabled:
            return sink
        return FuzzedSink(sink, self)

    def __repr__(self) -> str:
        return (
            f"FuzzInjector(state={self.state:#018x}, enabled={self.enabled}, "
            f"corruptions={self.corruptions})"
        )


class FuzzedSink:
    """Consumer that corrupts bytes on their way into a ByteStream."""

    def __init__(self, sink: ByteStream, injector: FuzzInjector):
        self.sink = sink
        self.injector = injector

    def push(self, value: int) -> None:
        corrupted = self.injector.corrupt(value)
        self.sink.push(corrupted)
        if corrupted != value:
            # cursor is already past the byte, wherever a wrap put it
            logger.debug(
                "byte_corrupted",
                position=self.sink.cursor - 1,
                original=value,
                replacement=corrupted,
            )
