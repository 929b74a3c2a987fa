"""Base class for codec adapters.

This module defines the interface every codec under test must implement.
The harness only ever hands a codec a producer to pull input from and a
consumer to push output into, one byte at a time, which keeps the codec
decoupled from where its bytes come from and where they go.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from codec_tester.core.streams import ByteConsumer, ByteProducer


class CodecAdapter(ABC):
    """Abstract base class for a compressor/decompressor pair.

    Both operations return True on success and False on a reported failure.
    ``decompress`` must tolerate truncated or corrupted input: failing or
    producing wrong output is fine, crashing is not. The harness still
    catches anything that escapes, but counts it as a codec error.

    Example:
        >>> class StoreCodec(CodecAdapter):
        ...     name = "store"
        ...     def compress(self, sink, source, max_symbol_bits):
        ...         while (value := source.pull()) is not None:
        ...             sink.push(value)
        ...         return True
        ...     def decompress(self, sink, source):
        ...         return self.compress(sink, source, 16)

    """

    #: Registry name and report label
    name: str = "codec"

    @abstractmethod
    def compress(
        self, sink: ByteConsumer, source: ByteProducer, max_symbol_bits: int
    ) -> bool:
        """Compress everything ``source`` yields into ``sink``.

        Args:
            sink: Receives compressed bytes in order
            source: Pulled until it returns None
            max_symbol_bits: Code-table width ceiling (9-16)

        Returns:
            True on success, False if the codec reports an error.

        """
        ...

    @abstractmethod
    def decompress(self, sink: ByteConsumer, source: ByteProducer) -> bool:
        """Decompress everything ``source`` yields into ``sink``.

        Args:
            sink: Receives decompressed bytes in order
            source: Compressed stream, possibly truncated or corrupted

        Returns:
            True on success, False if the stream was rejected.

        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def drain(source: ByteProducer, chunk_size: int) -> bytes:
    """Pull up to ``chunk_size`` bytes from ``source``.

    Returns an empty bytes object once the source is exhausted.
    """
    chunk = bytearray()
    while len(chunk) < chunk_size:
        value = source.pull()
        if value is None:
            break
        chunk.append(value)
    return bytes(chunk)


def emit(sink: ByteConsumer, data: bytes) -> None:
    """Push every byte of ``data`` into ``sink`` in order."""
    for value in data:
        sink.push(value)
