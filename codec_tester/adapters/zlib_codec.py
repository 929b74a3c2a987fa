"""Deflate codec adapter backed by the standard library's zlib.

The maximum symbol size maps onto the deflate window: ``wbits`` is the
symbol size capped at 15, the largest window zlib supports. Decompression
always accepts the largest window, so any valid stream decodes.
"""

from __future__ import annotations

import zlib

import structlog

from codec_tester.adapters.base import CodecAdapter, drain, emit
from codec_tester.core.streams import ByteConsumer, ByteProducer

logger = structlog.get_logger(__name__)

_CHUNK = 64 * 1024


class ZlibCodec(CodecAdapter):
    """zlib-wrapped deflate at a fixed compression level."""

    name = "zlib"

    def __init__(self, level: int = 6):
        if not 0 <= level <= 9:
            raise ValueError(f"zlib level must be 0-9, got {level}")
        self.level = level

    @staticmethod
    def window_bits(max_symbol_bits: int) -> int:
        return min(max(max_symbol_bits, 9), zlib.MAX_WBITS)

    def compress(
        self, sink: ByteConsumer, source: ByteProducer, max_symbol_bits: int
    ) -> bool:
        try:
            compressor = zlib.compressobj(
                self.level, zlib.DEFLATED, self.window_bits(max_symbol_bits)
            )
            while chunk := drain(source, _CHUNK):
                emit(sink, compressor.compress(chunk))
            emit(sink, compressor.flush())
        except zlib.error as e:
            logger.warning("zlib_compress_failed", error=str(e))
            return False
        return True

    def decompress(self, sink: ByteConsumer, source: ByteProducer) -> bool:
        decompressor = zlib.decompressobj()
        try:
            while not decompressor.eof and (chunk := drain(source, _CHUNK)):
                # max_length bounds the output held in memory at once
                while chunk and not decompressor.eof:
                    emit(sink, decompressor.decompress(chunk, _CHUNK))
                    chunk = decompressor.unconsumed_tail
            if not decompressor.eof:
                emit(sink, decompressor.flush())
        except zlib.error as e:
            logger.debug("zlib_decompress_failed", error=str(e))
            return False

        if not decompressor.eof:
            logger.debug("zlib_stream_truncated")
            return False
        leftover = decompressor.unused_data or decompressor.unconsumed_tail
        if leftover or source.pull() is not None:
            logger.debug("zlib_trailing_garbage")
            return False
        return True
