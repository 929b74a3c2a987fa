"""
Pytest configuration and shared fixtures for Codec Tester tests.
"""

import io
from pathlib import Path

import pytest

from codec_tester.adapters import CodecAdapter
from codec_tester.core.config import HarnessSettings
from codec_tester.utils.logger import configure_logging


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Route structlog output to stderr at WARNING before any logger is used."""
    configure_logging(log_level="WARNING", json_format=False)
    yield


# ---------- fake codecs ----------


class StoreCodec(CodecAdapter):
    """Copies input to output unchanged in both directions."""

    name = "store"

    def compress(self, sink, source, max_symbol_bits):
        while (value := source.pull()) is not None:
            sink.push(value)
        return True

    def decompress(self, sink, source):
        while (value := source.pull()) is not None:
            sink.push(value)
        return True


class InflatingCodec(StoreCodec):
    """Appends ``extra`` padding bytes when compressing, strips them again."""

    name = "inflating"

    def __init__(self, extra=1):
        self.extra = extra

    def compress(self, sink, source, max_symbol_bits):
        super().compress(sink, source, max_symbol_bits)
        for _ in range(self.extra):
            sink.push(0)
        return True

    def decompress(self, sink, source):
        data = bytearray()
        while (value := source.pull()) is not None:
            data.append(value)
        for value in data[: len(data) - self.extra]:
            sink.push(value)
        return True


class FailingCompressCodec(StoreCodec):
    name = "failing-compress"

    def compress(self, sink, source, max_symbol_bits):
        return False


class FailingDecompressCodec(StoreCodec):
    name = "failing-decompress"

    def decompress(self, sink, source):
        return False


class RaisingCodec(StoreCodec):
    """Blows up in decompress, the way a buggy codec might on corrupt input."""

    name = "raising"

    def decompress(self, sink, source):
        raise IndexError("symbol table overrun")


class TruncatingCodec(StoreCodec):
    """Decompresses all but the last ``missing`` bytes."""

    name = "truncating"

    def __init__(self, missing=1):
        self.missing = missing

    def decompress(self, sink, source):
        data = bytearray()
        while (value := source.pull()) is not None:
            data.append(value)
        for value in data[: max(0, len(data) - self.missing)]:
            sink.push(value)
        return True


class ExtraOutputCodec(StoreCodec):
    """Decompresses correctly, then emits ``extra`` trailing bytes."""

    name = "extra-output"

    def __init__(self, extra=2):
        self.extra = extra

    def decompress(self, sink, source):
        super().decompress(sink, source)
        for _ in range(self.extra):
            sink.push(0x55)
        return True


class SilentCodec(StoreCodec):
    """Reports success without producing any output."""

    name = "silent"

    def decompress(self, sink, source):
        while source.pull() is not None:
            pass
        return True


class BitFlipCodec(StoreCodec):
    """Flips the low bit of the bytes at ``positions`` while decompressing."""

    name = "bit-flip"

    def __init__(self, positions=(3,)):
        self.positions = set(positions)

    def decompress(self, sink, source):
        index = 0
        while (value := source.pull()) is not None:
            sink.push(value ^ 1 if index in self.positions else value)
            index += 1
        return True


@pytest.fixture
def settings():
    """Default harness settings, independent of the environment."""
    return HarnessSettings(_env_file=None)


@pytest.fixture
def report():
    """Captured orchestrator output."""
    return io.StringIO()


@pytest.fixture
def write_file(tmp_path):
    """Factory writing ``data`` to a file under tmp_path."""

    def _write(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def sample_bytes() -> bytes:
    """A few KB of mixed text and binary data that compresses well."""
    text = b"The quick brown fox jumps over the lazy dog. " * 40
    binary = bytes(range(256)) * 4
    return text + binary + text[:333]
