"""
Codec Tester - round-trip verification and fuzz harness for byte-stream codecs.

Drives a compressor/decompressor pair through every symbol-size setting,
checks that decompression reproduces the input exactly, flags output
inflation, and optionally corrupts or truncates data to confirm the codec
fails safely.
"""

__version__ = "1.0.0"
__license__ = "MIT"

from codec_tester.adapters import CodecAdapter, ZlibCodec, load_codec
from codec_tester.core.fuzz import FuzzInjector
from codec_tester.core.orchestrator import TestOrchestrator
from codec_tester.core.statistics import RunStatistics
from codec_tester.core.verifier import VerificationResult, Verifier

__all__ = [
    "__version__",
    "__license__",
    "CodecAdapter",
    "ZlibCodec",
    "load_codec",
    "FuzzInjector",
    "TestOrchestrator",
    "RunStatistics",
    "VerificationResult",
    "Verifier",
]
