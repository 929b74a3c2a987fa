"""Core round-trip verification and fault-injection engine.

This module contains the byte streams handed to the codec under test, the
deterministic corruption generator, the comparison sink, test case
generation and the orchestrator that classifies and counts outcomes.
"""

from .cases import TestCase, generate_test_cases, symbol_bits_range, truncation_ladder
from .config import HarnessSettings, get_settings
from .exceptions import CodecLoadError, CodecTesterError, SetupError
from .fuzz import DEFAULT_FUZZ_SEED, FuzzedSink, FuzzInjector
from .orchestrator import StreamContext, TestOrchestrator, describe_mismatch
from .statistics import RunStatistics
from .streams import ByteConsumer, ByteProducer, ByteStream
from .types import CaseOutcome, CaseReport
from .verifier import VerificationResult, Verifier

__all__ = [
    "ByteConsumer",
    "ByteProducer",
    "ByteStream",
    "CaseOutcome",
    "CaseReport",
    "CodecLoadError",
    "CodecTesterError",
    "DEFAULT_FUZZ_SEED",
    "FuzzedSink",
    "FuzzInjector",
    "HarnessSettings",
    "RunStatistics",
    "SetupError",
    "StreamContext",
    "TestCase",
    "TestOrchestrator",
    "VerificationResult",
    "Verifier",
    "describe_mismatch",
    "generate_test_cases",
    "get_settings",
    "symbol_bits_range",
    "truncation_ladder",
]
