"""Codec Tester Type Definitions.

Shared outcome types used by the orchestrator, statistics and CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from codec_tester.core.cases import TestCase
from codec_tester.core.verifier import VerificationResult


class CaseOutcome(Enum):
    """Terminal state of one test case."""

    SUCCESS = "success"
    COMPRESS_ERROR = "compress_error"  # codec reported failure or raised
    INFLATION_ERROR = "inflation_error"  # compressed output overran the sink
    DECOMPRESS_ERROR = "decompress_error"  # codec reported failure or raised
    VERIFY_ERROR = "verify_error"  # length or content mismatch

    @property
    def is_error(self) -> bool:
        return self is not CaseOutcome.SUCCESS


@dataclass
class CaseReport:
    """Everything the orchestrator learned about one test case.

    Attributes:
        case: The configuration that was run
        outcome: Terminal state
        input_bytes: Bytes pulled from the source window
        output_bytes: Compressed size (0 when compression failed)
        verification: Comparison result, when decompression completed
        messages: Human-readable failure lines, in reporting order

    """

    case: TestCase
    outcome: CaseOutcome
    input_bytes: int = 0
    output_bytes: int = 0
    verification: VerificationResult | None = None
    messages: list[str] = field(default_factory=list)

    @property
    def is_error(self) -> bool:
        return self.outcome.is_error

    @property
    def ratio(self) -> float:
        """Compressed size as a percentage of the input."""
        if not self.input_bytes:
            return 0.0
        return self.output_bytes * 100.0 / self.input_bytes

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "filename": self.case.filename,
            "max_symbol_bits": self.case.max_symbol_bits,
            "offset": self.case.offset,
            "length": self.case.length,
            "outcome": self.outcome.value,
            "input_bytes": self.input_bytes,
            "output_bytes": self.output_bytes,
            "verification": self.verification.to_dict() if self.verification else None,
            "messages": list(self.messages),
        }
