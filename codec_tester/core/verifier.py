"""Verifier - Push-Only Comparison Sink.

Decompressed bytes are never stored. Each one is compared against the
original data at the same position as it arrives, which keeps memory flat
no matter how much garbage a corrupted stream makes the decompressor emit.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of comparing decompressed output against the reference.

    Attributes:
        bytes_checked: Bytes compared before the reference ran out
        mismatch_count: Positions where output differed from the reference
        first_mismatch_index: Offset of the first differing byte, if any
        length_short: Reference bytes the decompressor never produced
        length_extra: Bytes produced after the reference was exhausted

    """

    bytes_checked: int
    mismatch_count: int
    first_mismatch_index: int | None
    length_short: int
    length_extra: int

    @property
    def produced_nothing(self) -> bool:
        return self.bytes_checked == 0 and self.length_extra == 0

    @property
    def is_success(self) -> bool:
        return (
            self.length_short == 0
            and self.length_extra == 0
            and self.mismatch_count == 0
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


class Verifier:
    """Sink that checks each pushed byte against a reference buffer."""

    def __init__(self, reference: bytes | bytearray | memoryview):
        self.reference = reference
        self.capacity = len(reference)
        self.cursor = 0
        self.wrap_count = 0
        self.mismatch_count = 0
        self.first_mismatch_index: int | None = None

    def push(self, value: int) -> None:
        if self.cursor == self.capacity:
            # reference exhausted, decompressor kept going
            self.wrap_count += 1
            return

        if self.reference[self.cursor] != value:
            if self.first_mismatch_index is None:
                self.first_mismatch_index = self.cursor
            self.mismatch_count += 1

        self.cursor += 1

    def reset(self, reference: bytes | bytearray | memoryview | None = None) -> None:
        """Clear counters, optionally switching to a new reference window."""
        if reference is not None:
            self.reference = reference
            self.capacity = len(reference)
        self.cursor = 0
        self.wrap_count = 0
        self.mismatch_count = 0
        self.first_mismatch_index = None

    def result(self) -> VerificationResult:
        """Freeze the current counters into a VerificationResult."""
        return VerificationResult(
            bytes_checked=self.cursor,
            mismatch_count=self.mismatch_count,
            first_mismatch_index=self.first_mismatch_index,
            length_short=self.capacity - self.cursor,
            length_extra=self.wrap_count,
        )

    def release(self) -> None:
        self.reference = b""
        self.capacity = 0
