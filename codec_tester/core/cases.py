"""Test Case Generation - Symbol-Size Sweep and Truncation Ladder.

The base matrix for a file is every maximum symbol size from 9 to 16 bits
(or one pinned value). Exhaustive mode multiplies that by a ladder of ever
smaller windows cut from the middle of the file, so a single input probes
the codec across the whole range of sizes relative to its table-reset
thresholds without extra fixture files.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Final

MIN_SYMBOL_BITS: Final[int] = 9
MAX_SYMBOL_BITS: Final[int] = 16

#: Each ladder rung removes ceil(size / LADDER_DIVISOR) bytes
LADDER_DIVISOR: Final[int] = 100


@dataclass(frozen=True)
class TestCase:
    """One configuration to run against one file.

    Attributes:
        filename: Input file label used in reports
        max_symbol_bits: Codec symbol-size ceiling (9-16)
        offset: Start of the tested window within the file
        length: Size of the tested window

    """

    __test__ = False  # not a pytest class

    filename: str
    max_symbol_bits: int
    offset: int
    length: int

    def __post_init__(self) -> None:
        if not MIN_SYMBOL_BITS <= self.max_symbol_bits <= MAX_SYMBOL_BITS:
            raise ValueError(
                f"max_symbol_bits must be {MIN_SYMBOL_BITS}-{MAX_SYMBOL_BITS}, "
                f"got {self.max_symbol_bits}"
            )
        if self.offset < 0 or self.length < 0:
            raise ValueError("offset and length must be non-negative")

    def is_truncated(self, file_size: int) -> bool:
        return self.offset != 0 or self.length != file_size

    def label(self, file_size: int) -> str:
        """File name, with the window appended when it is not the whole file."""
        if self.is_truncated(file_size):
            return f"{self.filename} [{self.offset}+{self.length}]"
        return self.filename


def symbol_bits_range(pinned: int | None = None) -> range:
    """Symbol sizes to sweep.

    Args:
        pinned: Single size to test, or None/0 for the full 9-16 sweep

    Raises:
        ValueError: If ``pinned`` is outside 9-16

    """
    if not pinned:
        return range(MIN_SYMBOL_BITS, MAX_SYMBOL_BITS + 1)
    if not MIN_SYMBOL_BITS <= pinned <= MAX_SYMBOL_BITS:
        raise ValueError(
            f"max symbol bits must be {MIN_SYMBOL_BITS}-{MAX_SYMBOL_BITS}, got {pinned}"
        )
    return range(pinned, pinned + 1)


def truncation_ladder(size: int) -> Iterator[tuple[int, int]]:
    """Yield ``(offset, length)`` windows of a ``size``-byte file.

    Starts with the whole file. Each rung removes ``ceil(length / 100)``
    bytes, the front half by advancing the offset and the rest from the
    back. Stops after the first rung whose length is at most 1 byte or at
    most 1% of ``size``.
    """
    if size <= 0:
        return

    offset, length = 0, size
    yield offset, length

    while length > 1 and length * LADDER_DIVISOR > size:
        step = -(-length // LADDER_DIVISOR)
        offset += step // 2
        length -= step
        yield offset, length


def generate_test_cases(
    filename: str,
    file_size: int,
    max_symbol_bits: int | None = None,
    exhaustive: bool = False,
) -> Iterator[TestCase]:
    """Yield every test case for one file.

    Args:
        filename: Label for reports
        file_size: Size of the loaded file in bytes
        max_symbol_bits: Pinned symbol size, or None for the full sweep
        exhaustive: Repeat the sweep at every truncation ladder rung

    """
    bits = symbol_bits_range(max_symbol_bits)
    windows = truncation_ladder(file_size) if exhaustive else iter([(0, file_size)])

    for offset, length in windows:
        for maxbits in bits:
            yield TestCase(filename, maxbits, offset, length)
