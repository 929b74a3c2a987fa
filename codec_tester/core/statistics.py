"""
Run Statistics - Process-Wide Result Accumulator

Counts files, cases and errors across a whole run and keeps cumulative byte
totals for the final compression ratio. Only successful cases contribute
byte totals, so a broken configuration can't skew the ratio.
"""

from dataclasses import asdict, dataclass
from typing import Any

from codec_tester.core.types import CaseReport


@dataclass
class RunStatistics:
    """
    Counters for one harness run.

    Owned by a single TestOrchestrator; there are no other writers.
    """

    files_checked: int = 0
    files_skipped: int = 0
    tests_run: int = 0
    errors_found: int = 0
    total_input_bytes: int = 0
    total_output_bytes: int = 0

    def record_file_checked(self):
        self.files_checked += 1

    def record_file_skipped(self):
        self.files_skipped += 1

    def record_case(self, report: CaseReport):
        """
        Fold one finished case into the totals.

        Args:
            report: Classified case result
        """
        self.tests_run += 1
        if report.is_error:
            self.errors_found += 1
        else:
            self.total_input_bytes += report.input_bytes
            self.total_output_bytes += report.output_bytes

    @property
    def compression_ratio(self) -> float:
        """Cumulative compressed size as a percentage of input."""
        if self.total_input_bytes == 0:
            return 0.0
        return self.total_output_bytes * 100.0 / self.total_input_bytes

    @property
    def clean(self) -> bool:
        return self.errors_found == 0

    def summary_line(self) -> str:
        """One-line summary printed at shutdown."""
        return (
            f"{self.errors_found} errors detected in {self.files_checked} files "
            f"({self.files_skipped} skipped), {self.tests_run} tests, "
            f"{self.total_input_bytes} bytes --> {self.total_output_bytes} bytes, "
            f"{self.compression_ratio:.2f}%"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["compression_ratio"] = round(self.compression_ratio, 4)
        return data
