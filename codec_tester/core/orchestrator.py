"""Test Orchestrator - Round-Trip Verification Driver.

For every input file this module runs the generated test matrix through the
codec under test:

    Compressing -> Compressed | CompressError
    Compressed  -> (inflation check) -> Decompressing
    Decompressing -> Decompressed | DecompressError
    Decompressed -> Verified(success) | Verified(failure)

No single file or configuration can stop the sweep. Setup failures skip the
file, codec failures and mismatches are classified and counted, and anything
the codec raises is caught and reported as a codec error.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TextIO

import structlog

from codec_tester.adapters.base import CodecAdapter
from codec_tester.core.cases import TestCase, generate_test_cases
from codec_tester.core.config import HarnessSettings, get_settings
from codec_tester.core.exceptions import AllocationError, SetupError
from codec_tester.core.fuzz import FuzzInjector
from codec_tester.core.loader import load_input
from codec_tester.core.statistics import RunStatistics
from codec_tester.core.streams import ByteConsumer, ByteProducer, ByteStream
from codec_tester.core.types import CaseOutcome, CaseReport
from codec_tester.core.verifier import VerificationResult, Verifier

logger = structlog.get_logger(__name__)


class StreamContext:
    """Per-file buffers bundled by role.

    One raw input buffer and one sink allocation serve every case for the
    file. Source and verifier are zero-copy windows into the raw buffer.
    Use as a context manager so the buffers are dropped on every exit path.
    """

    def __init__(self, raw: bytearray, sink: ByteStream):
        self.raw: bytearray | None = raw
        self.file_size = len(raw)
        self.sink = sink
        self.source = ByteStream(memoryview(raw))
        self.verifier = Verifier(memoryview(raw))

    @classmethod
    def for_input(cls, raw: bytearray, sink_capacity: int, name: str) -> StreamContext:
        """Allocate the sink for ``raw``.

        Raises:
            AllocationError: If the sink cannot be allocated

        """
        try:
            sink = ByteStream.allocate(sink_capacity)
        except MemoryError as e:
            raise AllocationError(
                f"file {name} is too big!",
                error_code="alloc",
                context={"file": name, "capacity": sink_capacity},
            ) from e
        return cls(raw, sink)

    def prepare(self, case: TestCase, sink_capacity: int) -> ByteStream:
        """Rewind every stream for ``case`` and return its source."""
        window = memoryview(self.raw)[case.offset : case.offset + case.length]
        self.source = ByteStream(window)
        self.sink.reset(capacity=min(sink_capacity, self.sink.allocated))
        self.verifier.reset(window)
        return self.source

    def compressed(self) -> ByteStream:
        """Producer over the bytes the compressor just wrote."""
        return ByteStream(self.sink.written())

    def release(self) -> None:
        self.source.release()
        self.sink.release()
        self.verifier.release()
        self.raw = None

    def __enter__(self) -> StreamContext:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


class TestOrchestrator:
    """Drives files through the codec and accumulates RunStatistics.

    Example:
        >>> orchestrator = TestOrchestrator(ZlibCodec(), quiet=True)
        >>> stats = orchestrator.run(["sample.bin"])
        >>> stats.errors_found
        0

    """

    __test__ = False  # not a pytest class

    def __init__(
        self,
        codec: CodecAdapter,
        settings: HarnessSettings | None = None,
        *,
        max_symbol_bits: int | None = None,
        exhaustive: bool = False,
        fuzz: bool = False,
        injector: FuzzInjector | None = None,
        quiet: bool = False,
        output: TextIO | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            codec: Codec under test
            settings: Harness settings (defaults to the global settings)
            max_symbol_bits: Pin one symbol size instead of sweeping 9-16
            exhaustive: Run the truncation ladder for every file
            fuzz: Corrupt the compressed stream before decompression
            injector: Corruption generator to use instead of a seeded default
            quiet: Suppress per-case success lines
            output: Report stream (defaults to stdout)

        """
        self.codec = codec
        self.settings = settings or get_settings()
        self.max_symbol_bits = max_symbol_bits
        self.exhaustive = exhaustive
        self.quiet = quiet
        self.output = output

        if injector is None:
            injector = FuzzInjector(self.settings.fuzz_seed, enabled=fuzz)
        elif fuzz:
            injector.enabled = True
        self.injector = injector

        self.stats = RunStatistics()

    def _print(self, line: str = "") -> None:
        print(line, file=self.output if self.output is not None else sys.stdout)

    def run(self, paths: Iterable[str | Path]) -> RunStatistics:
        """Check every file, then print the summary.

        Returns:
            Statistics for the whole run

        """
        for path in paths:
            self.check_file(path)

        self._print()
        self._print(self.stats.summary_line())
        log = logger.info if self.stats.clean else logger.warning
        log("run_complete", **self.stats.to_dict())
        return self.stats

    def check_file(self, path: str | Path) -> list[CaseReport]:
        """Load one file and run its whole test matrix.

        Returns:
            Reports for each case, empty if the file was skipped

        """
        name = str(path)
        try:
            raw = load_input(path, self.settings.max_file_size)
            context = StreamContext.for_input(
                raw, self.settings.sink_capacity(len(raw)), name
            )
        except SetupError as e:
            self._print()
            self._print(e.message)
            logger.warning("file_skipped", file=name, reason=e.error_code)
            self.stats.record_file_skipped()
            return []

        self._print()
        self.stats.record_file_checked()

        reports = []
        with context:
            for case in generate_test_cases(
                name, context.file_size, self.max_symbol_bits, self.exhaustive
            ):
                report = self.run_case(case, context)
                self.stats.record_case(report)
                reports.append(report)
        return reports

    def run_case(self, case: TestCase, context: StreamContext) -> CaseReport:
        """Run one configuration and classify the outcome."""
        with structlog.contextvars.bound_contextvars(
            file=case.filename, maxbits=case.max_symbol_bits
        ):
            report = self._run_case(case, context)
            if report.is_error:
                for message in report.messages:
                    self._print(message)
                logger.info("case_failed", report=report.to_dict())
            else:
                logger.debug("case_passed", ratio=round(report.ratio, 2))
            return report

    def _run_case(self, case: TestCase, context: StreamContext) -> CaseReport:
        label = case.label(context.file_size)
        bits = case.max_symbol_bits
        source = context.prepare(case, self.settings.sink_capacity(case.length))
        sink = self.injector.wrap(context.sink)
        report = CaseReport(case=case, outcome=CaseOutcome.SUCCESS)

        if not self._call_codec("compress", self.codec.compress, sink, source, bits):
            report.outcome = CaseOutcome.COMPRESS_ERROR
            report.messages.append(
                f"compress() returned error on file {label}, maxbits = {bits}"
            )
            return report

        report.input_bytes = case.length
        produced = context.sink
        report.output_bytes = produced.wrap_count * produced.capacity + produced.cursor

        if produced.wrapped:
            # no valid compressed stream exists, so decompression is skipped
            report.outcome = CaseOutcome.INFLATION_ERROR
            report.messages.append(
                f"over {self.settings.inflation_percent}% inflation on file {label}, "
                f"maxbits = {bits}!"
            )
            return report

        if not self.quiet:
            self._print(
                f"file {label}, maxbits = {bits:2d}: {report.input_bytes} bytes --> "
                f"{report.output_bytes} bytes, {report.ratio:.2f}%"
            )

        if not self._call_codec(
            "decompress", self.codec.decompress, context.verifier, context.compressed()
        ):
            report.outcome = CaseOutcome.DECOMPRESS_ERROR
            report.messages.append(
                f"decompress() returned error on file {label}, maxbits = {bits}"
            )
            return report

        report.verification = context.verifier.result()
        if not report.verification.is_success:
            report.outcome = CaseOutcome.VERIFY_ERROR
            report.messages.extend(
                describe_mismatch(report.verification, label, bits)
            )
        return report

    def _call_codec(
        self,
        operation: str,
        func: Callable[..., bool],
        sink: ByteConsumer,
        source: ByteProducer,
        *args: int,
    ) -> bool:
        try:
            return bool(func(sink, source, *args))
        except Exception:
            logger.warning("codec_raised", operation=operation, exc_info=True)
            return False


def describe_mismatch(result: VerificationResult, label: str, bits: int) -> list[str]:
    """Failure lines for a verification result, most fundamental first.

    The facts are independent, so every one that applies is reported.
    """
    where = f"on file {label}, maxbits = {bits}"
    messages = []
    if result.produced_nothing:
        messages.append(f"decompression produced no output {where}")
    if result.length_short:
        messages.append(
            f"decompression stopped {result.length_short} bytes short {where}"
        )
    if result.length_extra:
        messages.append(
            f"decompression generated {result.length_extra} extra bytes {where}"
        )
    if result.mismatch_count:
        messages.append(
            f"{result.mismatch_count} byte data errors on file {label} starting at "
            f"index {result.first_mismatch_index}, maxbits = {bits}"
        )
    return messages
