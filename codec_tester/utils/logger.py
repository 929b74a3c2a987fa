"""Codec Tester Structured Logging

Diagnostics for harness runs, built on structlog over the stdlib logging
module. Records go to stderr, and optionally to a log file as well, so
stdout carries only the per-case report and the summary.
"""

import logging
import sys
from pathlib import Path

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


def add_case_label(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Fold bound ``file`` and ``maxbits`` into a single ``case`` field.

    The orchestrator binds both for the duration of a case, so every event
    logged from inside a codec call can be traced back to one configuration.
    """
    if "file" in event_dict and "maxbits" in event_dict:
        event_dict["case"] = f"{event_dict['file']}@{event_dict['maxbits']}"
    return event_dict


def configure_logging(
    log_level: str = "WARNING", json_format: bool = False, log_file: Path | None = None
) -> None:
    """Route structlog through stdlib logging for one harness run.

    Args:
        log_level: Minimum level name, case-insensitive
        json_format: Render one JSON object per line instead of console text
        log_file: Also append records to this file

    """
    level = logging.getLevelNamesMapping()[log_level.upper()]

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(format="%(message)s", level=level, handlers=handlers, force=True)

    renderer: Processor
    if json_format:
        renderer = structlog.processors.JSONRenderer()
    else:
        # no ANSI colour codes when records may land in a file
        renderer = structlog.dev.ConsoleRenderer(colors=log_file is None)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            add_case_label,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
