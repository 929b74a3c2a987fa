"""Input Loading - Size Checks and Buffer Allocation.

Every way a file can fail to load raises a SetupError subclass carrying the
message the report prints. The orchestrator skips the file and moves on.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path

import structlog

from codec_tester.core.exceptions import (
    AllocationError,
    FileOpenError,
    FileReadError,
    FileSizeError,
    FileTooLargeError,
)

logger = structlog.get_logger(__name__)


def load_input(path: str | Path, max_file_size: int) -> bytearray:
    """Read a whole input file into a freshly allocated buffer.

    Args:
        path: File to read
        max_file_size: Largest accepted size in bytes

    Returns:
        The file contents

    Raises:
        FileOpenError: File missing or unreadable
        FileSizeError: Not a regular file, or zero bytes long
        FileTooLargeError: Larger than ``max_file_size``
        AllocationError: Buffer could not be allocated
        FileReadError: Short read

    """
    name = str(path)
    context = {"file": name}

    try:
        infile = open(path, "rb")
    except IsADirectoryError as e:
        raise FileSizeError(
            f"can't get file size of {name} (may be zero)!",
            error_code="size",
            context=context,
        ) from e
    except OSError as e:
        raise FileOpenError(
            f"can't open file {name}!", error_code="open", context=context
        ) from e

    with infile:
        try:
            st = os.fstat(infile.fileno())
        except OSError as e:
            raise FileSizeError(
                f"can't get file size of {name} (may be zero)!",
                error_code="size",
                context=context,
            ) from e

        if not stat.S_ISREG(st.st_mode) or st.st_size == 0:
            raise FileSizeError(
                f"can't get file size of {name} (may be zero)!",
                error_code="size",
                context=context,
            )

        file_size = st.st_size
        if file_size > max_file_size:
            raise FileTooLargeError(
                f"file {name} is too big!",
                error_code="too_big",
                context={**context, "size": file_size, "limit": max_file_size},
            )

        try:
            buffer = bytearray(file_size)
        except MemoryError as e:
            raise AllocationError(
                f"file {name} is too big!",
                error_code="alloc",
                context={**context, "size": file_size},
            ) from e

        try:
            bytes_read = infile.readinto(buffer)
        except OSError as e:
            raise FileReadError(
                f"file {name} could not be read!", error_code="read", context=context
            ) from e

    if bytes_read != file_size:
        raise FileReadError(
            f"file {name} could not be read!",
            error_code="read",
            context={**context, "expected": file_size, "read": bytes_read},
        )

    logger.debug("input_loaded", file=name, size=file_size)
    return buffer
