"""Observational helpers used while unstubbing: caller attribution, profiling scopes and debug traces.

Nothing in here may fail the operation being observed.
"""

from __future__ import annotations

import inspect
import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator

logger = logging.getLogger(__name__)

UNKNOWN_CALLER = "unknown"


def get_caller(level: int = 1) -> str:
    """Describe the function `level` frames above the one calling `get_caller`.

    Level 0 is the immediate caller of this function. Returns `"unknown"` when the stack is not that deep.
    """
    frame = inspect.currentframe()
    try:
        for _ in range(level + 1):
            if frame is None:
                return UNKNOWN_CALLER
            frame = frame.f_back

        if frame is None:
            return UNKNOWN_CALLER

        code = frame.f_code
        name = getattr(code, "co_qualname", code.co_name)
        module = frame.f_globals.get("__name__", "?")

        return f"{module}.{name}"
    finally:
        del frame


@contextmanager
def profile_scope(name: str) -> Iterator[None]:
    """Time the enclosed block and report it at debug level, whether the block succeeds or not."""
    start = time.perf_counter()
    try:
        yield
    finally:
        logger.debug("%s took %.3fms", name, (time.perf_counter() - start) * 1000)


def debug(msg: str, *args: Any) -> None:
    logger.debug(msg, *args)
