"""Executor offloading for blocking filesystem calls.

Coroutines await these helpers so that disk writes, fsyncs, and renames
run on the default thread pool instead of stalling the event loop.
"""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Any, Callable, TypeVar

_T = TypeVar("_T")


async def run_blocking(func: Callable[..., _T], *args: Any, **kwargs: Any) -> _T:
    """Run a blocking callable in the loop's default executor.

    Args:
        func: Blocking callable.
        *args: Positional arguments for ``func``.
        **kwargs: Keyword arguments for ``func``.

    Returns:
        The callable's return value.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(func, *args, **kwargs))
