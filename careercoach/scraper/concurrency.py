"""Async helpers for racing independent wait conditions."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable


async def first_completed(*aws: Awaitable[Any]) -> Any:
    """Run *aws* concurrently and return the result of whichever settles first.

    If the first operation to settle raised, its exception is re-raised.  The
    remaining operations are cancelled and awaited before returning, so no
    task outlives the call.
    """
    if not aws:
        raise ValueError("first_completed() needs at least one awaitable")

    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    # Several tasks can settle in the same loop iteration; keep input order.
    winner = next(task for task in tasks if task in done)
    return winner.result()
