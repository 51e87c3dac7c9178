"""
Abandon upstream work when the caller goes away.

Starlette keeps running a handler after the client disconnects, so service
calls are wrapped in a task that is cancelled once the request reports a
disconnect. Cancellation reaches the upstream request or the pending
retry sleep through asyncio.CancelledError.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Protocol, TypeVar

from fastapi import HTTPException

logger = logging.getLogger(__name__)

T = TypeVar("T")

# nginx's "client closed request"; nobody reads it
CLIENT_CLOSED_REQUEST = 499
DISCONNECT_POLL_INTERVAL = 0.1


class DisconnectAware(Protocol):
    async def is_disconnected(self) -> bool: ...


async def cancel_on_disconnect(
    request: DisconnectAware,
    awaitable: Awaitable[T],
    poll_interval: float = DISCONNECT_POLL_INTERVAL,
) -> T:
    """
    Await awaitable, cancelling it if the caller disconnects first.

    Raises:
        HTTPException: 499 when the work was abandoned
    """
    task = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info("Caller disconnected, abandoning upstream work")
                task.cancel()
                # Let the cancellation unwind before answering
                await asyncio.wait({task})
                raise HTTPException(
                    status_code=CLIENT_CLOSED_REQUEST, detail="Client closed request"
                )
    finally:
        if not task.done():
            task.cancel()
