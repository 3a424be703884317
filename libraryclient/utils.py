from typing import Awaitable, Optional, TypeVar
import asyncio

T = TypeVar('T')

_blocking_loop: Optional[asyncio.AbstractEventLoop] = None


def blocking_event_loop() -> asyncio.AbstractEventLoop:
    global _blocking_loop
    if _blocking_loop is None or _blocking_loop.is_closed():
        _blocking_loop = asyncio.new_event_loop()
    return _blocking_loop


def async_to_blocking(coro: Awaitable[T]) -> T:
    loop = blocking_event_loop()
    task = asyncio.ensure_future(coro, loop=loop)
    try:
        return loop.run_until_complete(task)
    finally:
        if task.done() and not task.cancelled():
            exc = task.exception()
            if exc:
                raise exc
        else:
            task.cancel()
