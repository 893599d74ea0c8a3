"""Call sync or async handlers uniformly.

Coroutine functions are awaited on the event loop. Plain functions run
on an anyio worker thread so a slow handler (disk reads, template
rendering) doesn't stall other requests.
"""

import functools
import inspect
from typing import Any

import anyio.to_thread


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *handler* and return its (awaited) result."""
    if inspect.iscoroutinefunction(handler):
        return await handler(*args, **kwargs)
    result = await anyio.to_thread.run_sync(functools.partial(handler, *args, **kwargs))
    if inspect.isawaitable(result):
        result = await result
    return result
