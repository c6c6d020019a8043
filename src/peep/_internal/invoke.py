"""Invoke helpers: call sync or async handlers uniformly.

Route handlers can be ``def`` or ``async def``. The sync/async check
lives here and nowhere else.

Usage::

    from peep._internal.invoke import invoke

    result = await invoke(handler, **kwargs)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
