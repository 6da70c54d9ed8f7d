import inspect
from typing import Any, Callable, Optional


async def notify(callback: Optional[Callable[[Any], Any]], value: Any) -> None:
    """Invokes an observer callback; coroutine callbacks are awaited."""
    if callback is None:
        return
    result = callback(value)
    if inspect.isawaitable(result):
        await result
