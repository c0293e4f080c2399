import inspect
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

Operation = Union[Awaitable[Any], Callable[[], Any]]


async def maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value

    return value


async def run_operation(operation: Operation) -> Any:
    """
    Run the operation under test to completion.

    Args:
        operation: Either already-started async work (a coroutine, task or
          future) or a zero-argument callable. The callable's result is
          awaited when it is awaitable.

    Returns:
        Any: Whatever the operation produced.
    """

    if callable(operation) and not inspect.isawaitable(operation):
        return await maybe_await(operation())

    return await operation


def get_field(obj: Any, *names: str) -> Optional[Any]:
    """
    Read the first field present on ``obj``, looking at both
    attributes and mapping keys.
    """

    if obj is None:
        return None

    for name in names:
        if isinstance(obj, Mapping) and name in obj:
            value = obj[name]
        else:
            value = getattr(obj, name, None)

        if value is not None:
            return value

    return None
