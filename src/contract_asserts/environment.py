from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional

from contract_asserts.exceptions import EnvironmentDetectionError
from contract_asserts.logging import logger
from contract_asserts.utils import get_field, maybe_await

if TYPE_CHECKING:
    from contract_asserts.config import AssertsConfig

GETH_CLIENT_NAME = "geth"


class EnvironmentKind(str, Enum):
    """
    How an execution environment reports a failed transaction.
    """

    GETH = "geth"
    """Only a receipt status is given; the reason is decoded afterwards."""

    GENERIC = "generic"
    """The error message embeds the error code and, optionally, the reason."""


async def is_geth(context: Any) -> bool:
    """
    Check whether ``context`` is connected to a Geth node.

    Args:
        context: A ``Web3`` or ``AsyncWeb3`` instance, or anything exposing a
          ``client_version`` (directly or through a ``web3`` attribute).

    Returns:
        bool: ``True`` when the client version names Geth.
    """

    if context is None:
        return False

    client_version = get_field(context, "client_version")
    if client_version is None:
        client_version = get_field(get_field(context, "web3"), "client_version")

    client_version = await maybe_await(client_version)
    if not client_version:
        return False

    return GETH_CLIENT_NAME in str(client_version).lower()


async def detect_environment(
    context: Any,
    predicate: Optional[Callable[[Any], Any]] = None,
    config: Optional["AssertsConfig"] = None,
) -> EnvironmentKind:
    if config is not None and config.environment is not None:
        logger.debug(f"Using configured environment '{config.environment.value}'.")
        return config.environment

    predicate = predicate or is_geth
    try:
        result = await maybe_await(predicate(context))
    except Exception as err:
        raise EnvironmentDetectionError(f"Unable to detect environment: {err}") from err

    if isinstance(result, EnvironmentKind):
        kind = result
    else:
        kind = EnvironmentKind.GETH if result else EnvironmentKind.GENERIC

    logger.debug(f"Detected environment '{kind.value}'.")
    return kind

