from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict

from contract_asserts.config import AssertsConfig, load_config
from contract_asserts.decoding import decode_error_reason_from_tx
from contract_asserts.environment import EnvironmentKind, detect_environment
from contract_asserts.exceptions import ThrowsAssertionError
from contract_asserts.failures import (
    FAILED_STATUS,
    MessageFailure,
    ReceiptFailure,
    failure_from_error,
)
from contract_asserts.logging import logger
from contract_asserts.reasons import normalize_reason
from contract_asserts.utils import Operation, maybe_await, run_operation

INVALID_JUMP = "invalid JUMP"
INVALID_OPCODE = "invalid opcode"
OUT_OF_GAS = "out of gas"
REVERT = "revert"


class ThrowsResult(BaseModel):
    """
    The outcome of a successful throw assertion. The error raised by the
    operation is kept as-is; the recovered reason lives here instead.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    succeeded: bool = True
    reason: str = ""
    raw_message: str = ""
    environment: EnvironmentKind = EnvironmentKind.GENERIC
    error: Optional[BaseException] = None


async def assert_throws(
    operation: Operation,
    expected_error_code: str,
    expected_reason: str = "",
    context: Any = None,
    *,
    is_geth: Optional[Callable[[Any], Any]] = None,
    decode_reason: Optional[Callable[[Any, Any], Any]] = None,
    config: Optional[AssertsConfig] = None,
) -> ThrowsResult:
    """
    Assert that ``operation`` fails with the given error code.

    Args:
        operation: Already-started async work, or a zero-argument callable
          (sync or async) performing the transaction.
        expected_error_code (str): Text expected in the error message, such as
          ``"revert"``. Not checked in Geth-style environments, which only
          report a failing status.
        expected_reason (str): The expected revert reason, if any. In Geth-style
          environments this triggers decoding the reason from the transaction.
        context: Forwarded to ``is_geth`` and ``decode_reason``; usually a
          ``Web3`` instance.
        is_geth: Environment predicate. Defaults to
          :func:`~contract_asserts.environment.is_geth`.
        decode_reason: Reason decoder. Defaults to
          :func:`~contract_asserts.decoding.decode_error_reason_from_tx`.
        config (:class:`~contract_asserts.config.AssertsConfig`): Settings;
          loaded from the environment when not given.

    Raises:
        :class:`~contract_asserts.exceptions.ThrowsAssertionError`: When the
          operation did not fail, or failed differently than expected.

    Returns:
        :class:`~contract_asserts.asserts.ThrowsResult`
    """

    expected_reason = expected_reason or ""
    try:
        await run_operation(operation)
    except ThrowsAssertionError:
        raise
    except Exception as err:
        return await _classify(
            err,
            expected_error_code,
            expected_reason,
            context,
            is_geth=is_geth,
            decode_reason=decode_reason,
            config=config if config is not None else load_config(),
        )

    raise not_thrown_error(expected_error_code, expected_reason)


def not_thrown_error(expected_error_code: str, expected_reason: str = "") -> ThrowsAssertionError:
    with_reason = f' (with reason: "{expected_reason}")' if expected_reason else ""
    return ThrowsAssertionError(
        f'Expected "{expected_error_code}"{with_reason} but it did not fail.',
        expected=expected_error_code,
    )


async def _classify(
    err: Exception,
    expected_error_code: str,
    expected_reason: str,
    context: Any,
    is_geth=None,
    decode_reason=None,
    config: Optional[AssertsConfig] = None,
) -> ThrowsResult:
    environment = await detect_environment(context, predicate=is_geth, config=config)
    failure = failure_from_error(err, environment)
    if isinstance(failure, ReceiptFailure):
        return await _check_receipt(failure, err, expected_reason, context, decode_reason)

    return check_message(failure, err, expected_error_code)


async def _check_receipt(
    failure: ReceiptFailure,
    err: Exception,
    expected_reason: str,
    context: Any,
    decode_reason=None,
) -> ThrowsResult:
    if not failure.failed:
        raise ThrowsAssertionError(
            f"Expected transaction to revert but it executed with status {failure.status}",
            expected=FAILED_STATUS,
            actual=failure.status,
        )

    if not expected_reason:
        # Invalid jumps and out-of-gas look the same as reverts here,
        # so a failing status is all there is to check.
        return ThrowsResult(
            raw_message=failure.raw_message, environment=EnvironmentKind.GETH, error=err
        )

    if failure.txn is None:
        raise ThrowsAssertionError(
            "Expected error to include transaction hash, "
            f"cannot assert revert reason {expected_reason}: {err}",
            expected=expected_reason,
        )

    decoder = decode_reason or decode_error_reason_from_tx
    reason = await maybe_await(decoder(failure.txn, context))
    logger.debug(f"Transaction {failure.txn} reverted with reason '{reason}'.")
    return ThrowsResult(
        reason=reason or "",
        raw_message=failure.raw_message,
        environment=EnvironmentKind.GETH,
        error=err,
    )


def check_message(failure: MessageFailure, err: Exception, expected_error_code: str) -> ThrowsResult:
    if expected_error_code not in failure.message:
        raise ThrowsAssertionError(
            f'Expected error code "{expected_error_code}" '
            f'but failed with "{failure.message}" instead.',
            expected=expected_error_code,
            actual=failure.message,
        )

    return ThrowsResult(
        reason=failure.reason or "",
        raw_message=failure.message,
        environment=EnvironmentKind.GENERIC,
        error=err,
    )


async def assert_jump(operation: Operation, context: Any = None, **kwargs):
    await assert_throws(operation, INVALID_JUMP, context=context, **kwargs)


async def assert_invalid_opcode(operation: Operation, context: Any = None, **kwargs):
    await assert_throws(operation, INVALID_OPCODE, context=context, **kwargs)


async def assert_out_of_gas(operation: Operation, context: Any = None, **kwargs):
    await assert_throws(operation, OUT_OF_GAS, context=context, **kwargs)


async def assert_revert(
    operation: Operation, expected_reason: str = "", context: Any = None, **kwargs
) -> ThrowsResult:
    """
    Assert that ``operation`` reverts, optionally with ``expected_reason``.

    The reason is compared exactly, after removing the prefixes and repeated
    annotations that different test runners add to revert messages.

    Raises:
        :class:`~contract_asserts.exceptions.ThrowsAssertionError`: When the
          operation did not revert or reverted with another reason.

    Returns:
        :class:`~contract_asserts.asserts.ThrowsResult`: With ``reason`` set to
        the normalized revert reason.
    """

    result = await assert_throws(operation, REVERT, expected_reason, context, **kwargs)
    if not expected_reason:
        return result

    reason = normalize_reason(result.reason, result.raw_message, expected_reason)
    check_reason(reason, expected_reason)
    return result.model_copy(update={"reason": reason})


def check_reason(reason: str, expected_reason: str):
    if reason != expected_reason:
        raise ThrowsAssertionError(
            f'Expected revert reason "{expected_reason}" '
            f'but failed with "{reason or "no reason"}" instead.',
            expected=expected_reason,
            actual=reason,
        )
