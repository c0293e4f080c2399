from typing import Optional, Type

from contract_asserts.asserts import (
    REVERT,
    ThrowsResult,
    check_message,
    check_reason,
    not_thrown_error,
)
from contract_asserts.environment import EnvironmentKind
from contract_asserts.exceptions import ThrowsAssertionError
from contract_asserts.failures import failure_from_error
from contract_asserts.reasons import normalize_reason


class RevertsContextManager:
    """
    Synchronous counterpart of :func:`~contract_asserts.asserts.assert_revert`
    for code that raises the revert directly::

        with reverts("!authorized"):
            contract.setNumber(5, sender=not_owner)
    """

    def __init__(self, expected_reason: Optional[str] = None):
        self.expected_reason = expected_reason
        self.result: Optional[ThrowsResult] = None

    def __enter__(self) -> "RevertsContextManager":
        return self

    def __exit__(self, exc_type: Type, exc_value: Exception, traceback) -> bool:
        if exc_type is None:
            raise not_thrown_error(REVERT, self.expected_reason or "")

        if not isinstance(exc_value, Exception) or isinstance(exc_value, ThrowsAssertionError):
            return False

        failure = failure_from_error(exc_value, EnvironmentKind.GENERIC)
        result = check_message(failure, exc_value, REVERT)

        if self.expected_reason:
            reason = normalize_reason(result.reason, result.raw_message, self.expected_reason)
            check_reason(reason, self.expected_reason)
            result = result.model_copy(update={"reason": reason})

        self.result = result

        # Returning True causes the expected exception not to get raised
        # and the test to pass
        return True


def reverts(expected_reason: Optional[str] = None) -> RevertsContextManager:
    return RevertsContextManager(expected_reason)
