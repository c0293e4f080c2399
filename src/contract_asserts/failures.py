from typing import Annotated, Any, Literal, Optional, Union

from eth_utils import to_hex
from pydantic import BaseModel, ConfigDict, Field

from contract_asserts.environment import EnvironmentKind
from contract_asserts.utils import get_field

FAILED_STATUS = "0x0"
TXN_FIELDS = ("tx", "txn_hash", "transactionHash")
REASON_FIELDS = ("reason", "revert_message")


class ReceiptFailure(BaseModel):
    """
    A failure reported by a Geth-style environment: only the receipt
    status is known, plus a reference to the transaction.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["receipt"] = "receipt"
    status: Optional[str] = None
    txn: Optional[Any] = None
    raw_message: str = ""

    @property
    def failed(self) -> bool:
        return self.status == FAILED_STATUS


class MessageFailure(BaseModel):
    """
    A failure whose message embeds the error code and, sometimes,
    the revert reason.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["message"] = "message"
    message: str = ""
    reason: Optional[str] = None


FailureReport = Annotated[Union[ReceiptFailure, MessageFailure], Field(discriminator="kind")]


def error_message(error: BaseException) -> str:
    message = getattr(error, "message", None)
    if isinstance(message, str):
        return message

    return str(error)


def normalize_status(status: Any) -> Optional[str]:
    """
    Convert a receipt status to its hex form, e.g. ``0`` to ``"0x0"``.
    """

    if status is None:
        return None

    if isinstance(status, str):
        return status

    if isinstance(status, (bytes, bytearray)):
        return to_hex(int.from_bytes(status, "big"))

    return to_hex(int(status))


def failure_from_error(error: BaseException, environment: EnvironmentKind) -> FailureReport:
    """
    Read the failure report out of an exception raised by an execution
    environment.

    Args:
        error (BaseException): The raised exception.
        environment (:class:`~contract_asserts.environment.EnvironmentKind`):
          Which report shape to build.

    Returns:
        Either a :class:`~contract_asserts.failures.ReceiptFailure` or a
        :class:`~contract_asserts.failures.MessageFailure`.
    """

    if environment == EnvironmentKind.GETH:
        receipt = get_field(error, "receipt")
        txn = get_field(error, *TXN_FIELDS)
        if isinstance(txn, (bytes, bytearray)):
            txn = to_hex(txn)

        return ReceiptFailure(
            status=normalize_status(get_field(receipt, "status")),
            txn=txn,
            raw_message=error_message(error),
        )

    reason = get_field(error, *REASON_FIELDS)
    return MessageFailure(
        message=error_message(error),
        reason=reason if isinstance(reason, str) else None,
    )
