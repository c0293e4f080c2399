import pytest
from pydantic import TypeAdapter

from contract_asserts.environment import EnvironmentKind
from contract_asserts.failures import (
    FailureReport,
    MessageFailure,
    ReceiptFailure,
    error_message,
    failure_from_error,
    normalize_status,
)

TXN_HASH = "0x053cba5c12172654d894f66d5670bab6215517a94189a9ffc09bc40a589ec04d"


class _Receipt:
    def __init__(self, status):
        self.status = status


class _ApeStyleError(Exception):
    def __init__(self, revert_message, txn_hash=None):
        super().__init__(revert_message)
        self.revert_message = revert_message
        self.txn_hash = txn_hash


class TestFailureFromError:
    def test_geth_receipt_from_dict(self, make_failure):
        error = make_failure("boom", receipt={"status": 0}, tx=TXN_HASH)
        failure = failure_from_error(error, EnvironmentKind.GETH)
        assert isinstance(failure, ReceiptFailure)
        assert failure.status == "0x0"
        assert failure.failed
        assert failure.txn == TXN_HASH
        assert failure.raw_message == "boom"

    def test_geth_receipt_from_object(self, make_failure):
        error = make_failure(receipt=_Receipt(1))
        failure = failure_from_error(error, EnvironmentKind.GETH)
        assert failure.status == "0x1"
        assert not failure.failed

    def test_geth_txn_bytes_become_hex(self, make_failure):
        error = make_failure(receipt={"status": "0x0"}, tx=bytes.fromhex(TXN_HASH[2:]))
        failure = failure_from_error(error, EnvironmentKind.GETH)
        assert failure.txn == TXN_HASH

    def test_geth_txn_hash_field(self):
        error = _ApeStyleError("Transaction failed", txn_hash=TXN_HASH)
        failure = failure_from_error(error, EnvironmentKind.GETH)
        assert failure.txn == TXN_HASH
        assert failure.status is None

    def test_generic_message(self, make_failure):
        failure = failure_from_error(make_failure("revert", reason="Foo"), EnvironmentKind.GENERIC)
        assert isinstance(failure, MessageFailure)
        assert failure.message == "revert"
        assert failure.reason == "Foo"

    def test_generic_revert_message_field(self):
        failure = failure_from_error(_ApeStyleError("!authorized"), EnvironmentKind.GENERIC)
        assert failure.reason == "!authorized"

    def test_generic_ignores_non_string_reason(self, make_failure):
        failure = failure_from_error(make_failure("revert", reason=42), EnvironmentKind.GENERIC)
        assert failure.reason is None


def test_error_message():
    class WithMessage(Exception):
        message = "from attribute"

    assert error_message(WithMessage("from args")) == "from attribute"
    assert error_message(ValueError("from args")) == "from args"


@pytest.mark.parametrize(
    "status,expected",
    [(0, "0x0"), (1, "0x1"), ("0x0", "0x0"), (b"\x00", "0x0"), (None, None)],
)
def test_normalize_status(status, expected):
    assert normalize_status(status) == expected


def test_failure_report_discriminates_on_kind():
    adapter = TypeAdapter(FailureReport)
    assert isinstance(adapter.validate_python({"kind": "message", "message": "x"}), MessageFailure)
    assert isinstance(adapter.validate_python({"kind": "receipt", "status": "0x0"}), ReceiptFailure)
