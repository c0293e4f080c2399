import pytest

from contract_asserts import AssertsConfig, EnvironmentKind
from contract_asserts.config import set_session_defaults


class TransactionFailure(Exception):
    """
    Shaped like the errors test runners raise for failed transactions.
    """

    def __init__(self, message="", receipt=None, tx=None, reason=None):
        super().__init__(message)
        self.message = message
        self.receipt = receipt
        self.tx = tx
        self.reason = reason


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    monkeypatch.delenv("CONTRACT_ASSERTS_ENVIRONMENT", raising=False)
    monkeypatch.delenv("CONTRACT_ASSERTS_LOG_LEVEL", raising=False)
    previous = set_session_defaults()
    yield
    set_session_defaults(**previous)


@pytest.fixture
def make_failure():
    return TransactionFailure


@pytest.fixture
def raiser():
    def make_operation(error: Exception):
        async def operation():
            raise error

        return operation

    return make_operation


@pytest.fixture
def succeeding_operation():
    async def operation():
        return {"status": 1}

    return operation


@pytest.fixture
def geth_config():
    return AssertsConfig(environment=EnvironmentKind.GETH)


@pytest.fixture
def generic_config():
    return AssertsConfig(environment=EnvironmentKind.GENERIC)


@pytest.fixture
def mock_decoder(mocker):
    return mocker.AsyncMock(return_value="Foo")


@pytest.fixture
def mock_context(mocker):
    return mocker.MagicMock()
