from typing import Callable

import pytest

from contract_asserts.config import AssertsConfig, load_config
from contract_asserts_test.contextmanagers import RevertsContextManager, reverts


class PytestAssertsFixtures:
    def __init__(self, config: pytest.Config):
        self.config = config

    @pytest.fixture(scope="session")
    def asserts_config(self) -> AssertsConfig:
        """
        Settings built from the environment and the ``--asserts-*``
        command line options.
        """
        return load_config()

    @pytest.fixture
    def reverts(self) -> Callable[..., RevertsContextManager]:
        return reverts
