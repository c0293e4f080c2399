from typing import Optional


class ContractAssertsException(Exception):
    """
    An exception raised by contract-asserts.
    """

    def __init__(self, message):
        if not message.endswith("."):
            message = f"{message}."
        super().__init__(message)


class ConfigError(ContractAssertsException):
    """
    Raised when a problem occurs loading the assertion settings.
    """


class EnvironmentDetectionError(ContractAssertsException):
    """
    Raised when unable to tell which kind of execution environment
    produced a failure.
    """


class DecodingError(ContractAssertsException):
    """
    Raised when revert data returned from a transaction replay
    cannot be decoded.
    """

    def __init__(self, data: Optional[str] = None):
        message = "Revert data corrupted"
        if data:
            message = f"{message}: {data}"
        super().__init__(message)


class ThrowsAssertionError(AssertionError):
    """
    Raised when an operation did not fail the way a test expected it to.
    Being an ``AssertionError``, test runners report it as a test failure.
    """

    def __init__(self, message: str, expected: Optional[str] = None, actual: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(message)
