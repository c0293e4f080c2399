import sys
from pathlib import Path

import pytest
from _pytest.config import Config

from contract_asserts.config import load_config, set_session_defaults
from contract_asserts.environment import EnvironmentKind
from contract_asserts.logging import LogLevel
from contract_asserts_test.fixtures import PytestAssertsFixtures


_previous_defaults_key = pytest.StashKey[dict]()


# set commandline options
def pytest_addoption(parser):
    group = parser.getgroup("contract-asserts")
    group.addoption(
        "--showinternal",
        action="store_true",
        help="Include contract-asserts internal frames in tracebacks",
    )
    group.addoption(
        "--asserts-environment",
        choices=[kind.value for kind in EnvironmentKind],
        default=None,
        help="Classify transaction failures as coming from this kind of environment",
    )
    group.addoption(
        "--asserts-log-level",
        choices=[level.name for level in LogLevel],
        default=None,
        help="Log level of the contract-asserts logger",
    )


def _hide_asserts_internals_tracebacks():
    base_path = Path(sys.modules["contract_asserts"].__file__).parent.as_posix()

    modules = [
        v
        for v in sys.modules.values()
        if getattr(v, "__file__", None) and v.__file__.startswith(base_path)
    ]

    for module in modules:
        module.__tracebackhide__ = True


def pytest_configure(config: Config):
    # do not include contract-asserts internals in tracebacks unless explicitly asked
    if not config.getoption("showinternal"):
        _hide_asserts_internals_tracebacks()

    # the command line options become the defaults of every `load_config()`,
    # including the ones the assert helpers make when not given a config
    config.stash[_previous_defaults_key] = set_session_defaults(
        environment=config.getoption("asserts_environment"),
        log_level=config.getoption("asserts_log_level"),
    )
    load_config()

    # NOTE: contains all the registered fixtures
    fixtures = PytestAssertsFixtures(config)
    config.pluginmanager.register(fixtures, "contract-asserts-fixtures")


def pytest_unconfigure(config: Config):
    previous = config.stash.get(_previous_defaults_key, None)
    if previous is not None:
        set_session_defaults(**previous)
