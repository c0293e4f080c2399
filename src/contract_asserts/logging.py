import logging
from enum import IntEnum
from typing import Union

import click


class LogLevel(IntEnum):
    ERROR = logging.ERROR
    WARNING = logging.WARNING
    SUCCESS = logging.INFO + 1
    INFO = logging.INFO
    DEBUG = logging.DEBUG


logging.addLevelName(LogLevel.SUCCESS.value, LogLevel.SUCCESS.name)

CLICK_STYLE_KWARGS = {
    LogLevel.ERROR: dict(fg="bright_red"),
    LogLevel.WARNING: dict(fg="bright_red"),
    LogLevel.SUCCESS: dict(fg="bright_green"),
    LogLevel.INFO: dict(fg="blue"),
    LogLevel.DEBUG: dict(fg="blue"),
}
CLICK_ECHO_KWARGS = {
    LogLevel.ERROR: dict(err=True),
    LogLevel.WARNING: dict(err=True),
    LogLevel.SUCCESS: dict(),
    LogLevel.INFO: dict(),
    LogLevel.DEBUG: dict(),
}


class ClickHandler(logging.Handler):
    """
    Writes records through ``click.echo`` so the level name is colored
    the same way the rest of a test session's output is.
    """

    def __init__(self, echo_kwargs: dict, handle_stderr: bool = True):
        super().__init__()
        self.echo_kwargs = echo_kwargs
        self.handle_stderr = handle_stderr

    def emit(self, record):
        try:
            level = LogLevel(record.levelno)
        except ValueError:
            level = LogLevel.INFO

        try:
            msg = self.format(record)
            prefix = click.style(f"{level.name}:", bold=True, **CLICK_STYLE_KWARGS[level])
            echo_kwargs = self.echo_kwargs.get(level, {})
            if echo_kwargs.get("err") and not self.handle_stderr:
                return

            click.echo(f"{prefix} {msg}", **echo_kwargs)
        except Exception:
            self.handleError(record)


class AssertsLogger:
    def __init__(self, _logger: logging.Logger):
        self.error = _logger.error
        self.warning = _logger.warning
        self.success = lambda msg, *args, **kwargs: _logger.log(
            LogLevel.SUCCESS.value, msg, *args, **kwargs
        )
        self.info = _logger.info
        self.debug = _logger.debug
        self._logger = _logger

    @classmethod
    def create(cls, name: str = "contract_asserts") -> "AssertsLogger":
        _logger = logging.getLogger(name)
        handler = ClickHandler(echo_kwargs=CLICK_ECHO_KWARGS)
        handler.setFormatter(logging.Formatter("%(message)s"))
        _logger.addHandler(handler)
        _logger.propagate = True
        _logger.setLevel(LogLevel.WARNING.value)
        return cls(_logger)

    @property
    def level(self) -> int:
        return self._logger.level

    def set_level(self, level: Union[str, int, LogLevel]):
        """
        Change the global contract-asserts logging level.
        """
        if isinstance(level, str):
            level = LogLevel[level.upper()]

        self._logger.setLevel(int(level))


logger = AssertsLogger.create()


__all__ = ["AssertsLogger", "LogLevel", "logger"]
