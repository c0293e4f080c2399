"""
Recover revert reasons from the error messages of the different test runners.

Every runner-specific literal lives in :data:`REVERT_MARKERS`; the functions
below only walk that table.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from contract_asserts.logging import logger

ERROR_PREFIX = "Returned error:"
THROW_PREFIX = "VM Exception while processing transaction: revert"
THROW_PREFIX_V2 = "VM Exception while processing transaction: reverted with reason string"
REASON_ANNOTATION = " -- Reason given: {reason}."
QUOTE = "'"


class RunnerVersion(str, Enum):
    HARDHAT = "hardhat"
    TRUFFLE = "truffle"


@dataclass(frozen=True)
class RevertMarkers:
    throw_prefix: str
    """Marks a message as a revert; removed along with ``strip_prefixes``."""

    strip_prefixes: Tuple[str, ...] = ()
    annotation: Optional[str] = None
    """Template of the reason some runners append again after the message."""


# NOTE: Ordered so a prefix is never checked before a longer one that contains it.
REVERT_MARKERS: Dict[RunnerVersion, RevertMarkers] = {
    RunnerVersion.HARDHAT: RevertMarkers(
        throw_prefix=THROW_PREFIX_V2,
        strip_prefixes=(ERROR_PREFIX,),
    ),
    RunnerVersion.TRUFFLE: RevertMarkers(
        throw_prefix=THROW_PREFIX,
        strip_prefixes=(ERROR_PREFIX,),
        annotation=REASON_ANNOTATION,
    ),
}


def find_runner(message: str) -> Optional[RunnerVersion]:
    for runner, markers in REVERT_MARKERS.items():
        if markers.throw_prefix in message:
            return runner

    return None


def _annotation_pattern(template: str) -> "re.Pattern":
    return re.compile(re.escape(template).replace(re.escape("{reason}"), ".*") + r"\s*$")


def has_revert_marker(message: str) -> bool:
    return find_runner(message) is not None


def strip_reason_annotation(reason: str, expected_reason: str) -> str:
    """
    Remove the ``" -- Reason given: <reason>."`` suffix some runners append
    to a message that already holds the reason.
    """

    for markers in REVERT_MARKERS.values():
        if markers.annotation:
            reason = reason.replace(markers.annotation.format(reason=expected_reason), "", 1)

    return reason.strip()


def derive_reason(message: str, expected_reason: str) -> str:
    """
    Derive a revert reason from a raw error message.

    For example, ``"Returned error: VM Exception while processing transaction:
    revert 'Foo' -- Reason given: Foo."`` gives ``"Foo"``.

    Args:
        message (str): The error message.
        expected_reason (str): The reason the test expects. Only used to strip
          an annotation repeating it; any trailing annotation is dropped anyway.

    Returns:
        str: The reason, or an empty string if the message is not a revert.
    """

    runner = find_runner(message)
    if runner is None:
        return ""

    markers = REVERT_MARKERS[runner]
    reason = message
    for prefix in (*markers.strip_prefixes, markers.throw_prefix):
        reason = reason.replace(prefix, "", 1)

    if markers.annotation:
        reason = _annotation_pattern(markers.annotation).sub("", reason, count=1)

    reason = strip_reason_annotation(reason, expected_reason)
    if reason.startswith(QUOTE):
        reason = reason[1:]
    if reason.endswith(QUOTE):
        reason = reason[:-1]

    logger.debug(f"Derived revert reason '{reason}' from {runner.value} message.")
    return reason


def normalize_reason(reason: Optional[str], message: str, expected_reason: str) -> str:
    """
    Get the revert reason to compare against ``expected_reason``, preferring
    one the environment already extracted.
    """

    if not reason and has_revert_marker(message):
        reason = derive_reason(message, expected_reason)

    return strip_reason_annotation(reason or "", expected_reason)
