"""
Assessment state machine for the polling engine.

The transition function is pure: given the last Host snapshot and the quota
observed with it, it decides whether to poll again (and after how long),
succeed, or fail. The engine performs the actual sleeping and I/O.
"""

from dataclasses import dataclass

from ..config import CadencePolicy
from ..exceptions import AssessmentError, QuotaExceededError
from ..models import STATUS_IN_PROGRESS, Host, QuotaState, is_terminal
from ..quota import is_quota_exhausted


@dataclass(frozen=True)
class PollAgain:
    """Poll again after ``delay`` seconds."""

    delay: float


@dataclass(frozen=True)
class Succeed:
    """The assessment reached a terminal status."""

    host: Host


@dataclass(frozen=True)
class Fail:
    """The session must stop with ``error``."""

    error: AssessmentError


Transition = PollAgain | Succeed | Fail


def poll_delay(status: str, cadence: CadencePolicy) -> float:
    """Get the wait before the next poll, given the last observed status."""
    if status == STATUS_IN_PROGRESS:
        return cadence.in_progress_seconds
    return cadence.default_seconds


def next_step(host: Host, quota: QuotaState, cadence: CadencePolicy) -> Transition:
    """
    Decide what the session does after observing a Host snapshot.

    Args:
        host: Latest Host snapshot
        quota: Quota observed with that snapshot
        cadence: Poll cadence policy

    Returns:
        Succeed on READY or ERROR, Fail when the quota is exhausted,
        PollAgain otherwise
    """
    if is_terminal(host.status):
        return Succeed(host)

    if is_quota_exhausted(quota):
        return Fail(
            QuotaExceededError(
                "maximum number of assessments reached, please try again later",
                max_assessments=quota.max_assessments,
                current_assessments=quota.current_assessments,
                context={"host": host.host, "status": host.status},
            )
        )

    return PollAgain(poll_delay(host.status, cadence))
