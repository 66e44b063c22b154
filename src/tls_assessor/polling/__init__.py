"""
Polling system for the TLS assessor.

This package contains the assessment state machine and the engine that
drives a session through it.
"""

from .engine import AssessmentEngine, SessionMetrics
from .transitions import Fail, PollAgain, Succeed, next_step, poll_delay

__all__ = [
    "AssessmentEngine",
    "SessionMetrics",
    "Fail",
    "PollAgain",
    "Succeed",
    "next_step",
    "poll_delay",
]
