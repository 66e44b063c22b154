"""
Polling engine for the TLS assessor.

This module drives one assessment session against the SSL Labs API from
initiation to a terminal status, sleeping between polls as the state
machine in ``transitions`` dictates.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime

import structlog

from ..config import CadencePolicy, Settings
from ..exceptions import AssessmentError, PollLimitExceededError
from ..models import AssessmentRequest, Host, QuotaState
from ..ssllabs_client import Sleep, SSLLabsClient
from .transitions import Fail, Succeed, next_step

logger = structlog.get_logger(__name__)


@dataclass
class SessionMetrics:
    """Metrics for a single assessment session."""

    host: str
    start_time: datetime = field(default_factory=datetime.now)
    end_time: datetime | None = None
    polls: int = 0
    waited_seconds: float = 0.0
    statuses: list[str] = field(default_factory=list)

    @property
    def duration_seconds(self) -> float:
        """Get session duration in seconds."""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0.0


class AssessmentEngine:
    """
    Runs assessment sessions to completion.

    A session is strictly sequential: request, evaluate, then sleep and
    request again. Sessions share no state, so several may run
    concurrently on one event loop.
    """

    def __init__(
        self,
        client: SSLLabsClient,
        cadence: CadencePolicy | None = None,
        max_polls: int = 0,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Initialize the engine.

        Args:
            client: Assessment API client
            cadence: Wait policy between polls
            max_polls: Poll ceiling per session (0 for unlimited)
            sleep: Coroutine function used to wait between polls
        """
        self.client = client
        self.cadence = cadence or CadencePolicy()
        self.max_polls = max_polls
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls, client: SSLLabsClient, settings: Settings, sleep: Sleep = asyncio.sleep
    ) -> "AssessmentEngine":
        """Create an engine configured from application settings."""
        return cls(
            client,
            cadence=settings.cadence_policy,
            max_polls=settings.max_polls,
            sleep=sleep,
        )

    async def run(self, request: AssessmentRequest) -> Host:
        """
        Run one assessment session.

        The first request starts a new assessment unless the caller asked
        for a cached report; every later request only polls.

        Args:
            request: Session parameters

        Returns:
            The terminal Host report (status READY or ERROR)

        Raises:
            AssessmentError: Any transport, decode, quota or poll limit failure
        """
        metrics = SessionMetrics(host=request.host)
        log = logger.bind(host=request.host, from_cache=request.from_cache)
        log.info("Assessment session started")

        try:
            host, quota = await self._poll(request, request.start_new, metrics)
            while True:
                step = next_step(host, quota, self.cadence)

                if isinstance(step, Succeed):
                    log.info(
                        "Assessment session completed",
                        status=step.host.status,
                        endpoints=len(step.host.endpoints),
                        polls=metrics.polls,
                    )
                    return step.host

                if isinstance(step, Fail):
                    raise step.error

                if self.max_polls and metrics.polls >= self.max_polls:
                    raise PollLimitExceededError(
                        f"assessment did not finish within {self.max_polls} polls",
                        polls=metrics.polls,
                        context={"host": request.host, "status": host.status},
                    )

                log.debug(
                    "Waiting before next poll",
                    status=host.status,
                    delay_seconds=step.delay,
                )
                await self._sleep(step.delay)
                metrics.waited_seconds += step.delay
                host, quota = await self._poll(request, False, metrics)

        except AssessmentError as e:
            log.error(
                "Assessment session failed",
                error=str(e),
                error_code=e.code,
                polls=metrics.polls,
            )
            raise
        finally:
            metrics.end_time = datetime.now()
            log.debug(
                "Assessment session metrics",
                polls=metrics.polls,
                waited_seconds=metrics.waited_seconds,
                duration_seconds=metrics.duration_seconds,
                statuses=metrics.statuses,
            )

    async def _poll(
        self, request: AssessmentRequest, start_new: bool, metrics: SessionMetrics
    ) -> tuple[Host, QuotaState]:
        host, quota = await self.client.analyze(request, start_new=start_new)
        metrics.polls += 1
        metrics.statuses.append(host.status)
        logger.debug(
            "Polled assessment",
            host=request.host,
            start_new=start_new,
            status=host.status,
            max_assessments=quota.max_assessments,
            current_assessments=quota.current_assessments,
        )
        return host, quota
