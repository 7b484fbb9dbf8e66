"""Submit, poll and fetch lifecycle for asynchronous analytics jobs.

Conversation detail jobs run server-side: the caller submits a query, polls
the job state until it is FULFILLED, then downloads the result rows. Only a
known set of pending states keeps the loop going; every other state is an
authoritative failure reported straight back, so a rejected job is never
disguised as a timeout.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Protocol

import httpx
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from pydantic import ValidationError

from ..errors import (
    FetchError,
    GenesysApiError,
    JobSubmissionError,
    JobTerminalFailure,
    PollTimeoutError,
    is_unauthorised_error,
)
from ..models.analytics import AnalyticsConversation, JobState

logger = logging.getLogger(__name__)
tracer = trace.get_tracer("job-poller")


class AnalyticsJobService(Protocol):
    async def submit_job(self, query: dict) -> dict: ...

    async def get_job_status(self, job_id: str) -> dict: ...

    async def get_job_results(self, job_id: str) -> dict: ...


@dataclass
class JobFulfilled:
    job_id: str
    rows: list[AnalyticsConversation] = field(default_factory=list)

    def raise_for_outcome(self) -> list[AnalyticsConversation]:
        return self.rows


@dataclass
class JobFailed:
    job_id: str
    state: JobState
    message: str

    def raise_for_outcome(self) -> list[AnalyticsConversation]:
        raise JobTerminalFailure(self.job_id, self.state.value, self.message)


@dataclass
class JobTimedOut:
    job_id: str
    attempts: int

    def raise_for_outcome(self) -> list[AnalyticsConversation]:
        raise PollTimeoutError(self.job_id, self.attempts)


JobOutcome = JobFulfilled | JobFailed | JobTimedOut


class DeferredJobPoller:
    """Drives one analytics job from submission to fetched rows.

    Worst-case latency is bounded by ``max_attempts * delay_seconds``.
    """

    def __init__(
        self,
        service: AnalyticsJobService,
        max_attempts: int = 10,
        delay_seconds: float = 3.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.service = service
        self.max_attempts = max_attempts
        self.delay_seconds = delay_seconds
        self.sleep = sleep

    async def submit(self, query: dict) -> str:
        job = await self.service.submit_job(query)
        job_id = (job or {}).get("jobId")
        if not job_id:
            raise JobSubmissionError()
        return job_id

    async def wait(self, job_id: str) -> JobState:
        """Poll until the job leaves the pending states or attempts run out.

        Returns the last observed state: FULFILLED, a terminal failure state,
        or a pending state when the attempt budget was exhausted.
        """
        state = JobState.SUBMITTED
        for attempt in range(1, self.max_attempts + 1):
            status = await self.service.get_job_status(job_id)
            state = JobState.parse((status or {}).get("state"))
            logger.debug("Job %s attempt %d/%d: %s", job_id, attempt, self.max_attempts, state.value)

            if not state.is_pending:
                return state

            if attempt < self.max_attempts:
                await self.sleep(self.delay_seconds)

        return state

    async def fetch(self, job_id: str) -> list[AnalyticsConversation]:
        try:
            results = await self.service.get_job_results(job_id)
        except (GenesysApiError, httpx.HTTPError) as e:
            if is_unauthorised_error(e):
                raise
            raise FetchError(job_id, str(e)) from e

        try:
            return [
                AnalyticsConversation.model_validate(row)
                for row in (results or {}).get("conversations") or []
            ]
        except ValidationError as e:
            logger.warning("Job %s returned malformed rows: %s", job_id, e)
            raise FetchError(job_id, "Analytics job results were not in the expected format.") from e

    async def run(self, query: dict) -> JobOutcome:
        """
        Submit a query, wait for it, and fetch its rows.

        Args:
            query: Conversation details job query body

        Returns:
            JobFulfilled with the result rows, JobFailed for a terminal
            service-reported state, or JobTimedOut when attempts ran out

        Raises:
            JobSubmissionError: If no job ID was returned
            FetchError: If downloading the results failed
        """
        with tracer.start_as_current_span(
            "analytics_job",
            attributes={
                "input.value": json.dumps(query),
                "input.mime_type": "application/json",
                "openinference.span.kind": "chain",
                "job.max_attempts": self.max_attempts,
            },
        ) as span:
            try:
                job_id = await self.submit(query)
                span.set_attribute("job.id", job_id)

                state = await self.wait(job_id)
                span.set_attribute("job.state", state.value)

                if state is JobState.FULFILLED:
                    rows = await self.fetch(job_id)
                    span.set_attribute("job.row_count", len(rows))
                    span.set_status(Status(StatusCode.OK))
                    return JobFulfilled(job_id=job_id, rows=rows)

                if state.is_pending:
                    logger.warning("Job %s still %s after %d attempts", job_id, state.value, self.max_attempts)
                    outcome: JobOutcome = JobTimedOut(job_id=job_id, attempts=self.max_attempts)
                else:
                    logger.warning("Job %s ended in state %s", job_id, state.value)
                    outcome = JobFailed(job_id=job_id, state=state, message=state.failure_message)

                span.set_status(Status(StatusCode.ERROR, type(outcome).__name__))
                return outcome

            except Exception as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                span.record_exception(e)
                raise
