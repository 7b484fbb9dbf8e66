"""Download the raw transcript bundles of a conversation."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Protocol

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from pydantic import ValidationError

from ..errors import DataIncompleteError
from ..models.transcript import TranscriptBundle

logger = logging.getLogger(__name__)
tracer = trace.get_tracer("transcript-fetcher")


class TranscriptService(Protocol):
    async def list_recording_sessions(self, conversation_id: str) -> list[str] | None: ...

    async def get_transcript_url(self, conversation_id: str, session_id: str) -> dict: ...

    async def fetch_json(self, url: str) -> Any: ...


class TranscriptFetcher:
    """Fetches one TranscriptBundle per recording session of a conversation.

    Recordings are unarchived in the background by the provider, so an empty
    recordings lookup is retried on a fixed delay. There is no job state to
    inspect here, only presence or absence of data.
    """

    def __init__(
        self,
        service: TranscriptService,
        retry_limit: int = 5,
        retry_delay_seconds: float = 10.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.service = service
        self.retry_limit = retry_limit
        self.retry_delay_seconds = retry_delay_seconds
        self.sleep = sleep

    async def recording_session_ids(self, conversation_id: str) -> list[str]:
        """Session IDs of the conversation's recordings, waiting while they unarchive."""
        retries = 0
        while True:
            session_ids = await self.service.list_recording_sessions(conversation_id)
            if session_ids is not None:
                return [sid for sid in session_ids if sid]

            retries += 1
            if retries > self.retry_limit:
                raise DataIncompleteError("Failed to retrieve transcript.")

            logger.info(
                "Recordings for %s not ready, retry %d/%d in %ss",
                conversation_id, retries, self.retry_limit, self.retry_delay_seconds,
            )
            await self.sleep(self.retry_delay_seconds)

    async def fetch_bundle(self, conversation_id: str, session_id: str) -> TranscriptBundle:
        transcript_url = await self.service.get_transcript_url(conversation_id, session_id)
        url = (transcript_url or {}).get("url")
        if not url:
            raise DataIncompleteError("URL for transcript was not provided for conversation")

        payload = await self.service.fetch_json(url)
        try:
            return TranscriptBundle.model_validate(payload or {})
        except ValidationError as e:
            logger.warning("Malformed transcript for %s session %s: %s", conversation_id, session_id, e)
            raise DataIncompleteError("Transcript for conversation was not in the expected format.") from e

    async def fetch_bundles(self, conversation_id: str) -> list[TranscriptBundle]:
        """
        Fetch every transcript bundle of a conversation, in session order.

        Raises:
            DataIncompleteError: If recordings never became available or a
                transcript URL is missing
            GenesysApiError: If any API call fails; no partial result is kept
        """
        with tracer.start_as_current_span(
            "fetch_transcript_bundles",
            attributes={
                "conversation.id": conversation_id,
                "openinference.span.kind": "retriever",
            },
        ) as span:
            try:
                session_ids = await self.recording_session_ids(conversation_id)
                span.set_attribute("transcript.session_count", len(session_ids))

                bundles = []
                for session_id in session_ids:
                    bundles.append(await self.fetch_bundle(conversation_id, session_id))

                span.set_status(Status(StatusCode.OK))
                return bundles

            except Exception as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                span.record_exception(e)
                raise
