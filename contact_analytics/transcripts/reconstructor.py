"""Fetch a conversation's transcripts and merge them into one utterance table."""

import logging

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from ..models.transcript import Utterance
from .fetcher import TranscriptFetcher, TranscriptService
from .renderer import UtteranceRenderer, build_utterances

logger = logging.getLogger(__name__)
tracer = trace.get_tracer("transcript-reconstructor")


class TranscriptReconstructor:
    """Runs fetch, participant matching, sentiment join and rendering in turn."""

    def __init__(self, fetcher: TranscriptFetcher):
        self.fetcher = fetcher

    @classmethod
    def for_service(cls, service: TranscriptService, **fetcher_options) -> "TranscriptReconstructor":
        return cls(TranscriptFetcher(service, **fetcher_options))

    async def utterances(self, conversation_id: str) -> list[Utterance]:
        with tracer.start_as_current_span(
            "reconstruct_transcript",
            attributes={
                "conversation.id": conversation_id,
                "input.value": conversation_id,
                "openinference.span.kind": "chain",
            },
        ) as span:
            try:
                bundles = await self.fetcher.fetch_bundles(conversation_id)
                utterances = build_utterances(bundles)
                logger.info(
                    "Reconstructed %d utterances from %d transcript bundles for %s",
                    len(utterances), len(bundles), conversation_id,
                )
                span.set_attribute("transcript.utterance_count", len(utterances))
                span.set_status(Status(StatusCode.OK))
                return utterances

            except Exception as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                span.record_exception(e)
                raise

    async def table(self, conversation_id: str) -> str:
        return UtteranceRenderer.render_table(await self.utterances(conversation_id))

    async def records(self, conversation_id: str) -> list[dict]:
        return UtteranceRenderer.to_records(await self.utterances(conversation_id))
