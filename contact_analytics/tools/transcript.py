from pydantic import Field

from ..transcripts.reconstructor import TranscriptReconstructor
from .base import AnalyticsTool, ToolParams, UuidStr


class ConversationTranscriptParams(ToolParams):
    conversation_id: UuidStr = Field(
        ...,
        description=(
            "The UUID of the conversation to retrieve the transcript for "
            "(e.g., 00000000-0000-0000-0000-000000000000)"
        ),
    )


class ConversationTranscriptTool(AnalyticsTool):
    name = "conversation_transcript"
    title = "Conversation Transcript"
    description = (
        "Retrieves a structured transcript of the conversation, including speaker labels, utterance "
        "timestamps, and sentiment annotations where available. The transcript is formatted as a "
        "time-aligned list of utterances attributed to each participant (e.g., customer or agent)"
    )
    error_prefix = "Failed to retrieve transcript"
    Params = ConversationTranscriptParams

    def reconstructor(self) -> TranscriptReconstructor:
        return TranscriptReconstructor.for_service(
            self.client,
            retry_limit=self.settings.recordings_retry_limit,
            retry_delay_seconds=self.settings.recordings_retry_delay_seconds,
            sleep=self.sleep,
        )

    async def run(self, params: ConversationTranscriptParams) -> str:
        return await self.reconstructor().table(params.conversation_id)
