import asyncio
import logging

import httpx
from pydantic import Field

from ..errors import GenesysApiError, is_conversation_not_found_error, is_unauthorised_error
from .base import AnalyticsTool, ToolParams, UuidStr
from .formatting import interpret_sentiment

logger = logging.getLogger(__name__)


class ConversationSentimentParams(ToolParams):
    conversation_ids: list[UuidStr] = Field(
        ...,
        min_length=1,
        max_length=100,
        description="A list of up to 100 conversation IDs to retrieve sentiment for",
    )


class ConversationSentimentTool(AnalyticsTool):
    """Looks up each conversation independently; one failure does not sink the rest."""

    name = "conversation_sentiment"
    title = "Conversation Sentiment"
    description = (
        "Retrieves sentiment analysis scores for one or more conversations. Sentiment is evaluated "
        "based on customer phrases, categorized as positive, neutral, or negative. The result includes "
        "both a numeric sentiment score (-100 to 100) and an interpreted sentiment label."
    )
    error_prefix = "Failed to retrieve sentiment analysis"
    Params = ConversationSentimentParams

    async def run(self, params: ConversationSentimentParams) -> str:
        responses = await asyncio.gather(
            *(self.client.get_conversation_sentiment(cid) for cid in params.conversation_ids),
            return_exceptions=True,
        )

        output = []
        for conversation_id, response in zip(params.conversation_ids, responses):
            if isinstance(response, BaseException):
                not_found, missing_id = is_conversation_not_found_error(response)
                if not_found and missing_id:
                    output.append(f"• Conversation ID: {missing_id}\n  • Error: Conversation not found")
                elif is_unauthorised_error(response):
                    raise response
                elif isinstance(response, (GenesysApiError, httpx.HTTPError)):
                    logger.warning("Skipping sentiment for %s: %s", conversation_id, response)
                else:
                    raise response
                continue

            returned_id = (response.get("conversation") or {}).get("id")
            score = response.get("sentimentScore")
            if returned_id is None or not isinstance(score, (int, float)):
                continue

            scaled = round(score * 100)
            output.append(
                f"• Conversation ID: {returned_id}\n  • Sentiment Score: {scaled} ({interpret_sentiment(scaled)})"
            )

        if not output:
            return "No sentiment data found for the given conversation IDs."
        return "\n\n".join([f"Sentiment results for {len(output)} conversation(s):", *output])
