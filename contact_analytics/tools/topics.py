from datetime import timedelta

from pydantic import Field

from ..analyzers.result_aggregator import chunked
from ..analyzers.time_window import format_interval, parse_instant
from ..errors import DataIncompleteError
from .base import AnalyticsTool, ToolParams, UuidStr

# The topics listing accepts at most this many IDs per request
MAX_TOPIC_IDS_PER_REQUEST = 50

# A conversation is only matched when the interval fully encloses it
INTERVAL_PADDING = timedelta(minutes=10)


class ConversationTopicsParams(ToolParams):
    conversation_id: UuidStr = Field(
        ...,
        description="A UUID for a conversation. (e.g., 00000000-0000-0000-0000-000000000000)",
    )


def topics_query(conversation_id: str, interval: str) -> dict:
    return {
        "interval": interval,
        "filter": {
            "type": "and",
            "predicates": [
                {"dimension": "conversationId", "value": conversation_id},
                {"dimension": "resultsBy", "value": "communication"},
            ],
        },
        "groupBy": ["topicId"],
        "metrics": ["nTopicCommunications"],
    }


class ConversationTopicsTool(AnalyticsTool):
    name = "conversation_topics"
    title = "Conversation Topics"
    description = (
        "Retrieves Speech and Text Analytics topics detected for a specific conversation. Topics "
        "represent business-level intents (e.g. cancellation, billing enquiry) inferred from "
        "recognised phrases in the customer-agent interaction."
    )
    error_prefix = "Failed to retrieve conversation topics"
    Params = ConversationTopicsParams

    async def detected_topic_ids(self, conversation_id: str) -> list[str]:
        details = await self.client.get_conversation_details(conversation_id)
        start = parse_instant(details.get("conversationStart"))
        end = parse_instant(details.get("conversationEnd"))
        if start is None or end is None:
            raise DataIncompleteError(
                "Unable to find conversation Start and End date needed for retrieving topics"
            )

        interval = format_interval(start - INTERVAL_PADDING, end + INTERVAL_PADDING)
        aggregates = await self.client.query_transcripts_aggregates(topics_query(conversation_id, interval))

        topic_ids = dict.fromkeys(
            (result.get("group") or {}).get("topicId") for result in aggregates.get("results") or []
        )
        return [topic_id for topic_id in topic_ids if topic_id]

    async def run(self, params: ConversationTopicsParams) -> str:
        topic_ids = await self.detected_topic_ids(params.conversation_id)
        if not topic_ids:
            return f"Conversation ID: {params.conversation_id}\nNo detected topics for this conversation."

        topics = []
        for chunk in chunked(topic_ids, MAX_TOPIC_IDS_PER_REQUEST):
            listing = await self.client.list_topics(chunk, MAX_TOPIC_IDS_PER_REQUEST)
            topics.extend(listing.get("entities") or [])

        return "\n".join(
            [
                f"Conversation ID: {params.conversation_id}",
                "Detected Topics:",
                *(
                    f" • {topic['name']}: {topic['description']}"
                    for topic in topics
                    if topic.get("name") and topic.get("description")
                ),
            ]
        )
