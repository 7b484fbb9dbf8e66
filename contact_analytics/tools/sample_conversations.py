from pydantic import Field

from ..analyzers.result_aggregator import conversation_ids, sample_evenly
from ..analyzers.time_window import validate_time_window
from .base import END_DATE_DESCRIPTION, START_DATE_DESCRIPTION, ToolParams, UuidStr
from .job_tool import AnalyticsJobTool
from .queries import customer_filter, details_job_query, predicate_filter

SAMPLE_SIZE = 100


class SampleConversationsByQueueParams(ToolParams):
    queue_id: UuidStr = Field(
        ...,
        description=(
            "The UUID ID of the queue to filter conversations by. "
            "(e.g., 00000000-0000-0000-0000-000000000000)"
        ),
    )
    start_date: str = Field(..., description=START_DATE_DESCRIPTION)
    end_date: str = Field(..., description=END_DATE_DESCRIPTION)


class SampleConversationsByQueueTool(AnalyticsJobTool):
    name = "sample_conversations_by_queue"
    title = "Sample Conversations by Queue"
    description = (
        "Retrieves conversation analytics for a specific queue between two dates, returning a "
        "representative sample of conversation IDs. Useful for reporting, investigation, or summarisation."
    )
    error_prefix = "Failed to query conversations"
    Params = SampleConversationsByQueueParams

    async def run(self, params: SampleConversationsByQueueParams) -> str:
        window = validate_time_window(params.start_date, params.end_date)
        query = details_job_query(
            window,
            [customer_filter(), predicate_filter("queueId", [params.queue_id])],
        )
        ids = conversation_ids(await self.fetch_rows(query))
        sampled = sample_evenly(ids, SAMPLE_SIZE)

        if not sampled:
            return "No conversations found in queue during specified period."

        return "\n".join(
            [
                f"Sample of {len(sampled)} conversations (out of {len(ids)}) in the queue during that period.",
                "",
                "Conversation IDs:",
                *sampled,
            ]
        )
