from pydantic import Field

from ..analyzers.result_aggregator import count_conversations_by_queue
from ..analyzers.time_window import validate_time_window
from .base import END_DATE_DESCRIPTION, START_DATE_DESCRIPTION, ToolParams, UuidStr
from .job_tool import AnalyticsJobTool
from .queries import customer_filter, details_job_query, predicate_filter


class QueryQueueVolumesParams(ToolParams):
    queue_ids: list[UuidStr] = Field(
        ...,
        min_length=1,
        max_length=300,
        description="List of up to 300 queue IDs to filter conversations by",
    )
    start_date: str = Field(..., description=START_DATE_DESCRIPTION)
    end_date: str = Field(..., description=END_DATE_DESCRIPTION)


class QueryQueueVolumesTool(AnalyticsJobTool):
    name = "query_queue_volumes"
    title = "Query Queue Volumes"
    description = (
        "Returns a breakdown of how many conversations occurred in each specified queue "
        "between two dates. Useful for comparing workload across queues."
    )
    error_prefix = "Failed to query conversations"
    Params = QueryQueueVolumesParams

    async def run(self, params: QueryQueueVolumesParams) -> str:
        window = validate_time_window(params.start_date, params.end_date)
        query = details_job_query(
            window,
            [customer_filter(), predicate_filter("queueId", params.queue_ids)],
        )
        rows = await self.fetch_rows(query)

        counts = count_conversations_by_queue(rows, params.queue_ids)
        return "\n".join(
            [
                "Queue volume breakdown for that period:",
                *(f"Queue ID: {queue_id} - Total conversations: {count}" for queue_id, count in counts.items()),
            ]
        )
