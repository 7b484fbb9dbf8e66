from pydantic import Field

from ..analyzers.time_window import validate_time_window
from ..models.analytics import AnalyticsConversation, parse_conversations
from .base import END_DATE_DESCRIPTION, START_DATE_DESCRIPTION, AnalyticsTool, ToolParams
from .formatting import format_duration, normalise_phone_number, pagination_section
from .queries import predicate_filter


class SearchVoiceConversationsParams(ToolParams):
    phone_number: str | None = Field(
        None,
        description=(
            "Optional. Filters results to only include conversations involving this phone number "
            "(e.g., '+440000000000')"
        ),
    )
    page_number: int = Field(
        1,
        gt=0,
        description=(
            "The page number of the results to retrieve, starting from 1. Defaults to 1 if not "
            "specified. Used with 'pageSize' for navigating large result sets"
        ),
    )
    page_size: int = Field(
        100,
        gt=0,
        le=100,
        description=(
            "The maximum number of conversations to return per page. Defaults to 100 if not "
            "specified. Used with 'pageNumber' for pagination. The maximum value is 100"
        ),
    )
    start_date: str = Field(..., description=START_DATE_DESCRIPTION)
    end_date: str = Field(..., description=END_DATE_DESCRIPTION)


def _describe_match(row: AnalyticsConversation) -> str:
    duration = format_duration(row.conversation_start, row.conversation_end)
    return f"{row.conversation_id} ({duration})" if duration else row.conversation_id


class SearchVoiceConversationsTool(AnalyticsTool):
    name = "search_voice_conversations"
    title = "Search Voice Conversations"
    description = (
        "Searches for voice conversations within a specified time window, optionally filtering by "
        "phone number. Returns a paginated list of conversation metadata for use in further analysis "
        "or tool calls."
    )
    error_prefix = "Failed to search conversations"
    Params = SearchVoiceConversationsParams

    async def run(self, params: SearchVoiceConversationsParams) -> str:
        window = validate_time_window(params.start_date, params.end_date)

        segment_filters = [
            predicate_filter("mediaType", ["voice"]),
            predicate_filter("direction", ["inbound", "outbound"]),
        ]
        if params.phone_number:
            segment_filters.append(predicate_filter("ani", [normalise_phone_number(params.phone_number)]))

        result = await self.client.query_conversation_details(
            {
                "order": "desc",
                "orderBy": "conversationStart",
                "paging": {"pageSize": params.page_size, "pageNumber": params.page_number},
                "interval": window.interval,
                "segmentFilters": segment_filters,
                "conversationFilters": [],
                "evaluationFilters": [],
                "surveyFilters": [],
            }
        )
        total_hits = result.get("totalHits")
        rows = parse_conversations(result)

        return "\n".join(
            [
                f"Total hits: {total_hits or 0}",
                "",
                "Conversation IDs and Durations of matches:",
                *(_describe_match(row) for row in rows if row.conversation_id),
                "",
                *pagination_section(
                    "Total Conversations returned",
                    page_size=params.page_size,
                    page_number=params.page_number,
                    total_hits=total_hits,
                ),
            ]
        )
