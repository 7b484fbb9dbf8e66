from typing import Literal

from pydantic import Field

from ..analyzers.result_aggregator import WrapUpCodeAnalysis, WrapUpReport, analyze_wrap_up_codes
from ..analyzers.time_window import TimeWindow, validate_time_window
from .base import END_DATE_DESCRIPTION, START_DATE_DESCRIPTION, ToolParams, UuidStr
from .job_tool import AnalyticsJobTool
from .queries import customer_filter, details_job_query, predicate_filter

MediaType = Literal["voice", "email", "chat", "sms", "messaging", "callback", "social", "video"]

TOP_QUEUES = 5
SHOWN_EXAMPLES = 3


class WrapUpCodeAnalyticsParams(ToolParams):
    start_date: str = Field(..., description=START_DATE_DESCRIPTION)
    end_date: str = Field(..., description=END_DATE_DESCRIPTION)
    queue_ids: list[UuidStr] | None = Field(
        None, max_length=100, description="Optional: List of up to 100 queue IDs to filter by"
    )
    wrap_up_codes: list[str] | None = Field(
        None, max_length=50, description="Optional: List of specific wrap-up codes to filter by"
    )
    media_types: list[MediaType] | None = Field(
        None, description="Optional: Filter by specific media types"
    )


def _format_code(analysis: WrapUpCodeAnalysis) -> str:
    queues = [
        f"    📞 {queue}: {count}"
        for queue, count in analysis.queue_breakdown.most_common(TOP_QUEUES)
    ]
    media = [
        f"    📱 {media_type}: {count}"
        for media_type, count in analysis.media_type_breakdown.most_common()
    ]
    return "\n".join(
        [
            f'🏷️ Wrap-Up Code: "{analysis.wrap_up_code}"',
            f"   📊 Count: {analysis.conversation_count} ({analysis.percentage}%)",
            "   🏢 Top Queues:",
            *queues,
            "   📱 Media Types:",
            *media,
            f"   🔗 Example Conversations: {', '.join(analysis.examples[:SHOWN_EXAMPLES])}",
        ]
    )


def format_wrap_up_report(window: TimeWindow, report: WrapUpReport) -> str:
    summary = "\n".join(
        [
            f"🗓️ Period: {window.date_range()}",
            f"📊 Total Conversations: {report.total_conversations}",
            f"🏷️ Conversations with Wrap-Up: {report.conversations_with_wrap_up}",
            f"📈 Wrap-Up Coverage: {report.coverage}%",
            f"🔢 Unique Wrap-Up Codes: {len(report.codes)}",
        ]
    )

    if not report.codes:
        return f"{summary}\n\n❌ No wrap-up codes found for the specified criteria."

    return "\n".join(
        [
            "📈 WRAP-UP CODE ANALYTICS REPORT",
            "=" * 40,
            "",
            summary,
            "",
            "📋 DETAILED BREAKDOWN:",
            "\n\n".join(_format_code(analysis) for analysis in report.codes),
        ]
    )


class WrapUpCodeAnalyticsTool(AnalyticsJobTool):
    name = "wrap_up_code_analytics"
    title = "Wrap-Up Code Analytics"
    description = (
        "Analyzes wrap-up codes from conversations to understand interaction types and volumes. "
        "Useful for answering questions like 'how many inquiries came today' or 'what types of calls "
        "did we receive'. Returns detailed breakdown by wrap-up code, queue, and media type."
    )
    error_prefix = "Failed to retrieve wrap-up code analytics"
    Params = WrapUpCodeAnalyticsParams
    max_attempts_setting = "heavy_job_poll_max_attempts"

    async def run(self, params: WrapUpCodeAnalyticsParams) -> str:
        window = validate_time_window(params.start_date, params.end_date)

        segment_filters = [customer_filter()]
        if params.queue_ids:
            segment_filters.append(predicate_filter("queueId", params.queue_ids))
        if params.media_types:
            segment_filters.append(predicate_filter("mediaType", params.media_types))
        if params.wrap_up_codes:
            segment_filters.append(predicate_filter("wrapUpCode", params.wrap_up_codes))

        rows = await self.fetch_rows(details_job_query(window, segment_filters, order="desc"))
        return format_wrap_up_report(window, analyze_wrap_up_codes(rows))
