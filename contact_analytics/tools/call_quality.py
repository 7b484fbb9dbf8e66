from pydantic import Field

from ..models.analytics import parse_conversations
from .base import AnalyticsTool, ToolParams, UuidStr
from .formatting import mos_quality_label

MOS_LEGEND = [
    "Call Quality Report for voice conversations.",
    "",
    "MOS Quality Legend:",
    "  Poor:       MOS < 3.5",
    "  Acceptable: 3.5 ≤ MOS < 4.3",
    "  Excellent:  MOS ≥ 4.3",
    "",
]


class VoiceCallQualityParams(ToolParams):
    conversation_ids: list[UuidStr] = Field(
        ...,
        min_length=1,
        max_length=100,
        description="A list of up to 100 conversation IDs to evaluate voice call quality for",
    )


class VoiceCallQualityTool(AnalyticsTool):
    name = "voice_call_quality"
    title = "Voice Call Quality"
    description = (
        "Retrieves voice call quality metrics for one or more conversations by ID. This tool "
        "specifically focuses on voice interactions and returns the minimum Mean Opinion Score (MOS) "
        "observed in each conversation, helping identify degraded or poor-quality voice calls."
    )
    error_prefix = "Failed to query conversations call quality"
    Params = VoiceCallQualityParams

    async def run(self, params: VoiceCallQualityParams) -> str:
        details = await self.client.get_conversations_details(params.conversation_ids)
        rows = parse_conversations(details)

        lines = []
        for row in rows:
            mos = row.media_stats_min_conversation_mos
            if not row.conversation_id or not mos:
                continue
            lines.append(
                f"• Conversation ID: {row.conversation_id}\n  • Minimum MOS: {mos:.2f} ({mos_quality_label(mos)})"
            )

        if not lines:
            return "No valid call quality data found for the given conversation IDs."

        return "\n".join(
            [
                f"Call Quality Report for {len(params.conversation_ids)} conversation(s):",
                *MOS_LEGEND,
                *lines,
            ]
        )
