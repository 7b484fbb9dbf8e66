"""MCP tools over the Genesys Cloud analytics, routing and transcript APIs."""

from .base import AnalyticsTool, ToolBoundary, ToolParams
from .call_quality import VoiceCallQualityTool
from .formatting import (
    format_duration,
    interpret_sentiment,
    normalise_phone_number,
    pagination_section,
)
from .queue_volumes import QueryQueueVolumesTool
from .queues import SearchQueuesTool
from .registry import TOOL_CLASSES, build_tools
from .sample_conversations import SampleConversationsByQueueTool
from .sentiment import ConversationSentimentTool
from .topics import ConversationTopicsTool
from .transcript import ConversationTranscriptTool
from .voice_search import SearchVoiceConversationsTool
from .wrap_up_codes import WrapUpCodeAnalyticsTool

__all__ = [
    "AnalyticsTool",
    "ToolBoundary",
    "ToolParams",
    "format_duration",
    "interpret_sentiment",
    "normalise_phone_number",
    "pagination_section",
    "TOOL_CLASSES",
    "build_tools",
    "QueryQueueVolumesTool",
    "SampleConversationsByQueueTool",
    "WrapUpCodeAnalyticsTool",
    "ConversationTranscriptTool",
    "SearchVoiceConversationsTool",
    "ConversationSentimentTool",
    "ConversationTopicsTool",
    "VoiceCallQualityTool",
    "SearchQueuesTool",
]
