"""Construct the tool set served by the MCP server and the HTTP wrapper."""

import asyncio
from typing import Any, Awaitable, Callable

from ..config import Settings, get_settings
from .base import AnalyticsTool
from .call_quality import VoiceCallQualityTool
from .queue_volumes import QueryQueueVolumesTool
from .queues import SearchQueuesTool
from .sample_conversations import SampleConversationsByQueueTool
from .sentiment import ConversationSentimentTool
from .topics import ConversationTopicsTool
from .transcript import ConversationTranscriptTool
from .voice_search import SearchVoiceConversationsTool
from .wrap_up_codes import WrapUpCodeAnalyticsTool

TOOL_CLASSES: tuple[type[AnalyticsTool], ...] = (
    SearchQueuesTool,
    SampleConversationsByQueueTool,
    QueryQueueVolumesTool,
    VoiceCallQualityTool,
    ConversationSentimentTool,
    ConversationTopicsTool,
    SearchVoiceConversationsTool,
    ConversationTranscriptTool,
    WrapUpCodeAnalyticsTool,
)


def build_tools(
    client: Any,
    settings: Settings | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> dict[str, AnalyticsTool]:
    """Instantiate every tool against one client, keyed by tool name."""
    settings = settings or get_settings()
    return {cls.name: cls(client, settings=settings, sleep=sleep) for cls in TOOL_CLASSES}
