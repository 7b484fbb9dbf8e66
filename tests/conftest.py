"""Shared test fixtures and configuration."""

import os
import pytest
from unittest.mock import AsyncMock, MagicMock


# Set test environment variables BEFORE any application imports
os.environ.setdefault("GENESYSCLOUD_REGION", "mypurecloud.com")
os.environ.setdefault("GENESYSCLOUD_OAUTHCLIENT_ID", "test-client-id")
os.environ.setdefault("GENESYSCLOUD_OAUTHCLIENT_SECRET", "test-client-secret")
os.environ.setdefault("ARIZE_API_KEY", "")
os.environ.setdefault("ARIZE_SPACE_ID", "")


@pytest.fixture(autouse=True, scope="session")
def clear_settings_cache():
    """Clear the lru_cache on get_settings to prevent stale config."""
    from contact_analytics.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Settings with credentials present and every wait set to zero."""
    from contact_analytics.config import Settings

    return Settings(
        _env_file=None,
        genesyscloud_region="mypurecloud.com",
        genesyscloud_oauthclient_id="test-client-id",
        genesyscloud_oauthclient_secret="test-client-secret",
        job_poll_delay_seconds=0,
        recordings_retry_delay_seconds=0,
    )


@pytest.fixture
def no_sleep():
    return AsyncMock(return_value=None)


@pytest.fixture
def fake_client():
    """A GenesysCloudClient stand-in with every API method mocked."""
    client = MagicMock()
    client.region = "mypurecloud.com"
    for method in (
        "login",
        "submit_job",
        "get_job_status",
        "get_job_results",
        "list_recording_sessions",
        "get_transcript_url",
        "fetch_json",
        "query_conversation_details",
        "get_conversations_details",
        "get_conversation_details",
        "get_conversation_sentiment",
        "query_transcripts_aggregates",
        "list_topics",
        "search_queues",
        "aclose",
    ):
        setattr(client, method, AsyncMock())
    return client


@pytest.fixture
def make_row():
    """Factory fixture building a conversation details row (API JSON shape)."""

    def _make(conversation_id="c1", queue_ids=(), wrap_up_codes=(), media_type="voice", **extra):
        segments = [{"segmentType": "interact", "queueId": q} for q in queue_ids]
        wrap_up_queue = {"queueId": queue_ids[0]} if queue_ids else {}
        segments += [
            {"segmentType": "wrapup", "wrapUpCode": code, **wrap_up_queue} for code in wrap_up_codes
        ]
        row = {
            "participants": [
                {
                    "purpose": "agent",
                    "sessions": [{"mediaType": media_type, "segments": segments}],
                }
            ],
            **extra,
        }
        if conversation_id is not None:
            row["conversationId"] = conversation_id
        return row

    return _make


@pytest.fixture
def make_rows(make_row):
    """Factory fixture returning parsed AnalyticsConversation rows."""
    from contact_analytics.models import AnalyticsConversation

    def _make(*row_kwargs):
        return [AnalyticsConversation.model_validate(make_row(**kwargs)) for kwargs in row_kwargs]

    return _make


@pytest.fixture
def ivr_and_customer_bundle():
    """One recording session: an IVR phrase at 0s and a positive customer phrase at 5s."""
    return {
        "conversationId": "00000000-0000-0000-0000-000000000001",
        "communicationId": "session-1",
        "mediaType": "call",
        "conversationStartTime": 1_700_000_000_000,
        "participants": [
            {
                "participantPurpose": "ivr",
                "startTimeMs": 1_700_000_000_000,
                "endTimeMs": 1_700_000_004_000,
            },
            {
                "participantPurpose": "external",
                "startTimeMs": 1_700_000_000_000,
                "endTimeMs": 1_700_000_060_000,
            },
        ],
        "transcripts": [
            {
                "transcriptId": "t1",
                "language": "en-US",
                "phrases": [
                    {
                        "phraseIndex": 0,
                        "participantPurpose": "internal",
                        "text": "I'm an IVR",
                        "startTimeMs": 1_700_000_000_000,
                    },
                    {
                        "phraseIndex": 1,
                        "participantPurpose": "external",
                        "text": "I'm a customer",
                        "startTimeMs": 1_700_000_005_000,
                    },
                ],
                "analytics": {"sentiment": [{"phraseIndex": 1, "sentiment": 1}]},
            }
        ],
    }
