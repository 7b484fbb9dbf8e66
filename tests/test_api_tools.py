"""Tests for the HTTP tool endpoints, with the Genesys Cloud client mocked."""

import pytest
from fastapi.testclient import TestClient

from contact_analytics.clients import AuthSession
from contact_analytics.config import Settings
from contact_analytics.errors import GenesysApiError
from contact_analytics.tools import build_tools

CONVERSATION_ID = "00000000-0000-0000-0000-000000000001"


@pytest.fixture
def api(fake_client, settings, no_sleep):
    """TestClient whose tools and auth session use the mocked client."""
    import main

    state = {"settings": settings}
    main.app.dependency_overrides[main.get_tools] = lambda: build_tools(
        fake_client, state["settings"], sleep=no_sleep
    )
    main.app.dependency_overrides[main.get_auth] = lambda: AuthSession(fake_client, state["settings"])

    yield TestClient(main.app), state

    main.app.dependency_overrides.clear()


class TestListTools:
    def test_lists_schemas(self, api):
        client, _ = api
        response = client.get("/tools")

        assert response.status_code == 200
        tools = {tool["name"]: tool for tool in response.json()}
        assert len(tools) == 9
        assert tools["query_queue_volumes"]["inputSchema"]["required"] == ["queueIds", "startDate", "endDate"]


class TestCallTool:
    def test_success(self, api, fake_client):
        client, _ = api
        fake_client.search_queues.return_value = {"entities": []}

        response = client.post("/tools/search_queues", json={"name": "*"})

        assert response.status_code == 200
        assert response.json() == {
            "isError": False,
            "content": [{"type": "text", "text": "No routing queues found in the system."}],
        }

    def test_error_result_is_returned_not_raised(self, api, fake_client):
        client, _ = api
        fake_client.search_queues.side_effect = GenesysApiError(403, "denied", code="not.authorized")

        response = client.post("/tools/search_queues", json={"name": "*"})

        assert response.status_code == 200
        assert response.json()["isError"] is True
        assert response.json()["content"][0]["text"] == (
            "Failed to search queues: Unauthorised access. Please check API credentials or permissions."
        )

    def test_malformed_upstream_rows_are_an_error_result(self, api, fake_client):
        client, _ = api
        fake_client.get_conversations_details.return_value = {"conversations": [{"participants": "oops"}]}

        response = client.post("/tools/voice_call_quality", json={"conversationIds": [CONVERSATION_ID]})

        assert response.status_code == 200
        assert response.json()["isError"] is True

    def test_unknown_tool(self, api):
        client, _ = api
        assert client.post("/tools/nope", json={}).status_code == 404

    def test_invalid_arguments(self, api):
        client, _ = api
        response = client.post("/tools/search_queues", json={"name": "*", "pageSize": 501})

        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["pageSize"]

    def test_authentication_failure(self, api, fake_client):
        client, state = api
        state["settings"] = Settings(_env_file=None, genesyscloud_region="", genesyscloud_oauthclient_id="", genesyscloud_oauthclient_secret="")

        response = client.post("/tools/search_queues", json={"name": "*"})

        assert response.json()["isError"] is True
        assert response.json()["content"][0]["text"].startswith("Failed to authenticate with Genesys Cloud.")
        fake_client.search_queues.assert_not_awaited()


class TestTranscript:
    def test_returns_records(self, api, fake_client, ivr_and_customer_bundle):
        client, _ = api
        fake_client.list_recording_sessions.return_value = ["session-1"]
        fake_client.get_transcript_url.return_value = {"url": "https://bucket.example/t.json"}
        fake_client.fetch_json.return_value = ivr_and_customer_bundle

        response = client.post("/transcript", json={"conversation_id": CONVERSATION_ID})

        assert response.status_code == 200
        body = response.json()
        assert body["conversation_id"] == CONVERSATION_ID
        assert [u["speaker"] for u in body["utterances"]] == ["IVR", "Customer"]
        assert body["utterances"][1]["time"] == "00:05"
        assert body["utterances"][1]["sentiment_label"] == "Positive"

    def test_rejects_non_uuid_conversation_id(self, api, fake_client):
        client, _ = api

        response = client.post("/transcript", json={"conversation_id": "../users/me"})

        assert response.status_code == 422
        fake_client.list_recording_sessions.assert_not_awaited()

    def test_unauthorised(self, api, fake_client):
        client, _ = api
        fake_client.list_recording_sessions.side_effect = GenesysApiError(403, "denied", code="not.authorized")

        response = client.post("/transcript", json={"conversation_id": CONVERSATION_ID})

        assert response.status_code == 403

    def test_recordings_never_ready(self, api, fake_client):
        client, _ = api
        fake_client.list_recording_sessions.return_value = None

        response = client.post("/transcript", json={"conversation_id": CONVERSATION_ID})

        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to retrieve transcript."
