"""Client for the Genesys Cloud Platform API."""

import json
import logging
from typing import Any

import httpx
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from ..config import get_settings
from ..errors import GenesysApiError

logger = logging.getLogger(__name__)


class GenesysCloudClient:
    """Async client for the Genesys Cloud endpoints the analytics tools use.

    Every method returns the decoded JSON body. Non-2xx responses raise
    ``GenesysApiError`` carrying the status and the platform error code, so
    callers can tell "not authorized" apart from other failures.
    """

    def __init__(
        self,
        region: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the Genesys Cloud client.

        Args:
            region: Genesys Cloud region domain (e.g. "mypurecloud.com").
                    Defaults to GENESYSCLOUD_REGION.
            timeout: Request timeout in seconds.
            http_client: Optional pre-built httpx client (used by tests).
        """
        settings = get_settings()
        self.region = region or settings.genesyscloud_region
        self.timeout = timeout or settings.http_timeout_seconds
        self.http_client = http_client or httpx.AsyncClient(timeout=self.timeout)
        self.access_token: str | None = None
        self.tracer = trace.get_tracer("genesys-cloud-client")

    @property
    def base_url(self) -> str:
        return f"https://api.{self.region}"

    @property
    def login_url(self) -> str:
        return f"https://login.{self.region}/oauth/token"

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def login(self, client_id: str, client_secret: str) -> None:
        """Obtain an access token with the OAuth client credentials grant."""
        response = await self.http_client.post(
            self.login_url,
            data={"grant_type": "client_credentials"},
            auth=(client_id, client_secret),
        )
        body = self._decode(response)
        self.access_token = body.get("access_token")
        if not self.access_token:
            raise GenesysApiError(response.status_code, "No access token returned from Genesys Cloud.")

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict | None = None,
        params: dict | list | None = None,
    ) -> Any:
        """
        Make an authenticated request to the Platform API.

        Args:
            method: HTTP method
            path: API path (e.g. "/api/v2/routing/queues")
            payload: Optional JSON body
            params: Optional query parameters

        Returns:
            Decoded JSON body, or None for an empty response

        Raises:
            GenesysApiError: If the API returns a non-2xx status
            httpx.HTTPError: If the request could not be sent
        """
        url = f"{self.base_url}{path}"

        with self.tracer.start_as_current_span(
            f"genesys {method} {path.split('?')[0]}",
            attributes={
                "http.url": url,
                "http.method": method,
                "input.value": json.dumps(payload) if payload is not None else "",
                "input.mime_type": "application/json",
                "openinference.span.kind": "tool",
            },
        ) as span:
            try:
                headers = {"Content-Type": "application/json"}
                if self.access_token:
                    headers["Authorization"] = f"Bearer {self.access_token}"

                response = await self.http_client.request(
                    method, url, json=payload, params=params, headers=headers
                )
                span.set_attribute("http.status_code", response.status_code)

                result = self._decode(response)
                span.set_status(Status(StatusCode.OK))
                return result

            except (GenesysApiError, httpx.HTTPError) as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                span.record_exception(e)
                raise

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if response.is_success:
            if response.status_code == 204 or not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                raise GenesysApiError(
                    status=response.status_code,
                    message=f"Genesys Cloud returned a response that is not JSON (HTTP {response.status_code})",
                ) from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        raise GenesysApiError(
            status=body.get("status") or response.status_code,
            message=body.get("message") or f"Genesys Cloud error {response.status_code}: {response.text}",
            code=body.get("code"),
            message_params=body.get("messageParams"),
        )

    # ------------------------------------------------------------------
    # Analytics conversation details jobs
    # ------------------------------------------------------------------

    async def submit_job(self, query: dict) -> dict:
        return await self._request("POST", "/api/v2/analytics/conversations/details/jobs", query) or {}

    async def get_job_status(self, job_id: str) -> dict:
        return await self._request("GET", f"/api/v2/analytics/conversations/details/jobs/{job_id}") or {}

    async def get_job_results(self, job_id: str) -> dict:
        return await self._request("GET", f"/api/v2/analytics/conversations/details/jobs/{job_id}/results") or {}

    # ------------------------------------------------------------------
    # Recordings and transcripts
    # ------------------------------------------------------------------

    async def list_recording_sessions(self, conversation_id: str) -> list[str] | None:
        """
        List the recording session IDs of a conversation.

        Returns:
            Session IDs, or None while recordings are still being unarchived
            (the API answers 202 with no body until they are available).
        """
        path = f"/api/v2/conversations/{conversation_id}/recordings"
        response = await self.http_client.get(
            f"{self.base_url}{path}",
            headers={"Authorization": f"Bearer {self.access_token}"} if self.access_token else None,
        )
        if response.status_code == 202:
            logger.debug("Recordings for %s not yet available", conversation_id)
            return None

        recordings = self._decode(response)
        if recordings is None:
            return None
        return [r["sessionId"] for r in recordings if r.get("sessionId")]

    async def get_transcript_url(self, conversation_id: str, session_id: str) -> dict:
        path = (
            f"/api/v2/speechandtextanalytics/conversations/{conversation_id}"
            f"/communications/{session_id}/transcripturl"
        )
        return await self._request("GET", path) or {}

    async def fetch_json(self, url: str) -> Any:
        """Dereference a pre-signed URL (no Authorization header)."""
        response = await self.http_client.get(url)
        return self._decode(response)

    # ------------------------------------------------------------------
    # Direct lookups
    # ------------------------------------------------------------------

    async def query_conversation_details(self, query: dict) -> dict:
        return await self._request("POST", "/api/v2/analytics/conversations/details/query", query) or {}

    async def get_conversations_details(self, conversation_ids: list[str]) -> dict:
        params = [("id", cid) for cid in conversation_ids]
        return await self._request("GET", "/api/v2/analytics/conversations/details", params=params) or {}

    async def get_conversation_details(self, conversation_id: str) -> dict:
        return await self._request("GET", f"/api/v2/analytics/conversations/{conversation_id}/details") or {}

    async def get_conversation_sentiment(self, conversation_id: str) -> dict:
        return await self._request("GET", f"/api/v2/speechandtextanalytics/conversations/{conversation_id}") or {}

    async def query_transcripts_aggregates(self, query: dict) -> dict:
        return await self._request("POST", "/api/v2/analytics/transcripts/aggregates/query", query) or {}

    async def list_topics(self, topic_ids: list[str], page_size: int) -> dict:
        """List Speech and Text Analytics topics by ID (at most 50 per call)."""
        params = [("ids", tid) for tid in topic_ids] + [("pageSize", page_size)]
        return await self._request("GET", "/api/v2/speechandtextanalytics/topics", params=params) or {}

    async def search_queues(self, name: str, page_size: int, page_number: int) -> dict:
        params = {"name": name, "pageSize": page_size, "pageNumber": page_number}
        return await self._request("GET", "/api/v2/routing/queues", params=params) or {}
