import json
import logging
import os
from contextlib import asynccontextmanager
from functools import lru_cache

from dotenv import load_dotenv

# Load environment variables FIRST
load_dotenv(override=True)

from contact_analytics.tracing import setup_logging, setup_tracing

setup_logging()
tracer_provider = setup_tracing()

import httpx
from fastapi import Body, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from pydantic import BaseModel, ValidationError

from contact_analytics.clients import AuthSession, GenesysCloudClient
from contact_analytics.config import get_settings
from contact_analytics.errors import (
    AuthenticationError,
    GenesysApiError,
    ToolError,
    describe_error,
    is_unauthorised_error,
)
from contact_analytics.models import ToolResult, error_result
from contact_analytics.tools import AnalyticsTool, build_tools
from contact_analytics.tools.base import UuidStr
from contact_analytics.transcripts import TranscriptReconstructor

logger = logging.getLogger("contact_analytics.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if get_client.cache_info().currsize:
        await get_client().aclose()


app = FastAPI(
    title="Contact Center Analytics",
    description="Genesys Cloud analytics tools over HTTP, mirroring the MCP server",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

tracer = trace.get_tracer("contact-analytics-api")


class TranscriptRequest(BaseModel):
    conversation_id: UuidStr


@lru_cache
def get_client() -> GenesysCloudClient:
    return GenesysCloudClient()


@lru_cache
def get_auth() -> AuthSession:
    return AuthSession(get_client())


@lru_cache
def get_tools() -> dict[str, AnalyticsTool]:
    return build_tools(get_client())


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "credentials_configured": not get_settings().missing_credentials(),
    }


@app.get("/tools")
async def list_tools(tools: dict[str, AnalyticsTool] = Depends(get_tools)):
    """List the available tools with their argument schemas."""
    return [
        {
            "name": tool.name,
            "title": tool.title,
            "description": tool.description,
            "inputSchema": tool.input_schema(),
        }
        for tool in tools.values()
    ]


@app.post("/tools/{name}")
async def call_tool(
    name: str,
    arguments: dict = Body(default_factory=dict),
    tools: dict[str, AnalyticsTool] = Depends(get_tools),
    auth: AuthSession = Depends(get_auth),
):
    """
    Run one tool and return its result.

    Tool failures are reported inside the result (``isError``), exactly as
    the MCP server reports them.
    """
    tool = tools.get(name)
    if tool is None:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {name}")

    try:
        params = tool.parse_params(arguments)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=json.loads(e.json()))

    try:
        await auth.ensure_authenticated()
    except AuthenticationError as e:
        result: ToolResult = error_result(e.message)
    else:
        result = await tool.call(params)

    return result.model_dump(by_alias=True)


@app.post("/transcript")
async def conversation_transcript(
    request: TranscriptRequest,
    tools: dict[str, AnalyticsTool] = Depends(get_tools),
    auth: AuthSession = Depends(get_auth),
):
    """Return a reconstructed transcript as structured utterance records."""
    with tracer.start_as_current_span(
        "transcript_request",
        attributes={
            "input.value": request.conversation_id,
            "openinference.span.kind": "chain",
        },
    ) as span:
        try:
            await auth.ensure_authenticated()
            reconstructor: TranscriptReconstructor = tools["conversation_transcript"].reconstructor()
            records = await reconstructor.records(request.conversation_id)

            span.set_attribute("transcript.utterance_count", len(records))
            span.set_status(Status(StatusCode.OK))
            return {"conversation_id": request.conversation_id, "utterances": records}

        except AuthenticationError as e:
            span.set_status(Status(StatusCode.ERROR, e.message))
            raise HTTPException(status_code=401, detail=e.message)
        except (ToolError, GenesysApiError, httpx.HTTPError) as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            detail = describe_error("Failed to retrieve transcript", e)
            raise HTTPException(status_code=403 if is_unauthorised_error(e) else 502, detail=detail)


if __name__ == "__main__":
    import uvicorn

    if get_settings().missing_credentials():
        logger.warning("Genesys Cloud credentials are not fully configured; see .env.example")

    port = int(os.getenv("PORT", 8080))
    logger.info("API docs available at http://localhost:%d/docs", port)

    uvicorn.run(app, host="0.0.0.0", port=port)
