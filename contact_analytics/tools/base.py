"""Shared plumbing for the MCP tools: parameter models and the error boundary."""

import asyncio
import json
import logging
from typing import Annotated, Any, Awaitable, Callable, ClassVar

import httpx
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

from ..config import Settings, get_settings
from ..errors import GenesysApiError, ToolError, describe_error
from ..models.results import ToolResult, error_result, text_result

logger = logging.getLogger(__name__)
tracer = trace.get_tracer("contact-analytics-tools")

UUID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"

UuidStr = Annotated[str, StringConstraints(pattern=UUID_PATTERN)]

START_DATE_DESCRIPTION = "The start date/time in ISO-8601 format (e.g., '2024-01-01T00:00:00Z')"
END_DATE_DESCRIPTION = "The end date/time in ISO-8601 format (e.g., '2024-01-07T23:59:59Z')"


class ToolParams(BaseModel):
    """Tool arguments; exposed to MCP clients with camelCase names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ToolBoundary:
    """Async context manager that turns expected failures into an error result.

    Usage::

        boundary = ToolBoundary("Failed to search queues")
        async with boundary:
            return text_result(await work())
        return boundary.result

    ``ToolError``, ``GenesysApiError`` and ``httpx.HTTPError`` are suppressed
    and recorded in ``result``; anything else propagates.
    """

    handled = (ToolError, GenesysApiError, httpx.HTTPError)

    def __init__(self, prefix: str):
        self.prefix = prefix
        self.result: ToolResult | None = None

    async def __aenter__(self) -> "ToolBoundary":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc is None or not isinstance(exc, self.handled):
            return False
        logger.warning("%s: %s", self.prefix, exc)
        self.result = error_result(describe_error(self.prefix, exc))
        return True


class AnalyticsTool:
    """Base class for every tool the server exposes.

    Subclasses declare ``name``, ``description``, ``error_prefix`` and a
    ``Params`` model, and implement ``run`` returning the response text.
    Failures raised from ``run`` are reported through ``ToolBoundary``.
    """

    name: ClassVar[str]
    title: ClassVar[str | None] = None
    description: ClassVar[str]
    error_prefix: ClassVar[str]
    Params: ClassVar[type[ToolParams]]

    def __init__(
        self,
        client: Any,
        settings: Settings | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.client = client
        self.settings = settings or get_settings()
        self.sleep = sleep

    @classmethod
    def input_schema(cls) -> dict:
        return cls.Params.model_json_schema(by_alias=True)

    @classmethod
    def parse_params(cls, arguments: dict | None) -> ToolParams:
        """Validate raw arguments; raises pydantic.ValidationError."""
        return cls.Params.model_validate(arguments or {})

    async def run(self, params: ToolParams) -> str:
        raise NotImplementedError

    async def call(self, params: ToolParams) -> ToolResult:
        with tracer.start_as_current_span(
            f"tool {self.name}",
            attributes={
                "tool.name": self.name,
                "input.value": json.dumps(params.model_dump(mode="json", by_alias=True)),
                "input.mime_type": "application/json",
                "openinference.span.kind": "tool",
            },
        ) as span:
            boundary = ToolBoundary(self.error_prefix)
            async with boundary:
                result = text_result(await self.run(params))
                span.set_attribute("output.value", result.text)
                span.set_status(Status(StatusCode.OK))
                return result

            span.set_status(Status(StatusCode.ERROR, boundary.result.text))
            return boundary.result
