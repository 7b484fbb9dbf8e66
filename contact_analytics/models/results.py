"""The uniform payload returned by every tool."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Tool response: text content, flagged with ``isError`` on failure."""

    model_config = ConfigDict(populate_by_name=True)

    is_error: bool = Field(False, alias="isError")
    content: list[TextContent] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(item.text for item in self.content)


def text_result(text: str) -> ToolResult:
    return ToolResult(content=[TextContent(text=text)])


def error_result(message: str) -> ToolResult:
    return ToolResult(is_error=True, content=[TextContent(text=message)])
