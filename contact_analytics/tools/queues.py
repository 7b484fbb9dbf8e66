from pydantic import Field

from .base import AnalyticsTool, ToolParams
from .formatting import pagination_section


class SearchQueuesParams(ToolParams):
    name: str = Field(
        ...,
        min_length=1,
        description=(
            "The name (or partial name) of the routing queue(s) to search for. Wildcards ('*') are "
            "supported for pattern matching (e.g., 'Support*', '*Emergency', '*Sales*'). Use '*' alone "
            "to retrieve all queues"
        ),
    )
    page_number: int = Field(
        1,
        gt=0,
        description=(
            "The page number of the results to retrieve, starting from 1. Defaults to 1 if not "
            "specified. Used with 'pageSize' for navigating large result sets"
        ),
    )
    page_size: int = Field(
        100,
        gt=0,
        le=500,
        description=(
            "The maximum number of queues to return per page. Defaults to 100 if not specified. "
            "Used with 'pageNumber' for pagination. The maximum value is 500"
        ),
    )


def _format_queue(queue: dict) -> list[str]:
    lines = [f"• Name: {queue['name']}", f"  • ID: {queue['id']}"]
    if queue.get("description"):
        lines.append(f"  • Description: {queue['description']}")
    if queue.get("memberCount") is not None:
        lines.append(f"  • Member Count: {queue['memberCount']}")
    return lines


class SearchQueuesTool(AnalyticsTool):
    name = "search_queues"
    title = "Search Queues"
    description = (
        "Searches for routing queues based on their name, allowing for wildcard searches. Returns a "
        "paginated list of matching queues, including their Name, ID, Description (if available), and "
        "Member Count (if available). Also provides pagination details like current page, page size, "
        "total results found, and total pages available. Useful for finding specific queue IDs, "
        "checking queue configurations, or listing available queues."
    )
    error_prefix = "Failed to search queues"
    Params = SearchQueuesParams

    async def run(self, params: SearchQueuesParams) -> str:
        result = await self.client.search_queues(params.name, params.page_size, params.page_number)
        entities = result.get("entities") or []

        if not entities:
            if params.name == "*":
                return "No routing queues found in the system."
            return f'No routing queues found matching the name pattern "{params.name}".'

        queues = [q for q in entities if q.get("id") is not None and q.get("name") is not None]
        return "\n".join(
            [
                f'Found the following queues matching "{params.name}":',
                *(line for queue in queues for line in _format_queue(queue)),
                *pagination_section(
                    "Total Matching Queues",
                    page_size=result.get("pageSize"),
                    page_number=result.get("pageNumber"),
                    total_hits=result.get("total"),
                    page_count=result.get("pageCount") or None,
                ),
            ]
        )
