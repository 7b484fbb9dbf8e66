"""Base for tools that read conversation details through an analytics job."""

from typing import ClassVar

from ..engines.job_poller import DeferredJobPoller
from ..models.analytics import AnalyticsConversation
from .base import AnalyticsTool


class AnalyticsJobTool(AnalyticsTool):
    """Adds a configured DeferredJobPoller to AnalyticsTool."""

    # Settings field holding this tool's poll attempt budget
    max_attempts_setting: ClassVar[str] = "job_poll_max_attempts"

    @property
    def max_attempts(self) -> int:
        return getattr(self.settings, self.max_attempts_setting)

    def poller(self) -> DeferredJobPoller:
        return DeferredJobPoller(
            self.client,
            max_attempts=self.max_attempts,
            delay_seconds=self.settings.job_poll_delay_seconds,
            sleep=self.sleep,
        )

    async def fetch_rows(self, query: dict) -> list[AnalyticsConversation]:
        outcome = await self.poller().run(query)
        return outcome.raise_for_outcome()
