"""Engine modules."""

from .job_poller import DeferredJobPoller, JobFailed, JobFulfilled, JobOutcome, JobTimedOut

__all__ = ["DeferredJobPoller", "JobFailed", "JobFulfilled", "JobOutcome", "JobTimedOut"]
