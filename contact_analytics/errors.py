"""Custom exceptions and error classification for the analytics tools."""

from typing import Any

UNAUTHORISED_MESSAGE = "Unauthorised access. Please check API credentials or permissions."


class GenesysApiError(Exception):
    """Raised by the API client for any non-2xx Genesys Cloud response."""

    def __init__(
        self,
        status: int,
        message: str,
        code: str | None = None,
        message_params: dict[str, Any] | None = None,
    ):
        self.status = status
        self.code = code
        self.message = message
        self.message_params = message_params or {}
        super().__init__(message)


class ToolError(Exception):
    """Base exception for failures surfaced to the tool caller."""

    # Prefixed errors are reported as "<tool context>: <message>"
    prefixed = False

    def __init__(self, message: str, error_type: str, recoverable: bool = False):
        self.message = message
        self.error_type = error_type
        self.recoverable = recoverable
        super().__init__(message)


class InputValidationError(ToolError):
    """Raised when caller input is unusable. Never retried."""

    def __init__(self, message: str):
        super().__init__(message, "validation_error", recoverable=False)


class TimeWindowError(InputValidationError):
    """Raised when a start/end pair does not form a valid time window."""

    INVALID_START = "InvalidStart"
    INVALID_END = "InvalidEnd"
    START_NOT_BEFORE_END = "StartNotBeforeEnd"
    START_IN_FUTURE = "StartInFuture"

    _MESSAGES = {
        INVALID_START: "startDate is not a valid ISO-8601 date.",
        INVALID_END: "endDate is not a valid ISO-8601 date.",
        START_NOT_BEFORE_END: "Start date must be before end date.",
        START_IN_FUTURE: "Start date cannot be in the future.",
    }

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(self._MESSAGES[kind])


class AuthenticationError(ToolError):
    """Raised when the OAuth client credentials are missing or rejected."""

    def __init__(self, reason: str):
        self.reason = reason
        message = f"Failed to authenticate with Genesys Cloud. Reason:\n{reason}"
        super().__init__(message, "authentication_error", recoverable=False)


class AuthorizationError(ToolError):
    """Raised when Genesys Cloud refuses access to a resource."""

    prefixed = True

    def __init__(self, original_error: str = ""):
        self.original_error = original_error
        super().__init__(UNAUTHORISED_MESSAGE, "authorization_error", recoverable=False)


class TransientServiceError(ToolError):
    """Raised when a call to Genesys Cloud fails outside the poller's control."""

    prefixed = True

    def __init__(self, message: str, error_type: str = "transient_service_error"):
        super().__init__(message, error_type, recoverable=True)


class FetchError(TransientServiceError):
    """Raised when fetching the results of a fulfilled job fails."""

    def __init__(self, job_id: str, original_error: str):
        self.job_id = job_id
        self.original_error = original_error
        super().__init__(original_error, "fetch_error")


class JobSubmissionError(ToolError):
    """Raised when an analytics job submission returns no job ID."""

    def __init__(self):
        super().__init__("Job ID not returned from Genesys Cloud.", "job_submission_error")


class JobTerminalFailure(ToolError):
    """Raised when the service reports a terminal, non-success job state."""

    def __init__(self, job_id: str, state: str, message: str):
        self.job_id = job_id
        self.state = state
        super().__init__(message, "job_terminal_failure", recoverable=False)


class PollTimeoutError(ToolError):
    """Raised when a job did not reach FULFILLED within the attempt budget."""

    def __init__(self, job_id: str, attempts: int):
        self.job_id = job_id
        self.attempts = attempts
        super().__init__(
            "Timed out waiting for analytics job to complete.",
            "poll_timeout",
            recoverable=True,
        )


class DataIncompleteError(ToolError):
    """Raised when a payload needed for reconstruction is missing."""

    def __init__(self, message: str):
        super().__init__(message, "data_incomplete", recoverable=False)


def is_unauthorised_error(obj: object) -> bool:
    """Check if an object is a Genesys Cloud "not authorized" (403) error."""
    if isinstance(obj, AuthorizationError):
        return True
    if isinstance(obj, dict):
        code, status = obj.get("code"), obj.get("status")
    else:
        code, status = getattr(obj, "code", None), getattr(obj, "status", None)
    if code and status:
        return code == "not.authorized" and status == 403
    return False


def is_conversation_not_found_error(obj: object) -> tuple[bool, str | None]:
    """Check for a "resource.not.found" error and the conversation ID it names."""
    if isinstance(obj, GenesysApiError):
        code, params = obj.code, obj.message_params
    elif isinstance(obj, dict):
        code, params = obj.get("code"), obj.get("messageParams") or {}
    else:
        return False, None

    if code != "resource.not.found":
        return False, None

    conversation_id = params.get("id")
    return True, conversation_id if isinstance(conversation_id, str) else None


def describe_error(prefix: str, error: BaseException) -> str:
    """Build the human-readable message returned to the tool caller."""
    if is_unauthorised_error(error):
        return f"{prefix}: {UNAUTHORISED_MESSAGE}"
    if isinstance(error, ToolError):
        return f"{prefix}: {error.message}" if error.prefixed else error.message
    return f"{prefix}: {error}"
