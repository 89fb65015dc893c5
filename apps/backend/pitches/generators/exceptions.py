"""Custom exceptions for pitch generation."""


class PitchGenerationError(Exception):
    """Base class for every error raised by the pitch workflow."""

    category = "PitchGenerationError"


# =============================================================================
# Workflow errors
# =============================================================================


class IncompleteAnswers(PitchGenerationError):
    """Wizard answers are missing one or more required keys."""

    category = "IncompleteAnswers"

    def __init__(self, missing_keys: list[str]):
        self.missing_keys = list(missing_keys)
        super().__init__(f"Missing required answers: {', '.join(self.missing_keys)}")


class InvalidStateTransition(PitchGenerationError):
    """Operation requested against a record in the wrong status."""

    category = "InvalidStateTransition"

    def __init__(self, record_id, status: str, operation: str):
        self.record_id = record_id
        self.status = status
        self.operation = operation
        super().__init__(
            f"Cannot run {operation} on generation {record_id} (current: {status})"
        )


class AlreadyInProgress(PitchGenerationError):
    """The stage is already generating for this record."""

    category = "AlreadyInProgress"

    def __init__(self, record_id, status: str):
        self.record_id = record_id
        self.status = status
        super().__init__(f"Generation {record_id} is already in progress ({status})")


class NotFound(PitchGenerationError):
    """Unknown record id."""

    category = "NotFound"

    def __init__(self, record_id):
        self.record_id = record_id
        super().__init__(f"Generation {record_id} not found")


class PreconditionFailed(PitchGenerationError):
    """Lost a compare-and-set on the record status."""

    category = "PreconditionFailed"

    def __init__(self, record_id, expected_status: str):
        self.record_id = record_id
        self.expected_status = expected_status
        super().__init__(
            f"Generation {record_id} is no longer in status {expected_status}"
        )


# =============================================================================
# Upstream (AI / TTS provider) errors
# =============================================================================


class UpstreamError(PitchGenerationError):
    """Classified failure of an outbound provider call."""

    category = "UpstreamError"

    @property
    def reason(self) -> str:
        """Human readable failure reason including the error category."""
        return f"{self.category}: {self}"


class UpstreamTimeout(UpstreamError):
    """Provider call timed out."""

    category = "UpstreamTimeout"


class UpstreamRejected(UpstreamError):
    """Provider refused the request (non-success response, network error)."""

    category = "UpstreamRejected"


class UpstreamInvalidResponse(UpstreamError):
    """Provider answered but the output is empty or unusable."""

    category = "UpstreamInvalidResponse"
