"""Custom exceptions for planning operations.

Every error the planner raises derives from PlannerError so callers can
catch the whole family at the pipeline boundary.
"""


class PlannerError(Exception):
    """Base class for planner errors."""

    pass


class InvalidProbeError(PlannerError):
    """Raised when probe facts cannot support a decision.

    Typical causes are a non-positive duration, a zero file size, or
    non-positive frame dimensions.
    """

    def __init__(self, field: str, value: object, detail: str = "") -> None:
        """Initialize the error.

        Args:
            field: Name of the offending probe field (e.g., "duration_seconds").
            value: The rejected value.
            detail: Optional extra context.
        """
        self.field = field
        self.value = value
        message = f"Invalid probe value for {field}: {value!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InvalidIntentError(PlannerError):
    """Raised when a quality intent is out of range or malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class NoVideoStreamError(PlannerError):
    """Raised when a probe result contains no video stream."""

    def __init__(self, path: str | None = None) -> None:
        self.path = path
        where = f" in {path}" if path else ""
        super().__init__(f"No video stream found{where}")


class InvalidTransitionError(PlannerError):
    """Raised when a file run is moved to a state it cannot reach."""

    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot transition from {current} to {requested}")
