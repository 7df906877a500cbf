"""Application error types surfaced to API clients."""


class CraveSmartError(Exception):
    """Base class for user-facing application errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputValidationError(CraveSmartError):
    """Form input that cannot be accepted as submitted."""


class AuthenticationError(CraveSmartError):
    """Missing, expired or incorrect credentials."""


class NotFoundError(CraveSmartError):
    """A referenced profile or result does not exist."""


class AnalysisInProgressError(CraveSmartError):
    """An analysis is already running for the session."""

    def __init__(self) -> None:
        super().__init__("An analysis is already in progress. Please wait.")


class AnalysisFailedError(CraveSmartError):
    """The AI provider failed or returned an unusable response."""

    def __init__(self) -> None:
        super().__init__("Failed to analyze. Please try again.")
