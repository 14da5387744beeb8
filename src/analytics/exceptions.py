class AnalyticsError(Exception):
    pass


class ProviderUnavailableError(AnalyticsError):
    """Metrics provider failed or timed out. Retryable."""

    def __init__(self, message: str = "Failed to load token data") -> None:
        super().__init__(message)


class DegenerateInputError(AnalyticsError, ValueError):
    """Inputs that cannot produce a valid result. Not retryable."""


class RefresherClosedError(AnalyticsError):
    pass
