"""Exceptions raised by the aggregation engine."""


class AggregatorError(Exception):
    """Base exception for all aggregation errors."""

    pass


class NoProvidersAvailable(AggregatorError):
    """No weather providers are registered."""

    def __init__(self) -> None:
        super().__init__("No weather providers available")


class ProviderCallFailed(AggregatorError):
    """A single provider call failed or was cancelled."""

    def __init__(self, provider_name: str, cause: BaseException) -> None:
        self.provider_name = provider_name
        self.cause = cause
        super().__init__(f"{provider_name}: {str(cause) or type(cause).__name__}")


class AllProvidersFailed(AggregatorError):
    """Every dispatched provider call failed."""

    def __init__(self, errors: list[ProviderCallFailed]) -> None:
        self.errors = errors
        super().__init__(f"All providers failed: {self.messages}")

    @property
    def messages(self) -> list[str]:
        return [str(error) for error in self.errors]


class EmptyResultSet(AllProvidersFailed):
    """No provider failed, but none returned a reading either."""

    def __init__(self) -> None:
        super().__init__([])
        self.args = ("Could not get data from any provider",)
