"""Analytics sink interface."""

from abc import ABC, abstractmethod

from domain.schemas import AnalyticsEvent


class AnalyticsSink(ABC):
    """Receives tree interaction events. Fire-and-forget: nothing is returned to the caller."""

    name: str = "base"

    @abstractmethod
    def track_event(self, event: AnalyticsEvent) -> None:
        raise NotImplementedError

    def flush(self) -> None:
        """Push buffered events, if the backend buffers any."""
        return None
