"""Abstract base class for notification delivery targets."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from chat_report.models.result import RunResult


@dataclass(frozen=True, kw_only=True)
class NotificationTarget(ABC):
    """Abstract base for messaging endpoints that receive run reports."""

    @abstractmethod
    async def send(self, results: Sequence[RunResult]) -> bool:
        """Compose a report for the results and deliver it.

        Args:
            results: Run results; only the first run is reported

        Returns:
            True if a message was delivered, False if there was nothing to send

        Raises:
            DeliveryError: If the endpoint rejects the message

        """
