"""Exceptions raised while composing and delivering notifications."""


class ChatReportError(Exception):
    """Base class for notifier errors."""


class MalformedResultError(ChatReportError):
    """Raised when the result tree lacks data a report mode needs."""


class EnrichmentError(ChatReportError):
    """Raised when an external analysis source cannot be queried."""


class DeliveryError(ChatReportError):
    """Raised when the messaging endpoint rejects a payload."""
