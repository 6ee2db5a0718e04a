"""Typed errors raised by provider adapters."""

from typing import Optional


class ProviderError(Exception):
    """Base class for failures talking to or decoding a data provider."""

    def __init__(self, message: str, provider: str = ''):
        super().__init__(message)
        self.provider = provider


class ProviderUnreachable(ProviderError):
    """Network failure, HTTP error status, or an undecodable response body."""

    def __init__(self, message: str, provider: str = '', status_code: Optional[int] = None):
        super().__init__(message, provider)
        self.status_code = status_code


class EventNotFound(ProviderError):
    """The requested game or tournament is absent from an otherwise valid payload."""

    def __init__(self, event_id: str, provider: str = ''):
        super().__init__(f'Event {event_id} not found in {provider or "provider"} payload', provider)
        self.event_id = event_id


class NormalizationFailure(ProviderError, ValueError):
    """Payload is present but cannot produce a canonical record."""
