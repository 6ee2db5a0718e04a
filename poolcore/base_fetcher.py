"""Shared HTTP plumbing for provider adapters."""

import logging
from typing import Any, Optional

import requests

from .errors import ProviderUnreachable


class BaseFetcher:
    """
    Base class for provider adapters.

    Performs exactly one outbound GET per call with no retries and turns
    transport failures into ProviderUnreachable. Subclasses own the
    endpoint layout and the pure normalize step.
    """

    provider = 'provider'

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 10.0):
        """
        Initialize fetcher.

        Args:
            session: Optional requests session (injected by tests and callers
                that want connection pooling across adapters)
            timeout: Per-request timeout in seconds
        """
        if session is None:
            session = requests.Session()
            session.headers.update({'Accept': 'application/json'})
        self.session = session
        self.timeout = timeout
        self.logger = logging.getLogger(f'poolcore.{self.provider}')

    def _get_json(
        self,
        url: str,
        params: Optional[dict[str, str]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """
        GET a URL and decode its JSON body.

        Raises:
            ProviderUnreachable: On connection errors, timeouts, HTTP error
                statuses, or a body that is not valid JSON
        """
        self.logger.debug(f'GET {url} params={params}')

        try:
            response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            self.logger.error(f'{self.provider} returned HTTP {status} for {url}')
            raise ProviderUnreachable(
                f'{self.provider} API error: HTTP {status}', self.provider, status_code=status
            ) from e
        except requests.RequestException as e:
            self.logger.error(f'{self.provider} request failed for {url}: {e}')
            raise ProviderUnreachable(f'{self.provider} unreachable: {e}', self.provider) from e

        try:
            return response.json()
        except ValueError as e:
            self.logger.error(f'{self.provider} returned a non-JSON body for {url}')
            raise ProviderUnreachable(
                f'{self.provider} returned an undecodable response', self.provider,
                status_code=response.status_code,
            ) from e
