from collections.abc import Generator
from contextlib import contextmanager

import requests


class PagewiseError(Exception):
    """Base exception for all Pagewise errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class FetchError(PagewiseError):
    """
    Base class for failures of a single page fetch.

    Fetch clients return instances of this class instead of raising them,
    so callers can branch on the result without exception handling.
    """

    retryable: bool = True


class ConfigurationError(FetchError):
    """Raised (or returned) when the endpoint or paging parameters are malformed."""

    retryable = False


class TransportError(FetchError):
    """Timeout, DNS failure, connection reset or any other transport-level failure."""

    def __init__(
        self, message: str = "Transport failure", original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)


class ServerError(FetchError):
    """Raised when the data source answers with a non-success status."""

    def __init__(
        self,
        status: int,
        message: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message or f"Server responded with status {status}", original_error)
        self.status = status


class DecodeError(FetchError):
    """Raised when a payload does not conform to the page envelope schema."""

    def __init__(
        self,
        message: str,
        payload_excerpt: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.payload_excerpt = payload_excerpt


@contextmanager
def handle_transport_errors(url: str | None = None) -> Generator[None, None, None]:
    """
    Context manager that catches requests exceptions
    and raises the appropriate FetchError subclass.

    Args:
        url: Optional (redacted) URL for better error messages

    Usage:
        with handle_transport_errors(url=redact_url(url)):
            session.get(url, timeout=10)
    """
    target = url or "unknown endpoint"
    try:
        yield
    except (
        requests.exceptions.MissingSchema,
        requests.exceptions.InvalidSchema,
        requests.exceptions.InvalidURL,
    ) as e:
        raise ConfigurationError(f"Invalid endpoint '{target}': {e}", original_error=e) from e
    except requests.exceptions.Timeout as e:
        raise TransportError(f"Request to '{target}' timed out", original_error=e) from e
    except requests.exceptions.ConnectionError as e:
        raise TransportError(f"Could not connect to '{target}'", original_error=e) from e
    except requests.exceptions.RequestException as e:
        # Unknown transport error: wrap in generic TransportError
        raise TransportError(
            f"Request to '{target}' failed ({type(e).__name__}): {e}", original_error=e
        ) from e
