import asyncio
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar

import requests

from ._logging import logger, redact_url
from .decoder import EnvelopeDecoder
from .exceptions import ConfigurationError, FetchError, ServerError, handle_transport_errors

if TYPE_CHECKING:
    from .config import PaginationOptions
    from .pagination import PageEnvelope

T = TypeVar("T")


class FetchClient(Protocol):
    """
    Anything able to fetch one page of records.

    Implementations perform at most one logical network call per invocation,
    never retry, and return failures as FetchError instances instead of
    raising them.
    """

    async def fetch_page(self, page_number: int, page_size: int) -> "PageEnvelope[Any] | FetchError":
        ...


class HttpFetchClient(Generic[T]):
    """
    Fetch client backed by a requests Session.

    The blocking HTTP call runs in a worker thread (``asyncio.to_thread``) so
    the awaiting coroutine suspends without blocking the event loop.

    Usage:
        options = PaginationOptions("https://example.com/people?page={page_number}&size={page_size}")
        with HttpFetchClient(options) as client:
            result = await client.fetch_page(1, options.page_size)
            if isinstance(result, FetchError):
                ...
    """

    def __init__(
        self,
        options: "PaginationOptions",
        decoder: EnvelopeDecoder[Any] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.options = options
        self.decoder = decoder or EnvelopeDecoder()
        self.session = session or requests.Session()
        self._owns_session = session is None

    async def fetch_page(self, page_number: int, page_size: int) -> "PageEnvelope[T] | FetchError":
        """
        Fetches a single page.

        Args:
            page_number: 1-based ordinal of the page
            page_size: Number of records requested

        Returns:
            The decoded PageEnvelope, or the FetchError describing the failure.
            Nothing is raised across this boundary.
        """
        try:
            if page_number < 1 or page_size < 1:
                raise ConfigurationError(
                    f"page_number and page_size must be >= 1, got {page_number} and {page_size}"
                )
            url = self.options.build_url(page_number, page_size)
            return await asyncio.to_thread(self._get_page, url, page_number)
        except FetchError as e:
            logger.debug(
                "Fetch client failure",
                extra={
                    "operation": "fetch_page",
                    "page": page_number,
                    "error_type": type(e).__name__,
                },
            )
            return e

    def _get_page(self, url: str, page_number: int) -> "PageEnvelope[T]":
        safe_url = redact_url(url)

        logger.debug(
            "Requesting page",
            extra={"operation": "fetch_page", "page": page_number, "url": safe_url},
        )

        with handle_transport_errors(url=safe_url):
            response = self.session.get(
                url, headers=self.options.headers or None, timeout=self.options.timeout
            )

        if not 200 <= response.status_code < 300:
            raise ServerError(
                response.status_code,
                f"GET {safe_url} responded with status {response.status_code}",
            )

        envelope = self.decoder.decode_json(response.content)

        logger.debug(
            "Page received",
            extra={
                "operation": "fetch_page",
                "page": page_number,
                "count": len(envelope.records),
                "status": response.status_code,
            },
        )
        return envelope

    def close(self) -> None:
        """Closes the underlying session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "HttpFetchClient[T]":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
