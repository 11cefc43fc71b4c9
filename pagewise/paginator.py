"""
Incremental pagination state machine.

A Paginator owns the state of one infinite-scroll session: the records loaded
so far, the cursor of the next page, the loading flag and the end-of-data flag.
It is constructed explicitly and held by exactly one presentation session.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ._logging import logger, redact_id
from .client import FetchClient, HttpFetchClient
from .exceptions import ConfigurationError, FetchError, ServerError
from .trigger import should_load_more

if TYPE_CHECKING:
    from .config import PaginationOptions
    from .decoder import EnvelopeDecoder

T = TypeVar("T")


class LoadStatus(Enum):
    """Outcome of a request_next_page() call."""

    LOADED = "loaded"  # non-empty page merged, cursor advanced
    EXHAUSTED = "exhausted"  # empty page, no further fetches
    FAILED = "failed"  # fetch failed, state unchanged
    SKIPPED = "skipped"  # guard short-circuited, no fetch issued
    DISCARDED = "discarded"  # result arrived after reset() or close()


@dataclass(frozen=True)
class PaginationSnapshot(Generic[T]):
    """
    Immutable copy of a Paginator's state, handed to listeners.

    Attributes:
        records: Records loaded so far, in page order
        next_page: Ordinal of the next page to request
        is_loading: True while a fetch is in flight
        has_more: False once a fetch returned an empty page
        last_error: Most recent fetch failure, None after a success or reset
    """

    records: tuple[T, ...]
    next_page: int
    is_loading: bool
    has_more: bool
    last_error: FetchError | None = None


Listener = Callable[[PaginationSnapshot[Any]], None]


class Paginator(Generic[T]):
    """
    Decides when to fetch, merges results and tracks end-of-data.

    The ``is_loading`` flag is the only concurrency guard: it is raised before
    the first await of a fetch, so overlapping calls from the same event loop
    short-circuit instead of issuing a second request.

    Usage:
        paginator = Paginator(client, page_size=20)
        await paginator.request_next_page()
        for record in paginator.accumulated:
            ...
    """

    def __init__(self, client: FetchClient, page_size: int = 5) -> None:
        if page_size < 1:
            raise ConfigurationError(f"page_size must be a positive integer, got {page_size}")

        self.client = client
        self._page_size = page_size
        self._owns_client = False
        self._listeners: list[Listener] = []

        # Session state
        self._records: list[T] = []
        self._next_page = 1
        self._is_loading = False
        self._has_more = True
        self._last_error: FetchError | None = None

        # Bumped by reset(); results from an older generation are dropped
        self._generation = 0
        self._active = True

    @classmethod
    def from_options(
        cls, options: "PaginationOptions", decoder: "EnvelopeDecoder[Any] | None" = None
    ) -> "Paginator[Any]":
        """
        Builds a paginator with its own HttpFetchClient.

        The client is closed together with the paginator.
        """
        paginator: Paginator[Any] = cls(HttpFetchClient(options, decoder), options.page_size)
        paginator._owns_client = True
        return paginator

    # --- READ-ONLY STATE ---

    @property
    def accumulated(self) -> tuple[T, ...]:
        return tuple(self._records)

    @property
    def next_page(self) -> int:
        return self._next_page

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def last_error(self) -> FetchError | None:
        return self._last_error

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def is_active(self) -> bool:
        return self._active

    def snapshot(self) -> PaginationSnapshot[T]:
        return PaginationSnapshot(
            records=tuple(self._records),
            next_page=self._next_page,
            is_loading=self._is_loading,
            has_more=self._has_more,
            last_error=self._last_error,
        )

    # --- OPERATIONS ---

    async def request_next_page(self) -> LoadStatus:
        """
        Fetches the page at the cursor and merges it.

        No-op while a fetch is in flight, after end-of-data, or once the
        session is closed. Fetch failures are never raised: they are stored
        in ``last_error``, logged and passed to listeners, and the same page
        is requested again on the next call.

        Returns:
            The LoadStatus describing what happened.
        """
        if not self._active or self._is_loading or not self._has_more:
            logger.debug(
                "Skipping fetch",
                extra={
                    "operation": "request_next_page",
                    "page": self._next_page,
                    "is_loading": self._is_loading,
                    "has_more": self._has_more,
                    "active": self._active,
                },
            )
            return LoadStatus.SKIPPED

        page = self._next_page
        generation = self._generation
        self._is_loading = True
        self._notify()

        logger.debug(
            "Fetching page",
            extra={"operation": "request_next_page", "page": page, "page_size": self._page_size},
        )

        try:
            result = await self.client.fetch_page(page, self._page_size)
        except FetchError as e:
            # Clients are expected to return failures; accept raised ones too
            result = e
        except BaseException:
            if self._is_current(generation):
                self._is_loading = False
                self._notify()
            raise

        if not self._is_current(generation):
            logger.debug(
                "Discarding stale page",
                extra={"operation": "request_next_page", "page": page, "active": self._active},
            )
            return LoadStatus.DISCARDED

        self._is_loading = False

        if isinstance(result, FetchError):
            self._last_error = result
            logger.warning(
                "Page fetch failed",
                extra={
                    "operation": "request_next_page",
                    "page": page,
                    "error_type": type(result).__name__,
                    "status": result.status if isinstance(result, ServerError) else None,
                    "retryable": result.retryable,
                },
            )
            self._notify()
            return LoadStatus.FAILED

        self._last_error = None

        if result.is_empty:
            self._has_more = False
            logger.info(
                "Reached end of data",
                extra={"operation": "request_next_page", "page": page, "total": len(self._records)},
            )
            self._notify()
            return LoadStatus.EXHAUSTED

        self._records.extend(result.records)
        self._next_page += 1

        logger.info(
            "Page merged",
            extra={
                "operation": "request_next_page",
                "page": page,
                "count": len(result.records),
                "total": len(self._records),
            },
        )
        self._notify()
        return LoadStatus.LOADED

    async def load_more_if_needed(self, visible_record_id: str | None) -> LoadStatus:
        """
        Visibility hook for the presentation layer.

        Requests the next page when ``visible_record_id`` is None (nothing
        rendered yet) or names the last loaded record.
        """
        if not should_load_more(visible_record_id, self._records):
            return LoadStatus.SKIPPED

        logger.debug(
            "Prefetch threshold reached",
            extra={"operation": "load_more_if_needed", "record": redact_id(visible_record_id)},
        )
        return await self.request_next_page()

    def reset(self) -> None:
        """Restarts the session from page 1. A fetch still in flight is discarded."""
        self._generation += 1
        self._records = []
        self._next_page = 1
        self._is_loading = False
        self._has_more = True
        self._last_error = None

        logger.info("Pagination reset", extra={"operation": "reset"})
        self._notify()

    def close(self) -> None:
        """
        Ends the session.

        Later requests are skipped and results still in flight are discarded.
        Closes the fetch client if this paginator created it.
        """
        if not self._active:
            return
        self._active = False
        self._listeners.clear()
        if self._owns_client and isinstance(self.client, HttpFetchClient):
            self.client.close()
        logger.debug("Pagination session closed", extra={"operation": "close"})

    # --- LISTENERS ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Registers a listener called with a PaginationSnapshot on every state change.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                # A broken listener must not leave the session stuck mid-transition
                logger.exception("Listener failed", extra={"operation": "notify"})

    def _is_current(self, generation: int) -> bool:
        return self._active and generation == self._generation
