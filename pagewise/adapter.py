from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol

from .exceptions import FetchError

if TYPE_CHECKING:
    from .paginator import PaginationSnapshot, Paginator


class PresentationAdapter(Protocol):
    """
    Boundary to whatever renders the records.

    The adapter is expected to call ``paginator.load_more_if_needed(record.id)``
    whenever a record becomes visible, and ``load_more_if_needed(None)`` on the
    initial render.
    """

    def render(self, records: Sequence[Any]) -> None: ...

    def set_loading(self, is_loading: bool) -> None: ...

    def show_error(self, error: FetchError) -> None: ...


def bind_adapter(paginator: "Paginator[Any]", adapter: PresentationAdapter) -> Callable[[], None]:
    """
    Pushes every state change of ``paginator`` to ``adapter``.

    Records and the loading flag are forwarded on each change; an error is
    forwarded once, when it is first surfaced.

    Returns:
        A callable that detaches the adapter.
    """
    last_error: FetchError | None = None

    def on_change(snapshot: "PaginationSnapshot[Any]") -> None:
        nonlocal last_error
        adapter.render(snapshot.records)
        adapter.set_loading(snapshot.is_loading)
        if snapshot.last_error is not None and snapshot.last_error is not last_error:
            adapter.show_error(snapshot.last_error)
        last_error = snapshot.last_error

    return paginator.subscribe(on_change)
