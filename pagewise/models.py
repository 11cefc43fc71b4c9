from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


@runtime_checkable
class Identified(Protocol):
    """Anything the paginator can hold: it only needs a stable string id."""

    @property
    def id(self) -> str: ...


class Record(BaseModel):
    """
    Generic record with a stable identifier.

    The pagination core never inspects fields other than ``id``; any other
    attribute sent by the source is kept as-is.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
