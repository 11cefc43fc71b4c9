import json
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import DecodeError
from .models import Record
from .pagination import PageEnvelope

R = TypeVar("R", bound=BaseModel)

_EXCERPT_LENGTH = 200


class WireEnvelope(BaseModel, Generic[R]):
    """Default wire shape: ``{"records": [...], "resultCount": n, "pageNumber": p}``."""

    model_config = ConfigDict(populate_by_name=True)

    records: list[R]
    result_count: int = Field(alias="resultCount")
    page_number: int = Field(alias="pageNumber")


def _excerpt(payload: Any) -> str:
    text = payload if isinstance(payload, str) else repr(payload)
    return text[:_EXCERPT_LENGTH]


class EnvelopeDecoder(Generic[R]):
    """
    Turns a raw response body into a typed PageEnvelope.

    Architectural Note:
    -------------------
    Sources disagree on where they put the records and the paging metadata.
    This class owns the default wire shape; a source with a different shape
    subclasses it and overrides ``decode()``. Every failure, whether the body
    is not JSON or the JSON does not match the schema, is reported as a
    DecodeError so that a broken page is never merged.
    """

    def __init__(self, record_model: type[R] = Record) -> None:  # type: ignore[assignment]
        self.record_model = record_model
        self._wire_model = WireEnvelope[record_model]  # type: ignore[valid-type]

    def decode_json(self, body: str | bytes) -> PageEnvelope[R]:
        """Parses a JSON response body and validates it as an envelope."""
        try:
            payload = json.loads(body)
        except ValueError as e:
            raw = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
            raise DecodeError(
                f"Response body is not valid JSON: {e}",
                payload_excerpt=_excerpt(raw),
                original_error=e,
            ) from e
        return self.decode(payload)

    def decode(self, payload: Any) -> PageEnvelope[R]:
        """Validates an already-parsed payload against the default wire shape."""
        wire = self._validate(self._wire_model, payload)
        return PageEnvelope(
            records=list(wire.records),
            result_count=wire.result_count,
            page_number=wire.page_number,
        )

    def _validate(self, model: type[BaseModel], payload: Any) -> Any:
        """
        Validates ``payload`` with a pydantic model.

        Raises:
            DecodeError: With the pydantic error summary as the message
        """
        try:
            return model.model_validate(payload)
        except PydanticValidationError as e:
            raise DecodeError(
                f"Payload does not match {model.__name__}: {e.error_count()} validation error(s)",
                payload_excerpt=_excerpt(payload),
                original_error=e,
            ) from e
