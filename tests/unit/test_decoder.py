"""
Unit tests for EnvelopeDecoder.

Covers the default wire shape, custom record models and every way a body
can fail to be a page.
"""

import json

import pytest
from pydantic import BaseModel

from pagewise.decoder import EnvelopeDecoder
from pagewise.exceptions import DecodeError
from pagewise.models import Record


class Article(BaseModel):
    id: str
    title: str


@pytest.mark.unit
class TestDecodeDefaultShape:
    def test_decode_payload(self, sample_envelope_payload):
        page = EnvelopeDecoder().decode(sample_envelope_payload)

        assert [r.id for r in page.records] == ["a", "b"]
        assert page.result_count == 2
        assert page.page_number == 1
        assert all(isinstance(r, Record) for r in page.records)

    def test_extra_fields_are_kept_on_records(self, sample_envelope_payload):
        page = EnvelopeDecoder().decode(sample_envelope_payload)

        assert page.records[0].title == "first"

    def test_decode_json_bytes(self, sample_envelope_payload):
        body = json.dumps(sample_envelope_payload).encode("utf-8")

        page = EnvelopeDecoder().decode_json(body)

        assert len(page.records) == 2

    def test_empty_page(self):
        page = EnvelopeDecoder().decode({"records": [], "resultCount": 0, "pageNumber": 7})

        assert page.is_empty is True
        assert page.page_number == 7

    def test_snake_case_keys_accepted(self):
        page = EnvelopeDecoder().decode(
            {"records": [{"id": "a"}], "result_count": 1, "page_number": 2}
        )

        assert page.page_number == 2

    def test_custom_record_model(self):
        decoder = EnvelopeDecoder(Article)

        page = decoder.decode(
            {"records": [{"id": "1", "title": "Hello"}], "resultCount": 1, "pageNumber": 1}
        )

        assert isinstance(page.records[0], Article)
        assert page.records[0].title == "Hello"


@pytest.mark.unit
class TestDecodeFailures:
    def test_invalid_json(self):
        with pytest.raises(DecodeError, match="not valid JSON") as exc_info:
            EnvelopeDecoder().decode_json(b"<html>Service Unavailable</html>")

        assert exc_info.value.payload_excerpt.startswith("<html>")
        assert isinstance(exc_info.value.original_error, ValueError)

    def test_missing_metadata(self):
        with pytest.raises(DecodeError, match="validation error"):
            EnvelopeDecoder().decode({"records": [{"id": "a"}]})

    def test_record_without_id(self):
        with pytest.raises(DecodeError):
            EnvelopeDecoder().decode({"records": [{"name": "x"}], "resultCount": 1, "pageNumber": 1})

    def test_record_not_matching_custom_model(self):
        with pytest.raises(DecodeError):
            EnvelopeDecoder(Article).decode(
                {"records": [{"id": "1"}], "resultCount": 1, "pageNumber": 1}
            )

    def test_payload_not_an_object(self):
        with pytest.raises(DecodeError):
            EnvelopeDecoder().decode_json("[1, 2, 3]")

    def test_excerpt_is_truncated(self):
        with pytest.raises(DecodeError) as exc_info:
            EnvelopeDecoder().decode_json("x" * 1000)

        assert len(exc_info.value.payload_excerpt) == 200
