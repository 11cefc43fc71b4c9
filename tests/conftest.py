"""
Shared pytest fixtures and configuration for Pagewise tests.

This module provides common fixtures used across unit and integration tests,
including a scripted fetch client, a mocked requests session and sample
payloads in the formats the decoders understand.
"""

from typing import Any
from unittest.mock import MagicMock

import pytest

from pagewise import PaginationOptions
from tests.helpers.factories import ScriptedFetchClient, make_randomuser_payload


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line("markers", "integration: Integration tests against a local HTTP server")


@pytest.fixture
def scripted_client():
    """Factory fixture returning a ScriptedFetchClient answering with the given results."""
    return ScriptedFetchClient


@pytest.fixture
def mock_session():
    """
    Creates a fully mocked requests Session.

    Tests set ``mock_session.get.return_value`` or ``side_effect``.
    """
    return MagicMock()


@pytest.fixture
def options() -> PaginationOptions:
    """Options pointing at a fake endpoint using the default wire shape."""
    return PaginationOptions(
        endpoint_template="https://api.example.com/people?page={page_number}&size={page_size}",
        page_size=2,
        timeout=5.0,
    )


@pytest.fixture
def sample_envelope_payload() -> dict[str, Any]:
    """A page in the default wire shape."""
    return {
        "records": [{"id": "a", "title": "first"}, {"id": "b", "title": "second"}],
        "resultCount": 2,
        "pageNumber": 1,
    }


@pytest.fixture
def randomuser_payload() -> dict[str, Any]:
    """A randomuser.me page with two people."""
    return make_randomuser_payload(1, "uuid-1", "uuid-2")
