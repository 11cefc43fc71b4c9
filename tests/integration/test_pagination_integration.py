"""
Integration tests for pagination over real HTTP.

Runs HttpFetchClient and Paginator against a local PageServer.
"""

import socket

import pytest

from pagewise import (
    DecodeError,
    HttpFetchClient,
    LoadStatus,
    PaginationOptions,
    Paginator,
    ServerError,
    TransportError,
)
from tests.helpers.page_server import PageServer


@pytest.fixture
def page_server():
    server = PageServer().start()
    yield server
    server.stop()


@pytest.fixture
def paginator(page_server):
    options = PaginationOptions(endpoint_template=page_server.endpoint_template, page_size=2)
    paginator = Paginator.from_options(options)
    yield paginator
    paginator.close()


def _unused_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.mark.integration
class TestScrollSessionIntegration:
    """Test a full scroll session against the page server."""

    @pytest.mark.asyncio
    async def test_scroll_until_exhausted(self, page_server, paginator):
        page_server.add_page(1, "A", "B")
        page_server.add_page(2, "C", "D")

        assert await paginator.load_more_if_needed(None) is LoadStatus.LOADED
        assert await paginator.load_more_if_needed("B") is LoadStatus.LOADED
        assert await paginator.load_more_if_needed("D") is LoadStatus.EXHAUSTED

        assert [r.id for r in paginator.accumulated] == ["A", "B", "C", "D"]
        assert paginator.next_page == 3
        assert paginator.has_more is False
        assert page_server.requests == [(1, 2), (2, 2), (3, 2)]

        # Further visibility events never reach the server
        assert await paginator.load_more_if_needed("D") is LoadStatus.SKIPPED
        assert len(page_server.requests) == 3

    @pytest.mark.asyncio
    async def test_server_error_then_retry(self, page_server, paginator):
        page_server.add_response(1, 503, {"error": "maintenance"})

        assert await paginator.request_next_page() is LoadStatus.FAILED
        assert isinstance(paginator.last_error, ServerError)
        assert paginator.last_error.status == 503
        assert paginator.accumulated == ()

        page_server.add_page(1, "A", "B")
        assert await paginator.request_next_page() is LoadStatus.LOADED
        assert page_server.requests == [(1, 2), (1, 2)]

    @pytest.mark.asyncio
    async def test_broken_body_is_not_merged(self, page_server, paginator):
        page_server.add_page(1, "A", "B")
        page_server.add_response(2, 200, b"{not json")

        await paginator.request_next_page()
        assert await paginator.request_next_page() is LoadStatus.FAILED

        assert isinstance(paginator.last_error, DecodeError)
        assert [r.id for r in paginator.accumulated] == ["A", "B"]
        assert paginator.next_page == 2


@pytest.mark.integration
class TestTransportFailures:
    @pytest.mark.asyncio
    async def test_connection_refused(self):
        options = PaginationOptions(
            endpoint_template=f"http://127.0.0.1:{_unused_port()}/pages?page={{page_number}}",
            timeout=2.0,
        )
        with HttpFetchClient(options) as client:
            result = await client.fetch_page(1, 5)

        assert isinstance(result, TransportError)
