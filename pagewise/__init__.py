from .adapter import PresentationAdapter, bind_adapter
from .client import FetchClient, HttpFetchClient
from .config import PaginationOptions
from .decoder import EnvelopeDecoder
from .exceptions import (
    ConfigurationError,
    DecodeError,
    FetchError,
    PagewiseError,
    ServerError,
    TransportError,
)
from .models import Identified, Record
from .pagination import PageEnvelope
from .paginator import LoadStatus, PaginationSnapshot, Paginator
from .trigger import should_load_more

__all__ = [
    "Paginator",
    "LoadStatus",
    "PaginationSnapshot",
    "PaginationOptions",
    "PageEnvelope",
    "Record",
    "Identified",
    "should_load_more",
    # Fetching
    "FetchClient",
    "HttpFetchClient",
    "EnvelopeDecoder",
    # Presentation boundary
    "PresentationAdapter",
    "bind_adapter",
    # Exceptions
    "PagewiseError",
    "FetchError",
    "ConfigurationError",
    "TransportError",
    "ServerError",
    "DecodeError",
]
