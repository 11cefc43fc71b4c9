import hashlib
import logging
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

# Create the library logger
logger = logging.getLogger("pagewise")

# Add NullHandler to prevent "No handlers could be found" warnings
# if the application doesn't configure logging.
logger.addHandler(logging.NullHandler())

# Query parameters that describe paging only and are safe to log verbatim
_PAGING_PARAMS = frozenset({"page", "results", "page_size", "pageSize", "limit", "offset"})


def _digest(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:8]


def redact_id(record_id: str | None) -> str | None:
    """
    Hashes a record identifier for logging.
    Allows correlating log lines without revealing the identifier itself.
    """
    if record_id is None:
        return None
    return _digest(str(record_id))


def redact_url(url: str) -> str:
    """
    Redacts query string values of an endpoint URL for logging.

    Paging parameters are kept as-is; every other value (seeds, tokens,
    search terms) is replaced by a short hash.
    """
    try:
        parts = urlsplit(url)
        query = [
            (k, v if k in _PAGING_PARAMS else _digest(v))
            for k, v in parse_qsl(parts.query, keep_blank_values=True)
        ]
        return urlunsplit(parts._replace(query=urlencode(query)))
    except ValueError:
        return "<redaction_failed>"
