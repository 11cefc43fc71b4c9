from dataclasses import dataclass, field
from urllib.parse import urlsplit

from .exceptions import ConfigurationError


@dataclass
class PaginationOptions:
    """
    Settings of one pagination session.

    The endpoint template must contain the ``{page_number}`` and
    ``{page_size}`` substitution points, e.g.
    ``"https://randomuser.me/api/?page={page_number}&results={page_size}"``.
    """

    endpoint_template: str
    page_size: int = 5
    timeout: float = 10.0
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ConfigurationError(f"page_size must be a positive integer, got {self.page_size}")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")

    def build_url(self, page_number: int, page_size: int | None = None) -> str:
        """
        Substitutes the paging parameters into the endpoint template.

        Args:
            page_number: 1-based page ordinal
            page_size: Records per page (defaults to the configured page size)

        Returns:
            The absolute URL of the requested page

        Raises:
            ConfigurationError: If the template cannot be formatted or does not
                produce an absolute http(s) URL
        """
        size = self.page_size if page_size is None else page_size
        if "{page_number}" not in self.endpoint_template:
            raise ConfigurationError(
                f"Endpoint template {self.endpoint_template!r} has no {{page_number}} placeholder"
            )
        try:
            url = self.endpoint_template.format(page_number=page_number, page_size=size)
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigurationError(
                f"Endpoint template {self.endpoint_template!r} cannot be formatted: {e!r}",
                original_error=e,
            ) from e

        try:
            parts = urlsplit(url)
        except ValueError as e:
            raise ConfigurationError(
                f"Endpoint {url!r} is not a valid URL: {e}", original_error=e
            ) from e
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConfigurationError(f"Endpoint {url!r} is not an absolute http(s) URL")
        return url
