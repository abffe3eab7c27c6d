"""Request and response values passed through the interceptor."""

from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional
from urllib.parse import urlsplit

from multidict import CIMultiDict


# Headers that no longer describe a rewritten body
STALE_BODY_HEADERS = ('content-length', 'content-encoding', 'transfer-encoding')


def _as_multidict(headers) -> CIMultiDict:
    # Accepts a mapping, a multidict or a list of pairs; repeated names are kept
    if isinstance(headers, CIMultiDict):
        return headers
    pairs = headers.items() if hasattr(headers, 'items') else headers
    return CIMultiDict(list(pairs))


@dataclass(frozen=True)
class UpstreamRequest:
    """An outgoing call to the marketplace.

    Attributes:
        url: Absolute target URL
        method: HTTP method
        headers: Request headers, case-insensitive, repeated names kept
        body: Raw request body, if any
        page_url: URL of the page that issued the call (from Referer)
    """
    url: str
    method: str = "GET"
    headers: CIMultiDict = field(default_factory=CIMultiDict)
    body: Optional[bytes] = None
    page_url: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'headers', _as_multidict(self.headers))

    @property
    def path(self) -> str:
        return urlsplit(self.url).path


@dataclass(frozen=True)
class UpstreamResponse:
    """A fully read response from the marketplace.

    Headers keep every occurrence of a repeated name (e.g. ``Set-Cookie``).
    """
    status: int
    reason: str = ""
    headers: CIMultiDict = field(default_factory=CIMultiDict)
    body: bytes = b""

    def __post_init__(self):
        object.__setattr__(self, 'headers', _as_multidict(self.headers))

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def content_type(self) -> str:
        value = self.headers.get('Content-Type', '')
        return value.split(';', 1)[0].strip().lower()

    def with_body(self, body: bytes) -> 'UpstreamResponse':
        """Same status and headers, new body."""
        headers = CIMultiDict([
            (key, value) for key, value in self.headers.items()
            if key.lower() not in STALE_BODY_HEADERS
        ])
        return UpstreamResponse(status=self.status, reason=self.reason, headers=headers, body=body)


Fetcher = Callable[[UpstreamRequest], Awaitable[UpstreamResponse]]
