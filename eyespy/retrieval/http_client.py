"""HTTP helpers and the page accumulator for the GitHub REST API."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar

import requests

from ..errors import GitHubAPIError, RateLimitExhausted
from .config import BASE_URL, PER_PAGE, REQUEST_TIMEOUT, USER_AGENT

T = TypeVar("T")

PageTransform = Callable[[Any], List[Optional[T]]]


def error_message(resp: requests.Response) -> str:
    """Pull a short, human-readable message out of a GitHub error response."""
    try:
        body = resp.json()
    except ValueError:
        body = {"text": (resp.text or "")[:300]}
    if not isinstance(body, dict):
        body = {"text": str(body)[:300]}
    return str(body.get("message") or body.get("error") or body.get("text") or "")


def decode_json(resp: requests.Response, expected: Optional[type] = None) -> Any:
    """Decode a 2xx body, raising GitHubAPIError when it is not the JSON we need."""
    url = getattr(resp, "url", None)
    try:
        payload = resp.json()
    except ValueError as exc:
        raise GitHubAPIError(f"invalid JSON body from {url}: {exc}", status=resp.status_code, url=url) from exc
    if expected is not None and not isinstance(payload, expected):
        raise GitHubAPIError(
            f"expected a JSON {expected.__name__} from {url}, got {type(payload).__name__}",
            status=resp.status_code,
            url=url,
        )
    return payload


def decode_page(resp: requests.Response) -> List[Dict[str, Any]]:
    """A list endpoint page: a JSON array of objects."""
    page = decode_json(resp, list)
    if not all(isinstance(entry, dict) for entry in page):
        url = getattr(resp, "url", None)
        raise GitHubAPIError(f"expected a JSON array of objects from {url}", status=resp.status_code, url=url)
    return page


def has_next_page(resp: requests.Response) -> bool:
    """True when the response's Link header advertises a `next` page."""
    links = getattr(resp, "links", None) or {}
    return bool((links.get("next") or {}).get("url"))


def iter_pages(
    response: requests.Response,
    has_next: Callable[[requests.Response], bool],
    get_next: Callable[[requests.Response], requests.Response],
) -> Iterator[requests.Response]:
    """Yield `response` and every following page, one request at a time."""
    while True:
        yield response
        if not has_next(response):
            return
        response = get_next(response)


def accumulate(
    response: requests.Response,
    transform: PageTransform,
    has_next: Callable[[requests.Response], bool],
    get_next: Callable[[requests.Response], requests.Response],
    decode: Callable[[requests.Response], Any] = decode_json,
) -> List[T]:
    """Fold every page into one flat list of truthy transformed items.

    Errors from `get_next` propagate unchanged and nothing is returned.
    """
    full: List[T] = []
    for page in iter_pages(response, has_next, get_next):
        full.extend(item for item in transform(decode(page)) if item)
    return full


class GitHubClient:
    """Authenticated REST session shared read-only by every pipeline stage."""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github.v3+json",
                "User-Agent": USER_AGENT,
                "Authorization": f"token {token}",
            }
        )

    def url_for(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """Perform a single REST call; any failure is raised, never retried."""
        url = self.url_for(path)
        try:
            resp = self.session.request(method, url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise GitHubAPIError(f"{method} {url} failed: {exc}", url=url) from exc

        if 200 <= resp.status_code < 300:
            return resp

        headers = resp.headers or {}
        reset = headers.get("X-RateLimit-Reset")
        if resp.status_code in (403, 429) and headers.get("X-RateLimit-Remaining") == "0" and str(reset).isdigit():
            raise RateLimitExhausted(int(reset), status=resp.status_code, url=url)

        raise GitHubAPIError(
            f"HTTP {resp.status_code} for {url} -> {error_message(resp)}",
            status=resp.status_code,
            url=url,
        )

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None, expected: type = dict) -> Any:
        return decode_json(self.request("GET", path, params=params), expected)

    def get_next_page(self, resp: requests.Response) -> requests.Response:
        # the next-page URL already carries per_page and the cursor
        return self.request("GET", resp.links["next"]["url"])

    def paged_get(
        self,
        path: str,
        transform: PageTransform,
        params: Optional[Dict[str, Any]] = None,
    ) -> List[T]:
        """Fetch every page of a list endpoint and accumulate transformed items."""
        query = dict(params or {})
        query.setdefault("per_page", PER_PAGE)
        first = self.request("GET", path, params=query)
        return accumulate(first, transform, has_next_page, self.get_next_page, decode_page)


__all__ = [
    "GitHubClient",
    "accumulate",
    "decode_json",
    "decode_page",
    "error_message",
    "has_next_page",
    "iter_pages",
]
