# jobs/pagination.py
"""
Query-string and pagination-link builders for the listing and search pages.
"""
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import quote

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 12
MAX_LIMIT = 100
WINDOW_SIZE = 5

SEARCH_KEYS = ('search', 'capability', 'location', 'band', 'status')


@dataclass
class SearchParams:
    search: Optional[str] = None
    capability: Optional[str] = None
    location: Optional[str] = None
    band: Optional[str] = None
    status: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None

    @classmethod
    def from_query(cls, query, page=None, limit=None):
        """Pick the recognised filter keys out of a QueryDict / dict."""
        return cls(page=page, limit=limit, **{key: (query.get(key) or '').strip() or None for key in SEARCH_KEYS})

    def filters(self):
        """Non-blank filters in canonical key order, trimmed."""
        out = {}
        for key in SEARCH_KEYS:
            value = getattr(self, key)
            if value and value.strip():
                out[key] = value.strip()
        return out


@dataclass
class PageLink:
    page: int
    url: str
    is_current: bool


@dataclass
class PaginationWindow:
    first: str
    previous: Optional[str]
    next: Optional[str]
    last: str
    pages: List[PageLink] = field(default_factory=list)


@dataclass
class PaginationParams:
    is_valid: bool
    page: int
    limit: int
    error: Optional[str] = None


def _encode(value):
    # same escaping as JavaScript's encodeURIComponent
    return quote(value, safe="-_.!~*'()")


def build_search_query_string(params) -> str:
    """
    "&key=value" pairs for every non-blank filter, or "" when there are none.
    Accepts a SearchParams, a plain dict, or None.
    """
    if not params:
        return ''
    if isinstance(params, dict):
        params = SearchParams(**{k: v for k, v in params.items() if k in SEARCH_KEYS})
    return ''.join(f'&{key}={_encode(value)}' for key, value in params.filters().items())


def build_pagination_url(base_path, page, limit, params=None) -> str:
    return f'{base_path}?page={page}&limit={limit}{build_search_query_string(params)}'


def page_window(current_page, total_pages, size=WINDOW_SIZE):
    """
    Page numbers to show: everything when there are at most ``size`` pages,
    otherwise ``size`` consecutive pages centred on the current one and
    pushed back inside [1, total_pages] at either end.
    """
    if total_pages <= size:
        return list(range(1, total_pages + 1))
    start = current_page - size // 2
    start = max(1, min(start, total_pages - size + 1))
    return list(range(start, start + size))


def build_pagination_urls(base_path, current_page, total_pages, limit, params=None) -> PaginationWindow:
    # a ?page= past the end is shown as the last page
    current_page = max(1, min(current_page, total_pages))

    def url(page):
        return build_pagination_url(base_path, page, limit, params)

    return PaginationWindow(
        first=url(1),
        previous=url(current_page - 1) if current_page > 1 else None,
        next=url(current_page + 1) if current_page < total_pages else None,
        last=url(total_pages),
        pages=[
            PageLink(page=page, url=url(page), is_current=page == current_page)
            for page in page_window(current_page, total_pages)
        ],
    )


def _parse_positive(raw):
    raw = (raw or '').strip()
    if not raw.isascii() or not raw.isdigit():
        return None
    value = int(raw)
    return value if value >= 1 else None


def validate_pagination_params(page_raw=None, limit_raw=None) -> PaginationParams:
    """Parse ?page= and ?limit=; absent values fall back to the defaults."""
    page = DEFAULT_PAGE
    if page_raw:
        page = _parse_positive(page_raw)
        if page is None:
            return PaginationParams(False, DEFAULT_PAGE, DEFAULT_LIMIT, "Page must be a positive integer")

    limit = DEFAULT_LIMIT
    if limit_raw:
        limit = _parse_positive(limit_raw)
        if limit is None:
            return PaginationParams(False, page, DEFAULT_LIMIT, "Limit must be a positive integer")
        if limit > MAX_LIMIT:
            return PaginationParams(False, page, DEFAULT_LIMIT, f"Limit cannot exceed {MAX_LIMIT}")

    return PaginationParams(True, page, limit)
