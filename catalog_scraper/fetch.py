from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Tuple

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import MAX_RETRIES, REQUEST_TIMEOUT, RETRY_BACKOFF, RETRY_STATUS_CODES, ScraperConfig
from .errors import ParseError, PersistenceError, TransportError
from .log import get_logger


logger = get_logger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


def create_session(
    user_agent: Optional[str] = None,
    total_retries: int = MAX_RETRIES,
    backoff_factor: float = RETRY_BACKOFF,
    retry_statuses: Iterable[int] = RETRY_STATUS_CODES,
) -> requests.Session:
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": user_agent or DEFAULT_USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "hr-HR,hr;q=0.9,en-US;q=0.8,en;q=0.7",
            "Connection": "keep-alive",
        }
    )

    retry = Retry(
        total=total_retries,
        backoff_factor=backoff_factor,
        status_forcelist=tuple(retry_statuses),
        allowed_methods=("GET", "HEAD"),
        raise_on_status=False,
        respect_retry_after_header=True,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def fetch_page(
    url: str,
    session: Optional[requests.Session] = None,
    timeout_seconds: float = REQUEST_TIMEOUT,
) -> bytes:
    """
    Fetch the raw page body.
    Raises TransportError when the origin is unreachable or answers with an error status.
    """
    sess = session or create_session()
    try:
        response = sess.get(url, timeout=timeout_seconds, allow_redirects=True)
        response.raise_for_status()
        return response.content
    except (requests.ConnectionError, requests.Timeout) as exc:
        raise TransportError(f"origin unreachable for {url}: {exc}", unreachable=True) from exc
    except requests.RequestException as exc:
        raise TransportError(f"failed to fetch {url}: {exc}") from exc


def parse_markup(markup: bytes) -> BeautifulSoup:
    if not markup or not markup.strip():
        raise ParseError("empty page body")
    soup = BeautifulSoup(markup, "lxml")
    if soup.find() is None:
        raise ParseError("page body has no elements")
    return soup


class DocumentSource:
    """Parsed product pages, read from the on-disk cache or fetched live.

    Every live fetch stores the raw body under the cache directory so a later
    run with caching enabled can work offline.
    """

    def __init__(self, config: ScraperConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or create_session(
            user_agent=config.user_agent,
            total_retries=config.retries,
            backoff_factor=config.retry_backoff,
        )

    def fetch(self, identifier: int) -> Tuple[BeautifulSoup, bool]:
        """Return (document, from_cache) for one product identifier."""
        if self.config.use_cache:
            soup = self._load_cached(identifier)
            if soup is not None:
                return soup, True

        url = self.config.product_url(identifier)
        logger.info("Fetching product %d from %s", identifier, url)
        try:
            markup = fetch_page(url, session=self.session, timeout_seconds=self.config.timeout)
        except TransportError as exc:
            exc.identifier = identifier
            raise
        self._store(identifier, markup)
        try:
            return parse_markup(markup), False
        except ParseError as exc:
            raise ParseError(f"product {identifier}: {exc}", identifier) from exc

    def _load_cached(self, identifier: int) -> Optional[BeautifulSoup]:
        path = self.config.cache_path(identifier)
        if not path.is_file():
            return None
        try:
            soup = parse_markup(path.read_bytes())
        except (OSError, ParseError) as exc:
            logger.warning("Ignoring unusable cache entry %s: %s", path, exc)
            return None
        logger.debug("Loaded product %d from cache %s", identifier, path)
        return soup

    def _store(self, identifier: int, markup: bytes) -> Path:
        path = self.config.cache_path(identifier)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(markup)
        except OSError as exc:
            raise PersistenceError(f"could not write cache file {path}: {exc}", identifier) from exc
        logger.debug("Cached product %d at %s", identifier, path)
        return path
