"""Run configuration for the catalog scraper."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

from .errors import ConfigError

__all__ = [
    "DEFAULT_URL",
    "DEFAULT_MIN_ID",
    "DEFAULT_MAX_ID",
    "DEFAULT_OUTPUT_NAME",
    "CACHE_DIR",
    "OUTPUT_DIR",
    "REQUEST_DELAY",
    "REQUEST_TIMEOUT",
    "MAX_RETRIES",
    "RETRY_BACKOFF",
    "RETRY_STATUS_CODES",
    "MAX_TRANSPORT_FAILURES",
    "ScraperConfig",
]

DEFAULT_URL = "http://keindl-sport.hr/product.php?id_product="

# Identifier range covered by a full run
DEFAULT_MIN_ID = 1
DEFAULT_MAX_ID = 2100

DEFAULT_OUTPUT_NAME = "Diff.json"

CACHE_DIR = "data"
OUTPUT_DIR = "out"

# Pause after every live fetch (seconds)
REQUEST_DELAY = 1.0

REQUEST_TIMEOUT = 15
MAX_RETRIES = 5
RETRY_BACKOFF = 0.7
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)

# Consecutive unreachable-origin failures treated as total loss of connectivity;
# error statuses from a live origin do not count
MAX_TRANSPORT_FAILURES = 5


@dataclass(frozen=True)
class ScraperConfig:
    url_template: str = DEFAULT_URL
    min_id: int = DEFAULT_MIN_ID
    max_id: int = DEFAULT_MAX_ID
    single_id: Optional[int] = None
    use_cache: bool = False
    output_name: str = DEFAULT_OUTPUT_NAME
    cache_dir: str = CACHE_DIR
    output_dir: str = OUTPUT_DIR
    delay: float = REQUEST_DELAY
    base_url: Optional[str] = None
    user_agent: Optional[str] = None
    retries: int = MAX_RETRIES
    retry_backoff: float = RETRY_BACKOFF
    timeout: float = REQUEST_TIMEOUT
    max_transport_failures: int = MAX_TRANSPORT_FAILURES

    def validate(self) -> "ScraperConfig":
        if not self.url_template:
            raise ConfigError("URL template must not be empty")
        if self.min_id < 0:
            raise ConfigError(f"min id must be non-negative, got {self.min_id}")
        if self.min_id > self.max_id:
            raise ConfigError(f"min id {self.min_id} is greater than max id {self.max_id}")
        if self.retries < 0:
            raise ConfigError(f"retries must be non-negative, got {self.retries}")
        if self.delay < 0:
            raise ConfigError(f"delay must be non-negative, got {self.delay}")
        return self

    @property
    def is_single(self) -> bool:
        return self.single_id is not None and self.single_id > 0

    @property
    def site_url(self) -> str:
        """Prefix for relative image sources; scheme and host of the URL template unless set."""
        if self.base_url:
            return self.base_url.rstrip("/")
        parsed = urlparse(self.url_template)
        return f"{parsed.scheme}://{parsed.netloc}"

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir) / self.output_name

    def identifiers(self) -> List[int]:
        if self.is_single:
            return [self.single_id]  # type: ignore[list-item]
        return list(range(self.min_id, self.max_id + 1))

    def product_url(self, identifier: int) -> str:
        return f"{self.url_template}{identifier}"

    def cache_path(self, identifier: int) -> Path:
        return Path(self.cache_dir) / f"product_{identifier}.txt"
