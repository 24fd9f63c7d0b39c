from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .config import ScraperConfig
from .errors import ScraperError, TransportError
from .extract import extract_product
from .fetch import DocumentSource
from .json_writer import encode_record, write_products
from .log import get_logger
from .types import ProductRecord


logger = get_logger(__name__)

# (identifier, position, total, record or None, error or None)
ProgressCallback = Callable[[int, int, int, Optional[ProductRecord], Optional[ScraperError]], None]


@dataclass
class BatchResult:
    records: List[ProductRecord] = field(default_factory=list)
    chunks: List[str] = field(default_factory=list)
    succeeded: List[int] = field(default_factory=list)
    failed: Dict[int, str] = field(default_factory=dict)


class BatchOrchestrator:
    """Runs fetch and extraction over the configured identifiers, one at a time.

    Per-identifier failures are logged and skipped, missing pages included.
    Only persistence failures and a run of consecutive unreachable-origin
    failures abort the batch.
    """

    def __init__(
        self,
        config: ScraperConfig,
        source: Optional[DocumentSource] = None,
        sleep: Callable[[float], None] = time.sleep,
        progress: Optional[ProgressCallback] = None,
    ):
        self.config = config.validate()
        self.source = source or DocumentSource(config)
        self.sleep = sleep
        self.progress = progress

    def process(self, identifier: int) -> Tuple[ProductRecord, str]:
        from_cache = False
        try:
            soup, from_cache = self.source.fetch(identifier)
        finally:
            if not from_cache and self.config.delay > 0:
                self.sleep(self.config.delay)

        try:
            record = extract_product(soup, self.config.site_url)
        except ScraperError as exc:
            exc.identifier = identifier
            raise
        return record, encode_record(record, identifier)

    def run(self) -> BatchResult:
        identifiers = self.config.identifiers()
        total = len(identifiers)
        result = BatchResult()
        transport_failures = 0

        for position, identifier in enumerate(identifiers, start=1):
            logger.info("Getting product with id: %d", identifier)
            try:
                record, chunk = self.process(identifier)
            except ScraperError as exc:
                if exc.fatal:
                    raise
                logger.warning("Skipping product %d: %s", identifier, exc)
                result.failed[identifier] = str(exc)
                self._report(identifier, position, total, None, exc)

                if isinstance(exc, TransportError) and exc.unreachable:
                    transport_failures += 1
                    limit = self.config.max_transport_failures
                    if limit and transport_failures >= limit:
                        raise TransportError(
                            f"origin unreachable: {transport_failures} consecutive transport failures",
                            unreachable=True,
                        ) from exc
                else:
                    transport_failures = 0
                continue

            transport_failures = 0
            result.records.append(record)
            result.chunks.append(chunk)
            result.succeeded.append(identifier)
            self._report(identifier, position, total, record, None)

        return result

    def run_and_write(self) -> BatchResult:
        result = self.run()
        path = write_products(result.chunks, self.config.output_path)
        logger.info("Wrote %d products to %s", len(result.records), path)
        return result

    def _report(self, identifier, position, total, record, error) -> None:
        if self.progress is not None:
            self.progress(identifier, position, total, record, error)
