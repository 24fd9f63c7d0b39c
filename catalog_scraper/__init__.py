"""
Catalog product page scraper package.

Exports:
- ProductRecord, Selectable: dataclasses for extracted product data
- ScraperConfig: immutable run configuration
- BatchOrchestrator: fetches and extracts a range of product ids
- extract_product: builds a ProductRecord from a parsed page
"""

from .types import ProductRecord, Selectable
from .config import ScraperConfig
from .extract import extract_product
from .batch import BatchOrchestrator, BatchResult

__all__ = [
    "ProductRecord",
    "Selectable",
    "ScraperConfig",
    "extract_product",
    "BatchOrchestrator",
    "BatchResult",
]
