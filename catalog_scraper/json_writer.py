from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Optional, Union

from .errors import PersistenceError, SerializationError
from .types import ProductRecord


PRODUCTS_KEY = "Products"


def encode_record(record: ProductRecord, identifier: Optional[int] = None) -> str:
    try:
        return json.dumps(record.to_dict(), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"could not encode product {record.name!r}: {exc}", identifier) from exc


def render_document(chunks: Iterable[str]) -> str:
    """Wrap already encoded records into the top-level output object."""
    return '{"%s":[%s]}' % (PRODUCTS_KEY, ",".join(chunks))


def write_products(chunks: Iterable[str], out_path: Union[str, Path]) -> Path:
    path = Path(out_path)
    document = render_document(chunks)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document, encoding="utf-8")
    except OSError as exc:
        raise PersistenceError(f"could not write output file {path}: {exc}") from exc
    return path
