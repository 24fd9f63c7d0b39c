"""Narrow node selection over a parsed page.

A query is a single structural descriptor: a tag name (``h2``), an id
(``#bigpic``), a class (``.feature_name``) or a compound of those. Whitespace
separated parts are merged into one compound, so ``".navigation tr"`` means
``tr`` elements carrying the ``navigation`` class, not a descendant lookup.

Chains narrow through the first match of every step except the last, whose
full result list is returned.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Optional, Sequence, Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PageElement, PreformattedString

__all__ = ["select", "select_chain", "select_first", "is_text", "first_text", "element_children"]

Node = Union[BeautifulSoup, Tag]

_PART_RE = re.compile(r"^(?P<tag>[A-Za-z][\w-]*)?(?P<rest>(?:[#.][\w-]+)*)$")
_QUALIFIER_RE = re.compile(r"([#.])([\w-]+)")


@lru_cache(maxsize=None)
def compile_query(query: str) -> str:
    """Turn a descriptor into an equivalent compound CSS selector."""
    tag: Optional[str] = None
    qualifiers: List[str] = []
    parts = query.split()
    if not parts:
        raise ValueError("empty selector query")
    for part in parts:
        m = _PART_RE.match(part)
        if not m:
            raise ValueError(f"unsupported selector query: {query!r}")
        if m.group("tag"):
            if tag is not None and tag != m.group("tag").lower():
                raise ValueError(f"selector names two tags: {query!r}")
            tag = m.group("tag").lower()
        qualifiers.extend(f"{kind}{name}" for kind, name in _QUALIFIER_RE.findall(m.group("rest")))
    return (tag or "") + "".join(qualifiers)


def select(root: Node, query: str) -> List[Tag]:
    """All descendants of ``root`` matching ``query``, in document order."""
    return list(root.select(compile_query(query)))


def select_first(root: Node, query: str) -> Optional[Tag]:
    found = select(root, query)
    return found[0] if found else None


def select_chain(root: Node, queries: Sequence[str]) -> List[Tag]:
    """Apply ``queries`` in turn, each within the first match of the previous one.

    Returns the matches of the final query, or an empty list as soon as any
    step matches nothing.
    """
    if not queries:
        raise ValueError("selector chain must contain at least one query")
    current: Node = root
    result: List[Tag] = []
    for query in queries:
        result = select(current, query)
        if not result:
            return []
        current = result[0]
    return result


def is_text(node: PageElement) -> bool:
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def first_text(node: Optional[PageElement]) -> str:
    """Text of the first child node, or "" when the first child is not text."""
    if node is None or not isinstance(node, Tag) or not node.contents:
        return ""
    child = node.contents[0]
    return str(child) if is_text(child) else ""


def element_children(node: Tag) -> List[Tag]:
    return [child for child in node.children if isinstance(child, Tag)]
