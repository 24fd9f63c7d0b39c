from __future__ import annotations

import html
from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from .errors import NotAValidProduct
from .log import get_logger
from .selector import element_children, first_text, is_text, select, select_chain, select_first
from .types import ProductRecord, Selectable


logger = get_logger(__name__)

TITLE_CHAIN = ("#primary_block", "h2")
FEATURES_CHAIN = (".product_short_features_list", "table", "tbody", "tr")
DETAILS_CHAIN = ("#idTab2", "tr")

AVAILABLE = "Dostupno"
NOT_AVAILABLE = "Nedostupno"

WHITESPACE = " \t\n\r"
WHITESPACE_AND_COLON = " :\t\n\r"


def _unescaped(node: Optional[Tag]) -> str:
    # the shop double-encodes entities in names and labels; the parser decodes one level
    return html.unescape(first_text(node))


def extract_title(soup: BeautifulSoup) -> str:
    found = select_chain(soup, TITLE_CHAIN)
    name = _unescaped(found[0]) if found else ""
    if not name.strip():
        raise NotAValidProduct("Not a valid product")
    return name


def extract_category(soup: BeautifulSoup) -> str:
    nav = select_first(soup, ".navigation_end")
    if nav is None or not nav.contents:
        return ""
    return _unescaped(nav.contents[0])


def _marked(el: Tag, css_class: str) -> Optional[Tag]:
    """First element of the subtree rooted at el, el included, carrying css_class."""
    if css_class in (el.get("class") or []):
        return el
    return select_first(el, "." + css_class)


def _feature_value(value_el: Optional[Tag]) -> str:
    if value_el is None:
        return ""
    editable = _marked(value_el, "editable")
    if editable is not None:
        return first_text(editable)
    if _marked(value_el, "not_available") is not None:
        return NOT_AVAILABLE
    if _marked(value_el, "available") is not None:
        return AVAILABLE
    return _unescaped(value_el).strip(WHITESPACE)


def _extract_feature(row: Tag) -> Optional[Tuple[str, str]]:
    name_el = select_first(row, ".feature_name")
    if name_el is None:
        return None
    return _unescaped(name_el), _feature_value(select_first(row, ".feature_value"))


def extract_features(soup: BeautifulSoup) -> Dict[str, str]:
    features: Dict[str, str] = {}
    for row in select_chain(soup, FEATURES_CHAIN):
        pair = _extract_feature(row)
        if pair is None:
            continue
        key, value = pair
        features[key] = value
    return features


def _image_pair(base_url: str, src: str, size: str) -> List[str]:
    return [f"{base_url}{src}", f"{base_url}{src.replace(size, 'thickbox', 1)}"]


def extract_images(soup: BeautifulSoup, base_url: str) -> List[str]:
    """Main image followed by every thumbnail, each as a (normal, zoomed) pair."""
    images: List[str] = []

    bigpic = select_first(soup, "#bigpic")
    if bigpic is not None and bigpic.get("src"):
        images.extend(_image_pair(base_url, bigpic["src"], "large"))

    frame = select_first(soup, "#thumbs_list_frame")
    if frame is not None:
        for img in select(frame, "img"):
            src = img.get("src")
            if not src:
                continue
            images.extend(_image_pair(base_url, src, "medium"))
    return images


def _joined_text(nodes) -> str:
    # text runs and the leading text of inline elements; other markup is dropped
    parts: List[str] = []
    for node in nodes:
        if is_text(node):
            parts.append(str(node))
        elif isinstance(node, Tag):
            parts.append(first_text(node))
    return html.unescape("".join(parts))


def extract_descriptions(soup: BeautifulSoup) -> List[str]:
    tab = select_first(soup, "#idTab1")
    if tab is None:
        return []

    descriptions: List[str] = []
    for chapter in element_children(tab):
        span = select_first(chapter, "span")
        if span is None:
            continue
        if len(span.contents) > 1:
            descriptions.append(_joined_text(span.contents))
        elif span.contents and is_text(span.contents[0]):
            descriptions.append(str(span.contents[0]))
        else:
            descriptions.append(first_text(span.contents[0]) if span.contents else "")
    return descriptions


def _extra_name(group: Tag) -> str:
    slots = element_children(group)
    if not slots:
        return ""
    return _unescaped(slots[0]).strip(WHITESPACE_AND_COLON)


def _extra_options(group: Tag) -> List[str]:
    slots = element_children(group)
    if len(slots) < 2:
        return []
    options: List[str] = []
    for option in slots[1].children:
        if not isinstance(option, Tag) or not option.contents:
            continue
        text = _unescaped(option)
        if text:
            options.append(text)
    return options


def extract_extras(soup: BeautifulSoup) -> List[Selectable]:
    found = select(soup, "#attributes")
    if len(found) != 1:
        return []

    extras: List[Selectable] = []
    for group in element_children(found[0]):
        if not group.contents:
            continue
        name = _extra_name(group)
        options = _extra_options(group)
        if not name or not options:
            logger.debug("Skipping option group without name or values: %r", name)
            continue
        extras.append(Selectable(name=name, options=options))
    return extras


def extract_details(soup: BeautifulSoup) -> Dict[str, str]:
    details: Dict[str, str] = {}
    for row in select_chain(soup, DETAILS_CHAIN):
        name_el = select_first(row, ".product_feature_name")
        value_el = select_first(row, ".product_feature_value")
        if name_el is None or value_el is None:
            continue
        key = _unescaped(name_el).strip(WHITESPACE_AND_COLON)
        details[key] = _unescaped(value_el).strip(WHITESPACE_AND_COLON)
    return details


def extract_geometry(soup: BeautifulSoup) -> str:
    frame = select_first(soup, "#geometry_image")
    if frame is None:
        return ""
    children = element_children(frame)
    if not children:
        return ""
    return html.unescape(children[0].get("src", ""))


def extract_product(soup: BeautifulSoup, base_url: str) -> ProductRecord:
    """Build one record from a product page.

    The title is the only required field: without it the page is rejected
    with NotAValidProduct. Every other field falls back to an empty value.
    """
    name = extract_title(soup)
    return ProductRecord(
        name=name,
        category=extract_category(soup),
        features=extract_features(soup),
        images=extract_images(soup, base_url),
        descriptions=extract_descriptions(soup),
        extras=extract_extras(soup),
        details=extract_details(soup),
        geometry=extract_geometry(soup),
    )
