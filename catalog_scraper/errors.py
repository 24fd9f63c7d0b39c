from __future__ import annotations

from typing import Optional


class ScraperError(Exception):
    """Base class for all scraper failures."""

    fatal = False

    def __init__(self, message: str, identifier: Optional[int] = None):
        super().__init__(message)
        self.identifier = identifier


class TransportError(ScraperError):
    """Origin unreachable or response body unreadable.

    ``unreachable`` is set when no response arrived at all (connection
    refused, DNS failure, timeout); an error status from a live origin
    leaves it False.
    """

    def __init__(self, message: str, identifier: Optional[int] = None, unreachable: bool = False):
        super().__init__(message, identifier)
        self.unreachable = unreachable


class ParseError(ScraperError):
    """Markup could not be turned into a usable document tree."""


class NotAValidProduct(ScraperError):
    """The page has no product title, so it is not a product page."""


class SerializationError(ScraperError):
    """A record could not be converted to its JSON representation."""


class PersistenceError(ScraperError):
    fatal = True


class ConfigError(ScraperError):
    fatal = True
