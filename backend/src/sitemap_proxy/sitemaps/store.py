"""Read-only store of per-market sitemap documents.

Each market has one file, ``<market>.xml``, directly under the content root.
"""

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

XML_SUFFIX = ".xml"
XML_MEDIA_TYPE = "application/xml; charset=utf-8"

# Keeps identifiers to a single path segment inside the content root.
_MARKET_RE = re.compile(r"[a-z0-9][a-z0-9_-]*")


class SitemapError(Exception):
    """Base class for sitemap lookup failures."""

    def __init__(self, market: str, message: str = ""):
        self.market = market
        super().__init__(message or market)


class InvalidMarketError(SitemapError):
    """Market identifier is empty or contains disallowed characters."""


class SitemapNotFoundError(SitemapError):
    """No document exists for the market."""


class SitemapReadError(SitemapError):
    """Document exists but could not be read."""


def normalize_market(raw: str) -> str:
    """Lowercase *raw* and strip one trailing ``.xml``.

    Raises :class:`InvalidMarketError` if nothing usable is left.
    """
    market = raw.lower()
    if market.endswith(XML_SUFFIX):
        market = market[: -len(XML_SUFFIX)]
    if not market:
        raise InvalidMarketError(raw, "Market is required")
    if not _MARKET_RE.fullmatch(market):
        raise InvalidMarketError(raw, f"Invalid market: {raw}")
    return market


class SitemapStore:
    def __init__(self, root: Path):
        self.root = Path(root)

    def path_for(self, market: str) -> Path:
        return self.root / f"{normalize_market(market)}{XML_SUFFIX}"

    def read(self, market: str) -> bytes:
        """Return the raw bytes of the document for *market*."""
        path = self.path_for(market)
        logger.debug("Looking for file: %s", path)
        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            raise SitemapNotFoundError(
                market, f"Sitemap not found for market: {market}"
            ) from None
        except OSError as e:
            logger.error("Failed to read sitemap %s: %s", path, e)
            raise SitemapReadError(market, "Sitemap could not be read") from e

    def available(self) -> list[str]:
        """List document file names in the content root, sorted.

        Raises OSError if the root cannot be listed.
        """
        return sorted(
            entry.name
            for entry in self.root.iterdir()
            if entry.is_file() and entry.suffix == XML_SUFFIX
        )
