from .store import (
    InvalidMarketError,
    SitemapError,
    SitemapNotFoundError,
    SitemapReadError,
    SitemapStore,
    normalize_market,
)
