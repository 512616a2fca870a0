import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response

from sitemap_proxy.conf import ProxyConfig
from sitemap_proxy.security.api import get_config, verify_proxy_request
from sitemap_proxy.sitemaps import (
    InvalidMarketError,
    SitemapNotFoundError,
    SitemapReadError,
    SitemapStore,
    normalize_market,
)
from sitemap_proxy.sitemaps.store import XML_MEDIA_TYPE

router = APIRouter(prefix="/proxy/sitemaps", tags=["proxy"])
direct_router = APIRouter(prefix="/direct", tags=["direct"])
logger = logging.getLogger(__name__)


def get_store(request: Request) -> SitemapStore:
    return request.app.state.store


def _sitemap_response(
    market: str, store: SitemapStore, cache_control: Optional[str] = None
) -> Response:
    try:
        name = normalize_market(market)
        content = store.read(name)
    except InvalidMarketError as e:
        logger.info("Bad market identifier: %r", market)
        raise HTTPException(status_code=400, detail=str(e))
    except SitemapNotFoundError:
        logger.warning("No sitemap for market: %s", market)
        raise HTTPException(
            status_code=404, detail=f"Sitemap not found for market: {market}"
        )
    except SitemapReadError as e:
        raise HTTPException(status_code=500, detail=str(e))

    logger.info("Sending XML for market: %s", name)
    headers = {"Cache-Control": cache_control} if cache_control else None
    return Response(content=content, media_type=XML_MEDIA_TYPE, headers=headers)


@router.get("/{market}", dependencies=[Depends(verify_proxy_request)])
def get_sitemap(
    market: str,
    store: SitemapStore = Depends(get_store),
    config: ProxyConfig = Depends(get_config),
):
    """Serve the sitemap for *market* to a signed app-proxy request.

    Accepts both ``austria`` and ``austria.xml``.
    """
    logger.info("Proxy request for market: %s", market)
    return _sitemap_response(market, store, config.cache_control)


@direct_router.get("/{market}.xml")
def get_sitemap_direct(market: str, store: SitemapStore = Depends(get_store)):
    """Serve a sitemap without a signature. Mounted only in bypass mode."""
    logger.info("Direct access for market: %s", market)
    return _sitemap_response(market, store)
