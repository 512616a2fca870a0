import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from sitemap_proxy.conf import ProxyConfig
from sitemap_proxy.models import EnvironmentStatus, StatusResponse
from sitemap_proxy.security.api import get_config
from sitemap_proxy.sitemaps import SitemapStore

from .proxy import get_store

router = APIRouter(tags=["status"])
logger = logging.getLogger(__name__)

EXPECTED_PROXY_URL = "https://your-store.myshopify.com/apps/sitemaps/[market].xml"
SERVER_ENDPOINT = "/proxy/sitemaps/[market]"


@router.get("/", response_class=PlainTextResponse)
async def index():
    return "Sitemap Proxy Server - Visit /test for status"


@router.get("/test", response_model=StatusResponse, response_model_exclude_none=True)
def status(
    config: ProxyConfig = Depends(get_config),
    store: SitemapStore = Depends(get_store),
):
    """Report configuration health and the sitemaps on disk."""
    environment = EnvironmentStatus(
        secret_configured=config.secret_configured,
        skip_verification=config.verification_bypassed,
        app_env=config.environment,
    )
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        files = store.available()
    except OSError as e:
        logger.warning("Cannot list sitemaps: %s", e)
        return StatusResponse(
            status="degraded",
            timestamp=timestamp,
            environment=environment,
            error="Cannot read sitemaps directory",
        )
    return StatusResponse(
        status="ok",
        timestamp=timestamp,
        environment=environment,
        available_sitemaps=files,
        expected_proxy_url=EXPECTED_PROXY_URL,
        server_endpoint=SERVER_ENDPOINT,
    )
