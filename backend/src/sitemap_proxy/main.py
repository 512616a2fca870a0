"""Application factory and server entry point."""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sitemap_proxy import VERSION
from sitemap_proxy.api import direct_router, router
from sitemap_proxy.conf import ProxyConfig, setup_logger
from sitemap_proxy.middleware import RequestLogMiddleware
from sitemap_proxy.sitemaps import SitemapStore

logger = logging.getLogger(__name__)


async def plain_text_http_error(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(
        str(exc.detail), status_code=exc.status_code, headers=exc.headers
    )


def create_app(config: Optional[ProxyConfig] = None) -> FastAPI:
    """Build the relay app around *config* (read from the environment if omitted)."""
    if config is None:
        config = ProxyConfig()

    app = FastAPI(title="Sitemap Proxy", version=VERSION, docs_url=None, redoc_url=None)
    app.state.config = config
    app.state.store = SitemapStore(config.sitemap_dir)

    app.add_middleware(RequestLogMiddleware)
    app.add_exception_handler(StarletteHTTPException, plain_text_http_error)
    app.include_router(router)

    if config.verification_bypassed:
        logger.warning("Signature verification is DISABLED (testing mode)")
        app.include_router(direct_router)
    elif config.skip_verification:
        logger.warning(
            "SKIP_VERIFICATION ignored in %s environment", config.environment
        )
    if not config.secret_configured:
        logger.error("SHOPIFY_APP_SECRET not configured, signed requests will fail")
    return app


def main():
    config = ProxyConfig()
    setup_logger(config.log_level)
    logger.info("Environment: %s", config.environment)
    logger.info("Secret configured: %s", config.secret_configured)
    logger.info("Serving sitemaps from %s", config.sitemap_dir)
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    main()
