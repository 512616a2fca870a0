import logging

from fastapi import Depends, HTTPException, Request

from sitemap_proxy.conf import ProxyConfig

from .signature import collect_params, verify_signature

logger = logging.getLogger(__name__)

def _forbidden() -> HTTPException:
    return HTTPException(status_code=403, detail="Forbidden")


def get_config(request: Request) -> ProxyConfig:
    return request.app.state.config


async def verify_proxy_request(
    request: Request, config: ProxyConfig = Depends(get_config)
) -> None:
    """Reject requests that do not carry a valid app-proxy signature."""
    if config.verification_bypassed:
        logger.warning("Signature verification skipped (testing mode)")
        return
    params = collect_params(request.query_params.multi_items())
    if not verify_signature(params, config.app_secret):
        logger.info("Request rejected - invalid signature")
        raise _forbidden()
