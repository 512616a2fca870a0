"""App-proxy request authentication.

Usage::

    from sitemap_proxy.security import verify_signature

    ok = verify_signature(dict(request.query_params), config.app_secret)
"""

from .signature import canonical_message, sign_params, verify_signature
