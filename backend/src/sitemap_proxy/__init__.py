"""Sitemap relay behind a storefront app proxy.

The storefront forwards ``/apps/sitemaps/<market>.xml`` to this service,
which checks the proxy signature and answers with the matching static
sitemap document.

Usage::

    from sitemap_proxy.main import create_app

    app = create_app()  # returns a FastAPI ASGI app
"""

VERSION = "1.0.0"
