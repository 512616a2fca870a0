import pytest
from fastapi.testclient import TestClient

from sitemap_proxy.conf import ProxyConfig
from sitemap_proxy.main import create_app
from test.factories import AUSTRIA_XML, GERMANY_XML, SECRET

CONFIG_ENV_VARS = (
    "SHOPIFY_APP_SECRET",
    "SKIP_VERIFICATION",
    "APP_ENV",
    "NODE_ENV",
    "SITEMAP_DIR",
    "SITEMAP_CACHE_CONTROL",
    "HOST",
    "PORT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's shell environment out of ProxyConfig."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sitemap_dir(tmp_path):
    """A content root holding two market sitemaps and one stray file."""
    root = tmp_path / "sitemaps"
    root.mkdir()
    (root / "austria.xml").write_bytes(AUSTRIA_XML)
    (root / "germany.xml").write_bytes(GERMANY_XML)
    (root / "README.txt").write_text("not a sitemap")
    return root


@pytest.fixture
def config(sitemap_dir) -> ProxyConfig:
    return ProxyConfig(app_secret=SECRET, sitemap_dir=sitemap_dir)


@pytest.fixture
def client(config):
    with TestClient(create_app(config)) as c:
        yield c
