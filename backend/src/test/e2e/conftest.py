"""Shared fixtures for E2E tests.

These tests run the sitemap proxy under uvicorn and the mock app proxy as
real subprocesses on local ports.

Run with:  pytest -m e2e -v
"""

import os
import subprocess
import sys
import time
from pathlib import Path

import httpx
import pytest

from test.factories import AUSTRIA_XML, GERMANY_XML

# ---------------------------------------------------------------------------
# Auto-skip E2E tests unless explicitly selected
# ---------------------------------------------------------------------------

E2E_DIR = Path(__file__).parent
SRC_DIR = Path(__file__).resolve().parents[2]

E2E_SECRET = "e2e-app-secret"
RELAY_PORT = 17893
MOCK_PROXY_PORT = 18888
RELAY_URL = f"http://127.0.0.1:{RELAY_PORT}"
MOCK_PROXY_URL = f"http://127.0.0.1:{MOCK_PROXY_PORT}"


def pytest_collection_modifyitems(config, items):
    """Skip E2E tests unless -m e2e is specified."""
    marker_expr = config.getoption("-m", default="")
    if "e2e" in marker_expr:
        return
    skip = pytest.mark.skip(reason="E2E tests require: pytest -m e2e")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip)


def _wait_until_ready(proc, url: str, name: str):
    for _ in range(30):
        try:
            if httpx.get(url, timeout=3.0).status_code == 200:
                return
        except (httpx.ConnectError, httpx.ReadTimeout):
            pass
        time.sleep(1)

    proc.terminate()
    stdout, stderr = proc.communicate(timeout=5)
    pytest.fail(
        f"{name} did not start within 30s.\n"
        f"stdout: {stdout.decode(errors='replace')[-2000:]}\n"
        f"stderr: {stderr.decode(errors='replace')[-2000:]}"
    )


def _stop(proc):
    proc.terminate()
    try:
        proc.wait(timeout=10)
    except subprocess.TimeoutExpired:
        proc.kill()
        proc.wait(timeout=5)


def _child_env(**extra) -> dict:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(SRC_DIR), env.get("PYTHONPATH")) if p
    )
    env.update(extra)
    return env


# ---------------------------------------------------------------------------
# Session-scoped fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def e2e_sitemap_dir(tmp_path_factory):
    """Session-scoped content root with two market sitemaps."""
    root = tmp_path_factory.mktemp("e2e") / "sitemaps"
    root.mkdir()
    (root / "austria.xml").write_bytes(AUSTRIA_XML)
    (root / "germany.xml").write_bytes(GERMANY_XML)
    return root


@pytest.fixture(scope="session")
def relay_process(e2e_sitemap_dir):
    """Start the sitemap proxy with ``python -m sitemap_proxy``."""
    proc = subprocess.Popen(
        [sys.executable, "-m", "sitemap_proxy"],
        env=_child_env(
            SHOPIFY_APP_SECRET=E2E_SECRET,
            SITEMAP_DIR=str(e2e_sitemap_dir),
            HOST="127.0.0.1",
            PORT=str(RELAY_PORT),
            SKIP_VERIFICATION="false",
            APP_ENV="e2e",
        ),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    _wait_until_ready(proc, f"{RELAY_URL}/test", "Sitemap proxy")
    yield proc
    _stop(proc)


@pytest.fixture(scope="session")
def mock_proxy_process(relay_process):
    """Start the aiohttp mock app proxy in front of the relay."""
    proc = subprocess.Popen(
        [sys.executable, str(E2E_DIR / "mock_app_proxy.py")],
        env=_child_env(
            SHOPIFY_APP_SECRET=E2E_SECRET,
            UPSTREAM_URL=RELAY_URL,
            MOCK_PROXY_PORT=str(MOCK_PROXY_PORT),
        ),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    _wait_until_ready(proc, f"{MOCK_PROXY_URL}/health", "Mock app proxy")
    yield proc
    _stop(proc)


@pytest.fixture(scope="session")
def relay_client(relay_process):
    """HTTP client talking to the relay directly (unsigned)."""
    with httpx.Client(base_url=RELAY_URL, timeout=10.0) as client:
        yield client


@pytest.fixture(scope="session")
def storefront_client(mock_proxy_process):
    """HTTP client talking to the mock app proxy, as a storefront would."""
    with httpx.Client(base_url=MOCK_PROXY_URL, timeout=10.0) as client:
        yield client
