from typing import Optional

from pydantic import BaseModel


class EnvironmentStatus(BaseModel):
    secret_configured: bool
    skip_verification: bool
    app_env: str


class StatusResponse(BaseModel):
    status: str
    timestamp: str
    environment: EnvironmentStatus
    available_sitemaps: list[str] = []
    expected_proxy_url: Optional[str] = None
    server_endpoint: Optional[str] = None
    error: Optional[str] = None
