from .config import ProxyConfig
from .log import setup_logger
