from fastapi import APIRouter

from .proxy import direct_router, router as proxy_router
from .status import router as status_router

router = APIRouter()
router.include_router(status_router)
router.include_router(proxy_router)
