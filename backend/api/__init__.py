from fastapi import APIRouter
from . import health, logs, scanner

router = APIRouter()

router.include_router(health.router)
router.include_router(scanner.router)
router.include_router(logs.router)
