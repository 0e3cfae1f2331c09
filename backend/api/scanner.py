import asyncio
from functools import partial
from typing import Iterator
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from app.settings import Settings
from logging_manager import log_info, log_warn, log_error
from models.scanner import ScanResponse, ErrorResponse
from services.bhavcopy import NseArchiveProvider, SessionProvider
from services.errors import NoSessionsError
from services.scanner import run_scan

router = APIRouter(prefix="/api", tags=["scanner"])


def get_settings() -> Settings:
    return Settings()


def get_provider(settings: Settings = Depends(get_settings)) -> Iterator[SessionProvider]:
    provider = NseArchiveProvider(settings)
    try:
        yield provider
    finally:
        provider.close()


@router.post(
    "/analyze",
    response_model=ScanResponse,
    responses={502: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze(
    settings: Settings = Depends(get_settings),
    provider: SessionProvider = Depends(get_provider),
):
    log_info("Stealth accumulation scan requested", module="api.scanner")
    try:
        return await asyncio.get_event_loop().run_in_executor(
            None, partial(run_scan, provider=provider, settings=settings)
        )
    except NoSessionsError as e:
        log_warn(str(e), module="api.scanner")
        return JSONResponse(status_code=502, content={"error": str(e)})
    except Exception as e:
        log_error(f"Scan failed: {e}", module="api.scanner")
        return JSONResponse(status_code=500, content={"error": str(e) or "Unexpected error"})
