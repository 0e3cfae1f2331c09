from fastapi import APIRouter, Query
from logging_manager import logging_manager, log_info

router = APIRouter(prefix="", tags=["logs"])


@router.get("/logs")
async def get_logs(limit: int = Query(default=100, ge=1, le=1000)):
    logs = [entry.to_dict() for entry in logging_manager.get_logs(limit=limit)]
    return {"logs": logs, "total": len(logs)}


@router.delete("/logs")
async def clear_logs():
    logging_manager.clear_logs()
    log_info("Log history cleared")
    return {"message": "Logs cleared successfully"}
