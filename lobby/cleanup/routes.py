# cleanup/routes.py
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from supabase import Client

from ..auth.middleware import require_trigger_token
from ..database import get_supabase
from .models import CleanupError, CleanupResponse
from .policy import RoomLifecyclePolicy

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/functions/cleanup-rooms",
    response_model=CleanupResponse,
    responses={500: {"model": CleanupError}},
    dependencies=[Depends(require_trigger_token)],
)
def cleanup_rooms(supabase: Client = Depends(get_supabase)):
    """Scheduler entry point: run the room lifecycle policy once"""
    try:
        report = RoomLifecyclePolicy(supabase).run()
    except Exception as e:
        logger.exception("Room cleanup failed")
        return JSONResponse(
            status_code=500,
            content=CleanupError(error=str(e) or "Unknown error occurred").model_dump(),
        )

    return CleanupResponse(
        marked_inactive=report.marked_inactive,
        deleted=report.deleted,
        timestamp=report.timestamp,
    )
