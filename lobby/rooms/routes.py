# rooms/routes.py
import logging

from fastapi import APIRouter, Depends
from supabase import Client

from ..database import get_supabase
from ..errors import PageError
from .lookup import InvalidRoomCode, LookupFailed, RoomFound, RoomNotFound, lookup_room
from .models import ErrorMessage, RoomPage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/lobby/{code}",
    response_model=RoomPage,
    responses={400: {"model": ErrorMessage}, 404: {"model": ErrorMessage}, 500: {"model": ErrorMessage}},
)
def load_lobby(code: str, supabase: Client = Depends(get_supabase)):
    """Page data for the lobby of room `code`"""
    try:
        result = lookup_room(supabase, code)
    except Exception:
        logger.exception(f"Unexpected error loading room {code}")
        raise PageError(500, "Failed to load room")

    if isinstance(result, RoomFound):
        return RoomPage(code=code, room=result.room)
    if isinstance(result, InvalidRoomCode):
        raise PageError(400, "Invalid room code - must be 4 digits")
    if isinstance(result, RoomNotFound):
        raise PageError(404, "Room not found")
    if isinstance(result, LookupFailed):
        raise PageError(500, "Failed to load room")

    raise TypeError(f"Unhandled lookup result: {result!r}")
