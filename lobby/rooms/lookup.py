# rooms/lookup.py
import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

import httpx
from postgrest.exceptions import APIError
from pydantic import ValidationError
from supabase import Client

from ..database import ROOMS_TABLE
from .models import RoomSummary

logger = logging.getLogger(__name__)

ROOM_CODE_PATTERN = re.compile(r"^\d{4}$", re.ASCII)


@dataclass(frozen=True)
class RoomFound:
    room: RoomSummary


@dataclass(frozen=True)
class InvalidRoomCode:
    code: Optional[str]


@dataclass(frozen=True)
class RoomNotFound:
    code: str


@dataclass(frozen=True)
class LookupFailed:
    code: str
    error: Exception


LookupResult = Union[RoomFound, InvalidRoomCode, RoomNotFound, LookupFailed]


def is_valid_room_code(code: Optional[str]) -> bool:
    # fullmatch so a trailing newline is not accepted
    return bool(code) and ROOM_CODE_PATTERN.fullmatch(code) is not None


def lookup_room(supabase: Client, code: Optional[str]) -> LookupResult:
    """Fetch the room joined by `code` without raising for expected outcomes"""
    if not is_valid_room_code(code):
        return InvalidRoomCode(code)

    try:
        result = supabase.table(ROOMS_TABLE) \
            .select("id, title, created_by") \
            .eq("id", code) \
            .limit(1) \
            .execute()
    except (APIError, httpx.HTTPError) as e:
        logger.error(f"Room lookup failed for {code}: {e}")
        return LookupFailed(code, e)

    if not result.data:
        return RoomNotFound(code)

    try:
        room = RoomSummary.model_validate(result.data[0])
    except ValidationError as e:
        logger.error(f"Room {code} has an unreadable row: {e}")
        return LookupFailed(code, e)

    return RoomFound(room)
