# cleanup/policy.py
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from ..database import ROOMS_TABLE
from ..rooms.models import PURGEABLE_STATUSES, RoomStatus

logger = logging.getLogger(__name__)

INACTIVITY_THRESHOLD = timedelta(hours=24)
RETENTION_PERIOD = timedelta(days=7)


@dataclass(frozen=True)
class CleanupReport:
    marked_inactive: int
    deleted: int
    timestamp: datetime


class RoomLifecyclePolicy:
    """
    Ages out idle rooms and purges old ended ones.

    The two steps are independent: a database error in one is logged and
    counted as zero, and the other still runs. Nothing is retried and no
    transaction spans the steps; re-running converges because both filters
    stop matching once applied.
    """

    def __init__(
        self,
        supabase: Client,
        inactivity_threshold: timedelta = INACTIVITY_THRESHOLD,
        retention_period: timedelta = RETENTION_PERIOD,
    ):
        self.supabase = supabase
        self.inactivity_threshold = inactivity_threshold
        self.retention_period = retention_period

    def deactivate_idle_rooms(self, now: datetime) -> List[Dict]:
        """Mark active rooms with no activity since the threshold as inactive"""
        idle_since = (now - self.inactivity_threshold).isoformat()
        result = self.supabase.table(ROOMS_TABLE) \
            .update({
                "status": RoomStatus.INACTIVE.value,
                "ended_at": now.isoformat(),
            }) \
            .eq("status", RoomStatus.ACTIVE.value) \
            .lt("last_activity", idle_since) \
            .execute()
        return result.data or []

    def purge_ended_rooms(self, now: datetime) -> List[Dict]:
        """Delete inactive/ended rooms that ended, or were created, before retention"""
        cutoff = (now - self.retention_period).isoformat()
        result = self.supabase.table(ROOMS_TABLE) \
            .delete() \
            .in_("status", [s.value for s in PURGEABLE_STATUSES]) \
            .or_(f"ended_at.lt.{cutoff},created_at.lt.{cutoff}") \
            .execute()
        return result.data or []

    def run(self, now: Optional[datetime] = None) -> CleanupReport:
        if now is None:
            now = datetime.now(timezone.utc)

        marked_inactive = 0
        try:
            marked_inactive = len(self.deactivate_idle_rooms(now))
            logger.info(f"Marked {marked_inactive} rooms as inactive")
        except (APIError, httpx.HTTPError) as e:
            logger.error(f"Error marking rooms inactive: {e}")

        deleted = 0
        try:
            deleted = len(self.purge_ended_rooms(now))
            logger.info(f"Deleted {deleted} old rooms")
        except (APIError, httpx.HTTPError) as e:
            logger.error(f"Error deleting old rooms: {e}")

        return CleanupReport(
            marked_inactive=marked_inactive,
            deleted=deleted,
            timestamp=datetime.now(timezone.utc),
        )
