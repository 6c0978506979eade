# lobby/database.py
import logging

from fastapi import Request
from supabase import Client, create_client

from .config import Settings

logger = logging.getLogger(__name__)

ROOMS_TABLE = "programs"


def create_supabase(settings: Settings) -> Client:
    """Build the one Supabase client the process uses"""
    client = create_client(settings.supabase_url, settings.supabase_key)
    logger.info(f"✅ Supabase client ready: {settings.supabase_url[:30]}...")
    return client


def get_supabase(request: Request) -> Client:
    """
    FastAPI dependency returning the client attached by create_app

    Usage in routes:
        @router.get("/endpoint")
        async def endpoint(supabase: Client = Depends(get_supabase)):
            supabase.table(ROOMS_TABLE).select("id").execute()
    """
    return request.app.state.supabase
