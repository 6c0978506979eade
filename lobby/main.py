# lobby/main.py
import logging
from typing import Optional

import httpx
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from postgrest.exceptions import APIError
from supabase import Client

from .cleanup.routes import router as cleanup_router
from .config import ConfigError, Settings, load_settings, setup_logging
from .database import ROOMS_TABLE, create_supabase, get_supabase
from .errors import PageError, page_error_handler
from .rooms.routes import router as rooms_router

logger = logging.getLogger(__name__)

SERVICE_NAME = "lobby-rooms"


def create_app(settings: Optional[Settings] = None, supabase: Optional[Client] = None) -> FastAPI:
    """
    Build the app around one Supabase client.

    Settings are loaded from the environment when not given, so missing
    credentials raise ConfigError here, before any app state exists.
    """
    if settings is None:
        settings = load_settings()
    if supabase is None:
        supabase = create_supabase(settings)

    app = FastAPI(title="Lobby Rooms")
    app.state.settings = settings
    app.state.supabase = supabase

    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.add_exception_handler(PageError, page_error_handler)

    app.include_router(rooms_router)
    app.include_router(cleanup_router)

    @app.get("/health")
    def health(supabase: Client = Depends(get_supabase)):
        """Health check endpoint"""
        try:
            supabase.table(ROOMS_TABLE).select("id").limit(1).execute()
            return {
                "status": "healthy",
                "service": SERVICE_NAME,
                "database": "connected",
            }
        except (APIError, httpx.HTTPError) as e:
            logger.warning(f"Health check failed: {e}")
            return {
                "status": "degraded",
                "service": SERVICE_NAME,
                "database": "disconnected",
                "error": str(e)[:100],
            }

    return app


if __name__ == "__main__":
    import sys

    import uvicorn

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    setup_logging(settings.log_level)
    print("=" * 50)
    print("Lobby Rooms Server Starting...")
    print(f"Supabase URL: {settings.supabase_url[:30]}...")
    print(f"Cleanup trigger auth: {'on' if settings.jwt_secret else 'off'}")
    print("=" * 50)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
