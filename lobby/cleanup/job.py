# cleanup/job.py
"""
Run the room lifecycle policy once and exit.

Meant for cron or any other scheduler that can run a command:

    */15 * * * * lobby-cleanup

Schedulers that call the HTTP trigger instead can get a bearer token with
`lobby-cleanup --print-token` when SUPABASE_JWT_SECRET is set.
"""
import argparse
import logging
import sys

from ..auth.utils import create_access_token
from ..config import ConfigError, load_settings, setup_logging
from ..database import create_supabase
from .policy import RoomLifecyclePolicy

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lobby-cleanup", description="Run the room lifecycle policy once and exit.")
    parser.add_argument(
        "--print-token",
        action="store_true",
        help="print a short-lived token for POST /functions/cleanup-rooms and exit",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.print_token:
        if not settings.jwt_secret:
            print("ERROR: SUPABASE_JWT_SECRET is not set", file=sys.stderr)
            return 1
        print(create_access_token(settings.jwt_secret))
        return 0

    setup_logging(settings.log_level)

    try:
        report = RoomLifecyclePolicy(create_supabase(settings)).run()
    except Exception:
        logger.exception("Room cleanup failed")
        return 1

    logger.info(
        f"Cleanup finished at {report.timestamp.isoformat()}: "
        f"{report.marked_inactive} marked inactive, {report.deleted} deleted"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
