"""
Poker Study Backend — Server Bootstrap
=======================================

What:  `python -m pokerstudy` entry point.
How:   1. Configure logging
       2. Refuse to start without DATABASE_URL
       3. Confirm the database is reachable (bounded retry)
       4. Serve the app on HOST:PORT (default 0.0.0.0:5000)

Any failure in steps 2-3 is logged and ends the process with status 1, so
an orchestrator sees the failed start instead of a server that answers
every request with 500.
"""

import asyncio
import logging
import sys

import uvicorn

from pokerstudy.config import settings
from pokerstudy.database import dispose_engine, verify_connection
from pokerstudy.main import app, setup_logging

logger = logging.getLogger("pokerstudy")


async def check_database() -> None:
    try:
        await verify_connection()
    finally:
        # The server creates its own pool inside its event loop
        await dispose_engine()


def main() -> int:
    setup_logging()

    try:
        settings.validate_required()
    except ValueError as e:
        logger.error("%s", e)
        return 1

    try:
        asyncio.run(check_database())
    except Exception as e:
        logger.error("Could not connect to the database: %s", e)
        return 1

    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
