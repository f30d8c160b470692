"""
Standalone matching listener — answers matching requests without the HTTP app.

Usage:
    python scripts/run_listener.py

Runs until SIGINT/SIGTERM, then waits for in-flight requests to reply.
"""

import asyncio
import logging
import signal

from question_service.config import settings
from question_service.matching.listener import MatchRequestListener
from question_service.redis_client import redis


async def main():
    """Run the listener until a shutdown signal arrives."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    listener = MatchRequestListener(redis_client=redis)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, listener.request_stop)

    try:
        await listener.run()
    finally:
        await redis.aclose()


if __name__ == "__main__":
    asyncio.run(main())
