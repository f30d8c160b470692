"""
Redis connection setup using redis-py async client.

The same client carries the matching bus: the inbound request stream
is read through a consumer group and replies are appended to the
outbound stream. The connection pool makes it safe to share between
concurrently running handlers.
"""

import redis.asyncio as aioredis

from question_service.config import settings

redis = aioredis.from_url(
    settings.REDIS_URL,
    decode_responses=True,
    ssl=settings.REDIS_SSL,
)
