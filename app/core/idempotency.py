import json
from typing import Any, Optional, Tuple
from redis.asyncio import Redis
from fastapi import Request

IDEMPOTENCY_HEADER = "X-Idempotency-Key"


def idempotency_redis_key(scope: str, idem_key: str) -> str:
    return f"idempotency:{scope}:{idem_key}"


async def check_idempotency(request: Request, redis: Redis, scope: str) -> Tuple[Optional[str], Optional[Any], bool]:
    """
    Look up a previous response for the request's idempotency key.

    Requests without the header are never deduplicated and never touch redis.
    """
    idem_key = request.headers.get(IDEMPOTENCY_HEADER)
    if not idem_key:
        return None, None, False
    cached = await redis.get(idempotency_redis_key(scope, idem_key))
    if cached:
        return idem_key, json.loads(cached), True
    return idem_key, None, False


async def save_idempotent_response(redis: Redis, scope: str, idem_key: Optional[str], response: dict, ttl: int) -> None:
    if not idem_key:
        return
    await redis.set(idempotency_redis_key(scope, idem_key), json.dumps(response), ex=ttl)
