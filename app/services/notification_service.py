"""Real-time push of client notifications over Redis pub/sub."""

import json
import logging
from datetime import datetime

import redis.asyncio as redis

from app.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


def channel_for(client_id: int) -> str:
    return f"notifications:client:{client_id}"


def _get_client() -> redis.Redis:
    return redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)


async def send(client_id: int, message: str) -> bool:
    """Publish ``message`` to the client's channel. Delivery is best-effort."""
    payload = json.dumps(
        {
            "client_id": client_id,
            "message": message,
            "sent_at": datetime.utcnow().isoformat(),
        }
    )
    client = _get_client()
    try:
        receivers = await client.publish(channel_for(client_id), payload)
        logger.info("Pushed notification to client %s (%s receivers)", client_id, receivers)
        return True
    except redis.RedisError:
        logger.warning("Notification push to client %s failed", client_id, exc_info=True)
        return False
    finally:
        await client.aclose()
