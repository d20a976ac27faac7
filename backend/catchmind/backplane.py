"""Redis backplane for Socket.IO fan-out across server instances.

Flask-SocketIO publishes every room-scoped emit on a Redis pub/sub channel
when given a ``message_queue`` URL, and relays messages published by sibling
instances to the sockets held locally. Only events travel over the channel:
each room's state lives in the process that owns it, so the routing layer
must keep a room id pinned to one instance.
"""
from typing import Optional

import redis

PROBE_TIMEOUT_SEC = 2.0


def resolve_message_queue(app) -> Optional[str]:
    """Return the message queue URL to use, or None for single-instance mode."""
    url = app.config.get('REDIS_URL')
    if not url:
        app.logger.warning('REDIS_URL not set; cross-instance fan-out disabled, running single-instance')
        return None

    client = None
    try:
        client = redis.Redis.from_url(
            url,
            socket_connect_timeout=PROBE_TIMEOUT_SEC,
            socket_timeout=PROBE_TIMEOUT_SEC,
        )
        client.ping()
    except (redis.exceptions.RedisError, ValueError) as exc:
        app.logger.error(f"Redis backplane connection failed, running single-instance: {exc}")
        return None
    finally:
        if client is not None:
            client.close()

    app.logger.info(f"Redis backplane connected on channel {app.config.get('BACKPLANE_CHANNEL')!r}")
    return url
