# blueprint/tasks/__init__.py
"""Dramatiq task definitions for push and pull runs."""
import dramatiq
from dramatiq.brokers.redis import RedisBroker
from blueprint.config import get_settings

settings = get_settings()

# Configure Redis broker
redis_broker = RedisBroker(url=settings.redis_url)
dramatiq.set_broker(redis_broker)

from .integration import push_msel_task, pull_msel_task

__all__ = [
    'push_msel_task',
    'pull_msel_task',
]
