"""
Per-employee booking locks.

Serialises the validate-then-insert sequence for one employee so two
concurrent requests cannot both pass the conflict check. Uses a Redis lock
when REDIS_URL is configured (multiple workers), otherwise a process-local
lock (single worker / development).
"""

import logging
from contextlib import contextmanager
from threading import Lock
from typing import Optional

import redis

from .config import BOOKING_LOCK_TIMEOUT_SECONDS, REDIS_URL
from .domain.scheduling.exceptions import TimeConflict

logger = logging.getLogger(__name__)

redis_client: Optional[redis.Redis] = None

# Process-local locks, one per employee
memory_locks: dict[int, Lock] = {}
memory_locks_guard = Lock()


def get_redis_client() -> redis.Redis:
    """Get or create the Redis client used for distributed locks"""
    global redis_client

    if redis_client is None:
        # Mask password in URL for logging
        if "@" in REDIS_URL:
            url_parts = REDIS_URL.split("@")
            protocol = url_parts[0].split(":")[0]
            masked_url = f"{protocol}:****@{url_parts[1]}"
        else:
            masked_url = REDIS_URL
        logger.info(f"Connecting to Redis for booking locks: {masked_url}")

        redis_client = redis.from_url(
            REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=BOOKING_LOCK_TIMEOUT_SECONDS + 5,
            retry_on_timeout=True,
            health_check_interval=30,
        )

    return redis_client


def _memory_lock(employee_id: int) -> Lock:
    with memory_locks_guard:
        lock = memory_locks.get(employee_id)
        if lock is None:
            lock = Lock()
            memory_locks[employee_id] = lock
        return lock


def lock_name(employee_id: int) -> str:
    return f"booking-lock:employee:{employee_id}"


@contextmanager
def employee_booking_lock(employee_id: int, timeout: float = BOOKING_LOCK_TIMEOUT_SECONDS):
    """
    Hold the booking lock for an employee for the duration of the block.

    Raises TimeConflict when the lock cannot be acquired within ``timeout``
    seconds, meaning another booking for the same employee is in progress.
    """
    if REDIS_URL:
        lock = get_redis_client().lock(
            lock_name(employee_id), timeout=timeout, blocking_timeout=timeout
        )
        acquired = lock.acquire()
    else:
        lock = _memory_lock(employee_id)
        acquired = lock.acquire(timeout=timeout)

    if not acquired:
        logger.warning(f"Booking lock busy for employee {employee_id}")
        raise TimeConflict("Another booking for this employee is being processed, please retry")

    try:
        yield
    finally:
        try:
            lock.release()
        except redis.exceptions.LockError as e:
            # Lock expired before release - the booking itself already committed or failed
            logger.warning(f"Booking lock for employee {employee_id} expired before release: {e}")
