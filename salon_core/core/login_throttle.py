"""
Failed-Login Throttle

Counts failed logins per email in Redis and locks further attempts for a
window once the threshold is hit.

The counter is keyed by a hash of the normalized email and is kept for
unknown emails exactly like for real ones, so lock-out behaviour says
nothing about whether an account exists.

If Redis is unavailable the throttle is disabled (availability over
strict limiting) and every degraded call logs a warning.
"""
import hashlib
from functools import lru_cache
from typing import Optional

import redis

from salon_core.config import get_settings
from salon_core.core.exceptions import RateLimitExceeded
from salon_core.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)
settings = get_settings()


class LoginThrottle:

    def __init__(self, redis_client=None, max_attempts: Optional[int] = None,
                 lockout_seconds: Optional[int] = None):
        self.max_attempts = max_attempts or settings.LOGIN_MAX_FAILED_ATTEMPTS
        self.lockout_seconds = lockout_seconds or settings.LOGIN_LOCKOUT_SECONDS
        self.redis_client = redis_client
        self.redis_available = redis_client is not None

        if redis_client is None and settings.REDIS_URL:
            try:
                self.redis_client = redis.from_url(
                    settings.REDIS_URL,
                    decode_responses=True,
                    socket_connect_timeout=2
                )
                self.redis_client.ping()
                self.redis_available = True
                logger.info("Redis connection established for login throttling")
            except (redis.ConnectionError, redis.TimeoutError) as e:
                logger.error(f"Redis connection failed: {e}")
                self.redis_available = False

    @staticmethod
    def _key(email: str) -> str:
        digest = hashlib.sha256(email.strip().lower().encode("utf-8")).hexdigest()
        return f"login_failures:{digest}"

    def check(self, email: str) -> None:
        """Raise RateLimitExceeded while the email is locked out."""
        if not self.redis_available:
            logger.warning("Login throttling disabled - Redis unavailable")
            return

        key = self._key(email)
        try:
            failures = self.redis_client.get(key)
            if failures is not None and int(failures) >= self.max_attempts:
                ttl = self.redis_client.ttl(key)
                retry_after = ttl if ttl and ttl > 0 else self.lockout_seconds
                log_security_event("login_throttled", {"email_key": key}, logger)
                raise RateLimitExceeded(retry_after=retry_after)
        except redis.RedisError as e:
            logger.error(f"Redis error in login throttle: {e}")

    def record_failure(self, email: str) -> int:
        """Count one failed attempt; the window restarts with the first failure."""
        if not self.redis_available:
            return 0

        key = self._key(email)
        try:
            failures = self.redis_client.incr(key)
            if failures == 1:
                self.redis_client.expire(key, self.lockout_seconds)
            return failures
        except redis.RedisError as e:
            logger.error(f"Redis error in login throttle: {e}")
            return 0

    def reset(self, email: str) -> None:
        if not self.redis_available:
            return
        try:
            self.redis_client.delete(self._key(email))
        except redis.RedisError as e:
            logger.error(f"Redis error in login throttle: {e}")


@lru_cache()
def get_login_throttle() -> LoginThrottle:
    """Process-wide throttle (FastAPI dependency)."""
    return LoginThrottle()
