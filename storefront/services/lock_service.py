# storefront/services/lock_service.py
import threading
import uuid
from contextlib import contextmanager
from typing import Iterator

import redis
from tenacity import Retrying, RetryError, stop_after_delay, wait_fixed, retry_if_result

from storefront.domain.errors import ConflictError
from storefront.utils.retry import redis_retry
from storefront.utils.settings import CART_LOCK_TIMEOUT_SECONDS, CART_LOCK_TTL_SECONDS, REDIS_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua atomowo, nie mozna wcisnac sie miedzy GET a DEL


class LocalLockService:
    """
    -lock per koszyk w obrebie jednego procesu
    -threading.Lock z timeoutem, brak locka = ConflictError
    """

    def __init__(self, timeout: float = CART_LOCK_TIMEOUT_SECONDS):
        self.timeout = timeout
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def _lock_for(self, cart_id: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(cart_id, threading.Lock())

    @contextmanager
    def cart_lock(self, cart_id: str) -> Iterator[None]:
        lock = self._lock_for(cart_id)
        if not lock.acquire(timeout=self.timeout):
            raise ConflictError(f"Cart {cart_id} is being modified by another request")
        try:
            yield
        finally:
            lock.release()


class RedisLockService:
    """
    -rezerwacja koszyka (lock) w redisie, wspolna dla wielu procesow
    -zwalnianie locka tylko przez wlasciciela (token)
    -atomowosc przy pomocy lua
    """

    def __init__(
        self,
        client: redis.Redis | None = None,
        url: str | None = None,
        ttl: int = CART_LOCK_TTL_SECONDS,
        timeout: float = CART_LOCK_TIMEOUT_SECONDS,
        poll_interval: float = 0.05,
    ):
        self.redis = client or redis.Redis.from_url(url or REDIS_URL, decode_responses=True)
        self.ttl = ttl
        self.timeout = timeout
        self.poll_interval = poll_interval

    @staticmethod
    def _key(cart_id: str) -> str:
        return f"cart:{cart_id}:lock"

    @redis_retry()
    def acquire_cart_lock(self, cart_id: str, token: str) -> bool:
        key = self._key(cart_id)
        logger.debug(f"Acquire lock {key}")
        #SET cart:abc:lock "token" NX EX 30
        return bool(self.redis.set(name=key, value=token, nx=True, ex=self.ttl))

    @redis_retry()
    def release_cart_lock(self, cart_id: str, token: str) -> bool:
        key = self._key(cart_id)
        logger.debug(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)

    @contextmanager
    def cart_lock(self, cart_id: str) -> Iterator[None]:
        token = uuid.uuid4().hex
        retrying = Retrying(
            stop=stop_after_delay(self.timeout),
            wait=wait_fixed(self.poll_interval),
            retry=retry_if_result(lambda acquired: not acquired),
        )
        try:
            retrying(self.acquire_cart_lock, cart_id, token)
        except RetryError:
            raise ConflictError(f"Cart {cart_id} is being modified by another request")
        try:
            yield
        finally:
            if not self.release_cart_lock(cart_id, token):
                logger.warning(f"Lock for cart {cart_id} expired before release")


def build_lock_service(redis_url: str | None = REDIS_URL):
    if redis_url:
        logger.info("Using Redis cart locks")
        return RedisLockService(url=redis_url)
    return LocalLockService()
