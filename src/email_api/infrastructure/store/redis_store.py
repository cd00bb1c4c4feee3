"""Redis-backed token store.

Records are kept as JSON documents under ``verification:<token>``. Redis' own
key expiry only bounds memory: it fires ``retention_seconds`` after the
record's logical expiry, so consume() can still observe and report expired
tokens in between.
"""

import json
import math
from datetime import datetime
from typing import Any, Callable, Optional

import redis.asyncio as redis_asyncio
from redis.exceptions import WatchError

from ...domain.verification import VerificationRecord, utcnow
from ...logging_config import get_logger, token_hint

logger = get_logger(__name__)

KEY_PREFIX = "verification:"


class RedisTokenStore:
    def __init__(
        self,
        client: Any,
        retention_seconds: int = 86400,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.client = client
        self.retention_seconds = retention_seconds
        # must be the clock the service stamps expires_at with
        self.clock = clock

    @classmethod
    def from_url(
        cls,
        url: str,
        retention_seconds: int = 86400,
        clock: Callable[[], datetime] = utcnow,
    ) -> "RedisTokenStore":
        client = redis_asyncio.from_url(url, decode_responses=False)
        return cls(client, retention_seconds=retention_seconds, clock=clock)

    @staticmethod
    def _key(token: str) -> str:
        return f"{KEY_PREFIX}{token}"

    def _key_ttl(self, record: VerificationRecord) -> int:
        remaining = (record.expires_at - self.clock()).total_seconds()
        return max(1, math.ceil(remaining) + self.retention_seconds)

    @staticmethod
    def _decode(token: str, raw: Any) -> Optional[VerificationRecord]:
        if isinstance(raw, bytes):
            raw = raw.decode()
        try:
            return VerificationRecord.from_dict(json.loads(raw))
        except (json.JSONDecodeError, KeyError, ValueError) as e:
            logger.warning("redis_record_decode_failed", token=token_hint(token), error=str(e))
            return None

    async def put(self, token: str, record: VerificationRecord) -> None:
        text = json.dumps(record.to_dict())
        await self.client.set(self._key(token), text, ex=self._key_ttl(record))

    async def get(self, token: str) -> Optional[VerificationRecord]:
        raw = await self.client.get(self._key(token))
        if raw is None:
            return None
        return self._decode(token, raw)

    async def mark_verified(self, token: str) -> bool:
        """Flip an unverified record to verified. False when absent or already verified.

        Runs as WATCH/MULTI so concurrent callers cannot both flip the same
        token; the key keeps its current expiry.
        """
        key = self._key(token)
        async with self.client.pipeline(transaction=True) as pipe:
            while True:
                try:
                    await pipe.watch(key)
                    raw = await pipe.get(key)
                    record = self._decode(token, raw) if raw is not None else None
                    if record is None or record.verified:
                        await pipe.unwatch()
                        return False
                    record.mark_verified()
                    pipe.multi()
                    pipe.set(key, json.dumps(record.to_dict()), keepttl=True)
                    await pipe.execute()
                    return True
                except WatchError:
                    logger.debug("redis_mark_verified_retry", token=token_hint(token))
                    continue

    async def delete(self, token: str) -> bool:
        removed = await self.client.delete(self._key(token))
        return bool(removed)

    async def size(self) -> int:
        count = 0
        async for _ in self.client.scan_iter(match=f"{KEY_PREFIX}*", count=500):
            count += 1
        return count

    async def close(self) -> None:
        await self.client.aclose()
