import asyncio
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ...domain.verification import VerificationRecord


class InMemoryTokenStore:
    """Process-wide token store. State is lost on restart."""

    def __init__(self):
        self.store: dict[str, VerificationRecord] = {}
        # single coarse lock; per-token locking is unnecessary at this scale
        self.lock = asyncio.Lock()

    async def put(self, token: str, record: VerificationRecord) -> None:
        async with self.lock:
            self.store[token] = replace(record)

    async def get(self, token: str) -> Optional[VerificationRecord]:
        async with self.lock:
            record = self.store.get(token)
            # hand out a copy so callers go through put() to change state
            return replace(record) if record is not None else None

    async def delete(self, token: str) -> bool:
        async with self.lock:
            return self.store.pop(token, None) is not None

    async def size(self) -> int:
        async with self.lock:
            return len(self.store)

    async def purge_expired(self, now: datetime) -> int:
        """Drop every record whose expiry has passed. Returns the number removed."""
        async with self.lock:
            expired = [t for t, r in self.store.items() if r.is_expired(now)]
            for token in expired:
                del self.store[token]
            return len(expired)

    async def mark_verified(self, token: str) -> bool:
        """Flip an unverified record to verified. False when absent or already verified."""
        async with self.lock:
            record = self.store.get(token)
            if record is None or record.verified:
                return False
            record.mark_verified()
            return True
