from typing import Optional, Protocol

from ..domain.verification import VerificationRecord


class TokenStore(Protocol):
    """Protocol for the token -> verification record mapping.

    Implementations are plain keyed stores: no expiry or verification rules
    live here. Each operation is atomic with respect to the others, and
    mark_verified() is the only read-modify-write: it must flip an unverified
    record at most once even under concurrent callers.
    """

    async def put(self, token: str, record: VerificationRecord) -> None: ...

    async def get(self, token: str) -> Optional[VerificationRecord]: ...

    async def mark_verified(self, token: str) -> bool: ...

    async def delete(self, token: str) -> bool: ...

    async def size(self) -> int: ...
