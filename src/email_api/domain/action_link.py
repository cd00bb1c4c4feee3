"""Detection of provider-issued action links.

An identity provider (Firebase Auth, for instance) can hand the caller a
complete verification link that already carries a one-time code. Such links
are relayed as-is instead of minting a local token.
"""

from __future__ import annotations

from typing import Iterable, Optional
from urllib.parse import parse_qs, urlsplit

DEFAULT_CODE_PARAMS = ("oobCode",)
DEFAULT_VERIFY_MODES = ("verifyEmail",)


class ActionLinkRecognizer:
    """Predicate deciding whether a callback URL is already a complete action link."""

    def __init__(
        self,
        trusted_hosts: Iterable[str] = (),
        code_params: Iterable[str] = DEFAULT_CODE_PARAMS,
        mode_param: str = "mode",
        verify_modes: Iterable[str] = DEFAULT_VERIFY_MODES,
    ):
        self.trusted_hosts = tuple(h.lower().strip(".") for h in trusted_hosts if h)
        self.code_params = tuple(code_params)
        self.mode_param = mode_param
        self.verify_modes = tuple(verify_modes)

    def __call__(self, url: Optional[str]) -> bool:
        return self.is_action_link(url)

    def is_action_link(self, url: Optional[str]) -> bool:
        if not url:
            return False
        parts = urlsplit(url.strip())
        query = parse_qs(parts.query, keep_blank_values=True)
        if any(value.strip() for param in self.code_params for value in query.get(param, [])):
            return True
        if any(mode in self.verify_modes for mode in query.get(self.mode_param, [])):
            return True
        return self._is_trusted_host(parts.hostname)

    def _is_trusted_host(self, hostname: Optional[str]) -> bool:
        if not hostname:
            return False
        host = hostname.lower()
        return any(host == trusted or host.endswith("." + trusted) for trusted in self.trusted_hosts)


__all__ = ["ActionLinkRecognizer"]
