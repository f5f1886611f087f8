import base64
import hashlib
import hmac
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from smart_account.host.domain.address import ZERO_ADDRESS, normalize_address

DEFAULT_TTL_SECONDS = 300


class RelayAuthError(Exception):
    pass


def _b64url_decode(value: str) -> bytes:
    padding = "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode((value + padding).encode("ascii"))


def _b64url_encode(value: bytes) -> str:
    return base64.urlsafe_b64encode(value).decode("ascii").rstrip("=")


@dataclass(frozen=True)
class RelayClaims:
    caller: str
    expires_at: int
    raw: Dict[str, Any]


class RelayTokenVerifier:
    """
    Short-lived HS256 bearer tokens naming the address a request is made on behalf of.

    The token only says who is calling; what that caller may do is decided by the
    account's guards. Tokens must carry an expiry, and a lifetime longer than
    `max_ttl_seconds` is refused.
    """

    def __init__(self, secret: str, issuer: str = "", leeway_seconds: int = 0, max_ttl_seconds: int = 3600):
        self.secret = secret.encode("utf-8")
        self.issuer = issuer
        self.leeway_seconds = leeway_seconds
        self.max_ttl_seconds = max_ttl_seconds

    def _sign(self, signing_input: bytes) -> bytes:
        return hmac.new(self.secret, signing_input, hashlib.sha256).digest()

    def verify(self, token: str) -> RelayClaims:
        parts = token.split(".")
        if len(parts) != 3:
            raise RelayAuthError("Malformed token")
        header_b64, payload_b64, signature_b64 = parts

        try:
            header = json.loads(_b64url_decode(header_b64))
            provided_sig = _b64url_decode(signature_b64)
            payload = json.loads(_b64url_decode(payload_b64))
        except ValueError:
            raise RelayAuthError("Malformed token")
        if not isinstance(header, dict) or not isinstance(payload, dict):
            raise RelayAuthError("Malformed token")
        if header.get("alg") != "HS256":
            raise RelayAuthError("Unsupported algorithm")
        if not hmac.compare_digest(self._sign(f"{header_b64}.{payload_b64}".encode("ascii")), provided_sig):
            raise RelayAuthError("Invalid signature")

        try:
            expires_at = int(payload["exp"])
            issued_at = int(payload.get("iat", expires_at))
        except (KeyError, TypeError, ValueError):
            raise RelayAuthError("Token must carry an expiry")
        now = int(datetime.now(timezone.utc).timestamp())
        if now > expires_at + self.leeway_seconds:
            raise RelayAuthError("Token expired")
        if expires_at - issued_at > self.max_ttl_seconds:
            raise RelayAuthError("Token lifetime too long")
        if self.issuer and payload.get("iss") != self.issuer:
            raise RelayAuthError("Invalid issuer")

        try:
            caller = normalize_address(payload.get("sub"))
        except ValueError:
            raise RelayAuthError("Subject is not an address")
        if caller == ZERO_ADDRESS:
            raise RelayAuthError("Zero address cannot call")
        return RelayClaims(caller=caller, expires_at=expires_at, raw=payload)

    def issue(self, caller: str, ttl_seconds: int = DEFAULT_TTL_SECONDS, issued_at: Optional[int] = None) -> str:
        """Token for `caller`, valid for `ttl_seconds` from `issued_at` (now by default)."""
        issued_at = int(datetime.now(timezone.utc).timestamp()) if issued_at is None else issued_at
        claims: Dict[str, Any] = {"sub": caller, "iat": issued_at, "exp": issued_at + ttl_seconds}
        if self.issuer:
            claims["iss"] = self.issuer
        header_b64 = _b64url_encode(json.dumps({"alg": "HS256", "typ": "JWT"}, separators=(",", ":")).encode("utf-8"))
        payload_b64 = _b64url_encode(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
        sig_b64 = _b64url_encode(self._sign(f"{header_b64}.{payload_b64}".encode("ascii")))
        return f"{header_b64}.{payload_b64}.{sig_b64}"
