"""
JWT Transformer

Decodes the header and payload of a JSON Web Token and interprets its
``exp``/``iat`` claims. Signatures are never verified.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from ..codec import decode_base64url_text
from ..detector import loads_strict
from ..models import DetectedType


@dataclass(frozen=True)
class JwtPayload:
    header: Any
    payload: Any
    signature: str
    is_expired: Optional[bool] = None
    expires_at: Optional[datetime] = None
    issued_at: Optional[datetime] = None


class JwtTransformer:
    """Parses JSON Web Tokens."""

    @staticmethod
    def can_handle(detected_type: DetectedType) -> bool:
        return detected_type is DetectedType.JWT

    @staticmethod
    def convert(raw: str, now_ms: Optional[float] = None) -> Optional[JwtPayload]:
        return JwtTransformer.parse(raw, now_ms)

    @staticmethod
    def parse(token: str, now_ms: Optional[float] = None) -> Optional[JwtPayload]:
        """
        Decode a JWT.

        Args:
            token: ``header.payload.signature`` in base64url.
            now_ms: Reference time for the expiry check. Defaults to the
                current wall clock.

        Returns:
            The decoded token, or ``None`` if it does not have exactly three
            segments or the header or payload is not base64url-encoded JSON.
            ``is_expired`` is only set when the payload has an ``exp`` claim.
        """
        parts = token.strip().split(".")
        if len(parts) != 3:
            return None

        try:
            header = loads_strict(decode_base64url_text(parts[0]))
            payload = loads_strict(decode_base64url_text(parts[1]))
        except (ValueError, RecursionError):
            return None

        claims = payload if isinstance(payload, dict) else {}
        exp = _numeric_claim(claims, "exp")
        iat = _numeric_claim(claims, "iat")

        is_expired = None
        if exp is not None:
            if now_ms is None:
                now_ms = time.time() * 1000
            is_expired = now_ms > exp * 1000

        return JwtPayload(
            header=header,
            payload=payload,
            signature=parts[2],
            is_expired=is_expired,
            expires_at=_to_datetime(exp),
            issued_at=_to_datetime(iat),
        )


def _numeric_claim(claims: dict, name: str) -> Optional[float]:
    value = claims.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
        return None
    return value


def _to_datetime(seconds: Optional[float]) -> Optional[datetime]:
    if seconds is None:
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
