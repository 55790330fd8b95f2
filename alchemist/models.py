"""
Core detection data structures shared by the detector and the engine.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class DetectedType(Enum):
    """Semantic types an input can be classified as."""
    JSON = "json"
    HTML = "html"
    COLOR = "color"
    TIMESTAMP = "timestamp"
    CSS = "css"
    JAVASCRIPT = "javascript"
    TEXT = "text"
    IMAGE = "image"
    BASE64 = "base64"
    URL = "url"
    JWT = "jwt"
    NUMBER = "number"
    UUID = "uuid"


@dataclass(frozen=True)
class JwtParts:
    """Decoded (but unverified) segments of a JSON Web Token."""
    header: dict
    payload: Any
    signature: str


@dataclass(frozen=True)
class ParsedNumber:
    """A prefixed integer literal and the base it was written in."""
    base: int  # 2, 8 or 16
    value: int


@dataclass(frozen=True)
class DetectionResult:
    """
    Outcome of classifying a piece of raw input.

    The ``parsed`` payload depends on ``type``:

    - ``json``: the decoded JSON value
    - ``jwt``: a :class:`JwtParts`
    - ``timestamp``: epoch milliseconds as ``int``
    - ``number``: a :class:`ParsedNumber`
    - ``base64`` / ``url``: the decoded text
    - anything else: ``None``
    """
    type: DetectedType
    confidence: float  # 0.0 to 1.0, informational only
    raw: str
    parsed: Optional[Any] = None

    def __post_init__(self):
        if not 0 <= self.confidence <= 1:
            raise ValueError(f"Confidence must be between 0 and 1, got {self.confidence}")
