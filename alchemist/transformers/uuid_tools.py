"""
UUID Transformer

Generates random version 4 UUIDs and reports the version and variant of an
existing one.
"""

import random
import re
from dataclasses import dataclass
from typing import Optional

from ..models import DetectedType


@dataclass(frozen=True)
class UuidInfo:
    uuid: str
    version: int
    variant: str  # NCS, RFC 4122, Microsoft, Future or Unknown


TEMPLATE = "xxxxxxxx-xxxx-4xxx-yxxx-xxxxxxxxxxxx"

_CANONICAL = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-([0-9a-f])[0-9a-f]{3}-([0-9a-f])[0-9a-f]{3}-[0-9a-f]{12}$"
)


class UuidTransformer:
    """UUID generation and inspection."""

    @staticmethod
    def can_handle(detected_type: DetectedType) -> bool:
        return detected_type is DetectedType.UUID

    @staticmethod
    def convert(raw: str) -> Optional[UuidInfo]:
        return UuidTransformer.parse(raw)

    @staticmethod
    def generate(rng: Optional[random.Random] = None) -> str:
        """
        Generate a random version 4 UUID.

        Every ``x`` in the template gets a random hex digit; ``y`` is forced
        into ``8``-``b`` so the variant is RFC 4122.

        Args:
            rng: Source of randomness. Does not need to be cryptographic.
        """
        rng = rng or random
        digits = []
        for c in TEMPLATE:
            if c == "x":
                digits.append(format(rng.randrange(16), "x"))
            elif c == "y":
                digits.append(format(rng.randrange(4) | 0x8, "x"))
            else:
                digits.append(c)
        return "".join(digits)

    @staticmethod
    def parse(text: str) -> Optional[UuidInfo]:
        """
        Read the version and variant nibbles of a canonical UUID.

        Returns:
            The UUID info, or ``None`` if ``text`` is not 8-4-4-4-12 hex.
        """
        cleaned = text.strip().lower()
        match = _CANONICAL.match(cleaned)
        if not match:
            return None

        version = int(match.group(1), 16)
        variant_nibble = int(match.group(2), 16)

        return UuidInfo(
            uuid=cleaned,
            version=version,
            variant=_variant_name(variant_nibble),
        )


def _variant_name(nibble: int) -> str:
    if nibble & 0x8 == 0:
        return "NCS"
    if nibble & 0xC == 0x8:
        return "RFC 4122"
    if nibble & 0xE == 0xC:
        return "Microsoft"
    if nibble & 0xE == 0xE:
        return "Future"
    return "Unknown"
