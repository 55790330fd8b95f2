"""
Number Transformer

Base conversion for prefixed integer literals and byte-size formatting.
"""

import re
from dataclasses import dataclass
from typing import Optional

from ..models import DetectedType


@dataclass(frozen=True)
class NumberFormats:
    decimal: str
    hex: str
    binary: str
    octal: str


@dataclass(frozen=True)
class ByteFormats:
    bytes: str
    kb: str
    mb: str
    gb: str


KIB = 1024
MIB = 1024 * 1024
GIB = 1024 * 1024 * 1024


class NumberTransformer:
    """Converts integers between bases and byte counts between units."""

    # Leading digits per base; trailing garbage is ignored like parseInt.
    PREFIXES = {
        "0x": (16, re.compile(r"[0-9a-fA-F]+")),
        "0b": (2, re.compile(r"[01]+")),
        "0o": (8, re.compile(r"[0-7]+")),
    }
    DECIMAL = re.compile(r"[0-9]+")

    @staticmethod
    def can_handle(detected_type: DetectedType) -> bool:
        return detected_type is DetectedType.NUMBER

    @staticmethod
    def convert(raw: str) -> Optional[NumberFormats]:
        value = NumberTransformer.parse(raw)
        if value is None:
            return None
        return NumberTransformer.to_all_bases(value)

    @staticmethod
    def to_all_bases(value: int) -> NumberFormats:
        """
        Render an integer in decimal, hex, binary and octal.

        Hex digits are uppercase after a lowercase ``0x``; binary and octal
        use ``0b`` and ``0o``. A negative sign goes before the prefix.
        """
        sign = "-" if value < 0 else ""
        magnitude = abs(value)
        return NumberFormats(
            decimal=str(value),
            hex=f"{sign}0x{magnitude:X}",
            binary=f"{sign}0b{magnitude:b}",
            octal=f"{sign}0o{magnitude:o}",
        )

    @staticmethod
    def parse(text: str) -> Optional[int]:
        """
        Parse an integer written with a ``0x``/``0b``/``0o`` prefix or in decimal.

        Prefixes are case-insensitive and may follow a sign.

        Returns:
            The value, or ``None`` if no digits valid for the base follow.
        """
        trimmed = text.strip()
        sign = 1
        if trimmed[:1] in ("-", "+"):
            sign = -1 if trimmed[0] == "-" else 1
            trimmed = trimmed[1:]

        base, digits = 10, NumberTransformer.DECIMAL
        prefix = trimmed[:2].lower()
        if prefix in NumberTransformer.PREFIXES:
            base, digits = NumberTransformer.PREFIXES[prefix]
            trimmed = trimmed[2:]

        match = digits.match(trimmed)
        if not match:
            return None
        return sign * int(match.group(0), base)

    @staticmethod
    def bytes_to_all_units(size: int) -> ByteFormats:
        return ByteFormats(
            bytes=f"{size:,} B",
            kb=f"{size / KIB:.2f} KB",
            mb=f"{size / MIB:.2f} MB",
            gb=f"{size / GIB:.4f} GB",
        )

    @staticmethod
    def format_file_size(size: int) -> str:
        """Short human-readable size: ``512 B``, ``1.5 KB``, ``2.00 MB``."""
        if size < KIB:
            return f"{size} B"
        if size < MIB:
            return f"{size / KIB:.1f} KB"
        return f"{size / MIB:.2f} MB"
