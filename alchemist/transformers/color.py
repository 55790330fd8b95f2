"""
Color Transformer

Parses hex, rgb()/rgba() and hsl()/hsla() colors and renders every other
notation. RGB is the pivot: HSL input is converted to RGB on parse and HSL
output is always derived back from RGB.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional

from ..models import DetectedType


@dataclass(frozen=True)
class ColorRGB:
    """Channels are 0-255 integers (not clamped), alpha is 0-1."""
    r: int
    g: int
    b: int
    a: float = 1.0

    def __post_init__(self):
        for channel in (self.r, self.g, self.b):
            if isinstance(channel, bool) or not isinstance(channel, int):
                raise ValueError(f"Color channels must be integers, got {channel!r}")


@dataclass(frozen=True)
class ColorHSL:
    """Hue in degrees (0-360), saturation and lightness in percent (0-100).

    Components are kept unrounded so converting back to RGB is lossless;
    round them only for display.
    """
    h: float
    s: float
    l: float
    a: float = 1.0


@dataclass(frozen=True)
class ColorFormats:
    hex: str
    hex8: str
    rgb: str
    rgba: str
    hsl: str
    hsla: str
    tailwind: str
    complementary: str
    original: ColorRGB


class ColorTransformer:
    """Converts a single color between CSS notations."""

    PATTERNS = {
        "hex": re.compile(r"^#([A-Fa-f0-9]{3,8})$"),
        "rgb": re.compile(
            r"^rgba?\s*\(\s*([0-9]{1,3})\s*,\s*([0-9]{1,3})\s*,\s*([0-9]{1,3})\s*(?:,\s*([0-9.]+))?\s*\)$",
            re.IGNORECASE,
        ),
        "hsl": re.compile(
            r"^hsla?\s*\(\s*([0-9]{1,3})\s*,\s*([0-9]{1,3})%?\s*,\s*([0-9]{1,3})%?\s*(?:,\s*([0-9.]+))?\s*\)$",
            re.IGNORECASE,
        ),
    }

    # Simplified Tailwind palette; iteration order breaks distance ties.
    TAILWIND_COLORS = {
        "slate-50": (248, 250, 252),
        "slate-100": (241, 245, 249),
        "slate-200": (226, 232, 240),
        "slate-300": (203, 213, 225),
        "slate-400": (148, 163, 184),
        "slate-500": (100, 116, 139),
        "slate-600": (71, 85, 105),
        "slate-700": (51, 65, 85),
        "slate-800": (30, 41, 59),
        "slate-900": (15, 23, 42),
        "slate-950": (2, 6, 23),
        "red-500": (239, 68, 68),
        "orange-500": (249, 115, 22),
        "amber-400": (251, 191, 36),
        "amber-500": (245, 158, 11),
        "yellow-500": (234, 179, 8),
        "lime-500": (132, 204, 22),
        "green-500": (34, 197, 94),
        "emerald-500": (16, 185, 129),
        "teal-500": (20, 184, 166),
        "cyan-500": (6, 182, 212),
        "sky-500": (14, 165, 233),
        "blue-500": (59, 130, 246),
        "indigo-500": (99, 102, 241),
        "violet-500": (139, 92, 246),
        "purple-500": (168, 85, 247),
        "fuchsia-500": (217, 70, 239),
        "pink-500": (236, 72, 153),
        "rose-500": (244, 63, 94),
        "white": (255, 255, 255),
        "black": (0, 0, 0),
    }

    @staticmethod
    def can_handle(detected_type: DetectedType) -> bool:
        return detected_type is DetectedType.COLOR

    @staticmethod
    def convert(raw: str) -> Optional[ColorFormats]:
        return ColorTransformer.to_formats(raw)

    @staticmethod
    def parse(text: str) -> Optional[ColorRGB]:
        """
        Parse a CSS color string.

        Args:
            text: ``#RGB``, ``#RRGGBB``, ``#RRGGBBAA``, ``rgb()``/``rgba()`` or
                ``hsl()``/``hsla()``.

        Returns:
            The color as RGB, or ``None`` if the notation is not recognized.
        """
        trimmed = text.strip()

        match = ColorTransformer.PATTERNS["hex"].match(trimmed)
        if match:
            digits = match.group(1)
            if len(digits) == 3:
                return ColorRGB(*(int(c * 2, 16) for c in digits))
            if len(digits) in (6, 8):
                r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
                a = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
                return ColorRGB(r, g, b, a)
            return None

        match = ColorTransformer.PATTERNS["rgb"].match(trimmed)
        if match:
            r, g, b = (int(v) for v in match.group(1, 2, 3))
            return ColorRGB(r, g, b, _parse_alpha(match.group(4)))

        match = ColorTransformer.PATTERNS["hsl"].match(trimmed)
        if match:
            h, s, l = (int(v) for v in match.group(1, 2, 3))
            return ColorTransformer.hsl_to_rgb(ColorHSL(h, s, l, _parse_alpha(match.group(4))))

        return None

    @staticmethod
    def hsl_to_rgb(hsl: ColorHSL) -> ColorRGB:
        """Convert HSL to RGB with the standard piecewise hue interpolation."""
        h = hsl.h / 360
        s = hsl.s / 100
        l = hsl.l / 100

        if s == 0:
            r = g = b = l
        else:
            q = l * (1 + s) if l < 0.5 else l + s - l * s
            p = 2 * l - q
            r = _hue_to_channel(p, q, h + 1 / 3)
            g = _hue_to_channel(p, q, h)
            b = _hue_to_channel(p, q, h - 1 / 3)

        return ColorRGB(_round(r * 255), _round(g * 255), _round(b * 255), hsl.a)

    @staticmethod
    def rgb_to_hsl(rgb: ColorRGB) -> ColorHSL:
        """Convert RGB to HSL; the algebraic inverse of :meth:`hsl_to_rgb`."""
        r = rgb.r / 255
        g = rgb.g / 255
        b = rgb.b / 255

        high = max(r, g, b)
        low = min(r, g, b)
        l = (high + low) / 2
        h = s = 0.0

        if high != low:
            d = high - low
            s = d / (2 - high - low) if l > 0.5 else d / (high + low)

            if high == r:
                h = ((g - b) / d + (6 if g < b else 0)) / 6
            elif high == g:
                h = ((b - r) / d + 2) / 6
            else:
                h = ((r - g) / d + 4) / 6

        return ColorHSL(h * 360, s * 100, l * 100, rgb.a)

    @staticmethod
    def nearest_tailwind(rgb: ColorRGB) -> str:
        """Return the ``bg-*`` class of the closest palette entry by RGB distance."""
        closest = "slate-500"
        min_distance = math.inf

        for name, (r, g, b) in ColorTransformer.TAILWIND_COLORS.items():
            distance = math.sqrt((rgb.r - r) ** 2 + (rgb.g - g) ** 2 + (rgb.b - b) ** 2)
            if distance < min_distance:
                min_distance = distance
                closest = name

        return f"bg-{closest}"

    @staticmethod
    def complementary(rgb: ColorRGB) -> str:
        """Per-channel inversion, as a six-digit hex string."""
        return _hex6(255 - rgb.r, 255 - rgb.g, 255 - rgb.b)

    @staticmethod
    def to_formats(text: str) -> Optional[ColorFormats]:
        """
        Render a color in every supported notation.

        Args:
            text: Any color string accepted by :meth:`parse`.

        Returns:
            The formats bundle, or ``None`` for an unrecognized color.
        """
        rgb = ColorTransformer.parse(text)
        if rgb is None:
            return None

        hsl = ColorTransformer.rgb_to_hsl(rgb)
        h, s, l = _round(hsl.h), _round(hsl.s), _round(hsl.l)
        hex6 = _hex6(rgb.r, rgb.g, rgb.b)
        alpha = _format_number(rgb.a)

        return ColorFormats(
            hex=hex6,
            hex8=hex6 + _hex_channel(_round(rgb.a * 255)),
            rgb=f"rgb({rgb.r}, {rgb.g}, {rgb.b})",
            rgba=f"rgba({rgb.r}, {rgb.g}, {rgb.b}, {alpha})",
            hsl=f"hsl({h}, {s}%, {l}%)",
            hsla=f"hsla({h}, {s}%, {l}%, {alpha})",
            tailwind=ColorTransformer.nearest_tailwind(rgb),
            complementary=ColorTransformer.complementary(rgb),
            original=rgb,
        )


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def _round(value: float) -> int:
    """Round half up, like Math.round (Python's round() is half-to-even)."""
    return int(math.floor(value + 0.5))


def _parse_alpha(value: Optional[str]) -> float:
    if not value:
        return 1.0
    # "0.5.1" -> 0.5, "." -> NaN in the browser; treat the latter as opaque
    match = re.match(r"[0-9]*\.?[0-9]*", value)
    try:
        return float(match.group(0))
    except ValueError:
        return 1.0


def _hex_channel(value: int) -> str:
    return format(value, "x").rjust(2, "0")


def _hex6(r: int, g: int, b: int) -> str:
    return "#" + "".join(_hex_channel(c) for c in (r, g, b))


def _format_number(value: float) -> str:
    """Render like JavaScript's number-to-string: ``1`` not ``1.0``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
