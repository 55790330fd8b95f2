"""
Input type detection.

Classifies a raw string into exactly one :class:`DetectedType` by running an
ordered chain of single-purpose detectors. The first detector that accepts
the input wins, so the order of ``TypeDetector.DETECTORS`` is the precedence
policy: the most specific patterns come first and plain text is the
fallback.
"""

import json
import re
from typing import Optional

from .codec import (
    b64decode_lenient,
    decode_base64url_text,
    decode_uri_component,
    to_standard_alphabet,
)
from .models import DetectedType, DetectionResult, JwtParts, ParsedNumber


def _reject_constant(name: str):
    # JSON.parse has no NaN/Infinity literals
    raise ValueError(f"Invalid JSON constant: {name}")


def loads_strict(text: str):
    """Parse JSON, refusing the non-standard NaN and Infinity literals."""
    return json.loads(text, parse_constant=_reject_constant)


class TypeDetector:
    """
    Ordered heuristic classifier for pasted text and dropped files.

    Each ``_detect_*`` method returns a :class:`DetectionResult` or ``None``
    and never raises; malformed candidates simply fall through to the next
    detector in ``DETECTORS``.
    """

    BASE64_MIN_LENGTH = 32
    BASE64_PRINTABLE_RATIO = 0.8
    MAX_EPOCH_SECONDS = 4102444800  # 2100-01-01T00:00:00Z
    MINIFIED_MIN_LENGTH = 200

    PATTERNS = {
        "hex_color": re.compile(r"^#([A-Fa-f0-9]{3}|[A-Fa-f0-9]{6}|[A-Fa-f0-9]{8})$"),
        "rgb_color": re.compile(
            r"^rgba?\s*\(\s*([0-9]{1,3})\s*,\s*([0-9]{1,3})\s*,\s*([0-9]{1,3})\s*(,\s*[0-9.]+)?\s*\)$",
            re.IGNORECASE,
        ),
        "hsl_color": re.compile(
            r"^hsla?\s*\(\s*([0-9]{1,3})\s*,\s*([0-9]{1,3})%?\s*,\s*([0-9]{1,3})%?\s*(,\s*[0-9.]+)?\s*\)$",
            re.IGNORECASE,
        ),
        "html_tag": re.compile(r"</?[a-z][\s\S]*?>", re.IGNORECASE),
        "full_html": re.compile(r"^[\s\S]*<[a-z][\s\S]*>[\s\S]*$", re.IGNORECASE),
        "epoch": re.compile(r"^[0-9]{10,13}$"),
        "base64": re.compile(r"^[A-Za-z0-9+/=]{32,}$"),
        "base64_url_safe": re.compile(r"^[A-Za-z0-9_-]{32,}=*$"),
        "url_escape": re.compile(r"%[0-9A-Fa-f]{2}"),
        "jwt": re.compile(r"^[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*$"),
        "uuid": re.compile(
            r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
        ),
        "hex_number": re.compile(r"^0x[0-9A-Fa-f]+$"),
        "binary_number": re.compile(r"^0b[01]+$"),
        "octal_number": re.compile(r"^0o[0-7]+$"),
        "minified_js_punct": re.compile(r"[;{}()]"),
        "minified_css_punct": re.compile(r"[{}:;]"),
        "css_selector": re.compile(r"[.#]?[a-z_-]+\s*\{", re.IGNORECASE),
        "css_property": re.compile(r":\s*[^;]+;"),
        "js_declaration": re.compile(r"function\s*\w*\s*\(|=>\s*\{|const\s+|let\s+|var\s+"),
        "js_statement": re.compile(r"\)\s*\{|\}\s*\)|return\s+|if\s*\(|for\s*\("),
    }

    HTML_INDICATORS = [
        re.compile(r"<!doctype", re.IGNORECASE),
        re.compile(r"<html", re.IGNORECASE),
        re.compile(r"<body", re.IGNORECASE),
        re.compile(r"<div", re.IGNORECASE),
        re.compile(r"<p[\s>]", re.IGNORECASE),
        re.compile(r"<span", re.IGNORECASE),
        re.compile(r"<h[1-6]", re.IGNORECASE),
    ]

    # Precedence order. Detectors overlap, so reordering changes results.
    DETECTORS = [
        "_detect_jwt",
        "_detect_uuid",
        "_detect_json",
        "_detect_color",
        "_detect_timestamp",
        "_detect_number",
        "_detect_url_encoded",
        "_detect_base64",
        "_detect_html",
        "_detect_css",
        "_detect_javascript",
    ]

    def detect(self, text) -> DetectionResult:
        """
        Classify raw input.

        Args:
            text: The raw input. Anything that is not a non-empty string is
                treated as empty text.

        Returns:
            The result of the first detector that accepts the input, or a
            ``text`` result with confidence 0.5.
        """
        if not text or not isinstance(text, str):
            return DetectionResult(DetectedType.TEXT, 0.5, "")

        trimmed = text.strip()
        for name in self.DETECTORS:
            result = getattr(self, name)(text, trimmed)
            if result is not None:
                return result

        return DetectionResult(DetectedType.TEXT, 0.5, text)

    # --- detectors --------------------------------------------------------

    def _detect_jwt(self, raw: str, trimmed: str) -> Optional[DetectionResult]:
        if not self.PATTERNS["jwt"].match(trimmed):
            return None

        parts = trimmed.split(".")
        if len(parts) != 3:
            return None

        try:
            header = loads_strict(decode_base64url_text(parts[0]))
            payload = loads_strict(decode_base64url_text(parts[1]))
        except (ValueError, RecursionError):
            return None

        if isinstance(header, dict) and (header.get("alg") or header.get("typ")):
            return DetectionResult(
                DetectedType.JWT,
                1.0,
                raw,
                JwtParts(header=header, payload=payload, signature=parts[2]),
            )
        return None

    def _detect_uuid(self, raw: str, trimmed: str) -> Optional[DetectionResult]:
        if self.PATTERNS["uuid"].match(trimmed):
            return DetectionResult(DetectedType.UUID, 1.0, raw)
        return None

    def _detect_json(self, raw: str, trimmed: str) -> Optional[DetectionResult]:
        if not trimmed.startswith(("{", "[")):
            return None

        try:
            parsed = loads_strict(trimmed)
        except (ValueError, RecursionError):
            return None

        return DetectionResult(DetectedType.JSON, 1.0, raw, parsed)

    def _detect_color(self, raw: str, trimmed: str) -> Optional[DetectionResult]:
        for key in ("hex_color", "rgb_color", "hsl_color"):
            if self.PATTERNS[key].match(trimmed):
                return DetectionResult(DetectedType.COLOR, 1.0, raw)
        return None

    def _detect_timestamp(self, raw: str, trimmed: str) -> Optional[DetectionResult]:
        if not self.PATTERNS["epoch"].match(trimmed):
            return None

        num = int(trimmed)
        is_seconds = len(trimmed) == 10 and 0 <= num <= self.MAX_EPOCH_SECONDS
        is_millis = len(trimmed) == 13 and 0 <= num <= self.MAX_EPOCH_SECONDS * 1000

        if is_seconds or is_millis:
            return DetectionResult(
                DetectedType.TIMESTAMP,
                0.9,
                raw,
                num if is_millis else num * 1000,
            )
        return None

    def _detect_number(self, raw: str, trimmed: str) -> Optional[DetectionResult]:
        for key, base in (("hex_number", 16), ("binary_number", 2), ("octal_number", 8)):
            if self.PATTERNS[key].match(trimmed):
                parsed = ParsedNumber(base=base, value=int(trimmed[2:], base))
                return DetectionResult(DetectedType.NUMBER, 1.0, raw, parsed)
        return None

    def _detect_url_encoded(self, raw: str, trimmed: str) -> Optional[DetectionResult]:
        if not self.PATTERNS["url_escape"].search(trimmed):
            return None
        if trimmed.count("%") < 2:
            return None

        try:
            decoded = decode_uri_component(trimmed)
        except ValueError:
            return None

        if decoded != trimmed:
            return DetectionResult(DetectedType.URL, 0.9, raw, decoded)
        return None

    def _detect_base64(self, raw: str, trimmed: str) -> Optional[DetectionResult]:
        if len(trimmed) < self.BASE64_MIN_LENGTH:
            return None

        if not (
            self.PATTERNS["base64"].match(trimmed)
            or self.PATTERNS["base64_url_safe"].match(trimmed)
        ):
            return None

        try:
            decoded = b64decode_lenient(to_standard_alphabet(trimmed))
        except ValueError:
            return None

        if not decoded:
            return None

        printable = sum(1 for byte in decoded if 32 <= byte <= 126 or byte in (9, 10, 13))
        if printable / len(decoded) > self.BASE64_PRINTABLE_RATIO:
            return DetectionResult(
                DetectedType.BASE64,
                0.85,
                raw,
                decoded.decode("latin-1"),
            )
        return None

    def _detect_html(self, raw: str, trimmed: str) -> Optional[DetectionResult]:
        if not self.PATTERNS["html_tag"].search(trimmed):
            return None

        score = sum(1 for pattern in self.HTML_INDICATORS if pattern.search(trimmed))

        if score > 0 or self.PATTERNS["full_html"].match(trimmed):
            return DetectionResult(DetectedType.HTML, min(0.5 + score * 0.1, 1.0), raw)
        return None

    def _detect_css(self, raw: str, trimmed: str) -> Optional[DetectionResult]:
        has_selectors = self.PATTERNS["css_selector"].search(trimmed)
        has_properties = self.PATTERNS["css_property"].search(trimmed)

        if has_selectors and has_properties:
            confidence = 0.9 if self._looks_minified(trimmed, "minified_css_punct") else 0.7
            return DetectionResult(DetectedType.CSS, confidence, raw)
        return None

    def _detect_javascript(self, raw: str, trimmed: str) -> Optional[DetectionResult]:
        has_function = self.PATTERNS["js_declaration"].search(trimmed)
        has_statements = self.PATTERNS["js_statement"].search(trimmed)

        if (has_function or has_statements) and self._looks_minified(trimmed, "minified_js_punct"):
            return DetectionResult(DetectedType.JAVASCRIPT, 0.8, raw)
        return None

    # --- helpers ----------------------------------------------------------

    def _looks_minified(self, trimmed: str, punctuation: str) -> bool:
        """A single line of at least MINIFIED_MIN_LENGTH characters with structural punctuation."""
        if "\n" in trimmed or len(trimmed) < self.MINIFIED_MIN_LENGTH:
            return False
        return bool(self.PATTERNS[punctuation].search(trimmed))


# File classification is a separate, content-blind decision.
_FILE_EXTENSIONS = [
    (DetectedType.JSON, "application/json", (".json",)),
    (DetectedType.HTML, "text/html", (".html", ".htm")),
    (DetectedType.CSS, "text/css", (".css",)),
    (DetectedType.JAVASCRIPT, "text/javascript", (".js", ".ts")),
]


def detect_file_type(mime_type: Optional[str], name: str) -> DetectedType:
    """
    Classify a file from its MIME type and file name alone.

    Args:
        mime_type: The MIME type reported for the file, if any.
        name: The file name, used for its extension.

    Returns:
        ``image`` for any ``image/*`` MIME type, a code or markup type for a
        known MIME type or extension, otherwise ``text``.
    """
    mime_type = mime_type or ""
    if mime_type.startswith("image/"):
        return DetectedType.IMAGE

    for detected_type, mime, extensions in _FILE_EXTENSIONS:
        if mime_type == mime or name.endswith(extensions):
            return detected_type

    return DetectedType.TEXT


_default_detector = TypeDetector()


def detect(text) -> DetectionResult:
    """Classify raw input with the default detector chain."""
    return _default_detector.detect(text)
