"""
Alchemist - Universal Converter Core

Guesses what a pasted string or dropped file is (JSON, a color, a JWT, a
timestamp, Base64, ...) and derives every useful representation of it:
pretty-printed and minified JSON, every color notation, readable dates,
decoded tokens, re-cased text and more. Pure functions only; no network,
no persistence.
"""

from .models import DetectedType, DetectionResult
from .detector import TypeDetector, detect, detect_file_type

__version__ = "1.0.0"

__all__ = [
    "DetectedType",
    "DetectionResult",
    "TypeDetector",
    "detect",
    "detect_file_type",
]
