"""
Alchemist Core Engine

The orchestrator that classifies raw input and routes it to the matching
transformer family. Text goes through the detector chain; files are first
classified by MIME type and name, images are analyzed directly and
everything else is read as text and re-detected from its contents.
"""

import mimetypes
import os
import random
from dataclasses import dataclass
from typing import Any, Optional

from .detector import TypeDetector, detect_file_type
from .models import DetectedType, DetectionResult
from .transformers import (
    CodeTransformer,
    ColorTransformer,
    EncodingTransformer,
    HtmlTransformer,
    ImageTransformer,
    JsonTransformer,
    JwtTransformer,
    LoremGenerator,
    NumberTransformer,
    TextTransformer,
    TimestampTransformer,
    UuidTransformer,
)


class ConversionError(Exception):
    """Raised when a file cannot be decoded for conversion."""
    pass


@dataclass(frozen=True)
class Conversion:
    """A detection result and the formats derived from it."""
    detection: DetectionResult
    formats: Optional[Any]  # None when the family rejects its own input


class Alchemist:
    """
    Main conversion engine.

    Accepts pasted text or a file path and produces the detected type plus
    a type-specific formats bundle. Holds configuration only; every call is
    independent.
    """

    DEFAULT_COLOR_COUNT = ImageTransformer.DEFAULT_COLOR_COUNT
    DEFAULT_INTERFACE_NAME = JsonTransformer.DEFAULT_INTERFACE_NAME
    DEFAULT_LOREM_WORDS = LoremGenerator.DEFAULT_WORD_COUNT

    def __init__(
        self,
        color_count: int = DEFAULT_COLOR_COUNT,
        interface_name: str = DEFAULT_INTERFACE_NAME,
        lorem_words: int = DEFAULT_LOREM_WORDS,
        verbose: bool = False,
        detector: Optional[TypeDetector] = None,
    ):
        """
        Initialize the engine.

        Args:
            color_count: Dominant colors to extract from images.
            interface_name: Name of the root TypeScript declaration for JSON.
            lorem_words: Default length of generated Lorem Ipsum.
            verbose: Print a progress line for every conversion.
            detector: Detector to classify text with.
        """
        self.color_count = color_count
        self.interface_name = interface_name
        self.lorem_words = lorem_words
        self.verbose = verbose
        self.detector = detector or TypeDetector()

    def convert(self, text: str, as_type: Optional[DetectedType] = None) -> Conversion:
        """
        Classify text and derive its formats.

        Args:
            text: The raw input.
            as_type: Skip detection and treat the input as this type.

        Returns:
            The detection result and the formats bundle for its type.
        """
        if as_type is not None:
            detection = DetectionResult(as_type, 1.0, text)
        else:
            detection = self.detector.detect(text)

        label = detection.type.value.upper()
        self._log(f"[{label}] Converting: {_preview(text)}")

        return Conversion(detection, self.transform(detection.type, detection.raw))

    def convert_file(self, file_path: str, mime_type: Optional[str] = None) -> Conversion:
        """
        Classify a file and derive its formats.

        Args:
            file_path: Path to the file.
            mime_type: MIME type of the file. Guessed from the name if omitted.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConversionError: If an image file cannot be decoded.
        """
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"File not found: {file_path}")

        mime_type = mime_type or mimetypes.guess_type(file_path)[0]
        file_type = detect_file_type(mime_type, os.path.basename(file_path))

        if file_type is DetectedType.IMAGE:
            self._log(f"[IMG] Converting: {file_path}")
            formats = self._convert_image(file_path, mime_type)
            return Conversion(DetectionResult(DetectedType.IMAGE, 1.0, file_path), formats)

        self._log(f"[TXT] Reading as text: {file_path}")
        with open(file_path, "r", encoding="utf-8", errors="replace") as f:
            content = f.read()

        return self.convert(content)

    def transform(self, detected_type: DetectedType, raw: str) -> Optional[Any]:
        """
        Run the transformer family for ``detected_type`` on ``raw``.

        For images ``raw`` is a file path.

        Raises:
            ConversionError: If an image cannot be opened or decoded.
        """
        if JsonTransformer.can_handle(detected_type):
            return JsonTransformer.convert(raw, self.interface_name)

        elif CodeTransformer.can_handle(detected_type):
            return CodeTransformer.convert(raw, detected_type)

        elif EncodingTransformer.can_handle(detected_type):
            return EncodingTransformer.convert(raw, detected_type)

        elif ImageTransformer.can_handle(detected_type):
            return self._convert_image(raw)

        for transformer in (
            ColorTransformer,
            TimestampTransformer,
            HtmlTransformer,
            JwtTransformer,
            NumberTransformer,
            UuidTransformer,
            TextTransformer,
        ):
            if transformer.can_handle(detected_type):
                return transformer.convert(raw)

        return None

    def generate_uuid(self, rng: Optional[random.Random] = None) -> str:
        return UuidTransformer.generate(rng)

    def generate_lorem(
        self, word_count: Optional[int] = None, rng: Optional[random.Random] = None
    ) -> str:
        if word_count is None:
            word_count = self.lorem_words
        return LoremGenerator.generate(word_count, rng)

    @staticmethod
    def supported_types() -> dict:
        """Return a mapping of type name to the transformer that handles it."""
        transformers = [
            JsonTransformer,
            HtmlTransformer,
            ColorTransformer,
            TimestampTransformer,
            CodeTransformer,
            TextTransformer,
            ImageTransformer,
            EncodingTransformer,
            JwtTransformer,
            NumberTransformer,
            UuidTransformer,
        ]
        return {
            detected_type.value: next(t for t in transformers if t.can_handle(detected_type))
            for detected_type in DetectedType
        }

    def _convert_image(self, file_path: str, mime_type: Optional[str] = None):
        try:
            return ImageTransformer.convert(file_path, mime_type, self.color_count)
        except (OSError, ValueError) as e:
            raise ConversionError(f"Cannot decode image {file_path}: {e}") from e

    def _log(self, message: str) -> None:
        if self.verbose:
            print(message)


def _preview(text: str, limit: int = 40) -> str:
    """First line of ``text``, cut to ``limit`` characters."""
    lines = text.strip().splitlines()
    first = lines[0] if lines else ""
    if len(first) > limit or len(lines) > 1:
        return first[:limit] + "..."
    return first
