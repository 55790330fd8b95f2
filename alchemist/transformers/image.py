"""
Image Transformer

Reads image metadata and samples dominant colors with Pillow. Only
classification-side analysis lives here; recompression and resizing output
are left to the caller.
"""

import math
import os
from dataclasses import dataclass, field
from typing import Optional

from ..models import DetectedType


@dataclass(frozen=True)
class ImageMetadata:
    width: int
    height: int
    aspect_ratio: str  # reduced, e.g. "16:9"
    file_size: int
    mime_type: str

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")


@dataclass(frozen=True)
class ExtractedColor:
    """A quantized color and its share (percent) of sampled opaque pixels."""
    hex: str
    rgb: tuple[int, int, int]
    percentage: int


@dataclass(frozen=True)
class ImageFormats:
    metadata: ImageMetadata
    colors: list[ExtractedColor] = field(default_factory=list)


class ImageTransformer:
    """Analyzes decoded images."""

    SUPPORTED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".tiff", ".tif"}
    SAMPLE_SIZE = 100
    QUANTIZE_STEP = 16
    MIN_ALPHA = 128
    DEFAULT_COLOR_COUNT = 6

    @staticmethod
    def can_handle(detected_type: DetectedType) -> bool:
        return detected_type is DetectedType.IMAGE

    @staticmethod
    def convert(
        file_path: str,
        mime_type: Optional[str] = None,
        color_count: int = DEFAULT_COLOR_COUNT,
    ) -> ImageFormats:
        """
        Decode an image file and analyze it.

        Args:
            file_path: Path to the image.
            mime_type: MIME type to report. Defaults to Pillow's guess.
            color_count: How many dominant colors to return.

        Raises:
            FileNotFoundError: If the file does not exist.
            PIL.UnidentifiedImageError: If Pillow cannot decode the file.
        """
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"Image file not found: {file_path}")

        try:
            from PIL import Image
        except ImportError:
            raise RuntimeError("Pillow is not installed. Run: pip install Pillow")

        with Image.open(file_path) as img:
            img.load()
            mime_type = mime_type or Image.MIME.get(img.format or "", "application/octet-stream")
            metadata = ImageTransformer.get_metadata(img, os.path.getsize(file_path), mime_type)
            colors = ImageTransformer.extract_colors(img, color_count)

        return ImageFormats(metadata=metadata, colors=colors)

    @staticmethod
    def get_metadata(img, file_size: int, mime_type: str) -> ImageMetadata:
        """Dimensions, reduced aspect ratio, size and type of a decoded image."""
        width, height = img.size
        divisor = math.gcd(width, height) or 1
        return ImageMetadata(
            width=width,
            height=height,
            aspect_ratio=f"{width // divisor}:{height // divisor}",
            file_size=file_size,
            mime_type=mime_type,
        )

    @staticmethod
    def extract_colors(img, color_count: int = DEFAULT_COLOR_COUNT) -> list[ExtractedColor]:
        """
        Find the most frequent colors of an image.

        The image is scaled down so neither side exceeds ``SAMPLE_SIZE``
        pixels (never up), each channel is floored to a multiple of 16, and
        pixels with alpha below 128 are ignored. Buckets are ranked by
        pixel count; on a tie the bucket seen first ranks higher.

        Args:
            img: A Pillow image.
            color_count: Maximum number of colors to return.

        Returns:
            Up to ``color_count`` colors, most frequent first.
        """
        from PIL import Image

        scale = min(
            ImageTransformer.SAMPLE_SIZE / img.width,
            ImageTransformer.SAMPLE_SIZE / img.height,
            1,
        )
        size = (max(1, math.floor(img.width * scale)), max(1, math.floor(img.height * scale)))

        sample = img.convert("RGBA")
        if sample.size != size:
            sample = sample.resize(size, Image.Resampling.BILINEAR)

        step = ImageTransformer.QUANTIZE_STEP
        counts: dict[tuple[int, int, int], int] = {}
        pixels = sample.tobytes()
        for i in range(0, len(pixels), 4):
            r, g, b, a = pixels[i:i + 4]
            if a < ImageTransformer.MIN_ALPHA:
                continue
            key = (r // step * step, g // step * step, b // step * step)
            counts[key] = counts.get(key, 0) + 1

        sampled = sum(counts.values())
        if not sampled:
            return []

        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [
            ExtractedColor(
                hex="#{:02x}{:02x}{:02x}".format(*rgb),
                rgb=rgb,
                percentage=int(math.floor(count / sampled * 100 + 0.5)),
            )
            for rgb, count in ranked[:color_count]
        ]

    @staticmethod
    def calculate_resize_dimensions(width: int, height: int, target_ratio: str) -> tuple[int, int]:
        """
        Largest crop of ``width`` x ``height`` with the aspect ratio ``"W:H"``.

        An unparseable or zero ratio returns the original dimensions.
        """
        try:
            ratio_w, ratio_h = (float(part) for part in target_ratio.split(":"))
        except ValueError:
            return width, height
        if not (math.isfinite(ratio_w) and math.isfinite(ratio_h)):
            return width, height
        if not ratio_w or not ratio_h or not height:
            return width, height

        target = ratio_w / ratio_h
        if width / height > target:
            # wider than the target: crop width
            return int(math.floor(height * target + 0.5)), height
        return width, int(math.floor(width / target + 0.5))
