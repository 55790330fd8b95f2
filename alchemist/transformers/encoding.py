"""
Base64 and URL Transformers

Encode and decode text through Base64 and percent-encoding. Text is always
handled as UTF-8 so multi-byte characters round-trip.
"""

from dataclasses import dataclass

from ..codec import (
    b64decode_lenient,
    b64encode_text,
    decode_uri_component,
    encode_uri,
    encode_uri_component,
    to_standard_alphabet,
)
from ..models import DetectedType

INVALID_BASE64 = "Invalid Base64"


@dataclass(frozen=True)
class Base64Formats:
    decoded: str
    encoded: str


@dataclass(frozen=True)
class UrlFormats:
    decoded: str
    encoded: str
    encoded_full: str


class EncodingTransformer:
    """Base64 and URL encode/decode helpers."""

    @staticmethod
    def can_handle(detected_type: DetectedType) -> bool:
        return detected_type in (DetectedType.BASE64, DetectedType.URL)

    @staticmethod
    def convert(raw: str, detected_type: DetectedType = DetectedType.BASE64):
        """
        Build the decoded/encoded pair for already-encoded input.

        Args:
            raw: Base64 or percent-encoded text.
            detected_type: Which of the two encodings ``raw`` uses.

        Returns:
            :class:`Base64Formats` or :class:`UrlFormats`.
        """
        if detected_type is DetectedType.URL:
            decoded = EncodingTransformer.decode_url(raw)
            return UrlFormats(
                decoded=decoded,
                encoded=raw,
                encoded_full=EncodingTransformer.encode_full_url(decoded),
            )
        return Base64Formats(decoded=EncodingTransformer.decode_base64(raw), encoded=raw)

    @staticmethod
    def encode_base64(text: str) -> str:
        return b64encode_text(text)

    @staticmethod
    def decode_base64(text: str) -> str:
        """
        Decode standard or URL-safe Base64 to text.

        The bytes are read as UTF-8 when possible, otherwise one character
        per byte.

        Returns:
            The decoded text, or ``"Invalid Base64"`` if nothing decodes.
        """
        try:
            data = b64decode_lenient(to_standard_alphabet(text))
        except ValueError:
            return INVALID_BASE64

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            return data.decode("latin-1")

    @staticmethod
    def encode_url(text: str) -> str:
        """Percent-encode everything except the unreserved characters."""
        return encode_uri_component(text)

    @staticmethod
    def encode_full_url(text: str) -> str:
        """Percent-encode while keeping URL structure (``/ ? & = #`` ...) intact."""
        return encode_uri(text)

    @staticmethod
    def decode_url(text: str) -> str:
        """Percent-decode, returning the input unchanged if it is malformed."""
        try:
            return decode_uri_component(text)
        except ValueError:
            return text
