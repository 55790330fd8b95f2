"""
Byte-level Base64 and percent-encoding primitives.

Both the detector and the transformers decode the same way, so the
lenient rules live here once:

- Base64 input may use the URL-safe alphabet, may omit padding and may
  contain ASCII whitespace.
- Percent-decoding is strict: every ``%`` must start a valid escape and the
  escaped bytes must form valid UTF-8.
"""

import base64
import re
from urllib.parse import quote, unquote

_BASE64_BODY = re.compile(r"^[A-Za-z0-9+/]*$")
_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_ASCII_WHITESPACE = re.compile(r"[\t\n\f\r ]+")

# Characters left alone by encodeURIComponent / encodeURI
URI_COMPONENT_SAFE = "-_.!~*'()"
URI_SAFE = URI_COMPONENT_SAFE + ";,/?:@&=+$#"


def to_standard_alphabet(text: str) -> str:
    """Map the URL-safe Base64 alphabet onto the standard one."""
    return text.replace("-", "+").replace("_", "/")


def b64decode_lenient(text: str) -> bytes:
    """
    Decode standard-alphabet Base64 with forgiving padding.

    Args:
        text: Base64 text. Whitespace is ignored, padding is optional.

    Returns:
        The decoded bytes.

    Raises:
        ValueError: If the text is not decodable Base64.
    """
    data = _ASCII_WHITESPACE.sub("", text)
    if len(data) % 4 == 0 and data.endswith("="):
        data = data[:-2] if data.endswith("==") else data[:-1]
    if not _BASE64_BODY.match(data):
        raise ValueError("Base64 contains characters outside the alphabet")
    if len(data) % 4 == 1:
        raise ValueError("Base64 length is invalid")
    data += "=" * (-len(data) % 4)
    return base64.b64decode(data, validate=True)


def b64encode_text(text: str) -> str:
    """Encode text as UTF-8 and return its standard Base64 form."""
    return base64.b64encode(text.encode("utf-8", errors="replace")).decode("ascii")


def decode_uri_component(text: str) -> str:
    """
    Percent-decode a string the way a browser's decodeURIComponent does.

    Raises:
        ValueError: On a malformed escape or escaped bytes that are not UTF-8.
    """
    if _PERCENT_ESCAPE.search(text):
        raise ValueError("Malformed percent escape")
    # UnicodeDecodeError is a ValueError subclass
    return unquote(text, errors="strict")


def encode_uri_component(text: str) -> str:
    return quote(text, safe=URI_COMPONENT_SAFE, errors="replace")


def encode_uri(text: str) -> str:
    return quote(text, safe=URI_SAFE, errors="replace")


def decode_base64url_text(segment: str) -> str:
    """Decode a base64url segment (as used by JWTs) to UTF-8 text."""
    return b64decode_lenient(to_standard_alphabet(segment)).decode("utf-8")
