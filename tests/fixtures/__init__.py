# Test fixtures
from .sample_inputs import (
    NOW_MS,
    SAMPLE_JSON,
    SAMPLE_HTML,
    SAMPLE_CSS,
    MINIFIED_CSS,
    MINIFIED_JS,
    UNMINIFIED_JS,
    PLAIN_SENTENCE,
    SAMPLE_UUID,
    FOX_TEXT,
    FOX_BASE64,
    BINARY_BASE64,
    JWT_HEADER,
    SAMPLE_JWT,
    EXPIRED_JWT,
    VALID_JWT,
    b64url_segment,
    make_jwt,
)

__all__ = [
    "NOW_MS",
    "SAMPLE_JSON",
    "SAMPLE_HTML",
    "SAMPLE_CSS",
    "MINIFIED_CSS",
    "MINIFIED_JS",
    "UNMINIFIED_JS",
    "PLAIN_SENTENCE",
    "SAMPLE_UUID",
    "FOX_TEXT",
    "FOX_BASE64",
    "BINARY_BASE64",
    "JWT_HEADER",
    "SAMPLE_JWT",
    "EXPIRED_JWT",
    "VALID_JWT",
    "b64url_segment",
    "make_jwt",
]
