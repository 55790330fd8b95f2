"""
Unit tests for UUID generation and parsing.
"""

import random
import re

import pytest

from alchemist.models import DetectedType
from alchemist.transformers.uuid_tools import UuidInfo, UuidTransformer
from tests.fixtures import SAMPLE_UUID

CANONICAL = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")


class TestUuidGeneration:
    """Tests for UuidTransformer.generate."""

    def test_shape(self, rng):
        """Test the canonical v4 layout."""
        assert CANONICAL.match(UuidTransformer.generate(rng))

    def test_generated_parses_as_v4(self):
        """Test that every generated UUID is version 4, RFC 4122."""
        source = random.Random(7)
        for _ in range(200):
            info = UuidTransformer.parse(UuidTransformer.generate(source))

            assert info.version == 4
            assert info.variant == "RFC 4122"

    def test_seeded_is_reproducible(self):
        """Test that the same seed gives the same UUID."""
        assert UuidTransformer.generate(random.Random(3)) == UuidTransformer.generate(random.Random(3))

    def test_default_random_source(self):
        """Test generation without an explicit source."""
        assert CANONICAL.match(UuidTransformer.generate())


class TestUuidParsing:
    """Tests for UuidTransformer.parse."""

    def test_rfc4122(self):
        """Test a well-known v4 UUID."""
        assert UuidTransformer.parse(SAMPLE_UUID) == UuidInfo(
            uuid=SAMPLE_UUID, version=4, variant="RFC 4122"
        )

    def test_normalizes_case_and_whitespace(self):
        """Test that the stored UUID is trimmed and lowercased."""
        info = UuidTransformer.parse(f" {SAMPLE_UUID.upper()} ")

        assert info.uuid == SAMPLE_UUID

    @pytest.mark.parametrize("nibble,variant", [
        ("0", "NCS"),
        ("7", "NCS"),
        ("8", "RFC 4122"),
        ("b", "RFC 4122"),
        ("c", "Microsoft"),
        ("d", "Microsoft"),
        ("e", "Future"),
        ("f", "Future"),
    ])
    def test_variants(self, nibble, variant):
        """Test the variant bit patterns."""
        info = UuidTransformer.parse(f"123e4567-e89b-12d3-{nibble}456-426614174000")

        assert info.version == 1
        assert info.variant == variant

    @pytest.mark.parametrize("text", ["", "not-a-uuid", SAMPLE_UUID[:-1], SAMPLE_UUID.replace("-", "")])
    def test_invalid(self, text):
        """Test that non-canonical input gives None."""
        assert UuidTransformer.parse(text) is None

    def test_can_handle(self):
        """Test type routing."""
        assert UuidTransformer.can_handle(DetectedType.UUID)
        assert UuidTransformer.convert(SAMPLE_UUID).version == 4
