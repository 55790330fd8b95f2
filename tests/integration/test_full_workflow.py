"""
Integration tests for the complete conversion workflow.
"""

import json
import re

import pytest

from alchemist.cli import main, render, to_json
from alchemist.core import Alchemist, Conversion, ConversionError
from alchemist.models import DetectedType
from alchemist.transformers.code import CodeFormats
from alchemist.transformers.color import ColorFormats
from alchemist.transformers.encoding import Base64Formats, UrlFormats
from alchemist.transformers.html import HtmlFormats
from alchemist.transformers.image import ImageFormats
from alchemist.transformers.json_transformer import JsonFormats
from alchemist.transformers.jwt import JwtPayload
from alchemist.transformers.numbers import NumberFormats
from alchemist.transformers.text import TextFormats
from alchemist.transformers.timestamp import TimestampFormats
from alchemist.transformers.uuid_tools import UuidInfo
from tests.fixtures import (
    EXPIRED_JWT,
    FOX_BASE64,
    MINIFIED_CSS,
    MINIFIED_JS,
    PLAIN_SENTENCE,
    SAMPLE_HTML,
    SAMPLE_JSON,
    SAMPLE_UUID,
)

pytestmark = pytest.mark.integration


class TestTextWorkflow:
    """
    End-to-end tests for pasted text:
    1. Detect the type
    2. Route to the matching transformer
    3. Return the detection and its formats bundle
    """

    @pytest.mark.parametrize("text,expected_type,bundle", [
        (SAMPLE_JSON, DetectedType.JSON, JsonFormats),
        (SAMPLE_HTML, DetectedType.HTML, HtmlFormats),
        ("#FF6B35", DetectedType.COLOR, ColorFormats),
        ("1700000000", DetectedType.TIMESTAMP, TimestampFormats),
        (MINIFIED_CSS, DetectedType.CSS, CodeFormats),
        (MINIFIED_JS, DetectedType.JAVASCRIPT, CodeFormats),
        (PLAIN_SENTENCE, DetectedType.TEXT, TextFormats),
        (FOX_BASE64, DetectedType.BASE64, Base64Formats),
        ("hello%20world%21", DetectedType.URL, UrlFormats),
        (EXPIRED_JWT, DetectedType.JWT, JwtPayload),
        ("0xFF", DetectedType.NUMBER, NumberFormats),
        (SAMPLE_UUID, DetectedType.UUID, UuidInfo),
    ])
    def test_every_text_type(self, engine, text, expected_type, bundle):
        """Test that each type is detected and converted."""
        conversion = engine.convert(text)

        assert isinstance(conversion, Conversion)
        assert conversion.detection.type == expected_type
        assert isinstance(conversion.formats, bundle)

    def test_json_round_trip(self, engine):
        """Test the JSON bundle contents."""
        formats = engine.convert(SAMPLE_JSON).formats

        assert json.loads(formats.minified) == json.loads(SAMPLE_JSON)
        assert formats.typescript.startswith("interface Root {")

    def test_custom_interface_name(self):
        """Test that engine configuration reaches the transformer."""
        engine = Alchemist(interface_name="Payload")

        assert engine.convert('{"a": 1}').formats.typescript.startswith("interface Payload {")

    def test_forced_type(self, engine):
        """Test skipping detection."""
        conversion = engine.convert("SGVsbG8=", as_type=DetectedType.BASE64)

        assert conversion.detection.type == DetectedType.BASE64
        assert conversion.detection.confidence == 1.0
        assert conversion.formats.decoded == "Hello"

    def test_forced_type_rejecting_input(self, engine):
        """Test that a family rejecting its input gives no bundle."""
        conversion = engine.convert("definitely not a color", as_type=DetectedType.COLOR)

        assert conversion.formats is None

    def test_empty_input(self, engine):
        """Test that empty input still converts as text."""
        conversion = engine.convert("")

        assert conversion.detection.type == DetectedType.TEXT
        assert conversion.formats.stats.characters == 0


class TestFileWorkflow:
    """End-to-end tests for dropped files."""

    def test_json_file(self, engine, temp_json_file):
        """Test that a text file is classified by its contents."""
        conversion = engine.convert_file(str(temp_json_file))

        assert conversion.detection.type == DetectedType.JSON

    def test_html_file(self, engine, temp_html_file):
        """Test an HTML file."""
        conversion = engine.convert_file(str(temp_html_file))

        assert conversion.detection.type == DetectedType.HTML
        assert "Title" in conversion.formats.plain_text

    def test_text_file_with_color(self, engine, temp_color_file):
        """Test re-detection of a generic text file's contents."""
        conversion = engine.convert_file(str(temp_color_file))

        assert conversion.detection.type == DetectedType.COLOR
        assert conversion.formats.hex == "#ff6b35"

    def test_image_file(self, engine, two_tone_png):
        """Test that images are analyzed rather than read as text."""
        conversion = engine.convert_file(str(two_tone_png))

        assert conversion.detection.type == DetectedType.IMAGE
        assert isinstance(conversion.formats, ImageFormats)
        assert conversion.formats.metadata.aspect_ratio == "2:1"
        assert len(conversion.formats.colors) == 2

    def test_color_count_setting(self, two_tone_png):
        """Test that the engine's color count is used."""
        engine = Alchemist(color_count=1)

        assert len(engine.convert_file(str(two_tone_png)).formats.colors) == 1

    def test_missing_file(self, engine, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            engine.convert_file(str(tmp_path / "nope.json"))

    def test_corrupt_image(self, engine, corrupt_png):
        """Test that an undecodable image raises ConversionError."""
        with pytest.raises(ConversionError):
            engine.convert_file(str(corrupt_png))

    def test_corrupt_image_with_forced_type(self, engine, corrupt_png):
        """Test that forcing the image type on undecodable data raises ConversionError."""
        with pytest.raises(ConversionError):
            engine.convert(str(corrupt_png), as_type=DetectedType.IMAGE)

    def test_forced_image_type_on_missing_path(self, engine, tmp_path):
        """Test that forcing the image type on a missing path raises ConversionError."""
        with pytest.raises(ConversionError):
            engine.transform(DetectedType.IMAGE, str(tmp_path / "nope.png"))

    def test_forced_image_type(self, engine, two_tone_png):
        """Test that a path forced to the image type is analyzed."""
        conversion = engine.convert(str(two_tone_png), as_type=DetectedType.IMAGE)

        assert isinstance(conversion.formats, ImageFormats)


class TestEngine:
    """Tests for engine helpers and logging."""

    def test_supported_types(self):
        """Test that every type has a transformer."""
        types = Alchemist.supported_types()

        assert set(types) == {t.value for t in DetectedType}
        assert types["css"].__name__ == "CodeTransformer"
        assert types["url"].__name__ == "EncodingTransformer"

    def test_generators(self, engine, rng):
        """Test UUID and Lorem Ipsum generation."""
        assert len(engine.generate_uuid(rng)) == 36
        assert len(engine.generate_lorem(rng=rng).split(" ")) == Alchemist.DEFAULT_LOREM_WORDS
        assert engine.generate_lorem(0) == ""

    def test_verbose_logging(self, verbose_engine, capsys):
        """Test progress lines in verbose mode."""
        verbose_engine.convert("#FF6B35")

        assert "[COLOR] Converting: #FF6B35\n" in capsys.readouterr().out

    def test_verbose_logging_truncates_source(self, verbose_engine, capsys):
        """Test that long or multi-line input is shortened in the progress line."""
        verbose_engine.convert(SAMPLE_JSON)
        verbose_engine.convert(f"{PLAIN_SENTENCE}\n{PLAIN_SENTENCE}")

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == f"[JSON] Converting: {SAMPLE_JSON[:40]}..."
        assert lines[1] == f"[TEXT] Converting: {PLAIN_SENTENCE}..."

    def test_quiet_by_default(self, engine, capsys):
        """Test that the default engine prints nothing."""
        engine.convert("#FF6B35")

        assert capsys.readouterr().out == ""


class TestCommandLine:
    """Tests for the command line interface."""

    def test_text_report(self, capsys):
        """Test the human-readable report."""
        exit_code = main(["#FF6B35", "--quiet"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Type: color (confidence 1.00)" in out
        assert "hex: #ff6b35" in out

    def test_json_output(self, capsys):
        """Test that --json prints a parseable document."""
        exit_code = main(["--json", EXPIRED_JWT])

        data = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert data["detection"]["type"] == "jwt"
        assert data["formats"]["is_expired"] is True
        assert data["formats"]["expires_at"] == "2001-09-09T01:46:40+00:00"

    def test_forced_type(self, capsys):
        """Test the --type override."""
        main(["--quiet", "--type", "text", "#FF6B35"])

        assert "Type: text" in capsys.readouterr().out

    def test_file_input(self, capsys, temp_json_file):
        """Test --file."""
        assert main(["--quiet", "--file", str(temp_json_file)]) == 0
        assert "Type: json" in capsys.readouterr().out

    def test_errors_are_reported(self, capsys, tmp_path):
        """Test that a failing source is reported and sets the exit code."""
        exit_code = main(["--file", str(tmp_path / "missing.txt"), "#fff"])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert "[ERROR]" in captured.err
        assert "1 converted, 1 errors" in captured.out

    def test_types_listing(self, capsys):
        """Test --types."""
        assert main(["--types"]) == 0
        assert "JsonTransformer" in capsys.readouterr().out

    def test_generators(self, capsys):
        """Test --uuid and --lorem without other input."""
        assert main(["--uuid", "--lorem", "5"]) == 0

        lines = capsys.readouterr().out.strip().split("\n")
        assert re.match(r"^[0-9a-f-]{36}$", lines[0])
        assert len(lines[1].split(" ")) == 5

    def test_no_input(self, capsys):
        """Test that running without input is an error."""
        assert main([]) == 1

    def test_render_and_to_json(self, engine):
        """Test the output helpers directly."""
        conversion = engine.convert("0xFF")

        assert "hex: 0xFF" in render(conversion)
        assert json.loads(to_json(conversion))["detection"]["parsed"] == {"base": 16, "value": 255}
