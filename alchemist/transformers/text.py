"""
Text Transformer

Statistics and case conversions for free-form text.
"""

import re
from dataclasses import dataclass, field

from ..models import DetectedType


@dataclass(frozen=True)
class TextStats:
    characters: int
    characters_no_spaces: int
    words: int
    lines: int
    sentences: int


@dataclass(frozen=True)
class TextFormats:
    stats: TextStats
    cases: dict = field(default_factory=dict)


class TextTransformer:
    """Counts and re-cases plain text."""

    PATTERNS = {
        "whitespace": re.compile(r"\s"),
        "whitespace_run": re.compile(r"\s+"),
        "line_break": re.compile(r"\r?\n"),
        "sentence_end": re.compile(r"[.!?]+"),
        "word": re.compile(r"\w\S*", re.ASCII),
        "separator_then_char": re.compile(r"[^a-zA-Z0-9]+(.)"),
        "lower_upper": re.compile(r"([a-z])([A-Z])"),
        "non_alphanumeric": re.compile(r"[^a-zA-Z0-9]+"),
    }

    @staticmethod
    def can_handle(detected_type: DetectedType) -> bool:
        return detected_type is DetectedType.TEXT

    @staticmethod
    def convert(raw: str) -> TextFormats:
        return TextFormats(
            stats=TextTransformer.stats(raw),
            cases=TextTransformer.all_cases(raw),
        )

    @staticmethod
    def stats(text: str) -> TextStats:
        """
        Count characters, words, lines and sentences.

        Words are runs of non-whitespace (zero for blank text). Lines are
        separated by ``\\n`` or ``\\r\\n``. Sentences are runs of ``.``, ``!``
        or ``?``; non-blank text without any counts as one sentence.
        """
        text = text or ""
        patterns = TextTransformer.PATTERNS
        stripped = text.strip()

        return TextStats(
            characters=len(text),
            characters_no_spaces=len(patterns["whitespace"].sub("", text)),
            words=len(patterns["whitespace_run"].split(stripped)) if stripped else 0,
            lines=len(patterns["line_break"].split(text)),
            sentences=len(patterns["sentence_end"].findall(text)) or (1 if stripped else 0),
        )

    @staticmethod
    def all_cases(text: str) -> dict:
        return {
            "upper": TextTransformer.to_upper_case(text),
            "lower": TextTransformer.to_lower_case(text),
            "title": TextTransformer.to_title_case(text),
            "camel": TextTransformer.to_camel_case(text),
            "pascal": TextTransformer.to_pascal_case(text),
            "snake": TextTransformer.to_snake_case(text),
            "kebab": TextTransformer.to_kebab_case(text),
            "constant": TextTransformer.to_constant_case(text),
        }

    @staticmethod
    def to_upper_case(text: str) -> str:
        return text.upper()

    @staticmethod
    def to_lower_case(text: str) -> str:
        return text.lower()

    @staticmethod
    def to_title_case(text: str) -> str:
        """Capitalize the first letter of every word and lowercase the rest."""
        return TextTransformer.PATTERNS["word"].sub(
            lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text
        )

    @staticmethod
    def to_camel_case(text: str) -> str:
        return _lower_first(_join_words(text))

    @staticmethod
    def to_pascal_case(text: str) -> str:
        return _upper_first(_join_words(text))

    @staticmethod
    def to_snake_case(text: str) -> str:
        return _separate_words(text, "_")

    @staticmethod
    def to_kebab_case(text: str) -> str:
        return _separate_words(text, "-")

    @staticmethod
    def to_constant_case(text: str) -> str:
        return TextTransformer.to_snake_case(text).upper()


def _join_words(text: str) -> str:
    # Drop separator runs and capitalize the character that follows each one
    return TextTransformer.PATTERNS["separator_then_char"].sub(
        lambda m: m.group(1).upper(), text
    )


def _lower_first(text: str) -> str:
    if text[:1].isascii() and text[:1].isupper():
        return text[0].lower() + text[1:]
    return text


def _upper_first(text: str) -> str:
    if text[:1].isascii() and text[:1].islower():
        return text[0].upper() + text[1:]
    return text


def _separate_words(text: str, separator: str) -> str:
    patterns = TextTransformer.PATTERNS
    result = patterns["lower_upper"].sub(rf"\1{separator}\2", text)
    result = patterns["non_alphanumeric"].sub(separator, result)
    # Only one separator is stripped from each end
    if result.startswith(separator):
        result = result[1:]
    if result.endswith(separator):
        result = result[:-1]
    return result.lower()
