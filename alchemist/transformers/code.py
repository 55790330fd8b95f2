"""
Code Beautifiers

Re-indents minified CSS and JavaScript. Both are lexical, single-pass
formatters rather than tokenizers; output is not checked for validity.
"""

import re
from dataclasses import dataclass

from ..models import DetectedType


@dataclass(frozen=True)
class CodeFormats:
    language: str  # "css" or "javascript"
    beautified: str
    minified: str


INDENT = "  "


class CodeTransformer:
    """Beautifies CSS and JavaScript source."""

    @staticmethod
    def can_handle(detected_type: DetectedType) -> bool:
        return detected_type in (DetectedType.CSS, DetectedType.JAVASCRIPT)

    @staticmethod
    def convert(raw: str, detected_type: DetectedType = DetectedType.JAVASCRIPT) -> CodeFormats:
        if detected_type is DetectedType.CSS:
            beautified = CodeTransformer.beautify_css(raw)
        else:
            beautified = CodeTransformer.beautify_js(raw)
        return CodeFormats(
            language=detected_type.value,
            beautified=beautified,
            minified=raw.strip(),
        )

    @staticmethod
    def beautify_css(source: str) -> str:
        """Put each declaration and closing brace on its own line."""
        css = source.strip()

        css = css.replace("{", " {\n  ")
        css = css.replace("}", "\n}\n\n")
        css = css.replace(";", ";\n  ")

        css = css.replace("\n  \n", "\n")
        css = re.sub(r"\n{3,}", "\n\n", css)
        css = re.sub(r"  +", "  ", css)

        return css.strip()

    @staticmethod
    def beautify_js(source: str) -> str:
        """
        Indent JavaScript by brace and bracket depth.

        Tracks whether the scanner is inside a quoted string (``'``, ``"``
        or a backtick) so that punctuation in string contents is copied
        verbatim. A quote preceded by a backslash does not open or close a
        string.
        """
        js = source.strip()
        out = []
        depth = 0
        in_string = False
        quote = ""

        for i, char in enumerate(js):
            prev = js[i - 1] if i > 0 else ""

            if char in "\"'`" and prev != "\\":
                if not in_string:
                    in_string = True
                    quote = char
                elif char == quote:
                    in_string = False
                out.append(char)
                continue

            if in_string:
                out.append(char)
                continue

            if char in "{[":
                depth += 1
                out.append(char + "\n" + INDENT * depth)
            elif char in "}]":
                depth -= 1
                out.append("\n" + INDENT * depth + char)
            elif char in ";,":
                out.append(char + "\n" + INDENT * depth)
            else:
                out.append(char)

        result = "".join(out)
        result = re.sub(r"\n +\n", "\n", result)
        result = re.sub(r"\n{3,}", "\n\n", result)
        return result.strip()
