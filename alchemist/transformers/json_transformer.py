"""
JSON Transformer

Pretty-prints, minifies and derives TypeScript interface declarations from
JSON text. Malformed input is returned unchanged rather than raising.
"""

import json
import re
from dataclasses import dataclass
from typing import Any

from ..detector import loads_strict
from ..models import DetectedType


@dataclass(frozen=True)
class JsonFormats:
    pretty: str
    minified: str
    typescript: str


_IDENTIFIER = re.compile(r"^[a-zA-Z_$][a-zA-Z0-9_$]*$")
_WORD_SEPARATORS = re.compile(r"[^a-zA-Z0-9]+")


class JsonTransformer:
    """Formats JSON documents and generates structural type declarations."""

    DEFAULT_INTERFACE_NAME = "Root"

    @staticmethod
    def can_handle(detected_type: DetectedType) -> bool:
        return detected_type is DetectedType.JSON

    @staticmethod
    def convert(raw: str, interface_name: str = DEFAULT_INTERFACE_NAME) -> JsonFormats:
        return JsonFormats(
            pretty=JsonTransformer.pretty_print(raw),
            minified=JsonTransformer.minify(raw),
            typescript=JsonTransformer.to_typescript(raw, interface_name),
        )

    @staticmethod
    def pretty_print(value: Any) -> str:
        """
        Serialize with a stable two-space indent.

        Args:
            value: JSON text, or an already-decoded value.

        Returns:
            The indented JSON, or the input text unchanged if it does not parse.
        """
        return _reserialize(value, indent=2)

    @staticmethod
    def minify(value: Any) -> str:
        """Serialize without any insignificant whitespace."""
        return _reserialize(value, separators=(",", ":"))

    @staticmethod
    def to_typescript(value: Any, interface_name: str = DEFAULT_INTERFACE_NAME) -> str:
        """
        Generate TypeScript declarations describing the shape of a JSON value.

        Objects become named interfaces; nested objects get an interface
        named after their key in PascalCase, and array
        elements are described from their first item as ``<Name>Item``.

        Args:
            value: JSON text, or an already-decoded value.
            interface_name: Name of the outermost declaration.

        Returns:
            The declarations, or ``// Could not parse JSON``.
        """
        if isinstance(value, str):
            try:
                value = loads_strict(value)
            except (ValueError, RecursionError):
                return "// Could not parse JSON"

        declarations: list[str] = []
        root_type = _type_expression(value, interface_name, declarations)
        if root_type != interface_name:
            declarations.append(f"type {interface_name} = {root_type};")
        return "\n\n".join(declarations)


def _reserialize(value: Any, **dump_options) -> str:
    original = value
    if isinstance(value, str):
        try:
            value = loads_strict(value)
        except (ValueError, RecursionError):
            return original
    try:
        return json.dumps(value, ensure_ascii=False, allow_nan=False, **dump_options)
    except (TypeError, ValueError):
        # non-finite floats (1e400) or values json cannot represent
        return original if isinstance(original, str) else repr(original)


def _primitive_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "unknown"


def _type_expression(value: Any, name: str, declarations: list[str]) -> str:
    """Return the type for ``value``, appending any interfaces it needs."""
    if isinstance(value, list):
        if not value:
            return "unknown[]"
        item_type = _type_expression(value[0], f"{name}Item", declarations)
        if " " in item_type:
            item_type = f"({item_type})"
        return f"{item_type}[]"

    if isinstance(value, dict):
        if not value:
            return "Record<string, unknown>"

        lines = [f"interface {name} {{"]
        for key, child in value.items():
            safe_key = key if _IDENTIFIER.match(key) else json.dumps(key, ensure_ascii=False)
            child_name = _pascal_name(key) or f"{name}Field"
            lines.append(f"  {safe_key}: {_type_expression(child, child_name, declarations)};")
        lines.append("}")

        declarations.append("\n".join(lines))
        return name

    return _primitive_name(value)


def _pascal_name(key: str) -> str:
    """``user_profile`` -> ``UserProfile``; keeps inner capitals (``userId`` -> ``UserId``)."""
    parts = [part for part in _WORD_SEPARATORS.split(key) if part]
    name = "".join(part[:1].upper() + part[1:] for part in parts)
    if name[:1].isdigit():
        name = f"_{name}"
    return name
