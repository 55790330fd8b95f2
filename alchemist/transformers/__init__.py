from .json_transformer import JsonTransformer
from .color import ColorTransformer
from .timestamp import TimestampTransformer
from .html import HtmlTransformer
from .code import CodeTransformer
from .text import TextTransformer
from .encoding import EncodingTransformer
from .jwt import JwtTransformer
from .numbers import NumberTransformer
from .uuid_tools import UuidTransformer
from .lorem import LoremGenerator
from .image import ImageTransformer

__all__ = [
    "JsonTransformer",
    "ColorTransformer",
    "TimestampTransformer",
    "HtmlTransformer",
    "CodeTransformer",
    "TextTransformer",
    "EncodingTransformer",
    "JwtTransformer",
    "NumberTransformer",
    "UuidTransformer",
    "LoremGenerator",
    "ImageTransformer",
]
