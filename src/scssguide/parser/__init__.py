from scssguide.parser.errors import ParseError
from scssguide.parser.transformer import parse_scss

__all__ = ["ParseError", "parse_scss"]
