"""
Kaede Runtime Text Module

String inspection, slicing, transformation, splitting/joining and numeric
parsing for compiled Kaede programs.

Text is treated as a sequence of single-byte characters. Case mapping and
classification only know the 7-bit ASCII range: characters at or above 0x80
are never letters, digits or whitespace and are left unchanged by
to_upper/to_lower. None of these operations raise; failures resolve into
the -1 sentinel, the null character or a caller-supplied default.
"""

import logging
from typing import List, Optional, Sequence

from .config import RuntimeConfig, get_config
from .conversions import parse_int, parse_float

logger = logging.getLogger('KaedeRT.text')

NOT_FOUND = -1
WHITESPACE = " \t\n\r\f\v"
ASCII_DIGITS = "0123456789"
ASCII_LOWER = "abcdefghijklmnopqrstuvwxyz"
ASCII_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

_TO_UPPER = str.maketrans(ASCII_LOWER, ASCII_UPPER)
_TO_LOWER = str.maketrans(ASCII_UPPER, ASCII_LOWER)


def _all_chars(s: str, charset: str) -> bool:
    return bool(s) and all(c in charset for c in s)


class TextModule:
    """String operations over single-byte text"""

    def __init__(self, config: Optional[RuntimeConfig] = None):
        self._config = config

    @property
    def config(self) -> RuntimeConfig:
        return self._config if self._config is not None else get_config()

    # ============ Length ============

    @staticmethod
    def length(s: str) -> int:
        return len(s)

    @staticmethod
    def is_empty(s: str) -> bool:
        return len(s) == 0

    # ============ Indexing and slicing ============

    def char_at(self, s: str, index: int) -> str:
        """Character at index, or the null character when out of bounds"""
        if index < 0 or index >= len(s):
            return self.config.null_char
        return s[index]

    @staticmethod
    def slice(s: str, start: int, end: Optional[int] = None) -> str:
        """
        Slice with negative indices counted from the end

        Both bounds are clamped into [0, length]; an empty text is returned
        when start >= end after clamping.

        Args:
            s: Source text
            start: First index (negative counts from the end)
            end: Index after the last character, defaults to the length

        Returns:
            The selected text
        """
        length = len(s)
        if end is None:
            end = length
        if start < 0:
            start += length
        if end < 0:
            end += length
        start = min(max(start, 0), length)
        end = min(max(end, 0), length)
        if start >= end:
            return ""
        return s[start:end]

    @staticmethod
    def substring(s: str, start: int, end: Optional[int] = None) -> str:
        """Slice with absolute indices only; negative bounds clamp to 0"""
        length = len(s)
        if end is None:
            end = length
        start = min(max(start, 0), length)
        end = min(max(end, 0), length)
        if start >= end:
            return ""
        return s[start:end]

    # ============ Search ============

    @staticmethod
    def index_of(s: str, search: str, start: int = 0) -> int:
        """First position of search at or after start, or -1"""
        return s.find(search, max(start, 0))

    @staticmethod
    def last_index_of(s: str, search: str) -> int:
        return s.rfind(search)

    @staticmethod
    def contains(s: str, search: str) -> bool:
        return s.find(search) != NOT_FOUND

    @staticmethod
    def starts_with(s: str, prefix: str) -> bool:
        return s.startswith(prefix)

    @staticmethod
    def ends_with(s: str, suffix: str) -> bool:
        return s.endswith(suffix)

    # ============ Case ============

    @staticmethod
    def to_upper(s: str) -> str:
        return s.translate(_TO_UPPER)

    @staticmethod
    def to_lower(s: str) -> str:
        return s.translate(_TO_LOWER)

    @staticmethod
    def capitalize(s: str) -> str:
        """Upper-case the first character; the rest is left as is"""
        if not s:
            return s
        return s[0].translate(_TO_UPPER) + s[1:]

    # ============ Trimming ============

    @staticmethod
    def trim(s: str) -> str:
        return s.strip(WHITESPACE)

    @staticmethod
    def trim_left(s: str) -> str:
        return s.lstrip(WHITESPACE)

    @staticmethod
    def trim_right(s: str) -> str:
        return s.rstrip(WHITESPACE)

    # ============ Classification ============

    @staticmethod
    def is_digit(c: str) -> bool:
        return _all_chars(c, ASCII_DIGITS)

    @staticmethod
    def is_alpha(c: str) -> bool:
        return _all_chars(c, ASCII_LOWER + ASCII_UPPER)

    @staticmethod
    def is_alnum(c: str) -> bool:
        return _all_chars(c, ASCII_LOWER + ASCII_UPPER + ASCII_DIGITS)

    @staticmethod
    def is_space(c: str) -> bool:
        return _all_chars(c, WHITESPACE)

    @staticmethod
    def is_numeric(s: str) -> bool:
        """Loose check: only digits, '.', '-' and '+'"""
        return _all_chars(s, ASCII_DIGITS + ".-+")

    # ============ Split and join ============

    @staticmethod
    def split(s: str, delimiter: str = " ") -> List[str]:
        """
        Split text on a delimiter

        An empty delimiter yields one element per character. Otherwise the
        result always has at least one element, the whole text when the
        delimiter never occurs.
        """
        if not delimiter:
            return list(s)
        return s.split(delimiter)

    @staticmethod
    def join(parts: Sequence[str], delimiter: str = "") -> str:
        return delimiter.join(parts)

    # ============ Replace ============

    @staticmethod
    def replace(s: str, search: str, replacement: str) -> str:
        """Replace every non-overlapping occurrence, left to right"""
        if not search:
            return s
        return s.replace(search, replacement)

    @staticmethod
    def replace_first(s: str, search: str, replacement: str) -> str:
        if not search:
            return s
        return s.replace(search, replacement, 1)

    # ============ Repeat and pad ============

    @staticmethod
    def repeat(s: str, count: int) -> str:
        if count <= 0:
            return ""
        return s * count

    @staticmethod
    def pad_left(s: str, width: int, fill: str = " ") -> str:
        if len(s) >= width or not fill:
            return s
        return fill[0] * (width - len(s)) + s

    @staticmethod
    def pad_right(s: str, width: int, fill: str = " ") -> str:
        if len(s) >= width or not fill:
            return s
        return s + fill[0] * (width - len(s))

    @staticmethod
    def reverse(s: str) -> str:
        return s[::-1]

    # ============ Numeric conversion ============

    @staticmethod
    def to_int(s: str, default: int = 0) -> int:
        """
        Parse a signed 64-bit decimal integer

        Args:
            s: Text to parse
            default: Value returned for malformed or out-of-range text

        Returns:
            Parsed integer or default
        """
        value = parse_int(s)
        if value is None:
            logger.debug(f"to_int: malformed integer text {s!r}")
            return default
        return value

    @staticmethod
    def to_float(s: str, default: float = 0.0) -> float:
        """Parse a decimal floating point number, or return default"""
        value = parse_float(s)
        if value is None:
            logger.debug(f"to_float: malformed float text {s!r}")
            return default
        return value

    @staticmethod
    def from_int(n: int) -> str:
        return str(int(n))

    @staticmethod
    def from_float(x: float) -> str:
        """Shortest text that to_float parses back to the same double"""
        return repr(float(x))


class StringBuilder:
    """Mutable text accumulator"""

    def __init__(self, initial: str = ""):
        self._parts: List[str] = [initial] if initial else []

    def append(self, s: str) -> 'StringBuilder':
        self._parts.append(s)
        return self

    def append_line(self, s: str = "") -> 'StringBuilder':
        self._parts.append(s)
        self._parts.append("\n")
        return self

    def clear(self) -> 'StringBuilder':
        self._parts = []
        return self

    def length(self) -> int:
        return sum(len(part) for part in self._parts)

    def to_string(self) -> str:
        return "".join(self._parts)

    def __str__(self):
        return self.to_string()

    def __len__(self):
        return self.length()
