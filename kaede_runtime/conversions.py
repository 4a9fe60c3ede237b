"""
Numeric text parsing shared by the text and console modules

Both parsers return None for malformed text and leave the fallback policy
to their callers. A float literal outside the double range is malformed
too: one that overflows to infinity, or a nonzero one that underflows to 0.
"""

import re
import math
from typing import Optional

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INT_PATTERN = re.compile(r'[ \t\n\r\f\v]*([+-]?[0-9]+)[ \t\n\r\f\v]*')
_FLOAT_PATTERN = re.compile(
    r'[ \t\n\r\f\v]*'
    r'([+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?'
    r'|(?i:inf(?:inity)?|nan)))'
    r'[ \t\n\r\f\v]*'
)
_NONZERO_MANTISSA = re.compile(r"^[^eE]*[1-9]")


def parse_int(text: str) -> Optional[int]:
    """
    Parse a signed 64-bit decimal integer

    Surrounding whitespace is allowed; anything else that is not a sign or
    an ASCII digit makes the whole text malformed, as does a value outside
    the 64-bit range.
    """
    match = _INT_PATTERN.fullmatch(text)
    if match is None:
        return None
    try:
        value = int(match.group(1))
    except ValueError:
        # Longer than the interpreter's digit limit, far outside 64 bits
        return None
    if value < INT64_MIN or value > INT64_MAX:
        return None
    return value


def parse_float(text: str) -> Optional[float]:
    """Parse decimal/exponent notation, inf, infinity or nan"""
    match = _FLOAT_PATTERN.fullmatch(text)
    if match is None:
        return None
    literal = match.group(1)
    value = float(literal)
    if math.isinf(value) and 'n' not in literal.lower():
        # A finite literal too large for a double
        return None
    if value == 0.0 and _NONZERO_MANTISSA.search(literal):
        # A nonzero literal too small for a double
        return None
    return value
