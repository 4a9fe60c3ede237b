"""
Kaede Runtime Formatting

Canonical rendering of primitive values and type-checked printf-style
templates.

A template is compiled once into a FormatTemplate. Rendering checks the
argument count and the kind of every argument against its placeholder
before producing any text, and raises FormatError on a mismatch.

Placeholder syntax: %[flags][width][.precision]conversion

    flags       any of "-+ #0" ("#" only for x, X and floating conversions)
    conversion  s  any primitive, canonical rendering
                d i  integer
                x X o  integer in hex/octal (negative values keep a minus sign)
                f F e E g G  integer or float
                c  one-character text or an integer 0..255
                b  boolean, rendered true/false
    %%          a literal percent sign
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union

from cachetools import LRUCache, cached

from .exceptions import FormatError

logger = logging.getLogger('KaedeRT.format')

FLAG_CHARS = "-+ #0"
DIGITS = "0123456789"
INTEGER_CONVERSIONS = "dixXo"
FLOAT_CONVERSIONS = "fFeEgG"
CONVERSIONS = "s" + INTEGER_CONVERSIONS + FLOAT_CONVERSIONS + "cb"
TEMPLATE_CACHE_SIZE = 256


def render_value(value: Any) -> str:
    """
    Canonical text for a primitive value

    Booleans render as true/false, integers in decimal, floats with the
    compact C "%g" format and text as itself.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return "%g" % value
    if isinstance(value, str):
        return value
    return str(value)


def _kind_name(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "text"
    return type(value).__name__


@dataclass(frozen=True)
class Placeholder:
    """One conversion in a template"""
    conversion: str
    flags: str = ""
    width: Optional[int] = None
    precision: Optional[int] = None
    offset: int = 0

    def spec(self, conversion: Optional[str] = None, with_precision: bool = True) -> str:
        """The equivalent %-operator conversion string"""
        parts = ["%", self.flags]
        if self.width is not None:
            parts.append(str(self.width))
        if with_precision and self.precision is not None:
            parts.append(f".{self.precision}")
        parts.append(conversion or self.conversion)
        return "".join(parts)

    def accepts(self, value: Any) -> bool:
        conv = self.conversion
        if conv == "s":
            return isinstance(value, (bool, int, float, str))
        if conv == "b":
            return isinstance(value, bool)
        if isinstance(value, bool):
            return False
        if conv in INTEGER_CONVERSIONS:
            return isinstance(value, int)
        if conv in FLOAT_CONVERSIONS:
            return isinstance(value, (int, float))
        if conv == "c":
            if isinstance(value, str):
                return len(value) == 1
            return isinstance(value, int) and 0 <= value <= 255
        return False

    def render(self, value: Any) -> str:
        conv = self.conversion
        if conv in ("s", "b"):
            return self.spec("s") % render_value(value)
        if conv == "c":
            char = value if isinstance(value, str) else chr(value)
            return self.spec("c", with_precision=False) % char
        if conv in FLOAT_CONVERSIONS:
            return self.spec() % float(value)
        return self.spec() % value


Segment = Union[str, Placeholder]


class FormatTemplate:
    """A parsed, reusable format template"""

    def __init__(self, template: str):
        self.template = template
        self.segments: List[Segment] = self._parse(template)
        self.placeholders: List[Placeholder] = [
            seg for seg in self.segments if isinstance(seg, Placeholder)
        ]

    @property
    def arity(self) -> int:
        return len(self.placeholders)

    def _error(self, message: str, position: int) -> FormatError:
        return FormatError(message, template=self.template, position=position)

    def _parse(self, template: str) -> List[Segment]:
        segments: List[Segment] = []
        literal: List[str] = []
        i = 0
        n = len(template)

        while i < n:
            ch = template[i]
            if ch != "%":
                literal.append(ch)
                i += 1
                continue

            start = i
            i += 1
            if i < n and template[i] == "%":
                literal.append("%")
                i += 1
                continue

            flags_start = i
            while i < n and template[i] in FLAG_CHARS:
                i += 1
            flags = template[flags_start:i]

            width_start = i
            while i < n and template[i] in DIGITS:
                i += 1
            width = int(template[width_start:i]) if i > width_start else None

            precision = None
            if i < n and template[i] == ".":
                i += 1
                prec_start = i
                while i < n and template[i] in DIGITS:
                    i += 1
                precision = int(template[prec_start:i]) if i > prec_start else 0

            if i >= n:
                raise self._error("incomplete placeholder at end of template", start)

            conv = template[i]
            if conv not in CONVERSIONS:
                raise self._error(f"unknown conversion '%{conv}'", start)
            if "#" in flags and conv not in "xX" + FLOAT_CONVERSIONS:
                raise self._error(f"flag '#' is not allowed with '%{conv}'", start)
            i += 1

            if literal:
                segments.append("".join(literal))
                literal = []
            segments.append(Placeholder(conv, flags, width, precision, start))

        if literal:
            segments.append("".join(literal))
        return segments

    def check(self, args: Sequence[Any]) -> None:
        """
        Validate arity and argument kinds

        Raises:
            FormatError: On the first mismatch
        """
        if len(args) != self.arity:
            raise FormatError(
                f"template expects {self.arity} argument(s), got {len(args)}",
                template=self.template,
            )
        for index, (placeholder, value) in enumerate(zip(self.placeholders, args)):
            if not placeholder.accepts(value):
                raise self._error(
                    f"argument {index} of kind {_kind_name(value)} does not match "
                    f"'%{placeholder.conversion}'",
                    placeholder.offset,
                )
            if placeholder.conversion in FLOAT_CONVERSIONS and isinstance(value, int):
                try:
                    float(value)
                except OverflowError:
                    raise self._error(
                        f"argument {index} is too large for '%{placeholder.conversion}'",
                        placeholder.offset,
                    ) from None

    def render(self, args: Sequence[Any]) -> str:
        self.check(args)
        values = iter(args)
        out = []
        for segment in self.segments:
            if isinstance(segment, Placeholder):
                out.append(segment.render(next(values)))
            else:
                out.append(segment)
        return "".join(out)


@cached(cache=LRUCache(maxsize=TEMPLATE_CACHE_SIZE))
def compile_template(template: str) -> FormatTemplate:
    """Parse a template, reusing earlier parses of the same text"""
    logger.debug(f"Compiling format template {template!r}")
    return FormatTemplate(template)


def format_text(template: str, *args: Any) -> str:
    """Render a template with its arguments"""
    return compile_template(template).render(args)
