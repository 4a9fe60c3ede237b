"""
Kaede Runtime Numeric Module

Constants, elementary math with IEEE-754 semantics, clamping, random
number generation and integer-theory helpers.

Python's math module raises ValueError/OverflowError where C returns NaN
or an infinity; every wrapper here converts those cases back to the IEEE
result so that no numeric operation terminates a compiled program.
"""

import math
import logging
from typing import Optional, Union

from .random_stream import RandomStream, default_stream

logger = logging.getLogger('KaedeRT.math')

Number = Union[int, float]

# ============ Constants ============

PI = 3.141592653589793
E = 2.718281828459045
TAU = 6.283185307179586
SQRT2 = 1.4142135623730951
SQRT1_2 = 0.7071067811865476
LN2 = 0.6931471805599453
LN10 = 2.302585092994046
LOG2E = 1.4426950408889634
LOG10E = 0.4342944819032518

INT_MAX = 2 ** 63 - 1
INT_MIN = -(2 ** 63)
FLOAT_MAX = 1.7976931348623157e+308
FLOAT_MIN = 5e-324  # smallest positive subnormal
INFINITY = math.inf
NEG_INFINITY = -math.inf
NAN = math.nan


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x == math.floor(x) and math.fmod(x, 2.0) != 0.0


def _signed_zero(result: float, x: float) -> float:
    """Integral results of zero keep the sign of their input"""
    if result == 0.0:
        return math.copysign(0.0, x)
    return float(result)


class NumericModule:
    """Math operations for compiled programs

    Random draws go to the stream given at construction, or to the
    process-wide default stream.
    """

    PI = PI
    E = E
    TAU = TAU
    SQRT2 = SQRT2
    SQRT1_2 = SQRT1_2
    LN2 = LN2
    LN10 = LN10
    LOG2E = LOG2E
    LOG10E = LOG10E
    INT_MAX = INT_MAX
    INT_MIN = INT_MIN
    FLOAT_MAX = FLOAT_MAX
    FLOAT_MIN = FLOAT_MIN
    INFINITY = INFINITY
    NEG_INFINITY = NEG_INFINITY
    NAN = NAN

    def __init__(self, stream: Optional[RandomStream] = None):
        self._stream = stream

    @property
    def stream(self) -> RandomStream:
        return self._stream if self._stream is not None else default_stream()

    # ============ Basic ============

    @staticmethod
    def abs(x: Number) -> Number:
        return abs(x)

    @staticmethod
    def sign(x: Number) -> int:
        """1, -1 or 0; NaN has no sign and gives 0"""
        if x > 0:
            return 1
        if x < 0:
            return -1
        return 0

    @staticmethod
    def min(a: Number, b: Number) -> Number:
        if isinstance(a, float) and math.isnan(a) or isinstance(b, float) and math.isnan(b):
            return NAN
        return b if b < a else a

    @staticmethod
    def max(a: Number, b: Number) -> Number:
        if isinstance(a, float) and math.isnan(a) or isinstance(b, float) and math.isnan(b):
            return NAN
        return b if b > a else a

    @classmethod
    def clamp(cls, x: Number, lo: Number, hi: Number) -> Number:
        """
        Clamp x into [lo, hi]

        Precondition: lo <= hi. Callers must not pass reversed bounds; the
        result for lo > hi is not part of the contract.
        """
        return cls.max(lo, cls.min(x, hi))

    # ============ Rounding ============

    @staticmethod
    def floor(x: float) -> float:
        if not math.isfinite(x):
            return float(x)
        return _signed_zero(math.floor(x), x)

    @staticmethod
    def ceil(x: float) -> float:
        if not math.isfinite(x):
            return float(x)
        return _signed_zero(math.ceil(x), x)

    @staticmethod
    def trunc(x: float) -> float:
        if not math.isfinite(x):
            return float(x)
        return _signed_zero(math.trunc(x), x)

    @staticmethod
    def round(x: float) -> float:
        """Round half away from zero, like C round()"""
        if not math.isfinite(x):
            return float(x)
        t = math.trunc(x)
        if abs(x - t) >= 0.5:
            t += 1 if x > 0 else -1
        return _signed_zero(t, x)

    # ============ Powers and logarithms ============

    @staticmethod
    def pow(base: float, exponent: float) -> float:
        try:
            return math.pow(base, exponent)
        except ValueError:
            if base == 0.0 and exponent < 0:
                # Pole: pow(+-0, y<0) is +-inf, signed only for odd integer y
                if _is_odd_integer(exponent):
                    return math.copysign(INFINITY, base)
                return INFINITY
            return NAN
        except OverflowError:
            if base < 0 and _is_odd_integer(exponent):
                return NEG_INFINITY
            return INFINITY

    @staticmethod
    def sqrt(x: float) -> float:
        if x < 0:
            return NAN
        return math.sqrt(x)

    @staticmethod
    def cbrt(x: float) -> float:
        return math.cbrt(x)

    @staticmethod
    def exp(x: float) -> float:
        try:
            return math.exp(x)
        except OverflowError:
            return INFINITY

    @staticmethod
    def expm1(x: float) -> float:
        try:
            return math.expm1(x)
        except OverflowError:
            return INFINITY

    @staticmethod
    def _log(func, x: float, pole: float = 0.0) -> float:
        if math.isnan(x):
            return NAN
        if x == pole:
            return NEG_INFINITY
        if x < pole:
            return NAN
        return func(x)

    @classmethod
    def log(cls, x: float) -> float:
        return cls._log(math.log, x)

    @classmethod
    def log2(cls, x: float) -> float:
        return cls._log(math.log2, x)

    @classmethod
    def log10(cls, x: float) -> float:
        return cls._log(math.log10, x)

    @classmethod
    def log1p(cls, x: float) -> float:
        return cls._log(math.log1p, x, pole=-1.0)

    # ============ Trigonometry ============

    @staticmethod
    def sin(x: float) -> float:
        if math.isinf(x):
            return NAN
        return math.sin(x)

    @staticmethod
    def cos(x: float) -> float:
        if math.isinf(x):
            return NAN
        return math.cos(x)

    @staticmethod
    def tan(x: float) -> float:
        if math.isinf(x):
            return NAN
        return math.tan(x)

    @staticmethod
    def asin(x: float) -> float:
        if abs(x) > 1:
            return NAN
        return math.asin(x)

    @staticmethod
    def acos(x: float) -> float:
        if abs(x) > 1:
            return NAN
        return math.acos(x)

    @staticmethod
    def atan(x: float) -> float:
        return math.atan(x)

    @staticmethod
    def atan2(y: float, x: float) -> float:
        return math.atan2(y, x)

    # Hyperbolic

    @staticmethod
    def sinh(x: float) -> float:
        try:
            return math.sinh(x)
        except OverflowError:
            return math.copysign(INFINITY, x)

    @staticmethod
    def cosh(x: float) -> float:
        try:
            return math.cosh(x)
        except OverflowError:
            return INFINITY

    @staticmethod
    def tanh(x: float) -> float:
        return math.tanh(x)

    @staticmethod
    def asinh(x: float) -> float:
        return math.asinh(x)

    @staticmethod
    def acosh(x: float) -> float:
        if x < 1:
            return NAN
        return math.acosh(x)

    @staticmethod
    def atanh(x: float) -> float:
        if abs(x) == 1:
            return math.copysign(INFINITY, x)
        if abs(x) > 1:
            return NAN
        return math.atanh(x)

    # ============ Angles ============

    @staticmethod
    def to_radians(degrees: float) -> float:
        return degrees * PI / 180.0

    @staticmethod
    def to_degrees(radians: float) -> float:
        return radians * 180.0 / PI

    # ============ Other ============

    @staticmethod
    def hypot(x: float, y: float) -> float:
        return math.hypot(x, y)

    @staticmethod
    def fmod(x: float, y: float) -> float:
        if math.isinf(x) or y == 0:
            return NAN
        return math.fmod(x, y)

    @staticmethod
    def lerp(a: float, b: float, t: float) -> float:
        return a + (b - a) * t

    @staticmethod
    def is_nan(x: float) -> bool:
        return math.isnan(x)

    @staticmethod
    def is_inf(x: float) -> bool:
        return math.isinf(x)

    @staticmethod
    def is_finite(x: float) -> bool:
        return math.isfinite(x)

    # ============ Random ============

    def random(self) -> float:
        return self.stream.random()

    def random_int(self, lo: int, hi: int) -> int:
        return self.stream.random_int(lo, hi)

    def random_float(self, lo: float, hi: float) -> float:
        return self.stream.random_float(lo, hi)

    def next_u32(self) -> int:
        return self.stream.next_u32()

    def seed(self, s: int) -> None:
        self.stream.seed(s)

    # ============ Integer theory ============

    @staticmethod
    def gcd(a: int, b: int) -> int:
        """Greatest common divisor of |a| and |b|; gcd(0, 0) == 0"""
        return math.gcd(a, b)

    @staticmethod
    def lcm(a: int, b: int) -> int:
        """Least common multiple of |a| and |b|; 0 if either is 0"""
        if a == 0 or b == 0:
            return 0
        return abs(a // math.gcd(a, b) * b)

    @staticmethod
    def factorial(n: int) -> int:
        """n! for n >= 0, and 0 for negative n"""
        if n < 0:
            return 0
        return math.factorial(n)

    @staticmethod
    def fibonacci(n: int) -> int:
        """0-indexed Fibonacci number; n <= 0 gives 0"""
        if n <= 0:
            return 0
        a, b = 0, 1
        for _ in range(n - 1):
            a, b = b, a + b
        return b

    @staticmethod
    def is_prime(n: int) -> bool:
        """Trial division by odd numbers up to sqrt(n)"""
        if n < 2:
            return False
        if n == 2:
            return True
        if n % 2 == 0:
            return False
        i = 3
        while i * i <= n:
            if n % i == 0:
                return False
            i += 2
        return True
