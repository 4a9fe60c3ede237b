"""
Reproducible Random Streams

A RandomStream wraps an MT19937 generator whose seeding and draws are fixed
so that every runtime backend produces the same sequence for the same seed:

- seed(s) runs the reference init_genrand on s mod 2**32, the same state
  C++ std::mt19937(s) starts from
- next_u32() is the next tempered 32-bit output
- random() builds a 53-bit double from two outputs (a >> 5, b >> 6)
- random_int(lo, hi) rejection-samples bit_length(hi - lo + 1) bits

Streams are not thread-safe. The process-wide default stream is seeded
lazily from host entropy unless the configuration names a seed.
"""

import math
import random
import logging
from typing import Optional

from . import host
from .config import get_config

logger = logging.getLogger('KaedeRT.random')

MT_STATE_SIZE = 624
_MASK_32 = 0xFFFFFFFF
_STATE_VERSION = 3  # random.Random getstate() layout


def mt19937_state(seed: int) -> tuple:
    """Reference MT19937 init_genrand key schedule"""
    state = [seed & _MASK_32]
    for i in range(1, MT_STATE_SIZE):
        prev = state[-1]
        state.append((1812433253 * (prev ^ (prev >> 30)) + i) & _MASK_32)
    return tuple(state)


class RandomStream:
    """Seedable pseudo-random stream"""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random()
        self._initialized = False
        if seed is not None:
            self.seed(seed)

    def seed(self, s: int) -> None:
        """Reset the stream; equal seeds give equal sequences"""
        # Index 624 makes the generator twist before its first output
        internal = mt19937_state(int(s)) + (MT_STATE_SIZE,)
        self._rng.setstate((_STATE_VERSION, internal, None))
        self._initialized = True
        logger.debug(f"Random stream seeded with {int(s) & _MASK_32}")

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            self.seed(host.entropy_u32())

    def next_u32(self) -> int:
        self._ensure_initialized()
        return self._rng.getrandbits(32)

    def random(self) -> float:
        """Uniform double in [0, 1)"""
        self._ensure_initialized()
        return self._rng.random()

    def random_int(self, lo: int, hi: int) -> int:
        """
        Uniform integer in [lo, hi], both bounds inclusive

        Reversed bounds are swapped; lo == hi returns lo without consuming
        any output.
        """
        if lo > hi:
            lo, hi = hi, lo
        if lo == hi:
            return lo
        self._ensure_initialized()
        span = hi - lo + 1
        bits = span.bit_length()
        r = self._rng.getrandbits(bits)
        while r >= span:
            r = self._rng.getrandbits(bits)
        return lo + r

    def random_float(self, lo: float, hi: float) -> float:
        """Uniform double in the half-open range [lo, hi)"""
        if lo == hi:
            return lo
        result = lo + (hi - lo) * self.random()
        if result == hi:
            # Rounding can land on the excluded bound
            result = math.nextafter(hi, lo)
        return result


_default_stream: Optional[RandomStream] = None


def default_stream() -> RandomStream:
    """Process-wide stream shared by the module-level draw functions

    Not thread-safe: concurrent draws need external synchronization.
    """
    global _default_stream
    if _default_stream is None:
        _default_stream = RandomStream(get_config().random_seed)
    return _default_stream


def reset_default_stream() -> None:
    """Drop the default stream so the next draw re-initializes it"""
    global _default_stream
    _default_stream = None
