"""
Unit tests for the Kaede runtime numeric module and random streams
"""

import unittest
import math
import os
import sys

# Add the runtime to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from kaede_runtime import numeric
from kaede_runtime.config import RuntimeConfig, set_config
from kaede_runtime.numeric import NumericModule
from kaede_runtime.random_stream import RandomStream, default_stream, reset_default_stream


class TestConstants(unittest.TestCase):
    """Test the published constants"""

    def test_values(self):
        self.assertEqual(numeric.PI, math.pi)
        self.assertEqual(numeric.E, math.e)
        self.assertEqual(numeric.TAU, math.tau)
        self.assertEqual(numeric.SQRT2, math.sqrt(2))
        self.assertEqual(numeric.LN2, math.log(2))
        self.assertEqual(numeric.INT_MAX, 9223372036854775807)
        self.assertEqual(numeric.INT_MIN, -9223372036854775808)
        self.assertEqual(numeric.FLOAT_MAX, 1.7976931348623157e308)
        self.assertTrue(math.isinf(numeric.INFINITY))
        self.assertTrue(math.isnan(numeric.NAN))

    def test_class_attributes(self):
        self.assertEqual(NumericModule.PI, numeric.PI)
        self.assertEqual(NumericModule.NEG_INFINITY, -math.inf)


class TestBasic(unittest.TestCase):
    """Test abs, sign, min, max and clamp"""

    def setUp(self):
        self.m = NumericModule(RandomStream(1))

    def test_abs_and_sign(self):
        self.assertEqual(self.m.abs(-3), 3)
        self.assertEqual(self.m.abs(-2.5), 2.5)
        self.assertEqual(self.m.sign(-7), -1)
        self.assertEqual(self.m.sign(0.0), 0)
        self.assertEqual(self.m.sign(4.2), 1)
        self.assertEqual(self.m.sign(math.nan), 0)

    def test_min_max(self):
        self.assertEqual(self.m.min(3, 5), 3)
        self.assertEqual(self.m.max(3, 5), 5)
        self.assertTrue(math.isnan(self.m.min(math.nan, 1.0)))
        self.assertTrue(math.isnan(self.m.max(1.0, math.nan)))

    def test_clamp(self):
        self.assertEqual(self.m.clamp(5, 0, 10), 5)
        self.assertEqual(self.m.clamp(-5, 0, 10), 0)
        self.assertEqual(self.m.clamp(15, 0, 10), 10)
        self.assertEqual(self.m.clamp(2.5, 1.0, 2.0), 2.0)


class TestRounding(unittest.TestCase):
    """Test floor, ceil, trunc and round"""

    def setUp(self):
        self.m = NumericModule(RandomStream(1))

    def test_floor_ceil_trunc(self):
        self.assertEqual(self.m.floor(-1.5), -2.0)
        self.assertEqual(self.m.ceil(-1.5), -1.0)
        self.assertEqual(self.m.trunc(-1.7), -1.0)
        self.assertIsInstance(self.m.floor(2.5), float)

    def test_round_half_away_from_zero(self):
        self.assertEqual(self.m.round(2.5), 3.0)
        self.assertEqual(self.m.round(-2.5), -3.0)
        self.assertEqual(self.m.round(0.5), 1.0)
        self.assertEqual(self.m.round(1.4999), 1.0)

    def test_signed_zero(self):
        self.assertEqual(math.copysign(1.0, self.m.ceil(-0.5)), -1.0)
        self.assertEqual(math.copysign(1.0, self.m.round(-0.4)), -1.0)
        self.assertEqual(math.copysign(1.0, self.m.trunc(-0.0)), -1.0)

    def test_non_finite(self):
        self.assertEqual(self.m.floor(math.inf), math.inf)
        self.assertTrue(math.isnan(self.m.round(math.nan)))


class TestElementary(unittest.TestCase):
    """Test IEEE results where Python's math module would raise"""

    def setUp(self):
        self.m = NumericModule(RandomStream(1))

    def test_sqrt(self):
        self.assertEqual(self.m.sqrt(9.0), 3.0)
        self.assertTrue(math.isnan(self.m.sqrt(-1.0)))
        self.assertAlmostEqual(self.m.cbrt(-27.0), -3.0)

    def test_pow(self):
        self.assertEqual(self.m.pow(2.0, 10.0), 1024.0)
        self.assertEqual(self.m.pow(0.0, -1.0), math.inf)
        self.assertEqual(self.m.pow(-0.0, -1.0), -math.inf)
        self.assertEqual(self.m.pow(-0.0, -2.0), math.inf)
        self.assertTrue(math.isnan(self.m.pow(-8.0, 1.0 / 3.0)))
        self.assertEqual(self.m.pow(10.0, 400.0), math.inf)
        self.assertEqual(self.m.pow(-10.0, 401.0), -math.inf)

    def test_exp_overflow(self):
        self.assertEqual(self.m.exp(1000.0), math.inf)
        self.assertEqual(self.m.expm1(1000.0), math.inf)
        self.assertEqual(self.m.exp(0.0), 1.0)

    def test_logarithms(self):
        self.assertEqual(self.m.log(1.0), 0.0)
        self.assertEqual(self.m.log(0.0), -math.inf)
        self.assertTrue(math.isnan(self.m.log(-1.0)))
        self.assertEqual(self.m.log2(8.0), 3.0)
        self.assertEqual(self.m.log10(1000.0), 3.0)
        self.assertEqual(self.m.log1p(-1.0), -math.inf)
        self.assertTrue(math.isnan(self.m.log1p(-2.0)))
        self.assertTrue(math.isnan(self.m.log(math.nan)))

    def test_trigonometry(self):
        self.assertEqual(self.m.sin(0.0), 0.0)
        self.assertAlmostEqual(self.m.cos(numeric.PI), -1.0)
        self.assertTrue(math.isnan(self.m.sin(math.inf)))
        self.assertTrue(math.isnan(self.m.tan(-math.inf)))
        self.assertTrue(math.isnan(self.m.asin(2.0)))
        self.assertTrue(math.isnan(self.m.acos(-1.5)))
        self.assertAlmostEqual(self.m.atan2(1.0, 1.0), numeric.PI / 4)

    def test_hyperbolic(self):
        self.assertEqual(self.m.sinh(1000.0), math.inf)
        self.assertEqual(self.m.sinh(-1000.0), -math.inf)
        self.assertEqual(self.m.cosh(-1000.0), math.inf)
        self.assertTrue(math.isnan(self.m.acosh(0.5)))
        self.assertEqual(self.m.atanh(1.0), math.inf)
        self.assertEqual(self.m.atanh(-1.0), -math.inf)
        self.assertTrue(math.isnan(self.m.atanh(2.0)))

    def test_angles(self):
        self.assertAlmostEqual(self.m.to_radians(180.0), numeric.PI)
        self.assertAlmostEqual(self.m.to_degrees(numeric.PI), 180.0)

    def test_fmod_and_misc(self):
        self.assertEqual(self.m.fmod(7.0, 3.0), 1.0)
        self.assertEqual(self.m.fmod(-7.0, 3.0), -1.0)
        self.assertTrue(math.isnan(self.m.fmod(1.0, 0.0)))
        self.assertTrue(math.isnan(self.m.fmod(math.inf, 2.0)))
        self.assertEqual(self.m.hypot(3.0, 4.0), 5.0)
        self.assertEqual(self.m.lerp(0.0, 10.0, 0.25), 2.5)

    def test_predicates(self):
        self.assertTrue(self.m.is_nan(math.nan))
        self.assertTrue(self.m.is_inf(-math.inf))
        self.assertFalse(self.m.is_finite(math.inf))
        self.assertTrue(self.m.is_finite(1.0))


class TestIntegerTheory(unittest.TestCase):
    """Test gcd, lcm, factorial, fibonacci and is_prime"""

    def setUp(self):
        self.m = NumericModule(RandomStream(1))

    def test_gcd_lcm(self):
        self.assertEqual(self.m.gcd(12, 18), 6)
        self.assertEqual(self.m.gcd(-12, 18), 6)
        self.assertEqual(self.m.gcd(0, 0), 0)
        self.assertEqual(self.m.lcm(4, 6), 12)
        self.assertEqual(self.m.lcm(-4, 6), 12)
        self.assertEqual(self.m.lcm(0, 5), 0)

    def test_factorial(self):
        self.assertEqual(self.m.factorial(0), 1)
        self.assertEqual(self.m.factorial(10), 3628800)
        self.assertEqual(self.m.factorial(-3), 0)

    def test_fibonacci(self):
        self.assertEqual([self.m.fibonacci(n) for n in range(8)], [0, 1, 1, 2, 3, 5, 8, 13])
        self.assertEqual(self.m.fibonacci(-4), 0)
        self.assertEqual(self.m.fibonacci(90), 2880067194370816120)

    def test_is_prime(self):
        primes = [n for n in range(-5, 30) if self.m.is_prime(n)]
        self.assertEqual(primes, [2, 3, 5, 7, 11, 13, 17, 19, 23, 29])
        self.assertTrue(self.m.is_prime(2147483647))
        self.assertFalse(self.m.is_prime(2147483649))


class TestRandomStream(unittest.TestCase):
    """Test seeding, reproducibility and ranges of random streams"""

    def test_reference_sequence(self):
        """Seed 5489 starts the reference MT19937 sequence"""
        stream = RandomStream(5489)
        self.assertEqual(stream.next_u32(), 3499211612)
        self.assertEqual(stream.next_u32(), 581869302)
        self.assertEqual(stream.next_u32(), 3890346734)

    def test_seed_42_outputs(self):
        stream = RandomStream(42)
        self.assertEqual([stream.next_u32() for _ in range(4)],
                         [1608637542, 3421126067, 4083286876, 787846414])

    def test_seed_42_random(self):
        """random() is (a >> 5, b >> 6) over two outputs as a 53-bit fraction"""
        stream = RandomStream(42)
        self.assertEqual(stream.random(), (50269923 * 67108864 + 53455094) / 2 ** 53)
        self.assertEqual(stream.random(), 0.9507143064099162)
        self.assertEqual(stream.random(), 0.7319939418114051)

    def test_seed_42_random_int(self):
        """random_int draws bit_length(span) high bits and rejects values past the span"""
        stream = RandomStream(42)
        self.assertEqual([stream.random_int(1, 10) for _ in range(8)], [6, 3, 10, 10, 3, 8, 3, 2])

    def test_seed_42_random_float(self):
        stream = RandomStream(42)
        self.assertEqual(stream.random_float(0.0, 2.0), 2.0 * 0.3745401188473625)

    def test_same_seed_same_sequence(self):
        a = RandomStream(42)
        b = RandomStream(42)
        draws_a = [a.random_int(1, 100) for _ in range(50)] + [a.random() for _ in range(10)]
        draws_b = [b.random_int(1, 100) for _ in range(50)] + [b.random() for _ in range(10)]
        self.assertEqual(draws_a, draws_b)

    def test_reseed_restarts_sequence(self):
        stream = RandomStream(7)
        first = [stream.next_u32() for _ in range(5)]
        stream.seed(7)
        self.assertEqual([stream.next_u32() for _ in range(5)], first)

    def test_seed_reduced_mod_2_32(self):
        self.assertEqual(RandomStream(2 ** 32 + 5).next_u32(), RandomStream(5).next_u32())

    def test_random_range(self):
        stream = RandomStream(3)
        for _ in range(1000):
            value = stream.random()
            self.assertGreaterEqual(value, 0.0)
            self.assertLess(value, 1.0)

    def test_random_int_inclusive(self):
        stream = RandomStream(11)
        seen = {stream.random_int(1, 6) for _ in range(600)}
        self.assertEqual(seen, {1, 2, 3, 4, 5, 6})

    def test_random_int_degenerate_and_reversed(self):
        stream = RandomStream(11)
        self.assertEqual(stream.random_int(4, 4), 4)
        for _ in range(100):
            self.assertIn(stream.random_int(10, 1), range(1, 11))

    def test_random_int_full_range(self):
        stream = RandomStream(99)
        value = stream.random_int(numeric.INT_MIN, numeric.INT_MAX)
        self.assertGreaterEqual(value, numeric.INT_MIN)
        self.assertLessEqual(value, numeric.INT_MAX)

    def test_random_float(self):
        stream = RandomStream(5)
        for _ in range(500):
            value = stream.random_float(-2.0, 3.0)
            self.assertGreaterEqual(value, -2.0)
            self.assertLess(value, 3.0)
        self.assertEqual(stream.random_float(1.5, 1.5), 1.5)


class TestDefaultStream(unittest.TestCase):
    """Test the process-wide stream"""

    def setUp(self):
        reset_default_stream()

    def tearDown(self):
        set_config(None)
        reset_default_stream()

    def test_configured_seed(self):
        set_config(RuntimeConfig(random_seed=5489))
        self.assertEqual(default_stream().next_u32(), 3499211612)

    def test_module_delegates_to_default_stream(self):
        set_config(RuntimeConfig(random_seed=123))
        m = NumericModule()
        first = [m.random_int(0, 1000) for _ in range(10)]
        m.seed(123)
        self.assertEqual([m.random_int(0, 1000) for _ in range(10)], first)
        self.assertIs(m.stream, default_stream())

    def test_unseeded_stream_draws(self):
        set_config(RuntimeConfig())
        value = NumericModule().random()
        self.assertGreaterEqual(value, 0.0)
        self.assertLess(value, 1.0)


if __name__ == '__main__':
    unittest.main()
