"""
modexp.py 테스트: square-and-multiply
"""
import random

import pytest

from zkscore.field import FR, CURVE_ORDER, TracingFieldArithmetic
from zkscore.modexp import EXPONENT_BITS, exponent_bits, mod_exp


class TestExponentBits:
    def test_width(self):
        assert len(exponent_bits(FR(1))) == EXPONENT_BITS == 255

    def test_big_endian(self):
        bits = exponent_bits(FR(5))
        assert bits[-3:] == [FR(1), FR(0), FR(1)]
        assert all(b == FR(0) for b in bits[:-3])


class TestModExp:
    def test_small(self):
        assert mod_exp(FR(3), FR(5)) == FR(243)

    def test_int_arguments(self):
        assert mod_exp(2, 10) == FR(1024)

    @pytest.mark.parametrize("base", [0, 1, 2, 5, CURVE_ORDER - 1, 123456789])
    def test_exponent_zero(self, base):
        assert mod_exp(FR(base), FR(0)) == FR(1)

    @pytest.mark.parametrize("base", [0, 1, 2, 5, CURVE_ORDER - 1, 123456789])
    def test_exponent_one(self, base):
        assert mod_exp(FR(base), FR(1)) == FR(base)

    def test_matches_builtin_pow(self):
        rng = random.Random(1234)
        for _ in range(10):
            base = rng.randrange(CURVE_ORDER)
            exponent = rng.randrange(1 << 16)
            assert int(mod_exp(FR(base), FR(exponent))) == pow(base, exponent, CURVE_ORDER)

    def test_boundary_exponent(self):
        exponent = (1 << 16) - 1
        assert int(mod_exp(FR(7), exponent)) == pow(7, exponent, CURVE_ORDER)

    def test_large_exponent(self):
        exponent = CURVE_ORDER - 2
        # 페르마 소정리: a^(p-2) = a^(-1)
        assert mod_exp(FR(7), exponent) * FR(7) == FR(1)

    def test_uniform_operation_count(self):
        """비트 패턴과 무관하게 같은 수의 원시 연산을 수행한다."""
        counts = []
        for exponent in (0, 1, (1 << 200) + 12345, CURVE_ORDER - 1):
            ops = TracingFieldArithmetic()
            mod_exp(FR(5), exponent, ops)
            counts.append(dict(ops.counts))
        assert all(c == counts[0] for c in counts)
        assert counts[0]["square"] == EXPONENT_BITS
