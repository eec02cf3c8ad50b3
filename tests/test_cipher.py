"""
cipher.py 테스트: 준동형 덧셈/뺄셈
"""
import pytest

from zkscore.cipher import Ciphertext, add, sub
from zkscore.field import FR, CURVE_ORDER, TracingFieldArithmetic


class TestCiphertext:
    def test_components(self):
        c = Ciphertext(3, FR(4))
        assert c.c1 == FR(3)
        assert c.c2 == FR(4)

    def test_immutable(self):
        c = Ciphertext(1, 2)
        with pytest.raises(AttributeError):
            c.c1 = FR(5)

    def test_fields_roundtrip(self):
        c = Ciphertext(11, 22)
        assert Ciphertext.from_fields(c.to_fields()) == c

    def test_equality(self):
        assert Ciphertext(1, 2) == Ciphertext(FR(1), FR(2))
        assert Ciphertext(1, 2) != Ciphertext(1, 3)


class TestAdd:
    def test_multiplies_c2_keeps_c1(self):
        x = Ciphertext(7, 6)
        y = Ciphertext(9, 5)
        assert add(x, y) == Ciphertext(7, 30)


class TestSub:
    def test_divides_c2(self):
        x = Ciphertext(7, 30)
        y = Ciphertext(9, 5)
        assert sub(x, y) == Ciphertext(7, 6)

    def test_zero_denominator_returns_x(self):
        x = Ciphertext(7, 30)
        assert sub(x, Ciphertext(9, 0)) == x

    def test_zero_denominator_same_operation_shape(self):
        x = Ciphertext(7, 30)
        zero_ops = TracingFieldArithmetic()
        sub(x, Ciphertext(9, 0), zero_ops)
        nonzero_ops = TracingFieldArithmetic()
        sub(x, Ciphertext(9, 5), nonzero_ops)
        assert zero_ops.counts == nonzero_ops.counts

    @pytest.mark.parametrize("a2, b2", [(30, 5), (1, 2), (CURVE_ORDER - 1, 12345),
                                        (987654321, CURVE_ORDER - 2)])
    def test_add_sub_roundtrip(self, a2, b2):
        a = Ciphertext(17, a2)
        b = Ciphertext(19, b2)
        assert add(sub(a, b), b) == a
