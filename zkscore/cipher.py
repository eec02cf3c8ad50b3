"""
준동형 암호문 (Homomorphic Ciphertext)
======================================

두 성분으로 이루어진 암호문 (c1, c2):
  - c1: 암호화 난수 r 에 묶인 마스킹 성분 (G^r)
  - c2: 마스킹된 평문 성분 (G^m · pk^r)

**준동형 성질**:
  평문 영역의 덧셈은 c2 성분끼리의 곱셈으로, 뺄셈은 나눗셈으로 대응한다.
    add(x, y).c2 = x.c2 · y.c2
    sub(x, y).c2 = x.c2 / y.c2
  c1 은 첫 번째 피연산자의 것을 그대로 유지한다.

**영 나눗셈 정책**:
  sub 에서 y.c2 == 0 이면 예외 없이 x 를 그대로 돌려준다.
  검증 가능한 계산 안에서는 분기할 수 없으므로, 분모를 1 로 바꿔 나눈 뒤
  select 로 결과를 고른다.
"""

from zkscore.field import FR, HOST, to_fr


class Ciphertext:
    """불변 암호문 쌍 (c1, c2)."""

    __slots__ = ("_c1", "_c2")

    def __init__(self, c1, c2):
        object.__setattr__(self, "_c1", to_fr(c1))
        object.__setattr__(self, "_c2", to_fr(c2))

    def __setattr__(self, name, value):
        raise AttributeError("Ciphertext is immutable")

    @property
    def c1(self):
        return self._c1

    @property
    def c2(self):
        return self._c2

    def to_fields(self):
        return [self._c1, self._c2]

    @classmethod
    def from_fields(cls, fields):
        c1, c2 = fields
        return cls(c1, c2)

    def __eq__(self, other):
        if not isinstance(other, Ciphertext):
            return NotImplemented
        return self._c1 == other._c1 and self._c2 == other._c2

    def __hash__(self):
        return hash((int(self._c1), int(self._c2)))

    def __repr__(self):
        return f"Ciphertext(c1={int(self._c1)}, c2={int(self._c2)})"


def add(x, y, ops=HOST):
    """평문 덧셈에 대응하는 암호문 결합: (x.c1, x.c2 · y.c2)."""
    return Ciphertext(x.c1, ops.mul(x.c2, y.c2))


def sub(x, y, ops=HOST):
    """평문 뺄셈에 대응하는 암호문 결합: (x.c1, x.c2 / y.c2).

    y.c2 == 0 이면 x 를 그대로 돌려준다.
    """
    is_zero = ops.equals(y.c2, FR(0))
    # 분모가 0 이면 1 로 대체하여 나눗셈이 항상 정의되도록 한다
    denominator = ops.select(is_zero, FR(1), y.c2)
    quotient = ops.mul(x.c2, FR(1) / denominator)
    return Ciphertext(x.c1, ops.select(is_zero, x.c2, quotient))
