"""
유한체(Finite Field) 산술 어댑터
================================

이 모듈은 암호화 점수 비교 시스템 전체에서 사용되는 기본 산술 단위를 정의한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드 (scalar field).
  - 위수(order) p ≈ 2^254, 소수체(prime field)
  - 모든 값은 [0, p) 범위의 정수이며, 연산은 모두 mod p 로 수행된다.

**FieldArithmetic (산술 어댑터)**:
  외부 제약 평가기(constraint evaluator)가 제공하는 고정된 원시 연산 집합
  (덧셈, 곱셈, 동등 비교, 비트 AND, 오른쪽 시프트, 불리언 캐스트, 선택)을
  얇게 감싼 인터페이스이다. modexp / 이산로그 / 점수 평가 알고리즘은
  오직 이 어댑터를 통해서만 산술을 수행하므로, 같은 코드가
  일반 호스트 계산으로도, 증명 시스템 안의 제약으로도 실행될 수 있다.

**불리언 표현**:
  불리언은 FR(0) / FR(1) 로 표현한다. 회로 안에서는 분기(branch) 대신
  산술 선택 cond·a + (1-cond)·b 를 사용해야 하기 때문이다.

사용 예시:
    >>> from zkscore.field import FR, HOST
    >>> HOST.select(FR(1), FR(7), FR(9))   # FR(7)
    >>> HOST.right_shift(FR(0b1010), 1)    # FR(5)
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.

    예시:
        >>> FR(3) * FR(7)      # FR(21)
        >>> FR(0) - FR(1)      # FR(p - 1)
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order

# 필드 원소의 비트 폭 (지수 분해에 사용되는 고정 폭)
FIELD_BITS = 255


def to_fr(value):
    """int / bool / FR 을 FR 로 변환한다."""
    if isinstance(value, FR):
        return value
    if isinstance(value, FQ):
        return FR(int(value))
    return FR(int(value))


# ─────────────────────────────────────────────────────────────────────
# 산술 어댑터
# ─────────────────────────────────────────────────────────────────────

class FieldArithmetic:
    """외부 평가기 경계(evaluator boundary)의 호스트 구현.

    모든 메서드는 전역 함수(total function)이며 절대 예외를 던지지 않는다.
    비트 연산(and_, right_shift)은 피연산자의 하위 `bits` 비트만 사용한다.
    """

    def add(self, a, b):
        return to_fr(a) + to_fr(b)

    def sub(self, a, b):
        return to_fr(a) - to_fr(b)

    def mul(self, a, b):
        return to_fr(a) * to_fr(b)

    def square(self, a):
        a = to_fr(a)
        return a * a

    def equals(self, a, b):
        """a == b 이면 FR(1), 아니면 FR(0)."""
        return FR(1) if to_fr(a) == to_fr(b) else FR(0)

    def and_(self, a, b, bits=64):
        """하위 `bits` 비트에 대한 비트 AND."""
        mask = (1 << bits) - 1
        return FR(int(to_fr(a)) & int(to_fr(b)) & mask)

    def right_shift(self, a, k, bits=64):
        """하위 `bits` 비트를 k 만큼 오른쪽으로 시프트한다."""
        mask = (1 << bits) - 1
        return FR((int(to_fr(a)) & mask) >> k)

    def bool_to_field(self, b):
        """Python bool 또는 불리언 필드 원소를 FR(0)/FR(1) 로 캐스트한다."""
        if isinstance(b, bool):
            return FR(1) if b else FR(0)
        return to_fr(b)

    def or_(self, a, b):
        # a ∨ b = a + b - a·b  (a, b ∈ {0, 1})
        a = self.bool_to_field(a)
        b = self.bool_to_field(b)
        return self.sub(self.add(a, b), self.mul(a, b))

    def select(self, cond, a, b):
        """분기 없는 선택: cond·a + (1-cond)·b.

        b + cond·(a - b) 로 전개하여 곱셈 한 번으로 계산한다.
        """
        cond = self.bool_to_field(cond)
        return self.add(b, self.mul(cond, self.sub(a, b)))

    def to_bits(self, a, n=FIELD_BITS):
        """a 의 하위 n 비트를 LSB 우선 순서의 불리언 필드 원소 리스트로 분해한다."""
        value = int(to_fr(a))
        return [FR((value >> i) & 1) for i in range(n)]

    def to_bool(self, b):
        """불리언 필드 원소를 호스트 bool 로 읽어낸다 (회로 밖에서만 사용)."""
        return int(self.bool_to_field(b)) == 1


class TracingFieldArithmetic(FieldArithmetic):
    """호출된 원시 연산의 수를 기록하는 어댑터.

    제약 시스템 안에서 실행될 때 각 원시 연산은 하나 이상의 제약(gate)이 된다.
    이 클래스는 연산 횟수를 세어, 알고리즘의 연산 구조가 비밀 입력 값과
    무관하게 일정한지 확인하는 데 사용한다.

    속성:
        counts: 연산 이름 → 호출 횟수
    """

    _PRIMITIVES = ("add", "sub", "mul", "square", "equals",
                   "and_", "right_shift", "bool_to_field")

    def __init__(self):
        self.counts = {name: 0 for name in self._PRIMITIVES}

    def _record(self, name):
        self.counts[name] += 1

    def add(self, a, b):
        self._record("add")
        return super().add(a, b)

    def sub(self, a, b):
        self._record("sub")
        return super().sub(a, b)

    def mul(self, a, b):
        self._record("mul")
        return super().mul(a, b)

    def square(self, a):
        self._record("square")
        return super().square(a)

    def equals(self, a, b):
        self._record("equals")
        return super().equals(a, b)

    def and_(self, a, b, bits=64):
        self._record("and_")
        return super().and_(a, b, bits)

    def right_shift(self, a, k, bits=64):
        self._record("right_shift")
        return super().right_shift(a, k, bits)

    def bool_to_field(self, b):
        self._record("bool_to_field")
        return super().bool_to_field(b)

    def total(self):
        return sum(self.counts.values())

    def reset(self):
        for name in self.counts:
            self.counts[name] = 0


# 기본 호스트 어댑터
HOST = FieldArithmetic()
