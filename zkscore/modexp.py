"""
모듈러 거듭제곱 (Modular Exponentiation)
========================================

base^exponent mod p 를 square-and-multiply 알고리즘으로 계산한다.

**알고리즘**:
  1. 지수를 고정 폭(255비트) 빅엔디언 비트열로 분해한다.
  2. 최상위 비트부터 순회하며
       sq  = acc²
       acc = bit·(sq·base) + (1-bit)·sq
  3. 비트 값에 따라 분기하지 않는다. 모든 비트에서 같은 연산을 수행하므로
     제약 시스템 안에서 실행해도 비밀 지수가 제어 흐름으로 드러나지 않는다.

예시 (base=3, exponent=5 = 0b101):
  acc = 1
  bit 1: sq = 1,  acc = 1·3   = 3
  bit 0: sq = 9,  acc = 9
  bit 1: sq = 81, acc = 81·3  = 243   (= 3^5)
"""

from zkscore.field import FR, HOST, FIELD_BITS, to_fr

# 지수 분해 폭
EXPONENT_BITS = FIELD_BITS


def exponent_bits(exponent, ops=HOST):
    """지수를 EXPONENT_BITS 폭의 빅엔디언(MSB 우선) 비트 리스트로 분해한다."""
    bits = ops.to_bits(exponent, EXPONENT_BITS)
    return list(reversed(bits))


def mod_exp(base, exponent, ops=HOST):
    """base^exponent mod p.

    Args:
        base: FR 또는 정수
        exponent: FR 또는 정수 (FR 로 환원된 값의 하위 255비트 사용)
        ops: 산술 어댑터 (기본값: 호스트 계산)

    Returns:
        FR: base^exponent. exponent == 0 이면 FR(1).
    """
    base = to_fr(base)
    acc = FR(1)
    for bit in exponent_bits(exponent, ops):
        sq = ops.square(acc)
        acc = ops.select(bit, ops.mul(sq, base), sq)
    return acc
