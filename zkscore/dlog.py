"""
이산로그 (Discrete Logarithm) 복원
==================================

g^x = a 를 만족하는 x 를 찾는다.

**두 가지 방법**:
  - 전수 탐색 (brute force): x = 1 부터 g^x 를 계산하여 a 와 비교. O(x) 번의 modexp.
    반드시 탐색 한도(max_iterations)를 지정해야 하며, 초과하면 DiscreteLogNotFound.
  - 룩업 테이블: 미리 계산한 {str(g^i): i} 테이블에서 O(1) 조회.
    평문 영역이 작을 때(점수, 정답 수 등) 반복 복원 비용을 상각하기 위해 존재한다.

사용 예시:
    >>> from zkscore.modexp import mod_exp
    >>> a = mod_exp(FR(5), 42)
    >>> discrete_log(a, FR(5))          # FR(42)
"""

import logging

from zkscore.errors import DiscreteLogNotFound
from zkscore.field import FR, HOST, to_fr
from zkscore.modexp import mod_exp

logger = logging.getLogger(__name__)

# 전수 탐색의 기본 한도
DEFAULT_MAX_ITERATIONS = 100000


def discrete_log(a, g, max_iterations=DEFAULT_MAX_ITERATIONS, ops=HOST):
    """전수 탐색으로 g^x = a 인 최소 x ≥ 1 을 찾는다.

    Args:
        a: 목표 값
        g: 생성자
        max_iterations: 시도할 후보 x 의 최대 개수 (x = 1 .. max_iterations)
        ops: 산술 어댑터

    Returns:
        FR: x

    Raises:
        DiscreteLogNotFound: 한도 안에서 찾지 못했을 때, 또는 a = 0 일 때
    """
    a = to_fr(a)
    g = to_fr(g)
    if a == FR(0) and g != FR(0):
        # g^x 는 0 이 될 수 없다
        raise DiscreteLogNotFound(a, bound=0)
    x = FR(1)
    for _ in range(max_iterations):
        if ops.to_bool(ops.equals(mod_exp(g, x, ops), a)):
            logger.debug("dlog found by search: x=%d", int(x))
            return x
        x = ops.add(x, FR(1))
    raise DiscreteLogNotFound(a, bound=max_iterations)


def discrete_log_table(a, table):
    """룩업 테이블에서 a 의 지수를 조회한다.

    Raises:
        DiscreteLogNotFound: 테이블에 a 가 없을 때
    """
    a = to_fr(a)
    x = table.get(str(int(a)))
    if x is None:
        raise DiscreteLogNotFound(a, bound=len(table))
    return FR(x)


def resolve(a, g, table=None, max_iterations=DEFAULT_MAX_ITERATIONS, ops=HOST):
    """테이블을 먼저 조회하고, 없으면 전수 탐색으로 대체한다."""
    if table is not None:
        try:
            return discrete_log_table(a, table)
        except DiscreteLogNotFound:
            logger.info("lookup table miss, falling back to search (bound=%d)",
                        max_iterations)
    return discrete_log(a, g, max_iterations=max_iterations, ops=ops)
