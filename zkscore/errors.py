"""
예외 정의
=========

  - InvalidModulus: 생성자/소수 설정 오류 (설정 시점에 잡히는 치명적 오류)
  - DiscreteLogNotFound: 탐색 한도 초과 또는 룩업 테이블 미스 (복구 가능)
  - TableCollision: 생성자의 위수가 테이블 크기 이하여서 키가 겹침

산술 원시 연산은 예외를 던지지 않는다. 실패할 수 있는 것은 탐색/조회와
테이블 파일 I/O 뿐이다.
"""


class ZkScoreError(Exception):
    """이 패키지의 모든 예외의 기반 클래스."""


class InvalidModulus(ZkScoreError, ValueError):
    """생성자 또는 필드 설정이 잘못되었다."""


class DiscreteLogNotFound(ZkScoreError, LookupError):
    """g^x = a 를 만족하는 x 를 찾지 못했다.

    속성:
        target: 찾으려던 값 a
        bound: 탐색 한도 (테이블 조회의 경우 테이블 크기)
    """

    def __init__(self, target, bound=None, message=None):
        self.target = target
        self.bound = bound
        if message is None:
            message = f"이산로그를 찾지 못함: target={int(target)}, bound={bound}"
        super().__init__(message)


class TableCollision(ZkScoreError):
    """룩업 테이블 생성 중 같은 키가 두 번 나타났다."""

    def __init__(self, key, first, second):
        self.key = key
        self.first = first
        self.second = second
        super().__init__(
            f"룩업 테이블 키 충돌: g^{first} == g^{second} (생성자 위수가 테이블 크기보다 작음)"
        )
