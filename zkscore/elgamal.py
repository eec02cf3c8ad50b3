"""
필드 네이티브 ElGamal
=====================

bn128 스칼라 필드의 곱셈군 위에서 동작하는 지수형(exponential) ElGamal.

**키 생성**:
  sk ∈ [1, p-1) 균등 난수,  pk = G^sk

**암호화** (평문 m, 난수 r):
  c1 = G^r
  c2 = G^m · pk^r

**복호화**:
  G^m = c2 / c1^sk
  m   = dlog_G(G^m)      ← 룩업 테이블 또는 전수 탐색

평문이 지수에 들어가므로 복호화에는 이산로그가 필요하다. 따라서 평문 영역은
작아야 하며(점수, 정답 수 등), 룩업 테이블 크기 또는 탐색 한도를 넘는 평문은
DiscreteLogNotFound 로 실패한다.

주의:
  sk 는 외부 증명 경계를 넘어가서는 안 된다.
"""

import secrets

from zkscore.cipher import Ciphertext
from zkscore.dlog import DEFAULT_MAX_ITERATIONS, resolve
from zkscore.field import FR, CURVE_ORDER, to_fr
from zkscore.modexp import mod_exp


class KeyPair:
    """생성자 기준 이산로그 키 쌍 (pk = G^sk)."""

    def __init__(self, pk, sk):
        self.pk = to_fr(pk)
        self.sk = to_fr(sk)

    def __repr__(self):
        # sk 는 출력하지 않는다
        return f"KeyPair(pk={int(self.pk)})"


class ElGamalFF:
    """필드 네이티브 ElGamal 스킴.

    G 는 클래스 속성이며, 다른 생성자를 쓰려면 인스턴스를 만들 때 지정한다.
    """

    G = FR(5)

    def __init__(self, generator=None):
        if generator is not None:
            self.G = to_fr(generator)

    def generate_keys(self):
        sk = FR(secrets.randbelow(CURVE_ORDER - 2) + 1)
        return KeyPair(mod_exp(self.G, sk), sk)

    def encrypt(self, m, pk, r=None):
        """평문 m 을 공개키 pk 로 암호화한다.

        Args:
            m: 평문 (작은 정수)
            pk: 공개키
            r: 암호화 난수 (None 이면 무작위)

        Returns:
            Ciphertext
        """
        if r is None:
            r = secrets.randbelow(CURVE_ORDER - 2) + 1
        c1 = mod_exp(self.G, r)
        c2 = mod_exp(self.G, m) * mod_exp(pk, r)
        return Ciphertext(c1, c2)

    def decrypt(self, cipher, sk, table=None, max_iterations=DEFAULT_MAX_ITERATIONS):
        """암호문을 복호화하여 평문 m 을 복원한다.

        Raises:
            DiscreteLogNotFound: 테이블에도 없고 탐색 한도 안에서도 찾지 못했을 때
        """
        g_m = cipher.c2 / mod_exp(cipher.c1, sk)
        # G^0 = 1 은 x ≥ 1 탐색으로는 찾을 수 없으므로 먼저 처리한다
        if g_m == FR(1):
            return FR(0)
        return resolve(g_m, self.G, table=table, max_iterations=max_iterations)


_DEFAULT_SCHEME = ElGamalFF()


def generate_keys():
    return _DEFAULT_SCHEME.generate_keys()


def encrypt(value, pk):
    return _DEFAULT_SCHEME.encrypt(value, pk)


def decrypt(encrypted_value, sk, table=None):
    return _DEFAULT_SCHEME.decrypt(encrypted_value, sk, table=table)
