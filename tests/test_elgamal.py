"""
elgamal.py 테스트: 키 생성, 암호화, 복호화
"""
import pytest

from zkscore.cipher import Ciphertext, add
from zkscore.elgamal import ElGamalFF, KeyPair, decrypt, encrypt, generate_keys
from zkscore.errors import DiscreteLogNotFound
from zkscore.field import FR
from zkscore.modexp import mod_exp


@pytest.fixture(scope="module")
def keys():
    return generate_keys()


class TestKeys:
    def test_pk_is_g_to_sk(self, keys):
        assert keys.pk == mod_exp(ElGamalFF.G, keys.sk)

    def test_sk_not_in_repr(self, keys):
        assert str(int(keys.sk)) not in repr(keys)

    def test_fresh_keys_differ(self, keys):
        assert generate_keys().sk != keys.sk


class TestEncryptDecrypt:
    def test_deterministic_with_r(self):
        scheme = ElGamalFF()
        kp = KeyPair(mod_exp(scheme.G, 7), 7)
        c = scheme.encrypt(3, kp.pk, r=11)
        assert c.c1 == mod_exp(scheme.G, 11)
        assert c.c2 == mod_exp(scheme.G, 3) * mod_exp(kp.pk, 11)

    @pytest.mark.parametrize("m", [0, 1, 4, 6])
    def test_roundtrip_search(self, keys, m):
        assert decrypt(encrypt(m, keys.pk), keys.sk) == FR(m)

    def test_roundtrip_table(self, keys, lookup_table):
        c = encrypt(842, keys.pk)
        assert decrypt(c, keys.sk, table=lookup_table) == FR(842)

    def test_out_of_range(self, keys):
        scheme = ElGamalFF()
        c = scheme.encrypt(50, keys.pk)
        with pytest.raises(DiscreteLogNotFound):
            scheme.decrypt(c, keys.sk, table={}, max_iterations=10)

    def test_custom_generator(self):
        scheme = ElGamalFF(generator=7)
        kp = scheme.generate_keys()
        assert scheme.decrypt(scheme.encrypt(5, kp.pk), kp.sk) == FR(5)

    def test_homomorphic_c2_product(self, keys):
        # 같은 난수 r 로 만든 암호문의 c2 곱은 G^(m1+m2)·pk^(2r)
        scheme = ElGamalFF()
        c_a = scheme.encrypt(2, keys.pk, r=5)
        c_b = scheme.encrypt(3, keys.pk, r=5)
        combined = add(c_a, c_b)
        doubled = Ciphertext(mod_exp(c_a.c1, 2), combined.c2)
        assert scheme.decrypt(doubled, keys.sk) == FR(5)
