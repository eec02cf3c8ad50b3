"""
암호화 점수 비교 E2E 데모
=========================

실행:
    python -m zkscore.example

흐름:
    1. 키 생성
    2. 룩업 테이블 생성
    3. 암호화 / 복호화 (테이블, 전수 탐색)
    4. 준동형 덧셈 / 뺄셈
    5. 점수 평가 (6문항, 기준 4점)
"""

from zkscore.field import FR
from zkscore.cipher import Ciphertext, add, sub
from zkscore.elgamal import ElGamalFF
from zkscore.lookup import LookupTable
from zkscore.score import ScoreRound, count_matching_answers


def main():
    print("=" * 60)
    print("  Encrypted Score Comparison Demo")
    print("  6문항 퀴즈, 합격 기준 4점")
    print("=" * 60)

    scheme = ElGamalFF()

    # ── 1. 키 생성 ──
    print("\n[1] 키 생성...")
    keys = scheme.generate_keys()
    print(f"    pk: {int(keys.pk)}")

    # ── 2. 룩업 테이블 ──
    print("\n[2] 룩업 테이블 생성 (n = 64)...")
    table = LookupTable.build(64, scheme.G)
    print(f"    항목 수: {len(table)}")

    # ── 3. 암호화 / 복호화 ──
    print("\n[3] 암호화 / 복호화...")
    cipher = scheme.encrypt(5, keys.pk)
    print(f"    Enc(5) = {cipher}")
    print(f"    Dec (table)  = {int(scheme.decrypt(cipher, keys.sk, table=table))}")
    print(f"    Dec (search) = {int(scheme.decrypt(cipher, keys.sk))}")

    # ── 4. 준동형 연산 ──
    print("\n[4] 준동형 연산...")
    a = Ciphertext(FR(11), FR(40))
    b = Ciphertext(FR(13), FR(8))
    print(f"    sub(a, b)         = {sub(a, b)}")
    print(f"    add(sub(a, b), b) = {add(sub(a, b), b)}  (== a: {add(sub(a, b), b) == a})")

    # ── 5. 점수 평가 ──
    print("\n[5] 점수 평가...")
    correct = 0b101101
    for user in (0b101101, 0b100101, 0b010010):
        matches = count_matching_answers(user, correct, 6)
        score_round = ScoreRound(threshold=4)
        score_round.set_encrypted_user_answers(Ciphertext(FR(0), matches))
        score_round.set_encrypted_correct_answers(Ciphertext(FR(0), FR(6)))
        score_round.calculate_score()
        print(f"    답안 {user:06b}: 점수 {int(matches)} → passed={score_round.passed}")

    print("\n" + "=" * 60)
    return True


if __name__ == "__main__":
    main()
