"""
점수 평가 데이터 직렬화/역직렬화 헬퍼
======================================

TinyDB 와 JSON 응답에 저장 가능한 형태로 FR, Ciphertext, 점수 라운드를 변환한다.
"""

from zkscore.field import FR
from zkscore.cipher import Ciphertext
from zkscore.score import ScoreRound


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) 또는 int → FR"""
    return FR(int(s))


# ─── Ciphertext ───

def serialize_cipher(cipher):
    """Ciphertext → {"c1": str, "c2": str} or None"""
    if cipher is None:
        return None
    return {"c1": serialize_fr(cipher.c1), "c2": serialize_fr(cipher.c2)}


def deserialize_cipher(data):
    """{"c1": str|int, "c2": str|int} or None → Ciphertext

    Raises:
        KeyError: c1 또는 c2 가 없을 때
        ValueError: 정수로 변환할 수 없을 때
    """
    if data is None:
        return None
    return Ciphertext(deserialize_fr(data["c1"]), deserialize_fr(data["c2"]))


# ─── ScoreRound ───

def serialize_round(score_round):
    """ScoreRound → dict"""
    return {
        "state": score_round.state,
        "threshold": score_round.threshold,
        "total_questions": score_round.total_questions,
        "encrypted_user_answers": serialize_cipher(score_round.encrypted_user_answers),
        "encrypted_correct_answers": serialize_cipher(score_round.encrypted_correct_answers),
        "encrypted_full_score": serialize_cipher(score_round.encrypted_full_score),
        "encrypted_score": serialize_fr(score_round.encrypted_score),
        "passed": score_round.passed,
        "events": [[name, value] for name, value in score_round.events],
    }


def deserialize_round(data):
    """dict → ScoreRound"""
    score_round = ScoreRound(threshold=data["threshold"],
                             total_questions=data["total_questions"])
    score_round.encrypted_user_answers = deserialize_cipher(data["encrypted_user_answers"])
    score_round.encrypted_correct_answers = deserialize_cipher(data["encrypted_correct_answers"])
    score_round.encrypted_full_score = deserialize_cipher(data["encrypted_full_score"])
    score_round.encrypted_score = deserialize_fr(data["encrypted_score"])
    score_round.passed = data["passed"]
    score_round.events = [(name, value) for name, value in data["events"]]
    score_round.state = data["state"]
    return score_round


def fr_short(val, length=10):
    """FR 값의 짧은 표시용 문자열."""
    s = str(int(val))
    if len(s) <= length * 2:
        return s
    return f"{s[:length]}...{s[-length:]}"
