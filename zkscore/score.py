"""
암호화 점수 임계값 평가 (Threshold Score Evaluator)
==================================================

사용자 답안 암호문과 정답 개수 암호문을 받아 점수와 합격 여부를 계산한다.

**점수 읽기**:
  userAnswers.c2 를 그대로 비교 개수(점수)로 사용한다. 일반적인 ElGamal 복호화가
  아니라 의도된 단순화이다. correctAnswers 는 라운드 입력으로 받지만 판정에는
  쓰지 않는다 (실제 암호문의 c2 는 약 254비트).

**합격 판정**:
  passed = (score ≥ threshold) ∧ (score ≤ total_questions)

  total_questions 는 설정값(SchemeConfig.total_questions)에서 온다.

  6문항 퀴즈 전용 규칙은 "score == 4 ∨ score == 5 ∨ score == 6" 이다
  (evaluate_fixed). evaluate 는 이를 임의의 문항 수에 대한 부호 없는
  범위 비교로 일반화한 것이며, total_questions = 6, threshold = 4 일 때
  정확히 {4, 5, 6} 을 합격으로 판정한다.

**부호 없는 비교** (greater_or_equal):
  a, b < 2^k 일 때 d = a + 2^k - b 는 [1, 2^(k+1)) 범위이고,
  a ≥ b  ⇔  d 의 k번째 비트가 1.
  오른쪽 시프트와 AND 만으로 분기 없이 계산된다.

**팝카운트** (popcount64):
  SWAR 분할 정복 비트 트릭. 2비트 → 4비트 → 8비트 → 16비트 → 32비트 단위로
  비트 수를 합산하고 마지막에 하위 7비트(최대 64)를 마스킹한다.

**라운드 상태 기계** (ScoreRound):
  Idle → AnswersSet → ScoreComputed → EventEmitted
"""

import logging

from zkscore.cipher import Ciphertext
from zkscore.field import FR, HOST, to_fr

logger = logging.getLogger(__name__)

PASSING_THRESHOLD = 4
TOTAL_QUESTIONS = 6

# SWAR 마스크
M1 = 0x5555555555555555
M2 = 0x3333333333333333
M4 = 0x0F0F0F0F0F0F0F0F
M7 = 0x7F


def popcount64(v, ops=HOST):
    """v 의 하위 64비트 중 1인 비트 수."""
    v = ops.and_(to_fr(v), FR((1 << 64) - 1), 64)
    # 2비트 단위: 각 쌍의 비트 수
    v1 = ops.sub(v, ops.and_(ops.right_shift(v, 1), FR(M1), 64))
    # 4비트 단위
    v2 = ops.add(ops.and_(v1, FR(M2), 64),
                 ops.and_(ops.right_shift(v1, 2), FR(M2), 64))
    # 8비트 단위
    v3 = ops.and_(ops.add(v2, ops.right_shift(v2, 4)), FR(M4), 64)
    v4 = ops.add(v3, ops.right_shift(v3, 8))
    v5 = ops.add(v4, ops.right_shift(v4, 16))
    v6 = ops.add(v5, ops.right_shift(v5, 32))
    return ops.and_(v6, FR(M7), 64)


def greater_or_equal(a, b, bits=64, ops=HOST):
    """a ≥ b 이면 FR(1), 아니면 FR(0). a, b 는 2^bits 미만이어야 한다."""
    d = ops.sub(ops.add(a, FR(1 << bits)), b)
    return ops.and_(ops.right_shift(d, bits, bits + 1), FR(1), 1)


def bitwise_xor(a, b, bits=64, ops=HOST):
    # a ⊕ b = a + b - 2·(a ∧ b)
    both = ops.and_(a, b, bits)
    return ops.sub(ops.add(a, b), ops.mul(FR(2), both))


def count_matching_answers(user_bits, correct_bits, total_questions, ops=HOST):
    """문항당 1비트로 압축된 답안에서 정답과 일치하는 문항 수를 센다.

    Args:
        user_bits: 사용자 답안 비트열 (i번째 비트 = i번째 문항)
        correct_bits: 정답 비트열
        total_questions: 문항 수 (≤ 64)

    Returns:
        FR: total_questions - popcount(user ⊕ correct)
    """
    if not 0 < total_questions <= 64:
        raise ValueError(f"문항 수는 1..64 범위여야 합니다: {total_questions}")
    mask = FR((1 << total_questions) - 1)
    u = ops.and_(user_bits, mask, 64)
    c = ops.and_(correct_bits, mask, 64)
    mismatches = popcount64(bitwise_xor(u, c, ops=ops), ops)
    return ops.sub(FR(total_questions), mismatches)


class ScoreResult:
    """평가 결과: 점수(score)와 합격 여부(passed, FR(0)/FR(1))."""

    def __init__(self, score, passed):
        self.score = score
        self.passed = passed

    def __eq__(self, other):
        if not isinstance(other, ScoreResult):
            return NotImplemented
        return self.score == other.score and self.passed == other.passed

    def __repr__(self):
        return f"ScoreResult(score={int(self.score)}, passed={int(self.passed)})"


def evaluate(user_answers, correct_answers, threshold=PASSING_THRESHOLD,
             total_questions=TOTAL_QUESTIONS, ops=HOST):
    """점수와 합격 여부를 분기 없이 계산한다.

    Args:
        user_answers: 사용자 답안 암호문 (c2 = 점수)
        correct_answers: 정답 암호문 (판정에 사용하지 않음)
        threshold: 합격 기준 점수
        total_questions: 전체 문항 수 (점수 상한)

    Returns:
        ScoreResult
    """
    score = user_answers.c2
    at_least = greater_or_equal(score, to_fr(threshold), ops=ops)
    within = greater_or_equal(to_fr(total_questions), score, ops=ops)
    passed = ops.mul(at_least, within)
    return ScoreResult(score, passed)


def evaluate_fixed(user_answers, correct_answers, ops=HOST):
    """6문항 퀴즈용 고정 규칙: score == 4 ∨ score == 5 ∨ score == 6."""
    score = user_answers.c2
    is_equal = ops.equals(score, FR(4))
    is_greater = ops.or_(ops.equals(score, FR(5)), ops.equals(score, FR(6)))
    return ScoreResult(score, ops.or_(is_equal, is_greater))


class ScoreRound:
    """평가 라운드 하나의 상태 기계.

    외부 원장(ledger) 계층이 상태를 소유하고, 이 클래스는 순수 함수 evaluate 를
    통해서만 점수를 갱신한다. 같은 암호문 입력에 대해 calculate_score 는 멱등이다.

    속성:
        state: "Idle" | "AnswersSet" | "ScoreComputed" | "EventEmitted"
        events: ("passed", bool) 튜플 리스트
    """

    IDLE = "Idle"
    ANSWERS_SET = "AnswersSet"
    SCORE_COMPUTED = "ScoreComputed"
    EVENT_EMITTED = "EventEmitted"

    def __init__(self, threshold=PASSING_THRESHOLD, total_questions=TOTAL_QUESTIONS, ops=HOST):
        self.threshold = threshold
        self.total_questions = total_questions
        self.ops = ops
        self.encrypted_user_answers = None
        self.encrypted_correct_answers = None
        self.encrypted_full_score = None
        self.encrypted_score = FR(0)
        self.passed = None
        self.events = []
        self.state = self.IDLE

    def _update_state(self):
        if self.encrypted_user_answers is not None and self.encrypted_correct_answers is not None:
            self.state = self.ANSWERS_SET
        else:
            self.state = self.IDLE

    def set_encrypted_user_answers(self, cipher):
        self.encrypted_user_answers = _as_cipher(cipher)
        self._update_state()

    def set_encrypted_correct_answers(self, cipher):
        self.encrypted_correct_answers = _as_cipher(cipher)
        self._update_state()

    def set_encrypted_full_score(self, cipher):
        self.encrypted_full_score = _as_cipher(cipher)

    def calculate_score(self):
        """점수를 계산하고 'passed' 이벤트를 발행한다.

        Raises:
            RuntimeError: 두 암호문이 모두 설정되지 않았을 때
        """
        if self.state == self.IDLE:
            raise RuntimeError("사용자 답안과 정답 암호문이 모두 설정되어야 합니다")
        result = evaluate(self.encrypted_user_answers, self.encrypted_correct_answers,
                          self.threshold, self.total_questions, self.ops)
        self.encrypted_score = result.score
        self.passed = self.ops.to_bool(result.passed)
        self.state = self.SCORE_COMPUTED

        self.events.append(("passed", self.passed))
        self.state = self.EVENT_EMITTED
        logger.info("score computed: passed=%s", self.passed)
        return result


def _as_cipher(value):
    if isinstance(value, Ciphertext):
        return value
    return Ciphertext.from_fields(value)
