"""
점수 평가 Flask Blueprint
=========================

외부 원장(ledger) 계층을 대신하는 JSON 엔드포인트.
암호문 상태는 TinyDB 에 저장하고, 평가는 매 요청마다 저장된 상태에서
ScoreRound 를 복원하여 순수 함수로 수행한다.

  POST /score/keys              키 쌍 생성 (pk 저장, sk 는 응답으로만 반환)
  POST /score/encrypt           저장된 pk 로 평문 암호화
  POST /score/user-answers      사용자 답안 암호문 설정
  POST /score/correct-answers   정답 암호문 설정
  POST /score/full-score        만점 암호문 설정
  POST /score/calculate         점수 계산 + passed 이벤트 발행
  GET  /score/events            발행된 이벤트 목록
  GET  /score/state             현재 라운드 상태
  POST /score/reset             라운드 초기화
  POST /lookup/build            룩업 테이블 생성 및 저장
  POST /lookup/decrypt          암호문 복호화 (테이블 → 전수 탐색)
"""

import logging
import os

from flask import Blueprint, current_app, jsonify, request
from tinydb import Query

from zkscore.elgamal import ElGamalFF
from zkscore.errors import DiscreteLogNotFound
from zkscore.field import FR
from zkscore.lookup import LookupTable
from zkscore.score import ScoreRound

from score_serializers import (
    serialize_fr, deserialize_fr,
    serialize_cipher, deserialize_cipher,
    serialize_round, deserialize_round,
    fr_short,
)

logger = logging.getLogger(__name__)

score_bp = Blueprint('score', __name__)

DATA = Query()

# DB는 app.py에서 주입
DB = None


def init_score_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove_prefix(prefix):
    """prefix로 시작하는 모든 키를 삭제한다."""
    DB.remove(DATA.type.test(lambda t: t.startswith(prefix)))


def scheme_config():
    return current_app.config["ZKSCORE"]


def load_round():
    """저장된 라운드를 복원한다. 없으면 새 라운드."""
    data = db_get("score.round")
    if data is None:
        cfg = scheme_config()
        return ScoreRound(threshold=cfg.threshold, total_questions=cfg.total_questions)
    return deserialize_round(data)


def save_round(score_round):
    db_set("score.round", serialize_round(score_round))


def bad_request(message):
    return jsonify({"error": message}), 400


def read_payload():
    """JSON 객체 본문을 읽는다. 객체가 아니면 None."""
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        return None
    return payload


def read_cipher():
    payload = read_payload()
    if payload is None:
        return None
    try:
        return deserialize_cipher(payload)
    except (KeyError, TypeError, ValueError):
        return None


# ──────────────────────────────────────────────────────────────
# 키 / 암호화
# ──────────────────────────────────────────────────────────────

@score_bp.route("/score/keys", methods=["POST"])
def score_keys():
    """키 쌍을 생성한다. sk 는 저장하지 않는다."""
    keys = ElGamalFF(scheme_config().generator).generate_keys()
    db_set("score.keys.pk", serialize_fr(keys.pk))
    return jsonify({
        "pk": serialize_fr(keys.pk),
        "sk": serialize_fr(keys.sk),
        "pk_short": fr_short(keys.pk),
    })


@score_bp.route("/score/encrypt", methods=["POST"])
def score_encrypt():
    """저장된 공개키로 평문을 암호화한다."""
    pk = db_get("score.keys.pk")
    if pk is None:
        return bad_request("공개키가 없습니다. /score/keys 를 먼저 호출하세요")
    payload = read_payload()
    if payload is None:
        return bad_request("JSON 객체가 필요합니다")
    if "value" not in payload:
        return bad_request("value 가 필요합니다")
    try:
        value = int(payload["value"])
    except (TypeError, ValueError):
        return bad_request("value 는 정수여야 합니다")
    cipher = ElGamalFF(scheme_config().generator).encrypt(value, deserialize_fr(pk))
    return jsonify(serialize_cipher(cipher))


# ──────────────────────────────────────────────────────────────
# 답안 설정
# ──────────────────────────────────────────────────────────────

@score_bp.route("/score/user-answers", methods=["POST"])
def score_set_user_answers():
    cipher = read_cipher()
    if cipher is None:
        return bad_request("c1, c2 가 필요합니다")
    score_round = load_round()
    score_round.set_encrypted_user_answers(cipher)
    save_round(score_round)
    return jsonify({"state": score_round.state})


@score_bp.route("/score/correct-answers", methods=["POST"])
def score_set_correct_answers():
    cipher = read_cipher()
    if cipher is None:
        return bad_request("c1, c2 가 필요합니다")
    score_round = load_round()
    score_round.set_encrypted_correct_answers(cipher)
    save_round(score_round)
    return jsonify({"state": score_round.state})


@score_bp.route("/score/full-score", methods=["POST"])
def score_set_full_score():
    cipher = read_cipher()
    if cipher is None:
        return bad_request("c1, c2 가 필요합니다")
    score_round = load_round()
    score_round.set_encrypted_full_score(cipher)
    save_round(score_round)
    return jsonify({"state": score_round.state})


# ──────────────────────────────────────────────────────────────
# 점수 계산 / 이벤트
# ──────────────────────────────────────────────────────────────

@score_bp.route("/score/calculate", methods=["POST"])
def score_calculate():
    """점수를 계산하고 passed 이벤트를 발행한다."""
    score_round = load_round()
    try:
        result = score_round.calculate_score()
    except RuntimeError as e:
        return bad_request(str(e))
    save_round(score_round)
    return jsonify({
        "score": serialize_fr(result.score),
        "passed": score_round.passed,
        "state": score_round.state,
    })


@score_bp.route("/score/events")
def score_events():
    score_round = load_round()
    return jsonify([{"type": name, "data": value} for name, value in score_round.events])


@score_bp.route("/score/state")
def score_state():
    return jsonify(serialize_round(load_round()))


@score_bp.route("/score/reset", methods=["POST"])
def score_reset():
    """라운드 데이터를 모두 삭제한다 (키는 유지)."""
    db_remove_prefix("score.round")
    return jsonify({"state": ScoreRound.IDLE})


# ──────────────────────────────────────────────────────────────
# 룩업 테이블
# ──────────────────────────────────────────────────────────────

@score_bp.route("/lookup/build", methods=["POST"])
def lookup_build():
    cfg = scheme_config()
    payload = read_payload()
    if payload is None:
        return bad_request("JSON 객체가 필요합니다")
    try:
        n = int(payload.get("n", cfg.table_size))
    except (TypeError, ValueError):
        return bad_request("n 은 정수여야 합니다")
    if n <= 0:
        return bad_request("n 은 양수여야 합니다")
    table = LookupTable.build(n, cfg.generator)
    path = table.persist(cfg.lookup_path)
    db_set("score.lookup.info", {"n": n, "path": path, "collisions": table.collisions})
    return jsonify({"n": n, "size": len(table), "path": path})


@score_bp.route("/lookup/decrypt", methods=["POST"])
def lookup_decrypt():
    """암호문을 복호화한다. 테이블이 있으면 먼저 조회하고, 없으면 전수 탐색."""
    cfg = scheme_config()
    payload = read_payload()
    if payload is None:
        return bad_request("JSON 객체가 필요합니다")
    try:
        cipher = deserialize_cipher(payload)
        sk = deserialize_fr(payload["sk"])
    except (KeyError, TypeError, ValueError):
        return bad_request("c1, c2, sk 가 필요합니다")
    # c1 = 0 이면 g^m = 0 이 되어 어떤 지수로도 찾을 수 없다
    if cipher.c1 == FR(0):
        return bad_request("c1 은 0 이 될 수 없습니다")

    table = LookupTable.load(cfg.lookup_path) if os.path.exists(cfg.lookup_path) else None
    try:
        m = ElGamalFF(cfg.generator).decrypt(cipher, sk, table=table,
                                             max_iterations=cfg.max_iterations)
    except DiscreteLogNotFound as e:
        logger.warning("decrypt failed: %s", e)
        return jsonify({"error": str(e)}), 404
    return jsonify({"value": serialize_fr(m)})
