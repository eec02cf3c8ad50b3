"""
config.py
기본 설정과 JSON 설정 파일 로더.

테이블 크기, 생성자, 파일 경로 등은 전역 상태가 아니라 SchemeConfig 객체로
명시적으로 전달한다.
"""

import json
from pathlib import Path

from zkscore.errors import InvalidModulus
from zkscore.field import FR, CURVE_ORDER

DEFAULT_CONFIG = {
    "table_size": 20000,          # 룩업 테이블 크기 n
    "lookup_path": "lookup.json",
    "generator": 5,               # bn128 스칼라 필드의 곱셈군 생성자
    "threshold": 4,               # 합격 기준 점수
    "total_questions": 6,
    "max_iterations": 100000,     # 전수 탐색 한도
    "db_path": "db.json",
}


def load_config(path, base=None):
    """JSON 설정 파일을 읽어 base 에 얕게 병합한다.

    :param path: JSON 설정 파일 경로
    :param base: 병합 대상 (None 이면 DEFAULT_CONFIG)
    :return: 병합된 설정 딕셔너리
    """
    base = base.copy() if base is not None else DEFAULT_CONFIG.copy()
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with p.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    for k, v in data.items():
        base[k] = v
    return base


class SchemeConfig:
    """검증된 설정 객체.

    속성:
        table_size, lookup_path, generator(FR), threshold, total_questions,
        max_iterations, db_path
    """

    def __init__(self, table_size=20000, lookup_path="lookup.json", generator=5,
                 threshold=4, total_questions=6, max_iterations=100000,
                 db_path="db.json"):
        g = int(generator)
        # 0, 1, p-1 은 위수가 1 또는 2 이하라 생성자로 쓸 수 없다
        if g % CURVE_ORDER in (0, 1, CURVE_ORDER - 1):
            raise InvalidModulus(f"생성자로 사용할 수 없는 값: {g}")
        if int(table_size) <= 0:
            raise InvalidModulus(f"테이블 크기는 양수여야 합니다: {table_size}")
        if int(max_iterations) <= 0:
            raise ValueError(f"max_iterations 는 양수여야 합니다: {max_iterations}")
        if not 0 <= int(threshold) <= int(total_questions):
            raise ValueError(
                f"threshold 는 0 과 total_questions 사이여야 합니다: {threshold}"
            )
        self.table_size = int(table_size)
        self.lookup_path = str(lookup_path)
        self.generator = FR(g)
        self.threshold = int(threshold)
        self.total_questions = int(total_questions)
        self.max_iterations = int(max_iterations)
        self.db_path = str(db_path)

    @classmethod
    def from_dict(cls, data):
        merged = DEFAULT_CONFIG.copy()
        merged.update(data)
        return cls(**{k: merged[k] for k in DEFAULT_CONFIG})

    @classmethod
    def from_file(cls, path):
        return cls.from_dict(load_config(path))

    def to_dict(self):
        return {
            "table_size": self.table_size,
            "lookup_path": self.lookup_path,
            "generator": int(self.generator),
            "threshold": self.threshold,
            "total_questions": self.total_questions,
            "max_iterations": self.max_iterations,
            "db_path": self.db_path,
        }
