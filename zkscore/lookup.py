"""
이산로그 룩업 테이블 (Lookup Table)
===================================

i ∈ [0, n) 에 대해 g^i 를 미리 계산하여 {str(g^i): i} 로 저장한다.

**정확성 전제**:
  키는 [0, n) 위에서 단사(injective)여야 한다. 생성자의 곱셈 위수가 n 이하이면
  g^i 가 반복되어 앞선 항목이 조용히 덮어써진다. 충돌은 WARNING 로그로 남기고
  `collisions` 로 센다. strict=True 이면 TableCollision 을 던진다.

**파일 형식** (기본 파일명 lookup.json):
  {
    "1": "0",
    "5": "1",
    "25": "2",
    ...
  }
  키와 값 모두 10진 문자열이다.

사용 예시:
    >>> table = LookupTable.build(1000, FR(5))
    >>> table.persist("lookup.json")
    >>> LookupTable.load("lookup.json") == table   # True
"""

import json
import logging
import os
import tempfile
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path

from zkscore.errors import TableCollision
from zkscore.field import FR, to_fr
from zkscore.modexp import mod_exp

logger = logging.getLogger(__name__)

DEFAULT_TABLE_SIZE = 20000
DEFAULT_LOOKUP_PATH = "lookup.json"
DEFAULT_GENERATOR = FR(5)


def _compute_range(generator, start, stop):
    """[start, stop) 구간의 (str(g^i), i) 리스트. 프로세스 풀 작업 단위."""
    g = FR(generator)
    return [(str(int(mod_exp(g, i))), i) for i in range(start, stop)]


class LookupTable:
    """읽기 전용 이산로그 룩업 테이블.

    속성:
        entries: str(g^i) → i 딕셔너리
        generator: 테이블을 만든 생성자 (load 한 경우 None)
        collisions: build 중 덮어써진 키의 수
    """

    def __init__(self, entries, generator=None):
        self.entries = dict(entries)
        self.generator = generator
        self.collisions = 0

    @classmethod
    def build(cls, n=DEFAULT_TABLE_SIZE, generator=DEFAULT_GENERATOR,
              workers=None, strict=False):
        """g^i (i ∈ [0, n)) 를 계산하여 테이블을 만든다.

        Args:
            n: 테이블 크기
            generator: 생성자 g
            workers: 2 이상이면 프로세스 풀로 구간을 나눠 병렬 계산한다.
            strict: True 이면 키 충돌 시 TableCollision 을 던진다.

        Returns:
            LookupTable
        """
        if n <= 0:
            raise ValueError(f"테이블 크기는 양수여야 합니다: {n}")
        g = to_fr(generator)

        if workers and workers > 1:
            chunk = -(-n // workers)
            bounds = [(s, min(s + chunk, n)) for s in range(0, n, chunk)]
            with ProcessPoolExecutor(max_workers=workers) as pool:
                futures = [pool.submit(_compute_range, int(g), s, e) for s, e in bounds]
                pairs = [pair for f in futures for pair in f.result()]
        else:
            pairs = _compute_range(int(g), 0, n)

        table = cls({}, generator=g)
        for key, i in pairs:
            if key in table.entries:
                if strict:
                    raise TableCollision(key, table.entries[key], i)
                logger.warning("lookup table collision: g^%d == g^%d, overwriting",
                               table.entries[key], i)
                table.collisions += 1
            table.entries[key] = i
        logger.info("built lookup table: n=%d, generator=%d, collisions=%d",
                    n, int(g), table.collisions)
        return table

    def persist(self, path=DEFAULT_LOOKUP_PATH):
        """테이블을 JSON 으로 저장한다. 임시 파일에 쓴 뒤 원자적으로 교체한다."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        data = {key: str(i) for key, i in self.entries.items()}
        fd, tmp = tempfile.mkstemp(prefix=p.name, dir=str(p.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2)
            os.replace(tmp, str(p))
        finally:
            if os.path.exists(tmp):
                os.remove(tmp)
        logger.info("persisted lookup table: %s (%d entries)", p, len(self.entries))
        return str(p)

    @classmethod
    def load(cls, path=DEFAULT_LOOKUP_PATH):
        """JSON 파일에서 테이블을 읽는다.

        Raises:
            FileNotFoundError, json.JSONDecodeError: 그대로 전파한다.
            ValueError: 값이 10진 정수 문자열이 아닐 때
        """
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"룩업 테이블 형식이 아닙니다: {path}")
        table = cls({str(k): int(v) for k, v in data.items()})
        logger.info("loaded lookup table: %s (%d entries)", path, len(table))
        return table

    def get(self, key, default=None):
        return self.entries.get(key, default)

    def items(self):
        return self.entries.items()

    def __len__(self):
        return len(self.entries)

    def __contains__(self, key):
        return key in self.entries

    def __eq__(self, other):
        if not isinstance(other, LookupTable):
            return NotImplemented
        return self.entries == other.entries

    def __repr__(self):
        return f"LookupTable({len(self.entries)} entries)"
