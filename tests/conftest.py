import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from zkscore.field import FR
from zkscore.lookup import LookupTable


# ── 테스트 상수 ──
GENERATOR = FR(5)
TABLE_SIZE = 1000


@pytest.fixture(scope="session")
def generator():
    return GENERATOR


@pytest.fixture(scope="session")
def lookup_table():
    """g = 5, n = 1000 룩업 테이블 (세션 전체에서 한 번만 생성)."""
    return LookupTable.build(TABLE_SIZE, GENERATOR)
