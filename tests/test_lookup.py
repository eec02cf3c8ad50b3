"""
lookup.py 테스트: 테이블 생성, 저장, 로드
"""
import json

import pytest

from zkscore.errors import TableCollision
from zkscore.field import FR, CURVE_ORDER
from zkscore.lookup import LookupTable
from zkscore.modexp import mod_exp


class TestBuild:
    def test_size(self, lookup_table):
        assert len(lookup_table) == 1000
        assert lookup_table.collisions == 0

    def test_first_entries(self, lookup_table):
        assert lookup_table.get("1") == 0
        assert lookup_table.get("5") == 1
        assert lookup_table.get("25") == 2

    def test_entry_matches_modexp(self, generator, lookup_table):
        key = str(int(mod_exp(generator, 321)))
        assert key in lookup_table
        assert lookup_table.get(key) == 321

    def test_invalid_size(self, generator):
        with pytest.raises(ValueError):
            LookupTable.build(0, generator)

    def test_collision_overwrites(self):
        # -1 의 위수는 2 → g^0 = g^2 = 1 충돌
        table = LookupTable.build(4, FR(CURVE_ORDER - 1))
        assert len(table) == 2
        assert table.collisions == 2
        assert table.get("1") == 2
        assert table.get(str(CURVE_ORDER - 1)) == 3

    def test_collision_strict(self):
        with pytest.raises(TableCollision):
            LookupTable.build(4, FR(CURVE_ORDER - 1), strict=True)

    def test_parallel_build_matches(self, generator):
        serial = LookupTable.build(40, generator)
        parallel = LookupTable.build(40, generator, workers=2)
        assert serial == parallel


class TestPersistence:
    def test_roundtrip(self, tmp_path, lookup_table):
        path = tmp_path / "lookup.json"
        lookup_table.persist(str(path))
        loaded = LookupTable.load(str(path))
        assert loaded == lookup_table
        for key, i in lookup_table.items():
            assert loaded.get(key) == i

    def test_file_format(self, tmp_path, generator):
        path = tmp_path / "lookup.json"
        LookupTable.build(3, generator).persist(str(path))
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
        assert data == {"1": "0", "5": "1", "25": "2"}

    def test_persist_creates_directory(self, tmp_path, generator):
        path = tmp_path / "nested" / "dir" / "lookup.json"
        LookupTable.build(2, generator).persist(str(path))
        assert path.exists()
        assert [p.name for p in path.parent.iterdir()] == ["lookup.json"]

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LookupTable.load(str(tmp_path / "missing.json"))

    def test_load_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            LookupTable.load(str(path))

    def test_load_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(ValueError):
            LookupTable.load(str(path))

    def test_load_bad_value(self, tmp_path):
        path = tmp_path / "bad_value.json"
        path.write_text('{"5": "one"}', encoding="utf-8")
        with pytest.raises(ValueError):
            LookupTable.load(str(path))
