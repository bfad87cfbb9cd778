import json

import pytest

from datadetective.errors import LoadError
from datadetective.loader import load_table
from datadetective.validator import DataValidator
from datadetective.utils import detect_delimiter, detect_encoding


CSV_TEXT = (
    "user_id,action,timestamp,time_spent_sec\n"
    "u1,view,2024-01-15T10:00:00,12\n"
    "u2,purchase,2024-01-15T11:30:00,40\n"
    ",view,2024-01-16T09:15:00,\n"
)


class TestLoadTable:

    @pytest.fixture
    def csv_file(self, tmp_path):
        p = tmp_path / "events.csv"
        p.write_text(CSV_TEXT, encoding="utf-8")
        return p

    def test_csv(self, csv_file):
        table = load_table(str(csv_file))
        assert table.column_names == ['user_id', 'action', 'timestamp', 'time_spent_sec']
        assert table.row_count == 3
        assert table.file_size == csv_file.stat().st_size
        types = {c.name: c.type for c in table.columns}
        assert types['timestamp'] == 'date'
        assert types['time_spent_sec'] == 'number'
        assert types['action'] == 'string'
        assert table.rows[2]['user_id'] == ''

    def test_semicolon_delimited(self, tmp_path):
        p = tmp_path / "data.csv"
        p.write_text("name;score\nann;3\nbob;5\n", encoding="utf-8")
        table = load_table(str(p))
        assert table.column_names == ['name', 'score']
        assert table.rows[1] == {'name': 'bob', 'score': '5'}

    def test_header_bom_is_stripped(self, tmp_path):
        p = tmp_path / "bom.csv"
        p.write_bytes("\ufeffa,b\n1,2\n".encode("utf-8"))
        assert load_table(str(p)).column_names == ['a', 'b']

    def test_json(self, tmp_path):
        p = tmp_path / "events.json"
        p.write_text(json.dumps([{'action': 'view', 'user_id': 'u1'}, {'action': 'purchase'}]), encoding="utf-8")
        table = load_table(str(p))
        assert table.column_names == ['action', 'user_id']
        assert 'user_id' not in table.rows[1]

    def test_sparse_json_keeps_record_shape(self, tmp_path):
        records = [{'a': 1, 'b': 2} for _ in range(11)] + [{'a': 3}]
        p = tmp_path / "sparse.json"
        p.write_text(json.dumps(records), encoding="utf-8")
        table = load_table(str(p))
        assert table.rows[-1] == {'a': 3}
        assert table.rows[0]['b'] == 2 and isinstance(table.rows[0]['b'], int)
        warnings = DataValidator().validate(table).warnings
        assert '1 rows have inconsistent structure' in warnings

    def test_unknown_extension_tries_json_then_csv(self, tmp_path):
        p = tmp_path / "export.dat"
        p.write_text("a,b\n1,2\n3,4\n", encoding="utf-8")
        assert load_table(str(p)).row_count == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(LoadError, match="not found"):
            load_table(str(tmp_path / "nope.csv"))

    def test_empty_file(self, tmp_path):
        p = tmp_path / "empty.csv"
        p.write_text("", encoding="utf-8")
        with pytest.raises(LoadError, match="empty"):
            load_table(str(p))

    def test_json_must_be_array_of_objects(self, tmp_path):
        p = tmp_path / "obj.json"
        p.write_text('{"a": 1}', encoding="utf-8")
        with pytest.raises(LoadError):
            load_table(str(p))

    def test_invalid_json(self, tmp_path):
        p = tmp_path / "bad.json"
        p.write_text('[{"a": 1,', encoding="utf-8")
        with pytest.raises(LoadError, match="Invalid JSON"):
            load_table(str(p))


class TestDetection:

    def test_encoding_ascii_maps_to_utf8(self, tmp_path):
        p = tmp_path / "a.csv"
        p.write_text("a,b\n1,2\n", encoding="utf-8")
        assert detect_encoding(str(p)) == "utf-8"

    def test_tab_delimiter(self, tmp_path):
        p = tmp_path / "a.tsv"
        p.write_text("a\tb\tc\n1\t2\t3\n4\t5\t6\n", encoding="utf-8")
        assert detect_delimiter(str(p)) == "\t"
