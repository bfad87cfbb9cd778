from datadetective.constants import EngineConfig
from datadetective.models import Column, Table
from datadetective.schema import build_table
from datadetective.validator import DataValidator


class TestDataValidator:

    def test_clean_table_is_high_confidence(self, clean_table):
        result = DataValidator().validate(clean_table)
        assert result.is_valid
        assert result.warnings == []
        assert result.confidence == 'high'
        assert result.completeness == 100.0

    def test_no_rows_is_invalid(self):
        result = DataValidator().validate(Table(columns=[Column('a')], rows=[]))
        assert not result.is_valid
        assert result.confidence == 'low'
        assert any('No rows' in e for e in result.errors)

    def test_no_columns_is_invalid(self):
        result = DataValidator().validate(Table())
        assert any('No columns' in e for e in result.errors)

    def test_duplicate_column_names(self):
        table = Table(columns=[Column('id'), Column('id')], rows=[{'id': 1}] * 12)
        result = DataValidator().validate(table)
        assert not result.is_valid
        assert any('Duplicate column names' in e and 'id' in e for e in result.errors)

    def test_low_completeness_is_error(self):
        rows = [{'a': 'x', 'b': None, 'c': ''} for _ in range(12)]
        result = DataValidator().validate(build_table(rows))
        assert any('completeness is too low' in e for e in result.errors)
        assert any('completely empty' in w for w in result.warnings)

    def test_partial_completeness_is_warning(self):
        rows = [{'a': 'x', 'b': 'y', 'c': None, 'timestamp': '2024-01-01'} for _ in range(12)]
        result = DataValidator().validate(build_table(rows))
        assert result.is_valid
        assert any('could be improved: 75.0%' in w for w in result.warnings)

    def test_few_rows_and_duplicates_warn(self):
        rows = [{'timestamp': '2024-01-01', 'v': 1}, {'timestamp': '2024-01-01', 'v': 1}]
        result = DataValidator().validate(build_table(rows))
        assert result.is_valid
        assert any('very few rows' in w for w in result.warnings)
        assert any('1 duplicate rows' in w for w in result.warnings)
        assert result.confidence == 'medium'

    def test_generic_names_and_missing_timestamp(self):
        rows = [{'column1': i, 'unnamed': i * 2} for i in range(12)]
        result = DataValidator().validate(build_table(rows))
        assert any('generic names' in w for w in result.warnings)
        assert any('No timestamp column' in w for w in result.warnings)

    def test_all_rows_empty(self):
        table = Table(columns=[Column('a')], rows=[{'a': None}, {'a': ''}])
        result = DataValidator().validate(table)
        assert 'All rows are empty' in result.errors

    def test_confidence_rules(self):
        v = DataValidator(EngineConfig(max_warnings_for_medium=2))
        assert v.confidence_for([], []) == 'high'
        assert v.confidence_for([], ['w']) == 'medium'
        assert v.confidence_for([], ['w1', 'w2']) == 'medium'
        assert v.confidence_for([], ['w1', 'w2', 'w3']) == 'low'
        assert v.confidence_for(['e'], []) == 'low'

    def test_internal_failure_becomes_error(self):
        table = Table(columns=[Column('a')], rows=[5])
        result = DataValidator().validate(table)
        assert len(result.errors) == 1
        assert result.errors[0].startswith('Validation failed:')
        assert result.confidence == 'low'

    def test_default_warning_limit(self):
        v = DataValidator()
        assert v.confidence_for([], ['w'] * 4) == 'medium'
        assert v.confidence_for([], ['w'] * 5) == 'low'

    def test_quality_checks_only_sample_first_1000_rows(self):
        full = [{'a': i, 'timestamp': '2024-01-01'} for i in range(1000)]
        blank = [{'a': None, 'timestamp': None} for _ in range(1500)]
        result = DataValidator().validate(build_table(full + blank))
        assert result.completeness == 100.0
        assert not any('completeness' in e for e in result.errors)
        assert '1500 completely empty rows found' in result.warnings

    def test_pandas_unnamed_headers_are_generic(self):
        rows = [{'Unnamed: 0': i, 'timestamp': '2024-01-01', 'v': i} for i in range(12)]
        result = DataValidator().validate(build_table(rows))
        assert 'Found columns with generic names: Unnamed: 0' in result.warnings
