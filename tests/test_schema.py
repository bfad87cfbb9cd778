import pytest
import pandas as pd

from datadetective.errors import ValidationError
from datadetective.models import Column
from datadetective.schema import build_table, infer_column_roles, infer_column_type
from datadetective import values


class TestInferColumnType:

    def test_zero_one_flags_are_boolean_not_number(self):
        assert infer_column_type('flag', ['1', '0', '1', '0']) == 'boolean'
        assert infer_column_type('flag', [1, 0, 1]) == 'boolean'

    def test_numbers(self):
        assert infer_column_type('amount', ['1.5', '20', '3', '42']) == 'number'

    def test_dates_by_value(self):
        assert infer_column_type('signup', ['2024-01-15', '2024/02/01', '03/15/2024']) == 'date'

    def test_date_by_column_name(self):
        assert infer_column_type('created', ['soon', 'later']) == 'date'

    def test_strings(self):
        assert infer_column_type('city', ['Paris', 'Oslo', 'Lima']) == 'string'

    def test_empty_sample_is_string(self):
        assert infer_column_type('anything', []) == 'string'
        assert infer_column_type('anything', [None, '', 'null']) == 'string'

    def test_threshold_tolerates_minority(self):
        sample = ['1', '2', '3', '4', 'x']
        assert infer_column_type('score', sample) == 'number'
        assert infer_column_type('score', ['1', 'a', 'b', 'c', 'd']) == 'string'


class TestColumnRoles:

    def test_roles(self):
        cols = [Column('user_id'), Column('event'), Column('timestamp', 'date'), Column('price', 'number')]
        roles = infer_column_roles(cols)
        assert roles['possible_user_id_columns'] == ['user_id']
        assert roles['possible_event_columns'] == ['event']
        assert roles['possible_timestamp_columns'] == ['timestamp']


class TestBuildTable:

    def test_headers_default_to_key_union_in_order(self):
        table = build_table([{'a': 1}, {'b': 'x', 'a': 2}])
        assert table.column_names == ['a', 'b']
        assert table.summary.total_rows == 2
        assert table.summary.total_columns == 2

    def test_rejects_non_mapping_rows(self):
        with pytest.raises(ValidationError):
            build_table([{'a': 1}, ['not', 'a', 'row']])

    def test_unknown_column_type_rejected(self):
        with pytest.raises(ValueError):
            Column('a', type='float')


class TestValues:

    def test_classify_kinds(self):
        assert values.classify(None) == values.NULL
        assert values.classify(float('nan')) == values.NULL
        assert values.classify(True) == values.BOOL
        assert values.classify(0) == values.NUMBER
        assert values.classify('0') == values.STRING

    def test_empty_tokens(self):
        assert values.is_empty('  ')
        assert values.is_empty('N/A')
        assert not values.is_empty(0)
        assert not values.is_empty(False)

    def test_to_number_excludes_bools(self):
        assert values.to_number(True) is None
        assert values.to_number(' 12.5 ') == 12.5
        assert values.to_number('inf') is None

    def test_timestamp_keeps_wall_clock_hour(self):
        ts = values.to_timestamp('2024-01-15T14:30:00Z')
        assert ts.hour == 14
        assert ts.date().isoformat() == '2024-01-15'

    def test_epoch_seconds_and_millis(self):
        assert values.to_timestamp(1705329000).year == 2024
        assert values.to_timestamp(1705329000000).year == 2024
        assert values.to_timestamp(42) is None

    def test_twelve_hour_clock(self):
        assert values.to_timestamp('01/15/2024 2:30 PM') == pd.Timestamp('2024-01-15 14:30')
        assert values.to_timestamp('2024/01/15 11:05:30 AM').hour == 11

    def test_unrecognised_time_part_is_not_midnight(self):
        # no matching suffix format; the free-form parser still reads the time
        assert values.to_timestamp('01/15/2024 2:30PM').hour == 14
        assert not values.looks_like_date('01/15/2024 whenever')

    def test_freeform_date_needs_a_year(self):
        assert values.to_timestamp('Jan 15 2024 3pm').hour == 15
        assert values.to_timestamp('tomorrow') is None
