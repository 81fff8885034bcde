"""Tests for panel configuration and row models."""

import pandas as pd
import pytest
from pydantic import ValidationError

from models import (
    ColumnEditorType,
    DraftRow,
    FieldReference,
    PaginationMode,
    PaginationState,
    ResultSet,
    SearchFilter,
    TableConfig,
    frame_to_records,
    get_field_by_source,
    get_source_key,
)

PANEL_OPTIONS = {
    'name': 'orders',
    'items': [
        {
            'field': {'source': 'A', 'name': 'notes'},
            'edit': {'enabled': True, 'editor': {'type': 'textarea'}},
            'newRowEdit': {'enabled': True, 'editor': {'type': 'number', 'min': 1}},
            'filter': {'enabled': True, 'mode': 'client', 'defaultClientValue': {'type': 'search', 'value': 'x'}},
        },
    ],
    'update': {'datasource': 'pg', 'payload': {'sql': 'UPDATE'}},
    'addRow': {'enabled': True, 'request': {'datasource': 'pg', 'successMessage': 'Added'}},
    'pagination': {'enabled': True, 'mode': 'query', 'defaultPageSize': 50, 'query': {'offsetVariable': 'offset'}},
    'rowHighlight': {'enabled': True, 'variable': 'selected', 'resetVariable': True},
}


class TestTableConfig:
    """Test suite for ``TableConfig``."""

    def test_camel_case_options(self):
        table = TableConfig.model_validate(PANEL_OPTIONS)
        column = table.items[0]

        assert column.id == 'notes'
        assert column.edit.editor.type == ColumnEditorType.TEXTAREA
        assert column.new_row_edit.editor.min == 1
        assert column.filter.default_client_value == SearchFilter(value='x')
        assert table.pagination.mode == PaginationMode.QUERY
        assert table.pagination.query.offset_variable == 'offset'
        assert table.row_highlight.reset_variable is True

    def test_get_request(self):
        table = TableConfig.model_validate(PANEL_OPTIONS)

        assert table.get_request('update').datasource == 'pg'
        assert table.get_request('add').success_message == 'Added'
        assert table.get_request('delete') is None

    def test_page_size_must_be_positive(self):
        options = dict(PANEL_OPTIONS, pagination={'defaultPageSize': 0})
        with pytest.raises(ValidationError):
            TableConfig.model_validate(options)


class TestPaginationState:
    def test_validation(self):
        with pytest.raises(ValidationError):
            PaginationState(page_index=-1, page_size=10)
        with pytest.raises(ValidationError):
            PaginationState(page_index=0, page_size=0)


class TestDraftRow:
    def test_with_value_is_functional(self):
        row = DraftRow(id='1', original={'a': 1})
        updated = row.with_value('a', 2)

        assert row.original == {'a': 1}
        assert updated.original == {'a': 2}
        assert updated.id == '1'
        assert updated.to_payload() == {'a': 2}


class TestResultSet:
    """Field lookup across result sets."""

    def setup_method(self):
        self.data = [
            ResultSet.from_fields({'a': [1, 2]}, ref_id='A'),
            ResultSet.from_records([{'a': 10, 'b': None}], ref_id='B'),
        ]

    def test_lookup_by_ref_id(self):
        assert get_field_by_source(self.data, FieldReference(source='B', name='a')).tolist() == [10]

    def test_lookup_by_index(self):
        assert get_field_by_source(self.data, FieldReference(source=0, name='a')).tolist() == [1, 2]
        assert get_field_by_source(self.data, FieldReference(source=5, name='a')) is None

    def test_lookup_any_source(self):
        assert get_field_by_source(self.data, FieldReference(name='b')) is not None
        assert get_field_by_source(self.data, FieldReference(name='zzz')) is None

    def test_source_key(self):
        assert get_source_key(FieldReference(source='A', name='a')) == 'A:a'
        assert get_source_key(FieldReference(name='a')) == 'a'

    def test_frame_to_records(self):
        frame = pd.DataFrame({'a': [1.0, float('nan')], 'b': ['x', None]})
        assert frame_to_records(frame) == [{'a': 1.0, 'b': 'x'}, {'a': None, 'b': None}]
