"""Tests for the mutation executor and post-mutation actions.

Tests coverage:
- Request dispatch with interpolated queries
- Success notification and dashboard refresh
- Highlight variable reset after deleting the highlighted row
- Error state, transport failure and missing configuration
- Error message extraction
"""

import asyncio
from unittest.mock import Mock, patch

import pytest

from datasource import DatasourceResponse, HttpDatasourceRequest, LoadingState, StaticDatasourceRequest
from exceptions import MutationError, QueryError
from models import (
    ROW_HIGHLIGHT_STATE_KEY,
    OperationConfig,
    RequestConfig,
    RowHighlightConfig,
    TableConfig,
)
from mutations import MutationExecutor, get_error_message, get_load_error_message, on_request_success
from notifications import Notification, Notifier
from variables import InMemoryVariableStore, Variable, VariableCurrent


def _table(**kwargs):
    defaults = dict(
        name='orders',
        update=RequestConfig(datasource='pg', payload={'sql': 'UPDATE $table'}),
        add_row=OperationConfig(enabled=True, request=RequestConfig(datasource='pg', payload={'sql': 'INSERT'})),
        delete_row=OperationConfig(enabled=True, request=RequestConfig(datasource='pg', payload={'sql': 'DELETE'})),
        row_highlight=RowHighlightConfig(enabled=True, variable='selected', reset_variable=True),
    )
    defaults.update(kwargs)
    return TableConfig(**defaults)


class TestMutationExecutor:
    """Test suite for ``MutationExecutor``."""

    def setup_method(self):
        self.request = StaticDatasourceRequest()
        self.refresh = Mock()
        self.notifier = Notifier()
        self.store = InMemoryVariableStore([Variable(name='selected', current=VariableCurrent(value='5', text='5'))])

    def _executor(self, table=None):
        return MutationExecutor(
            table if table is not None else _table(),
            self.request,
            variable_store=self.store,
            refresh=self.refresh,
            notifier=self.notifier,
            replace_variables=lambda value: value.replace('$table', 'orders'),
        )

    def test_update_success(self):
        executor = self._executor()
        asyncio.run(executor.execute('update', {'id': 1, 'name': 'x'}))

        assert self.request.calls == [
            {'query': {'sql': 'UPDATE orders'}, 'datasource': 'pg', 'payload': {'id': 1, 'name': 'x'}, 'retry': False},
        ]
        self.refresh.assert_called_once()
        assert list(self.notifier.history) == [Notification('success', 'Success', 'Values updated successfully.')]

    @pytest.mark.parametrize('operation,message', [
        ('add', 'Row added successfully.'),
        ('delete', 'Row deleted successfully.'),
    ])
    def test_default_success_messages(self, operation, message):
        asyncio.run(self._executor().execute(operation, {'id': 1}))
        assert self.notifier.history[-1].message == message

    def test_custom_success_message_is_interpolated(self):
        table = _table(update=RequestConfig(datasource='pg', success_message='Saved $table'))
        asyncio.run(self._executor(table).execute('update', {'id': 1}))
        assert self.notifier.history[-1].message == 'Saved orders'

    def test_delete_highlighted_row_resets_variable(self):
        """Resetting the highlight variable replaces the refresh."""
        asyncio.run(self._executor().execute('delete', {'id': 1, ROW_HIGHLIGHT_STATE_KEY: True}))

        assert self.store.history == [({'var-selected': ''}, True)]
        assert self.store.get_variable('selected').current.value == ''
        self.refresh.assert_not_called()
        assert self.notifier.history[-1].kind == 'success'

    def test_delete_plain_row_refreshes(self):
        asyncio.run(self._executor().execute('delete', {'id': 1}))

        assert self.store.history == []
        self.refresh.assert_called_once()

    def test_delete_highlighted_row_without_reset_refreshes(self):
        table = _table(row_highlight=RowHighlightConfig(enabled=True, variable='selected', reset_variable=False))
        asyncio.run(self._executor(table).execute('delete', {'id': 1, ROW_HIGHLIGHT_STATE_KEY: True}))

        assert self.store.history == []
        self.refresh.assert_called_once()

    def test_no_request_configured(self):
        table = _table(delete_row=OperationConfig(enabled=True))
        asyncio.run(self._executor(table).execute('delete', {'id': 1}))

        assert self.request.calls == []
        self.refresh.assert_not_called()
        assert list(self.notifier.history) == []

    def test_error_state(self):
        self.request.queue(DatasourceResponse(state=LoadingState.ERROR, errors=[{'message': 'constraint violated'}]))

        with pytest.raises(MutationError) as exc_info:
            asyncio.run(self._executor().execute('update', {'id': 1}))

        assert str(exc_info.value) == 'update Error: constraint violated'
        assert isinstance(exc_info.value.__cause__, QueryError)
        assert list(self.notifier.history) == [Notification('error', 'Error', 'update Error: constraint violated')]
        self.refresh.assert_not_called()

    def test_transport_failure(self):
        self.request.queue(ConnectionError('network down'))

        with pytest.raises(MutationError) as exc_info:
            asyncio.run(self._executor().execute('add', {'id': 1}))

        assert exc_info.value.operation == 'add'
        assert exc_info.value.message == 'network down'
        assert self.notifier.history[-1].message == 'add Error: network down'

    def test_failed_write_is_posted_once(self, monkeypatch):
        """A timed-out add is not resent: the server may already have committed it."""
        monkeypatch.setenv('GRID_API_MAX_RETRIES', '2')
        monkeypatch.setenv('GRID_API_BACKOFF_BASE', '0')
        monkeypatch.setenv('GRID_API_BACKOFF_JITTER', '0')
        posts = []

        def timing_out_http(url, json=None, headers=None, timeout=None):
            posts.append(json)
            raise TimeoutError('read timed out')

        self.request = HttpDatasourceRequest('http://grid.local/query', http=timing_out_http)

        with pytest.raises(MutationError, match='failed after 1 attempts'):
            asyncio.run(self._executor().execute('add', {'a': 1}))

        assert len(posts) == 1
        assert posts[0]['payload'] == {'a': 1}

    def test_records_metrics(self):
        with patch('mutations.executor.record_mutation') as record:
            asyncio.run(self._executor().execute('update', {'id': 1}))
        assert record.call_args[0][:2] == ('update', 'success')

    def test_call_operator(self):
        asyncio.run(self._executor()('update', {'id': 1}))
        assert len(self.request.calls) == 1


class TestOnRequestSuccess:
    """Test suite for ``on_request_success``."""

    def test_missing_store_refreshes(self):
        notify, refresh = Mock(), Mock()
        reset = on_request_success(notify, refresh, None, _table(), 'delete', {ROW_HIGHLIGHT_STATE_KEY: True})

        assert reset is False
        notify.assert_called_once()
        refresh.assert_called_once()


class TestErrorMessages:
    """Test suite for error message extraction."""

    def test_query_error_first_entry(self):
        assert get_error_message(QueryError([{'message': 'first'}, {'message': 'second'}])) == 'first'
        assert get_error_message(QueryError(['plain'])) == 'plain'

    def test_exception(self):
        assert get_error_message(ValueError('bad value')) == 'bad value'

    def test_list_and_other(self):
        assert get_error_message(['a', 'b']) == 'a'
        assert get_error_message({'code': 1}) == '{"code": 1}'

    def test_load_error_message(self):
        assert get_load_error_message(RuntimeError('oops')) == 'oops'
        assert get_load_error_message({'code': 1}) == 'Unknown Error'
